"""
Configuration parser for mapconfig.

Walks all sections of a document, applies the global/per-section override
rule and collects the diagnostics of every section before reporting.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

from .document import ConfigDocument, load_document
from .sections import MapDefaults, MapSection, WorldDefaults, WorldSection
from .types import ConfigError, ValidationList, ValidationMap, has_errors

logger = logging.getLogger(__name__)

# Validation map key of document-level messages
DOCUMENT_KEY = "config"

ROOT_KEYS = ("output_dir",)


def _duplicate_key(validation: ValidationMap, identifier: str) -> str:
    """Get a free validation key for a repeated world or map name."""
    key = f"{identifier} (duplicate)"
    count = 1
    while key in validation:
        count += 1
        key = f"{identifier} (duplicate {count})"
    return key


class ConfigParser:
    """
    Parsed configuration of worlds and the maps rendered from them.

    A parser is populated once by :meth:`parse` and read-only afterwards.
    """

    def __init__(self) -> None:
        self._world_defaults = WorldDefaults()
        self._map_defaults = MapDefaults()

        self._output_dir: Optional[Path] = None
        self._worlds: Dict[str, WorldSection] = {}
        self._maps: List[MapSection] = []
        self._parsed = False

    def parse(self, filename: Union[str, Path], validation: ValidationMap) -> bool:
        """Parse a configuration file.

        Every section is parsed even if earlier ones had errors. Only a
        document that cannot be read or split into sections stops parsing.

        Args:
            filename: Path of the configuration file
            validation: Filled with the messages of every section, keyed by
                        section identifier

        Returns:
            True if no section reported an error
        """
        if self._parsed:
            raise RuntimeError("ConfigParser.parse() may only be called once")
        self._parsed = True

        messages = ValidationList()
        validation[DOCUMENT_KEY] = messages

        try:
            document = load_document(filename)
        except ConfigError as e:
            logger.debug(f"Unable to parse configuration: {e}")
            messages.error(str(e))
            return False

        self._parse_root(document, messages)

        key = document.world_defaults.identifier
        validation[key] = ValidationList()
        self._world_defaults.parse(document.world_defaults, validation[key])

        key = document.map_defaults.identifier
        validation[key] = ValidationList()
        self._map_defaults.parse(document.map_defaults, validation[key])

        for section in document.worlds:
            world_messages = ValidationList()
            if section.name in self._worlds:
                world_messages.error(f"World '{section.name}' is already defined!")
                validation[_duplicate_key(validation, section.identifier)] = world_messages
                continue
            validation[section.identifier] = world_messages

            world = WorldSection(section.name)
            world.parse(section, world_messages, self._world_defaults)
            self._worlds[world.name] = world
            logger.debug(f"Parsed {world!r}")

        for section in document.maps:
            map_messages = ValidationList()
            if self.has_map(section.name):
                map_messages.error(f"Map '{section.name}' is already defined!")
                validation[_duplicate_key(validation, section.identifier)] = map_messages
                continue
            validation[section.identifier] = map_messages

            map_ = MapSection(section.name)
            map_.parse(section, map_messages, self._map_defaults)
            if map_.world is not None and not self.has_world(map_.world):
                map_messages.error(f"World '{map_.world}' does not exist!")
            self._maps.append(map_)
            logger.debug(f"Parsed {map_!r}")

        if not self._worlds:
            messages.warning("No worlds are configured.")
        if not self._maps:
            messages.warning("No maps are configured.")

        ok = not has_errors(validation)
        logger.info(
            f"Parsed configuration '{document.path}': {len(self._worlds)} worlds, "
            f"{len(self._maps)} maps ({'valid' if ok else 'invalid'})"
        )
        return ok

    def _parse_root(self, document: ConfigDocument, messages: ValidationList) -> None:
        root = document.root
        for key in root.keys():
            if key not in ROOT_KEYS:
                messages.warning(f"Unknown configuration option '{key}'.")

        for header in document.unknown:
            messages.error(f"Unknown section type '[{header}]'!")

        if not root.has("output_dir"):
            messages.error("You have to specify an output directory ('output_dir')!")
            return
        try:
            self._output_dir = root.get("output_dir", Path)
        except ValueError as e:
            messages.error(f"Invalid value for 'output_dir': {e}.")

    # === ACCESSORS ===

    @property
    def output_dir(self) -> Optional[Path]:
        """Get the directory rendered maps are written to."""
        return self._output_dir

    @property
    def worlds(self) -> Dict[str, WorldSection]:
        """Get all worlds by name."""
        return dict(self._worlds)

    @property
    def maps(self) -> List[MapSection]:
        """Get all maps in document order."""
        return list(self._maps)

    def has_world(self, world: str) -> bool:
        return world in self._worlds

    def get_world(self, world: str) -> WorldSection:
        """Get a world by name. Raises KeyError if it is not configured."""
        return self._worlds[world]

    def has_map(self, map_name: str) -> bool:
        return any(m.short_name == map_name for m in self._maps)

    def get_map(self, map_name: str) -> MapSection:
        """Get a map by short name. Raises KeyError if it is not configured."""
        for map_ in self._maps:
            if map_.short_name == map_name:
                return map_
        raise KeyError(map_name)
