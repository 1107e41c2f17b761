"""
Raw configuration document access for mapconfig.

Reads an INI-style document with :mod:`configparser` and splits it into
typed, read-only :class:`ConfigSection` views. Nothing here knows about the
world/map schemas beyond recognising section headers.
"""

import configparser
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import (
    Any,
    Callable,
    Dict,
    Iterator,
    List,
    Mapping,
    Optional,
    Type,
    TypeVar,
    Union,
    overload,
)

from .types import ConfigError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Name of the synthetic section holding keys written before the first header
ROOT_SECTION = "__root__"

SECTION_GLOBAL = "global"
SECTION_WORLD = "world"
SECTION_MAP = "map"

# [type:name] or [type "name"]
_HEADER_RE = re.compile(
    r'^\s*(?P<kind>[A-Za-z_]+)\s*(?::\s*(?P<name>[^"\s][^"]*?)|\s+"(?P<quoted>[^"]+)")\s*$'
)

_TRUE_VALUES = ("true", "yes", "on", "1")
_FALSE_VALUES = ("false", "no", "off", "0")

_MISSING: Any = object()


def _to_str(raw: str, base_dir: Optional[Path]) -> str:
    return raw.strip()


def _to_int(raw: str, base_dir: Optional[Path]) -> int:
    try:
        return int(raw.strip())
    except ValueError:
        raise ValueError(f"'{raw}' is not a valid integer") from None


def _to_bool(raw: str, base_dir: Optional[Path]) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"'{raw}' is not a valid boolean (use true or false)")


def _to_path(raw: str, base_dir: Optional[Path]) -> Path:
    text = raw.strip()
    if not text:
        raise ValueError("path must not be empty")
    path = Path(text).expanduser()
    if not path.is_absolute() and base_dir is not None:
        path = base_dir / path
    return path


_CONVERTERS: Dict[type, Callable[[str, Optional[Path]], Any]] = {
    str: _to_str,
    int: _to_int,
    bool: _to_bool,
    Path: _to_path,
}

# Closed set of value types a section can produce
SUPPORTED_KINDS = tuple(_CONVERTERS)


class ConfigSection:
    """Read-only view over one named block of string values.

    Relative paths are anchored at ``base_dir``, normally the directory of
    the configuration file.
    """

    def __init__(
        self,
        kind: str,
        name: str,
        values: Optional[Mapping[str, str]] = None,
        base_dir: Optional[Path] = None,
    ):
        self.kind = kind
        self.name = name
        self.base_dir = base_dir
        self._values: Dict[str, str] = {
            key.lower(): value for key, value in (values or {}).items()
        }

    def __repr__(self) -> str:
        return f"ConfigSection({self.identifier!r}, keys={list(self._values)!r})"

    @property
    def identifier(self) -> str:
        """Human-readable identifier, as written in the section header."""
        return f"{self.kind}:{self.name}"

    @property
    def is_empty(self) -> bool:
        return not self._values

    def keys(self) -> Iterator[str]:
        return iter(self._values)

    def has(self, key: str) -> bool:
        """Check if the section sets ``key``."""
        return key.lower() in self._values

    def get_raw(self, key: str) -> str:
        return self._values[key.lower()]

    @overload
    def get(self, key: str, kind: Type[T]) -> T: ...

    @overload
    def get(self, key: str, kind: Type[T], default: T) -> T: ...

    def get(self, key: str, kind: Type[Any] = str, default: Any = _MISSING) -> Any:
        """Type-safe value retrieval.

        Args:
            key: Option name (case-insensitive)
            kind: One of :data:`SUPPORTED_KINDS`
            default: Returned when the key is absent

        Returns:
            The converted value, or ``default`` if the key is absent

        Raises:
            KeyError: Key is absent and no default was given
            ValueError: The raw text cannot be converted to ``kind``
            TypeError: ``kind`` is not a supported value type
        """
        converter = _CONVERTERS.get(kind)
        if converter is None:
            raise TypeError(f"Unsupported configuration value type: {kind!r}")
        if not self.has(key):
            if default is _MISSING:
                raise KeyError(key)
            return default
        return converter(self.get_raw(key), self.base_dir)


@dataclass
class ConfigDocument:
    """A configuration file split into its sections.

    ``worlds`` and ``maps`` keep document order. Missing global sections are
    represented by empty sections.
    """
    path: Path
    root: ConfigSection
    world_defaults: ConfigSection
    map_defaults: ConfigSection
    worlds: List[ConfigSection] = field(default_factory=list)
    maps: List[ConfigSection] = field(default_factory=list)
    unknown: List[str] = field(default_factory=list)


def parse_header(header: str) -> Optional[tuple[str, str]]:
    """Split a section header into (kind, name).

    Returns:
        The lower-cased kind and the name, or None for unrecognised headers
    """
    match = _HEADER_RE.match(header)
    if not match:
        return None
    kind = match.group("kind").lower()
    name = (match.group("name") or match.group("quoted")).strip()
    if kind == SECTION_GLOBAL:
        name = name.lower()
        if name not in (SECTION_WORLD, SECTION_MAP):
            return None
    elif kind not in (SECTION_WORLD, SECTION_MAP):
        return None
    return kind, name


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8-sig")
    except FileNotFoundError:
        raise ConfigError(f"Configuration file '{path}' does not exist") from None
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Unable to read configuration file '{path}': {e}") from e


def _describe_error(error: configparser.Error) -> str:
    # Line numbers count the injected root header
    if isinstance(error, configparser.DuplicateOptionError) and error.lineno:
        return (
            f"option '{error.option}' in section '{error.section}' "
            f"already exists (line {error.lineno - 1})"
        )
    if isinstance(error, configparser.DuplicateSectionError) and error.lineno:
        return f"section '{error.section}' already exists (line {error.lineno - 1})"
    if isinstance(error, configparser.ParsingError):
        lines = "; ".join(f"line {lineno - 1}: {line}" for lineno, line in error.errors)
        return f"unable to parse {lines}"
    return str(error)


def load_document(path: Union[str, Path]) -> ConfigDocument:
    """Read and split a configuration document.

    Args:
        path: Path of the configuration file

    Returns:
        The document split into root, global, world and map sections

    Raises:
        ConfigError: The file cannot be read or is not valid INI syntax
    """
    path = Path(path)
    text = _read_text(path)

    ini = configparser.ConfigParser(
        interpolation=None,
        strict=True,
        default_section="__defaults__",
    )
    try:
        ini.read_string(f"[{ROOT_SECTION}]\n{text}", source=str(path))
    except configparser.Error as e:
        raise ConfigError(
            f"Invalid configuration file '{path}': {_describe_error(e)}"
        ) from e

    base_dir = path.parent.absolute()

    def section(kind: str, name: str, header: Optional[str] = None) -> ConfigSection:
        values = dict(ini[header]) if header is not None else {}
        return ConfigSection(kind, name, values, base_dir)

    document = ConfigDocument(
        path=path,
        root=section("root", "", ROOT_SECTION),
        world_defaults=section(SECTION_GLOBAL, SECTION_WORLD),
        map_defaults=section(SECTION_GLOBAL, SECTION_MAP),
    )

    seen_globals: set[str] = set()
    for header in ini.sections():
        if header == ROOT_SECTION:
            continue
        parsed = parse_header(header)
        if parsed is None:
            document.unknown.append(header)
            continue

        kind, name = parsed
        if kind == SECTION_GLOBAL:
            # configparser rejects the same header twice, but not
            # [global:map] next to [global "map"]
            if name in seen_globals:
                raise ConfigError(
                    f"Invalid configuration file '{path}': "
                    f"section '{SECTION_GLOBAL}:{name}' is defined twice"
                )
            seen_globals.add(name)
            if name == SECTION_WORLD:
                document.world_defaults = section(kind, name, header)
            else:
                document.map_defaults = section(kind, name, header)
        elif kind == SECTION_WORLD:
            document.worlds.append(section(kind, name, header))
        else:
            document.maps.append(section(kind, name, header))

    logger.debug(
        f"Read '{path}': {len(document.worlds)} world and "
        f"{len(document.maps)} map sections"
    )
    return document
