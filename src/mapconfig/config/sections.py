"""
World and map section schemas for mapconfig.

Each schema exists twice: as the global template parsed from
``[global:world]``/``[global:map]`` (:class:`WorldDefaults`,
:class:`MapDefaults`) and as a concrete entry (:class:`WorldSection`,
:class:`MapSection`). Templates only record what was set explicitly at
global scope; concrete entries resolve every field against their template
and the built-in defaults, and enforce mandatory fields.
"""

from pathlib import Path
from typing import Any, Dict, FrozenSet, Optional, Set, Tuple

from .document import ConfigSection
from .field import Field
from .rotations import parse_rotations
from .types import ValidationList

RENDER_MODES = ("normal", "daylight", "nightlight", "cave")


class _Schema:
    """Common parsing steps of all section schemas."""

    is_global = False
    # Field keys in declaration order
    KEYS: Tuple[str, ...] = ()
    # Keys read outside of fields
    EXTRA_KEYS: Tuple[str, ...] = ()

    def __init__(self) -> None:
        self._fields: Dict[str, Field[Any]] = self._make_fields()
        # Keys whose value came from the template
        self._inherited: Set[str] = set()

    def _make_fields(self) -> Dict[str, Field[Any]]:
        raise NotImplementedError

    def field(self, key: str) -> Field[Any]:
        """Get the field stored under an option name."""
        return self._fields[key]

    @property
    def fields(self) -> Dict[str, Field[Any]]:
        return dict(self._fields)

    def _parse(
        self,
        section: ConfigSection,
        validation: ValidationList,
        defaults: Optional["_Schema"] = None,
    ) -> bool:
        errors_before = len(validation.errors)

        known = set(self.KEYS) | set(self.EXTRA_KEYS)
        for key in section.keys():
            if key not in known:
                validation.warning(f"Unknown configuration option '{key}'.")

        for key in self.KEYS:
            self._fields[key].load(section, key)

        # Templates keep "was it set globally", not a resolved value
        if not self.is_global:
            for key in self.KEYS:
                field = self._fields[key]
                if defaults is not None and key in defaults.fields:
                    field.inherit(defaults.field(key))
                    if not section.has(key) and defaults.field(key).is_loaded:
                        self._inherited.add(key)
                elif field.has_default:
                    field.load(section, key, field.default)

        for key in self.KEYS:
            field = self._fields[key]
            if field.error is not None:
                self._report(key, validation, f"Invalid value for '{key}': {field.error}.")

        self._validate(section, validation)
        return len(validation.errors) == errors_before

    def _validate(self, section: ConfigSection, validation: ValidationList) -> None:
        pass

    def _report(self, key: str, validation: ValidationList, message: str) -> None:
        # Inherited values are reported once, under the template
        if key not in self._inherited:
            validation.error(message)

    def _check_directory(self, key: str, validation: ValidationList) -> None:
        field = self._fields[key]
        if field.is_valid and not field.value.is_dir():
            self._report(
                key,
                validation,
                f"'{key}' must be an existing directory! '{field.value}' does not exist!",
            )


# === WORLDS ===


class _WorldSchema(_Schema):
    KEYS = ("input_dir",)

    def _make_fields(self) -> Dict[str, Field[Any]]:
        return {"input_dir": Field(Path)}

    @property
    def input_dir(self) -> Optional[Path]:
        """Get the directory of the world to render."""
        return self._fields["input_dir"].value

    def _validate(self, section: ConfigSection, validation: ValidationList) -> None:
        self._check_directory("input_dir", validation)


class WorldDefaults(_WorldSchema):
    """Global world template (``[global:world]``)."""

    is_global = True

    def parse(self, section: ConfigSection, validation: ValidationList) -> bool:
        """Parse the template. Returns False if errors were reported."""
        return self._parse(section, validation)


class WorldSection(_WorldSchema):
    """A concrete world (``[world:NAME]``)."""

    def __init__(self, name: str):
        super().__init__()
        self.name = name

    def __repr__(self) -> str:
        return f"WorldSection({self.name!r}, input_dir={self.input_dir!r})"

    def parse(
        self,
        section: ConfigSection,
        validation: ValidationList,
        defaults: Optional[WorldDefaults] = None,
    ) -> bool:
        """Parse the world, falling back to ``defaults`` for unset fields.

        Returns:
            False if at least one error was appended to ``validation``
        """
        return self._parse(section, validation, defaults)

    def _validate(self, section: ConfigSection, validation: ValidationList) -> None:
        self._fields["input_dir"].require(
            validation, "You have to specify an input directory ('input_dir')!"
        )
        super()._validate(section, validation)


# === MAPS ===


class _MapSchema(_Schema):
    KEYS = (
        "texture_dir",
        "rotations",
        "rendermode",
        "texture_size",
        "render_unknown_blocks",
        "render_leaves_transparent",
        "render_biomes",
    )
    EXTRA_KEYS = ("name", "world")

    def __init__(self) -> None:
        super().__init__()
        self._rotation_set: FrozenSet[int] = frozenset()

    def _make_fields(self) -> Dict[str, Field[Any]]:
        return {
            "texture_dir": Field(Path),
            "rotations": Field(str, "top-left"),
            "rendermode": Field(str, "normal"),
            "texture_size": Field(int, 12),
            "render_unknown_blocks": Field(bool, False),
            "render_leaves_transparent": Field(bool, False),
            "render_biomes": Field(bool, False),
        }

    @property
    def texture_dir(self) -> Optional[Path]:
        return self._fields["texture_dir"].value

    @property
    def rotations(self) -> Optional[str]:
        """Get the rotation specification as written."""
        return self._fields["rotations"].value

    @property
    def rotation_set(self) -> FrozenSet[int]:
        """Get the rotation indices derived from :attr:`rotations`."""
        return self._rotation_set

    @property
    def rendermode(self) -> Optional[str]:
        return self._fields["rendermode"].value

    @property
    def texture_size(self) -> Optional[int]:
        return self._fields["texture_size"].value

    @property
    def render_unknown_blocks(self) -> bool:
        return bool(self._fields["render_unknown_blocks"].value)

    @property
    def render_leaves_transparent(self) -> bool:
        return bool(self._fields["render_leaves_transparent"].value)

    @property
    def render_biomes(self) -> bool:
        return bool(self._fields["render_biomes"].value)

    def _validate(self, section: ConfigSection, validation: ValidationList) -> None:
        self._check_directory("texture_dir", validation)

        rotations = self._fields["rotations"]
        if rotations.is_valid:
            rotation_set, errors = parse_rotations(rotations.value)
            for error in errors:
                self._report("rotations", validation, f"{error}.")
            if not rotation_set and not errors:
                self._report(
                    "rotations",
                    validation,
                    "You have to specify at least one rotation ('rotations')!",
                )
            self._rotation_set = rotation_set

        rendermode = self._fields["rendermode"]
        message = (
            f"'rendermode' must be one of {', '.join(RENDER_MODES)}! "
            f"'{rendermode.value}' is not a render mode."
        )
        # validate_one_of leaves reporting to the caller
        if rendermode.is_valid and not rendermode.validate_one_of(
            validation, message, RENDER_MODES
        ):
            self._report("rendermode", validation, message)

        texture_size = self._fields["texture_size"]
        if texture_size.is_valid and texture_size.value <= 0:
            self._report(
                "texture_size",
                validation,
                f"'texture_size' must be a positive number! Got {texture_size.value}.",
            )


class MapDefaults(_MapSchema):
    """Global map template (``[global:map]``).

    Map identity (``name``, ``world``) is per map and ignored here.
    """

    is_global = True

    def parse(self, section: ConfigSection, validation: ValidationList) -> bool:
        """Parse the template. Returns False if errors were reported."""
        return self._parse(section, validation)

    def _validate(self, section: ConfigSection, validation: ValidationList) -> None:
        for key in self.EXTRA_KEYS:
            if section.has(key):
                validation.warning(
                    f"'{key}' is ignored in the global map section."
                )
        super()._validate(section, validation)


class MapSection(_MapSchema):
    """A concrete map (``[map:NAME]``).

    The short name comes from the section header, the long name from the
    ``name`` option. Neither is inherited from the template.
    """

    KEYS = ("world",) + _MapSchema.KEYS
    EXTRA_KEYS = ("name",)

    def __init__(self, name: str):
        super().__init__()
        self.short_name = name
        self.long_name = name

    def __repr__(self) -> str:
        return f"MapSection({self.short_name!r}, world={self.world!r})"

    def _make_fields(self) -> Dict[str, Field[Any]]:
        fields: Dict[str, Field[Any]] = {"world": Field(str)}
        fields.update(super()._make_fields())
        return fields

    @property
    def world(self) -> Optional[str]:
        """Get the name of the world this map renders."""
        return self._fields["world"].value

    def parse(
        self,
        section: ConfigSection,
        validation: ValidationList,
        defaults: Optional[MapDefaults] = None,
    ) -> bool:
        """Parse the map, falling back to ``defaults`` for unset fields.

        Returns:
            False if at least one error was appended to ``validation``
        """
        self.long_name = section.get("name", str, self.short_name) or self.short_name
        return self._parse(section, validation, defaults)

    def _validate(self, section: ConfigSection, validation: ValidationList) -> None:
        self._fields["world"].require(
            validation, "You have to specify a world ('world')!"
        )
        super()._validate(section, validation)
