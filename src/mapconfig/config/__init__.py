"""
Configuration package for mapconfig.

This package turns an INI-style document of world and map sections into a
validated, typed configuration tree.

Usage:
    from mapconfig.config import ConfigParser, has_errors

    parser = ConfigParser()
    validation = {}
    if not parser.parse("render.conf", validation):
        ...
"""

from .document import ConfigDocument, ConfigSection, load_document
from .field import UNSET, Field, Invalid, Loaded, resolve
from .parser import DOCUMENT_KEY, ConfigParser
from .rotations import ROTATION_NAMES, parse_rotations, rotation_name
from .sections import (
    RENDER_MODES,
    MapDefaults,
    MapSection,
    WorldDefaults,
    WorldSection,
)
from .types import (
    ConfigError,
    Severity,
    ValidationList,
    ValidationMap,
    ValidationMessage,
    ValidationResult,
    has_errors,
    summarize,
)

__all__ = [
    "ConfigDocument",
    "ConfigSection",
    "load_document",
    "UNSET",
    "Field",
    "Invalid",
    "Loaded",
    "resolve",
    "DOCUMENT_KEY",
    "ConfigParser",
    "ROTATION_NAMES",
    "parse_rotations",
    "rotation_name",
    "RENDER_MODES",
    "MapDefaults",
    "MapSection",
    "WorldDefaults",
    "WorldSection",
    "ConfigError",
    "Severity",
    "ValidationList",
    "ValidationMap",
    "ValidationMessage",
    "ValidationResult",
    "has_errors",
    "summarize",
]
