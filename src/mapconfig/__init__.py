"""
mapconfig: configuration loader for a map renderer

Parses and validates the world and map sections of a render configuration.
"""

__version__ = "0.1.0"
__author__ = "mapconfig Contributors"

from .config import (
    ConfigError,
    ConfigParser,
    MapSection,
    ValidationList,
    ValidationMap,
    ValidationMessage,
    WorldSection,
)
from .utils.logging_config import setup_logging

__all__ = [
    # Parser
    'ConfigParser',
    'ConfigError',

    # Sections
    'WorldSection',
    'MapSection',

    # Validation
    'ValidationList',
    'ValidationMap',
    'ValidationMessage',

    # Logging
    'setup_logging',
]
