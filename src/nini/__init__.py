"""Nini - XML-backed configuration sources.

By default, Nini's internal logging is disabled when used as a library.
Library users can enable logging by calling nini.enable_logging().
"""

from nini.common import disable_library_logging, enable_library_logging
from nini.config import (
    ConfigCollection,
    ConfigError,
    ConfigFormatError,
    ConfigPreconditionError,
    ConfigSection,
    XmlConfigSource,
)

disable_library_logging()

enable_logging = enable_library_logging

__all__ = [
    "ConfigCollection",
    "ConfigError",
    "ConfigFormatError",
    "ConfigPreconditionError",
    "ConfigSection",
    "XmlConfigSource",
    "enable_logging",
]
