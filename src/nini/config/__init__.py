"""Public configuration API for Nini."""

from __future__ import annotations

from .base import ConfigSourceBase
from .collection import ConfigCollection, ConfigSection
from .models import (
    ConfigError,
    ConfigFormatError,
    ConfigNotFoundError,
    ConfigPreconditionError,
    ConfigXmlError,
)
from .protocol import ConfigSource
from .xml import XmlConfigSource

__all__ = [
    "ConfigCollection",
    "ConfigError",
    "ConfigFormatError",
    "ConfigNotFoundError",
    "ConfigPreconditionError",
    "ConfigSection",
    "ConfigSource",
    "ConfigSourceBase",
    "ConfigXmlError",
    "XmlConfigSource",
]
