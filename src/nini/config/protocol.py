"""Configuration source protocol."""

from typing import Protocol

from result import Result

from .collection import ConfigCollection
from .models import ConfigError


class ConfigSource(Protocol):
    """Protocol for a persisted configuration source."""

    @property
    def configs(self) -> ConfigCollection:
        """Sections currently held in memory."""
        ...

    def save(self) -> Result[None, ConfigError]:
        """Persist in-memory changes to the bound destination."""
        ...

    def reload(self) -> Result[None, ConfigError]:
        """Discard in-memory state and read the bound destination again."""
        ...
