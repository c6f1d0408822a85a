"""XML-backed configuration source."""

from __future__ import annotations

import os
from pathlib import Path
from typing import IO, Any
from xml.etree import ElementTree as ET

from result import Err, Ok, Result, is_err

from nini.common import create_logger
from nini.settings import XmlSettings, get_settings

from ..base import ConfigSourceBase
from ..models import ConfigError, ConfigFormatError, ConfigPreconditionError
from .document import new_document, parse_file, parse_stream, parse_text, render, write_atomic, write_stream
from .loader import load_configs
from .merger import merge_configs_into_document

logger = create_logger("xml.source")

SaveTarget = str | os.PathLike[str] | IO[Any]


class XmlConfigSource(ConfigSourceBase):
    """Configuration sections persisted as a `<Nini>` XML document.

    Sections are read once when the source is created (or reloaded) and
    are written back only on `save()`. Saving edits the existing
    document rather than regenerating it, so elements this class does
    not know about, and the order of existing entries, are preserved.
    """

    def __init__(self, settings: XmlSettings | None = None) -> None:
        super().__init__()
        self._settings = settings or get_settings().xml
        self._document = new_document()
        self._save_path: Path | None = None

    @classmethod
    def from_path(
        cls,
        path: str | os.PathLike[str],
        settings: XmlSettings | None = None,
    ) -> Result[XmlConfigSource, ConfigError]:
        """Load from a file and remember it for later `save()`/`reload()`."""
        source = cls(settings)
        file_path = Path(path)

        loaded = parse_file(file_path).and_then(lambda root: source.load(root, file_path))
        if is_err(loaded):
            return loaded

        source._save_path = file_path
        return Ok(source)

    @classmethod
    def from_stream(
        cls,
        stream: IO[Any],
        settings: XmlSettings | None = None,
    ) -> Result[XmlConfigSource, ConfigError]:
        """Load from an open stream. No path is bound, so `save()` needs one."""
        source = cls(settings)
        return parse_stream(stream).and_then(source.load).map(lambda _: source)

    @classmethod
    def from_text(
        cls,
        text: str | bytes,
        settings: XmlSettings | None = None,
    ) -> Result[XmlConfigSource, ConfigError]:
        source = cls(settings)
        return parse_text(text).and_then(source.load).map(lambda _: source)

    @property
    def save_path(self) -> Path | None:
        return self._save_path

    @property
    def document(self) -> ET.Element:
        """Root element of the backing document."""
        return self._document

    def load(self, root: ET.Element, path: Path | None = None) -> Result[None, ConfigFormatError]:
        """Replace the document and every section with the content of `root`.

        On error neither the sections nor the document change.
        """
        loaded = load_configs(root, path)
        if is_err(loaded):
            return loaded

        self._document = root
        self._configs.replace(loaded.unwrap())
        logger.debug("Config source loaded", path=str(path) if path else None, sections=self._configs.names())
        return Ok(None)

    def save(self, target: SaveTarget | None = None) -> Result[None, ConfigError]:
        """Write the sections out.

        - no argument: write to the bound path
        - a path: bind it, then write to it
        - a writable stream: write to it and unbind any path
        """
        if target is None:
            return self._save_bound()
        if isinstance(target, (str, os.PathLike)):
            self._save_path = Path(target)
            return self._save_bound()
        return self._save_stream(target)

    def reload(self) -> Result[None, ConfigError]:
        """Read the bound file again, replacing every in-memory section."""
        if self._save_path is None:
            return Err(
                ConfigPreconditionError(
                    operation="reload",
                    message="Cannot reload: the source was not loaded from a file",
                )
            )

        path = self._save_path
        logger.debug("Reloading config source", path=str(path))
        reloaded = parse_file(path).and_then(lambda root: self.load(root, path))
        if is_err(reloaded):
            return reloaded

        self._notify_reloaded()
        return Ok(None)

    def to_text(self) -> Result[str, ConfigFormatError]:
        """Render the merged document without writing it anywhere."""
        return self._render().map(lambda data: data.decode(self._settings.encoding))

    def __str__(self) -> str:
        return self.to_text().unwrap()

    def _save_bound(self) -> Result[None, ConfigError]:
        if self._save_path is None:
            return Err(
                ConfigPreconditionError(
                    operation="save",
                    message="Source cannot be saved in this state: no file path is bound",
                )
            )

        rendered = self._render()
        if is_err(rendered):
            return rendered

        write_atomic(self._save_path, rendered.unwrap())
        logger.debug("Config source saved", path=str(self._save_path), sections=len(self._configs))
        self._notify_saved()
        return Ok(None)

    def _save_stream(self, stream: IO[Any]) -> Result[None, ConfigError]:
        rendered = self._render()
        if is_err(rendered):
            return rendered

        write_stream(stream, rendered.unwrap(), self._settings.encoding)
        self._save_path = None
        logger.debug("Config source exported to stream", sections=len(self._configs))
        return Ok(None)

    def _render(self) -> Result[bytes, ConfigFormatError]:
        return merge_configs_into_document(self._configs, self._document, self._save_path).map(
            lambda _: render(self._document, self._settings)
        )
