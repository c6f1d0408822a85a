"""XML document primitives: skeleton, parsing, rendering and atomic writes."""

from __future__ import annotations

import io
import os
import stat
import tempfile
from pathlib import Path
from typing import IO, Any
from xml.etree import ElementTree as ET

from result import Err, Ok, Result

from nini.common import create_logger
from nini.constants import ROOT_TAG
from nini.settings import XmlSettings

from ..models import ConfigError, ConfigNotFoundError, ConfigXmlError

logger = create_logger("xml.document")


def new_document() -> ET.Element:
    """Return the minimal valid document: an empty root."""
    return ET.Element(ROOT_TAG)


def parse_text(text: str | bytes, path: Path | None = None) -> Result[ET.Element, ConfigXmlError]:
    parser = _new_parser()
    try:
        parser.feed(text)
        return Ok(parser.close())
    except ET.ParseError as exc:
        return Err(_xml_error(exc, path))


def parse_stream(stream: IO[Any], path: Path | None = None) -> Result[ET.Element, ConfigXmlError]:
    """Parse an open text or binary stream. The stream is left open."""
    parser = _new_parser()
    try:
        while chunk := stream.read(64 * 1024):
            parser.feed(chunk)
        return Ok(parser.close())
    except ET.ParseError as exc:
        return Err(_xml_error(exc, path))


def parse_file(path: Path) -> Result[ET.Element, ConfigError]:
    if not path.exists() or not path.is_file():
        logger.warning("Config file not found", path=str(path))
        return Err(
            ConfigNotFoundError(
                expected_path=path,
                message=f"Configuration file not found: {path}",
            )
        )

    logger.debug("Reading config file", path=str(path))
    with path.open("rb") as fp:
        return parse_stream(fp, path)


def render(root: ET.Element, settings: XmlSettings) -> bytes:
    """Serialize the whole tree into memory."""
    if settings.indent:
        ET.indent(root, space=settings.indent)
    buffer = io.BytesIO()
    ET.ElementTree(root).write(
        buffer,
        encoding=settings.encoding,
        xml_declaration=settings.xml_declaration,
    )
    buffer.write(b"\n")
    return buffer.getvalue()


def write_stream(stream: IO[Any], data: bytes, encoding: str) -> None:
    """Write rendered bytes to a caller-owned stream without closing it."""
    if isinstance(stream, io.TextIOBase):
        stream.write(data.decode(encoding))
        return
    try:
        stream.write(data)
    except TypeError:
        # text sink that is not an io.TextIOBase
        stream.write(data.decode(encoding))


def write_atomic(path: Path, data: bytes) -> None:
    """Replace `path` with `data`; the previous file survives any failure.

    Symlinks are followed so the link itself stays in place, and an
    existing file keeps its permission bits.
    """
    path = path.resolve()
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as fp:
            fp.write(data)
            fp.flush()
            os.fsync(fp.fileno())
        os.chmod(tmp_name, _target_mode(path))
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    logger.debug("Config file written", path=str(path), size=len(data))


def _target_mode(path: Path) -> int:
    if path.exists():
        return stat.S_IMODE(path.stat().st_mode)
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def _new_parser() -> ET.XMLParser:
    return ET.XMLParser(target=ET.TreeBuilder(insert_comments=True, insert_pis=True))


def _xml_error(exc: ET.ParseError, path: Path | None) -> ConfigXmlError:
    line, column = getattr(exc, "position", (None, None))
    logger.error(
        "Config XML parse error",
        path=str(path) if path else None,
        line=line,
        column=column,
        error=str(exc),
    )
    return ConfigXmlError(
        path=path,
        line=line,
        column=(column + 1) if column is not None else None,
        message=str(exc),
    )
