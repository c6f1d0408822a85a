"""Conversion of a parsed document into configuration sections."""

from __future__ import annotations

from pathlib import Path
from xml.etree import ElementTree as ET

from result import Err, Ok, Result, is_err

from nini.common import create_logger
from nini.constants import KEY_TAG, NAME_ATTR, ROOT_TAG, SECTION_TAG, VALUE_ATTR

from ..collection import ConfigSection
from ..models import ConfigFormatError

logger = create_logger("xml.loader")


def load_configs(root: ET.Element, path: Path | None = None) -> Result[list[ConfigSection], ConfigFormatError]:
    """Build sections from `root` in document order.

    Nothing is returned unless the whole document is valid; callers
    install the sections only on `Ok`, so a failed load never leaves a
    half-populated model behind.
    """
    if root.tag != ROOT_TAG:
        return _format_error(
            path,
            str(root.tag),
            f"Expected <{ROOT_TAG}> root element, found <{root.tag}>",
        )

    sections: list[ConfigSection] = []
    seen: set[str] = set()

    for child in root:
        if child.tag != SECTION_TAG:
            continue

        name = child.get(NAME_ATTR)
        if name is None:
            return _format_error(path, SECTION_TAG, f"<{SECTION_TAG}> element has no {NAME_ATTR} attribute")
        if name in seen:
            return _format_error(path, SECTION_TAG, f"Duplicate <{SECTION_TAG}> named '{name}'")
        seen.add(name)

        result = _load_keys(child, name, path)
        if is_err(result):
            return result
        sections.append(result.unwrap())

    logger.debug("Config document loaded", path=str(path) if path else None, sections=len(sections))
    return Ok(sections)


def _load_keys(node: ET.Element, section_name: str, path: Path | None) -> Result[ConfigSection, ConfigFormatError]:
    section = ConfigSection(section_name)

    for child in node:
        if child.tag != KEY_TAG:
            continue

        key = child.get(NAME_ATTR)
        if key is None:
            return _format_error(
                path,
                KEY_TAG,
                f"<{KEY_TAG}> element in section '{section_name}' has no {NAME_ATTR} attribute",
            )
        value = child.get(VALUE_ATTR)
        if value is None:
            return _format_error(
                path,
                KEY_TAG,
                f"<{KEY_TAG}> '{key}' in section '{section_name}' has no {VALUE_ATTR} attribute",
            )
        if key in section:
            return _format_error(path, KEY_TAG, f"Duplicate <{KEY_TAG}> '{key}' in section '{section_name}'")

        section[key] = value

    return Ok(section)


def _format_error(path: Path | None, element: str, message: str) -> Err[ConfigFormatError]:
    logger.error("Config format error", path=str(path) if path else None, element=element, error=message)
    return Err(ConfigFormatError(path=path, element=element, message=message))
