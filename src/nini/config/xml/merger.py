"""Reconciliation of in-memory sections back into an XML document.

The document is edited in place instead of being rebuilt, so every node
the model still describes keeps its identity and position:

- Section and Key nodes whose name is gone from the model are detached.
- Surviving Key nodes get their Value updated where they stand.
- Sections and keys that have no node yet are appended at the end of
  their parent, in model order.

Anything that is not a Section or Key (foreign elements, comments) is
left alone.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from xml.etree import ElementTree as ET

from result import Err, Ok, Result, is_err

from nini.common import create_logger
from nini.constants import KEY_TAG, NAME_ATTR, SECTION_TAG, VALUE_ATTR

from ..collection import ConfigCollection, ConfigSection
from ..models import ConfigFormatError
from .locator import NamedNodeIndex

logger = create_logger("xml.merger")


@dataclass
class MergeStats:
    sections_removed: int = 0
    sections_created: int = 0
    keys_removed: int = 0
    keys_created: int = 0
    keys_updated: int = 0


def merge_configs_into_document(
    configs: ConfigCollection,
    root: ET.Element,
    path: Path | None = None,
) -> Result[MergeStats, ConfigFormatError]:
    """Make the Section/Key nodes under `root` mirror `configs` exactly.

    The document is checked before it is touched: if a Section or Key
    node the merge has to identify lacks its Name attribute, an error is
    returned and `root` is unchanged.
    """
    checked = _check_identities(configs, root, path)
    if is_err(checked):
        return checked

    stats = MergeStats()
    stats.sections_removed = _remove_sections(configs, root)

    index = NamedNodeIndex(root, SECTION_TAG)
    for section in configs:
        node = index.find(section.name)
        if node is None:
            node = ET.SubElement(root, SECTION_TAG, {NAME_ATTR: section.name})
            index.add(node)
            stats.sections_created += 1
        _merge_keys(section, node, stats)

    logger.debug(
        "Configs merged into document",
        path=str(path) if path else None,
        sections_removed=stats.sections_removed,
        sections_created=stats.sections_created,
        keys_removed=stats.keys_removed,
        keys_created=stats.keys_created,
        keys_updated=stats.keys_updated,
    )
    return Ok(stats)


def _check_identities(
    configs: ConfigCollection,
    root: ET.Element,
    path: Path | None,
) -> Result[None, ConfigFormatError]:
    seen_sections: set[str] = set()

    for node in _children(root, SECTION_TAG):
        name = node.get(NAME_ATTR)
        if name is None:
            return _format_error(path, SECTION_TAG, f"<{SECTION_TAG}> element has no {NAME_ATTR} attribute")
        if name in seen_sections:
            return _format_error(path, SECTION_TAG, f"Duplicate <{SECTION_TAG}> named '{name}'")
        seen_sections.add(name)

        # keys of sections about to be dropped are never looked at
        if name not in configs:
            continue

        seen_keys: set[str] = set()
        for key_node in _children(node, KEY_TAG):
            key = key_node.get(NAME_ATTR)
            if key is None:
                return _format_error(
                    path,
                    KEY_TAG,
                    f"<{KEY_TAG}> element in section '{name}' has no {NAME_ATTR} attribute",
                )
            if key in seen_keys:
                return _format_error(path, KEY_TAG, f"Duplicate <{KEY_TAG}> '{key}' in section '{name}'")
            seen_keys.add(key)

    return Ok(None)


def _remove_sections(configs: ConfigCollection, root: ET.Element) -> int:
    removed = 0
    for node in _children(root, SECTION_TAG):
        if node.get(NAME_ATTR) not in configs:
            root.remove(node)
            removed += 1
    return removed


def _merge_keys(section: ConfigSection, node: ET.Element, stats: MergeStats) -> None:
    for key_node in _children(node, KEY_TAG):
        if key_node.get(NAME_ATTR) not in section:
            node.remove(key_node)
            stats.keys_removed += 1

    index = NamedNodeIndex(node, KEY_TAG)
    for key, value in section.items():
        key_node = index.find(key)
        if key_node is None:
            index.add(ET.SubElement(node, KEY_TAG, {NAME_ATTR: key, VALUE_ATTR: value}))
            stats.keys_created += 1
        elif key_node.get(VALUE_ATTR) != value:
            key_node.set(VALUE_ATTR, value)
            stats.keys_updated += 1


def _children(parent: ET.Element, tag: str) -> Iterable[ET.Element]:
    # snapshot, callers detach while iterating
    return [child for child in parent if child.tag == tag]


def _format_error(path: Path | None, element: str, message: str) -> Err[ConfigFormatError]:
    logger.error("Config format error during merge", path=str(path) if path else None, element=element, error=message)
    return Err(ConfigFormatError(path=path, element=element, message=message))
