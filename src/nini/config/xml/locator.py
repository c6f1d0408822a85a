"""Name-based lookup of sibling nodes."""

from __future__ import annotations

from collections.abc import Iterable
from xml.etree import ElementTree as ET

from nini.constants import NAME_ATTR


def find_named(nodes: Iterable[ET.Element], tag: str, name: str) -> ET.Element | None:
    """Return the first `tag` node whose Name attribute equals `name`, in document order.

    Matching is exact and case-sensitive. Nodes of other tags, and
    nodes without a Name attribute, never match.
    """
    for node in nodes:
        if node.tag == tag and node.get(NAME_ATTR) == name:
            return node
    return None


class NamedNodeIndex:
    """Hash lookup over the current `tag` children of `parent`.

    Answers the same question as `find_named` over `parent`'s children
    (first match wins for repeated names) without rescanning them on
    every lookup. Nodes appended to `parent` afterwards must be
    registered with `add()`; nodes detached from `parent` must not be
    looked up again.
    """

    def __init__(self, parent: ET.Element, tag: str) -> None:
        self._tag = tag
        self._nodes: dict[str, ET.Element] = {}
        for node in parent:
            if node.tag != tag:
                continue
            name = node.get(NAME_ATTR)
            if name is not None:
                self._nodes.setdefault(name, node)

    def find(self, name: str) -> ET.Element | None:
        return self._nodes.get(name)

    def add(self, node: ET.Element) -> None:
        name = node.get(NAME_ATTR)
        if node.tag != self._tag or name is None:
            raise ValueError(f"Only named <{self._tag}> nodes can be indexed")
        self._nodes.setdefault(name, node)

    def __len__(self) -> int:
        return len(self._nodes)
