"""XML configuration source."""

from .loader import load_configs
from .locator import NamedNodeIndex, find_named
from .merger import MergeStats, merge_configs_into_document
from .source import XmlConfigSource

__all__ = [
    "MergeStats",
    "NamedNodeIndex",
    "XmlConfigSource",
    "find_named",
    "load_configs",
    "merge_configs_into_document",
]
