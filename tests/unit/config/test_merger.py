from __future__ import annotations

from xml.etree import ElementTree as ET

from result import is_err, is_ok

from nini.config.collection import ConfigCollection, ConfigSection
from nini.config.models import ConfigFormatError
from nini.config.xml.loader import load_configs
from nini.config.xml.merger import merge_configs_into_document


def _load(xml: str) -> tuple[ET.Element, ConfigCollection]:
    root = ET.fromstring(xml)
    return root, ConfigCollection(load_configs(root).unwrap())


def _names(parent: ET.Element, tag: str) -> list[str | None]:
    return [child.get("Name") for child in parent if child.tag == tag]


def test_merge_into_empty_document_adds_section_and_key() -> None:
    root = ET.Element("Nini")
    configs = ConfigCollection()
    configs.add("A")["k"] = "v"

    result = merge_configs_into_document(configs, root)

    assert is_ok(result)
    assert _names(root, "Section") == ["A"]
    keys = list(root[0])
    assert len(keys) == 1
    assert keys[0].attrib == {"Name": "k", "Value": "v"}
    stats = result.unwrap()
    assert stats.sections_created == 1
    assert stats.keys_created == 1


def test_update_keeps_node_identity_and_position() -> None:
    root, configs = _load('<Nini><Section Name="A"><Key Name="k" Value="v1"/><Key Name="j" Value="w"/></Section></Nini>')
    section_node = root[0]
    k_node, j_node = list(section_node)

    configs["A"]["k"] = "v2"
    result = merge_configs_into_document(configs, root)

    assert is_ok(result)
    assert root[0] is section_node
    assert list(section_node) == [k_node, j_node]
    assert k_node.get("Value") == "v2"
    assert j_node.attrib == {"Name": "j", "Value": "w"}
    assert result.unwrap().keys_updated == 1


def test_removed_section_is_detached_with_its_keys() -> None:
    root, configs = _load(
        '<Nini><Section Name="A"><Key Name="a" Value="1"/></Section>'
        '<Section Name="B"><Key Name="b" Value="2"/></Section></Nini>'
    )
    a_node = root[0]
    a_children = list(a_node)

    configs.remove("B")
    result = merge_configs_into_document(configs, root)

    assert is_ok(result)
    assert list(root) == [a_node]
    assert list(a_node) == a_children


def test_removed_key_is_detached() -> None:
    root, configs = _load('<Nini><Section Name="A"><Key Name="x" Value="1"/><Key Name="y" Value="2"/></Section></Nini>')
    y_node = root[0][1]

    del configs["A"]["x"]
    merge_configs_into_document(configs, root)

    assert list(root[0]) == [y_node]


def test_survivors_keep_order_and_new_entries_are_appended_in_model_order() -> None:
    root, configs = _load(
        '<Nini><Section Name="B"><Key Name="b1" Value="1"/></Section>'
        '<Section Name="C"/><Section Name="A"><Key Name="a2" Value="2"/><Key Name="a1" Value="1"/></Section></Nini>'
    )

    configs.remove("C")
    configs.add("Z")["z"] = "26"
    configs.add("D")["d"] = "4"
    configs["A"]["a0"] = "0"
    configs["A"]["a3"] = "3"

    merge_configs_into_document(configs, root)

    assert _names(root, "Section") == ["B", "A", "Z", "D"]
    assert _names(root[1], "Key") == ["a2", "a1", "a0", "a3"]


def test_foreign_nodes_survive_untouched() -> None:
    root, configs = _load(
        '<Nini><Meta v="1"/><Section Name="A"><Note>keep</Note><Key Name="k" Value="v"/></Section>'
        '<Section Name="B"/><Trailer/></Nini>'
    )
    meta, section_a, _, trailer = list(root)
    note = section_a[0]

    configs.remove("B")
    del configs["A"]["k"]
    configs["A"]["n"] = "new"
    merge_configs_into_document(configs, root)

    assert list(root) == [meta, section_a, trailer]
    assert section_a[0] is note
    assert note.text == "keep"
    assert meta.attrib == {"v": "1"}
    assert _names(section_a, "Key") == ["n"]


def test_merge_is_idempotent() -> None:
    root, configs = _load('<Nini><Section Name="A"><Key Name="k" Value="v"/></Section></Nini>')
    configs.add("B")["x"] = "y"

    merge_configs_into_document(configs, root)
    first = ET.tostring(root)
    second_result = merge_configs_into_document(configs, root)

    assert ET.tostring(root) == first
    stats = second_result.unwrap()
    assert (stats.sections_created, stats.sections_removed, stats.keys_created, stats.keys_updated) == (0, 0, 0, 0)


def test_document_mirrors_model_after_merge() -> None:
    root, configs = _load(
        '<Nini><Section Name="A"><Key Name="k" Value="v"/></Section><Section Name="B"/></Nini>'
    )
    configs.remove("A")
    configs["B"]["x"] = "1"
    configs.append(ConfigSection("C", {"y": "2", "z": "3"}))

    merge_configs_into_document(configs, root)

    assert ConfigCollection(load_configs(root).unwrap()).to_dict() == configs.to_dict()


def test_unnamed_section_fails_without_mutating_document() -> None:
    root = ET.fromstring('<Nini><Section Name="A"><Key Name="k" Value="v"/></Section><Section/></Nini>')
    before = ET.tostring(root)
    configs = ConfigCollection()
    configs.add("B")["x"] = "1"

    result = merge_configs_into_document(configs, root)

    assert is_err(result)
    assert isinstance(result.unwrap_err(), ConfigFormatError)
    assert ET.tostring(root) == before


def test_unnamed_key_in_kept_section_fails_without_mutating_document() -> None:
    root = ET.fromstring(
        '<Nini><Section Name="Gone"/><Section Name="A"><Key Name="k" Value="v"/><Key Value="orphan"/></Section></Nini>'
    )
    before = ET.tostring(root)
    configs = ConfigCollection()
    configs.add("A")["k"] = "changed"

    result = merge_configs_into_document(configs, root)

    assert is_err(result)
    assert result.unwrap_err().element == "Key"
    assert ET.tostring(root) == before


def test_unnamed_key_in_dropped_section_is_removed_with_it() -> None:
    root = ET.fromstring('<Nini><Section Name="Gone"><Key Value="orphan"/></Section></Nini>')

    result = merge_configs_into_document(ConfigCollection(), root)

    assert is_ok(result)
    assert list(root) == []


def test_comments_are_left_in_place() -> None:
    parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=True))
    root = ET.fromstring('<Nini><!-- top --><Section Name="A"><!-- inner --><Key Name="k" Value="v"/></Section></Nini>', parser)
    configs = ConfigCollection(load_configs(root).unwrap())

    configs["A"]["k"] = "w"
    merge_configs_into_document(configs, root)

    assert root[0].tag is ET.Comment
    assert root[1][0].tag is ET.Comment
    assert root[1][1].get("Value") == "w"
