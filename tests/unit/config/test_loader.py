from __future__ import annotations

from pathlib import Path
from xml.etree import ElementTree as ET

import pytest
from result import is_err, is_ok

from nini.config.models import ConfigFormatError
from nini.config.xml.loader import load_configs


def test_load_sections_and_keys_in_document_order() -> None:
    root = ET.fromstring(
        """
<Nini>
  <Section Name="Logging">
    <Key Name="File" Value="app.log"/>
    <Key Name="Level" Value="debug"/>
  </Section>
  <Section Name="Db">
    <Key Name="Host" Value="localhost"/>
  </Section>
</Nini>
"""
    )

    result = load_configs(root)

    assert is_ok(result)
    sections = result.unwrap()
    assert [section.name for section in sections] == ["Logging", "Db"]
    assert sections[0].to_dict() == {"File": "app.log", "Level": "debug"}
    assert sections[1].to_dict() == {"Host": "localhost"}


def test_load_ignores_foreign_elements_at_every_level() -> None:
    root = ET.fromstring(
        """
<Nini>
  <Meta author="someone"/>
  <Section Name="A">
    <Note>free text</Note>
    <Key Name="k" Value="v"/>
  </Section>
</Nini>
"""
    )

    result = load_configs(root)

    assert is_ok(result)
    sections = result.unwrap()
    assert len(sections) == 1
    assert sections[0].to_dict() == {"k": "v"}


def test_load_accepts_empty_values() -> None:
    root = ET.fromstring('<Nini><Section Name="A"><Key Name="k" Value=""/></Section></Nini>')

    result = load_configs(root)

    assert is_ok(result)
    assert result.unwrap()[0]["k"] == ""


def test_load_rejects_wrong_root() -> None:
    root = ET.fromstring('<Config><Section Name="A"/></Config>')

    result = load_configs(root, Path("broken.xml"))

    assert is_err(result)
    error = result.unwrap_err()
    assert isinstance(error, ConfigFormatError)
    assert error.element == "Config"
    assert error.path == Path("broken.xml")


@pytest.mark.parametrize(
    ("xml", "element"),
    [
        ("<Nini><Section/></Nini>", "Section"),
        ('<Nini><Section Name="A"><Key Value="v"/></Section></Nini>', "Key"),
        ('<Nini><Section Name="A"><Key Name="k"/></Section></Nini>', "Key"),
        ('<Nini><Section Name="A"/><Section Name="A"/></Nini>', "Section"),
        ('<Nini><Section Name="A"><Key Name="k" Value="1"/><Key Name="k" Value="2"/></Section></Nini>', "Key"),
    ],
)
def test_load_rejects_malformed_entries(xml: str, element: str) -> None:
    result = load_configs(ET.fromstring(xml))

    assert is_err(result)
    error = result.unwrap_err()
    assert isinstance(error, ConfigFormatError)
    assert error.element == element


def test_load_is_idempotent() -> None:
    root = ET.fromstring('<Nini><Section Name="A"><Key Name="k" Value="v"/></Section></Nini>')

    first = load_configs(root).unwrap()
    second = load_configs(root).unwrap()

    assert [s.to_dict() for s in first] == [s.to_dict() for s in second]
