"""In-memory configuration model: ordered, name-indexed sections of string pairs."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, MutableMapping


class ConfigSection(MutableMapping[str, str]):
    """A named group of key/value pairs.

    Keys and values are plain strings. Anything else is rejected rather
    than converted, so what is saved is exactly what was set.
    """

    def __init__(self, name: str, pairs: Mapping[str, str] | None = None) -> None:
        if not isinstance(name, str):
            raise TypeError(f"Section name must be a string, got {type(name).__name__}")
        self._name = name
        self._data: dict[str, str] = {}
        if pairs:
            self.update(pairs)

    @property
    def name(self) -> str:
        return self._name

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __setitem__(self, key: str, value: str) -> None:
        if not isinstance(key, str):
            raise TypeError(f"Key name must be a string, got {type(key).__name__}")
        if not isinstance(value, str):
            raise TypeError(f"Value of '{key}' must be a string, got {type(value).__name__}")
        self._data[key] = value

    def __delitem__(self, key: str) -> None:
        del self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"ConfigSection({self._name!r}, {self._data!r})"

    def get_keys(self) -> list[str]:
        return list(self._data)

    def to_dict(self) -> dict[str, str]:
        return dict(self._data)


class ConfigCollection:
    """Ordered collection of sections, looked up by name.

    Iteration yields sections in the order they were added.
    """

    def __init__(self, sections: Iterable[ConfigSection] = ()) -> None:
        self._sections: dict[str, ConfigSection] = {}
        for section in sections:
            self.append(section)

    def __getitem__(self, name: str) -> ConfigSection:
        return self._sections[name]

    def __contains__(self, name: object) -> bool:
        return name in self._sections

    def __iter__(self) -> Iterator[ConfigSection]:
        return iter(self._sections.values())

    def __len__(self) -> int:
        return len(self._sections)

    def __repr__(self) -> str:
        return f"ConfigCollection({self.names()!r})"

    def get(self, name: str) -> ConfigSection | None:
        return self._sections.get(name)

    def add(self, name: str) -> ConfigSection:
        """Return the section called `name`, creating it at the end if missing."""
        section = self._sections.get(name)
        if section is None:
            section = ConfigSection(name)
            self._sections[name] = section
        return section

    def append(self, section: ConfigSection) -> None:
        if section.name in self._sections:
            raise ValueError(f"Section '{section.name}' already exists")
        self._sections[section.name] = section

    def remove(self, name: str) -> ConfigSection:
        return self._sections.pop(name)

    def replace(self, sections: Iterable[ConfigSection]) -> None:
        """Swap the whole content for `sections`."""
        fresh = ConfigCollection(sections)
        self._sections = fresh._sections

    def clear(self) -> None:
        self._sections.clear()

    def names(self) -> list[str]:
        return list(self._sections)

    def to_dict(self) -> dict[str, dict[str, str]]:
        return {name: section.to_dict() for name, section in self._sections.items()}
