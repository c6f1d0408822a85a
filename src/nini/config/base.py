"""Shared state and lifecycle hooks for configuration sources."""

from __future__ import annotations

from collections.abc import Callable

from .collection import ConfigCollection, ConfigSection

SourceHook = Callable[["ConfigSourceBase"], None]


class ConfigSourceBase:
    """Owns the section collection and notifies listeners after save and reload.

    Subclasses call `_notify_saved()` / `_notify_reloaded()` once the
    operation has fully succeeded.
    """

    def __init__(self) -> None:
        self._configs = ConfigCollection()
        self._saved_hooks: list[SourceHook] = []
        self._reloaded_hooks: list[SourceHook] = []

    @property
    def configs(self) -> ConfigCollection:
        return self._configs

    def add_config(self, name: str) -> ConfigSection:
        return self._configs.add(name)

    def on_saved(self, hook: SourceHook) -> None:
        self._saved_hooks.append(hook)

    def on_reloaded(self, hook: SourceHook) -> None:
        self._reloaded_hooks.append(hook)

    def _notify_saved(self) -> None:
        for hook in self._saved_hooks:
            hook(self)

    def _notify_reloaded(self) -> None:
        for hook in self._reloaded_hooks:
            hook(self)
