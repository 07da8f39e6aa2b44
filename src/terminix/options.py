"""Option sources and typed field extraction."""

from __future__ import annotations

import argparse
from collections.abc import Mapping
from typing import Protocol

CMD_WORKING_DIRECTORY = "working-directory"
CMD_SESSION = "session"
CMD_PROFILE = "profile"
CMD_EXECUTE = "execute"
CMD_ACTION = "action"
CMD_TERMINAL_UUID = "terminalUUID"
CMD_MAXIMIZE = "maximize"
CMD_FULL_SCREEN = "full-screen"
CMD_FOCUS_WINDOW = "focus-window"
CMD_GEOMETRY = "geometry"
CMD_NEW_PROCESS = "new-process"
CMD_TITLE = "title"


class OptionSource(Protocol):
    def string_option(self, key: str) -> str | None: ...

    def string_list_option(self, key: str) -> list[str]: ...

    def flag_present(self, key: str) -> bool: ...


class MappingOptionSource:
    """Option source over a plain key/value mapping.

    A flag is present whenever its key exists, whatever value it carries.
    """

    def __init__(self, values: Mapping[str, object] | None = None) -> None:
        self._values: dict[str, object] = dict(values or {})

    def string_option(self, key: str) -> str | None:
        value = self._values.get(key)
        if isinstance(value, str):
            return value
        return None

    def string_list_option(self, key: str) -> list[str]:
        value = self._values.get(key)
        if isinstance(value, str):
            return [value]
        if isinstance(value, (list, tuple)):
            return [item for item in value if isinstance(item, str)]
        return []

    def flag_present(self, key: str) -> bool:
        return key in self._values


def namespace_attribute(key: str) -> str:
    return key.replace("-", "_")


class NamespaceOptionSource:
    """Option source over the namespace produced by the CLI parser."""

    def __init__(self, namespace: argparse.Namespace) -> None:
        self._namespace = namespace

    def _lookup(self, key: str) -> object:
        return getattr(self._namespace, namespace_attribute(key), None)

    def string_option(self, key: str) -> str | None:
        value = self._lookup(key)
        if isinstance(value, str):
            return value
        return None

    def string_list_option(self, key: str) -> list[str]:
        value = self._lookup(key)
        if not isinstance(value, list):
            return []
        return [item for item in value if isinstance(item, str)]

    def flag_present(self, key: str) -> bool:
        return self._lookup(key) is True


def get_string(source: OptionSource, key: str) -> str:
    value = source.string_option(key)
    return value if value is not None else ""


def get_string_list(source: OptionSource, key: str) -> list[str]:
    return list(source.string_list_option(key))


def get_flag(source: OptionSource, key: str) -> bool:
    return source.flag_present(key)
