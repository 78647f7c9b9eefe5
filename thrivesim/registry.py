"""Registries of named types loaded from JSON objects."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Generic, Iterator, Mapping, TypeVar

logger = logging.getLogger(__name__)

# An id that marks an entry that was never registered.
INVALID_ID = 2**64 - 1


class TypeNotFoundError(LookupError):
    """Raised when a registry has no entry for the requested key."""


class RegistryLoadError(Exception):
    """Raised when a registry file can't be read."""


def json_as_string(value: Any) -> str:
    """Convert a JSON value to text the lenient way registry files expect."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    raise ValueError(f"value can't be converted to a string: {value!r}")


@dataclass
class RegistryType:
    """Base of every registered type."""

    id: int = INVALID_ID
    display_name: str = "Error! Please report! :)"
    internal_name: str = "error"

    def to_json(self) -> dict[str, Any]:
        """Return the common properties as a JSON-ready dict."""
        return {
            "id": self.id,
            "name": self.display_name,
            "internalName": self.internal_name,
        }


T = TypeVar("T", bound=RegistryType)


class JsonRegistry(Generic[T]):
    """Holds registered types indexed by id and by internal name.

    ``factory`` builds an entry from the JSON object describing it.
    """

    def __init__(self, factory: Callable[[Any], T]) -> None:
        self._factory = factory
        self._types: dict[int, T] = {}
        self._name_index: dict[str, int] = {}
        self._next_id = 0

    @classmethod
    def from_file(
        cls, path: str | Path, factory: Callable[[Any], T]
    ) -> "JsonRegistry[T]":
        """Create a registry from the JSON object stored in a file."""
        registry = cls(factory)
        try:
            with open(path, encoding="utf-8") as handle:
                text = handle.read()
        except OSError as error:
            raise RegistryLoadError(f"The file '{path}' failed to load!") from error
        try:
            data = json.loads(text)
        except json.JSONDecodeError as error:
            logger.error(
                "Syntax error in json file: '%s', description: %s", path, error
            )
            raise
        registry.load_mapping(data)
        return registry

    def load_mapping(self, data: Mapping[str, Any]) -> None:
        """Register every member of a JSON object, in sorted name order."""
        if not isinstance(data, Mapping):
            raise ValueError("registry data must be a JSON object")
        for internal_name in sorted(data):
            value = data[internal_name]
            if not isinstance(value, Mapping):
                raise ValueError(f"entry '{internal_name}' is not a JSON object")
            item = self._factory(value)
            item.internal_name = internal_name
            item.id = self._next_id
            item.display_name = json_as_string(value.get("name"))
            self._types[self._next_id] = item
            self._name_index.setdefault(internal_name, self._next_id)
            self._next_id += 1

    def get_type_data(self, key: int | str) -> T:
        """Return the entry with the given id or internal name."""
        if isinstance(key, str):
            key = self.get_type_id(key)
        try:
            return self._types[key]
        except KeyError:
            raise TypeNotFoundError("Type not found!") from None

    def get_type_id(self, internal_name: str) -> int:
        """Return the id registered for an internal name."""
        try:
            return self._name_index[internal_name]
        except KeyError:
            raise TypeNotFoundError("Type not found!") from None

    def get_internal_name(self, type_id: int) -> str:
        """Return the internal name registered for an id."""
        for name, registered_id in self._name_index.items():
            if registered_id == type_id:
                return name
        raise TypeNotFoundError("no name for id found in this registry")

    def __len__(self) -> int:
        return len(self._types)

    def __iter__(self) -> Iterator[T]:
        return iter(self._types.values())

    def __contains__(self, key: object) -> bool:
        if isinstance(key, str):
            return key in self._name_index
        return key in self._types