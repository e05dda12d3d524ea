"""Alias scopes used while walking a typedef tree."""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Dict, Iterator, Mapping, Optional

if TYPE_CHECKING:
    from .typedef import SchemaNode


class DefinitionScope(Mapping[str, "SchemaNode"]):
    """Read-only mapping of alias name to schema node.

    Scopes are never changed in place.  :meth:`merge` returns a new scope in
    which the given local aliases shadow any inherited alias of the same
    name; the parent scope is left untouched.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Optional[Mapping[str, "SchemaNode"]] = None) -> None:
        self._entries: Mapping[str, "SchemaNode"] = MappingProxyType(dict(entries or {}))

    @classmethod
    def empty(cls) -> "DefinitionScope":
        return _EMPTY

    def merge(self, local_aliases: Optional[Mapping[str, "SchemaNode"]]) -> "DefinitionScope":
        if not local_aliases:
            return self
        merged: Dict[str, "SchemaNode"] = dict(self._entries)
        merged.update(local_aliases)
        return DefinitionScope(merged)

    def lookup(self, name: str) -> Optional["SchemaNode"]:
        return self._entries.get(name)

    def __getitem__(self, name: str) -> "SchemaNode":
        return self._entries[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"DefinitionScope({sorted(self._entries)!r})"


_EMPTY = DefinitionScope()


def merge(parent: DefinitionScope, local_aliases: Optional[Mapping[str, "SchemaNode"]]) -> DefinitionScope:
    return parent.merge(local_aliases)


def lookup(scope: DefinitionScope, name: str) -> Optional["SchemaNode"]:
    return scope.lookup(name)


__all__ = ["DefinitionScope", "lookup", "merge"]
