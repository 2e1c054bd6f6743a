"""
``rawconv.registry``: Per-type function tables
==============================================
"""
from __future__ import annotations

import weakref
from typing import Any, Generic, Type, TypeVar

F = TypeVar("F")

__all__ = ("Registry",)


class Registry(Generic[F]):
    """A mapping from types to functions.

    The table is only allocated on the first call to :meth:`add` so unused
    registries are free. Keys are held weakly: registering a function for a
    class doesn't keep that class alive.

    There is at most one entry per type; adding a function for a type that
    already has one replaces it.
    """

    __slots__ = ("_table",)

    _table: weakref.WeakKeyDictionary[Type[Any], F] | None

    def __init__(self) -> None:
        self._table = None

    def add(self, typ: Type[Any], fn: F) -> None:
        if self._table is None:
            self._table = weakref.WeakKeyDictionary()
        self._table[typ] = fn

    def find(self, typ: Type[Any]) -> F | None:
        if self._table is None:
            return None
        return self._table.get(typ)

    def initialized(self) -> bool:
        """Whether anything was ever added to this registry."""
        return self._table is not None

    def copy(self) -> Registry[F]:
        res: Registry[F] = Registry()
        if self._table is not None:
            res._table = self._table.copy()
        return res

    def __len__(self) -> int:
        return 0 if self._table is None else len(self._table)

    def __contains__(self, typ: object) -> bool:
        return self._table is not None and typ in self._table
