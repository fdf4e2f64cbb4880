# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Root accessors - where a SessionTree keeps its root mapping.

The store never holds the root mapping directly. It asks an accessor for
it on every operation and hands a new one back on ``clear``. Three
accessors cover the usual cases:

- MemoryRoot: the accessor owns the mapping.
- StorageRoot: the mapping is an outer storage object whose identity
  must survive a ``clear``.
- NamespacedRoot: the mapping lives under one key of a larger mutable
  mapping, like the ``userSession`` entry of a session storage. A
  ``shelve`` shelf works when opened with ``writeback=True``.

Example:
    >>> storage = {}
    >>> root = NamespacedRoot(storage, 'userSession')
    >>> root.load()['name'] = 'Ada'
    >>> storage
    {'userSession': {'name': 'Ada'}}
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import MutableMapping
from typing import Any, Callable


def _check_mapping(mapping: Any, what: str) -> MutableMapping:
    if not isinstance(mapping, MutableMapping):
        raise TypeError(f"{what} must be a mutable mapping, not {type(mapping).__name__}")
    return mapping


class RootAccessor(ABC):
    """Abstract access to the root mapping of a tree."""

    @abstractmethod
    def load(self) -> MutableMapping:
        """Return the live root mapping (not a copy)."""
        ...

    @abstractmethod
    def replace(self, mapping: MutableMapping) -> None:
        """Make mapping the new root."""
        ...


class MemoryRoot(RootAccessor):
    """Root mapping held in memory by the accessor itself."""

    def __init__(self, initial: MutableMapping | None = None) -> None:
        self._mapping = _check_mapping(initial if initial is not None else {}, 'initial')

    def __repr__(self) -> str:
        return f"MemoryRoot({list(self._mapping.keys())})"

    def load(self) -> MutableMapping:
        return self._mapping

    def replace(self, mapping: MutableMapping) -> None:
        self._mapping = _check_mapping(mapping, 'root')


class NamespacedRoot(RootAccessor):
    """Root mapping stored under ``storage[namespace]``.

    An empty mapping is provisioned under the namespace the first time it
    is loaded, so a fresh storage behaves as an empty tree.

    Args:
        storage: The outer mutable mapping that persists the tree.
        namespace: Key of the managed sub-tree inside storage.
        factory: Callable creating the empty mapping to provision.
    """

    def __init__(
        self,
        storage: MutableMapping,
        namespace: str = 'userSession',
        factory: Callable[[], MutableMapping] = dict,
    ) -> None:
        self._storage = _check_mapping(storage, 'storage')
        self.namespace = namespace
        self._factory = factory

    def __repr__(self) -> str:
        return f"NamespacedRoot({self.namespace!r})"

    def load(self) -> MutableMapping:
        mapping = self._storage.get(self.namespace)
        if mapping is None:
            mapping = self._factory()
            self._storage[self.namespace] = mapping
        return _check_mapping(mapping, f"storage[{self.namespace!r}]")

    def replace(self, mapping: MutableMapping) -> None:
        self._storage[self.namespace] = _check_mapping(mapping, 'root')


class StorageRoot(RootAccessor):
    """Root mapping that is itself the storage object.

    The storage object is never swapped out: ``replace`` empties it in
    place and copies the new contents in.
    """

    def __init__(self, storage: MutableMapping) -> None:
        self._storage = _check_mapping(storage, 'storage')

    def __repr__(self) -> str:
        return f"StorageRoot({list(self._storage.keys())})"

    def load(self) -> MutableMapping:
        return self._storage

    def replace(self, mapping: MutableMapping) -> None:
        _check_mapping(mapping, 'root')
        self._storage.clear()
        self._storage.update(mapping)
