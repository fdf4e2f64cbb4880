# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""SessionTree - path-addressed access to a nested session mapping.

This module provides the SessionTree class, the engine that reads and
writes values in a tree of plain mappings using dotted paths. Callers do
not need to know whether a path exists or how deep it goes: reads answer
None for anything absent, writes create the missing intermediate levels.

Path Syntax:
    - Flat: 'token' addresses a key of the root mapping
    - Nested: 'profile.address.city' walks one mapping per segment
    - Segments are matched by position only, so 'a.a.a' is three levels

Example:
    Basic usage::

        tree = SessionTree()
        tree.set('profile.name', 'Ada')
        tree.set('profile.age', 30)

        tree.get('profile')         # {'name': 'Ada', 'age': 30}
        tree.delete('profile.age')
        tree.get('profile.age')     # None
        tree.clear()

    Backed by a user session sub-tree::

        storage = {}
        tree = SessionTree.for_user_session(storage)
        tree.set('cart.items', 3)
        storage                     # {'userSession': {'cart': {'items': 3}}}
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping, MutableMapping
from typing import Any, Callable, Iterator

from ..backend import MemoryRoot, NamespacedRoot, RootAccessor, StorageRoot
from ..exceptions import PathConflictError
from ..lookup import MISSING, Lookup
from ..path import DELIMITER, TreePath, is_nested

logger = logging.getLogger(__name__)


class SessionTree:
    """Dotted-path facade over a root mapping.

    SessionTree provides:
    - get(path, default): Read a value, default when absent
    - set(path, value): Create/update a value with autocreate
    - delete(path): Remove one leaf, no-op when absent
    - clear(): Reset the whole tree to an empty mapping

    The root mapping is reached through a RootAccessor and is never handed
    out: as_dict() returns a detached copy.

    Example:
        >>> tree = SessionTree()
        >>> tree.set('x.y', 1)
        >>> tree.set('z.x.y', 2)
        >>> tree.get('x.y'), tree.get('z.x.y')
        (1, 2)
    """

    __slots__ = ('_root', 'delimiter', '_strict', '_factory')

    def __init__(
        self,
        root: RootAccessor | MutableMapping | None = None,
        delimiter: str = DELIMITER,
        strict: bool = True,
        container_factory: Callable[[], MutableMapping] = dict,
    ) -> None:
        """Initialize a SessionTree.

        Args:
            root: Where the root mapping lives. Can be:
                - None: a fresh in-memory empty mapping
                - RootAccessor: used as is
                - MutableMapping: wrapped in a MemoryRoot
            delimiter: Segment separator used to split paths.
            strict: If True (default), a write through a value that is
                not a mapping raises PathConflictError. If False the
                conflict is logged as a warning and the write is dropped.
            container_factory: Callable returning the empty mapping used
                for autocreated levels and by clear().

        Raises:
            ValueError: If delimiter is empty.
            TypeError: If root is neither an accessor nor a mutable mapping.
        """
        if not isinstance(delimiter, str) or not delimiter:
            raise ValueError(f"delimiter must be a non-empty string, not {delimiter!r}")
        if root is None:
            root = MemoryRoot(container_factory())
        elif not isinstance(root, RootAccessor):
            root = MemoryRoot(root)
        self._root = root
        self.delimiter = delimiter
        self._strict = strict
        self._factory = container_factory

    @classmethod
    def for_storage(cls, storage: MutableMapping, **kwargs: Any) -> SessionTree:
        """Manage a whole storage mapping as the tree root.

        clear() empties storage in place instead of replacing it.
        """
        return cls(StorageRoot(storage), **kwargs)

    @classmethod
    def for_user_session(
        cls,
        storage: MutableMapping,
        namespace: str = 'userSession',
        **kwargs: Any,
    ) -> SessionTree:
        """Manage the ``storage[namespace]`` sub-tree as the tree root."""
        factory = kwargs.get('container_factory', dict)
        return cls(NamespacedRoot(storage, namespace, factory=factory), **kwargs)

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        return f"SessionTree({self.keys()})"

    def __len__(self) -> int:
        """Return the number of top-level keys."""
        return len(self._root.load())

    def __iter__(self) -> Iterator[str]:
        """Iterate over top-level keys in insertion order."""
        return iter(list(self._root.load()))

    def __contains__(self, path: str) -> bool:
        return self.exists(path)

    def __getitem__(self, path: str) -> Any:
        """Get value by path.

        Raises:
            KeyError: If path not found.
        """
        result = self._lookup(self._parse(path))
        if not result.found:
            raise KeyError(path)
        return result.value

    def __setitem__(self, path: str, value: Any) -> None:
        self.set(path, value)

    def __delitem__(self, path: str) -> None:
        """Delete value by path.

        Raises:
            KeyError: If path not found.
        """
        if not self.exists(path):
            raise KeyError(path)
        self.delete(path)

    @property
    def strict(self) -> bool:
        """True if path conflicts on write raise."""
        return self._strict

    # ==================== Path Utilities ====================

    def _parse(self, path: str) -> TreePath:
        return TreePath.parse(path, self.delimiter)

    def is_nested(self, path: str) -> bool:
        """True if path has more than one segment."""
        return is_nested(path, self.delimiter)

    def _lookup(self, path: TreePath) -> Lookup:
        """Resolve path against the root, stopping at the first absent level.

        Stopping early matters: a key with the same name as a later
        segment may exist somewhere shallower, and must not be taken as
        a match for the deeper path.
        """
        root = self._root.load()
        if not path.is_nested:
            return Lookup.of(root, path.leaf)

        level: Any = root
        result = MISSING
        for segment in path:
            result = Lookup.of(level, segment)
            if not result.found:
                return MISSING
            level = result.value
        return result

    def _htraverse(
        self, path: TreePath, autocreate: bool = False
    ) -> tuple[MutableMapping | None, str]:
        """Walk down to the level holding the leaf of path.

        Read-only mappings can be walked through; only a level that gets
        written to (a new child level, or the leaf's parent) must be a
        mutable mapping.

        Args:
            path: Parsed path.
            autocreate: If True, create missing intermediate levels.

        Returns:
            Tuple of (parent_mapping, leaf). parent_mapping is None when
            a level is missing and autocreate is False.

        Raises:
            PathConflictError: If a level on the way holds a value that is
                not a mapping, or a level that must be written to is not
                mutable. Nothing has been created at that point.
        """
        current: Mapping = self._root.load()

        for index, segment in enumerate(path.segments[:-1]):
            step = Lookup.of(current, segment)

            if not step.found:
                if not autocreate:
                    return None, path.leaf
                if not isinstance(current, MutableMapping):
                    raise PathConflictError(str(path), path.prefix(index))
                # Everything below a missing level is new
                child = self._factory()
                current[segment] = child
                logger.debug("Created level '%s'", path.prefix(index + 1))
                current = child
                continue

            if not isinstance(step.value, Mapping):
                raise PathConflictError(str(path), path.prefix(index + 1))

            current = step.value

        if not isinstance(current, MutableMapping):
            raise PathConflictError(str(path), path.prefix(len(path) - 1))

        return current, path.leaf

    # ==================== Core API ====================

    def get(self, path: str, default: Any = None) -> Any:
        """Get the value at the given path.

        Args:
            path: Dotted path, e.g. 'profile.name'.
            default: Value to return if the path is absent.

        Returns:
            The stored value, or default. Walking through a value that is
            not a mapping counts as absent.

        Example:
            >>> tree.get('profile.name')
            'Ada'
            >>> tree.get('profile.missing', 'n/a')
            'n/a'
        """
        return self._lookup(self._parse(path)).get(default)

    def set(self, path: str, value: Any) -> None:
        """Set a value at the given path, creating intermediate levels as needed.

        A flat path overwrites the root key unconditionally. A nested
        path reuses every existing intermediate mapping, creates the
        missing ones empty, and always overwrites the leaf.

        Args:
            path: Dotted path to the value.
            value: Any value, stored as is.

        Raises:
            PathConflictError: If an intermediate level holds a value that
                is not a mapping and the tree is strict.

        Example:
            >>> tree.set('profile.address.city', 'London')
            >>> tree.get('profile.address')
            {'city': 'London'}
        """
        tpath = self._parse(path)

        if not tpath.is_nested:
            parent = self._root.load()
        else:
            try:
                parent, _ = self._htraverse(tpath, autocreate=True)
            except PathConflictError as err:
                if self._strict:
                    raise
                logger.warning("%s; value dropped", err)
                return

        action = 'Updated' if tpath.leaf in parent else 'Created'
        parent[tpath.leaf] = value
        logger.debug("%s '%s'", action, path)

    def delete(self, path: str) -> None:
        """Delete the leaf at the given path.

        Only the leaf key is removed: siblings stay, and a parent left
        empty is kept. Absent paths are ignored.

        Args:
            path: Dotted path to the value.

        Raises:
            PathConflictError: If the leaf sits in a read-only mapping and
                the tree is strict.
        """
        tpath = self._parse(path)
        if not self._lookup(tpath).found:
            return

        try:
            parent, leaf = self._htraverse(tpath)
        except PathConflictError as err:
            if self._strict:
                raise
            logger.warning("%s; delete skipped", err)
            return
        del parent[leaf]
        logger.debug("Deleted '%s'", path)

    def clear(self) -> None:
        """Replace the root with a new empty mapping."""
        self._root.replace(self._factory())
        logger.debug("Cleared tree")

    # ==================== Convenience ====================

    def exists(self, path: str) -> bool:
        """True if path resolves to a stored value (None included)."""
        return self._lookup(self._parse(path)).found

    def pop(self, path: str, default: Any = None) -> Any:
        """Remove and return value at path.

        Args:
            path: Dotted path to the value.
            default: Value to return if path not found.

        Returns:
            The removed value, or default. default is also returned when
            a non-strict tree cannot remove the value.

        Raises:
            PathConflictError: If the leaf sits in a read-only mapping and
                the tree is strict.
        """
        tpath = self._parse(path)
        result = self._lookup(tpath)
        if not result.found:
            return default
        try:
            parent, leaf = self._htraverse(tpath)
        except PathConflictError as err:
            if self._strict:
                raise
            logger.warning("%s; pop skipped", err)
            return default
        del parent[leaf]
        logger.debug("Popped '%s'", path)
        return result.value

    def keys(self) -> list[str]:
        """Return list of top-level keys in insertion order."""
        return list(self._root.load().keys())

    # ==================== Walk ====================

    def walk(
        self,
        callback: Callable[[str, Any], Any] | None = None,
    ) -> Iterator[tuple[str, Any]] | None:
        """Walk the tree depth first, optionally calling a callback.

        Every key is visited, mappings included, before their children.

        Args:
            callback: Optional function called with (path, value).
                If provided, walk returns None.

        Yields:
            Tuples of (path, value) if no callback provided.

        Example:
            >>> for path, value in tree.walk():
            ...     print(path, value)
        """
        delimiter = self.delimiter

        def _walk_gen(level: Mapping, prefix: str) -> Iterator[tuple[str, Any]]:
            for key, value in list(level.items()):
                path = f"{prefix}{delimiter}{key}" if prefix else key
                yield path, value
                if isinstance(value, Mapping):
                    yield from _walk_gen(value, path)

        if callback is not None:
            for path, value in _walk_gen(self._root.load(), ''):
                callback(path, value)
            return None

        return _walk_gen(self._root.load(), '')

    # ==================== Conversion ====================

    def as_dict(self) -> dict[str, Any]:
        """Return a detached copy of the tree as nested plain dicts."""

        def _copy(level: Mapping) -> dict[str, Any]:
            result: dict[str, Any] = {}
            for key, value in level.items():
                if isinstance(value, Mapping):
                    result[key] = _copy(value)
                else:
                    result[key] = copy.deepcopy(value)
            return result

        return _copy(self._root.load())
