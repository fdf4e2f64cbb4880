# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Dotted path parsing.

A path such as ``'profile.address.city'`` is parsed once into a
:class:`TreePath`, an immutable sequence of segments that the store
reuses for every step of a traversal.

Example:
    >>> path = TreePath.parse('profile.address.city')
    >>> path.segments
    ('profile', 'address', 'city')
    >>> path.is_nested
    True
    >>> path.prefix(2)
    'profile.address'
"""

from __future__ import annotations

from typing import Iterator

DELIMITER = '.'


def is_nested(path: str, delimiter: str = DELIMITER) -> bool:
    """True if path has more than one segment.

    The empty string has no delimiter and is therefore flat.
    """
    return delimiter in path


def split_path(path: str, delimiter: str = DELIMITER) -> tuple[str, ...]:
    """Split path into its segments, root first. Segments are not trimmed."""
    return tuple(path.split(delimiter))


def join_path(segments: tuple[str, ...] | list[str], delimiter: str = DELIMITER) -> str:
    """Inverse of split_path."""
    return delimiter.join(segments)


class TreePath:
    """Immutable, parsed form of a dotted path."""

    __slots__ = ('segments', 'delimiter')

    def __init__(self, segments: tuple[str, ...], delimiter: str = DELIMITER) -> None:
        if not segments:
            raise ValueError("A path needs at least one segment")
        object.__setattr__(self, 'segments', tuple(segments))
        object.__setattr__(self, 'delimiter', delimiter)

    @classmethod
    def parse(cls, path: str, delimiter: str = DELIMITER) -> TreePath:
        """Parse a dotted path string."""
        return cls(split_path(path, delimiter), delimiter)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"'{type(self).__name__}' is immutable")

    def __str__(self) -> str:
        return join_path(self.segments, self.delimiter)

    def __repr__(self) -> str:
        return f"TreePath({str(self)!r})"

    def __len__(self) -> int:
        return len(self.segments)

    def __iter__(self) -> Iterator[str]:
        return iter(self.segments)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TreePath):
            return NotImplemented
        return self.segments == other.segments and self.delimiter == other.delimiter

    def __hash__(self) -> int:
        return hash((self.segments, self.delimiter))

    @property
    def is_nested(self) -> bool:
        """True if the path has more than one segment."""
        return len(self.segments) > 1

    @property
    def leaf(self) -> str:
        """The last segment."""
        return self.segments[-1]

    def prefix(self, length: int) -> str:
        """Dotted string of the first ``length`` segments."""
        return join_path(self.segments[:length], self.delimiter)
