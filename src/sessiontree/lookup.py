# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Result of a single traversal step.

Every step of a walk answers with a :class:`Lookup`: either the value was
found at that level, or it is :data:`MISSING`. A stored ``None`` is a
found value, so absence never depends on comparing against a sentinel
value held in the tree.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


class Lookup:
    """Found-or-missing answer for one key at one level.

    Example:
        >>> Lookup.of({'a': 1}, 'a')
        Lookup(found=1)
        >>> Lookup.of({'a': 1}, 'b') is MISSING
        True
        >>> Lookup.of('text', 'a') is MISSING
        True
    """

    __slots__ = ('found', 'value')

    def __init__(self, found: bool, value: Any = None) -> None:
        object.__setattr__(self, 'found', found)
        object.__setattr__(self, 'value', value)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"'{type(self).__name__}' is immutable")

    def __repr__(self) -> str:
        if not self.found:
            return "Lookup(missing)"
        return f"Lookup(found={self.value!r})"

    def __bool__(self) -> bool:
        return self.found

    @classmethod
    def of(cls, level: Any, key: str) -> Lookup:
        """Look key up in level.

        Anything that is not a mapping has no keys, so it answers MISSING
        instead of raising.
        """
        if not isinstance(level, Mapping) or key not in level:
            return MISSING
        return cls(True, level[key])

    def get(self, default: Any = None) -> Any:
        """Return the found value, or default when missing."""
        return self.value if self.found else default


MISSING = Lookup(False)
