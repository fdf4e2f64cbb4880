# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""SessionTree exceptions."""

from __future__ import annotations


class SessionTreeError(Exception):
    """Base exception for SessionTree errors."""

    pass


class PathConflictError(SessionTreeError):
    """Raised when a write meets a value that is not a mutable mapping.

    Attributes:
        path: The full path that was being written.
        prefix: The leading part of the path that resolves to the
            non-mapping value.
    """

    def __init__(self, path: str, prefix: str) -> None:
        self.path = path
        self.prefix = prefix
        super().__init__(
            f"Cannot write '{path}': '{prefix}' holds a value that is not a mutable mapping"
        )
