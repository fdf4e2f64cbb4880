# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""SessionTree - Dotted-path access to nested session data.

A lightweight, zero-dependency library to get, set and delete values in a
tree of plain mappings addressed by paths like 'profile.address.city'.
"""

__version__ = "0.1.0"

from .backend import MemoryRoot, NamespacedRoot, RootAccessor, StorageRoot
from .exceptions import PathConflictError, SessionTreeError
from .lookup import MISSING, Lookup
from .path import DELIMITER, TreePath, is_nested, join_path, split_path
from .store import SessionTree

__all__ = [
    # Core classes
    "SessionTree",
    # Root accessors
    "RootAccessor",
    "MemoryRoot",
    "StorageRoot",
    "NamespacedRoot",
    # Paths
    "DELIMITER",
    "TreePath",
    "is_nested",
    "split_path",
    "join_path",
    # Lookup results
    "Lookup",
    "MISSING",
    # Exceptions
    "SessionTreeError",
    "PathConflictError",
]
