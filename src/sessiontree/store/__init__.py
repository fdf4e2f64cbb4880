# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""SessionTree store package.

- core: The SessionTree class with path traversal, autocreate and delete

Example:
    >>> from sessiontree import SessionTree
    >>> tree = SessionTree()
    >>> tree.set('config.name', 'MyApp')
    >>> tree.get('config.name')
    'MyApp'
"""

from .core import SessionTree

__all__ = ["SessionTree"]
