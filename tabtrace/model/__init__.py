"""
tabtrace/model/__init__.py

Record tree operations.
"""

from tabtrace.model.traversal import (
    ensure_types,
    normalize_times,
    transform_leaf_first,
    traverse_leaf_first,
)

__all__ = [
    "ensure_types",
    "normalize_times",
    "transform_leaf_first",
    "traverse_leaf_first",
]
