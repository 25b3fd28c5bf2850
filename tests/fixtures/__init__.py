"""
Test fixtures package for hashtree tests.

Usage:
    from fixtures import make_blocks, make_tree

    def test_something():
        tree = make_tree(5)
"""

from .common import (
    make_blocks,
    make_tree,
    expected_root,
)

__all__ = [
    "make_blocks",
    "make_tree",
    "expected_root",
]
