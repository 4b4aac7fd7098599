"""Docnav - sidebar navigation for statically generated documentation sites."""

from docnav.core.navigation import NavigationBuilder, ValidationError, build_navigation
from docnav.core.nodes import GroupNode, LeafNode, NavNode
from docnav.core.tree import FlatEntry, GroupPagePolicy, NavTree, NotFoundError

__all__ = [
    "FlatEntry",
    "GroupNode",
    "GroupPagePolicy",
    "LeafNode",
    "NavNode",
    "NavTree",
    "NavigationBuilder",
    "NotFoundError",
    "ValidationError",
    "build_navigation",
]
