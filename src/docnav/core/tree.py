"""Navigation tree with path lookups and traversal operations.

The tree is an immutable value built once from the authored sidebar.
Lookups go through a path index; breadcrumbs and the active section walk
parent links recorded at construction time.
"""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import NamedTuple, TypedDict

from docnav.core.nodes import LeafNode, NavItemDict, NavNode
from docnav.core.types import URLPath, normalize_path


class NotFoundError(LookupError):
    """No navigation node carries the requested path."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"No navigation node for path: {path}")


class GroupPagePolicy(StrEnum):
    """Whether a group's own page appears in the flattened sequence."""

    EXCLUDE = "exclude"
    INCLUDE = "include"


class FlatEntry(NamedTuple):
    """Routed node in document order with its nesting depth."""

    path: URLPath
    depth: int


class NavTreeDict(TypedDict):
    """Dictionary representation of a navigation tree."""

    items: list[NavItemDict]


@dataclass(frozen=True)
class Breadcrumb:
    """Breadcrumb navigation item."""

    title: str
    path: URLPath | None

    def to_dict(self) -> dict[str, str | None]:
        """Convert to dictionary for JSON serialization."""
        return {"title": self.title, "path": self.path}


@dataclass(frozen=True)
class Pager:
    """Previous and next pages around the current one."""

    prev: NavNode | None = None
    next: NavNode | None = None

    def to_dict(self) -> dict[str, dict[str, str] | None]:
        """Convert to dictionary for JSON serialization."""
        return {"prev": _link(self.prev), "next": _link(self.next)}


def _link(node: NavNode | None) -> dict[str, str] | None:
    if node is None or node.path is None:
        return None
    return {"title": node.title, "path": node.path}


class FlatNavigation:
    """Lazy view of routed nodes in document order.

    Each iteration walks the tree again, so the view can be consumed
    any number of times.
    """

    __slots__ = ("_policy", "_roots")

    def __init__(
        self,
        roots: tuple[NavNode, ...],
        policy: GroupPagePolicy = GroupPagePolicy.EXCLUDE,
    ) -> None:
        self._roots = roots
        self._policy = policy

    def __iter__(self) -> Iterator[FlatEntry]:
        return self._walk(self._roots, 0)

    def _walk(self, nodes: Sequence[NavNode], depth: int) -> Iterator[FlatEntry]:
        for node in nodes:
            if isinstance(node, LeafNode):
                yield FlatEntry(node.path, depth)
                continue
            if node.path is not None and self._policy is GroupPagePolicy.INCLUDE:
                yield FlatEntry(node.path, depth)
            yield from self._walk(node.children, depth + 1)


class NavTree:
    """Validated navigation tree with efficient path lookups.

    Stores nodes in a flat list in document order with parent links
    tracked by indices. Provides O(1) path lookups and O(d) ancestry
    walks where d is the node depth.
    """

    __slots__ = ("_nodes", "_parents", "_path_index", "_roots")

    def __init__(self, roots: Sequence[NavNode]) -> None:
        """Index the tree.

        Args:
            roots: Top-level nodes in authored order

        Raises:
            ValueError: If two nodes share a path
        """
        self._roots = tuple(roots)
        self._nodes: list[NavNode] = []
        self._parents: list[int | None] = []
        self._path_index: dict[str, int] = {}
        for root in self._roots:
            self._register(root, None)

    def _register(self, node: NavNode, parent_idx: int | None) -> None:
        idx = len(self._nodes)
        self._nodes.append(node)
        self._parents.append(parent_idx)
        if node.path is not None:
            if node.path in self._path_index:
                raise ValueError(f"Duplicate path in navigation tree: {node.path}")
            self._path_index[node.path] = idx
        for child in node.children:
            self._register(child, idx)

    @property
    def roots(self) -> tuple[NavNode, ...]:
        """Top-level nodes in authored order."""
        return self._roots

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NavTree):
            return NotImplemented
        return self._roots == other._roots

    def __hash__(self) -> int:
        return hash(self._roots)

    def __repr__(self) -> str:
        return f"NavTree(roots={len(self._roots)}, pages={len(self._path_index)})"

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and normalize_path(path) in self._path_index

    def get(self, path: str) -> NavNode | None:
        """Get node by path.

        Args:
            path: Route (e.g., "smart-pointer/box" or "/smart-pointer/box")

        Returns:
            Node if found, None otherwise
        """
        idx = self._path_index.get(normalize_path(path))
        if idx is None:
            return None
        return self._nodes[idx]

    def lookup(self, path: str) -> NavNode:
        """Get node by path.

        Args:
            path: Route (e.g., "smart-pointer/box" or "/smart-pointer/box")

        Returns:
            Node whose path matches exactly

        Raises:
            NotFoundError: If no node carries the path
        """
        node = self.get(path)
        if node is None:
            raise NotFoundError(normalize_path(path))
        return node

    def pages(self) -> list[NavNode]:
        """All routed nodes, groups included, in document order."""
        return [self._nodes[idx] for idx in self._path_index.values()]

    def flatten(
        self,
        policy: GroupPagePolicy = GroupPagePolicy.EXCLUDE,
    ) -> FlatNavigation:
        """Routed nodes in document order paired with their depth.

        Args:
            policy: Whether groups that are pages appear ahead of their children

        Returns:
            Restartable iterable of FlatEntry
        """
        return FlatNavigation(self._roots, policy)

    def breadcrumbs(self, path: str) -> list[Breadcrumb]:
        """Build breadcrumbs for a given path.

        Ancestors are listed root first. The node itself is not included.
        Pure group headers appear with a None path.

        Raises:
            NotFoundError: If no node carries the path
        """
        normalized = normalize_path(path)
        idx = self._path_index.get(normalized)
        if idx is None:
            raise NotFoundError(normalized)

        crumbs: list[Breadcrumb] = []
        current = self._parents[idx]
        while current is not None:
            node = self._nodes[current]
            crumbs.append(Breadcrumb(title=node.title, path=node.path))
            current = self._parents[current]
        crumbs.reverse()
        return crumbs

    def active_section(self, path: str) -> NavNode | None:
        """Top-level node containing the path, None for unknown paths."""
        idx = self._path_index.get(normalize_path(path))
        if idx is None:
            return None
        while (parent := self._parents[idx]) is not None:
            idx = parent
        return self._nodes[idx]

    def pager(
        self,
        path: str,
        policy: GroupPagePolicy = GroupPagePolicy.EXCLUDE,
    ) -> Pager:
        """Previous and next pages in flattened order.

        Raises:
            NotFoundError: If the path is not part of the flattened sequence
        """
        normalized = normalize_path(path)
        paths = [entry.path for entry in self.flatten(policy)]
        try:
            position = paths.index(normalized)
        except ValueError:
            raise NotFoundError(normalized) from None

        prev_node = self.get(paths[position - 1]) if position > 0 else None
        next_node = self.get(paths[position + 1]) if position + 1 < len(paths) else None
        return Pager(prev=prev_node, next=next_node)

    def to_dict(self) -> NavTreeDict:
        """Convert to dictionary for JSON serialization."""
        return {"items": [node.to_dict() for node in self._roots]}
