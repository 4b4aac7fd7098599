"""Navigation node types.

A sidebar is a tree of two node kinds: leaf pages and group headers.
Group headers label an ordered set of children and may also be a page
themselves.
"""

from dataclasses import dataclass
from typing import NotRequired, TypedDict

from docnav.core.types import URLPath


class NavItemDict(TypedDict):
    """Dictionary representation of a navigation node."""

    title: str
    path: NotRequired[str]
    children: NotRequired[list["NavItemDict"]]


@dataclass(frozen=True)
class LeafNode:
    """Single content page."""

    title: str
    path: URLPath

    @property
    def children(self) -> tuple["NavNode", ...]:
        return ()

    def to_dict(self) -> NavItemDict:
        """Convert to dictionary for JSON serialization."""
        return {"title": self.title, "path": self.path}


@dataclass(frozen=True)
class GroupNode:
    """Group header with ordered children, optionally a page itself."""

    title: str
    children: tuple["NavNode", ...]
    path: URLPath | None = None

    def to_dict(self) -> NavItemDict:
        """Convert to dictionary for JSON serialization."""
        result: NavItemDict = {"title": self.title}
        if self.path is not None:
            result["path"] = self.path
        result["children"] = [child.to_dict() for child in self.children]
        return result


NavNode = LeafNode | GroupNode


def title_from_path(path: str) -> str:
    """Derive a human-readable title from the last path segment.

    "/smart-pointer/deref-trait" becomes "Deref Trait", "/collections/"
    becomes "Collections" and the site root "/" becomes "Home".
    """
    segment = path.rstrip("/").rsplit("/", 1)[-1]
    segment = segment.removesuffix(".html").removesuffix(".md")
    if not segment:
        return "Home"
    return segment.replace("-", " ").replace("_", " ").title()
