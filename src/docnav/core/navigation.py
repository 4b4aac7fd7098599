"""Navigation tree builder.

Turns the authored sidebar configuration into a validated NavTree.
Entries are either bare route strings (leaf pages) or mappings with
``title``, ``path`` and ``children`` keys (leaf pages or group headers).
"""

import logging
from collections.abc import Mapping, Sequence

from docnav.core.nodes import GroupNode, LeafNode, NavNode, title_from_path
from docnav.core.tree import NavTree
from docnav.core.types import URLPath, normalize_path

logger = logging.getLogger(__name__)

NODE_KEYS = frozenset({"title", "path", "children"})


class ValidationError(ValueError):
    """Authored navigation configuration is malformed."""

    def __init__(
        self,
        message: str,
        *,
        location: str,
        path: str | None = None,
    ) -> None:
        self.location = location
        self.path = path
        super().__init__(f"{location}: {message}")


class NavigationBuilder:
    """Builds a NavTree from authored sidebar entries.

    A single depth-first pass in authored order. Seen paths are tracked
    across the whole tree and the build stops at the first duplicate.
    """

    def __init__(self) -> None:
        self._seen: set[str] = set()

    def build(self, raw: object) -> NavTree:
        """Build a validated navigation tree.

        Args:
            raw: List of sidebar entries, or a single entry

        Returns:
            NavTree with explicit titles and ordered children

        Raises:
            ValidationError: On malformed entries, empty groups or duplicate paths
        """
        self._seen = set()

        if isinstance(raw, (str, Mapping)):
            entries: Sequence[object] = [raw]
        elif isinstance(raw, Sequence):
            entries = raw
        else:
            raise ValidationError(
                f"expected a list of entries, got {type(raw).__name__}",
                location="sidebar",
            )

        roots = [
            self._parse_entry(entry, f"sidebar[{i}]") for i, entry in enumerate(entries)
        ]
        tree = NavTree(roots)
        logger.debug(
            f"Built navigation with {len(roots)} sections and {len(self._seen)} routes",
        )
        return tree

    def _parse_entry(self, entry: object, location: str) -> NavNode:
        if isinstance(entry, str):
            path = self._claim_path(entry, location)
            return LeafNode(title=title_from_path(path), path=path)

        if not isinstance(entry, Mapping):
            raise ValidationError(
                f"expected a path string or a mapping, got {type(entry).__name__}",
                location=location,
            )

        unknown = set(entry) - NODE_KEYS
        if unknown:
            names = ", ".join(sorted(str(key) for key in unknown))
            raise ValidationError(f"unknown keys: {names}", location=location)
        if not entry:
            raise ValidationError(
                "entry needs at least one of title, path, children",
                location=location,
            )

        title = entry.get("title")
        if title is not None and not isinstance(title, str):
            raise ValidationError("title must be a string", location=location)

        raw_path = entry.get("path")
        path = self._claim_path(raw_path, location) if raw_path is not None else None

        if "children" not in entry:
            if path is None:
                raise ValidationError(
                    f"entry {title!r} has neither a path nor children",
                    location=location,
                )
            return LeafNode(
                title=title if title is not None else title_from_path(path),
                path=path,
            )

        return GroupNode(
            title=title if title is not None else _group_title(path),
            children=self._parse_children(entry["children"], location, path),
            path=path,
        )

    def _parse_children(
        self,
        raw_children: object,
        location: str,
        path: URLPath | None,
    ) -> tuple[NavNode, ...]:
        if isinstance(raw_children, (str, Mapping)) or not isinstance(raw_children, Sequence):
            raise ValidationError("children must be a list", location=location, path=path)
        if not raw_children:
            raise ValidationError("group has no children", location=location, path=path)
        return tuple(
            self._parse_entry(child, f"{location}.children[{i}]")
            for i, child in enumerate(raw_children)
        )

    def _claim_path(self, raw: object, location: str) -> URLPath:
        if not isinstance(raw, str):
            raise ValidationError("path must be a string", location=location)
        if not raw:
            raise ValidationError("path must not be empty", location=location)

        path = normalize_path(raw)
        if path in self._seen:
            raise ValidationError(f"duplicate path {path}", location=location, path=path)
        self._seen.add(path)
        return path


def _group_title(path: URLPath | None) -> str:
    return title_from_path(path) if path is not None else ""


def build_navigation(raw: object) -> NavTree:
    """Build navigation tree from authored sidebar entries.

    Args:
        raw: List of sidebar entries as loaded from configuration

    Returns:
        Validated NavTree

    Raises:
        ValidationError: If the entries are malformed or a path repeats
    """
    return NavigationBuilder().build(raw)
