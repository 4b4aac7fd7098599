"""Core type definitions."""

from typing import NewType

# URL path for routing (e.g., "/cargo", "/smart-pointer/box")
# Distinct from filesystem Path to catch type mismatches
URLPath = NewType("URLPath", str)


def normalize_path(path: str) -> URLPath:
    """Normalize path to have leading slash."""
    return URLPath(path if path.startswith("/") else f"/{path}")
