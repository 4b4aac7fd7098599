"""Shared test fixtures."""

import copy
from pathlib import Path

import pytest
from docnav.config import (
    Config,
    LiveReloadConfig,
    MarkdownConfig,
    NavigationConfig,
    ServerConfig,
    SiteConfig,
    ThemeConfig,
)

SIDEBAR: list[object] = [
    {"title": "Rust Note", "path": "/"},
    {
        "title": "项目管理",
        "children": ["/cargo", "/package-and-crate", "/module"],
    },
    {
        "title": "通用编程概念",
        "children": [
            "/variable",
            {
                "title": "集合",
                "path": "/collections/",
                "children": ["/collections/vector", "/collections/string"],
            },
            "/function",
        ],
    },
    {
        "title": "并发编程",
        "children": ["/concurrent/intro", "/concurrent/share-state"],
    },
    {
        "title": "模式匹配",
        "children": ["/pattern-matching/intro", "/pattern-matching/syntax"],
    },
    {
        "title": "编程范式",
        "children": [
            {
                "title": "函数式编程特性",
                "path": "/programming-paradigm/functional-language-features/",
                "children": [
                    "/programming-paradigm/functional-language-features/closure",
                ],
            },
        ],
    },
]

LEAF_PATHS = [
    "/",
    "/cargo",
    "/package-and-crate",
    "/module",
    "/variable",
    "/collections/vector",
    "/collections/string",
    "/function",
    "/concurrent/intro",
    "/concurrent/share-state",
    "/pattern-matching/intro",
    "/pattern-matching/syntax",
    "/programming-paradigm/functional-language-features/closure",
]


@pytest.fixture
def sidebar() -> list[object]:
    """Authored sidebar modelled on a Rust notes site."""
    return copy.deepcopy(SIDEBAR)


@pytest.fixture
def test_config(tmp_path: Path, sidebar: list[object]) -> Config:
    """Create a test configuration with an inline sidebar.

    Live reload is disabled so no file watcher is started.
    """
    return Config(
        site=SiteConfig(title="Rust Note", dest=tmp_path / "docs"),
        markdown=MarkdownConfig(),
        theme=ThemeConfig(navbar=False, search=False),
        navigation=NavigationConfig(sidebar=sidebar),
        server=ServerConfig(),
        live_reload=LiveReloadConfig(enabled=False),
    )


@pytest.fixture
def leaf_paths() -> list[str]:
    """Leaf routes of the sidebar fixture in document order."""
    return list(LEAF_PATHS)
