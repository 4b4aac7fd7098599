"""Tests for page context API endpoint."""

from pathlib import Path
from typing import Any

import pytest
from aiohttp import web
from docnav.config import Config
from docnav.core.tree import GroupPagePolicy
from docnav.server import create_app, live_reload_key


@pytest.fixture
def app(test_config: Config) -> web.Application:
    return create_app(test_config)


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "docnav.toml"
    path.write_text(
        '[site]\ntitle = "Rust Note"\n\n'
        "[theme]\nsearch = true\n\n"
        '[navigation]\ngroup_pages = "exclude"\n\n'
        "[[navigation.sidebar]]\n"
        'title = "集合"\npath = "/collections/"\nchildren = ["/collections/vector"]\n',
        encoding="utf-8",
    )
    return path


class TestGetContext:
    """Tests for GET /api/context/{path}."""

    @pytest.mark.asyncio
    async def test__nested_page__returns_context(
        self,
        aiohttp_client: Any,
        app: web.Application,
    ) -> None:
        """Return breadcrumbs, section and neighbours for a page."""
        client = await aiohttp_client(app)
        response = await client.get("/api/context/collections/vector")

        assert response.status == 200
        data = await response.json()
        assert data == {
            "path": "/collections/vector",
            "found": True,
            "title": "Vector",
            "section": "通用编程概念",
            "breadcrumbs": [
                {"title": "通用编程概念", "path": None},
                {"title": "集合", "path": "/collections/"},
            ],
            "prev": {"title": "Variable", "path": "/variable"},
            "next": {"title": "String", "path": "/collections/string"},
        }

    @pytest.mark.asyncio
    async def test__unknown_page__falls_back_to_no_section(
        self,
        aiohttp_client: Any,
        app: web.Application,
    ) -> None:
        """Unknown paths render without an active section."""
        client = await aiohttp_client(app)
        response = await client.get("/api/context/nonexistent")

        assert response.status == 200
        data = await response.json()
        assert data["found"] is False
        assert data["section"] is None
        assert data["breadcrumbs"] == []
        assert data["prev"] is None
        assert data["next"] is None

    @pytest.mark.asyncio
    async def test__group_page_excluded__has_no_neighbours(
        self,
        aiohttp_client: Any,
        app: web.Application,
    ) -> None:
        """Group pages have no pager under the exclude policy."""
        client = await aiohttp_client(app)
        response = await client.get("/api/context/collections/")

        data = await response.json()
        assert data["found"] is True
        assert data["title"] == "集合"
        assert data["prev"] is None
        assert data["next"] is None

    @pytest.mark.asyncio
    async def test__group_page_included__has_neighbours(
        self,
        aiohttp_client: Any,
        test_config: Config,
    ) -> None:
        """Group pages are paged under the include policy."""
        config = test_config.with_overrides(group_pages=GroupPagePolicy.INCLUDE)
        client = await aiohttp_client(create_app(config))

        response = await client.get("/api/context/collections/")

        data = await response.json()
        assert data["prev"] == {"title": "Variable", "path": "/variable"}
        assert data["next"] == {"title": "Vector", "path": "/collections/vector"}

    @pytest.mark.asyncio
    async def test__group_pages_after_reload__follows_config_file(
        self,
        aiohttp_client: Any,
        config_file: Path,
    ) -> None:
        """Pager uses the group page policy of the reloaded config."""
        app = create_app(Config.load(config_file))
        config_file.write_text(
            config_file.read_text(encoding="utf-8").replace("exclude", "include"),
            encoding="utf-8",
        )

        assert await app[live_reload_key].rebuild() is True

        client = await aiohttp_client(app)
        response = await client.get("/api/context/collections/")
        data = await response.json()
        assert data["next"] == {"title": "Vector", "path": "/collections/vector"}


class TestGetConfig:
    """Tests for GET /api/config."""

    @pytest.mark.asyncio
    async def test__returns_site_flags(
        self,
        aiohttp_client: Any,
        app: web.Application,
    ) -> None:
        """Return site flags for the renderer."""
        client = await aiohttp_client(app)
        response = await client.get("/api/config")

        assert response.status == 200
        data = await response.json()
        assert data == {
            "title": "Rust Note",
            "lineNumbers": True,
            "navbar": False,
            "search": False,
            "liveReloadEnabled": False,
        }

    @pytest.mark.asyncio
    async def test__after_reload__returns_new_flags(
        self,
        aiohttp_client: Any,
        config_file: Path,
    ) -> None:
        """Flags follow the config file once live reload has rebuilt."""
        app = create_app(Config.load(config_file))
        config_file.write_text(
            config_file.read_text(encoding="utf-8")
            .replace("search = true", "search = false")
            .replace('title = "Rust Note"', 'title = "Rust 笔记"'),
            encoding="utf-8",
        )

        assert await app[live_reload_key].rebuild() is True

        client = await aiohttp_client(app)
        response = await client.get("/api/config")
        data = await response.json()
        assert data["search"] is False
        assert data["title"] == "Rust 笔记"
