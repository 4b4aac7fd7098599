"""Configuration management for Docnav.

Supports TOML configuration format with auto-discovery. The sidebar is
either inlined under ``[navigation]`` or kept in a separate JSON file.
"""

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path

from docnav.core.tree import GroupPagePolicy

CONFIG_FILENAME = "docnav.toml"


@dataclass
class SiteConfig:
    """Site-wide settings passed through to the renderer."""

    title: str | None = None
    dest: Path = field(default_factory=lambda: Path("docs"))


@dataclass
class MarkdownConfig:
    """Markdown rendering flags."""

    line_numbers: bool = True


@dataclass
class ThemeConfig:
    """Theme toggles."""

    navbar: bool = True
    search: bool = True


@dataclass
class NavigationConfig:
    """Sidebar source and flattening policy."""

    sidebar: list[object] = field(default_factory=list)
    sidebar_file: Path | None = None
    group_pages: GroupPagePolicy = GroupPagePolicy.EXCLUDE


@dataclass
class ServerConfig:
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 8080


@dataclass
class LiveReloadConfig:
    """Live reload configuration."""

    enabled: bool = True


@dataclass
class Config:
    """Application configuration."""

    site: SiteConfig
    markdown: MarkdownConfig
    theme: ThemeConfig
    navigation: NavigationConfig
    server: ServerConfig
    live_reload: LiveReloadConfig
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> "Config":
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for docnav.toml in current directory and parents.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered_path = cls._discover_config()
        if discovered_path is None:
            return cls._default()

        return cls._load_from_file(discovered_path)

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Search for config file in current directory and parents."""
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                return None
            current = parent

    @classmethod
    def _default(cls) -> "Config":
        return cls(
            site=SiteConfig(),
            markdown=MarkdownConfig(),
            theme=ThemeConfig(),
            navigation=NavigationConfig(),
            server=ServerConfig(),
            live_reload=LiveReloadConfig(),
        )

    @classmethod
    def _load_from_file(cls, path: Path) -> "Config":
        """Load configuration from a specific file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            ValueError: If configuration is invalid
        """
        with path.open("rb") as f:
            data = tomllib.load(f)

        config_dir = path.parent

        return cls(
            site=cls._parse_site(data.get("site"), config_dir),
            markdown=cls._parse_markdown(data.get("markdown")),
            theme=cls._parse_theme(data.get("theme")),
            navigation=cls._parse_navigation(data.get("navigation"), config_dir),
            server=cls._parse_server(data.get("server")),
            live_reload=cls._parse_live_reload(data.get("live_reload")),
            config_path=path,
        )

    @classmethod
    def _parse_site(cls, data: object, config_dir: Path) -> SiteConfig:
        """Parse site configuration section.

        Args:
            data: Raw site section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            SiteConfig instance
        """
        if data is None:
            return SiteConfig(dest=config_dir / "docs")

        if not isinstance(data, dict):
            raise ValueError("site section must be a dictionary")

        title = data.get("title")
        if title is not None and not isinstance(title, str):
            raise ValueError("site.title must be a string")

        dest = data.get("dest", "docs")
        if not isinstance(dest, str):
            raise ValueError("site.dest must be a string")

        return SiteConfig(title=title, dest=config_dir / dest)

    @classmethod
    def _parse_markdown(cls, data: object) -> MarkdownConfig:
        if data is None:
            return MarkdownConfig()

        if not isinstance(data, dict):
            raise ValueError("markdown section must be a dictionary")

        line_numbers = data.get("line_numbers", True)
        if not isinstance(line_numbers, bool):
            raise ValueError("markdown.line_numbers must be a boolean")

        return MarkdownConfig(line_numbers=line_numbers)

    @classmethod
    def _parse_theme(cls, data: object) -> ThemeConfig:
        if data is None:
            return ThemeConfig()

        if not isinstance(data, dict):
            raise ValueError("theme section must be a dictionary")

        navbar = data.get("navbar", True)
        if not isinstance(navbar, bool):
            raise ValueError("theme.navbar must be a boolean")

        search = data.get("search", True)
        if not isinstance(search, bool):
            raise ValueError("theme.search must be a boolean")

        return ThemeConfig(navbar=navbar, search=search)

    @classmethod
    def _parse_navigation(cls, data: object, config_dir: Path) -> NavigationConfig:
        """Parse navigation configuration section.

        Entries of an inline sidebar are kept as authored; they are
        validated when the navigation tree is built.

        Args:
            data: Raw navigation section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            NavigationConfig instance
        """
        if data is None:
            return NavigationConfig()

        if not isinstance(data, dict):
            raise ValueError("navigation section must be a dictionary")

        sidebar = data.get("sidebar")
        if sidebar is not None and not isinstance(sidebar, list):
            raise ValueError("navigation.sidebar must be a list")

        sidebar_file = data.get("sidebar_file")
        if sidebar_file is not None and not isinstance(sidebar_file, str):
            raise ValueError("navigation.sidebar_file must be a string")

        if sidebar is not None and sidebar_file is not None:
            raise ValueError(
                "navigation.sidebar and navigation.sidebar_file are mutually exclusive",
            )

        group_pages = data.get("group_pages", GroupPagePolicy.EXCLUDE.value)
        try:
            policy = GroupPagePolicy(group_pages)
        except ValueError:
            choices = ", ".join(repr(p.value) for p in GroupPagePolicy)
            raise ValueError(f"navigation.group_pages must be one of {choices}") from None

        return NavigationConfig(
            sidebar=sidebar if sidebar is not None else [],
            sidebar_file=config_dir / sidebar_file if sidebar_file is not None else None,
            group_pages=policy,
        )

    @classmethod
    def _parse_server(cls, data: object) -> ServerConfig:
        if data is None:
            return ServerConfig()

        if not isinstance(data, dict):
            raise ValueError("server section must be a dictionary")

        host = data.get("host", "127.0.0.1")
        if not isinstance(host, str):
            raise ValueError("server.host must be a string")

        port = data.get("port", 8080)
        if not isinstance(port, int) or isinstance(port, bool):
            raise ValueError("server.port must be an integer")

        return ServerConfig(host=host, port=port)

    @classmethod
    def _parse_live_reload(cls, data: object) -> LiveReloadConfig:
        if data is None:
            return LiveReloadConfig()

        if not isinstance(data, dict):
            raise ValueError("live_reload section must be a dictionary")

        enabled = data.get("enabled", True)
        if not isinstance(enabled, bool):
            raise ValueError("live_reload.enabled must be a boolean")

        return LiveReloadConfig(enabled=enabled)

    def with_overrides(
        self,
        *,
        host: str | None = None,
        port: int | None = None,
        group_pages: GroupPagePolicy | None = None,
        live_reload_enabled: bool | None = None,
    ) -> "Config":
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified.

        Args:
            host: Override server.host
            port: Override server.port
            group_pages: Override navigation.group_pages
            live_reload_enabled: Override live_reload.enabled

        Returns:
            New Config instance with overrides applied
        """
        server = self.server
        if host is not None or port is not None:
            server = replace(
                self.server,
                host=host if host is not None else self.server.host,
                port=port if port is not None else self.server.port,
            )

        navigation = self.navigation
        if group_pages is not None:
            navigation = replace(self.navigation, group_pages=group_pages)

        live_reload = self.live_reload
        if live_reload_enabled is not None:
            live_reload = replace(self.live_reload, enabled=live_reload_enabled)

        return replace(
            self,
            server=server,
            navigation=navigation,
            live_reload=live_reload,
        )
