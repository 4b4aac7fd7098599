"""Sidebar loading.

Reads the authored sidebar from configuration, builds the navigation
tree once and hands out the same immutable tree until it is reloaded.
"""

import json
import logging
from dataclasses import replace
from pathlib import Path

from docnav.config import Config, NavigationConfig
from docnav.core.navigation import build_navigation
from docnav.core.tree import NavTree

logger = logging.getLogger(__name__)


class SidebarLoader:
    """Loads and holds the navigation tree for one configuration.

    The loader owns the active Config. A reload swaps the config and the
    tree together, so readers never see one without the other.
    """

    def __init__(self, config: Config) -> None:
        """Initialize the loader.

        Args:
            config: Application configuration
        """
        self._config = config
        self._tree: NavTree | None = None

    @property
    def config(self) -> Config:
        """Configuration the current tree was built from."""
        return self._config

    def load(self) -> NavTree:
        """Return the navigation tree, building it on first use.

        Raises:
            FileNotFoundError: If the sidebar file doesn't exist
            ValueError: If the sidebar file is not valid JSON
            ValidationError: If the sidebar entries are invalid
        """
        if self._tree is None:
            self._tree = build_navigation(self.read_sidebar())
        return self._tree

    def reload(self) -> NavTree:
        """Rebuild the tree from the current sidebar source.

        The config file is re-read first when one is known. Server and
        live reload settings stay as the process started with them. The
        previous tree and config stay in place when the rebuild fails.
        """
        config = self._config
        if config.config_path is not None:
            fresh = Config.load(config.config_path)
            config = replace(
                fresh,
                server=self._config.server,
                live_reload=self._config.live_reload,
            )

        tree = build_navigation(_read_sidebar(config.navigation))
        self._config = config
        self._tree = tree
        return tree

    def read_sidebar(self) -> object:
        """Read raw sidebar entries from the configured source."""
        return _read_sidebar(self._config.navigation)

    def watched_files(self) -> set[Path]:
        """Files whose contents the current tree was built from."""
        files: set[Path] = set()
        if self._config.config_path is not None:
            files.add(self._config.config_path.resolve())
        if self._config.navigation.sidebar_file is not None:
            files.add(self._config.navigation.sidebar_file.resolve())
        return files


def _read_sidebar(config: NavigationConfig) -> object:
    sidebar_file = config.sidebar_file
    if sidebar_file is None:
        return config.sidebar

    if not sidebar_file.exists():
        raise FileNotFoundError(f"Sidebar file not found: {sidebar_file}")

    logger.debug(f"Reading sidebar from {sidebar_file}")
    with sidebar_file.open(encoding="utf-8") as f:
        return json.load(f)
