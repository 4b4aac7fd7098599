"""aiohttp server for Docnav.

Application factory and route registration. The navigation tree is built
when the application is created, so an invalid sidebar fails start-up.
"""

import logging

from aiohttp import web

from docnav.api.config import create_config_routes
from docnav.api.context import create_context_routes
from docnav.api.navigation import create_navigation_routes
from docnav.app_keys import loader_key
from docnav.config import Config
from docnav.live import LiveReloadManager
from docnav.live.reload import create_live_reload_routes
from docnav.loader import SidebarLoader

logger = logging.getLogger(__name__)

live_reload_key = web.AppKey("live_reload_manager", LiveReloadManager)


def create_app(config: Config) -> web.Application:
    """Create aiohttp application.

    Args:
        config: Application configuration

    Returns:
        Configured aiohttp application

    Raises:
        ValidationError: If the sidebar is invalid
    """
    app = web.Application()

    loader = SidebarLoader(config)
    tree = loader.load()
    logger.info(f"Loaded navigation: {len(tree.roots)} sections, {len(tree.pages())} pages")

    app[loader_key] = loader

    app.router.add_routes(create_navigation_routes())
    app.router.add_routes(create_context_routes())
    app.router.add_routes(create_config_routes())

    if config.live_reload.enabled:
        manager = LiveReloadManager(loader)
        app[live_reload_key] = manager
        app.router.add_routes(create_live_reload_routes(manager))
        app.on_startup.append(_start_live_reload)
        app.on_cleanup.append(_stop_live_reload)

    return app


async def _start_live_reload(app: web.Application) -> None:
    """Start live reload on application startup."""
    await app[live_reload_key].start()


async def _stop_live_reload(app: web.Application) -> None:
    """Stop live reload on application cleanup."""
    await app[live_reload_key].stop()


def run_server(config: Config) -> None:
    """Run the server.

    Args:
        config: Application configuration
    """
    app = create_app(config)
    web.run_app(app, host=config.server.host, port=config.server.port)
