"""CLI interface for Docnav.

Command-line tool for validating, inspecting and serving sidebar navigation.
"""

import logging
import sys
from pathlib import Path

import click

from docnav.config import Config
from docnav.core.nodes import NavNode
from docnav.core.tree import GroupPagePolicy, NavTree
from docnav.loader import SidebarLoader

config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover docnav.toml)",
)


@click.group()
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable debug logging",
)
def cli(verbose: bool) -> None:
    """Docnav - sidebar navigation for documentation sites."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@config_option
def check(config_path: Path | None) -> None:
    """Validate the sidebar configuration."""
    _, tree = _load(config_path)

    click.echo(
        click.style(
            f"Navigation OK: {len(tree.pages())} pages in {len(tree.roots)} sections",
            fg="green",
        ),
    )


@cli.command()
@config_option
def tree(config_path: Path | None) -> None:
    """Print the navigation tree."""
    _, nav_tree = _load(config_path)

    for node in nav_tree.roots:
        _echo_node(node, 0)


@cli.command()
@config_option
@click.option(
    "--include-group-pages/--exclude-group-pages",
    default=None,
    help="List group pages ahead of their children (overrides config)",
)
def flatten(config_path: Path | None, include_group_pages: bool | None) -> None:
    """Print pages in reading order as DEPTH<TAB>PATH lines."""
    config, nav_tree = _load(config_path)

    policy = config.navigation.group_pages
    if include_group_pages is not None:
        policy = GroupPagePolicy.INCLUDE if include_group_pages else GroupPagePolicy.EXCLUDE

    for entry in nav_tree.flatten(policy):
        click.echo(f"{entry.depth}\t{entry.path}")


@cli.command()
@config_option
@click.option(
    "--host",
    default=None,
    help="Host to bind to (overrides config)",
)
@click.option(
    "--port",
    "-p",
    type=int,
    default=None,
    help="Port to bind to (overrides config)",
)
@click.option(
    "--live-reload/--no-live-reload",
    default=None,
    help="Enable/disable live reload (overrides config, default: enabled)",
)
def serve(
    config_path: Path | None,
    host: str | None,
    port: int | None,
    live_reload: bool | None,
) -> None:
    """Start the navigation server."""
    from docnav.server import run_server

    config, nav_tree = _load(config_path)
    config = config.with_overrides(host=host, port=port, live_reload_enabled=live_reload)

    click.echo(f"Starting server on {config.server.host}:{config.server.port}")
    click.echo(f"Navigation: {len(nav_tree.pages())} pages")
    if config.live_reload.enabled:
        click.echo("Live reload: enabled")
    else:
        click.echo("Live reload: disabled")

    run_server(config)


def _load(config_path: Path | None) -> tuple[Config, NavTree]:
    """Load configuration and build the navigation tree or exit with error.

    Raises:
        SystemExit: If the configuration or sidebar is invalid
    """
    try:
        config = Config.load(config_path)
        nav_tree = SidebarLoader(config).load()
    except (OSError, ValueError) as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)
    return config, nav_tree


def _echo_node(node: NavNode, depth: int) -> None:
    label = node.title or "(untitled)"
    if node.path is not None:
        label = f"{label} ({node.path})"
    click.echo(f"{'  ' * depth}{label}")
    for child in node.children:
        _echo_node(child, depth + 1)
