"""Live reload support for development mode."""

from docnav.live.reload import LiveReloadManager

__all__ = ["LiveReloadManager"]
