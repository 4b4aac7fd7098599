"""Application keys for type-safe app configuration access."""

from aiohttp import web

from docnav.loader import SidebarLoader

loader_key = web.AppKey("loader", SidebarLoader)
