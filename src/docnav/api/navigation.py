"""Navigation API endpoints.

Provides full navigation tree and subtree endpoints.
"""

from aiohttp import web

from docnav.app_keys import loader_key
from docnav.core.tree import NotFoundError


def create_navigation_routes() -> list[web.RouteDef]:
    return [
        web.get("/api/navigation", get_navigation),
        web.get("/api/navigation/{path:.*}", get_navigation_subtree),
    ]


async def get_navigation(request: web.Request) -> web.Response:
    tree = request.app[loader_key].load()
    return web.json_response(tree.to_dict())


async def get_navigation_subtree(request: web.Request) -> web.Response:
    path = request.match_info["path"]
    tree = request.app[loader_key].load()

    try:
        node = tree.lookup(path)
    except NotFoundError:
        return web.json_response(
            {"error": "Section not found", "path": path},
            status=404,
        )

    return web.json_response({"items": [child.to_dict() for child in node.children]})
