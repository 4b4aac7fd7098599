"""Config API endpoint."""

from aiohttp import web

from docnav.app_keys import loader_key


def create_config_routes() -> list[web.RouteDef]:
    return [web.get("/api/config", get_config)]


async def get_config(request: web.Request) -> web.Response:
    config = request.app[loader_key].config
    return web.json_response(
        {
            "title": config.site.title,
            "lineNumbers": config.markdown.line_numbers,
            "navbar": config.theme.navbar,
            "search": config.theme.search,
            "liveReloadEnabled": config.live_reload.enabled,
        },
    )
