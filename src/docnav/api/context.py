"""Page context API endpoint.

Returns what a page needs around its content: breadcrumbs, the active
sidebar section and previous/next links. Unknown paths are not an error
here; the page is rendered without an active section.
"""

from aiohttp import web

from docnav.app_keys import loader_key
from docnav.core.tree import NotFoundError, Pager
from docnav.core.types import normalize_path


def create_context_routes() -> list[web.RouteDef]:
    return [web.get("/api/context/{path:.*}", get_context)]


async def get_context(request: web.Request) -> web.Response:
    path = normalize_path(request.match_info["path"])
    loader = request.app[loader_key]
    tree = loader.load()
    policy = loader.config.navigation.group_pages

    node = tree.get(path)
    if node is None:
        return web.json_response(
            {
                "path": path,
                "found": False,
                "title": None,
                "section": None,
                "breadcrumbs": [],
                **Pager().to_dict(),
            },
        )

    try:
        pager = tree.pager(path, policy)
    except NotFoundError:
        # Group pages are absent from the sequence under the exclude policy
        pager = Pager()

    section = tree.active_section(path)
    return web.json_response(
        {
            "path": path,
            "found": True,
            "title": node.title,
            "section": section.title if section is not None else None,
            "breadcrumbs": [crumb.to_dict() for crumb in tree.breadcrumbs(path)],
            **pager.to_dict(),
        },
    )
