"""WebSocket-based live reload for development mode.

Watches the configuration and sidebar files. On change the navigation
tree is rebuilt wholesale and connected clients are told to reload.
"""

import asyncio
import json
import logging
import weakref
from pathlib import Path

from aiohttp import WSMsgType, web
from watchfiles import Change, awatch

from docnav.loader import SidebarLoader

logger = logging.getLogger(__name__)


class LiveReloadManager:
    """Manages WebSocket connections and file watching for live reload.

    Coordinates between file system watcher and connected WebSocket clients
    to provide automatic sidebar refresh on authoring changes.
    """

    def __init__(self, loader: SidebarLoader) -> None:
        """Initialize the live reload manager.

        Args:
            loader: SidebarLoader holding the tree to rebuild
        """
        self._loader = loader
        self._watch_files = loader.watched_files()
        self._connections: weakref.WeakSet[web.WebSocketResponse] = weakref.WeakSet()
        self._watch_task: asyncio.Task[None] | None = None
        self._retarget = asyncio.Event()

    @property
    def watch_files(self) -> frozenset[Path]:
        """Resolved paths of the files currently watched."""
        return frozenset(self._watch_files)

    async def start(self) -> None:
        """Start the file watcher."""
        if self._watch_task is not None or not self._watch_files:
            return
        self._watch_task = asyncio.create_task(self._watch())
        self._watch_task.add_done_callback(_report_watch_failure)

    async def stop(self) -> None:
        """Stop the file watcher and close all connections."""
        if self._watch_task is not None:
            self._watch_task.cancel()
            try:
                await self._watch_task
            except asyncio.CancelledError:
                pass
            except Exception:
                # Already logged by _report_watch_failure
                pass
            self._watch_task = None

        for ws in list(self._connections):
            await ws.close()

    async def handle_websocket(self, request: web.Request) -> web.WebSocketResponse:
        """Handle WebSocket connection for live reload.

        Args:
            request: aiohttp request

        Returns:
            WebSocket response
        """
        ws = web.WebSocketResponse()
        await ws.prepare(request)

        self._connections.add(ws)

        try:
            async for msg in ws:
                if msg.type == WSMsgType.ERROR:
                    break
        finally:
            self._connections.discard(ws)

        return ws

    async def _watch(self) -> None:
        """Watch parent directories so replaced files are still noticed.

        The watcher restarts over new directories when a rebuild moves
        the sidebar file elsewhere.
        """
        while True:
            self._retarget.clear()
            watch_dirs = _parent_dirs(self._watch_files)
            logger.debug(f"Watching {', '.join(sorted(str(d) for d in watch_dirs))}")
            async for changes in awatch(*watch_dirs, stop_event=self._retarget):
                if any(self.is_relevant(change, path) for change, path in changes):
                    await self.rebuild()
            if not self._retarget.is_set():
                return

    def is_relevant(self, change: Change, path_str: str) -> bool:
        """Check if a file change concerns one of the watched files."""
        if change == Change.deleted:
            return False
        return Path(path_str).resolve() in self._watch_files

    async def rebuild(self) -> bool:
        """Rebuild the navigation tree and notify clients.

        An invalid sidebar is logged and the previous tree is kept.

        Returns:
            True if the tree was rebuilt
        """
        try:
            tree = self._loader.reload()
        except (OSError, ValueError) as e:
            logger.error(f"Navigation rebuild failed, keeping previous tree: {e}")
            return False

        logger.info(f"Navigation rebuilt: {len(tree.pages())} pages")
        self._update_watch_files()
        await self._broadcast_reload()
        return True

    def _update_watch_files(self) -> None:
        watch_files = self._loader.watched_files()
        if watch_files == self._watch_files:
            return

        old_dirs = _parent_dirs(self._watch_files)
        self._watch_files = watch_files
        logger.info(f"Watched files changed: {', '.join(sorted(map(str, watch_files)))}")
        if _parent_dirs(watch_files) != old_dirs:
            self._retarget.set()

    async def _broadcast_reload(self) -> None:
        """Broadcast reload event to all connected clients."""
        if not self._connections:
            return

        message = json.dumps({"type": "reload"})

        for ws in list(self._connections):
            if ws.closed:
                continue
            try:
                await ws.send_str(message)
            except ConnectionResetError:
                # Client disconnected mid-send, will be cleaned up by WeakSet
                pass


def _parent_dirs(files: set[Path]) -> set[Path]:
    return {path.parent for path in files}


def _report_watch_failure(task: asyncio.Task[None]) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error(f"Live reload watcher stopped: {exc!r}")


def create_live_reload_routes(manager: LiveReloadManager) -> list[web.RouteDef]:
    """Create routes for live reload WebSocket.

    Args:
        manager: LiveReloadManager instance

    Returns:
        List of route definitions
    """
    return [web.get("/ws/live-reload", manager.handle_websocket)]
