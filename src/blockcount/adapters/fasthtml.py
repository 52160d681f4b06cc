"""
FastHTML Web Adapter

Provides configure_app to mount a Board on a FastHTML app, and create_app to
build the whole application from an AppConfig.
"""

import logging
from typing import Callable, Optional, Tuple

from fasthtml.common import FastHTML, Script, fast_app
from monsterui.all import Theme
from starlette.requests import Request

from ..app.bus import ChangeBus
from ..app.dispatcher import Dispatcher
from ..config import AppConfig, get_config
from ..core.board import Board
from ..core.events import EventInfo
from ..core.store import BlockStore
from ..persistence import create_storage
from ..ui.board import LIVE_PATH, render_page

logger = logging.getLogger(__name__)

datastar_script = Script(src="https://cdn.jsdelivr.net/gh/starfederation/datastar@v1.0.0-beta.11/bundles/datastar.js", type="module")


class FastHTMLDispatcher(Dispatcher):
    """FastHTML-specific dispatcher that only overrides what's needed."""

    def _register_route(self, router, path: str, handler: Callable, event_info: EventInfo):
        """Register route using FastHTML's decorator pattern."""
        router(path, methods=[event_info.method])(handler)


def configure_app(app: FastHTML, board: Board, bus: Optional[ChangeBus] = None) -> FastHTMLDispatcher:
    """
    Mount a board on a FastHTML app.

    ```python
    app, rt = fast_app()
    board = Board(BlockStore(FileStorage("~/.blockcount")))
    board.store.load()
    configure_app(app, board)
    ```

    Registers the page at ``/``, the live-update stream and one POST route
    per board gesture.

    Returns:
        The dispatcher serving the board
    """
    dispatcher = FastHTMLDispatcher(board, bus)

    def index(request: Request):
        return render_page(dispatcher.board)

    async def live(request: Request):
        return await dispatcher.live(request)

    app.route("/", methods=["GET"])(index)
    app.route(LIVE_PATH, methods=["GET"])(live)
    dispatcher.include_board(app.route)
    return dispatcher


def create_app(config: Optional[AppConfig] = None) -> Tuple[FastHTML, Board]:
    """Build storage, store, board and FastHTML app from configuration."""
    config = config or get_config()

    storage = create_storage(config.storage)
    store = BlockStore(storage, key=config.storage.key)
    store.load()
    board = Board(store, title=config.web.title)

    app, _ = fast_app(
        pico=False,
        live=False,
        debug=config.debug,
        secret_key=config.web.secret_key,
        hdrs=(Theme.blue.headers(), datastar_script),
    )
    configure_app(app, board)
    logger.info(f"BlockCount ready with {len(store)} block(s) using {config.storage.backend} storage")
    return app, board
