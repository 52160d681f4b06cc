"""
Gesture Dispatcher

Turns the @event methods of a Board into HTTP route handlers and converts
the resulting board state into responses:

1. Discovers @event methods on the board class
2. Resolves their arguments from the query string, then Datastar signals
3. Runs the gesture against the board
4. Answers with a Datastar SSE stream, a JSON snapshot or plain HTML
"""

import inspect
import logging
from typing import Any, AsyncGenerator, Callable, Dict, Optional, Union, get_args, get_origin

from datastar_py import ServerSentEventGenerator as SSE
from datastar_py.fastapi import DatastarResponse
from fastcore.xml import to_xml
from starlette.requests import Request
from starlette.responses import HTMLResponse, JSONResponse, PlainTextResponse

from ..core.board import Board
from ..core.events import EventInfo, discover_events
from ..ui.board import render_board
from .bus import ChangeBus
from .datastar import is_datastar_request, read_payload

logger = logging.getLogger(__name__)


class MissingParameter(ValueError):
    """Raised when a required event argument is absent from the request."""


def _convert(value: Any, annotation: Any) -> Any:
    """Coerce a raw request value to a parameter annotation."""
    if annotation is inspect.Parameter.empty or value is None:
        return value
    if get_origin(annotation) is Union:
        args = [a for a in get_args(annotation) if a is not type(None)]
        annotation = args[0] if len(args) == 1 else str
    if annotation is bool and isinstance(value, str):
        return value.lower() in ('true', '1', 'yes')
    if annotation in (int, float, str):
        return annotation(value)
    return value


class Dispatcher:
    """
    Base dispatcher for board gesture routing and execution.

    Framework adapters override ``_register_route``.
    """

    def __init__(self, board: Board, bus: Optional[ChangeBus] = None):
        self.board = board
        self.bus = bus or ChangeBus()
        self.routes: Dict[str, str] = {}
        board.subscribe(self.bus.publish)

    def _register_route(self, router, path: str, handler: Callable, event_info: EventInfo):
        """
        Register a route with the framework router.

        Base implementation - MUST be overridden by framework-specific dispatchers.
        """
        raise NotImplementedError("Subclasses must implement _register_route")

    def include_board(self, router, base_path: str = "") -> None:
        """Register one route per board gesture."""
        for event_name, event_info in discover_events(type(self.board)).items():
            event_path = event_info.path or f"/{event_info.namespace}/{event_name}"
            path = f"/{base_path.strip('/')}{event_path}" if base_path else event_path
            self.routes[path] = event_name
            handler = self._create_route_handler(event_name, event_info)
            self._register_route(router, path, handler, event_info)
        logger.debug(f"Registered {len(self.routes)} board route(s)")

    def _create_route_handler(self, event_name: str, event_info: EventInfo) -> Callable:
        async def handler(request: Request):
            """Route handler that executes a board gesture."""
            try:
                kwargs = await self.resolve_params(request, event_info)
            except (TypeError, ValueError) as e:
                logger.warning(f"Bad request for {event_name}: {e}")
                return PlainTextResponse(f"Bad request for {event_name}: {e}", status_code=400)

            try:
                accepted = self.call_event(event_name, **kwargs)
            except Exception:
                logger.exception(f"Error executing {event_name}")
                return PlainTextResponse(f"Error executing {event_name}", status_code=500)

            return await self.command_to_response(request, event_name, accepted)

        handler.__name__ = event_name
        handler._event_info = event_info
        return handler

    async def resolve_params(self, request: Request, event_info: EventInfo) -> Dict[str, Any]:
        """
        Resolve event arguments with priority:
        1. Query parameters
        2. Datastar signals
        3. Parameter default
        """
        signals = await read_payload(request)
        kwargs = {}
        for param in event_info.parameters:
            if param.name in request.query_params:
                raw = request.query_params[param.name]
            elif param.name in signals:
                raw = signals[param.name]
            elif param.default is not inspect.Parameter.empty:
                continue
            else:
                raise MissingParameter(f"missing parameter {param.name!r}")
            kwargs[param.name] = _convert(raw, param.annotation)
        return kwargs

    def call_event(self, event_name: str, **kwargs) -> bool:
        """Run a gesture on the board and report whether it was accepted."""
        accepted = getattr(self.board, event_name)(**kwargs)
        logger.debug(f"{event_name}({kwargs}) -> {'accepted' if accepted else 'ignored'}")
        return accepted

    def render(self) -> str:
        return to_xml(render_board(self.board))

    async def command_to_response(self, request: Request, event_name: str, accepted: bool) -> Any:
        """
        Convert a gesture result to an HTTP response.

        - Datastar requests get signals followed by the re-rendered board
        - JSON clients get a snapshot of the board
        - Anything else gets the board HTML
        """
        if await is_datastar_request(request):
            return DatastarResponse(self._create_sse_stream())

        if 'application/json' in request.headers.get('accept', ''):
            return JSONResponse({
                'accepted': accepted,
                'event': event_name,
                'board': self.board.snapshot(),
            })

        return HTMLResponse(self.render())

    async def _create_sse_stream(self) -> AsyncGenerator[str, None]:
        yield SSE.merge_signals(self.board.signals)
        yield SSE.merge_fragments(self.render())

    async def live(self, request: Request):
        """Stream a fresh board fragment after every change."""
        async def stream() -> AsyncGenerator[str, None]:
            queue = self.bus.subscribe()
            try:
                yield SSE.merge_fragments(self.render())
                while True:
                    await queue.get()
                    while not queue.empty():
                        queue.get_nowait()
                    yield SSE.merge_fragments(self.render())
            finally:
                self.bus.unsubscribe(queue)

        return DatastarResponse(stream())
