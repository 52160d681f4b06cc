import logging
from typing import Any, Dict

from starlette.requests import Request
from datastar_py.fastapi import read_signals

logger = logging.getLogger(__name__)


async def is_datastar_request(request: Request) -> bool:
    """Check if the request is a Datastar request."""
    if "Datastar-Request" in request.headers:
        return True
    return False


async def read_payload(request: Request) -> Dict[str, Any]:
    """Return the Datastar signals sent with a request, or an empty dict."""
    if not await is_datastar_request(request):
        return {}
    try:
        signals = await read_signals(request)
    except ValueError as e:
        logger.debug(f"Could not read Datastar signals: {e}")
        return {}
    return signals if isinstance(signals, dict) else {}
