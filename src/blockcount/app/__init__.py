"""
Application Service Layer

The bridge between the web adapter and the board:
- dispatcher: request -> gesture binding and response rendering
- bus: change fan-out for live-update streams
- datastar: Datastar request helpers
"""

from .dispatcher import Dispatcher, MissingParameter
from .bus import ChangeBus

__all__ = [
    'Dispatcher',
    'MissingParameter',
    'ChangeBus',
]
