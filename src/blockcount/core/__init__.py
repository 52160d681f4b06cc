"""
BlockCount Core Module

Domain layer: the name block entity, the block store and the board
interaction state. Nothing here depends on the web layer.
"""

from .entity import NameBlock, new_block_id
from .events import event, EventInfo, EventMethodDescriptor, discover_events
from .exceptions import BlockCountError, SerializationError, PersistenceWriteError, ConfigError
from .store import BlockStore, DEFAULT_STORAGE_KEY
from .board import Board, Modal

__all__ = [
    "NameBlock",
    "new_block_id",
    "event",
    "EventInfo",
    "EventMethodDescriptor",
    "discover_events",
    "BlockCountError",
    "SerializationError",
    "PersistenceWriteError",
    "ConfigError",
    "BlockStore",
    "DEFAULT_STORAGE_KEY",
    "Board",
    "Modal",
]
