"""
BlockCount Persistence Layer - Memory Backend

In-memory storage implementation for development and testing.
"""

import logging
from typing import Dict, Optional

from .base import KeyValueStorage

logger = logging.getLogger(__name__)


class MemoryStorage(KeyValueStorage):
    """
    In-memory storage implementation.

    Data is lost when the application restarts.
    """

    def __init__(self, initial: Optional[Dict[str, bytes]] = None):
        self._data: Dict[str, bytes] = dict(initial or {})

    def read_bytes(self, key: str) -> Optional[bytes]:
        return self._data.get(key)

    def write_bytes(self, key: str, data: bytes) -> None:
        self._data[key] = bytes(data)
        logger.debug(f"Stored {len(data)} bytes under {key!r}")

    def clear(self) -> None:
        """Drop every slot."""
        self._data.clear()


_shared: Optional[MemoryStorage] = None


def get_memory_storage() -> MemoryStorage:
    """Get the process-wide shared memory storage instance."""
    global _shared
    if _shared is None:
        _shared = MemoryStorage()
    return _shared
