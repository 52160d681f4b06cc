"""
BlockCount Persistence Module

Storage backends for the block collection and the codec that turns the
collection into bytes.
"""

from typing import TYPE_CHECKING

from .base import KeyValueStorage
from .memory import MemoryStorage, get_memory_storage
from .file import FileStorage
from .codec import encode_blocks, decode_blocks

if TYPE_CHECKING:
    from ..config import StorageConfig

BACKENDS = {
    "memory": lambda config: get_memory_storage(),
    "file": lambda config: FileStorage(config.directory),
}


def create_storage(config: 'StorageConfig') -> KeyValueStorage:
    """Build the storage backend named in the configuration."""
    try:
        factory = BACKENDS[config.backend]
    except KeyError:
        raise ValueError(f"Unknown storage backend: {config.backend!r}") from None
    return factory(config)


__all__ = [
    "KeyValueStorage",
    "MemoryStorage",
    "get_memory_storage",
    "FileStorage",
    "encode_blocks",
    "decode_blocks",
    "BACKENDS",
    "create_storage",
]
