"""
BlockCount - named tally blocks on a single page

Create name blocks, select several and add one to each in a batch, delete
single blocks or clear the whole board. The board is stored locally and
restored on the next start.
"""

from .core import (
    NameBlock, BlockStore, Board, Modal, event,
    BlockCountError, SerializationError, PersistenceWriteError, ConfigError,
)
from .persistence import KeyValueStorage, MemoryStorage, FileStorage, create_storage
from .config import AppConfig, get_config, set_config, configure_logging

__version__ = "0.1.0"

__all__ = [
    'NameBlock',
    'BlockStore',
    'Board',
    'Modal',
    'event',
    'BlockCountError',
    'SerializationError',
    'PersistenceWriteError',
    'ConfigError',
    'KeyValueStorage',
    'MemoryStorage',
    'FileStorage',
    'create_storage',
    'AppConfig',
    'get_config',
    'set_config',
    'configure_logging',
]
