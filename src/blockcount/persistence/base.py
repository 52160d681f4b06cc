"""
BlockCount Persistence Layer - Base Classes

This module provides the abstract interface for key-value storage backends.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStorage(ABC):
    """
    Abstract base class for storage backends.

    A backend holds opaque byte values under string keys. The board keeps its
    whole collection in a single slot, so backends only need to read and
    write whole values.
    """

    @abstractmethod
    def read_bytes(self, key: str) -> Optional[bytes]:
        """
        Read the value stored under ``key``.

        Args:
            key: Storage slot name

        Returns:
            The stored bytes, or None if the slot was never written
        """
        pass

    @abstractmethod
    def write_bytes(self, key: str, data: bytes) -> None:
        """
        Replace the value stored under ``key``.

        Args:
            key: Storage slot name
            data: Bytes to store

        Raises:
            PersistenceWriteError: if the value could not be written
        """
        pass

    def exists(self, key: str) -> bool:
        """Check if a slot has been written."""
        return self.read_bytes(key) is not None
