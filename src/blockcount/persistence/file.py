"""
BlockCount Persistence Layer - File Backend

Stores each slot as ``<key>.json`` inside a directory. Writes go to a
temporary file in the same directory first and are moved into place with
``os.replace`` so a crash mid-write never leaves a truncated slot.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from ..core.exceptions import PersistenceWriteError
from .base import KeyValueStorage

logger = logging.getLogger(__name__)


class FileStorage(KeyValueStorage):
    """Directory-backed storage, one file per slot."""

    suffix = ".json"

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory).expanduser()

    def path_for(self, key: str) -> Path:
        if not key or os.sep in key or (os.altsep and os.altsep in key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}{self.suffix}"

    def read_bytes(self, key: str) -> Optional[bytes]:
        path = self.path_for(key)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.error(f"Error reading storage slot {path}: {e}")
            return None

    def write_bytes(self, key: str, data: bytes) -> None:
        path = self.path_for(key)
        tmp_name = None
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{key}.", suffix=".tmp", dir=self.directory)
            with os.fdopen(fd, "wb") as tmp:
                tmp.write(data)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_name, path)
            tmp_name = None
        except OSError as e:
            raise PersistenceWriteError(f"Could not write storage slot {path}: {e}") from e
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
