"""
Block Store

Owns the ordered block collection, the selection set and the pending-deletion
reference, and writes the collection through to storage after every
mutation. Selection and pending deletion are session state and are never
persisted.
"""

import logging
from typing import Callable, FrozenSet, List, Optional, Set

from ..persistence.base import KeyValueStorage
from ..persistence.codec import decode_blocks, encode_blocks
from .entity import NameBlock, new_block_id
from .exceptions import PersistenceWriteError, SerializationError

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "NameBlocksStorage"

Listener = Callable[[str], None]


class BlockStore:
    """
    Name block collection with write-through persistence.

    Listeners registered with ``subscribe`` are called with a short change
    name (``"add"``, ``"select"``, ``"increment"``, ...) after each state
    change.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        key: str = DEFAULT_STORAGE_KEY,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        self.storage = storage
        self.key = key
        self._id_factory = id_factory or new_block_id
        self._blocks: List[NameBlock] = []
        self._selection: Set[str] = set()
        self._pending_deletion: Optional[str] = None
        self._listeners: List[Listener] = []

    # ------------------------------------------------------------------ #
    # Read-only views

    @property
    def blocks(self) -> List[NameBlock]:
        return list(self._blocks)

    @property
    def selection(self) -> FrozenSet[str]:
        return frozenset(self._selection)

    @property
    def pending_deletion(self) -> Optional[str]:
        return self._pending_deletion

    def get(self, block_id: str) -> Optional[NameBlock]:
        for block in self._blocks:
            if block.id == block_id:
                return block
        return None

    def is_selected(self, block_id: str) -> bool:
        return block_id in self._selection

    def __len__(self) -> int:
        return len(self._blocks)

    # ------------------------------------------------------------------ #
    # Observers

    def subscribe(self, listener: Listener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, change: str) -> None:
        for listener in list(self._listeners):
            try:
                listener(change)
            except Exception:
                logger.exception(f"Store listener {listener!r} failed on {change!r}")

    # ------------------------------------------------------------------ #
    # Mutations

    def add(self, name: Optional[str]) -> Optional[NameBlock]:
        """Append a new block with count 0. Empty names are rejected silently."""
        if not name:
            logger.debug("Rejected block with empty name")
            return None

        block = NameBlock(id=self._fresh_id(), name=name, count=0)
        self._blocks.append(block)
        logger.info(f"Added block {block.name!r} ({block.id})")
        self.save()
        self._notify("add")
        return block

    def toggle_select(self, block_id: str) -> bool:
        """Flip selection of a block. Returns whether it is selected afterwards."""
        if block_id in self._selection:
            self._selection.discard(block_id)
        elif self.get(block_id) is not None:
            self._selection.add(block_id)
        else:
            logger.debug(f"Ignored selection of unknown block {block_id}")
            return False
        self._notify("select")
        return block_id in self._selection

    def confirm_increment(self) -> int:
        """Add one to every selected block, then clear the selection."""
        incremented = 0
        for index, block in enumerate(self._blocks):
            if block.id in self._selection:
                self._blocks[index] = block.incremented()
                incremented += 1
        logger.info(f"Incremented {incremented} of {len(self._selection)} selected block(s)")
        self.save()
        self._selection.clear()
        self._notify("increment")
        return incremented

    def request_delete(self, block_id: str) -> None:
        self._pending_deletion = block_id
        self._notify("request_delete")

    def confirm_delete(self) -> bool:
        """Remove the block pending deletion. Missing blocks are a no-op."""
        block_id = self._pending_deletion
        if block_id is None:
            return False

        before = len(self._blocks)
        self._blocks = [block for block in self._blocks if block.id != block_id]
        removed = len(self._blocks) < before
        self._selection.discard(block_id)
        if removed:
            logger.info(f"Deleted block {block_id}")
        self.save()
        self._pending_deletion = None
        self._notify("delete")
        return removed

    def cancel_delete(self) -> None:
        self._pending_deletion = None
        self._notify("cancel_delete")

    def clear_all(self) -> None:
        self._blocks.clear()
        self._selection.clear()
        self._pending_deletion = None
        logger.info("Cleared all blocks")
        self.save()
        self._notify("clear")

    # ------------------------------------------------------------------ #
    # Persistence

    def load(self) -> List[NameBlock]:
        """Replace the collection with the persisted one. Never raises on bad data."""
        data = self.storage.read_bytes(self.key)
        blocks: List[NameBlock] = []
        if data is not None:
            try:
                blocks = decode_blocks(data)
            except SerializationError as e:
                logger.error(f"Error loading blocks from {self.key!r}: {e}")
                blocks = []

        self._blocks = blocks
        self._selection.clear()
        self._pending_deletion = None
        logger.info(f"Loaded {len(blocks)} block(s) from {self.key!r}")
        self._notify("load")
        return self.blocks

    def save(self) -> bool:
        """Write the full collection to storage. Failures are logged, not raised."""
        try:
            self.storage.write_bytes(self.key, encode_blocks(self._blocks))
        except PersistenceWriteError as e:
            logger.error(f"Error saving blocks to {self.key!r}: {e}")
            return False
        return True

    def _fresh_id(self) -> str:
        existing = {block.id for block in self._blocks}
        block_id = self._id_factory()
        while block_id in existing:
            block_id = self._id_factory()
        return block_id
