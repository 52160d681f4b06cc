"""
Block collection codec.

The collection is stored as a UTF-8 JSON array of ``{"id", "name", "count"}``
records in collection order.
"""

from typing import List

from pydantic import TypeAdapter, ValidationError

from ..core.entity import NameBlock
from ..core.exceptions import SerializationError

_blocks_adapter = TypeAdapter(List[NameBlock])


def encode_blocks(blocks: List[NameBlock]) -> bytes:
    return _blocks_adapter.dump_json(list(blocks))


def decode_blocks(data: bytes) -> List[NameBlock]:
    """
    Decode a persisted collection.

    Raises:
        SerializationError: if the bytes are not a valid collection
    """
    try:
        blocks = _blocks_adapter.validate_json(data)
    except ValidationError as e:
        raise SerializationError(f"Malformed block data: {e.error_count()} error(s)") from e

    seen = set()
    for block in blocks:
        if block.id in seen:
            raise SerializationError(f"Duplicate block id in stored data: {block.id}")
        seen.add(block.id)
    return blocks
