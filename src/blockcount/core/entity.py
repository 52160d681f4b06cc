"""
Name Block Entity

The single domain object: a named tally that only ever goes up.
"""

import uuid

from pydantic import BaseModel, ConfigDict, Field


def new_block_id() -> str:
    """Generate a fresh block identifier."""
    return str(uuid.uuid4())


class NameBlock(BaseModel):
    """
    A named counter shown as one block on the board.

    Instances are immutable; ``incremented`` returns the next version. All
    three fields are required so stored records missing one are rejected.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    count: int = Field(ge=0)

    def incremented(self) -> 'NameBlock':
        return self.model_copy(update={"count": self.count + 1})
