"""Save blocks and the repository holding both game partitions."""

from .models import (
    BLOCK_SCHEMA_VERSION,
    Block,
    BlockDescriptor,
    BlockKind,
    Body,
    GamePartition,
)
from .repository import BlockRepository

__all__ = [
    "BLOCK_SCHEMA_VERSION",
    "Block",
    "BlockDescriptor",
    "BlockKind",
    "Body",
    "GamePartition",
    "BlockRepository",
]
