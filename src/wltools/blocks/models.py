"""
Data models for save blocks.

A block is split into a descriptor (identity and metadata) and a body (the
two raw sections). Bodies are mutable in place but never change length: every
write goes through methods that check bounds and preserve untouched bytes.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional

from ..errors import PatchError

BLOCK_SCHEMA_VERSION = 2
"""Version of the descriptor/body schema written to meta.json."""


class BlockKind(Enum):
    """Whether a block can be decoded into world structure."""

    MAP = "map"
    """Decodable map block (index below the partition's map block count)."""

    OPAQUE = "opaque"
    """Binary blob addressed only by its raw sections."""


@dataclass(frozen=True)
class BlockDescriptor:
    """Identity and metadata of a block.

    Attributes:
        partition: Game partition index (0 or 1)
        index: Position of the block inside its partition
        kind: Map or opaque block
        schema_version: Version of this descriptor schema
    """

    partition: int
    index: int
    kind: BlockKind
    schema_version: int = BLOCK_SCHEMA_VERSION

    @property
    def is_map(self) -> bool:
        return self.kind is BlockKind.MAP

    @property
    def label(self) -> str:
        """Short "partition,index" label used in log messages."""
        return f"{self.partition},{self.index}"


@dataclass
class Body:
    """The two raw sections of a block.

    Attributes:
        enc_section: Obfuscated, variable-format section
        plain_section: Fixed auxiliary data
    """

    enc_section: bytearray
    plain_section: bytearray = field(default_factory=bytearray)

    def __post_init__(self) -> None:
        # Accept any bytes-like input but always own a mutable copy
        self.enc_section = bytearray(self.enc_section)
        self.plain_section = bytearray(self.plain_section)

    def copy(self) -> "Body":
        return Body(bytearray(self.enc_section), bytearray(self.plain_section))

    def poke(self, offset: int, value: int) -> int:
        """Write one byte into the encrypted section.

        Args:
            offset: Byte offset inside enc_section
            value: Byte value (0-255)

        Returns:
            The previous value at that offset

        Raises:
            PatchError: If offset or value is out of range
        """
        if not 0 <= value <= 0xFF:
            raise PatchError(f"value out of range for u8: {value}")
        if not 0 <= offset < len(self.enc_section):
            raise PatchError(
                f"write beyond enc section at 0x{offset:x} (length 0x{len(self.enc_section):x})"
            )
        old = self.enc_section[offset]
        self.enc_section[offset] = value
        return old

    def overwrite(self, other: "Body") -> None:
        """Replace both sections in place with the content of another body.

        Raises:
            PatchError: If either section would change length
        """
        if len(other.enc_section) != len(self.enc_section):
            raise PatchError(
                f"enc section length changed: have={len(other.enc_section)} "
                f"want={len(self.enc_section)}"
            )
        if len(other.plain_section) != len(self.plain_section):
            raise PatchError(
                f"plain section length changed: have={len(other.plain_section)} "
                f"want={len(self.plain_section)}"
            )
        self.enc_section[:] = other.enc_section
        self.plain_section[:] = other.plain_section

    def diff_count(self, other: "Body") -> int:
        """Count differing bytes between two bodies of equal layout."""
        changed = sum(1 for a, b in zip(self.enc_section, other.enc_section) if a != b)
        changed += sum(1 for a, b in zip(self.plain_section, other.plain_section) if a != b)
        return changed


@dataclass
class Block:
    """A descriptor paired with the body it describes."""

    descriptor: BlockDescriptor
    body: Body

    @property
    def partition(self) -> int:
        return self.descriptor.partition

    @property
    def index(self) -> int:
        return self.descriptor.index

    def meta(self) -> dict[str, object]:
        """Metadata exported as meta.json."""
        return {
            "schema_version": self.descriptor.schema_version,
            "partition": self.descriptor.partition,
            "index": self.descriptor.index,
            "kind": self.descriptor.kind.value,
            "enc_section_length": len(self.body.enc_section),
            "plain_section_length": len(self.body.plain_section),
        }


@dataclass
class GamePartition:
    """One game file worth of blocks.

    Attributes:
        index: Partition index (0 or 1)
        blocks: Ordered blocks of this partition
        map_block_count: Number of leading blocks that are map blocks
        file_name: Name of the on-disk file this partition came from
    """

    index: int
    blocks: List[Block]
    map_block_count: int
    file_name: str = ""

    def __iter__(self) -> Iterator[Block]:
        return iter(self.blocks)

    def __len__(self) -> int:
        return len(self.blocks)

    def __getitem__(self, index: int) -> Block:
        return self.blocks[index]

    @property
    def map_blocks(self) -> List[Block]:
        return self.blocks[: self.map_block_count]

    @property
    def opaque_blocks(self) -> List[Block]:
        return self.blocks[self.map_block_count:]

    def find(self, index: int) -> Optional[Block]:
        """Return the block at index, or None when the partition is shorter."""
        if 0 <= index < len(self.blocks):
            return self.blocks[index]
        return None

    @classmethod
    def from_bodies(
        cls, index: int, bodies: List[Body], map_block_count: int, file_name: str = ""
    ) -> "GamePartition":
        """Wrap parsed bodies into blocks with descriptors."""
        blocks = [
            Block(
                descriptor=BlockDescriptor(
                    partition=index,
                    index=i,
                    kind=BlockKind.MAP if i < map_block_count else BlockKind.OPAQUE,
                ),
                body=body,
            )
            for i, body in enumerate(bodies)
        ]
        return cls(index=index, blocks=blocks, map_block_count=map_block_count, file_name=file_name)
