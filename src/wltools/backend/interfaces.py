"""
Abstract collaborators the toolkit orchestrates.

The section codec, the game file serializer and the world mutation engine
know the game's binary formats; wltools only drives them. A concrete
implementation is bundled into a Backend (see backend.loader).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Sequence, Tuple

from .models import CarvedBlock, DecodedBlock, Location, MapData, MapDimension, MapInfo

if TYPE_CHECKING:
    from ..blocks.models import Block, Body, GamePartition
    from ..transform.models import TransformOp


class BlockModifier(ABC):
    """Re-encodes a block after selected fields were replaced.

    Only the replaced fields may change; every other byte of the block must
    be reproduced exactly.
    """

    @abstractmethod
    def replace_map_info(self, info: MapInfo) -> None:
        """Replace the block's map-info record.

        Raises:
            CodecError: If the record cannot be encoded
        """

    @abstractmethod
    def body(self) -> "Body":
        """Return the re-encoded body."""


class SectionCodec(ABC):
    """Converts a map block's raw sections to and from a DecodedBlock."""

    @property
    @abstractmethod
    def central_dir_length(self) -> int:
        """Length in bytes of the central directory."""

    @abstractmethod
    def map_data_length(self, dim: MapDimension) -> int:
        """Length of the map-data region; the central directory follows it."""

    @abstractmethod
    def decode_block(self, block: "Block", dim: MapDimension) -> DecodedBlock:
        """Fully decode a map block.

        Raises:
            CodecError: If any sub-structure cannot be decoded
        """

    @abstractmethod
    def carve_block(self, block: "Block", dim: MapDimension) -> CarvedBlock:
        """Locate sub-structures without decoding them.

        Raises:
            CodecError: If the central directory cannot be located
        """

    @abstractmethod
    def decode_central_directory(self, data: bytes) -> Any:
        """Decode raw central directory bytes.

        Raises:
            CodecError: If the bytes are not a valid central directory
        """

    @abstractmethod
    def block_modifier(self, block: "Block", dim: MapDimension) -> BlockModifier:
        """Create a modifier seeded with the block's current content."""

    @abstractmethod
    def render_map_data(self, map_data: MapData) -> str:
        """Render the map grid as human-readable text."""

    @abstractmethod
    def decompress_strings_area(self, strings_area: Any) -> List[bytes]:
        """Decompress a block's strings area into individual strings.

        Raises:
            CodecError: If the compressed stream is corrupt
        """


class GameFileSerializer(ABC):
    """Splits a partition file into block bodies and joins them back."""

    @abstractmethod
    def parse_game(self, data: bytes, partition: int) -> List["Body"]:
        """Split a partition file into ordered block bodies.

        Raises:
            CodecError: If the file is not a valid partition file
        """

    @abstractmethod
    def serialize_game(self, bodies: Sequence["Body"], partition: int) -> bytes:
        """Join block bodies back into a partition file."""


class WorldEngine(ABC):
    """Builds a navigable world model and applies transition remaps to it."""

    @abstractmethod
    def decode_games(self, partitions: Sequence["GamePartition"]) -> Any:
        """Decode all map blocks of both partitions into a world state."""

    @abstractmethod
    def collect(self, state: Any, config: Dict[str, Any]) -> Any:
        """Collect a navigable model from the world state."""

    @abstractmethod
    def exec_trans_op(self, collection: Any, state: Any, op: "TransformOp") -> None:
        """Apply one transform op to the world state.

        Raises:
            EngineError: If the op cannot be applied
        """

    @abstractmethod
    def commit(self, state: Any, partitions: Sequence["GamePartition"]) -> None:
        """Write the world state back onto the partitions' blocks."""

    @abstractmethod
    def parse_location_no_case(self, name: str) -> Location:
        """Resolve a location name, ignoring case.

        Raises:
            ParseError: If no location has that name
        """

    @abstractmethod
    def location_string(self, location: Location) -> str:
        """Human-readable name of a location."""


@dataclass(frozen=True)
class PartitionLayout:
    """Static layout of one game partition.

    Attributes:
        index: Partition index
        file_name: Name of the partition file inside the game directory
        map_dims: One MapDimension per map block, in block order
    """

    index: int
    file_name: str
    map_dims: Tuple[MapDimension, ...]

    @property
    def map_block_count(self) -> int:
        return len(self.map_dims)


@dataclass(frozen=True)
class GameLayout:
    """Static layout of the whole save: one PartitionLayout per partition."""

    partitions: Tuple[PartitionLayout, ...]

    def partition(self, index: int) -> PartitionLayout:
        return self.partitions[index]

    def map_dim(self, partition: int, index: int) -> MapDimension:
        return self.partitions[partition].map_dims[index]


@dataclass
class Backend:
    """A complete set of collaborators for one game format."""

    codec: SectionCodec
    serializer: GameFileSerializer
    engine: WorldEngine
    layout: GameLayout
    name: str = "unnamed"
    collect_config: Dict[str, Any] = field(default_factory=dict)
