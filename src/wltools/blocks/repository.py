"""
Block repository: reads both partition files of a game directory and writes
them back.

Reading is all-or-nothing: both files are read and parsed before any caller
sees a block. Writing serializes every partition first and only then replaces
the files, so a serializer failure never leaves a half-written directory.
"""

import logging
import os
import shutil
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from ..backend.interfaces import GameFileSerializer, GameLayout
from ..errors import StorageError
from .models import Block, GamePartition


class BlockRepository:
    """Holds the blocks of both game partitions for one directory."""

    def __init__(
        self,
        game_dir: str | Path,
        layout: GameLayout,
        serializer: GameFileSerializer,
        partitions: Optional[List[GamePartition]] = None,
    ):
        """Initialize the repository.

        Args:
            game_dir: Directory containing the partition files
            layout: Static game layout (file names, map dimensions)
            serializer: Splits/joins partition files
            partitions: Already parsed partitions (mostly for tests)
        """
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.game_dir = Path(game_dir)
        self.layout = layout
        self.serializer = serializer
        self.partitions: List[GamePartition] = partitions or []

    @classmethod
    def load(
        cls, game_dir: str | Path, layout: GameLayout, serializer: GameFileSerializer
    ) -> "BlockRepository":
        """Read and parse every partition file of a game directory.

        Raises:
            StorageError: If any partition file cannot be read
            CodecError: If any partition file cannot be parsed
        """
        repo = cls(game_dir, layout, serializer)
        repo.read()
        return repo

    def read(self) -> None:
        """Read all partition files, replacing any blocks currently held."""
        raw: List[Tuple[int, str, bytes]] = []
        for part in self.layout.partitions:
            path = self.game_dir / part.file_name
            try:
                raw.append((part.index, part.file_name, path.read_bytes()))
            except OSError as e:
                raise StorageError(f"failed to read {path}: {e}") from e

        partitions: List[GamePartition] = []
        for index, file_name, data in raw:
            bodies = self.serializer.parse_game(data, index)
            map_count = self.layout.partition(index).map_block_count
            if len(bodies) < map_count:
                self.logger.warning(
                    f"Partition {index} ({file_name}) has {len(bodies)} blocks, "
                    f"fewer than its {map_count} map blocks"
                )
            partitions.append(
                GamePartition.from_bodies(index, bodies, map_count, file_name=file_name)
            )
            self.logger.info(f"Read {len(bodies)} blocks from {file_name}")

        self.partitions = partitions

    def write(self, backup: bool = False) -> None:
        """Serialize all partitions and overwrite the partition files.

        Args:
            backup: Copy each existing file to "<name>.bak" before replacing it

        Raises:
            StorageError: If a file cannot be written
        """
        payloads: List[Tuple[Path, bytes]] = []
        for partition in self.partitions:
            data = self.serializer.serialize_game([b.body for b in partition.blocks], partition.index)
            payloads.append((self.game_dir / partition.file_name, data))

        for path, data in payloads:
            tmp_path = path.with_name(path.name + ".tmp")
            try:
                if backup and path.exists():
                    shutil.copy2(path, path.with_name(path.name + ".bak"))
                tmp_path.write_bytes(data)
                os.replace(tmp_path, path)
            except OSError as e:
                raise StorageError(f"failed to write {path}: {e}") from e
            self.logger.info(f"Wrote {len(data)} bytes to {path}")

    # === ACCESS ===

    def partition(self, index: int) -> GamePartition:
        return self.partitions[index]

    def block(self, partition: int, index: int) -> Block:
        """Return a block by address.

        Raises:
            IndexError: If the address does not exist
        """
        found = self.partitions[partition].find(index)
        if found is None:
            raise IndexError(f"no block {partition},{index}")
        return found

    def map_blocks(self) -> Iterator[Block]:
        """Iterate map blocks of all partitions in order."""
        for partition in self.partitions:
            yield from partition.map_blocks
