"""
Direct save mutations: encounter-frequency override and party roster patch.

Both patches work on blocks already held in memory; nothing here touches the
disk. The encounter patch goes through the codec's block modifier, the roster
patch writes raw bytes at the offsets of a RosterLayout.
"""

import logging
from dataclasses import dataclass, replace
from typing import List, Sequence

from ..backend.interfaces import GameLayout, SectionCodec
from ..blocks.models import Block, GamePartition
from ..errors import CodecError, PatchError
from .layout import ROSTER_SCHEMAS, RosterLayout


def get_roster_layout(name: str) -> RosterLayout:
    """Look up a roster schema by name.

    Raises:
        PatchError: If the schema is unknown
    """
    try:
        return ROSTER_SCHEMAS[name]
    except KeyError:
        raise PatchError(
            f"unknown roster schema: \"{name}\" (known: {', '.join(sorted(ROSTER_SCHEMAS))})"
        ) from None


@dataclass
class PatchSummary:
    """What a cheat run changed."""

    encounter_blocks: int = 0
    roster_bytes: int = 0

    @property
    def changed(self) -> bool:
        return bool(self.encounter_blocks or self.roster_bytes)


class CheatPatcher:
    """Applies cheat patches to in-memory partitions."""

    def __init__(self, codec: SectionCodec, layout: GameLayout):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.codec = codec
        self.layout = layout

    def zero_encounters(self, partitions: Sequence[GamePartition]) -> int:
        """Set the encounter frequency of every map block to 0.

        Each block is decoded, its map info replaced through the codec's
        block modifier and the re-encoded body written back in place.

        Returns:
            Number of blocks whose bytes changed

        Raises:
            PatchError: If a block cannot be decoded or re-encoded
        """
        changed = 0
        for partition in partitions:
            dims = self.layout.partition(partition.index).map_dims
            for block in partition.map_blocks:
                if self._zero_block_encounters(block, dims[block.index]):
                    changed += 1
        self.logger.info(f"Encounter frequency zeroed, {changed} block(s) changed")
        return changed

    def _zero_block_encounters(self, block: Block, dim) -> bool:
        label = block.descriptor.label
        try:
            decoded = self.codec.decode_block(block, dim)
            info = replace(decoded.map_info, encounter_freq=0)
            modifier = self.codec.block_modifier(block, dim)
            modifier.replace_map_info(info)
            new_body = modifier.body()
        except CodecError as e:
            raise PatchError(f"failed to zero encounters of block {label}: {e}") from e

        before = block.body.copy()
        block.body.overwrite(new_body)
        diff = before.diff_count(block.body)
        self.logger.debug(
            f"Block {label}: encounter frequency {decoded.map_info.encounter_freq} -> 0 "
            f"({diff} byte(s) changed)"
        )
        return diff > 0

    def apply_roster(self, partitions: Sequence[GamePartition], roster: RosterLayout) -> int:
        """Max out party attributes and fill every inventory slot.

        All offsets are checked against the block before the first byte is
        written, so a layout mismatch leaves the block untouched.

        Returns:
            Number of bytes whose value changed

        Raises:
            PatchError: If the roster block is missing or too short
        """
        block = self._roster_block(partitions, roster)
        section_length = len(block.body.enc_section)
        if roster.highest_offset >= section_length:
            raise PatchError(
                f"roster block {block.descriptor.label} too short for layout: "
                f"need 0x{roster.highest_offset + 1:x} bytes, have 0x{section_length:x}"
            )

        changed = 0
        for offset, value in roster.writes():
            if block.body.poke(offset, value) != value:
                changed += 1

        self.logger.info(
            f"Roster patched in block {block.descriptor.label}: "
            f"{roster.record_count} record(s), {changed} byte(s) changed"
        )
        return changed

    def _roster_block(self, partitions: Sequence[GamePartition], roster: RosterLayout) -> Block:
        matches: List[GamePartition] = [p for p in partitions if p.index == roster.partition]
        if not matches:
            raise PatchError(f"roster partition {roster.partition} not loaded")
        block = matches[0].find(roster.block_index)
        if block is None:
            raise PatchError(f"roster block {roster.partition},{roster.block_index} not found")
        return block
