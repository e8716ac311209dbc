"""
Fixed offsets of the party roster block.

The roster is not decoded by the codec; the attribute cheat writes bytes at
these offsets directly. A change of the block's layout is a one-place edit:
add or adjust an entry in ROSTER_SCHEMAS.
"""

from dataclasses import dataclass
from typing import Dict, Iterator, Tuple


@dataclass(frozen=True)
class RosterLayout:
    """Byte layout of the party-member records inside the roster block.

    All offsets are relative to the start of a record; record i starts at
    i * record_stride inside the block's enc section.

    Attributes:
        partition: Partition holding the roster block
        block_index: Index of the roster block
        record_count: Number of party-member records
        record_stride: Distance between consecutive records
        attribute_offsets: Offsets of the attribute bytes
        attribute_value: Value written to every attribute
        class_offset: Offset of the class/role slot
        class_value: Value written to the class/role slot
        inventory_offset: Offset of the first inventory slot
        inventory_slots: Number of inventory slots filled with 0, 1, 2, ...
    """

    partition: int = 0
    block_index: int = 20
    record_count: int = 4
    record_stride: int = 0x100
    attribute_offsets: Tuple[int, ...] = tuple(range(0x10E, 0x115))
    attribute_value: int = 0x7F
    class_offset: int = 0x11A
    class_value: int = 15
    inventory_offset: int = 0x1BD
    inventory_slots: int = 50

    def record_base(self, record: int) -> int:
        return record * self.record_stride

    def writes(self) -> Iterator[Tuple[int, int]]:
        """Yield every (absolute offset, value) the cheat writes, in order."""
        for record in range(self.record_count):
            base = self.record_base(record)
            for offset in self.attribute_offsets:
                yield base + offset, self.attribute_value
            yield base + self.class_offset, self.class_value
            for slot in range(self.inventory_slots):
                yield base + self.inventory_offset + slot, slot

    @property
    def highest_offset(self) -> int:
        return max(offset for offset, _ in self.writes())


ROSTER_SCHEMAS: Dict[str, RosterLayout] = {
    "standard": RosterLayout(),
    # Later saves carry an eighth attribute byte
    "extended": RosterLayout(attribute_offsets=tuple(range(0x10E, 0x115)) + (0x120,)),
}
