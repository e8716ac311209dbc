"""
Contract types exchanged with the codec and world engine.

Backends build these structures when decoding a block and consume them when
re-encoding. Fields the toolkit only exports (loot tables, monster data, the
central directory) are typed loosely; fields the toolkit reads or mutates are
typed precisely.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, NamedTuple, Optional, TypeAlias

Location: TypeAlias = int
"""Engine-defined identifier of a named in-game location."""

ACTION_CLASS_TRANSITION = 0x0A
"""Action class tagging map cells that move the party to another location."""


class Point(NamedTuple):
    """A grid coordinate."""

    x: int
    y: int


class MapDimension(NamedTuple):
    """Width and height of a map block's grid."""

    width: int
    height: int

    @property
    def cell_count(self) -> int:
        return self.width * self.height


@dataclass
class MapData:
    """Per-cell action tags of a map grid, indexed [y][x]."""

    action_classes: List[List[int]]
    action_selectors: List[List[int]]


@dataclass
class MapInfo:
    """Map-wide parameters of a block.

    Attributes:
        encounter_freq: Random encounter frequency
        fields: Other map-info fields by name, preserved as decoded
    """

    encounter_freq: int
    fields: Dict[str, int] = field(default_factory=dict)


@dataclass
class Transition:
    """One entry of a block's transition table.

    Attributes:
        location: Destination location
        target: Arrival cell in the destination map
        relative: Whether target is relative to the party's position
        prompt: String index of the confirmation prompt (0 for none)
    """

    location: Location
    target: Point = Point(0, 0)
    relative: bool = False
    prompt: int = 0


@dataclass
class DecodedBlock:
    """Structured view of a map block produced by a section codec."""

    dim: MapDimension
    map_data: MapData
    central_dir: Any
    map_info: MapInfo
    transitions: List[Optional[Transition]]
    loots: List[Any] = field(default_factory=list)
    monster_names: List[str] = field(default_factory=list)
    monster_data: List[Any] = field(default_factory=list)
    strings_area: Any = None
    npcs: Optional[List[Any]] = None


@dataclass
class CarvedBlock:
    """Offsets-only view of a map block, usable when a full decode fails.

    Attributes:
        offsets: Sub-structure name -> byte offset inside the enc section
        central_dir: Raw central directory bytes
        section_length: Length of the enc section the offsets refer to
    """

    offsets: Dict[str, int]
    central_dir: bytes
    section_length: int

    def sizes(self) -> Dict[str, int]:
        """Derive each sub-structure's size from the next offset.

        The last sub-structure extends to the end of the section.
        """
        ordered = sorted(self.offsets.items(), key=lambda item: (item[1], item[0]))
        sizes: Dict[str, int] = {}
        for i, (name, offset) in enumerate(ordered):
            end = ordered[i + 1][1] if i + 1 < len(ordered) else self.section_length
            sizes[name] = end - offset
        return sizes
