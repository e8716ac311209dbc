"""
Discovery of transition selectors in a decoded map block.

A selector is "used" either because a grid cell tagged with the transition
action class carries it, or because the block's transition table has an
entry at that index. Entries no cell points at are still reported, with no
coordinates, so unplaced transitions are visible too.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple

from ..backend.models import ACTION_CLASS_TRANSITION, DecodedBlock, Point


@dataclass(frozen=True)
class TransitionMark:
    """A transition selector and the cells that carry it.

    Attributes:
        selector: Index into the block's transition table
        coords: Cells tagged with this selector, in row-major scan order
    """

    selector: int
    coords: Tuple[Point, ...] = ()


def find_transitions(
    block: DecodedBlock, transition_class: int = ACTION_CLASS_TRANSITION
) -> List[TransitionMark]:
    """Collect one mark per used selector, sorted by selector.

    Args:
        block: Decoded map block
        transition_class: Action class that tags transition cells

    Returns:
        Marks for every selector found on the grid plus every index of the
        transition table not found on the grid
    """
    found: Dict[int, List[Point]] = {}

    classes = block.map_data.action_classes
    selectors = block.map_data.action_selectors
    for y in range(block.dim.height):
        for x in range(block.dim.width):
            if classes[y][x] == transition_class:
                found.setdefault(selectors[y][x], []).append(Point(x, y))

    for selector in range(len(block.transitions)):
        found.setdefault(selector, [])

    return [TransitionMark(selector, tuple(found[selector])) for selector in sorted(found)]
