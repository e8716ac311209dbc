"""
Transform operation types.
"""

from dataclasses import dataclass

from ..backend.models import Location


@dataclass(frozen=True)
class LocPair:
    """An ordered pair of locations joined by transitions.

    Attributes:
        a: First location
        b: Second location
    """

    a: Location
    b: Location


@dataclass(frozen=True)
class TransformOp:
    """Remap the transitions of one location pair onto another.

    Written "<destination> <- <source>" on the command line.
    """

    destination: LocPair
    source: LocPair
