"""
Parser for transform operations.

An operation is "<destination> <- <source>" where each side is a location
pair in one of two forms:

    [3 MARS], [7 SHRINE]    the form the engine writes to its log
    mars,shrine             two names separated by exactly one comma

Names are resolved case-insensitively through the world engine.
"""

import re
from typing import Callable, Iterable, List

from ..backend.models import Location
from ..errors import ParseError
from .models import LocPair, TransformOp

LOGGED_PAIR_PATTERN = re.compile(r"\s*\[\d+\s+(\w+)\],\s*\[\d+\s+(\w+)\]")
OP_SEPARATOR = "<-"

LocationResolver = Callable[[str], Location]


class TransformOpParser:
    """Turns op strings into TransformOps.

    Args:
        resolve: Maps a location name to a Location, raising ParseError for
                 unknown names (normally WorldEngine.parse_location_no_case)
    """

    def __init__(self, resolve: LocationResolver):
        self.resolve = resolve

    def parse_operand(self, text: str) -> LocPair:
        """Parse one side of an operation.

        Raises:
            ParseError: If the text is not a pair or a name is unknown
        """
        text = text.strip()

        match = LOGGED_PAIR_PATTERN.search(text)
        if match is not None:
            first, second = match.group(1), match.group(2)
        else:
            parts = text.split(",")
            if len(parts) != 2:
                raise ParseError(
                    f"invalid operand: wrong comma count: have={len(parts)} want=1 s=\"{text}\"",
                    token=text,
                )
            first, second = parts

        return LocPair(self._resolve(first), self._resolve(second))

    def parse_op(self, text: str) -> TransformOp:
        """Parse "<destination> <- <source>".

        Raises:
            ParseError: If there is not exactly one separator or an operand
                        is invalid
        """
        parts = text.split(OP_SEPARATOR)
        if len(parts) != 2:
            raise ParseError(
                f"invalid operation: wrong `{OP_SEPARATOR}` count: "
                f"have={len(parts)} want=1 opString=\"{text}\"",
                token=text,
            )

        destination = self.parse_operand(parts[0])
        source = self.parse_operand(parts[1])
        return TransformOp(destination=destination, source=source)

    def parse_batch(self, texts: Iterable[str]) -> List[TransformOp]:
        """Parse every op in order; the first invalid one aborts the batch."""
        return [self.parse_op(text) for text in texts]

    def _resolve(self, name: str) -> Location:
        name = name.strip()
        if not name:
            raise ParseError("invalid operand: empty location name", token=name)
        return self.resolve(name)
