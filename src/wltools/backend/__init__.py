"""
Codec, serializer and world engine contracts.

The game's binary formats are handled by a pluggable backend; this package
defines what the toolkit expects from it and how it is loaded.
"""

from .models import (
    ACTION_CLASS_TRANSITION,
    CarvedBlock,
    DecodedBlock,
    Location,
    MapData,
    MapDimension,
    MapInfo,
    Point,
    Transition,
)
from .interfaces import (
    Backend,
    BlockModifier,
    GameFileSerializer,
    GameLayout,
    PartitionLayout,
    SectionCodec,
    WorldEngine,
)
from .loader import load_backend, resolve_backend_path

__all__ = [
    # Contract types
    "ACTION_CLASS_TRANSITION",
    "CarvedBlock",
    "DecodedBlock",
    "Location",
    "MapData",
    "MapDimension",
    "MapInfo",
    "Point",
    "Transition",
    # Collaborators
    "Backend",
    "BlockModifier",
    "GameFileSerializer",
    "GameLayout",
    "PartitionLayout",
    "SectionCodec",
    "WorldEngine",
    # Loading
    "load_backend",
    "resolve_backend_path",
]
