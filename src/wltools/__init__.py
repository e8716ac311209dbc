"""
wltools: dump and edit tools for Wasteland save games

Exports the blocks of the two game partitions for inspection, lists
transitions between locations, remaps transitions and applies cheat patches.
The game's binary formats are handled by a pluggable backend.
"""

__version__ = "0.1.0"
__author__ = "wltools Contributors"

from .errors import WlToolsError
from .backend import Backend, load_backend
from .blocks import Block, BlockRepository, GamePartition
from .utils.logging_config import setup_logging

__all__ = [
    "WlToolsError",
    "Backend",
    "load_backend",
    "Block",
    "BlockRepository",
    "GamePartition",
    "setup_logging",
]
