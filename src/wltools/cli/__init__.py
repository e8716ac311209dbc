"""Command line tools."""

from . import cheat, dump, transloc, tset

TOOLS = {
    "dump": dump.main,
    "transloc": transloc.main,
    "tset": tset.main,
    "cheat": cheat.main,
}

__all__ = ["TOOLS"]
