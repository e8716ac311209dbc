"""Direct save mutations (encounter frequency, party roster)."""

from .layout import ROSTER_SCHEMAS, RosterLayout
from .patches import CheatPatcher, PatchSummary, get_roster_layout

__all__ = [
    "ROSTER_SCHEMAS",
    "RosterLayout",
    "CheatPatcher",
    "PatchSummary",
    "get_roster_layout",
]
