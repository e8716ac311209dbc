"""Transition selector discovery and reporting."""

from .discovery import TransitionMark, find_transitions
from .report import block_report, games_report, partition_report, transition_entry

__all__ = [
    "TransitionMark",
    "find_transitions",
    "block_report",
    "games_report",
    "partition_report",
    "transition_entry",
]
