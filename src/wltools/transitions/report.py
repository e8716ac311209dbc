"""
Transition report of both partitions, as printed by the transloc tool.
"""

import logging
from dataclasses import fields
from typing import Any, Dict, List, Sequence

from ..backend.interfaces import Backend
from ..backend.models import ACTION_CLASS_TRANSITION, DecodedBlock, Transition
from ..blocks.models import GamePartition
from .discovery import find_transitions

logger = logging.getLogger(__name__)


def _plain(value: Any) -> Any:
    if hasattr(value, "_asdict"):
        return {k: _plain(v) for k, v in value._asdict().items()}
    return value


def transition_entry(transition: Transition) -> Dict[str, Any]:
    """Fields of a transition table entry as a plain dict."""
    return {f.name: _plain(getattr(transition, f.name)) for f in fields(transition)}


def block_report(
    block: DecodedBlock, backend: Backend, transition_class: int = ACTION_CLASS_TRANSITION
) -> List[Dict[str, Any]]:
    """Render the transitions of one decoded block.

    Only marks whose selector indexes a non-empty table entry are rendered.
    """
    entries: List[Dict[str, Any]] = []
    for mark in find_transitions(block, transition_class):
        if mark.selector >= len(block.transitions):
            continue
        transition = block.transitions[mark.selector]
        if transition is None:
            continue

        entry = transition_entry(transition)
        entry["coords"] = [_plain(point) for point in mark.coords]
        entry["selector"] = mark.selector
        entry["location_name"] = backend.engine.location_string(transition.location)
        entries.append(entry)
    return entries


def partition_report(
    partition: GamePartition, backend: Backend, transition_class: int = ACTION_CLASS_TRANSITION
) -> Dict[str, Any]:
    """Render every map block of a partition.

    Raises:
        CodecError: If any map block cannot be decoded
    """
    blocks = []
    for block in partition.map_blocks:
        dim = backend.layout.map_dim(partition.index, block.index)
        decoded = backend.codec.decode_block(block, dim)
        transitions = block_report(decoded, backend, transition_class)
        logger.debug(f"Block {block.descriptor.label}: {len(transitions)} transition(s)")
        blocks.append({"block": block.index, "transitions": transitions})
    return {"blocks": blocks}


def games_report(
    partitions: Sequence[GamePartition],
    backend: Backend,
    transition_class: int = ACTION_CLASS_TRANSITION,
) -> Dict[str, Any]:
    """Render both partitions keyed "game1", "game2", ..."""
    return {
        f"game{partition.index + 1}": partition_report(partition, backend, transition_class)
        for partition in partitions
    }
