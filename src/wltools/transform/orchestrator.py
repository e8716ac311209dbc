"""
Mutation and commit of a batch of transform operations.

Order of work for one batch:

    1. parse every op string (no file is read before all ops parse)
    2. read both partition files
    3. decode the world state and collect the navigable model
    4. apply the ops in order
    5. commit the world state onto the blocks
    6. write both partition files once

By default a failing op discards the whole batch. With allow_partial the ops
applied before the failure are committed and written, and the failure is
still raised afterwards.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional, Sequence

from ..backend.interfaces import Backend
from ..blocks.repository import BlockRepository
from ..errors import EngineError, FatalInvariantError, WlToolsError
from .models import TransformOp
from .parser import TransformOpParser


@dataclass
class TransformResult:
    """Outcome of a batch run.

    Attributes:
        ops: Parsed ops of the batch
        applied: Number of ops applied to the world state
        written: Whether the partition files were rewritten
    """

    ops: List[TransformOp]
    applied: int = 0
    written: bool = False


class TransformOrchestrator:
    """Applies batches of transform ops to a game directory."""

    def __init__(self, backend: Backend, allow_partial: bool = False, backup: bool = False):
        """Initialize the orchestrator.

        Args:
            backend: Codec, serializer, engine and layout to use
            allow_partial: Commit ops preceding a failing op
            backup: Keep a .bak copy of each partition file when writing
        """
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.backend = backend
        self.allow_partial = allow_partial
        self.backup = backup
        self.parser = TransformOpParser(backend.engine.parse_location_no_case)

    def run(self, game_dir: str | Path, op_strings: Sequence[str]) -> TransformResult:
        """Parse and apply a batch to the files in game_dir.

        Raises:
            ParseError: If an op string is invalid (nothing is read)
            StorageError: If a partition file cannot be read or written
            EngineError: If an op fails (written first when allow_partial)
            FatalInvariantError: If the world state cannot be committed
        """
        ops = self.parser.parse_batch(op_strings)
        self.logger.info(f"Parsed {len(ops)} transform op(s)")

        repo = BlockRepository.load(game_dir, self.backend.layout, self.backend.serializer)
        return self.apply(repo, ops)

    def apply(self, repo: BlockRepository, ops: List[TransformOp]) -> TransformResult:
        """Apply already parsed ops to a loaded repository and write it."""
        engine = self.backend.engine
        result = TransformResult(ops=ops)

        state = engine.decode_games(repo.partitions)
        collection = engine.collect(state, dict(self.backend.collect_config))

        failure: Optional[EngineError] = None
        for op in ops:
            try:
                engine.exec_trans_op(collection, state, op)
            except EngineError as e:
                self.logger.error(f"Transform op {result.applied + 1}/{len(ops)} failed: {e}")
                failure = e
                break
            result.applied += 1
            self.logger.debug(f"Applied {op}")

        if failure is not None and not self.allow_partial:
            self.logger.warning("Batch discarded, game files left untouched")
            raise failure

        self._commit(state, repo)
        repo.write(backup=self.backup)
        result.written = True
        self.logger.info(f"Committed {result.applied} of {len(ops)} transform op(s)")

        if failure is not None:
            raise failure
        return result

    def _commit(self, state: Any, repo: BlockRepository) -> None:
        try:
            self.backend.engine.commit(state, repo.partitions)
        except FatalInvariantError:
            raise
        except WlToolsError as e:
            raise FatalInvariantError(f"failed to commit world state: {e}") from e
