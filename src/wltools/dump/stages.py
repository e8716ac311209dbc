"""
Degrading export strategies for a single map block.

The stages are tried in order. A stage returning SOFT_FAILURE hands over to
the next one; SUCCESS and HARD_FAILURE end the chain.

    full     decode the block and export every sub-structure
    partial  carve sub-structure offsets and decode the central directory
    minimal  decode the central directory at its computed fixed offset
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, List, Tuple

from ..backend.interfaces import SectionCodec
from ..backend.models import MapDimension
from ..blocks.models import Block
from ..errors import CodecError
from .writer import DumpWriter


class StageStatus(Enum):
    """Result tag of one export stage."""

    SUCCESS = "success"
    SOFT_FAILURE = "soft_failure"
    """The stage could not run; the next stage should be tried."""
    HARD_FAILURE = "hard_failure"
    """The stage ran far enough to know no later stage can do better."""


@dataclass
class StageOutcome:
    """Result of running one stage on one block.

    Attributes:
        stage: Name of the stage
        status: Result tag
        errors: Messages of every failure observed while running the stage
        files: Names of the files this stage exported
    """

    stage: str
    status: StageStatus
    errors: List[str] = field(default_factory=list)
    files: List[str] = field(default_factory=list)

    @property
    def continues(self) -> bool:
        return self.status is StageStatus.SOFT_FAILURE


@dataclass
class StageContext:
    """Everything a stage needs to export one block."""

    block: Block
    dim: MapDimension
    codec: SectionCodec
    writer: DumpWriter


class ExportStage(ABC):
    """One strategy of the dump pipeline."""

    name = "stage"

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @abstractmethod
    def run(self, ctx: StageContext) -> StageOutcome:
        """Export what this stage can.

        Raises:
            StorageError: If an output file cannot be written
        """

    def _fail(self, ctx: StageContext, status: StageStatus, message: str) -> StageOutcome:
        self.logger.warning(f"Block {ctx.block.descriptor.label}: {self.name} dump failed: {message}")
        return StageOutcome(self.name, status, errors=[message])

    def _export_central_dir(self, ctx: StageContext, raw: bytes) -> StageOutcome:
        try:
            central_dir = ctx.codec.decode_central_directory(raw)
            ctx.writer.write_json(ctx.block, "centraldir.json", central_dir)
        except (CodecError, TypeError) as e:
            return self._fail(ctx, StageStatus.HARD_FAILURE, f"central directory: {e}")
        return StageOutcome(self.name, StageStatus.SUCCESS, files=["centraldir.json"])


class FullExportStage(ExportStage):
    """Decode the whole block and export every sub-structure.

    Each export step runs independently: a codec or serialization failure in
    one step is recorded in the outcome and the remaining steps still run.
    """

    name = "full"

    def run(self, ctx: StageContext) -> StageOutcome:
        try:
            decoded = ctx.codec.decode_block(ctx.block, ctx.dim)
        except CodecError as e:
            return self._fail(ctx, StageStatus.SOFT_FAILURE, f"decode: {e}")

        steps: List[Tuple[str, Callable[[], Any]]] = [
            ("offsets.json", lambda: ctx.codec.carve_block(ctx.block, ctx.dim).offsets),
            ("sizes.json", lambda: ctx.codec.carve_block(ctx.block, ctx.dim).sizes()),
            ("mapdata.txt", lambda: ctx.codec.render_map_data(decoded.map_data)),
            ("centraldir.json", lambda: decoded.central_dir),
            ("mapinfo.json", lambda: decoded.map_info),
            ("transitions.json", lambda: decoded.transitions),
            ("loots.json", lambda: decoded.loots),
        ]
        if decoded.npcs is not None:
            steps.append(("npcs.json", lambda: decoded.npcs))
        steps += [
            ("monsternames.json", lambda: decoded.monster_names),
            ("monsterdata.json", lambda: decoded.monster_data),
            ("stringsarea.json", lambda: decoded.strings_area),
            ("strings.json", lambda: self._strings(ctx, decoded.strings_area)),
        ]

        outcome = StageOutcome(self.name, StageStatus.SUCCESS)
        for file_name, produce in steps:
            # StorageError is not caught here: it aborts the whole dump
            try:
                content = produce()
                if isinstance(content, str):
                    ctx.writer.write_text(ctx.block, file_name, content)
                else:
                    ctx.writer.write_json(ctx.block, file_name, content)
            except (CodecError, TypeError) as e:
                message = f"{file_name}: {e}"
                self.logger.warning(f"Block {ctx.block.descriptor.label}: export step failed: {message}")
                outcome.errors.append(message)
                continue
            outcome.files.append(file_name)

        return outcome

    @staticmethod
    def _strings(ctx: StageContext, strings_area: Any) -> List[str]:
        # Game strings are 8-bit; latin-1 keeps every byte value
        return [s.decode("latin-1") for s in ctx.codec.decompress_strings_area(strings_area)]


class PartialExportStage(ExportStage):
    """Carve sub-structure offsets and decode the carved central directory."""

    name = "partial"

    def run(self, ctx: StageContext) -> StageOutcome:
        try:
            carved = ctx.codec.carve_block(ctx.block, ctx.dim)
        except CodecError as e:
            return self._fail(ctx, StageStatus.SOFT_FAILURE, f"carve: {e}")

        ctx.writer.write_json(ctx.block, "offsets.json", carved.offsets)
        ctx.writer.write_json(ctx.block, "sizes.json", carved.sizes())

        outcome = self._export_central_dir(ctx, carved.central_dir)
        outcome.files[:0] = ["offsets.json", "sizes.json"]
        return outcome


class MinimalExportStage(ExportStage):
    """Decode the central directory found right after the map data."""

    name = "minimal"

    def run(self, ctx: StageContext) -> StageOutcome:
        start = ctx.codec.map_data_length(ctx.dim)
        end = start + ctx.codec.central_dir_length
        section = ctx.block.body.enc_section
        if start < 0 or end > len(section):
            return self._fail(
                ctx,
                StageStatus.HARD_FAILURE,
                f"central directory window [{start}:{end}] outside enc section of length {len(section)}",
            )

        return self._export_central_dir(ctx, bytes(section[start:end]))


def default_stages() -> List[ExportStage]:
    """The stage chain in the order it is tried."""
    return [FullExportStage(), PartialExportStage(), MinimalExportStage()]
