"""
Dump pipeline: exports every block of a repository to an output tree.

Map blocks get their raw sections and meta.json first, then the stage chain
runs until a stage stops it. Opaque blocks only get their raw sections. A
stage failure is reported and the next block is processed; only storage
errors abort the run.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ..backend.interfaces import GameLayout, SectionCodec
from ..blocks.models import Block, GamePartition
from .stages import ExportStage, StageContext, StageOutcome, StageStatus, default_stages
from .writer import DumpWriter


@dataclass
class BlockDumpReport:
    """What the pipeline managed to export for one block.

    Attributes:
        partition: Partition index
        index: Block index
        outcomes: Outcome of every stage that ran, in order
    """

    partition: int
    index: int
    outcomes: List[StageOutcome] = field(default_factory=list)

    @property
    def label(self) -> str:
        return f"{self.partition},{self.index}"

    @property
    def final(self) -> Optional[StageOutcome]:
        return self.outcomes[-1] if self.outcomes else None

    @property
    def stage(self) -> Optional[str]:
        """Name of the last stage that ran (None for opaque blocks)."""
        return self.final.stage if self.final else None

    @property
    def status(self) -> StageStatus:
        # Opaque blocks run no stage; their raw export is complete
        return self.final.status if self.final else StageStatus.SUCCESS

    @property
    def errors(self) -> List[str]:
        return [error for outcome in self.outcomes for error in outcome.errors]

    @property
    def ok(self) -> bool:
        return self.status is StageStatus.SUCCESS

    @property
    def complete(self) -> bool:
        """Whether the first stage succeeded without a failed step."""
        return self.ok and len(self.outcomes) <= 1 and not self.errors


class DumpPipeline:
    """Runs the export stage chain over blocks."""

    def __init__(
        self,
        codec: SectionCodec,
        layout: GameLayout,
        writer: DumpWriter,
        stages: Optional[Sequence[ExportStage]] = None,
    ):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.codec = codec
        self.layout = layout
        self.writer = writer
        self.stages = list(stages) if stages is not None else default_stages()

    def dump_block(self, block: Block) -> BlockDumpReport:
        """Export one block.

        Raises:
            StorageError: If an output file cannot be written
        """
        report = BlockDumpReport(block.partition, block.index)
        self.writer.write_raw_sections(block)
        if not block.descriptor.is_map:
            return report

        self.writer.write_meta(block)
        ctx = StageContext(
            block=block,
            dim=self.layout.map_dim(block.partition, block.index),
            codec=self.codec,
            writer=self.writer,
        )
        for stage in self.stages:
            outcome = stage.run(ctx)
            report.outcomes.append(outcome)
            if not outcome.continues:
                break

        if report.status is StageStatus.SUCCESS and not report.errors:
            self.logger.debug(f"Block {report.label}: {report.stage} dump complete")
        elif report.status is StageStatus.SUCCESS:
            self.logger.info(
                f"Block {report.label}: {report.stage} dump with {len(report.errors)} failed step(s)"
            )
        elif report.status is StageStatus.HARD_FAILURE and report.stage == self.stages[-1].name:
            self.logger.error(f"Block {report.label}: fully undecodable")
        else:
            self.logger.error(f"Block {report.label}: dump failed at {report.stage} stage")
        return report

    def dump_partition(self, partition: GamePartition) -> List[BlockDumpReport]:
        """Export every block of a partition, map blocks first."""
        reports = [self.dump_block(block) for block in partition.map_blocks]
        reports += [self.dump_block(block) for block in partition.opaque_blocks]

        failed = [r for r in reports if not r.complete]
        self.logger.info(
            f"Partition {partition.index}: dumped {len(reports)} block(s), "
            f"{len(failed)} not fully decoded"
        )
        return reports

    def dump_all(self, partitions: Sequence[GamePartition]) -> List[BlockDumpReport]:
        reports: List[BlockDumpReport] = []
        for partition in partitions:
            reports.extend(self.dump_partition(partition))
        return reports
