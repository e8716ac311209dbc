"""Resilient block dump pipeline."""

from .pipeline import BlockDumpReport, DumpPipeline
from .stages import (
    ExportStage,
    FullExportStage,
    MinimalExportStage,
    PartialExportStage,
    StageContext,
    StageOutcome,
    StageStatus,
    default_stages,
)
from .writer import DumpWriter, block_dir_name, dumps

__all__ = [
    "BlockDumpReport",
    "DumpPipeline",
    "ExportStage",
    "FullExportStage",
    "MinimalExportStage",
    "PartialExportStage",
    "StageContext",
    "StageOutcome",
    "StageStatus",
    "default_stages",
    "DumpWriter",
    "block_dir_name",
    "dumps",
]
