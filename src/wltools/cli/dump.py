"""
wltools-dump: export every block of a game directory for inspection.

Usage: wltools-dump [<wl-dir>] <out-dir>
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from ..blocks.repository import BlockRepository
from ..dump import DumpPipeline, DumpWriter
from ..errors import UsageError
from .common import (
    EXIT_OK,
    ToolContext,
    create_parser,
    open_settings,
    resolve_game_dir,
    run_tool,
    split_positionals,
)

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = create_parser("wltools-dump", "Dump the blocks of a Wasteland save, degrading on corrupt blocks")
    parser.add_argument(
        "dirs",
        nargs="*",
        metavar="DIR",
        help="[<wl-dir>] <out-dir>; wl-dir and out-dir default to the configured paths",
    )
    return parser


def dump(args: argparse.Namespace) -> int:
    wl_arg, out_arg = split_positionals(args.dirs, ("wl-dir", "out-dir"))
    settings = open_settings(args)
    game_dir = resolve_game_dir(settings, wl_arg)
    if out_arg:
        out_dir = Path(out_arg)
    elif settings.paths.dump_dir is not None:
        out_dir = settings.paths.dump_dir
    else:
        raise UsageError("missing out-dir argument")

    ctx = ToolContext.from_args(args, settings, game_dir)
    backend = ctx.backend
    repo = BlockRepository.load(game_dir, backend.layout, backend.serializer)
    pipeline = DumpPipeline(backend.codec, backend.layout, DumpWriter(out_dir))
    reports = pipeline.dump_all(repo.partitions)

    for report in reports:
        if not report.ok:
            print(
                f"block {report.label}: {report.status.value} at {report.stage} stage",
                file=sys.stderr,
            )

    ctx.remember()
    logger.info(f"Dumped {len(reports)} block(s) to {out_dir}")
    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    return run_tool(build_parser(), dump, argv)


if __name__ == "__main__":
    sys.exit(main())
