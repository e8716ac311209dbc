"""
wltools-transloc: print every transition of both partitions as JSON.

Usage: wltools-transloc [<wl-dir>]
"""

import argparse
import sys
from typing import Optional, Sequence

from ..backend.models import ACTION_CLASS_TRANSITION
from ..blocks.repository import BlockRepository
from ..dump.writer import dumps
from ..transitions import games_report
from .common import EXIT_OK, ToolContext, create_parser, open_settings, resolve_game_dir, run_tool


def build_parser() -> argparse.ArgumentParser:
    parser = create_parser("wltools-transloc", "List the transitions of a Wasteland save")
    parser.add_argument("wl_dir", nargs="?", metavar="wl-dir", help="game directory")
    parser.add_argument(
        "--transition-class",
        type=lambda s: int(s, 0),
        default=ACTION_CLASS_TRANSITION,
        help=f"action class of transition cells (default: 0x{ACTION_CLASS_TRANSITION:02x})",
    )
    return parser


def transloc(args: argparse.Namespace) -> int:
    settings = open_settings(args)
    game_dir = resolve_game_dir(settings, args.wl_dir)
    ctx = ToolContext.from_args(args, settings, game_dir)

    backend = ctx.backend
    repo = BlockRepository.load(game_dir, backend.layout, backend.serializer)
    report = games_report(repo.partitions, backend, args.transition_class)

    sys.stdout.write(dumps(report).decode("utf-8") + "\n")
    ctx.remember()
    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    return run_tool(build_parser(), transloc, argv)


if __name__ == "__main__":
    sys.exit(main())
