"""
wltools-tset: remap transitions between locations.

Usage: wltools-tset --path <wl-dir> <op0> [op1] [...]

Each op is "<destination> <- <source>", both sides location pairs such as
"mars,shrine" or "[3 MARS], [7 SHRINE]".
"""

import argparse
import sys
from typing import Optional, Sequence

from ..errors import UsageError
from ..transform import TransformOrchestrator
from .common import EXIT_OK, ToolContext, create_parser, open_settings, resolve_game_dir, run_tool


def build_parser() -> argparse.ArgumentParser:
    parser = create_parser("wltools-tset", "Wasteland transition setter")
    parser.add_argument("-p", "--path", required=True, help="path of wasteland directory")
    parser.add_argument(
        "--allow-partial",
        action="store_true",
        default=None,
        help="write the ops applied before a failing op instead of discarding the batch",
    )
    parser.add_argument("--no-backup", action="store_true", help="do not keep .bak copies")
    parser.add_argument("ops", nargs="*", metavar="OP", help="<destination> <- <source>")
    return parser


def tset(args: argparse.Namespace) -> int:
    if not args.path:
        raise UsageError("empty --path argument")
    if not args.ops:
        raise UsageError("missing required `op0` argument")

    settings = open_settings(args)
    game_dir = resolve_game_dir(settings, args.path)
    ctx = ToolContext.from_args(args, settings, game_dir)

    mutation = ctx.settings.mutation
    allow_partial = mutation.allow_partial if args.allow_partial is None else args.allow_partial
    orchestrator = TransformOrchestrator(
        ctx.backend,
        allow_partial=allow_partial,
        backup=mutation.backup_on_write and not args.no_backup,
    )
    orchestrator.run(game_dir, args.ops)

    ctx.remember()
    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    return run_tool(build_parser(), tset, argv)


if __name__ == "__main__":
    sys.exit(main())
