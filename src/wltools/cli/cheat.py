"""
wltools-cheat: disable random encounters and max out the party.

Usage: wltools-cheat [<wl-dir>] [--skip-encounters] [--skip-roster]
                     [--schema NAME] [--dry-run]
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

from ..blocks.repository import BlockRepository
from ..cheats import ROSTER_SCHEMAS, CheatPatcher, PatchSummary, get_roster_layout
from ..errors import UsageError
from .common import EXIT_OK, ToolContext, create_parser, open_settings, resolve_game_dir, run_tool

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = create_parser("wltools-cheat", "Wasteland save cheats")
    parser.add_argument("wl_dir", nargs="?", metavar="wl-dir", help="game directory")
    parser.add_argument(
        "--skip-encounters", action="store_true", help="keep the random encounter frequency"
    )
    parser.add_argument(
        "--skip-roster", action="store_true", help="leave party attributes and inventory alone"
    )
    parser.add_argument(
        "--schema",
        choices=sorted(ROSTER_SCHEMAS),
        help="party roster layout (default: configured schema)",
    )
    parser.add_argument(
        "--dry-run", action="store_true", help="apply in memory and report, write nothing"
    )
    parser.add_argument("--no-backup", action="store_true", help="do not keep .bak copies")
    return parser


def cheat(args: argparse.Namespace) -> int:
    if args.skip_encounters and args.skip_roster:
        raise UsageError("nothing to do: both --skip-encounters and --skip-roster given")

    settings = open_settings(args)
    game_dir = resolve_game_dir(settings, args.wl_dir)
    ctx = ToolContext.from_args(args, settings, game_dir)
    backend = ctx.backend
    mutation = ctx.settings.mutation

    roster = get_roster_layout(args.schema or mutation.roster_schema)
    repo = BlockRepository.load(game_dir, backend.layout, backend.serializer)
    patcher = CheatPatcher(backend.codec, backend.layout)

    summary = PatchSummary()
    if not args.skip_encounters:
        summary.encounter_blocks = patcher.zero_encounters(repo.partitions)
    if not args.skip_roster:
        summary.roster_bytes = patcher.apply_roster(repo.partitions, roster)

    print(
        f"encounter blocks changed: {summary.encounter_blocks}, "
        f"roster bytes changed: {summary.roster_bytes}"
    )
    if args.dry_run:
        logger.info("Dry run, game files left untouched")
        return EXIT_OK

    if summary.changed:
        repo.write(backup=mutation.backup_on_write and not args.no_backup)
    else:
        logger.info("Nothing changed, game files left untouched")
    ctx.remember()
    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    return run_tool(build_parser(), cheat, argv)


if __name__ == "__main__":
    sys.exit(main())
