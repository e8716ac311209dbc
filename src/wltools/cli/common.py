"""
Shared command line plumbing for the wltools tools.

Every tool builds its parser with create_parser(), opens the settings
read-only, resolves its directories, turns the parsed arguments into a
ToolContext (logging, checked settings, backend) and runs its body through
run_tool(), which maps errors to exit codes:

    0  success
    1  usage error (bad arguments, invalid settings)
    2  operational error
"""

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, NoReturn, Optional, Sequence

from .. import __version__
from ..backend.interfaces import Backend
from ..backend.loader import load_backend, resolve_backend_path
from ..errors import UsageError, WlToolsError
from ..settings import AppSettings, ConfigError
from ..utils.logging_config import CLI_LEVELS, parse_cli_level, setup_logging

EXIT_OK = 0


class ToolArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        raise UsageError(message)


def create_parser(prog: str, description: str) -> ToolArgumentParser:
    """Create a parser carrying the options every tool accepts."""
    parser = ToolArgumentParser(prog=prog, description=description)
    parser.add_argument(
        "-l",
        "--loglevel",
        help=f"log level; one of: {', '.join(CLI_LEVELS)} (default: configured level, warn)",
    )
    parser.add_argument(
        "--backend", help="backend factory as package.module:factory (overrides settings)"
    )
    parser.add_argument("--config", type=Path, help="settings INI file to use")
    parser.add_argument("--profile", default="default", help="settings profile (default: default)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def open_settings(args: argparse.Namespace) -> AppSettings:
    """Open the settings store without writing to it."""
    return AppSettings(settings_file=args.config, profile=args.profile, read_only=True)


def resolve_game_dir(settings: AppSettings, explicit: Optional[str]) -> Path:
    """Resolve the game directory from an argument or the settings.

    Raises:
        UsageError: If neither names an existing directory
    """
    if explicit:
        path = Path(explicit)
    elif settings.game_dir is not None:
        path = settings.game_dir
    else:
        raise UsageError("missing game directory")
    if not path.is_dir():
        raise UsageError(f"game directory does not exist: {path}")
    return path


@dataclass
class ToolContext:
    """Everything a tool body needs besides its own arguments."""

    settings: AppSettings
    backend: Backend
    log_level: int
    game_dir: Path

    @classmethod
    def from_args(
        cls, args: argparse.Namespace, settings: AppSettings, game_dir: Path
    ) -> "ToolContext":
        """Configure logging, check the settings and load the backend.

        Nothing is written to the settings store before the log level and
        the settings values have been checked.

        Raises:
            UsageError: If the log level is invalid
            ConfigError: If the settings are invalid
            BackendError: If the backend cannot be loaded
        """
        log_level = None
        if args.loglevel is not None:
            try:
                log_level = parse_cli_level(args.loglevel)
            except ValueError as e:
                raise UsageError(str(e)) from e
        setup_logging(settings, console_level=log_level)

        logger = logging.getLogger(__name__)
        validation = settings.validate()
        for warning in validation.warnings:
            logger.debug(f"Configuration warning: {warning}")
        if not validation.is_valid:
            for error in validation.errors:
                logger.error(f"Configuration error: {error}")
            raise ConfigError("configuration validation failed: " + "; ".join(validation.errors))

        settings.ensure_version()
        if settings.is_first_run:
            logger.info(f"First run, settings stored at {settings.get_settings_file_path()}")
            settings.set_first_run_complete()
        else:
            logger.debug(f"Configuration loaded from {settings.get_settings_file_path()}")

        backend = load_backend(resolve_backend_path(args.backend, settings))
        if log_level is None:
            log_level = getattr(logging, settings.console_log_level.upper(), logging.WARNING)
        return cls(settings=settings, backend=backend, log_level=log_level, game_dir=game_dir)

    def remember(self) -> None:
        """Record the processed directory in the recent list."""
        self.settings.paths.add_recent_dir(self.game_dir.resolve())


def run_tool(
    parser: ToolArgumentParser,
    body: Callable[[argparse.Namespace], int],
    argv: Optional[Sequence[str]] = None,
) -> int:
    """Parse argv and run body, mapping wltools errors to exit codes."""
    try:
        args = parser.parse_args(argv)
        return body(args)
    except WlToolsError as e:
        print(f"* error: {e}", file=sys.stderr)
        return e.exit_code


def split_positionals(values: List[str], names: Sequence[str]) -> List[Optional[str]]:
    """Right-align optional leading positionals.

    With names ("wl-dir", "out-dir") and one value, the value is the
    out-dir and wl-dir is None.

    Raises:
        UsageError: If more values than names are given
    """
    if len(values) > len(names):
        raise UsageError(f"too many arguments: expected at most {len(names)}, got {len(values)}")
    return [None] * (len(names) - len(values)) + list(values)
