"""
Logging configuration for wltools.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..settings import AppSettings

# Level names accepted by the --loglevel flag of every tool
CLI_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
    "panic": logging.CRITICAL,
}
DEFAULT_CLI_LEVEL = "warn"


class ColoredFormatter(logging.Formatter):
    """Formatter that colors the level name for console output."""

    # ANSI color codes
    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
        "RESET": "\033[0m",  # Reset
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, self.COLORS["RESET"])
        reset = self.COLORS["RESET"]

        formatted = super().format(record)

        # Color only the level name
        if record.levelname in formatted:
            formatted = formatted.replace(
                record.levelname, f"{color}{record.levelname}{reset}", 1
            )

        return formatted


class CSVFormatter(logging.Formatter):
    """CSV-safe formatter for file logging."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = self.formatTime(record, self.datefmt)
        level = record.levelname.ljust(8)
        duration = f"{int(record.relativeCreated)} ms"
        module = record.name
        line_no = str(record.lineno)
        message = record.getMessage()

        # Escape quotes the standard CSV way
        message = message.replace('"', '""')

        return f'"{timestamp}";{level};"{duration}";"{module}";"{line_no}";"{message}"'


def parse_cli_level(name: str) -> int:
    """Translate a --loglevel value into a logging level.

    Raises:
        ValueError: If the name is not one of CLI_LEVELS
    """
    try:
        return CLI_LEVELS[name.strip().lower()]
    except KeyError:
        raise ValueError(f"invalid log level: \"{name}\"") from None


def setup_logging(settings: "AppSettings", console_level: Optional[int] = None) -> None:
    """
    Setup logging with console and file handlers.

    Args:
        settings: AppSettings instance for all logging configuration
        console_level: Level chosen on the command line; overrides the
                       configured console level when given
    """
    console_enabled = settings.console_logging
    configured_level = settings.console_log_level
    use_colors = settings.console_use_colors and sys.stderr.isatty()
    file_enabled = settings.file_logging
    log_file = settings.log_file_path

    if console_level is None:
        console_level = getattr(logging, configured_level.upper(), logging.WARNING)

    # Root captures everything; handlers filter
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    project_logger = logging.getLogger("wltools")
    project_logger.setLevel(logging.DEBUG)

    # Clear any existing handlers
    root_logger.handlers.clear()

    # The console always shows errors even when disabled in the settings
    if not console_enabled:
        console_level = max(console_level, logging.ERROR)

    if use_colors:
        console_formatter: logging.Formatter = ColoredFormatter(
            fmt="%(asctime)s : %(levelname)-8s : %(message)s", datefmt="%H:%M:%S"
        )
    else:
        console_formatter = logging.Formatter(
            fmt="%(asctime)s : %(levelname)-8s : %(message)s", datefmt="%H:%M:%S"
        )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(console_level)
    console_handler.setFormatter(console_formatter)
    root_logger.addHandler(console_handler)

    # File handler with rotation - only if enabled
    log_path = None
    if file_enabled:
        try:
            log_path = Path(log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                log_file,
                maxBytes=10 * 1024 * 1024,  # 10MB
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(CSVFormatter(datefmt="%Y-%m-%d %H:%M:%S"))
            root_logger.addHandler(file_handler)
        except OSError as e:
            # If file logging fails, continue with console logging
            root_logger.warning(f"Could not setup file logging: {e}")
            log_path = None

    logger = logging.getLogger(__name__)
    logger.debug("Logging initialized")
    logger.debug(
        f"Console logging: {logging.getLevelName(console_level)} (colors: {use_colors})"
    )
    if log_path:
        logger.debug(f"File logging: DEBUG at {log_path.absolute()}")
