"""Utility helpers for wltools."""

from .logging_config import setup_logging, parse_cli_level, CLI_LEVELS

__all__ = ["setup_logging", "parse_cli_level", "CLI_LEVELS"]
