"""
Settings validation system for wltools.
"""

import logging
from pathlib import Path
from typing import List, TYPE_CHECKING

from ..cheats.layout import ROSTER_SCHEMAS
from .logging import VALID_LEVELS
from .types import ValidationResult

if TYPE_CHECKING:
    from .core import AppSettings

logger = logging.getLogger(__name__)


class SettingsValidator:
    """Validates configuration settings."""

    def __init__(self, settings: "AppSettings"):
        self.settings = settings

    def validate(self) -> ValidationResult:
        """Validate current configuration."""
        errors: List[str] = []
        warnings: List[str] = []

        # The default game directory is only a fallback; tools check it when used
        game_dir = self.settings.paths.game_dir
        if game_dir:
            if not game_dir.exists():
                warnings.append(f"Game directory does not exist: {game_dir}")
            elif not game_dir.is_dir():
                warnings.append(f"Game directory is not a directory: {game_dir}")
        else:
            warnings.append("Game directory not set")

        if not self.settings.backend_factory:
            warnings.append("Backend factory not set")
        elif ":" in self.settings.backend_factory and not self.settings.backend_factory.split(":", 1)[1]:
            errors.append(f"Backend factory has an empty factory name: {self.settings.backend_factory}")

        schema = self.settings.mutation.roster_schema
        if schema not in ROSTER_SCHEMAS:
            errors.append(
                f"Unknown roster schema: {schema} (known: {', '.join(sorted(ROSTER_SCHEMAS))})"
            )

        if self.settings.logging.console_log_level.upper() not in VALID_LEVELS:
            errors.append(f"Invalid console log level: {self.settings.logging.console_log_level}")

        for dir_path in self.settings.paths.recent_dirs:
            if not Path(dir_path).exists():
                warnings.append(f"Recent directory no longer exists: {dir_path}")

        return ValidationResult(
            is_valid=len(errors) == 0, errors=errors, warnings=warnings
        )
