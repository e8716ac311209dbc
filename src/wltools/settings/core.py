"""
Core settings management for wltools.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from PySide6.QtCore import QSettings

from .types import ConfigVersion, ValidationResult
from .migration import SettingsMigrator
from .validation import SettingsValidator
from .paths import PathSettings
from .logging import LoggingSettings
from .mutation import BackendSettings, MutationSettings

logger = logging.getLogger(__name__)

ORGANIZATION_NAME = "wltools"
APPLICATION_NAME = "wltools"


class AppSettings:
    """
    Configuration management using QSettings.

    Provides type-safe access to tool settings with cross-platform storage
    and validation. When a settings file is given, it is read and written in
    INI format; otherwise the platform's native user storage is used.
    """

    def __init__(
        self,
        settings_file: Optional[Union[str, Path]] = None,
        profile: str = "default",
        read_only: bool = False,
    ):
        """Initialize settings.

        Args:
            settings_file: Explicit INI file to use instead of native storage
            profile: Settings profile name (default: "default")
            read_only: Do not stamp the configuration version; call
                ensure_version() before the first write
        """
        if settings_file is not None:
            self.settings = QSettings(str(settings_file), QSettings.Format.IniFormat)
        else:
            self.settings = QSettings(ORGANIZATION_NAME, APPLICATION_NAME)
        self.profile = profile

        # Use profile as a group: wltools/<profile>/...
        self.settings.beginGroup(profile)

        # Initialize subsystems
        self._migrator = SettingsMigrator(self.settings)
        self._validator = SettingsValidator(self)
        self._paths = PathSettings(self.settings)
        self._logging = LoggingSettings(self.settings)
        self._backend = BackendSettings(self.settings)
        self._mutation = MutationSettings(self.settings)

        if not read_only:
            self.ensure_version()

        logger.debug(
            f"Settings initialized for profile '{profile}', stored at: {self.settings.fileName()}"
        )

    # === SUBSYSTEM ACCESS ===

    @property
    def paths(self) -> PathSettings:
        """Access path settings subsystem."""
        return self._paths

    @property
    def logging(self) -> LoggingSettings:
        """Access logging settings subsystem."""
        return self._logging

    @property
    def backend(self) -> BackendSettings:
        """Access backend settings subsystem."""
        return self._backend

    @property
    def mutation(self) -> MutationSettings:
        """Access mutation settings subsystem."""
        return self._mutation

    # === VERSION AND FIRST RUN ===

    def ensure_version(self) -> None:
        """Stamp the configuration version on first use."""
        self._migrator.ensure_version()

    @property
    def is_first_run(self) -> bool:
        """Check if this is the first run of the tools."""
        value = self.settings.value("app/first_run", True)
        if isinstance(value, str):
            return value.lower() in ("true", "1", "yes")
        return bool(value)

    def set_first_run_complete(self) -> None:
        """Mark first run as complete."""
        self.settings.setValue("app/first_run", False)
        self.settings.sync()

    @property
    def version(self) -> str:
        """Get configuration version."""
        value = self.settings.value("app/version", ConfigVersion.CURRENT.value)
        return str(value) if value is not None else ConfigVersion.CURRENT.value

    # === DELEGATED SHORTCUTS ===

    @property
    def game_dir(self) -> Optional[Path]:
        """Get default game directory."""
        return self._paths.game_dir

    @game_dir.setter
    def game_dir(self, value: Optional[Path]) -> None:
        """Set default game directory."""
        self._paths.game_dir = value

    @property
    def backend_factory(self) -> str:
        """Get backend factory path."""
        return self._backend.factory

    @backend_factory.setter
    def backend_factory(self, value: str) -> None:
        """Set backend factory path."""
        self._backend.factory = value

    @property
    def console_logging(self) -> bool:
        """Check if console logging is enabled."""
        return self._logging.console_logging

    @property
    def console_log_level(self) -> str:
        """Get console logging level."""
        return self._logging.console_log_level

    @console_log_level.setter
    def console_log_level(self, value: str) -> None:
        """Set console logging level."""
        self._logging.console_log_level = value

    @property
    def console_use_colors(self) -> bool:
        """Check if console should use colors."""
        return self._logging.console_use_colors

    @property
    def file_logging(self) -> bool:
        """Check if file logging is enabled."""
        return self._logging.file_logging

    @property
    def log_file_path(self) -> str:
        """Get log file path."""
        return self._logging.log_file_path

    # === VALIDATION ===

    def validate(self) -> ValidationResult:
        """Validate current configuration."""
        return self._validator.validate()

    # === UTILITY METHODS ===

    def get_settings_file_path(self) -> str:
        """Get the file path where settings are stored."""
        return self.settings.fileName()

    def sync(self) -> None:
        """Force synchronization of settings to storage."""
        self.settings.sync()
