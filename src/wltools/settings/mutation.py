"""
Backend and mutation settings for wltools.
"""

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings

logger = logging.getLogger(__name__)

DEFAULT_ROSTER_SCHEMA = "standard"


class BackendSettings:
    """Manages which codec/engine backend the tools load."""

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    @property
    def factory(self) -> str:
        """Get the backend factory path ("package.module:factory")."""
        value = self.settings.value("backend/factory", "")
        return str(value) if value is not None else ""

    @factory.setter
    def factory(self, value: str) -> None:
        """Set the backend factory path."""
        self.settings.setValue("backend/factory", value.strip())
        self.settings.sync()


class MutationSettings:
    """Manages defaults for the mutating tools (tset, cheat)."""

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    def _get_bool(self, key: str, default: bool = False) -> bool:
        """Type-safe boolean retrieval from settings."""
        value = self.settings.value(key, default)
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() in ("true", "1", "yes")
        return bool(value) if value is not None else default

    @property
    def allow_partial(self) -> bool:
        """Commit ops applied before a failing op instead of discarding the batch."""
        return self._get_bool("mutation/allow_partial", False)

    @allow_partial.setter
    def allow_partial(self, value: bool) -> None:
        self.settings.setValue("mutation/allow_partial", value)
        self.settings.sync()

    @property
    def backup_on_write(self) -> bool:
        """Keep a .bak copy of each partition file before overwriting it."""
        return self._get_bool("mutation/backup_on_write", True)

    @backup_on_write.setter
    def backup_on_write(self, value: bool) -> None:
        self.settings.setValue("mutation/backup_on_write", value)
        self.settings.sync()

    @property
    def roster_schema(self) -> str:
        """Name of the party roster layout used by the attribute cheat."""
        value = self.settings.value("mutation/roster_schema", DEFAULT_ROSTER_SCHEMA)
        return str(value) if value else DEFAULT_ROSTER_SCHEMA

    @roster_schema.setter
    def roster_schema(self, value: str) -> None:
        self.settings.setValue("mutation/roster_schema", value)
        self.settings.sync()
