"""
Path-related settings for wltools.
"""

from pathlib import Path
from typing import List, Optional, Union, TYPE_CHECKING, cast

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings

MAX_RECENT_DIRS = 10


class PathSettings:
    """Manages path-related settings."""

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    def _get_str(self, key: str, default: str = "") -> str:
        """Type-safe string retrieval from settings."""
        value = self.settings.value(key, default)
        return str(value) if value is not None else default

    def _get_list(self, key: str, default: Optional[List[str]] = None) -> List[str]:
        """Type-safe list retrieval from settings."""
        if default is None:
            default = []
        value = self.settings.value(key, default)
        if isinstance(value, list):
            return [
                str(item) if item is not None else ""
                for item in cast(list[object], value)
            ]
        # INI storage returns a single-element list as a plain string
        if isinstance(value, str) and value:
            return [value]
        return default

    @property
    def game_dir(self) -> Optional[Path]:
        """Get the default game directory (holds the partition files)."""
        path_str = self._get_str("paths/game_dir", "")
        return Path(path_str) if path_str else None

    @game_dir.setter
    def game_dir(self, value: Optional[Path]) -> None:
        """Set the default game directory."""
        self.settings.setValue("paths/game_dir", str(value) if value else "")
        self.settings.sync()

    @property
    def dump_dir(self) -> Optional[Path]:
        """Get the default dump output directory."""
        path_str = self._get_str("paths/dump_dir", "")
        return Path(path_str) if path_str else None

    @dump_dir.setter
    def dump_dir(self, value: Optional[Path]) -> None:
        """Set the default dump output directory."""
        self.settings.setValue("paths/dump_dir", str(value) if value else "")
        self.settings.sync()

    @property
    def recent_dirs(self) -> List[str]:
        """Get list of recently processed game directories."""
        return self._get_list("paths/recent_dirs", [])

    def add_recent_dir(self, dir_path: Union[str, Path]) -> None:
        """Add directory to the recent list (max 10 items).

        Entries that no longer exist are dropped.
        """
        dir_str = str(dir_path)
        recent = [d for d in self.recent_dirs if d != dir_str and Path(d).exists()]
        recent.insert(0, dir_str)
        recent = recent[:MAX_RECENT_DIRS]

        self.settings.setValue("paths/recent_dirs", recent)
        self.settings.sync()
