"""
Configuration type definitions and exceptions for wltools.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List

from ..errors import UsageError


class ConfigVersion(Enum):
    """Configuration version for migration support."""
    V1_0 = "1.0"
    CURRENT = V1_0


class ConfigError(UsageError):
    """Raised when configuration is invalid or cannot be accessed."""
    pass


@dataclass
class ValidationResult:
    """Result of configuration validation."""
    is_valid: bool
    errors: List[str]
    warnings: List[str]
