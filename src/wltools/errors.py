"""
Exception hierarchy for wltools.

Every operational failure raised by the toolkit derives from WlToolsError so
the command line layer can map it to an exit code in one place.
"""

from typing import Optional


class WlToolsError(Exception):
    """Base class for all wltools errors."""

    exit_code = 2


class UsageError(WlToolsError):
    """Raised when a tool is invoked with missing or invalid arguments."""

    exit_code = 1


class ParseError(WlToolsError):
    """Raised when an operand, op string or location name cannot be parsed.

    Attributes:
        token: The offending input fragment, if known
    """

    def __init__(self, message: str, token: Optional[str] = None):
        super().__init__(message)
        self.token = token


class CodecError(WlToolsError):
    """Raised by a section codec when a block cannot be decoded or encoded."""


class EngineError(WlToolsError):
    """Raised by the world mutation engine when an operation cannot be applied."""


class PatchError(WlToolsError):
    """Raised when a direct byte patch would break a block's layout."""


class StorageError(WlToolsError):
    """Raised when reading or writing game files or dump output fails."""


class BackendError(WlToolsError):
    """Raised when the codec/engine backend cannot be resolved or created."""


class FatalInvariantError(WlToolsError):
    """Raised when committed world state cannot be written back onto blocks.

    In-memory state is already mutated when this is raised; the on-disk files
    have not been touched.
    """
