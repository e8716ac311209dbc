"""Transform op language and the mutation/commit orchestrator."""

from .models import LocPair, TransformOp
from .orchestrator import TransformOrchestrator, TransformResult
from .parser import TransformOpParser

__all__ = [
    "LocPair",
    "TransformOp",
    "TransformOrchestrator",
    "TransformResult",
    "TransformOpParser",
]
