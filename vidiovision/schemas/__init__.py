"""Public schema exports."""

from .analysis import (
    AnalysisResult,
    HistoryItem,
    ImageUploadRequest,
    SessionPhase,
    SessionSnapshot,
)

__all__ = [
    "AnalysisResult",
    "HistoryItem",
    "ImageUploadRequest",
    "SessionPhase",
    "SessionSnapshot",
]
