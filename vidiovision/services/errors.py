"""Error taxonomy shared by the analysis and session services."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Distinguishes failure sources even when users see one generic message."""

    IMAGE_DECODE = "image_decode"
    TRANSPORT = "transport"
    EMPTY_RESPONSE = "empty_response"
    MALFORMED_RESPONSE = "malformed_response"
    INCOMPLETE_RESPONSE = "incomplete_response"


class VidioVisionError(Exception):
    """Base class carrying an :class:`ErrorKind` tag."""

    kind: ErrorKind

    def __init__(self, message: str, *, kind: ErrorKind) -> None:
        super().__init__(message)
        self.kind = kind


class ImageDecodeError(VidioVisionError):
    """Raised when uploaded bytes or an encoded image cannot be decoded."""

    def __init__(self, message: str) -> None:
        super().__init__(message, kind=ErrorKind.IMAGE_DECODE)


class AnalysisError(VidioVisionError):
    """Raised when the analysis service fails or answers with unusable data."""


class HistoryItemNotFound(KeyError):
    """Raised when a history item id is not part of the current history."""


__all__ = [
    "AnalysisError",
    "ErrorKind",
    "HistoryItemNotFound",
    "ImageDecodeError",
    "VidioVisionError",
]
