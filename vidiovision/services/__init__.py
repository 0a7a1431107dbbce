"""Service layer exports."""

from .analysis import VideoPromptAnalyzer, parse_analysis_payload
from .errors import (
    AnalysisError,
    ErrorKind,
    HistoryItemNotFound,
    ImageDecodeError,
    VidioVisionError,
)
from .image_codec import DecodedImage, decode_data_url, encode_data_url
from .session import ANALYSIS_FAILED_MESSAGE, SessionController

__all__ = [
    "ANALYSIS_FAILED_MESSAGE",
    "AnalysisError",
    "DecodedImage",
    "ErrorKind",
    "HistoryItemNotFound",
    "ImageDecodeError",
    "SessionController",
    "VidioVisionError",
    "VideoPromptAnalyzer",
    "decode_data_url",
    "encode_data_url",
    "parse_analysis_payload",
]
