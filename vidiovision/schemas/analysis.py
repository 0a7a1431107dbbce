"""
Pydantic models for image analysis results and the session exposed to clients.

Field names are snake_case in Python and camelCase on the wire, matching the
response schema requested from Gemini.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_WIRE_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    frozen=True,
)


class AnalysisResult(BaseModel):
    """Structured cinematic reading of a single image."""

    model_config = _WIRE_CONFIG

    concept: str = Field(..., description="Short summary of the image.")
    video_prompt: str = Field(
        ..., description="Full cinematic motion prompt for video generation."
    )
    style_keywords: list[str] = Field(
        ...,
        description="Ordered style descriptors; five are requested but not enforced.",
    )
    suggested_motion: str = Field(
        ..., description="Recommended camera movement (e.g., Dolly Zoom, Orbit)."
    )
    lens_type: str = Field(..., description="Lens recommendation for the shot.")
    cinematographic_style: str = Field(
        ..., description="Physical camera rig or setup (e.g., Static Tripod)."
    )


class HistoryItem(BaseModel):
    """A past analysis retained together with the image that produced it."""

    model_config = _WIRE_CONFIG

    id: str = Field(..., description="Process-unique identifier.")
    image_url: str = Field(..., description="Encoded image (data URL) analyzed.")
    result: AnalysisResult
    timestamp: datetime = Field(..., description="UTC creation instant.")


class SessionPhase(str, Enum):
    """Lifecycle phase of the upload -> analyze -> display cycle."""

    IDLE = "idle"
    IMAGE_SELECTED = "image_selected"
    ANALYZING = "analyzing"
    RESULT_SHOWN = "result_shown"
    FAILED = "failed"


class SessionSnapshot(BaseModel):
    """Read-only view of the session handed to the presentation layer."""

    model_config = _WIRE_CONFIG

    phase: SessionPhase
    selected_image: Optional[str] = None
    is_analyzing: bool = False
    result: Optional[AnalysisResult] = None
    error: Optional[str] = None
    history: list[HistoryItem] = Field(default_factory=list)


class ImageUploadRequest(BaseModel):
    """Raw image supplied by the user."""

    filename: Optional[str] = Field(
        None, description="Original file name, used for logging only."
    )
    mime_type: str = Field(
        ..., description="MIME type of the image (e.g., image/png)."
    )
    file_b64: str = Field(..., description="Base64-encoded file contents.")


__all__ = [
    "AnalysisResult",
    "HistoryItem",
    "ImageUploadRequest",
    "SessionPhase",
    "SessionSnapshot",
]
