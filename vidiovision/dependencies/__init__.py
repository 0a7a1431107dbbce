"""Expose dependency helpers for FastAPI routers."""

from .clients import (
    get_gemini_client,
    get_session_controller,
    get_video_prompt_analyzer,
)
from .config import get_app_settings

__all__ = [
    "get_app_settings",
    "get_gemini_client",
    "get_session_controller",
    "get_video_prompt_analyzer",
]
