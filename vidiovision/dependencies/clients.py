"""
Factory functions to provide shared clients and services as FastAPI dependencies.
"""

from functools import lru_cache

from vidiovision.clients import GeminiClient
from vidiovision.core.config import get_settings
from vidiovision.services import SessionController, VideoPromptAnalyzer


@lru_cache()
def _settings():
    """Internal helper to cache settings for client factories."""
    return get_settings()


@lru_cache()
def get_gemini_client() -> GeminiClient:
    """Provide Gemini client instance."""
    settings = _settings()
    return GeminiClient(settings.gemini)


def get_video_prompt_analyzer() -> VideoPromptAnalyzer:
    """Build the image analyzer on top of the shared Gemini client."""
    return VideoPromptAnalyzer(get_gemini_client())


@lru_cache()
def get_session_controller() -> SessionController:
    """Provide the process-wide session controller."""
    settings = _settings()
    return SessionController(
        get_video_prompt_analyzer(),
        history_limit=settings.history_limit,
    )


__all__ = [
    "get_gemini_client",
    "get_session_controller",
    "get_video_prompt_analyzer",
]
