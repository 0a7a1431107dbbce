"""Client wrapper for interacting with Google Gemini models."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Mapping

import google.generativeai as genai
from google.api_core.exceptions import GoogleAPIError

from vidiovision.core.config import GeminiSettings

logger = logging.getLogger(__name__)


class GeminiModelError(RuntimeError):
    """Raised when Gemini cannot fulfill a request."""


class GeminiClient:
    """Issue schema-constrained multimodal requests against one Gemini model.

    Every call maps to exactly one ``generate_content`` request. There is no
    model fallback and no retry; callers decide what a failure means.
    """

    def __init__(self, settings: GeminiSettings) -> None:
        self._settings = settings
        # Configure the global client once per process.
        genai.configure(api_key=settings.api_key)

    async def generate_structured(
        self,
        *,
        prompt: str,
        image_bytes: bytes,
        mime_type: str,
        response_schema: Mapping[str, Any],
    ) -> str:
        """Send an inline image plus instruction and return the raw JSON text.

        An empty string means the model answered without any text part.
        """

        def _invoke() -> str:
            try:
                model = genai.GenerativeModel(
                    self._settings.model_name,
                    generation_config=genai.GenerationConfig(
                        response_mime_type="application/json",
                        response_schema=dict(response_schema),
                    ),
                )
                response = model.generate_content(
                    [
                        {"mime_type": mime_type, "data": image_bytes},
                        prompt,
                    ],
                    request_options={"timeout": self._settings.request_timeout},
                )
            except GoogleAPIError as exc:
                raise GeminiModelError(
                    f"Gemini vision generate_content failed: {exc}"
                ) from exc
            except Exception as exc:
                # Credential and transport errors from google.auth or the
                # HTTP stack do not derive from GoogleAPIError.
                raise GeminiModelError(
                    f"Gemini vision request could not be sent: {exc}"
                ) from exc
            return _response_text(response)

        logger.debug(
            "Requesting structured analysis from %s (%s, %d bytes)",
            self._settings.model_name,
            mime_type,
            len(image_bytes),
        )
        return await asyncio.to_thread(_invoke)


def _response_text(response: Any) -> str:
    """Return the response text, treating blocked or part-less replies as empty."""
    try:
        return response.text or ""
    except ValueError:
        # ``.text`` raises when the candidate carries no text parts.
        logger.warning("Gemini returned a response without text parts.")
        return ""


__all__ = ["GeminiClient", "GeminiModelError"]
