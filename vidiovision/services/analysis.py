"""Service that asks Gemini for a cinematic video prompt describing an image."""

from __future__ import annotations

import json
import logging
from textwrap import dedent
from typing import Any, Protocol

from pydantic import ValidationError

from vidiovision.clients.gemini import GeminiModelError
from vidiovision.schemas import AnalysisResult
from vidiovision.services.errors import AnalysisError, ErrorKind

logger = logging.getLogger(__name__)


ANALYSIS_PROMPT = dedent(
    """
    Analyze this image carefully. Understand its subject, mood, lighting, and
    artistic style. Then write a highly detailed cinematic video generation
    prompt that would bring this specific image to life.

    Provide exactly these fields:
    - concept: a brief summary of the image.
    - videoPrompt: the full motion prompt.
    - styleKeywords: 5 keywords describing the visual style.
    - suggestedMotion: the recommended camera movement (e.g., "Dolly Zoom",
      "Orbit", "Pan").
    - lensType: the lens that was likely used or should be used for this shot
      (e.g., "Wide Angle 24mm", "Cinematic Anamorphic", "Telephoto 85mm",
      "Macro Lens", "Fish-eye").
    - cinematographicStyle: the physical camera setup (e.g., "Handheld
      Shaky-cam", "Smooth Steadicam", "Static Tripod", "Drone Overhead",
      "GoPro POV").

    Return the result in JSON format.
    """
).strip()

REQUIRED_FIELDS: tuple[str, ...] = (
    "concept",
    "videoPrompt",
    "styleKeywords",
    "suggestedMotion",
    "lensType",
    "cinematographicStyle",
)

RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "concept": {"type": "STRING"},
        "videoPrompt": {"type": "STRING"},
        "styleKeywords": {"type": "ARRAY", "items": {"type": "STRING"}},
        "suggestedMotion": {"type": "STRING"},
        "lensType": {"type": "STRING"},
        "cinematographicStyle": {"type": "STRING"},
    },
    "required": list(REQUIRED_FIELDS),
}


class StructuredVisionClient(Protocol):
    async def generate_structured(
        self,
        *,
        prompt: str,
        image_bytes: bytes,
        mime_type: str,
        response_schema: dict[str, Any],
    ) -> str: ...


class VideoPromptAnalyzer:
    """Turn image bytes into a validated :class:`AnalysisResult`.

    Stateless apart from the wrapped client. Each call issues exactly one
    request and never retries.
    """

    def __init__(self, gemini_client: StructuredVisionClient) -> None:
        self._gemini = gemini_client

    async def analyze(self, image_bytes: bytes, mime_type: str) -> AnalysisResult:
        try:
            raw = await self._gemini.generate_structured(
                prompt=ANALYSIS_PROMPT,
                image_bytes=image_bytes,
                mime_type=mime_type,
                response_schema=RESPONSE_SCHEMA,
            )
        except GeminiModelError as exc:
            raise AnalysisError(str(exc), kind=ErrorKind.TRANSPORT) from exc

        return parse_analysis_payload(raw)


def parse_analysis_payload(raw: str | None) -> AnalysisResult:
    """Decode the model's JSON text into an :class:`AnalysisResult`."""
    payload = (raw or "").strip()
    if not payload:
        raise AnalysisError(
            "No response from the analysis service.",
            kind=ErrorKind.EMPTY_RESPONSE,
        )

    try:
        data = json.loads(payload)
    except json.JSONDecodeError as exc:
        raise AnalysisError(
            f"Analysis response is not valid JSON: {exc.msg}",
            kind=ErrorKind.MALFORMED_RESPONSE,
        ) from exc

    if not isinstance(data, dict):
        raise AnalysisError(
            "Analysis response is not a JSON object.",
            kind=ErrorKind.MALFORMED_RESPONSE,
        )

    try:
        return AnalysisResult.model_validate(data)
    except ValidationError as exc:
        missing = [field for field in REQUIRED_FIELDS if field not in data]
        logger.debug("Rejected analysis payload: %s", exc.errors())
        raise AnalysisError(
            "Analysis response does not match the expected shape"
            + (f" (missing: {', '.join(missing)})." if missing else "."),
            kind=ErrorKind.INCOMPLETE_RESPONSE,
        ) from exc


__all__ = [
    "ANALYSIS_PROMPT",
    "REQUIRED_FIELDS",
    "RESPONSE_SCHEMA",
    "VideoPromptAnalyzer",
    "parse_analysis_payload",
]
