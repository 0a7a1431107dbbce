"""In-memory controller for the upload -> analyze -> display cycle."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, List, Optional, Protocol
from uuid import uuid4

from vidiovision.schemas import (
    AnalysisResult,
    HistoryItem,
    SessionPhase,
    SessionSnapshot,
)
from vidiovision.services.errors import (
    ErrorKind,
    HistoryItemNotFound,
    VidioVisionError,
)
from vidiovision.services.image_codec import decode_data_url, encode_data_url

logger = logging.getLogger(__name__)

ANALYSIS_FAILED_MESSAGE = "Failed to analyze image. Please try again."
DEFAULT_HISTORY_LIMIT = 10


class ImageAnalyzer(Protocol):
    async def analyze(self, image_bytes: bytes, mime_type: str) -> AnalysisResult: ...


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_item_id() -> str:
    return uuid4().hex


@dataclass(slots=True)
class SessionState:
    """Mutable session fields. Only :class:`SessionController` touches these."""

    phase: SessionPhase = SessionPhase.IDLE
    selected_image: Optional[str] = None
    is_analyzing: bool = False
    result: Optional[AnalysisResult] = None
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    history: List[HistoryItem] = field(default_factory=list)
    # Bumped whenever the displayed image changes; responses tagged with an
    # older generation are dropped on arrival.
    generation: int = 0

    def show_image(self, image: Optional[str], result: Optional[AnalysisResult]) -> None:
        self.selected_image = image
        self.result = result
        self.error = None
        self.error_kind = None
        self.phase = SessionPhase.IMAGE_SELECTED if image else SessionPhase.IDLE
        self.generation += 1

    def push_history(self, item: HistoryItem, limit: int) -> None:
        self.history.insert(0, item)
        del self.history[limit:]


class SessionController:
    """Own the session state and expose it only through snapshots and actions.

    At most one analysis is outstanding at any time. A second ``analyze`` call
    while one is running returns ``False`` without issuing a request.
    """

    def __init__(
        self,
        analyzer: ImageAnalyzer,
        *,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
        clock: Callable[[], datetime] = _utcnow,
        id_factory: Callable[[], str] = _new_item_id,
    ) -> None:
        if history_limit < 1:
            raise ValueError("history_limit must be at least 1")
        self._analyzer = analyzer
        self._history_limit = history_limit
        self._clock = clock
        self._id_factory = id_factory
        self._state = SessionState()

    @property
    def is_analyzing(self) -> bool:
        return self._state.is_analyzing

    @property
    def last_error_kind(self) -> Optional[ErrorKind]:
        return self._state.error_kind

    @property
    def history(self) -> list[HistoryItem]:
        return list(self._state.history)

    def snapshot(self) -> SessionSnapshot:
        state = self._state
        phase = SessionPhase.ANALYZING if state.is_analyzing else state.phase
        return SessionSnapshot(
            phase=phase,
            selected_image=state.selected_image,
            is_analyzing=state.is_analyzing,
            result=state.result,
            error=state.error,
            history=list(state.history),
        )

    def load_image(self, data: bytes, mime_type: str) -> SessionSnapshot:
        """Encode raw upload bytes and make them the selected image.

        Raises ``ImageDecodeError`` and leaves the session untouched when the
        bytes or MIME type are unusable.
        """
        encoded = encode_data_url(data, mime_type)
        self._state.show_image(encoded, None)
        logger.info("Image selected (%s, %d bytes)", mime_type, len(data))
        return self.snapshot()

    def select_image(self, encoded_image: str) -> SessionSnapshot:
        """Select an already encoded image (data URL)."""
        decode_data_url(encoded_image)
        self._state.show_image(encoded_image, None)
        return self.snapshot()

    def clear_image(self) -> SessionSnapshot:
        self._state.show_image(None, None)
        return self.snapshot()

    def can_analyze(self) -> bool:
        return self._state.selected_image is not None and not self._state.is_analyzing

    async def analyze(self) -> bool:
        """Run one analysis of the selected image.

        Returns ``False`` when the action was rejected as a no-op, ``True``
        once a request was issued and has completed, successfully or not.
        Failures never propagate past this method.
        """
        if not self.can_analyze():
            logger.info(
                "Analyze ignored: %s",
                "analysis already in progress"
                if self._state.is_analyzing
                else "no image selected",
            )
            return False

        state = self._state
        image = state.selected_image
        generation = state.generation
        state.is_analyzing = True
        state.error = None
        state.error_kind = None

        try:
            decoded = decode_data_url(image)
            result = await self._analyzer.analyze(decoded.data, decoded.mime_type)
        except Exception as exc:
            if self._is_stale(generation):
                logger.info("Discarding failure for a superseded image: %s", exc)
                return True
            kind = exc.kind if isinstance(exc, VidioVisionError) else ErrorKind.TRANSPORT
            logger.exception("Image analysis failed (%s)", kind.value)
            self._state.error = ANALYSIS_FAILED_MESSAGE
            self._state.error_kind = kind
            self._state.phase = SessionPhase.FAILED
            return True
        finally:
            self._state.is_analyzing = False

        if self._is_stale(generation):
            logger.info("Discarding analysis result for a superseded image.")
            return True

        self._state.result = result
        self._state.phase = SessionPhase.RESULT_SHOWN
        self._state.push_history(
            HistoryItem(
                id=self._id_factory(),
                image_url=image,
                result=result,
                timestamp=self._clock(),
            ),
            self._history_limit,
        )
        logger.info("Analysis complete: %s", result.concept)
        return True

    def select_history_item(self, item_id: str) -> SessionSnapshot:
        """Restore a past analysis as the current image and result."""
        for item in self._state.history:
            if item.id == item_id:
                self._state.show_image(item.image_url, item.result)
                return self.snapshot()
        raise HistoryItemNotFound(item_id)

    def prompt_text(self) -> Optional[str]:
        """Return the video prompt currently on display, if any."""
        result = self._state.result
        return result.video_prompt if result else None

    def reset(self) -> SessionSnapshot:
        """Return every field to its initial value, history included.

        An analysis still in flight keeps ``is_analyzing`` set until it
        completes; its response is discarded.
        """
        in_flight = self._state.is_analyzing
        generation = self._state.generation + 1
        self._state = SessionState(is_analyzing=in_flight, generation=generation)
        logger.info("Session reset")
        return self.snapshot()

    def _is_stale(self, generation: int) -> bool:
        return self._state.generation != generation


__all__ = [
    "ANALYSIS_FAILED_MESSAGE",
    "DEFAULT_HISTORY_LIMIT",
    "SessionController",
    "SessionState",
]
