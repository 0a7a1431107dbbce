"""
FastAPI routes exposing the image analysis session.

Each endpoint maps to one user action and answers with the resulting session
snapshot; the session itself is never mutated outside the controller.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse

from vidiovision.dependencies import get_app_settings, get_session_controller
from vidiovision.schemas import HistoryItem, ImageUploadRequest, SessionSnapshot
from vidiovision.services import HistoryItemNotFound, ImageDecodeError
from vidiovision.services.image_codec import decode_base64

router = APIRouter()
logger = logging.getLogger(__name__)

_INVALID_IMAGE_DETAIL = "Could not read the uploaded image."


@router.get("/health", status_code=HTTPStatus.OK)
async def healthcheck(
    settings: Annotated[Any, Depends(get_app_settings)],
) -> dict:
    """Simple health endpoint for monitoring."""
    return {"status": "ok", "environment": settings.environment}


@router.get("/session", response_model=SessionSnapshot)
async def read_session(
    controller: Annotated[Any, Depends(get_session_controller)],
) -> SessionSnapshot:
    return controller.snapshot()


@router.post("/session/image", response_model=SessionSnapshot)
async def upload_image(
    payload: ImageUploadRequest,
    controller: Annotated[Any, Depends(get_session_controller)],
) -> SessionSnapshot:
    """Decode an uploaded image and make it the current selection."""
    try:
        data = decode_base64(payload.file_b64)
        return controller.load_image(data, payload.mime_type)
    except ImageDecodeError as exc:
        logger.warning(
            "Rejected upload %s: %s", payload.filename or "<unnamed>", exc
        )
        raise HTTPException(
            status_code=HTTPStatus.BAD_REQUEST,
            detail=_INVALID_IMAGE_DETAIL,
        ) from exc


@router.delete("/session/image", response_model=SessionSnapshot)
async def clear_image(
    controller: Annotated[Any, Depends(get_session_controller)],
) -> SessionSnapshot:
    return controller.clear_image()


@router.post("/session/analyze", response_model=SessionSnapshot)
async def analyze_image(
    controller: Annotated[Any, Depends(get_session_controller)],
) -> SessionSnapshot:
    """Analyze the selected image; failures are reported in the snapshot."""
    if controller.is_analyzing:
        raise HTTPException(
            status_code=HTTPStatus.CONFLICT,
            detail="An analysis is already in progress.",
        )
    started = await controller.analyze()
    if not started:
        raise HTTPException(
            status_code=HTTPStatus.CONFLICT,
            detail="Select an image before requesting an analysis.",
        )
    return controller.snapshot()


@router.get("/session/prompt", response_class=PlainTextResponse)
async def read_video_prompt(
    controller: Annotated[Any, Depends(get_session_controller)],
) -> str:
    """Return the current video prompt as plain text for copying."""
    prompt = controller.prompt_text()
    if prompt is None:
        raise HTTPException(
            status_code=HTTPStatus.NOT_FOUND,
            detail="No analysis result to copy.",
        )
    return prompt


@router.get("/session/history", response_model=list[HistoryItem])
async def list_history(
    controller: Annotated[Any, Depends(get_session_controller)],
) -> list[HistoryItem]:
    return controller.history


@router.post("/session/history/{item_id}/select", response_model=SessionSnapshot)
async def select_history_item(
    item_id: str,
    controller: Annotated[Any, Depends(get_session_controller)],
) -> SessionSnapshot:
    try:
        return controller.select_history_item(item_id)
    except HistoryItemNotFound as exc:
        raise HTTPException(
            status_code=HTTPStatus.NOT_FOUND,
            detail=f"History item {item_id} not found.",
        ) from exc


@router.post("/session/reset", response_model=SessionSnapshot)
async def reset_session(
    controller: Annotated[Any, Depends(get_session_controller)],
) -> SessionSnapshot:
    return controller.reset()


__all__ = ["router"]
