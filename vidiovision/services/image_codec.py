"""Conversion between raw image bytes and self-describing data URLs."""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass

from vidiovision.services.errors import ImageDecodeError

_DATA_SCHEME = "data"
_BASE64_MARKER = "base64"


@dataclass(frozen=True, slots=True)
class DecodedImage:
    """An image split back into MIME type and payload."""

    mime_type: str
    data: bytes


def decode_base64(payload: str) -> bytes:
    """Strictly decode standard base64, rejecting stray characters."""
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ImageDecodeError("Image payload is not valid base64.") from exc


def _check_mime_type(mime_type: str) -> str:
    cleaned = mime_type.strip().lower()
    if not cleaned.startswith("image/") or cleaned == "image/":
        raise ImageDecodeError(f"Unsupported content type {mime_type!r}.")
    return cleaned


def encode_data_url(data: bytes, mime_type: str) -> str:
    """Build ``data:<mime>;base64,<payload>`` for the given image bytes."""
    if not data:
        raise ImageDecodeError("Image is empty.")
    mime = _check_mime_type(mime_type)
    payload = base64.b64encode(data).decode("ascii")
    return f"{_DATA_SCHEME}:{mime};{_BASE64_MARKER},{payload}"


def decode_data_url(data_url: str) -> DecodedImage:
    """Split an encoded image into its MIME type and raw bytes.

    The header before the first ``,`` must read ``data:<mime>;base64``; the
    MIME type is the segment between ``:`` and the first ``;``.
    """
    header, sep, payload = data_url.partition(",")
    if not sep:
        raise ImageDecodeError("Encoded image has no payload segment.")

    scheme, colon, params = header.partition(":")
    if not colon or scheme.strip().lower() != _DATA_SCHEME:
        raise ImageDecodeError("Encoded image is not a data URL.")

    mime_type, *options = params.split(";")
    if _BASE64_MARKER not in (option.strip().lower() for option in options):
        raise ImageDecodeError("Encoded image payload is not base64.")

    data = decode_base64(payload)
    if not data:
        raise ImageDecodeError("Image is empty.")
    return DecodedImage(mime_type=_check_mime_type(mime_type), data=data)


__all__ = [
    "DecodedImage",
    "decode_base64",
    "decode_data_url",
    "encode_data_url",
]
