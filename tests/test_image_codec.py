try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import base64

import pytest

from vidiovision.services.errors import ErrorKind, ImageDecodeError
from vidiovision.services.image_codec import (
    decode_base64,
    decode_data_url,
    encode_data_url,
)


def test_encode_data_url_embeds_mime_type_and_payload():
    encoded = encode_data_url(b"\x89PNG-bytes", "image/png")

    assert encoded == "data:image/png;base64," + base64.b64encode(
        b"\x89PNG-bytes"
    ).decode("ascii")


def test_decode_data_url_splits_header_and_payload():
    decoded = decode_data_url(encode_data_url(b"jpeg-bytes", "image/jpeg"))

    assert decoded.mime_type == "image/jpeg"
    assert decoded.data == b"jpeg-bytes"


def test_decode_data_url_accepts_extra_parameters():
    payload = base64.b64encode(b"webp").decode("ascii")

    decoded = decode_data_url(f"data:image/webp;name=still.webp;base64,{payload}")

    assert decoded.mime_type == "image/webp"
    assert decoded.data == b"webp"


@pytest.mark.parametrize(
    "value",
    [
        "no-comma-at-all",
        "http:image/png;base64,aGVsbG8=",
        "data:image/png,aGVsbG8=",
        "data:image/png;base64,not base64!",
        "data:text/plain;base64,aGVsbG8=",
        "data:image/png;base64,",
    ],
)
def test_decode_data_url_rejects_malformed_values(value):
    with pytest.raises(ImageDecodeError) as excinfo:
        decode_data_url(value)

    assert excinfo.value.kind is ErrorKind.IMAGE_DECODE


def test_encode_data_url_rejects_empty_or_non_image_input():
    with pytest.raises(ImageDecodeError):
        encode_data_url(b"", "image/png")
    with pytest.raises(ImageDecodeError):
        encode_data_url(b"%PDF", "application/pdf")


def test_decode_base64_is_strict():
    assert decode_base64("aGVsbG8=") == b"hello"
    with pytest.raises(ImageDecodeError):
        decode_base64("aGVsbG8=$$")
