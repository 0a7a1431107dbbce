try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import pytest
from google.api_core.exceptions import ServiceUnavailable
from google.auth.exceptions import DefaultCredentialsError

from vidiovision.clients import gemini as gemini_module
from vidiovision.clients.gemini import GeminiClient, GeminiModelError
from vidiovision.core.config import GeminiSettings
from vidiovision.services.analysis import RESPONSE_SCHEMA

pytestmark = pytest.mark.anyio


class FakeResponse:
    def __init__(self, text: str | None = None, blocked: bool = False) -> None:
        self._text = text
        self._blocked = blocked

    @property
    def text(self) -> str | None:
        if self._blocked:
            raise ValueError("The response has no text parts.")
        return self._text


class FakeModel:
    instances: list["FakeModel"] = []
    next_response: FakeResponse | None = None
    next_error: Exception | None = None

    def __init__(self, model_name, generation_config=None) -> None:
        self.model_name = model_name
        self.generation_config = generation_config
        self.requests: list[tuple[list, dict]] = []
        FakeModel.instances.append(self)

    def generate_content(self, contents, request_options=None):
        self.requests.append((contents, request_options))
        if FakeModel.next_error is not None:
            raise FakeModel.next_error
        return FakeModel.next_response


@pytest.fixture()
def fake_genai(monkeypatch):
    configured: list[str] = []
    FakeModel.instances = []
    FakeModel.next_response = FakeResponse(text='{"concept": "c1"}')
    FakeModel.next_error = None
    monkeypatch.setattr(
        gemini_module.genai, "configure", lambda api_key: configured.append(api_key)
    )
    monkeypatch.setattr(gemini_module.genai, "GenerativeModel", FakeModel)
    return configured


def _settings() -> GeminiSettings:
    return GeminiSettings(
        GEMINI_API_KEY="key-123",
        GEMINI_MODEL_NAME="gemini-test",
        GEMINI_REQUEST_TIMEOUT=30,
    )


async def _generate(client: GeminiClient) -> str:
    return await client.generate_structured(
        prompt="describe",
        image_bytes=b"png-bytes",
        mime_type="image/png",
        response_schema=RESPONSE_SCHEMA,
    )


async def test_generate_structured_sends_one_schema_constrained_request(fake_genai):
    client = GeminiClient(_settings())

    text = await _generate(client)

    assert text == '{"concept": "c1"}'
    assert fake_genai == ["key-123"]
    assert len(FakeModel.instances) == 1
    model = FakeModel.instances[0]
    assert model.model_name == "gemini-test"
    assert model.generation_config.response_mime_type == "application/json"
    assert model.generation_config.response_schema == RESPONSE_SCHEMA
    assert model.requests == [
        (
            [{"mime_type": "image/png", "data": b"png-bytes"}, "describe"],
            {"timeout": 30.0},
        )
    ]


@pytest.mark.parametrize(
    "response",
    [FakeResponse(text=None), FakeResponse(blocked=True)],
)
async def test_generate_structured_returns_empty_text_without_parts(fake_genai, response):
    FakeModel.next_response = response
    client = GeminiClient(_settings())

    assert await _generate(client) == ""


async def test_generate_structured_wraps_api_errors(fake_genai):
    FakeModel.next_error = ServiceUnavailable("backend unavailable")
    client = GeminiClient(_settings())

    with pytest.raises(GeminiModelError) as excinfo:
        await _generate(client)

    assert "backend unavailable" in str(excinfo.value)


async def test_generate_structured_wraps_credential_errors(fake_genai):
    FakeModel.next_error = DefaultCredentialsError("no API key configured")
    client = GeminiClient(_settings())

    with pytest.raises(GeminiModelError) as excinfo:
        await _generate(client)

    assert isinstance(excinfo.value.__cause__, DefaultCredentialsError)


async def test_generate_structured_wraps_model_construction_errors(
    fake_genai, monkeypatch
):
    def _broken_model(*_args, **_kwargs):
        raise ValueError("unknown model name")

    monkeypatch.setattr(gemini_module.genai, "GenerativeModel", _broken_model)
    client = GeminiClient(_settings())

    with pytest.raises(GeminiModelError):
        await _generate(client)
