"""Pytest configuration shared across the suite."""

import pytest


@pytest.fixture
def anyio_backend() -> str:
    """Force AnyIO-powered tests to run against asyncio backend only."""
    return "asyncio"


@pytest.fixture
def analysis_payload() -> dict:
    """A schema-conformant response body as Gemini would return it."""
    return {
        "concept": "c1",
        "videoPrompt": "p1",
        "styleKeywords": ["x"],
        "suggestedMotion": "pan",
        "lensType": "wide",
        "cinematographicStyle": "static",
    }
