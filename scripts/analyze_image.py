#!/usr/bin/env python
"""Analyze a local image with the configured Gemini model and print the result.

Example::

    python -m scripts.analyze_image ./still.jpg --model gemini-2.5-flash
"""

from __future__ import annotations

import argparse
import asyncio
import mimetypes
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from vidiovision.clients import GeminiClient  # noqa: E402
from vidiovision.core.config import get_settings  # noqa: E402
from vidiovision.core.logging import configure_logging  # noqa: E402
from vidiovision.services import (  # noqa: E402
    AnalysisError,
    ImageDecodeError,
    VideoPromptAnalyzer,
    encode_data_url,
)

EXIT_OK = 0
EXIT_USAGE_ERROR = 2
EXIT_ANALYSIS_ERROR = 4


def _guess_mime_type(path: Path, override: str | None) -> str:
    if override:
        return override
    guessed, _ = mimetypes.guess_type(path.name)
    return guessed or "application/octet-stream"


async def run(path: Path, mime_type: str, model_name: str | None) -> int:
    settings = get_settings()
    gemini_settings = settings.gemini
    if model_name:
        gemini_settings = gemini_settings.model_copy(update={"model_name": model_name})

    data = path.read_bytes()
    # Validates the bytes and MIME type the same way an upload would.
    encode_data_url(data, mime_type)

    analyzer = VideoPromptAnalyzer(GeminiClient(gemini_settings))
    result = await analyzer.analyze(data, mime_type)
    print(result.model_dump_json(by_alias=True, indent=2))
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Generate a cinematic video prompt for a local image."
    )
    parser.add_argument("image", type=Path, help="Path to a PNG, JPEG or WebP file.")
    parser.add_argument(
        "--mime-type",
        dest="mime_type",
        default=None,
        help="Override the MIME type guessed from the file extension.",
    )
    parser.add_argument(
        "--model",
        dest="model",
        default=None,
        help="Optional override for the Gemini model name.",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        default="WARNING",
        help="Logging level for diagnostics (default: WARNING).",
    )

    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    path: Path = args.image
    if not path.is_file():
        print(f"Image file {path} does not exist.", file=sys.stderr)
        return EXIT_USAGE_ERROR

    mime_type = _guess_mime_type(path, args.mime_type)
    try:
        return asyncio.run(run(path, mime_type, args.model))
    except ImageDecodeError as exc:
        print(f"Cannot use {path}: {exc}", file=sys.stderr)
        return EXIT_USAGE_ERROR
    except AnalysisError as exc:
        print(f"Analysis failed ({exc.kind.value}): {exc}", file=sys.stderr)
        return EXIT_ANALYSIS_ERROR


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
