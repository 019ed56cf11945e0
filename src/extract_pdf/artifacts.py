from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

from .contracts import ExtractionResult


def _dumps(payload: Any) -> str:
    # Stable key order and a trailing newline keep artifacts diff-friendly.
    return json.dumps(payload, ensure_ascii=False, sort_keys=True, indent=2) + "\n"


def serialize_extraction_result(result: ExtractionResult) -> str:
    return _dumps(result.to_dict())


def serialize_page_texts(pages: list[str]) -> str:
    return _dumps({"pages": pages})


def emit_json(payload: str, out_json: Path | None) -> None:
    """Write a serialized artifact to `out_json`, or to stdout when it is None."""

    if out_json is None:
        sys.stdout.write(payload)
        return
    out_json.parent.mkdir(parents=True, exist_ok=True)
    out_json.write_text(payload, encoding="utf-8")
