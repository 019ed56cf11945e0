from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from contracts.extraction import ExtractedPage
from reading_order.config import ReadingOrderConfig


class ExtractEngineName(str, Enum):
    """
    PDF content backend identifiers.
    """

    PYPDFIUM2 = "pypdfium2"


class ExtractPdfError(Exception):
    """
    Terminal extraction failure (engine setup, document, or page level).

    Object-level problems never raise; they are logged and recorded as warnings.
    """

    def __init__(self, code: str, message: str, detail: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.detail = detail

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message, "detail": self.detail}


@dataclass(frozen=True, slots=True)
class ExtractConfig:
    """
    Extraction configuration.

    All paths are passed explicitly; no environment variable reads.
    """

    images_dir: Path
    engine: ExtractEngineName = ExtractEngineName.PYPDFIUM2
    reading_order: ReadingOrderConfig = field(default_factory=ReadingOrderConfig)
    page_selection: str | None = None  # e.g. "1,3-5"; None => all pages
    # 1 => top-level page objects only; larger values descend into form XObjects.
    max_object_depth: int = 1

    def __post_init__(self) -> None:
        if not isinstance(self.images_dir, Path):
            raise TypeError("images_dir must be pathlib.Path")
        if self.max_object_depth < 1:
            raise ValueError("max_object_depth must be >= 1")
        self.reading_order.validate()


@dataclass(frozen=True, slots=True)
class ExtractionResult:
    ok: bool
    engine: ExtractEngineName
    source_pdf: str
    images_dir: str
    pages: list[ExtractedPage]
    errors: list[dict[str, Any]]
    meta: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "engine": self.engine.value,
            "source_pdf": self.source_pdf,
            "images_dir": self.images_dir,
            "pages": [p.to_dict() for p in self.pages],
            "errors": list(self.errors),
            "meta": dict(self.meta),
        }
