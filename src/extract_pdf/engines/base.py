from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from contracts.content import ContentObject, ImageObject


class PdfContentDocument(ABC):
    """
    An open document exposing per-page content objects.

    Documents must:
    - report objects in the page's own enumeration order (no sorting)
    - report unavailable bounds or text as None instead of raising
    - raise `ExtractPdfError` when a page's text layer cannot be loaded
    """

    @abstractmethod
    def page_count(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def load_page_objects(self, page_num: int) -> list[ContentObject]:
        """`page_num` is 1-indexed."""

        raise NotImplementedError

    @abstractmethod
    def decode_image(self, obj: ImageObject) -> Any:
        """Return a PIL image for `obj`, raising on failure."""

        raise NotImplementedError

    def close(self) -> None:
        return None

    def __enter__(self) -> "PdfContentDocument":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


class PdfContentEngine(ABC):
    @abstractmethod
    def backend_id(self) -> str:
        raise NotImplementedError

    def backend_version(self) -> str | None:
        return None

    @abstractmethod
    def open_document(self, *, pdf_file: Path, max_object_depth: int = 1) -> PdfContentDocument:
        raise NotImplementedError
