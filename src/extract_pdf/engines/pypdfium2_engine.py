from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from contracts.content import ContentObject, ImageObject, OtherObject, TextObject
from contracts.geometry import BoundingBox

from ..contracts import ExtractPdfError
from .base import PdfContentDocument, PdfContentEngine

logger = logging.getLogger(__name__)


def _require_pdfium():
    try:
        import pypdfium2 as pdfium  # type: ignore
        import pypdfium2.raw as pdfium_c  # type: ignore

        return pdfium, pdfium_c
    except ImportError as e:
        raise ExtractPdfError(
            code="EXTRACT_ENGINE_UNAVAILABLE",
            message="Missing dependency: pypdfium2 (bundling the PDFium library) is required for extraction.",
            detail={"module": "pypdfium2", "error": repr(e)},
        ) from e


class Pypdfium2Document(PdfContentDocument):
    """
    Pages are read one at a time. The current page stays open until the next page
    is loaded or the document is closed, because its image objects are decoded
    after `load_page_objects` returns.
    """

    def __init__(self, *, pdf: Any, pdf_file: Path, max_object_depth: int) -> None:
        self._pdfium, self._pdfium_c = _require_pdfium()
        self._pdf = pdf
        self._pdf_file = pdf_file
        self._max_object_depth = max_object_depth
        self._page: Any = None

    def page_count(self) -> int:
        return len(self._pdf)

    def _bounds(self, obj: Any) -> BoundingBox | None:
        try:
            return BoundingBox.from_bounds(obj.get_bounds())
        except self._pdfium.PdfiumError as e:
            logger.debug("bounds unavailable for page object: %s", e)
            return None

    def _object_text(self, obj: Any) -> str | None:
        try:
            return obj.extract()
        except self._pdfium.PdfiumError as e:
            logger.debug("text unavailable for text object: %s", e)
            return None

    def _release_page(self) -> None:
        if self._page is not None:
            self._page.close()
            self._page = None

    def _page_error(self, code: str, message: str, page_num: int, e: Exception) -> ExtractPdfError:
        return ExtractPdfError(
            code=code,
            message=message,
            detail={"pdf_file": str(self._pdf_file), "page_num": page_num, "error": repr(e)},
        )

    def load_page_objects(self, page_num: int) -> list[ContentObject]:
        pdfium_c = self._pdfium_c
        self._release_page()

        try:
            page = self._pdf[page_num - 1]
        except self._pdfium.PdfiumError as e:
            raise self._page_error("EXTRACT_PAGE_LOAD_FAILED", "Failed to load page", page_num, e) from e
        self._page = page

        # The text page is loaded once per page and shared by all text objects.
        try:
            textpage = page.get_textpage()
        except self._pdfium.PdfiumError as e:
            raise self._page_error("EXTRACT_TEXT_LAYER_FAILED", "Failed to load the page text layer", page_num, e) from e

        objects: list[ContentObject] = []
        try:
            for idx, obj in enumerate(page.get_objects(max_depth=self._max_object_depth, textpage=textpage)):
                bbox = self._bounds(obj)
                if obj.type == pdfium_c.FPDF_PAGEOBJ_TEXT:
                    objects.append(TextObject(index=idx, bbox=bbox, text=self._object_text(obj)))
                elif obj.type == pdfium_c.FPDF_PAGEOBJ_IMAGE:
                    objects.append(ImageObject(index=idx, bbox=bbox, handle=obj))
                else:
                    objects.append(OtherObject(index=idx, bbox=bbox, object_type=int(obj.type)))
        except self._pdfium.PdfiumError as e:
            raise self._page_error("EXTRACT_PAGE_LOAD_FAILED", "Failed to enumerate page objects", page_num, e) from e
        finally:
            textpage.close()
        return objects

    def decode_image(self, obj: ImageObject) -> Any:
        # Raw (unrendered) pixels at the image's native resolution.
        bitmap = obj.handle.get_bitmap(render=False)
        # Copy out of the pdfium-owned buffer before the bitmap is released.
        return bitmap.to_pil().copy()

    def close(self) -> None:
        self._release_page()
        self._pdf.close()


class Pypdfium2Engine(PdfContentEngine):
    def backend_id(self) -> str:
        return "pypdfium2"

    def backend_version(self) -> str | None:
        try:
            from pypdfium2.version import PYPDFIUM_INFO  # type: ignore

            return PYPDFIUM_INFO.version
        except ImportError:
            return None

    def open_document(self, *, pdf_file: Path, max_object_depth: int = 1) -> Pypdfium2Document:
        pdfium, _ = _require_pdfium()
        try:
            pdf = pdfium.PdfDocument(str(pdf_file))
        except Exception as e:
            raise ExtractPdfError(
                code="EXTRACT_DOCUMENT_LOAD_FAILED",
                message="Failed to load PDF document",
                detail={"pdf_file": str(pdf_file), "error": repr(e)},
            ) from e
        return Pypdfium2Document(pdf=pdf, pdf_file=pdf_file, max_object_depth=max_object_depth)
