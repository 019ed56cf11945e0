from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from contracts.content import TextObject
from contracts.extraction import ExtractedPage
from reading_order import ReadingOrderConfig, process_page

from .contracts import ExtractConfig, ExtractEngineName, ExtractionResult, ExtractPdfError
from .engines import PdfContentEngine, Pypdfium2Engine
from .image_store import PngImageStore

logger = logging.getLogger(__name__)


def _get_engine(engine: ExtractEngineName) -> PdfContentEngine:
    if engine == ExtractEngineName.PYPDFIUM2:
        return Pypdfium2Engine()
    raise ValueError(f"Unsupported extraction engine: {engine}")


def _page_span(part: str) -> range:
    first, sep, last = part.partition("-")
    lo = int(first)
    hi = int(last) if sep else lo
    if lo < 1 or hi < 1:
        raise ValueError(f"page numbers start at 1: {part!r}")
    if hi < lo:
        raise ValueError(f"descending page range: {part!r}")
    return range(lo, hi + 1)


def _parse_page_selection(selection: str | None, *, page_count: int) -> list[int]:
    """Sorted unique 1-indexed pages for a selection like "1,3-5"; None or blank selects every page."""

    if selection is None or not selection.strip():
        return list(range(1, page_count + 1))

    pages = sorted({p for part in selection.split(",") if part.strip() for p in _page_span(part.strip())})
    if pages and pages[-1] > page_count:
        raise ValueError(f"page {pages[-1]} is past the last page ({page_count})")
    return pages


def _resolve_pdf_source(pdf_source: str | Path) -> Path:
    pdf_file = Path(pdf_source).expanduser()
    if not pdf_file.is_file():
        raise ExtractPdfError(
            code="EXTRACT_INPUT_NOT_FOUND",
            message="Input PDF not found",
            detail={"pdf_source": str(pdf_source)},
        )
    return pdf_file


def _pages_to_read(selection: str | None, *, page_count: int) -> list[int]:
    try:
        return _parse_page_selection(selection, page_count=page_count)
    except ValueError as e:
        raise ExtractPdfError(
            code="EXTRACT_BAD_PAGE_SELECTION",
            message="Invalid page_selection",
            detail={"page_selection": selection, "error": str(e)},
        ) from e


def _extract_document(*, config: ExtractConfig, pdf_source: str | Path) -> tuple[list[ExtractedPage], dict[str, Any]]:
    engine = _get_engine(config.engine)

    # Output directory first: it is created even for documents without images.
    store = PngImageStore(config.images_dir)
    try:
        store.ensure_dir()
    except OSError as e:
        raise ExtractPdfError(
            code="EXTRACT_IMAGES_DIR_FAILED",
            message="Failed to create images output directory",
            detail={"images_dir": str(config.images_dir), "error": repr(e)},
        ) from e

    pdf_file = _resolve_pdf_source(pdf_source)

    ro = config.reading_order
    meta: dict[str, Any] = {
        "backend": engine.backend_id(),
        "backend_version": engine.backend_version(),
        "reading_order": {
            "line_tolerance": ro.line_tolerance,
            "min_related_line_chars": ro.min_related_line_chars,
            "related_line_count": ro.related_line_count,
        },
        "page_selection": config.page_selection or "all",
        "counts": {},
        "warnings": [],
    }

    pages: list[ExtractedPage] = []
    with engine.open_document(pdf_file=pdf_file, max_object_depth=config.max_object_depth) as doc:
        page_nums = _pages_to_read(config.page_selection, page_count=doc.page_count())
        next_image_index = 1  # document-scoped: image-1.png, image-2.png, ... across pages

        for page_num in page_nums:
            objects = doc.load_page_objects(page_num)
            outcome = process_page(
                objects,
                page_num=page_num,
                config=ro,
                decode_image=doc.decode_image,
                sink=store,
                first_image_index=next_image_index,
            )
            next_image_index = outcome.next_image_index
            pages.append(outcome.page)

            meta["counts"][f"page_{page_num:03d}"] = outcome.counts
            for w in outcome.warnings:
                meta["warnings"].append({**w, "detail": {**(w.get("detail") or {}), "page_num": page_num}})
            logger.info(
                "page %d: %d text lines, %d images",
                page_num,
                outcome.counts["text_lines"],
                outcome.counts["images"],
            )

    return pages, meta


def extract_text_and_images(
    pdf_source: str | Path,
    images_output_directory: str | Path,
    *,
    reading_order: ReadingOrderConfig | None = None,
    page_selection: str | None = None,
) -> list[ExtractedPage]:
    """
    Extract reading-ordered text lines and images (with related text) per page.

    Images are written to `images_output_directory` as image-<n>.png, numbered
    continuously across the document. Raises `ExtractPdfError` on engine,
    document or page failures; no partial result is returned in that case.
    """

    config = ExtractConfig(
        images_dir=Path(images_output_directory),
        reading_order=reading_order or ReadingOrderConfig(),
        page_selection=page_selection,
    )
    pages, _meta = _extract_document(config=config, pdf_source=pdf_source)
    return pages


def extract_text(
    pdf_source: str | Path,
    *,
    page_selection: str | None = None,
    engine: ExtractEngineName = ExtractEngineName.PYPDFIUM2,
) -> list[str]:
    """
    One string per page: the stripped text of every non-blank text object, in
    enumeration order, joined without a separator. No line clustering is applied.
    """

    backend = _get_engine(engine)
    pdf_file = _resolve_pdf_source(pdf_source)

    out: list[str] = []
    with backend.open_document(pdf_file=pdf_file) as doc:
        for page_num in _pages_to_read(page_selection, page_count=doc.page_count()):
            objects = doc.load_page_objects(page_num)
            texts = (o.text.strip() for o in objects if isinstance(o, TextObject) and o.text is not None)
            out.append("".join(t for t in texts if t))
    return out


def run_extraction(*, config: ExtractConfig, pdf_source: str | Path) -> ExtractionResult:
    """
    Non-raising entrypoint: terminal failures become `ok=False` with one error.
    """

    try:
        pages, meta = _extract_document(config=config, pdf_source=pdf_source)
    except ExtractPdfError as e:
        logger.error("extraction failed: %s (%s)", e.message, e.code)
        return ExtractionResult(
            ok=False,
            engine=config.engine,
            source_pdf=str(pdf_source),
            images_dir=str(config.images_dir),
            pages=[],
            errors=[e.to_dict()],
            meta={},
        )

    return ExtractionResult(
        ok=True,
        engine=config.engine,
        source_pdf=str(pdf_source),
        images_dir=str(config.images_dir),
        pages=pages,
        errors=[],
        meta=meta,
    )
