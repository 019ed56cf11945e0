from __future__ import annotations

from typing import Callable, Sequence

from contracts.extraction import ExtractedImageMeta, ExtractedPage
from contracts.page_items import ImageRef, PageItem, TextLine


def filter_for_association(items: Sequence[PageItem], *, min_chars: int = 2) -> list[PageItem]:
    # Short lines (stray punctuation, page artifacts) are dropped; images always stay.
    return [it for it in items if not (isinstance(it, TextLine) and len(it.text) < min_chars)]


def related_text_for(filtered: Sequence[PageItem], idx: int, *, count: int = 2) -> list[str]:
    """
    Caption proxy for the image at `filtered[idx]`.

    - first item of the view: the next `count` text lines after it
    - otherwise: the `count` nearest text lines before it, in page order
    """

    if idx == 0:
        following = [it.text for it in filtered[idx + 1 :] if isinstance(it, TextLine)]
        return following[:count]

    preceding: list[str] = []
    for it in reversed(filtered[:idx]):
        if isinstance(it, TextLine):
            preceding.append(it.text)
            if len(preceding) == count:
                break
    preceding.reverse()
    return preceding


def project_page(
    items: Sequence[PageItem],
    *,
    page_num: int,
    file_size: Callable[[str], int],
    min_chars: int = 2,
    related_count: int = 2,
) -> ExtractedPage:
    filtered = filter_for_association(items, min_chars=min_chars)
    related_by_filename: dict[str, list[str]] = {}
    for idx, it in enumerate(filtered):
        if isinstance(it, ImageRef):
            related_by_filename[it.filename] = related_text_for(filtered, idx, count=related_count)

    page_text_lines: list[str] = []
    page_images: list[ExtractedImageMeta] = []
    for it in items:
        if isinstance(it, TextLine):
            page_text_lines.append(it.text)
        elif isinstance(it, ImageRef):
            page_images.append(
                ExtractedImageMeta(
                    filename=it.filename,
                    file_size_bytes=_safe_size(file_size, it.filename),
                    related_text=related_by_filename.get(it.filename, []),
                )
            )
        else:
            raise TypeError(f"Unsupported page item: {type(it).__name__}")

    return ExtractedPage(page_num=page_num, page_text_lines=page_text_lines, page_images=page_images)


def _safe_size(file_size: Callable[[str], int], filename: str) -> int:
    try:
        return max(0, int(file_size(filename)))
    except Exception:
        return 0
