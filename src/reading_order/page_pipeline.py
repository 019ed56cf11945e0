from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from contracts.content import ContentObject
from contracts.extraction import ExtractedPage
from contracts.page_items import ImageRef, TextLine

from .association import project_page
from .config import ReadingOrderConfig
from .image_sink import ImageSink
from .line_assembly import ImageDecoder, assemble_page_items
from .line_clustering import order_objects
from .object_filter import select_candidates


@dataclass(frozen=True, slots=True)
class PageOutcome:
    page: ExtractedPage
    next_image_index: int
    warnings: list[dict[str, Any]]
    counts: dict[str, int]


def process_page(
    objects: Sequence[ContentObject],
    *,
    page_num: int,
    config: ReadingOrderConfig,
    decode_image: ImageDecoder,
    sink: ImageSink,
    first_image_index: int = 1,
) -> PageOutcome:
    """
    Run filter -> line clustering -> line assembly -> association for one page.

    Pages are independent apart from the image counter, which is passed in as
    `first_image_index` and handed back as `PageOutcome.next_image_index`.
    """

    config.validate()

    candidates = select_candidates(objects)
    ordered = order_objects(candidates, tolerance=config.line_tolerance)
    assembled = assemble_page_items(
        ordered,
        tolerance=config.line_tolerance,
        decode_image=decode_image,
        sink=sink,
        first_image_index=first_image_index,
    )
    page = project_page(
        assembled.items,
        page_num=page_num,
        file_size=sink.file_size,
        min_chars=config.min_related_line_chars,
        related_count=config.related_line_count,
    )

    counts = {
        "objects_in": len(objects),
        "candidates": len(candidates),
        "text_lines": sum(1 for it in assembled.items if isinstance(it, TextLine)),
        "images": sum(1 for it in assembled.items if isinstance(it, ImageRef)),
    }
    return PageOutcome(
        page=page,
        next_image_index=assembled.next_image_index,
        warnings=assembled.warnings,
        counts=counts,
    )
