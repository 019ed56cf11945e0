from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class ExtractedImageMeta:
    filename: str
    file_size_bytes: int  # 0 when the stored file size is unavailable
    related_text: list[str]  # up to two text lines closest to the image, in page order

    def to_dict(self) -> dict[str, Any]:
        return {
            "filename": self.filename,
            "file_size_bytes": self.file_size_bytes,
            "related_text": list(self.related_text),
        }


@dataclass(frozen=True, slots=True)
class ExtractedPage:
    page_num: int  # 1-indexed
    # All assembled lines, including short ones excluded from image association.
    page_text_lines: list[str]
    page_images: list[ExtractedImageMeta]

    def to_dict(self) -> dict[str, Any]:
        return {
            "page_num": self.page_num,
            "page_text_lines": list(self.page_text_lines),
            "page_images": [m.to_dict() for m in self.page_images],
        }
