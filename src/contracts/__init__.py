"""
Shared data contracts between the engine, the reading-order stages and callers.

Content objects come from a PDF engine; page items are produced by line assembly;
extracted pages are the public output. All models are frozen dataclasses.
"""

from .content import ContentObject, ImageObject, OtherObject, TextObject
from .extraction import ExtractedImageMeta, ExtractedPage
from .geometry import BoundingBox
from .page_items import ImageRef, PageItem, TextLine

__all__ = [
    "BoundingBox",
    "ContentObject",
    "TextObject",
    "ImageObject",
    "OtherObject",
    "PageItem",
    "TextLine",
    "ImageRef",
    "ExtractedImageMeta",
    "ExtractedPage",
]
