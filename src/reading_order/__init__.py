"""
Reading-order reconstruction for one PDF page.

Stages, each consuming only the previous stage's output:
- object filter: images plus non-blank text objects
- line clustering: top-to-bottom line bands, left-to-right inside a band
- line assembly: text fragments -> text lines, interleaved with saved images
- association: related text per image, projection to the page output shape

No OCR, no font-aware merging, no column detection.
"""

from .config import DEFAULT_LINE_TOLERANCE, ReadingOrderConfig
from .image_sink import ImageSink
from .page_pipeline import PageOutcome, process_page

__all__ = ["DEFAULT_LINE_TOLERANCE", "ImageSink", "PageOutcome", "ReadingOrderConfig", "process_page"]
