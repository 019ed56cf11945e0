"""
PDF text and image extraction in human reading order.

Drives the `reading_order` page pipeline over every page of a document using a
PDF content engine (PDFium via pypdfium2) and writes page images as PNG files.
Engine, document and page failures raise `ExtractPdfError`; failures of single
objects are logged and skipped.
"""

from .contracts import ExtractConfig, ExtractEngineName, ExtractionResult, ExtractPdfError
from .module import extract_text, extract_text_and_images, run_extraction

__all__ = [
    "ExtractConfig",
    "ExtractEngineName",
    "ExtractPdfError",
    "ExtractionResult",
    "extract_text",
    "extract_text_and_images",
    "run_extraction",
]
