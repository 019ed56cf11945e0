from .base import PdfContentDocument, PdfContentEngine
from .pypdfium2_engine import Pypdfium2Engine

__all__ = ["PdfContentDocument", "PdfContentEngine", "Pypdfium2Engine"]
