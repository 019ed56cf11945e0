from __future__ import annotations

import ctypes
import tempfile
import unittest
from pathlib import Path

import pypdfium2 as pdfium
import pypdfium2.raw as pdfium_c
from PIL import Image

from extract_pdf.contracts import ExtractPdfError
from extract_pdf.module import extract_text, extract_text_and_images


def _add_text(pdf: pdfium.PdfDocument, page: pdfium.PdfPage, text: str, *, x: float, y: float) -> None:
    obj = pdfium_c.FPDFPageObj_NewTextObj(pdf.raw, b"Helvetica", 12.0)
    encoded = ctypes.create_string_buffer((text + "\x00").encode("utf-16-le"))
    pdfium_c.FPDFText_SetText(obj, ctypes.cast(encoded, ctypes.POINTER(ctypes.c_ushort)))
    pdfium_c.FPDFPageObj_Transform(obj, 1, 0, 0, 1, x, y)
    pdfium_c.FPDFPage_InsertObject(page.raw, obj)


def _add_image(pdf: pdfium.PdfDocument, page: pdfium.PdfPage, *, x: float, y: float, size: float) -> None:
    image = pdfium.PdfImage.new(pdf)
    bitmap = pdfium.PdfBitmap.from_pil(Image.new("RGB", (8, 6), (200, 30, 30)))
    image.set_bitmap(bitmap)
    image.set_matrix(pdfium.PdfMatrix().scale(size, size).translate(x, y))
    page.insert_obj(image)


def _write_sample_pdf(path: Path) -> None:
    pdf = pdfium.PdfDocument.new()

    page1 = pdf.new_page(612, 792)
    # Enumeration order is deliberately not reading order.
    _add_text(pdf, page1, "world", x=120, y=700)
    _add_text(pdf, page1, "Hello", x=50, y=700)
    _add_image(pdf, page1, x=50, y=500, size=100)
    _add_text(pdf, page1, "Below the image", x=50, y=400)
    page1.gen_content()

    page2 = pdf.new_page(612, 792)
    _add_text(pdf, page2, "Second page", x=50, y=700)
    _add_image(pdf, page2, x=50, y=300, size=50)
    page2.gen_content()

    pdf.save(str(path))
    pdf.close()


class TestPypdfium2EndToEnd(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.pdf = self.tmp / "sample.pdf"
        _write_sample_pdf(self.pdf)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_extracts_lines_and_images_in_reading_order(self) -> None:
        images_dir = self.tmp / "images"
        pages = extract_text_and_images(self.pdf, images_dir)

        self.assertEqual(len(pages), 2)
        self.assertEqual(pages[0].page_text_lines, ["Hello world", "Below the image"])
        self.assertEqual([m.filename for m in pages[0].page_images], ["image-1.png"])
        self.assertEqual(pages[0].page_images[0].related_text, ["Hello world"])

        self.assertEqual(pages[1].page_text_lines, ["Second page"])
        self.assertEqual([m.filename for m in pages[1].page_images], ["image-2.png"])
        self.assertEqual(pages[1].page_images[0].related_text, ["Second page"])

        for meta in pages[0].page_images + pages[1].page_images:
            f = images_dir / meta.filename
            self.assertEqual(meta.file_size_bytes, f.stat().st_size)
            with Image.open(f) as im:
                self.assertEqual(im.size, (8, 6))

    def test_extract_text_concatenates_objects(self) -> None:
        pages = extract_text(self.pdf)
        self.assertEqual(pages, ["worldHelloBelow the image", "Second page"])

    def test_unparsable_document(self) -> None:
        broken = self.tmp / "broken.pdf"
        broken.write_bytes(b"not a pdf at all")
        with self.assertRaises(ExtractPdfError) as ctx:
            extract_text_and_images(broken, self.tmp / "images")
        self.assertEqual(ctx.exception.code, "EXTRACT_DOCUMENT_LOAD_FAILED")


if __name__ == "__main__":
    unittest.main()
