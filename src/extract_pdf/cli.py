from __future__ import annotations

import argparse
import logging
from pathlib import Path

from reading_order.config import DEFAULT_LINE_TOLERANCE, ReadingOrderConfig

from .artifacts import emit_json, serialize_extraction_result, serialize_page_texts
from .contracts import ExtractConfig, ExtractPdfError
from .module import extract_text, run_extraction


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="pdf-reading-order",
        description="Extract reading-ordered text lines and images (with related text) from a PDF.",
    )
    p.add_argument("--pdf", required=True, type=Path, help="Input PDF file.")
    p.add_argument("--images-dir", type=Path, default=None, help="Directory for image-<n>.png files.")
    p.add_argument("--out-json", type=Path, default=None, help="Output JSON file. Default: stdout.")
    p.add_argument(
        "--line-tolerance",
        type=float,
        default=DEFAULT_LINE_TOLERANCE,
        help="Max vertical difference (page units) for objects on one line.",
    )
    p.add_argument(
        "--page-selection",
        default=None,
        help='Optional page selection like "1,3-5". Default: all pages.',
    )
    p.add_argument(
        "--text-only",
        action="store_true",
        help="Only print concatenated page text; no line assembly or images.",
    )
    p.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    if args.text_only:
        try:
            pages = extract_text(args.pdf, page_selection=args.page_selection)
        except ExtractPdfError as e:
            logging.getLogger(__name__).error("%s: %s", e.code, e.message)
            return 2
        emit_json(serialize_page_texts(pages), args.out_json)
        return 0

    if args.images_dir is None:
        parser.error("--images-dir is required unless --text-only is given")

    config = ExtractConfig(
        images_dir=args.images_dir,
        reading_order=ReadingOrderConfig(line_tolerance=args.line_tolerance),
        page_selection=args.page_selection,
    )
    result = run_extraction(config=config, pdf_source=args.pdf)

    emit_json(serialize_extraction_result(result), args.out_json)
    return 0 if result.ok else 2


if __name__ == "__main__":
    raise SystemExit(main())
