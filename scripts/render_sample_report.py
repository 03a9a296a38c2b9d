#!/usr/bin/env python3
"""Render a stored search to a PDF file without going through the API."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from carsearch.core import services
from carsearch.core.config import settings
from carsearch.core.logging_config import configure_logging
from carsearch.core.storage import get_asset_store
from carsearch.services.pdf import RenderFailure, SearchReportOptions, render_search_report_pdf

LOGGER = logging.getLogger(__name__)


def _image_limit(value: str) -> int:
    try:
        limit = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid image count: {value!r}") from None
    if limit < 0:
        raise argparse.ArgumentTypeError("image count must be 0 or more")
    return limit


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Export a search report PDF")
    parser.add_argument("search_id", type=int, help="Identifier of the search to export")
    parser.add_argument("--output", type=Path, help="Destination file (default: search_<id>.pdf)")
    parser.add_argument(
        "--max-images",
        type=_image_limit,
        default=settings.PDF_MAX_IMAGES,
        help="Number of photos to include; 0 includes every photo",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(debug=settings.DEBUG)

    search = services.get_search(args.search_id)
    if search is None:
        LOGGER.error("Search %s not found", args.search_id)
        return 1

    options = SearchReportOptions(max_images=args.max_images or None)
    try:
        pdf_bytes = render_search_report_pdf(
            search,
            services.branding_for_search(search),
            assets=get_asset_store(),
            options=options,
        )
    except RenderFailure:
        LOGGER.exception("Unable to render search %s", args.search_id)
        return 2

    output = args.output or Path(f"search_{args.search_id}.pdf")
    output.write_bytes(pdf_bytes)
    LOGGER.info("Wrote %s (%s bytes)", output, len(pdf_bytes))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
