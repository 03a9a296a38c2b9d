"""Lay out a car search as absolutely positioned draw primitives.

Coordinates are in points on an A4 page with the origin at the top-left
corner and ``y`` growing downwards; the writer flips them for ReportLab.
The engine walks the document top to bottom with a single draw cursor and
only the photo gallery (and a footer that no longer fits) may open a new
page.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging

from carsearch.core.models import SearchRecord
from .assets import AssetError, AssetResolver
from .models import (
    DocumentMetadata,
    DocumentPlan,
    FilledRect,
    ImageBox,
    Line,
    PageLayout,
    SearchReportOptions,
    TextAlign,
    TextRun,
)
from .style import ResolvedStyle
from .utils import fit_box, format_date, format_price_range, wrap_text

logger = logging.getLogger(__name__)

MARGIN = 50
CONTENT_WIDTH = 495
CONTENT_RIGHT = MARGIN + CONTENT_WIDTH

HEADER_BAND = (MARGIN, 50, CONTENT_WIDTH, 80)
LOGO_BOX = (60, 60, 100, 60)
HEADER_TEXT_X = 180

SECTION_TITLE_SIZE = 14
SECTION_RULE_OFFSET = 20
BODY_SIZE = 11
ROW_HEIGHT = 20
LABEL_OFFSET = 100

CUSTOMER_SECTION_Y = 160
VEHICLE_SECTION_Y = 270
SPEC_COLUMNS_X = (MARGIN, 300)
PRICE_ROW_GAP = 40

NOTES_GAP = 40
NOTES_LEADING = 14

GALLERY_GAP = 60
GALLERY_GAP_AFTER_NOTES = 40
GALLERY_ROW_OFFSET = 20
IMAGE_WIDTH = 230
IMAGE_HEIGHT = 160
IMAGE_GUTTER = 15
GALLERY_BOTTOM_LIMIT = 750

FOOTER_Y = 750
FOOTER_CONTACT_Y = 765
FOOTER_CLEARANCE = 10


@dataclass
class DrawCursor:
    y: float = MARGIN

    def advance(self, amount: float) -> float:
        self.y += amount
        return self.y

    def reset(self) -> None:
        self.y = MARGIN


class SearchReportLayout:
    """Builds the page plan for one search; one instance per render."""

    def __init__(
        self,
        search: SearchRecord,
        *,
        style: ResolvedStyle,
        assets: AssetResolver,
        options: SearchReportOptions,
    ) -> None:
        self.search = search
        self.style = style
        self.assets = assets
        self.options = options
        self.cursor = DrawCursor()
        self.plan = DocumentPlan(
            metadata=DocumentMetadata(title=f"Search {search.id}", author=style.company_name),
        )
        self.page = self.plan.add_page()

    # primitives

    def _rect(self, x: float, y: float, width: float, height: float, fill, stroke=None) -> None:
        self.page.add(FilledRect(x, y, width, height, fill=fill, stroke=stroke))

    def _text(
        self,
        x: float,
        y: float,
        text: str,
        *,
        font: str | None = None,
        size: float = BODY_SIZE,
        color=None,
        align: TextAlign = "left",
    ) -> None:
        self.page.add(
            TextRun(
                x,
                y,
                text,
                font=font or self.style.body_font,
                size=size,
                color=color if color is not None else self.style.text_color,
                align=align,
            )
        )

    def _rule(self, y: float) -> None:
        self.page.add(Line(MARGIN, y, CONTENT_RIGHT, y, color=self.style.medium_gray))

    def new_page(self) -> PageLayout:
        self.page = self.plan.add_page()
        self.cursor.reset()
        return self.page

    # sections

    def _section_title(self, title: str, y: float) -> float:
        """Draw a section title and its rule; return the y below the rule."""
        self._text(
            MARGIN,
            y,
            title,
            font=self.style.header_font,
            size=SECTION_TITLE_SIZE,
            color=self.style.primary_color,
        )
        rule_y = y + SECTION_RULE_OFFSET
        self._rule(rule_y)
        return rule_y

    def _labeled_row(self, x: float, y: float, label: str, value: str) -> None:
        self._text(x, y, label, font=self.style.header_font)
        self._text(x + LABEL_OFFSET, y, value or "")

    def draw_header(self) -> None:
        style = self.style
        self._rect(*HEADER_BAND, fill=style.light_gray, stroke=style.light_gray)
        self._draw_logo()

        self._text(
            HEADER_TEXT_X,
            65,
            style.company_name,
            font=style.header_font,
            size=24,
            color=style.primary_color,
        )
        self._text(HEADER_TEXT_X, 95, "Search report", size=14)
        band_x, _, band_width, _ = HEADER_BAND
        self._text(
            band_x + band_width - 10,
            95,
            f"Date: {format_date(self.search.created_at)}",
            size=10,
            color=style.muted_color,
            align="right",
        )

    def _draw_logo(self) -> None:
        x, y, width, height = LOGO_BOX
        if self.style.logo:
            try:
                logo = self.assets.load_image(self.style.logo)
            except AssetError as exc:
                logger.warning("[search_report_pdf] logo fallback search=%s: %s", self.search.id, exc)
            else:
                self.page.add(ImageBox(*fit_box(logo.width, logo.height, LOGO_BOX), image=logo))
                return
        self._rect(x, y, width, height, fill=self.style.primary_color, stroke=self.style.primary_color)
        self._text(
            x + width / 2,
            y + height / 2 - 8,
            "LOGO",
            font=self.style.header_font,
            size=16,
            color=self.style.on_primary,
            align="center",
        )

    def draw_customer(self) -> None:
        search = self.search
        y = self._section_title("Customer details", CUSTOMER_SECTION_Y) + 10
        rows = (
            ("Name:", f"{search.customer_first_name} {search.customer_last_name}".strip()),
            ("Email:", search.customer_email),
            ("Phone:", search.customer_phone),
        )
        for label, value in rows:
            self._labeled_row(MARGIN, y, label, value)
            y += ROW_HEIGHT
        self.cursor.y = y

    def draw_vehicle(self) -> None:
        search = self.search
        top = self._section_title("Vehicle specifications", VEHICLE_SECTION_Y) + 10
        columns = (
            (
                ("Make & model:", f"{search.car_make} {search.car_model}".strip()),
                ("Type:", search.car_type),
                ("Year:", search.car_year),
            ),
            (
                ("Color:", search.car_color),
                ("Transmission:", search.car_transmission),
                ("Fuel:", search.car_fuel),
            ),
        )
        last_row_y = top
        for column_x, rows in zip(SPEC_COLUMNS_X, columns):
            y = top
            for label, value in rows:
                self._labeled_row(column_x, y, label, value)
                last_row_y = y
                y += ROW_HEIGHT

        price_y = last_row_y + PRICE_ROW_GAP
        self._labeled_row(
            MARGIN,
            price_y,
            "Price range:",
            format_price_range(search.min_price, search.max_price),
        )
        self.cursor.y = price_y

    def draw_notes(self) -> bool:
        notes = (self.search.additional_requirements or "").strip()
        if not notes:
            return False
        y = self.cursor.advance(NOTES_GAP)
        body_top = self._section_title("Additional requirements", y) + 10
        lines = wrap_text(notes, CONTENT_WIDTH, self.style.body_font, BODY_SIZE)
        line_y = body_top
        for line in lines:
            if line:
                self._text(MARGIN, line_y, line)
            line_y += NOTES_LEADING
        self.cursor.y = line_y
        return True

    def _image_slot(self, reference: str, x: float, y: float) -> None:
        try:
            image = self.assets.load_image(reference)
        except AssetError as exc:
            logger.warning("[search_report_pdf] image fallback search=%s: %s", self.search.id, exc)
            self._rect(x, y, IMAGE_WIDTH, IMAGE_HEIGHT, fill=self.style.light_gray, stroke=self.style.medium_gray)
            self._text(
                x + IMAGE_WIDTH / 2,
                y + IMAGE_HEIGHT / 2 - 6,
                "Image unavailable",
                size=12,
                color=self.style.muted_color,
                align="center",
            )
            return
        box = (x, y, IMAGE_WIDTH, IMAGE_HEIGHT)
        self.page.add(ImageBox(*fit_box(image.width, image.height, box), image=image))

    def draw_gallery(self, *, after_notes: bool = False) -> None:
        images = list(self.search.images)
        if not images:
            return
        limit = self.options.max_images
        shown = images if limit is None else images[:limit]
        hidden = len(images) - len(shown)

        y = self.cursor.advance(GALLERY_GAP_AFTER_NOTES if after_notes else GALLERY_GAP)
        first_row_bottom = y + SECTION_RULE_OFFSET + GALLERY_ROW_OFFSET + IMAGE_HEIGHT
        if first_row_bottom > GALLERY_BOTTOM_LIMIT:
            self.new_page()
            y = self.cursor.y
        row_top = self._section_title("Vehicle photos", y) + GALLERY_ROW_OFFSET

        column = 0
        for index, reference in enumerate(shown):
            x = MARGIN if column == 0 else MARGIN + IMAGE_WIDTH + IMAGE_GUTTER
            self._image_slot(reference, x, row_top)
            if column == 0:
                column = 1
                continue
            column = 0
            row_top += IMAGE_HEIGHT + IMAGE_GUTTER
            remaining = len(shown) - index - 1
            if remaining and row_top + IMAGE_HEIGHT > GALLERY_BOTTOM_LIMIT:
                self.new_page()
                row_top = self.cursor.y

        # Bottom edge of the last drawn row.
        bottom = row_top + IMAGE_HEIGHT if column == 1 else row_top - IMAGE_GUTTER
        self.cursor.y = bottom

        if hidden and self.options.show_hidden_image_count:
            noun = "photo" if hidden == 1 else "photos"
            self._text(
                MARGIN,
                self.cursor.advance(8),
                f"+{hidden} more {noun} not shown",
                size=10,
                color=self.style.muted_color,
            )
            self.cursor.advance(12)

    def draw_footer(self) -> None:
        if self.cursor.y > FOOTER_Y - FOOTER_CLEARANCE:
            self.new_page()
        center_x = MARGIN + CONTENT_WIDTH / 2
        self._text(center_x, FOOTER_Y, self.style.tagline, size=9, color=self.style.muted_color, align="center")
        self._text(
            center_x,
            FOOTER_CONTACT_Y,
            self.style.contact_info,
            size=8,
            color=self.style.muted_color,
            align="center",
        )

    def build(self) -> DocumentPlan:
        self.draw_header()
        self.draw_customer()
        self.draw_vehicle()
        has_notes = self.draw_notes()
        self.draw_gallery(after_notes=has_notes)
        if self.options.include_footer:
            self.draw_footer()
        return self.plan


def build_plan(
    search: SearchRecord,
    *,
    style: ResolvedStyle,
    assets: AssetResolver,
    options: SearchReportOptions | None = None,
) -> DocumentPlan:
    layout = SearchReportLayout(
        search,
        style=style,
        assets=assets,
        options=options or SearchReportOptions(),
    )
    return layout.build()
