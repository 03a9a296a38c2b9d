"""Data models for the search report PDF renderer."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field
from reportlab.lib import colors
from reportlab.lib.utils import ImageReader

TextAlign = Literal["left", "right", "center"]


class SearchReportOptions(BaseModel):
    """Caller-supplied knobs for the search report."""

    # None renders every attached image, paginating as needed.
    max_images: Optional[int] = Field(default=4, ge=1)
    include_footer: bool = True
    show_hidden_image_count: bool = True


@dataclass(frozen=True)
class PreparedImage:
    reader: ImageReader
    width: int
    height: int


@dataclass(frozen=True)
class FilledRect:
    x: float
    y: float
    width: float
    height: float
    fill: colors.Color
    stroke: colors.Color | None = None


@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float
    color: colors.Color
    width: float = 1.0


@dataclass(frozen=True)
class TextRun:
    """A single line of text; ``y`` is the top of the line box."""

    x: float
    y: float
    text: str
    font: str
    size: float
    color: colors.Color
    align: TextAlign = "left"


@dataclass(frozen=True)
class ImageBox:
    """An image fitted and centered inside the given box."""

    x: float
    y: float
    width: float
    height: float
    image: PreparedImage


DrawPrimitive = Union[FilledRect, Line, TextRun, ImageBox]


@dataclass
class PageLayout:
    number: int
    primitives: list[DrawPrimitive] = field(default_factory=list)

    def __iter__(self):
        return iter(self.primitives)

    def add(self, primitive: DrawPrimitive) -> None:
        self.primitives.append(primitive)

    def texts(self) -> list[str]:
        return [primitive.text for primitive in self.primitives if isinstance(primitive, TextRun)]


@dataclass
class DocumentMetadata:
    title: str
    author: str
    subject: str = "Search report"
    creator: str = "CarSearch Pro"


@dataclass
class DocumentPlan:
    metadata: DocumentMetadata
    pages: list[PageLayout] = field(default_factory=list)

    def __iter__(self):
        return iter(self.pages)

    def __len__(self):
        return len(self.pages)

    def add_page(self) -> PageLayout:
        page = PageLayout(number=len(self.pages) + 1)
        self.pages.append(page)
        return page

    def texts(self) -> list[str]:
        return [text for page in self.pages for text in page.texts()]


@dataclass(frozen=True)
class RenderedDocument:
    content: bytes
    page_count: int

    @property
    def size(self) -> int:
        return len(self.content)
