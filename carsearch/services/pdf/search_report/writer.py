"""Serialize draw primitives into a PDF with ReportLab."""
from __future__ import annotations

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen.canvas import Canvas

from .models import DocumentMetadata, DrawPrimitive, FilledRect, ImageBox, Line, TextRun
from .utils import PdfBuffer


class WriterFailure(RuntimeError):
    """The PDF could not be opened, drawn or finalized."""


class PdfDocumentWriter:
    """One-shot writer: ``open`` once, ``draw``/``new_page`` many, ``finish`` once."""

    def __init__(self, *, compress: bool = True) -> None:
        self.compress = compress
        self._buffer: PdfBuffer | None = None
        self._canvas: Canvas | None = None
        self._finished = False
        self.page_count = 0

    @property
    def canvas(self) -> Canvas:
        if self._canvas is None:
            state = "finished" if self._finished else "not opened"
            raise WriterFailure(f"PDF writer is {state}")
        return self._canvas

    @property
    def page_height(self) -> float:
        return self.canvas._pagesize[1]

    def open(self, metadata: DocumentMetadata) -> "PdfDocumentWriter":
        if self._canvas is not None or self._finished:
            raise WriterFailure("PDF writer can only be opened once")
        try:
            buffer = PdfBuffer()
            canvas = buffer.build_canvas(compress=self.compress)
            canvas.setTitle(metadata.title)
            canvas.setAuthor(metadata.author)
            canvas.setSubject(metadata.subject)
            canvas.setCreator(metadata.creator)
        except Exception as exc:
            raise WriterFailure(f"Unable to open PDF writer: {exc}") from exc
        self._buffer = buffer
        self._canvas = canvas
        self.page_count = 1
        return self

    def draw(self, primitive: DrawPrimitive) -> None:
        canvas = self.canvas
        canvas.saveState()
        try:
            if isinstance(primitive, TextRun):
                self._draw_text(canvas, primitive)
            elif isinstance(primitive, FilledRect):
                self._draw_rect(canvas, primitive)
            elif isinstance(primitive, Line):
                self._draw_line(canvas, primitive)
            elif isinstance(primitive, ImageBox):
                self._draw_image(canvas, primitive)
            else:
                raise WriterFailure(f"Unsupported draw primitive: {type(primitive).__name__}")
        except WriterFailure:
            raise
        except Exception as exc:
            raise WriterFailure(f"Unable to draw {type(primitive).__name__}: {exc}") from exc
        finally:
            canvas.restoreState()

    def _draw_text(self, canvas: Canvas, run: TextRun) -> None:
        baseline = self.page_height - run.y - pdfmetrics.getAscent(run.font, run.size)
        canvas.setFont(run.font, run.size)
        canvas.setFillColor(run.color)
        if run.align == "right":
            canvas.drawRightString(run.x, baseline, run.text)
        elif run.align == "center":
            canvas.drawCentredString(run.x, baseline, run.text)
        else:
            canvas.drawString(run.x, baseline, run.text)

    def _draw_rect(self, canvas: Canvas, rect: FilledRect) -> None:
        canvas.setFillColor(rect.fill)
        if rect.stroke is not None:
            canvas.setStrokeColor(rect.stroke)
        canvas.rect(
            rect.x,
            self.page_height - rect.y - rect.height,
            rect.width,
            rect.height,
            stroke=1 if rect.stroke is not None else 0,
            fill=1,
        )

    def _draw_line(self, canvas: Canvas, line: Line) -> None:
        canvas.setStrokeColor(line.color)
        canvas.setLineWidth(line.width)
        canvas.line(line.x1, self.page_height - line.y1, line.x2, self.page_height - line.y2)

    def _draw_image(self, canvas: Canvas, box: ImageBox) -> None:
        canvas.drawImage(
            box.image.reader,
            box.x,
            self.page_height - box.y - box.height,
            width=box.width,
            height=box.height,
            mask="auto",
        )

    def new_page(self) -> None:
        self.canvas.showPage()
        self.page_count += 1

    def finish(self) -> bytes:
        canvas = self.canvas
        buffer = self._buffer
        self._canvas = None
        self._buffer = None
        self._finished = True
        try:
            canvas.showPage()
            canvas.save()
            return buffer.getvalue()
        except Exception as exc:
            raise WriterFailure(f"Unable to finalize PDF: {exc}") from exc
        finally:
            buffer.close()
