"""Draw a laid-out Document into PDF bytes with matplotlib."""

from __future__ import annotations

from io import BytesIO
from typing import List, Tuple

from matplotlib.backends.backend_pdf import PdfPages
from matplotlib.figure import Figure
from matplotlib.lines import Line2D

from ..common.config import PageSettings
from .layout import BORDER_ALL, Cell, Document, Page

MM_PER_INCH = 25.4
LINE_WIDTH = 0.6

Segment = Tuple[float, float, float, float]


def border_segments(cell: Cell) -> List[Segment]:
    """Line segments (x0, y0, x1, y1) for the sides named in a cell's border spec."""
    left, top = cell.x, cell.y
    right, bottom = cell.x + cell.width, cell.y + cell.height
    sides = "LTRB" if cell.border == BORDER_ALL else cell.border
    segments = []
    if "L" in sides:
        segments.append((left, top, left, bottom))
    if "T" in sides:
        segments.append((left, top, right, top))
    if "R" in sides:
        segments.append((right, top, right, bottom))
    if "B" in sides:
        segments.append((left, bottom, right, bottom))
    return segments


def draw_page(page: Page, settings: PageSettings) -> Figure:
    figure = Figure(figsize=(settings.width / MM_PER_INCH, settings.height / MM_PER_INCH))
    axes = figure.add_axes((0, 0, 1, 1))
    # Page coordinates: millimetres from the top-left corner.
    axes.set_xlim(0, settings.width)
    axes.set_ylim(settings.height, 0)
    axes.axis("off")

    for cell in page.cells:
        for x0, y0, x1, y1 in border_segments(cell):
            axes.add_line(Line2D([x0, x1], [y0, y1], linewidth=LINE_WIDTH, color="black"))
        if cell.text:
            axes.text(
                cell.x + cell.width / 2,
                cell.y + cell.height / 2,
                cell.text,
                ha="center",
                va="center",
                fontsize=settings.font_size,
                family=settings.font_family,
            )
    return figure


def write_pdf(document: Document, title: str = "Network report") -> bytes:
    """Render every page; a document without pages still yields one blank page."""
    buffer = BytesIO()
    pages = document.pages or [Page()]
    with PdfPages(buffer, metadata={"Title": title}) as pdf:
        for page in pages:
            pdf.savefig(draw_page(page, document.settings))
    return buffer.getvalue()
