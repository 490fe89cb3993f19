"""
Grid layout of a resolved topology into fixed-size pages.

Every height is a whole number of row units (PageSettings.row_height). A
route-table block is a header row followed by two independently stacked
columns: routes on the left, associated subnets on the right. The border
around a block is placed only after both columns are measured, and its
height is the taller of the two columns.

Blocks that do not fit the rest of a page move to the next page; blocks
taller than a page are split into segments, each with a repeated header and
its own border.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ...model import Network, Topology
from ..common.config import PageSettings

BORDER_ALL = "1"
BORDER_SIDES = "LR"

ASSOCIATION_HEADER = "Association Subnets"
NO_ASSOCIATION_HEADER = "No Association Subnets"
CONTINUED_SUFFIX = " (cont.)"


@dataclass
class Cell:
    x: float
    y: float
    width: float
    height: float
    text: str = ""
    border: str = ""

    @property
    def is_envelope(self) -> bool:
        return self.text == "" and self.border == BORDER_ALL


@dataclass
class Page:
    title: str = ""
    cells: List[Cell] = field(default_factory=list)

    def envelopes(self) -> List[Cell]:
        """Block borders on this page, in placement order."""
        return [cell for cell in self.cells if cell.is_envelope]

    def texts(self) -> List[str]:
        return [cell.text for cell in self.cells if cell.text]


@dataclass
class Document:
    settings: PageSettings
    pages: List[Page] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        return len(self.pages)


@dataclass
class Block:
    """A header row plus one (full-width) or two (side-by-side) columns of rows."""

    header: str
    left_rows: List[str]
    right_header: Optional[str] = None
    right_rows: List[str] = field(default_factory=list)

    @property
    def two_column(self) -> bool:
        return self.right_header is not None

    @property
    def row_count(self) -> int:
        return max(len(self.left_rows), len(self.right_rows))


def block_height(left_rows: int, right_rows: int, row_height: float) -> float:
    """Bounding box height of a block body, excluding its header row."""
    return max(left_rows, right_rows) * row_height


def route_table_blocks(network: Network) -> List[Block]:
    blocks = []
    for route_table in network.route_tables:
        blocks.append(Block(
            header=route_table.name,
            left_rows=[
                f"{route.destination_cidr_block} {route.router}".strip()
                for route in route_table.routes
            ],
            right_header=ASSOCIATION_HEADER,
            right_rows=[
                f"{subnet.name} {subnet.cidr_block}".strip()
                for subnet in network.subnets_for(route_table)
            ],
        ))
    return blocks


def unassociated_block(network: Network) -> Block:
    return Block(
        header=NO_ASSOCIATION_HEADER,
        left_rows=[
            f"{subnet.name} {subnet.cidr_block}".strip()
            for subnet in network.unassociated_subnets()
        ],
    )


class PageLayout:
    """Place rows and blocks on pages, tracking the vertical cursor in row units."""

    def __init__(self, settings: PageSettings):
        if settings.rows_per_page < 2:
            raise ValueError("Page must hold at least two rows (a header and one body row)")
        self.settings = settings
        self.pages: List[Page] = []
        self.row = 0

    @property
    def page(self) -> Page:
        return self.pages[-1]

    @property
    def y(self) -> float:
        return self.settings.margin + self.row * self.settings.row_height

    @property
    def remaining_rows(self) -> int:
        return self.settings.rows_per_page - self.row

    def new_page(self, title: str = "") -> Page:
        self.pages.append(Page(title=title))
        self.row = 0
        return self.page

    def _cell(self, x: float, y: float, width: float, rows: int, text: str, border: str) -> None:
        self.page.cells.append(Cell(
            x=x,
            y=y,
            width=width,
            height=rows * self.settings.row_height,
            text=text,
            border=border,
        ))

    def place_row(self, text: str) -> None:
        """Full-width bordered row at the cursor."""
        if self.remaining_rows < 1:
            self.new_page(self.page.title)
        self._cell(self.settings.margin, self.y, self.settings.content_width, 1, text, BORDER_ALL)
        self.row += 1

    def _place_column(self, x: float, top_row: int, width: float, rows: Sequence[str]) -> int:
        for offset, text in enumerate(rows):
            y = self.settings.margin + (top_row + offset) * self.settings.row_height
            self._cell(x, y, width, 1, text, BORDER_SIDES)
        return len(rows)

    def _place_segment(self, block: Block, left: Sequence[str], right: Sequence[str], continued: bool) -> None:
        margin = self.settings.margin
        header = block.header + CONTINUED_SUFFIX if continued else block.header

        if block.two_column:
            column_width = self.settings.column_width
            right_header = block.right_header + CONTINUED_SUFFIX if continued else block.right_header
            self._cell(margin, self.y, column_width, 1, header, BORDER_ALL)
            self._cell(margin + column_width, self.y, column_width, 1, right_header, BORDER_ALL)
            self.row += 1
            top_row, top_y = self.row, self.y
            left_height = self._place_column(margin, top_row, column_width, left)
            right_height = self._place_column(margin + column_width, top_row, column_width, right)
        else:
            self.place_row(header)
            top_row, top_y = self.row, self.y
            left_height = self._place_column(margin, top_row, self.settings.content_width, left)
            right_height = 0

        # Border the union of both columns only once both are measured.
        self.page.cells.append(Cell(
            x=margin,
            y=top_y,
            width=self.settings.content_width,
            height=block_height(left_height, right_height, self.settings.row_height),
            text="",
            border=BORDER_ALL,
        ))
        self.row = top_row + max(left_height, right_height)

    def place_block(self, block: Block) -> None:
        needed = 1 + min(block.row_count, 1)
        if self.remaining_rows < needed:
            self.new_page(self.page.title)

        left, right = list(block.left_rows), list(block.right_rows)
        continued = False
        while True:
            capacity = self.remaining_rows - 1
            self._place_segment(block, left[:capacity], right[:capacity], continued)
            left, right = left[capacity:], right[capacity:]
            if not left and not right:
                return
            self.new_page(self.page.title)
            continued = True

    def place_network(self, network: Network) -> None:
        self.new_page(network.id)
        self.place_row(network.title)
        for block in route_table_blocks(network):
            self.place_block(block)
        self.place_block(unassociated_block(network))


def render_document(topology: Topology, settings: Optional[PageSettings] = None) -> Document:
    """Lay out one page (or more, on overflow) per network, in topology order."""
    layout = PageLayout(settings or PageSettings())
    for network in topology:
        layout.place_network(network)
    return Document(settings=layout.settings, pages=layout.pages)
