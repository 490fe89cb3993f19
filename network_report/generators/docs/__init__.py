"""Network report document package."""

from .cli import NetworkReportCLI, main
from .generator import NetworkReportGenerator
from .layout import Block, Cell, Document, Page, PageLayout, block_height, render_document
from .pdf import write_pdf

__all__ = [
    "Block",
    "block_height",
    "Cell",
    "Document",
    "main",
    "NetworkReportCLI",
    "NetworkReportGenerator",
    "Page",
    "PageLayout",
    "render_document",
    "write_pdf",
]
