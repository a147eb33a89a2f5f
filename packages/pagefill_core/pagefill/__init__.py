"""
pagefill - paginated, print-ready documents from spreadsheet exports.

Features:
- Spreadsheet ingestion (openpyxl) into typed content blocks
- Greedy fixed-capacity pagination with group headers, table headers,
  continuation notes and section spacing
- PDF rendering (ReportLab) and print HTML export
- Assembly with an attachment PDF: leading pages, generated pages, closing page

Quick Start:
    from pagefill import generate_document

    pdf_bytes = generate_document("directory.xlsx", "cover.pdf")

    # Pagination only
    from pagefill import Block, paginate
    layout = paginate(blocks, {"rowsPerPage": 14})
"""

from .version import __version__, __version_info__

from .utils.exceptions import (
    DocumentError,
    ConfigurationError,
    MalformedBlockError,
    ParsingError,
    RenderError,
    AssemblyError,
)
from .models.block import Block, BlockKind
from .engine import (
    PaginationConfig,
    LayoutPage,
    PaginatedLayout,
    Placement,
    PaginationManager,
    paginate,
    LayoutValidator,
)
from .merger import AssemblyPolicy, PageSource, PDFAssembler, assemble, assembly_plan, merge_pdfs
from .parser import XLSXParser, parse_workbook
from .renderers import PDFRenderer, RenderOptions
from .export import HTMLExporter
from .api import DirectoryBuilder, generate_document, render_to_html

__all__ = [
    # Version
    "__version__",
    "__version_info__",

    # High-level API
    "DirectoryBuilder",
    "generate_document",
    "render_to_html",

    # Pagination
    "Block",
    "BlockKind",
    "PaginationConfig",
    "LayoutPage",
    "PaginatedLayout",
    "Placement",
    "PaginationManager",
    "paginate",
    "LayoutValidator",

    # Assembly
    "AssemblyPolicy",
    "PageSource",
    "PDFAssembler",
    "assemble",
    "assembly_plan",
    "merge_pdfs",

    # Collaborators
    "XLSXParser",
    "parse_workbook",
    "PDFRenderer",
    "RenderOptions",
    "HTMLExporter",

    # Exceptions
    "DocumentError",
    "ConfigurationError",
    "MalformedBlockError",
    "ParsingError",
    "RenderError",
    "AssemblyError",
]


def main():
    """CLI entry point."""
    from .cli import main as cli_main
    return cli_main()
