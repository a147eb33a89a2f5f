"""
pagefill Simple API - high-level interface for the spreadsheet-to-PDF pipeline.

Pipeline:
    spreadsheet -> blocks -> pages -> rendered PDF -> merged with attachment

Usage:
    from pagefill import generate_document

    pdf_bytes = generate_document("directory.xlsx", "cover.pdf")
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Optional, Union
import logging

from .engine.pagination_config import PaginationConfig
from .engine.pagination_manager import PaginationManager
from .engine.unified_layout import PaginatedLayout
from .export.html_exporter import HTMLExporter
from .merger import AssemblyPolicy, PDFAssembler, PdfSource
from .parser.xlsx_parser import SpreadsheetSource, XLSXParser
from .renderers.pdf_renderer import PDFRenderer, RenderOptions

logger = logging.getLogger(__name__)


class DirectoryBuilder:
    """
    Runs the full pipeline with fixed collaborators.

    Every stage either succeeds or raises; a partial document is never returned.
    """

    def __init__(
        self,
        config: Union[PaginationConfig, Mapping[str, Any], None] = None,
        parser: Optional[XLSXParser] = None,
        renderer: Optional[PDFRenderer] = None,
        policy: Optional[AssemblyPolicy] = None,
    ):
        """
        Initialize builder.

        Args:
            config: Pagination configuration (options mapping accepted)
            parser: Spreadsheet parser (active sheet, title-row groups by default)
            renderer: PDF renderer
            policy: Attachment page selection
        """
        self.paginator = PaginationManager(config)
        self.parser = parser or XLSXParser()
        self.renderer = renderer or PDFRenderer()
        self.assembler = PDFAssembler(policy)

    @property
    def config(self) -> PaginationConfig:
        return self.paginator.config

    def layout(self, spreadsheet: SpreadsheetSource) -> PaginatedLayout:
        """Parses and paginates a spreadsheet."""
        blocks = self.parser.parse(spreadsheet)
        return self.paginator.paginate(blocks)

    def build(self, spreadsheet: SpreadsheetSource, attachment: Optional[PdfSource]) -> bytes:
        """
        Produces the final PDF.

        Args:
            spreadsheet: Workbook path or bytes
            attachment: Attachment PDF path, bytes or None

        Returns:
            Bytes of the merged PDF
        """
        layout = self.layout(spreadsheet)
        generated = self.renderer.render(layout)
        merged = self.assembler.merge(attachment, generated)
        logger.info(f"Document built: {layout.page_count} generated pages, {len(merged)} bytes")
        return merged

    def build_to_file(
        self,
        spreadsheet: SpreadsheetSource,
        attachment: Optional[PdfSource],
        output_path: Union[str, Path],
    ) -> Path:
        output_path = Path(output_path)
        data = self.build(spreadsheet, attachment)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(data)
        logger.info(f"PDF saved as {output_path}")
        return output_path


def generate_document(
    spreadsheet: SpreadsheetSource,
    attachment: Optional[PdfSource],
    config: Union[PaginationConfig, Mapping[str, Any], None] = None,
    policy: Optional[AssemblyPolicy] = None,
    render_options: Optional[RenderOptions] = None,
    parser: Optional[XLSXParser] = None,
) -> bytes:
    """
    Spreadsheet + attachment PDF -> merged PDF bytes.

    Args:
        spreadsheet: Workbook path or bytes
        attachment: Attachment PDF path, bytes or None
        config: Pagination configuration
        policy: Attachment page selection
        render_options: Visual settings for the generated pages
        parser: Spreadsheet parser

    Returns:
        Bytes of the merged PDF
    """
    builder = DirectoryBuilder(
        config=config,
        parser=parser,
        renderer=PDFRenderer(render_options),
        policy=policy,
    )
    return builder.build(spreadsheet, attachment)


def render_to_html(
    spreadsheet: SpreadsheetSource,
    output_path: Union[str, Path],
    config: Union[PaginationConfig, Mapping[str, Any], None] = None,
    parser: Optional[XLSXParser] = None,
) -> Path:
    """Spreadsheet -> paginated print HTML file."""
    layout = DirectoryBuilder(config=config, parser=parser).layout(spreadsheet)
    return HTMLExporter(layout).export(output_path)
