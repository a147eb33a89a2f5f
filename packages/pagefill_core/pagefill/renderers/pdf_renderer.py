"""

PDFRenderer - draws a PaginatedLayout on fixed-size PDF pages
--------------------------------------------------------------
One layout page becomes one PDF page. Every capacity unit maps to the same
row height, so a page filled to capacity fills the content area exactly.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import Any, List, Optional, Tuple, Union

from reportlab.lib.colors import HexColor
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas

from ..engine.unified_layout import LayoutPage, PaginatedLayout, Placement
from ..models.block import BlockKind
from ..utils.exceptions import RenderError

logger = logging.getLogger(__name__)

# 1920x1080 px at 96 dpi
DEFAULT_PAGE_SIZE: Tuple[float, float] = (1440.0, 810.0)


@dataclass(frozen=True)
class RenderOptions:
    """Visual settings for PDF rendering."""
    page_size: Tuple[float, float] = DEFAULT_PAGE_SIZE
    padding: float = 36.0
    cell_padding: float = 6.0
    font_name: str = "Helvetica"
    bold_font_name: str = "Helvetica-Bold"
    italic_font_name: str = "Helvetica-Oblique"
    font_size: float = 14.0
    group_font_size: float = 20.0
    text_color: str = "#000000"
    group_color: str = "#1F3864"
    header_fill: str = "#DCE6F1"
    rule_color: str = "#BFBFBF"
    continuation_label: str = "(continued)"
    title: str = "Directory"

    @property
    def content_width(self) -> float:
        return self.page_size[0] - 2 * self.padding

    @property
    def content_height(self) -> float:
        return self.page_size[1] - 2 * self.padding


def _cells(content: Any) -> List[str]:
    if isinstance(content, (list, tuple)):
        return ["" if value is None else str(value) for value in content]
    return [str(content)]


class PDFRenderer:
    """Renders paginated layouts with the ReportLab canvas."""

    def __init__(self, options: Optional[RenderOptions] = None):
        self.options = options or RenderOptions()

    def render(self, layout: PaginatedLayout) -> Optional[bytes]:
        """

        Renders all pages into a PDF document.

        Args:
        layout: Paginated layout

        Returns:
        PDF bytes, or None when the layout has no pages

        Raises:
        RenderError: if ReportLab fails on a page

        """
        if not layout.pages:
            logger.info("Layout has no pages, nothing to render")
            return None

        options = self.options
        unit_height = options.content_height / layout.config.rows_per_page
        buffer = BytesIO()
        c = canvas.Canvas(buffer, pagesize=options.page_size)
        c.setTitle(options.title)

        for page in layout.pages:
            try:
                self._render_page(c, page, unit_height)
                c.showPage()
            except Exception as exc:
                raise RenderError(
                    f"Failed to render page {page.number}: {exc}",
                    render_type="pdf",
                    page_number=page.number,
                    cause=exc,
                ) from exc

        c.save()
        logger.info(f"Rendered {len(layout.pages)} pages to PDF ({options.page_size[0]}x{options.page_size[1]} pt)")
        return buffer.getvalue()

    def render_to_file(self, layout: PaginatedLayout, output_path: Union[str, Path]) -> Optional[Path]:
        data = self.render(layout)
        if data is None:
            return None
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(data)
        logger.info(f"PDF saved as {output_path}")
        return output_path

    def _render_page(self, c: canvas.Canvas, page: LayoutPage, unit_height: float) -> None:
        options = self.options
        cursor = options.page_size[1] - options.padding
        for placement in page.placements:
            cursor -= placement.spacing_before * unit_height
            height = placement.units * unit_height
            if height > 0:
                self._draw_block(c, placement, options.padding, cursor - height, height)
            cursor -= height
        logger.debug(f"Page {page.number} drawn, {len(page)} blocks")

    def _draw_block(self, c: canvas.Canvas, placement: Placement, x: float, y: float, height: float) -> None:
        options = self.options
        block = placement.block
        width = options.content_width

        if block.kind is BlockKind.GROUP_HEADER:
            text = " ".join(_cells(block.content))
            self._draw_text(c, text, x, y, width, height, options.bold_font_name,
                            options.group_font_size, options.group_color)
        elif block.kind is BlockKind.TABLE_HEADER:
            c.setFillColor(HexColor(options.header_fill))
            c.rect(x, y, width, height, fill=1, stroke=0)
            self._draw_row(c, _cells(block.content), x, y, width, height, options.bold_font_name)
        elif block.kind is BlockKind.CONTINUATION_NOTE:
            text = f"{' '.join(_cells(block.content))} {options.continuation_label}".strip()
            self._draw_text(c, text, x, y, width, height, options.italic_font_name,
                            options.font_size, options.group_color)
        else:
            self._draw_row(c, _cells(block.content), x, y, width, height, options.font_name)
            c.setStrokeColor(HexColor(options.rule_color))
            c.setLineWidth(0.5)
            c.line(x, y, x + width, y)

    def _draw_row(self, c: canvas.Canvas, cells: List[str], x: float, y: float,
                  width: float, height: float, font_name: str) -> None:
        column_width = width / max(len(cells), 1)
        for position, cell in enumerate(cells):
            self._draw_text(c, cell, x + position * column_width, y, column_width, height,
                            font_name, self.options.font_size, self.options.text_color)

    def _draw_text(self, c: canvas.Canvas, text: str, x: float, y: float, width: float,
                   height: float, font_name: str, font_size: float, color: str) -> None:
        if not text:
            return
        padding = self.options.cell_padding
        size = min(font_size, height * 0.8)
        fitted = self._fit_text(text, font_name, size, width - 2 * padding)
        c.setFont(font_name, size)
        c.setFillColor(HexColor(color))
        # Vertically centered baseline
        c.drawString(x + padding, y + (height - size) / 2 + size * 0.2, fitted)

    @staticmethod
    def _fit_text(text: str, font_name: str, font_size: float, max_width: float) -> str:
        if pdfmetrics.stringWidth(text, font_name, font_size) <= max_width:
            return text
        ellipsis = "..."
        while text and pdfmetrics.stringWidth(text + ellipsis, font_name, font_size) > max_width:
            text = text[:-1]
        return text + ellipsis if text else ""
