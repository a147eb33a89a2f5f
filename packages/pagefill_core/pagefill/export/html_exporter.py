"""
HTML exporter for paginated layouts.

Produces print-ready markup: one fixed-size section per page, with page
breaks between sections.
"""

from html import escape
from pathlib import Path
from typing import Any, List, Optional, Union
import logging

from ..engine.unified_layout import LayoutPage, PaginatedLayout, Placement
from ..models.block import BlockKind
from ..utils.exceptions import RenderError

logger = logging.getLogger(__name__)

_DEFAULT_CSS = """
@page { size: %(width)spx %(height)spx; margin: 0; }
body { margin: 0; font-family: Helvetica, Arial, sans-serif; }
.page { box-sizing: border-box; width: %(width)spx; height: %(height)spx; padding: %(padding)spx;
        page-break-after: always; break-after: page; overflow: hidden; }
.page:last-child { page-break-after: auto; break-after: auto; }
.block { box-sizing: border-box; height: calc(var(--units) * %(unit)spx); display: flex; align-items: center; }
.spacing { height: calc(var(--units) * %(unit)spx); }
.group-header { font-weight: bold; font-size: 1.4em; color: #1F3864; }
.table-header { font-weight: bold; background: #DCE6F1; }
.data-row { border-bottom: 1px solid #BFBFBF; }
.continuation-note { font-style: italic; color: #1F3864; }
.cell { flex: 1; padding: 0 6px; white-space: nowrap; overflow: hidden; text-overflow: ellipsis; }
"""


class HTMLExporter:
    """
    Exports a PaginatedLayout to HTML.
    """

    def __init__(self, layout: PaginatedLayout, page_width: int = 1920, page_height: int = 1080,
                 padding: int = 48, continuation_label: str = "(continued)",
                 title: Optional[str] = None):
        """
        Initialize HTML exporter.

        Args:
            layout: Layout to export
            page_width: Page width in CSS pixels
            page_height: Page height in CSS pixels
            padding: Inner page padding in CSS pixels
            continuation_label: Text appended to continuation notes
            title: Optional document title
        """
        self.layout = layout
        self.page_width = page_width
        self.page_height = page_height
        self.padding = padding
        self.continuation_label = continuation_label
        self.title = title

        logger.debug("HTML exporter initialized")

    def export(self, output_path: Union[str, Path]) -> Path:
        """
        Export layout to an HTML file.

        Args:
            output_path: Output file path

        Returns:
            Path of the written file

        Raises:
            RenderError: if the file cannot be written
        """
        output_path = Path(output_path)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(self.export_to_string(), encoding="utf-8")
        except OSError as exc:
            raise RenderError(f"Failed to write HTML: {exc}", render_type="html",
                              output_path=str(output_path), cause=exc) from exc

        logger.info(f"Layout exported to HTML: {output_path}")
        return output_path

    def export_to_string(self) -> str:
        """Returns the complete HTML document."""
        parts = [
            "<!DOCTYPE html>",
            "<html>",
            "<head>",
            '<meta charset="utf-8">',
        ]
        if self.title:
            parts.append(f"<title>{self._escape_html(self.title)}</title>")
        parts.append(f"<style>{self._generate_css()}</style>")
        parts.append("</head>")
        parts.append("<body>")
        for page in self.layout.pages:
            parts.append(self.export_page(page))
        parts.append("</body>")
        parts.append("</html>")
        return "\n".join(parts)

    def export_page(self, page: LayoutPage) -> str:
        """Markup of a single page."""
        parts = [f'<section class="page" data-page="{page.number}">']
        for placement in page.placements:
            if placement.spacing_before:
                parts.append(f'<div class="spacing" style="--units: {placement.spacing_before}"></div>')
            parts.append(self.export_block(placement))
        parts.append("</section>")
        return "\n".join(parts)

    def export_block(self, placement: Placement) -> str:
        """Markup of a single placed block."""
        block = placement.block
        css_class = block.kind.value.replace("_", "-")
        style = f'style="--units: {placement.units}"'

        if block.kind in (BlockKind.DATA_ROW, BlockKind.TABLE_HEADER):
            cells = "".join(
                f'<div class="cell">{self._escape_html(cell)}</div>'
                for cell in self._cells(block.content)
            )
            return f'<div class="block {css_class}" {style}>{cells}</div>'

        text = " ".join(self._cells(block.content))
        if block.kind is BlockKind.CONTINUATION_NOTE:
            text = f"{text} {self.continuation_label}".strip()
        return f'<div class="block {css_class}" {style}>{self._escape_html(text)}</div>'

    def _generate_css(self) -> str:
        unit = (self.page_height - 2 * self.padding) / self.layout.config.rows_per_page
        return _DEFAULT_CSS % {
            "width": self.page_width,
            "height": self.page_height,
            "padding": self.padding,
            "unit": round(unit, 4),
        }

    @staticmethod
    def _cells(content: Any) -> List[str]:
        if isinstance(content, (list, tuple)):
            return ["" if value is None else str(value) for value in content]
        return [str(content)]

    @staticmethod
    def _escape_html(text: Any) -> str:
        return escape(str(text), quote=True)
