"""
Renderers for paginated layouts.
"""

from .pdf_renderer import DEFAULT_PAGE_SIZE, PDFRenderer, RenderOptions

__all__ = ["DEFAULT_PAGE_SIZE", "PDFRenderer", "RenderOptions"]
