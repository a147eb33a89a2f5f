"""
Exporters for paginated layouts.
"""

from .html_exporter import HTMLExporter

__all__ = ["HTMLExporter"]
