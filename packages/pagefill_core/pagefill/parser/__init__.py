"""
Spreadsheet parsers producing pagination blocks.
"""

from .xlsx_parser import XLSXParser, format_cell, parse_workbook

__all__ = ["XLSXParser", "format_cell", "parse_workbook"]
