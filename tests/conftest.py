"""
Pytest configuration for pagefill
"""

import pytest
import logging
import sys
from io import BytesIO
from pathlib import Path

from openpyxl import Workbook
from PyPDF2 import PdfReader
from reportlab.pdfgen import canvas


@pytest.fixture(autouse=True)
def configure_logging():
    """Configure logging for tests to avoid file handler issues."""
    # Clear all existing handlers
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    # Set up console-only logging for tests
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.WARNING)  # Only show warnings and errors during tests

    formatter = logging.Formatter(
        '%(name)s - %(levelname)s - %(message)s'
    )
    console_handler.setFormatter(formatter)

    root_logger.addHandler(console_handler)
    root_logger.setLevel(logging.WARNING)

    yield

    # Cleanup after test
    root_logger.handlers.clear()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    import tempfile
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


def build_pdf(page_count, base_width=500.0, height=400.0):
    """PDF whose page i is (base_width + i) points wide, so pages are identifiable by width."""
    buffer = BytesIO()
    c = canvas.Canvas(buffer, pagesize=(base_width, height))
    for index in range(page_count):
        c.setPageSize((base_width + index, height))
        c.drawString(20, 20, f"Attachment page {index + 1}")
        c.showPage()
    c.save()
    return buffer.getvalue()


def page_widths(pdf_bytes):
    """Widths of every page of a PDF, rounded to whole points."""
    reader = PdfReader(BytesIO(pdf_bytes))
    return [round(float(page.mediabox.width)) for page in reader.pages]


@pytest.fixture
def make_pdf():
    """Factory for attachment PDFs: make_pdf(page_count, base_width=500.0) -> bytes."""
    return build_pdf


@pytest.fixture
def make_workbook(temp_dir):
    """Factory for XLSX files: make_workbook(rows, name='sheet.xlsx', title=None) -> Path."""
    def _make(rows, name="sheet.xlsx", title=None):
        workbook = Workbook()
        sheet = workbook.active
        if title:
            sheet.title = title
        for row in rows:
            sheet.append(row)
        path = temp_dir / name
        workbook.save(path)
        return path
    return _make


@pytest.fixture
def directory_rows():
    """Header row, one titled group with 20 entries."""
    rows = [["Name", "Phone", "Email"], ["Zone A"]]
    rows.extend([f"Person {index}", f"555-{index:04d}", f"p{index}@example.com"] for index in range(20))
    return rows


@pytest.fixture
def pdf_page_widths():
    """pdf_page_widths(pdf_bytes) -> list of page widths."""
    return page_widths
