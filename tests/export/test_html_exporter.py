"""Tests for HTMLExporter."""

import pytest

from pagefill.engine.pagination_config import PaginationConfig
from pagefill.engine.pagination_manager import paginate
from pagefill.export.html_exporter import HTMLExporter
from pagefill.models.block import Block
from pagefill.utils.exceptions import RenderError


@pytest.fixture
def layout():
    blocks = [Block.group_header("Zone <A>", "g1"), Block.table_header(("Name", "Phone"), "g1")]
    blocks.extend(Block.data_row((f"Person {index}", "a & b"), "g1") for index in range(20))
    return paginate(blocks, PaginationConfig())


class TestHTMLExporter:
    """Test cases for HTMLExporter."""

    def test_one_section_per_page(self, layout):
        html = HTMLExporter(layout).export_to_string()

        assert html.startswith("<!DOCTYPE html>")
        assert html.count('<section class="page"') == layout.page_count
        assert 'data-page="2"' in html

    def test_text_is_escaped(self, layout):
        html = HTMLExporter(layout).export_to_string()

        assert "Zone &lt;A&gt;" in html
        assert "a &amp; b" in html
        assert "Zone <A>" not in html

    def test_continuation_note_label(self, layout):
        html = HTMLExporter(layout, continuation_label="(cont.)").export_to_string()

        assert 'class="block continuation-note"' in html
        assert "Zone &lt;A&gt; (cont.)" in html

    def test_cells_and_units(self, layout):
        page_html = HTMLExporter(layout).export_page(layout.pages[0])

        assert page_html.count('class="block data-row"') == 12
        assert '<div class="cell">Name</div>' in page_html
        assert "--units: 1" in page_html

    def test_spacing_rendered(self):
        config = PaginationConfig(section_spacing_units=2)
        blocks = [Block.data_row(("a",), "g1"), Block.data_row(("b",), "g2")]

        html = HTMLExporter(paginate(blocks, config)).export_to_string()

        assert '<div class="spacing" style="--units: 2"></div>' in html

    def test_page_geometry_in_css(self, layout):
        html = HTMLExporter(layout, page_width=1000, page_height=500, padding=10).export_to_string()

        assert "size: 1000px 500px" in html

    def test_title(self, layout):
        html = HTMLExporter(layout, title="Staff & Partners").export_to_string()

        assert "<title>Staff &amp; Partners</title>" in html

    def test_empty_layout(self):
        html = HTMLExporter(paginate([], PaginationConfig())).export_to_string()

        assert '<section class="page"' not in html
        assert "</html>" in html

    def test_export_writes_file(self, layout, temp_dir):
        path = HTMLExporter(layout).export(temp_dir / "out" / "directory.html")

        assert path.read_text(encoding="utf-8").count('<section class="page"') == 2

    def test_export_failure(self, layout, temp_dir):
        blocker = temp_dir / "file"
        blocker.write_text("x", encoding="utf-8")

        with pytest.raises(RenderError):
            HTMLExporter(layout).export(blocker / "directory.html")
