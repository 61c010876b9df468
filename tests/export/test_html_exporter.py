"""Tests for the HTML exporter."""

import pytest

from pagequill.engine import CharacterBudgetOracle, PaginationEngine
from pagequill.export import HTMLExportConfig, HTMLExporter, fragment_to_html
from pagequill.models.blocks import Generic, Heading, TextRun
from pagequill.models.page import Fragment


@pytest.fixture
def result(sample_blocks):
    return PaginationEngine(CharacterBudgetOracle(100)).paginate(sample_blocks)


class TestFragmentToHtml:
    def test_text_slice_is_escaped(self):
        fragment = Fragment.text_slice(TextRun("a < b & c"), 0, 0, 5)

        assert fragment_to_html(fragment) == "a &lt; b"

    def test_heading_uses_original_markup(self):
        fragment = Fragment.whole(Heading(2, "Two", markup="<h2 class='x'>Two</h2>"), 0)

        assert fragment_to_html(fragment) == "<h2 class='x'>Two</h2>"

    def test_generic_without_markup_is_rebuilt(self):
        assert fragment_to_html(Fragment.whole(Generic(text="x", tag="p"), 0)) == "<p>x</p>"


class TestHTMLExporter:
    def test_every_page_is_a_section_with_anchor(self, result):
        html = HTMLExporter(HTMLExportConfig(title="Report")).render(result)

        assert html.count('<section class="page"') == 2
        assert 'id="page-1"' in html
        assert 'id="page-2"' in html

    def test_header_and_footer(self, result):
        exporter = HTMLExporter(HTMLExportConfig(title="Report"))

        page_html = exporter.render_page(result.pages[1])

        assert '<div class="page-header">Report</div>' in page_html
        assert '<div class="page-footer">Page 2</div>' in page_html
        assert "<h2>Details</h2>" in page_html

    def test_title_is_escaped(self, result):
        html = HTMLExporter(HTMLExportConfig(title="<R&D>")).render(result)

        assert "<title>&lt;R&amp;D&gt;</title>" in html

    def test_stylesheet_follows_page_style(self, result, style):
        css = HTMLExporter(style=style.replace(header_height=50)).stylesheet()

        assert "height: 50px" in css
        assert "line-height: 1.45" in css

    def test_stylesheet_can_be_disabled(self, result):
        html = HTMLExporter(HTMLExportConfig(embed_default_styles=False)).render(result)

        assert "<style>" not in html

    def test_export_writes_file(self, result, temp_dir):
        target = HTMLExporter().export(result, temp_dir / "out" / "pages.html")

        assert target.exists()
        assert target.read_text(encoding="utf-8").startswith("<!DOCTYPE html>")
