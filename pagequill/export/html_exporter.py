"""
HTMLExporter - renders a PaginationResult as fixed-size HTML pages.

Every page is one ``<section class="page" id="page-N">`` holding:
- a header echoing the page title
- the page content (fragments serialized back to markup)
- a footer with the page number
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from html import escape
from pathlib import Path
from typing import List, Optional, Union

from ..engine.page_style import PageStyle
from ..models.blocks import Generic, Heading, ManualBreak, TextRun
from ..models.page import Fragment, Page, PaginationResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HTMLExportConfig:
    """
    Configuration of the HTML exporter.

    Attributes:
        title: Page title echoed into every page header and ``<title>``.
        html_lang: Value of the ``lang`` attribute of ``<html>``.
        embed_default_styles: Whether to emit the page stylesheet.
        footer_label: Footer text placed before the page number.
    """

    title: str = "Document Title"
    html_lang: str = "en"
    embed_default_styles: bool = True
    footer_label: str = "Page"


def fragment_to_html(fragment: Fragment) -> str:
    """Serialize one fragment back to markup."""
    block = fragment.block
    if isinstance(block, TextRun):
        return escape(fragment.text, quote=False)
    if isinstance(block, Heading):
        return block.markup or f"<h{block.level}>{escape(block.text, quote=False)}</h{block.level}>"
    if isinstance(block, Generic):
        return block.markup or f"<{block.tag}>{escape(block.text, quote=False)}</{block.tag}>"
    if isinstance(block, ManualBreak):
        return "<hr>"
    raise TypeError(f"Unsupported block type: {type(block).__name__}")


class HTMLExporter:
    """Renders paginated content to a standalone HTML document."""

    def __init__(self, config: Optional[HTMLExportConfig] = None, style: Optional[PageStyle] = None) -> None:
        self.config = config or HTMLExportConfig()
        self.style = style or PageStyle()

    def export(self, result: PaginationResult, output_path: Union[str, Path]) -> Path:
        target = Path(output_path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.render(result), encoding="utf-8")
        logger.info(f"Wrote {result.page_count} pages to {target}")
        return target

    def render(self, result: PaginationResult) -> str:
        parts: List[str] = [
            "<!DOCTYPE html>",
            f'<html lang="{escape(self.config.html_lang)}">',
            "<head>",
            '<meta charset="utf-8" />',
            f"<title>{escape(self.config.title)}</title>",
        ]
        if self.config.embed_default_styles:
            parts.extend(["<style>", self.stylesheet(), "</style>"])
        parts.extend(["</head>", "<body>"])
        parts.extend(self.render_page(page) for page in result.pages)
        parts.extend(["</body>", "</html>"])
        return "\n".join(parts)

    def render_page(self, page: Page) -> str:
        content = "".join(fragment_to_html(fragment) for fragment in page.fragments)
        return "\n".join([
            f'<section class="page" id="{page.anchor}">',
            f'<div class="page-header">{escape(self.config.title, quote=False)}</div>',
            f'<div class="page-content">{content}</div>',
            f'<div class="page-footer">{escape(self.config.footer_label, quote=False)} {page.number}</div>',
            "</section>",
        ])

    def stylesheet(self) -> str:
        style = self.style
        padding = style.padding
        family = style.font_family.replace(";", "")
        return "\n".join([
            ".page {",
            f"  width: {style.page_size.width:.2f}px;",
            f"  height: {style.page_size.height:.2f}px;",
            f"  padding: {padding.top:.2f}px {padding.right:.2f}px {padding.bottom:.2f}px {padding.left:.2f}px;",
            "  box-sizing: border-box;",
            "  display: flex;",
            "  flex-direction: column;",
            "  background: white;",
            f"  font-family: {family};",
            f"  font-size: {style.font_size:g}px;",
            f"  line-height: {style.line_height:g};",
            "  page-break-after: always;",
            "}",
            f".page-header {{ height: {style.header_height:g}px; flex: 0 0 auto; display: flex; align-items: center; }}",
            ".page-content { flex: 1 1 auto; overflow: hidden; }",
            f".page-footer {{ height: {style.footer_height:g}px; flex: 0 0 auto; display: flex; "
            "align-items: center; justify-content: center; }",
        ])
