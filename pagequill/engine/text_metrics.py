"""
TextMetricsEngine - measuring rendered text extent.

Uses ReportLab font metrics to compute:
- text width
- greedy line breaking for a given content width
- block height (line count x line box height)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

from reportlab.pdfbase import pdfmetrics

from ..utils.font_utils import resolve_font_variant

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TextLayout:
    """Result of laying out a piece of text inside a fixed width."""
    width: float
    height: float
    line_count: int = 0
    lines: List[str] = field(default_factory=list)
    font_name: str = "Helvetica"
    font_size: float = 12.0


class TextMetricsEngine:
    """
    Engine computing text metrics.

    Widths come from ReportLab's core font metrics (all sizes are in the same
    unit, CSS pixels here); heights are ``line_count * font_size * line_height``.
    """

    def font_name_for(self, font_family: str, bold: bool = False, italic: bool = False) -> str:
        return resolve_font_variant(font_family, bold, italic)

    def measure_width(self, text: str, font_name: str, font_size: float) -> float:
        """
        Measures the advance width of a single line of text.

        Args:
            text: Text to measure
            font_name: Registered ReportLab font name
            font_size: Font size

        Returns:
            Width in the unit of ``font_size``
        """
        if not text:
            return 0.0
        return pdfmetrics.stringWidth(text, font_name, font_size)

    def break_text_into_lines(
        self,
        text: str,
        font_name: str,
        font_size: float,
        max_width: float,
    ) -> List[str]:
        """
        Breaks text into lines with a greedy word fill.

        Whitespace is collapsed the way a browser does for normal text. A word
        wider than ``max_width`` gets a line of its own.
        """
        words = text.split()
        if not words:
            return []

        lines: List[str] = []
        current_line = ""
        for word in words:
            candidate = f"{current_line} {word}" if current_line else word
            if self.measure_width(candidate, font_name, font_size) <= max_width:
                current_line = candidate
                continue
            if current_line:
                lines.append(current_line)
            current_line = word

        if current_line:
            lines.append(current_line)
        return lines

    def layout_text(
        self,
        text: str,
        font_name: str,
        font_size: float,
        line_height: float,
        max_width: float,
    ) -> TextLayout:
        """

        Lays out text into lines and calculates metrics.

        Args:
        text: Text to lay out
        font_name: ReportLab font name
        font_size: Font size
        line_height: Line height multiplier
        max_width: Content width available for each line

        Returns:
        TextLayout with metrics and lines

        """
        lines = self.break_text_into_lines(text, font_name, font_size, max_width)
        widest = max((self.measure_width(line, font_name, font_size) for line in lines), default=0.0)
        height = len(lines) * font_size * line_height
        if widest > max_width:
            logger.debug(f"Unbreakable word wider than content width ({widest:.1f} > {max_width:.1f})")
        return TextLayout(
            width=widest,
            height=height,
            line_count=len(lines),
            lines=lines,
            font_name=font_name,
            font_size=font_size,
        )
