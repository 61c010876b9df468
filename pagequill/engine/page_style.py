"""Page style describing the fixed page box the engine paginates into.

The style owns:
- page size (A4 in CSS pixels by default)
- fixed header/footer heights reserved on every page
- content padding
- the font settings the content is measured with
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Dict

from ..exceptions import ConfigurationError
from .geometry import Padding, Size, mm_to_px


A4_WIDTH_MM = 210.0
A4_HEIGHT_MM = 297.0
DEFAULT_PADDING_MM = 20.0
DEFAULT_HEADER_HEIGHT = 36.0
DEFAULT_FOOTER_HEIGHT = 36.0
DEFAULT_FONT_FAMILY = "Helvetica"
DEFAULT_FONT_SIZE = 12.0
DEFAULT_LINE_HEIGHT = 1.45


@dataclass(frozen=True, slots=True)
class PageStyle:
    """Geometry and typography of a page. Capacity is derived, never stored."""

    page_size: Size = field(default_factory=lambda: Size.from_mm(A4_WIDTH_MM, A4_HEIGHT_MM))
    header_height: float = DEFAULT_HEADER_HEIGHT
    footer_height: float = DEFAULT_FOOTER_HEIGHT
    padding: Padding = field(default_factory=lambda: Padding.uniform(mm_to_px(DEFAULT_PADDING_MM)))
    font_family: str = DEFAULT_FONT_FAMILY
    font_size: float = DEFAULT_FONT_SIZE
    line_height: float = DEFAULT_LINE_HEIGHT

    def __post_init__(self) -> None:
        if self.page_size.width <= 0 or self.page_size.height <= 0:
            raise ConfigurationError("Page size must be positive", f"{self.page_size}")
        if self.header_height < 0 or self.footer_height < 0:
            raise ConfigurationError("Header and footer heights cannot be negative")
        if self.font_size <= 0:
            raise ConfigurationError("Font size must be positive", f"{self.font_size}")
        if self.line_height <= 0:
            raise ConfigurationError("Line height must be positive", f"{self.line_height}")

    @property
    def content_width(self) -> float:
        """Width available to content inside the padding."""
        return max(0.0, self.page_size.width - self.padding.horizontal)

    @property
    def content_height(self) -> float:
        """Usable content height: page minus padding, header and footer."""
        return max(
            0.0,
            self.page_size.height - self.padding.vertical - self.header_height - self.footer_height,
        )

    @property
    def line_box_height(self) -> float:
        """Height of one line of body text."""
        return self.font_size * self.line_height

    def replace(self, **changes: Any) -> "PageStyle":
        """Return a copy with the given fields changed."""
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "page_width": self.page_size.width,
            "page_height": self.page_size.height,
            "header_height": self.header_height,
            "footer_height": self.footer_height,
            "padding": {
                "top": self.padding.top,
                "bottom": self.padding.bottom,
                "left": self.padding.left,
                "right": self.padding.right,
            },
            "font_family": self.font_family,
            "font_size": self.font_size,
            "line_height": self.line_height,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PageStyle":
        """
        Build a style from a plain mapping.

        Accepts ``page_width``/``page_height`` in pixels or
        ``page_width_mm``/``page_height_mm``; ``padding`` may be a number or a
        mapping with ``top``/``bottom``/``left``/``right``.

        Raises:
            ConfigurationError: on unknown keys or malformed values
        """
        known = {
            "page_width", "page_height", "page_width_mm", "page_height_mm",
            "header_height", "footer_height", "padding", "padding_mm",
            "font_family", "font_size", "line_height",
        }
        unknown = set(data) - known
        if unknown:
            raise ConfigurationError("Unknown page style keys", ", ".join(sorted(unknown)))

        defaults = cls()
        kwargs: Dict[str, Any] = {}
        try:
            width = defaults.page_size.width
            height = defaults.page_size.height
            if "page_width_mm" in data:
                width = mm_to_px(float(data["page_width_mm"]))
            if "page_height_mm" in data:
                height = mm_to_px(float(data["page_height_mm"]))
            if "page_width" in data:
                width = float(data["page_width"])
            if "page_height" in data:
                height = float(data["page_height"])
            kwargs["page_size"] = Size(width, height)

            if "padding_mm" in data:
                kwargs["padding"] = Padding.uniform(mm_to_px(float(data["padding_mm"])))
            if "padding" in data:
                padding = data["padding"]
                if isinstance(padding, dict):
                    kwargs["padding"] = Padding(
                        top=float(padding.get("top", 0.0)),
                        bottom=float(padding.get("bottom", 0.0)),
                        left=float(padding.get("left", 0.0)),
                        right=float(padding.get("right", 0.0)),
                    )
                else:
                    kwargs["padding"] = Padding.uniform(float(padding))

            for key in ("header_height", "footer_height", "font_size", "line_height"):
                if key in data:
                    kwargs[key] = float(data[key])
        except (TypeError, ValueError) as exc:
            raise ConfigurationError("Invalid page style value", str(exc)) from exc

        if "font_family" in data:
            kwargs["font_family"] = str(data["font_family"])
        return cls(**kwargs)
