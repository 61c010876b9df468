"""
Measurement oracles answering "does this content fit on the page?".

The engine only ever sees the boolean contract below. An oracle models a
shared scratch surface: one pagination pass at a time holds it through
``exclusive()``. ``fits`` is a probe, it never commits anything; the caller
decides which fragments end up on a page.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Dict, Iterator, Optional, Sequence

from ..exceptions import MeasurementUnavailableError
from ..models.blocks import Generic, Heading
from ..models.page import Fragment
from ..utils.cache import Cache
from .page_style import PageStyle
from .text_metrics import TextMetricsEngine

logger = logging.getLogger(__name__)

# Browser default font scale for h1/h2/h3.
HEADING_FONT_SCALE: Dict[int, float] = {1: 2.0, 2: 1.5, 3: 1.17}

FIT_TOLERANCE = 1e-6


class MeasurementOracle(ABC):
    """Contract of the rendering environment consumed by the engine."""

    def __init__(self) -> None:
        self._surface_lock = threading.Lock()

    @abstractmethod
    def capacity_for(self, style: PageStyle) -> float:
        """Usable content extent of a page with ``style``. Deterministic."""

    @abstractmethod
    def fits(self, style: PageStyle, fragments: Sequence[Fragment]) -> bool:
        """True when ``fragments`` together stay within the page capacity. Deterministic."""

    @contextmanager
    def exclusive(self) -> Iterator["MeasurementOracle"]:
        """Hold the measuring surface for the duration of one pagination pass."""
        with self._surface_lock:
            yield self


class CharacterBudgetOracle(MeasurementOracle):
    """Fixed number of characters per page; useful for plain-text paging."""

    def __init__(self, limit: int) -> None:
        super().__init__()
        if limit < 0:
            raise ValueError("Character budget cannot be negative")
        self.limit = int(limit)

    def capacity_for(self, style: PageStyle) -> float:
        return float(self.limit)

    def fits(self, style: PageStyle, fragments: Sequence[Fragment]) -> bool:
        return sum(len(fragment) for fragment in fragments) <= self.limit


class TextMetricsOracle(MeasurementOracle):
    """
    Oracle backed by font metrics.

    Every fragment is laid out as its own block box across the content width:
    - text runs and generic blocks use the body font
    - headings use the bold face scaled by level
    - a generic block with an explicit ``height`` is not measured
    Measured heights are memoised per (style, fragment).
    """

    def __init__(
        self,
        metrics_engine: Optional[TextMetricsEngine] = None,
        *,
        cache_size: int = 2048,
        block_spacing: float = 0.0,
        mounted: bool = True,
    ) -> None:
        super().__init__()
        self.metrics_engine = metrics_engine or TextMetricsEngine()
        self.block_spacing = block_spacing
        self._cache = Cache(max_size=cache_size)
        self._mounted = mounted

    @property
    def mounted(self) -> bool:
        return self._mounted

    def mount(self) -> None:
        self._mounted = True

    def unmount(self) -> None:
        self._mounted = False
        self._cache.clear()

    def _require_surface(self) -> None:
        if not self._mounted:
            raise MeasurementUnavailableError("No measuring surface mounted")

    def capacity_for(self, style: PageStyle) -> float:
        self._require_surface()
        return style.content_height

    def fits(self, style: PageStyle, fragments: Sequence[Fragment]) -> bool:
        self._require_surface()
        return self.measure(style, fragments) <= style.content_height + FIT_TOLERANCE

    def measure(self, style: PageStyle, fragments: Sequence[Fragment]) -> float:
        """Total rendered height of ``fragments`` stacked on one page."""
        total = 0.0
        for position, fragment in enumerate(fragments):
            if position:
                total += self.block_spacing
            total += self.fragment_height(style, fragment)
        return total

    def fragment_height(self, style: PageStyle, fragment: Fragment) -> float:
        key = (style, fragment.block, fragment.start, fragment.stop)
        return self._cache.get_or_set(key, lambda: self._measure_fragment(style, fragment))

    def _measure_fragment(self, style: PageStyle, fragment: Fragment) -> float:
        block = fragment.block
        if isinstance(block, Generic) and block.height is not None:
            return float(block.height)

        font_size = style.font_size
        bold = False
        if isinstance(block, Heading):
            font_size = style.font_size * HEADING_FONT_SCALE.get(block.level, 1.0)
            bold = True

        font_name = self.metrics_engine.font_name_for(style.font_family, bold=bold)
        layout = self.metrics_engine.layout_text(
            fragment.text,
            font_name,
            font_size,
            style.line_height,
            style.content_width,
        )
        return layout.height
