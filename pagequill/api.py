"""

Simple high-level API for PageQuill.

Main entry point for host editors - holds the current content, page style
and the latest pagination result, and re-flows pages as content changes.

Usage example:
>>> from pagequill import PagedDocument
>>>
>>> doc = PagedDocument("<h1>Intro</h1><p>Hello</p>", title="Report")
>>> doc.page_count
1
>>> doc.set_content(editor_html)       # debounced re-flow while typing
>>> doc.insert_page_break()            # immediate re-flow
>>> doc.search("hello")
[1]

"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence, Tuple, Union

from .config import PaginationSettings
from .engine.layout_validator import LayoutValidator
from .engine.measurement import MeasurementOracle, TextMetricsOracle
from .engine.page_style import PageStyle
from .engine.pagination_engine import PaginationEngine
from .engine.rebuild_scheduler import RebuildScheduler, TimerFactory
from .export.html_exporter import HTMLExportConfig, HTMLExporter
from .models.blocks import Block, ManualBreak
from .models.page import HeadingEntry, Page, PaginationResult
from .navigation import PageNavigator
from .parser.html_parser import parse_blocks
from .search import search_pages

logger = logging.getLogger(__name__)

Content = Union[str, Iterable[Block]]


class PagedDocument:
    """

    A document whose content is kept paginated.

    Content edits go through the debounced scheduler; structural edits
    (manual page breaks) and style changes re-flow immediately. Readers
    always see one complete PaginationResult, never a partial one.

    """

    def __init__(
        self,
        content: Optional[Content] = None,
        *,
        title: str = "Document Title",
        style: Optional[PageStyle] = None,
        oracle: Optional[MeasurementOracle] = None,
        settings: Optional[PaginationSettings] = None,
        timer_factory: Optional[TimerFactory] = None,
        on_update: Optional[Callable[[PaginationResult], None]] = None,
    ) -> None:
        """

        Args:
        content: Initial editor HTML or block sequence (laid out immediately)
        title: Page title echoed into every page header
        style: Page style (A4 defaults when omitted)
        oracle: Measurement oracle (font-metrics oracle when omitted)
        settings: Pagination settings
        timer_factory: Timer used for debouncing (threading.Timer by default)
        on_update: Called with every published result

        """
        self.settings = settings or PaginationSettings()
        self.title = title
        self._style = style or PageStyle()
        self.oracle = oracle or TextMetricsOracle(cache_size=self.settings.cache_size)
        self.engine = PaginationEngine(self.oracle, self._style, heading_levels=self.settings.heading_levels)
        self.navigator = PageNavigator(clamp_policy=self.settings.clamp_policy)
        self._on_update = on_update

        self._lock = threading.RLock()
        self._blocks: Tuple[Block, ...] = ()
        self._result = PaginationResult(pages=(Page(number=1),))

        self.scheduler: RebuildScheduler[Tuple[Block, ...], PaginationResult] = RebuildScheduler(
            self._rebuild,
            quiet_interval=self.settings.debounce_seconds,
            on_result=self._publish,
            timer_factory=timer_factory,
        )

        if content is not None:
            self._blocks = self._coerce(content)
            self.rebuild()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def blocks(self) -> Tuple[Block, ...]:
        with self._lock:
            return self._blocks

    @property
    def style(self) -> PageStyle:
        with self._lock:
            return self._style

    @property
    def result(self) -> PaginationResult:
        with self._lock:
            return self._result

    @property
    def pages(self) -> Tuple[Page, ...]:
        return self.result.pages

    @property
    def headings(self) -> Tuple[HeadingEntry, ...]:
        return self.result.headings

    @property
    def page_count(self) -> int:
        return self.result.page_count

    @property
    def character_count(self) -> int:
        """Number of visible characters in the current content."""
        return sum(len(block.plain_text()) for block in self.blocks)

    # ------------------------------------------------------------------
    # Edits
    # ------------------------------------------------------------------
    def set_content(self, content: Content) -> None:
        """Replace the content and schedule a debounced re-flow."""
        blocks = self._coerce(content)
        with self._lock:
            self._blocks = blocks
        self.scheduler.request(blocks)

    def insert_page_break(self, position: Optional[int] = None) -> PaginationResult:
        """

        Insert a manual page break before block ``position`` (end of the
        content when omitted) and re-flow immediately.

        """
        with self._lock:
            blocks = list(self._blocks)
            index = len(blocks) if position is None else min(max(0, position), len(blocks))
            blocks.insert(index, ManualBreak())
            self._blocks = tuple(blocks)
            snapshot = self._blocks
        logger.debug(f"Manual page break inserted at block {index}")
        return self.scheduler.request_structural(snapshot)

    def set_style(self, style: Optional[PageStyle] = None, **changes) -> PaginationResult:
        """Change the page style (or some of its fields) and re-flow immediately."""
        with self._lock:
            base = style or self._style
            self._style = base.replace(**changes) if changes else base
        return self.rebuild()

    def rebuild(self) -> PaginationResult:
        """Re-flow now from the latest content, dropping any pending debounced re-flow."""
        return self.scheduler.request_structural(self.blocks)

    def flush(self) -> Optional[PaginationResult]:
        """Run a pending debounced re-flow right away."""
        return self.scheduler.flush()

    # ------------------------------------------------------------------
    # Consumers
    # ------------------------------------------------------------------
    def search(self, query: str) -> List[int]:
        return search_pages(self.pages, query)

    def go_to_heading(self, entry: HeadingEntry) -> int:
        return self.navigator.go_to_heading(entry)

    def to_html(self, output_path: Optional[Union[str, Path]] = None) -> Union[str, Path]:
        exporter = HTMLExporter(HTMLExportConfig(title=self.title), self.style)
        if output_path is None:
            return exporter.render(self.result)
        return exporter.export(self.result, output_path)

    def close(self) -> None:
        self.scheduler.close()

    def __enter__(self) -> "PagedDocument":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _coerce(self, content: Content) -> Tuple[Block, ...]:
        if isinstance(content, str):
            return tuple(parse_blocks(content, self.settings.heading_levels))
        return tuple(content)

    def _rebuild(self, blocks: Sequence[Block]) -> PaginationResult:
        result = self.engine.paginate(blocks, self.style)
        if self.settings.strict_validation:
            LayoutValidator(result, blocks).raise_for_errors()
        return result

    def _publish(self, result: PaginationResult) -> None:
        with self._lock:
            self._result = result
            self.navigator.on_page_count_changed(result.page_count)
        if self._on_update is not None:
            self._on_update(result)
