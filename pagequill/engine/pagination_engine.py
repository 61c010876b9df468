"""

Pagination Engine - partitions a block sequence into fixed-capacity pages.

Handles:
- manual page breaks (always close the page under construction)
- fit testing through the measurement oracle
- splitting oversized text runs across pages
- forced overflow placement of atomic blocks
- the heading index side channel

Blocks are processed strictly in document order; nothing is reordered and
there is no look-ahead. Each pass re-lays-out the full content.

"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Set

from ..exceptions import MeasurementUnavailableError
from ..models.blocks import Block, ManualBreak
from ..models.page import Fragment, Page, PaginationResult
from .heading_index import HeadingIndexBuilder
from .measurement import MeasurementOracle
from .page_style import PageStyle
from .text_splitter import TextSplitter

logger = logging.getLogger(__name__)


class _PaginationPass:
    """Mutable state of a single pass: finalized pages and the open page."""

    def __init__(self, heading_levels: Iterable[int]) -> None:
        self.pages: List[Page] = []
        self.current: List[Fragment] = []
        self.overflow: Set[int] = set()
        self.headings = HeadingIndexBuilder(heading_levels)

    @property
    def page_index(self) -> int:
        """1-based number of the page under construction."""
        return len(self.pages) + 1

    def commit(self, fragment: Fragment) -> None:
        self.current.append(fragment)

    def mark_overflow(self) -> None:
        self.overflow.add(self.page_index)

    def finalize(self, closed_by_break: bool = False) -> Page:
        page = Page(number=self.page_index, fragments=tuple(self.current), closed_by_break=closed_by_break)
        self.pages.append(page)
        self.current = []
        logger.debug(
            f"Page {page.number} finalized: fragments={len(page.fragments)}, "
            f"closed_by_break={closed_by_break}"
        )
        return page


class PaginationEngine:
    """
    Pagination engine.

    The oracle is injected and held exclusively for the whole pass; the
    engine itself keeps no layout state between passes.
    """

    def __init__(
        self,
        oracle: MeasurementOracle,
        style: Optional[PageStyle] = None,
        *,
        heading_levels: Iterable[int] = (1, 2, 3),
    ) -> None:
        """

        Args:
        oracle: Measurement oracle answering fit queries
        style: Default page style (A4 when omitted)
        heading_levels: Heading levels recorded in the index

        """
        self.oracle = oracle
        self.style = style or PageStyle()
        self.heading_levels = tuple(heading_levels)
        self.splitter = TextSplitter(oracle)
        self.pass_count = 0

    def paginate(self, blocks: Sequence[Block], style: Optional[PageStyle] = None) -> PaginationResult:
        """

        Lays out ``blocks`` into pages.

        Args:
        blocks: Full current content in document order
        style: Page style for this pass (engine default when omitted)

        Returns:
        PaginationResult with at least one page. If the oracle reports that
        no measuring surface is available, a degraded single-page result is
        returned instead of raising.

        """
        style = style or self.style
        blocks = tuple(blocks)
        self.pass_count += 1

        try:
            with self.oracle.exclusive():
                result = self._run(blocks, style)
        except MeasurementUnavailableError as exc:
            logger.warning(f"Measurement unavailable, returning unsplit content on one page: {exc}")
            return self._degraded_result(blocks)

        logger.info(
            f"Paginated {len(blocks)} blocks into {result.page_count} pages "
            f"({len(result.headings)} headings, {len(result.overflow_pages)} overflowing)"
        )
        return result

    def _run(self, blocks: Sequence[Block], style: PageStyle) -> PaginationResult:
        capacity = self.oracle.capacity_for(style)
        state = _PaginationPass(self.heading_levels)

        for index, block in enumerate(blocks):
            if isinstance(block, ManualBreak):
                state.finalize(closed_by_break=True)
                continue

            # A carried remainder is reprocessed like a fresh block on the new page.
            pending: Optional[Fragment] = Fragment.whole(block, index)
            while pending is not None:
                pending = self._place(state, style, pending)

        state.finalize()

        return PaginationResult(
            pages=tuple(state.pages),
            headings=state.headings.build(),
            capacity=capacity,
            overflow_pages=tuple(sorted(state.overflow)),
        )

    def _place(self, state: _PaginationPass, style: PageStyle, fragment: Fragment) -> Optional[Fragment]:
        """Place ``fragment``; returns the remainder still to be placed, if any."""
        if self._fits(state, style, fragment):
            self._commit(state, fragment)
            return None

        if state.current:
            state.finalize()
            if self._fits(state, style, fragment):
                self._commit(state, fragment)
                return None

        return self._place_on_empty_page(state, style, fragment)

    def _place_on_empty_page(
        self,
        state: _PaginationPass,
        style: PageStyle,
        fragment: Fragment,
    ) -> Optional[Fragment]:
        block = fragment.block
        if block.splittable:
            split = self.splitter.split(style, state.current, fragment)
            state.commit(split.head)
            logger.debug(
                f"Block {fragment.source_index} split on page {state.page_index} "
                f"at offset {split.head.stop} (forced={split.forced})"
            )
            if split.forced:
                state.mark_overflow()
                logger.warning(f"Page {state.page_index} overflows: capacity smaller than one character")
            if split.tail is None:
                return None
            state.finalize()
            return split.tail

        state.commit(fragment)
        state.mark_overflow()
        logger.warning(
            f"Page {state.page_index} overflows: {block.kind} block {fragment.source_index} "
            f"does not fit an empty page"
        )
        state.finalize()
        return None

    def _fits(self, state: _PaginationPass, style: PageStyle, fragment: Fragment) -> bool:
        return self.oracle.fits(style, [*state.current, fragment])

    def _commit(self, state: _PaginationPass, fragment: Fragment) -> None:
        state.commit(fragment)
        state.headings.record(fragment.block, state.page_index)

    def _degraded_result(self, blocks: Sequence[Block]) -> PaginationResult:
        headings = HeadingIndexBuilder(self.heading_levels)
        fragments = []
        for index, block in enumerate(blocks):
            if isinstance(block, ManualBreak):
                continue
            fragments.append(Fragment.whole(block, index))
            headings.record(block, 1)
        return PaginationResult(
            pages=(Page(number=1, fragments=tuple(fragments)),),
            headings=headings.build(),
            degraded=True,
        )
