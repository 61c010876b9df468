"""Text splitter: longest prefix of a text run that still fits the page."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from ..models.blocks import TextRun
from ..models.page import Fragment
from .measurement import MeasurementOracle
from .page_style import PageStyle

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SplitResult:
    head: Fragment
    tail: Optional[Fragment]
    forced: bool = False

    @property
    def cut(self) -> int:
        return len(self.head)


class TextSplitter:
    """
    Binary search over the prefix length using the oracle as comparator.

    Correct only if the rendered extent is non-decreasing in the prefix
    length for fixed preceding fragments.
    """

    def __init__(self, oracle: MeasurementOracle) -> None:
        self.oracle = oracle
        self.probe_count = 0

    def split(
        self,
        style: PageStyle,
        committed: Sequence[Fragment],
        fragment: Fragment,
    ) -> SplitResult:
        """
        Split ``fragment`` (a text run or a slice of one) at the maximal fitting prefix.

        Args:
            style: Page style the oracle measures against
            committed: Fragments already on the page under construction
            fragment: Text-run fragment that does not fit as a whole

        Returns:
            SplitResult with the fitting head and the remainder (None when
            the head consumed everything). ``forced`` is set when not even one
            character fitted and a single character was taken anyway.
        """
        run = fragment.block
        if not isinstance(run, TextRun):
            raise TypeError(f"Only text runs can be split, got {type(run).__name__}")

        start, stop = fragment.start, fragment.stop
        length = stop - start
        if length == 0:
            return SplitResult(head=fragment, tail=None, forced=True)

        low, high, cut = 0, length, 0
        while low <= high:
            mid = (low + high) // 2
            probe = Fragment.text_slice(run, fragment.source_index, start, start + mid)
            self.probe_count += 1
            if self.oracle.fits(style, [*committed, probe]):
                cut = mid
                low = mid + 1
            else:
                high = mid - 1

        forced = cut == 0
        if forced:
            cut = 1
            logger.debug(f"Block {fragment.source_index}: no character fits, forcing one")

        head = Fragment.text_slice(run, fragment.source_index, start, start + cut)
        tail = None
        if start + cut < stop:
            tail = Fragment.text_slice(run, fragment.source_index, start + cut, stop)
        return SplitResult(head=head, tail=tail, forced=forced)
