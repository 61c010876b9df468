"""

Layout Validator - PaginationResult validation.

Checks:
- whether the result has at least one page and consistent numbering
- whether manual breaks stay out of page content
- whether every heading points at an existing page
- whether pages reassemble into the original block sequence
- whether pages fit capacity (overflow pages are reported as warnings)

"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..exceptions import LayoutError
from ..models.blocks import Block, ManualBreak, TextRun
from ..models.page import PaginationResult
from .measurement import MeasurementOracle
from .page_style import PageStyle

logger = logging.getLogger(__name__)


def reassemble_blocks(result: PaginationResult) -> List[Block]:
    """

    Rebuilds the block sequence from pages.

    Consecutive slices of the same text run are joined back together and a
    ``ManualBreak`` is re-inserted after every page a break closed.

    """
    blocks: List[Block] = []
    open_index: Optional[int] = None
    pieces: List[str] = []

    def flush() -> None:
        nonlocal open_index
        if open_index is not None:
            blocks.append(TextRun("".join(pieces)))
            pieces.clear()
            open_index = None

    for page in result.pages:
        for fragment in page.fragments:
            if isinstance(fragment.block, TextRun):
                if fragment.source_index != open_index:
                    flush()
                    open_index = fragment.source_index
                pieces.append(fragment.text)
                continue
            flush()
            blocks.append(fragment.block)
        if page.closed_by_break:
            flush()
            blocks.append(ManualBreak())
    flush()
    return blocks


class LayoutValidator:
    """Layout validator - checks PaginationResult integrity."""

    def __init__(
        self,
        result: PaginationResult,
        blocks: Optional[Sequence[Block]] = None,
        oracle: Optional[MeasurementOracle] = None,
        style: Optional[PageStyle] = None,
    ):
        """
        Args:
            result: PaginationResult to validate
            blocks: Source blocks, enables the content-preservation check
            oracle: Oracle and ``style`` enable the capacity check
        """
        self.result = result
        self.blocks = tuple(blocks) if blocks is not None else None
        self.oracle = oracle
        self.style = style
        self.errors: List[str] = []
        self.warnings: List[str] = []

    def validate(self) -> Tuple[bool, List[str], List[str]]:
        """

        Performs full result validation.

        Returns:
        Tuple (is_valid, errors, warnings)

        """
        self.errors.clear()
        self.warnings.clear()

        self._validate_pages_exist()
        self._validate_page_consistency()
        self._validate_no_manual_breaks()
        self._validate_headings()
        self._validate_content_preserved()
        self._validate_capacity()
        self._validate_empty_pages()

        is_valid = len(self.errors) == 0
        return is_valid, self.errors.copy(), self.warnings.copy()

    def raise_for_errors(self) -> None:
        """Raise LayoutError when validation finds errors."""
        is_valid, errors, _ = self.validate()
        if not is_valid:
            raise LayoutError("Pagination result is inconsistent", "; ".join(errors))

    def _validate_pages_exist(self) -> None:
        if not self.result.pages:
            self.errors.append("Result contains no pages")

    def _validate_page_consistency(self) -> None:
        for expected, page in enumerate(self.result.pages, start=1):
            if page.number != expected:
                self.errors.append(f"Invalid page numbering: expected {expected}, got {page.number}")

    def _validate_no_manual_breaks(self) -> None:
        for page in self.result.pages:
            for fragment in page.fragments:
                if isinstance(fragment.block, ManualBreak):
                    self.errors.append(f"Page {page.number} contains a manual break fragment")

    def _validate_headings(self) -> None:
        page_count = len(self.result.pages)
        previous = 0
        for entry in self.result.headings:
            if not 1 <= entry.page_index <= page_count:
                self.errors.append(
                    f"Heading '{entry.text}' points at page {entry.page_index} of {page_count}"
                )
            if entry.page_index < previous:
                self.errors.append(f"Heading '{entry.text}' is out of page order")
            previous = entry.page_index

    def _validate_content_preserved(self) -> None:
        if self.blocks is None:
            return
        expected = list(self.blocks)
        if self.result.degraded:
            expected = [block for block in expected if not isinstance(block, ManualBreak)]
        if reassemble_blocks(self.result) != expected:
            self.errors.append("Pages do not reassemble into the source blocks")

    def _validate_capacity(self) -> None:
        if self.oracle is None or self.style is None or self.result.degraded:
            return
        overflow = set(self.result.overflow_pages)
        for page in self.result.pages:
            if self.oracle.fits(self.style, page.fragments):
                continue
            if page.number in overflow:
                self.warnings.append(f"Page {page.number} overflows its capacity (forced placement)")
            else:
                self.errors.append(f"Page {page.number} exceeds capacity")

    def _validate_empty_pages(self) -> None:
        for page in self.result.pages:
            # The first page and pages closed by a manual break may be empty.
            if page.is_empty and page.number > 1 and not page.closed_by_break:
                self.warnings.append(f"Page {page.number} is empty")

    def get_summary(self) -> Dict[str, Any]:
        """
        Returns validation summary.

        Returns:
            Dict with validation information
        """
        is_valid, errors, warnings = self.validate()

        return {
            "is_valid": is_valid,
            "total_errors": len(errors),
            "total_warnings": len(warnings),
            "total_pages": len(self.result.pages),
            "total_fragments": sum(len(page.fragments) for page in self.result.pages),
            "errors": errors,
            "warnings": warnings,
        }
