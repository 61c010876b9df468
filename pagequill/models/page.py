"""

Paginated layout model - the value produced by one engine pass.

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .blocks import Block, TextRun


@dataclass(frozen=True, slots=True)
class Fragment:
    """A whole block, or a ``[start, end)`` slice of a text run, placed on a page."""

    block: Block
    source_index: int
    start: int = 0
    end: Optional[int] = None

    @classmethod
    def whole(cls, block: Block, source_index: int) -> "Fragment":
        return cls(block=block, source_index=source_index)

    @classmethod
    def text_slice(cls, run: TextRun, source_index: int, start: int, end: int) -> "Fragment":
        return cls(block=run, source_index=source_index, start=start, end=end)

    @property
    def stop(self) -> int:
        """Resolved end offset (``end`` defaults to the end of the block text)."""
        if self.end is None:
            return len(self.block.plain_text())
        return self.end

    @property
    def text(self) -> str:
        if isinstance(self.block, TextRun):
            return self.block.text[self.start:self.stop]
        return self.block.plain_text()

    @property
    def is_partial(self) -> bool:
        """True for a text-run slice that does not cover the whole run."""
        if not isinstance(self.block, TextRun):
            return False
        return self.start > 0 or self.stop < len(self.block.text)

    def __len__(self) -> int:
        return len(self.text)


@dataclass(frozen=True, slots=True)
class Page:
    """Finalized page. Built only by the engine."""

    number: int
    fragments: Tuple[Fragment, ...] = ()
    closed_by_break: bool = False

    @property
    def anchor(self) -> str:
        """Stable identity used for scroll/navigation targeting."""
        return f"page-{self.number}"

    @property
    def is_empty(self) -> bool:
        return not self.fragments

    @property
    def text(self) -> str:
        return "\n".join(fragment.text for fragment in self.fragments)


@dataclass(frozen=True, slots=True)
class HeadingEntry:
    """Heading bound to the page it was committed on."""

    text: str
    page_index: int
    level: int = 1


@dataclass(frozen=True)
class PaginationResult:
    """Pages and heading index of one pass; always consistent with each other."""

    pages: Tuple[Page, ...]
    headings: Tuple[HeadingEntry, ...] = ()
    capacity: float = 0.0
    overflow_pages: Tuple[int, ...] = ()
    degraded: bool = False

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def page(self, number: int) -> Page:
        """Return page ``number`` (1-based)."""
        if number < 1 or number > len(self.pages):
            raise IndexError(f"Page {number} out of range 1..{len(self.pages)}")
        return self.pages[number - 1]

    def to_dict(self) -> Dict[str, Any]:
        pages: List[Dict[str, Any]] = []
        for page in self.pages:
            pages.append({
                "number": page.number,
                "anchor": page.anchor,
                "closed_by_break": page.closed_by_break,
                "fragments": [
                    {
                        "kind": fragment.block.kind,
                        "source_index": fragment.source_index,
                        "start": fragment.start,
                        "end": fragment.stop,
                        "text": fragment.text,
                    }
                    for fragment in page.fragments
                ],
            })
        return {
            "page_count": self.page_count,
            "capacity": self.capacity,
            "degraded": self.degraded,
            "overflow_pages": list(self.overflow_pages),
            "pages": pages,
            "headings": [
                {"text": entry.text, "page": entry.page_index, "level": entry.level}
                for entry in self.headings
            ],
        }
