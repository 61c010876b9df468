"""Heading index collected as a side channel of the pagination pass."""

from __future__ import annotations

from typing import Iterable, List, Tuple

from ..models.blocks import Block, Heading
from ..models.page import HeadingEntry


class HeadingIndexBuilder:
    """
    Records headings in commit order.

    Entries are bound once, at commit time, to the page still under
    construction and never retargeted. Duplicate texts are kept.
    """

    def __init__(self, levels: Iterable[int] = (1, 2, 3)) -> None:
        self.levels = frozenset(levels)
        self._entries: List[HeadingEntry] = []

    def record(self, block: Block, page_index: int) -> bool:
        """Record ``block`` if it is an indexed heading. Returns True when recorded."""
        if not isinstance(block, Heading) or block.level not in self.levels:
            return False
        self._entries.append(HeadingEntry(text=block.text, page_index=page_index, level=block.level))
        return True

    def build(self) -> Tuple[HeadingEntry, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
