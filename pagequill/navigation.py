"""Current-page pointer kept in step with the latest page count."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from .exceptions import ConfigurationError
from .models.page import HeadingEntry

logger = logging.getLogger(__name__)


class PageNavigator:
    """
    Tracks the current page (1-based) for a paged document.

    When a rebuild shrinks the document below the current page the pointer is
    clamped according to ``clamp_policy``: ``"first"`` resets it to page 1,
    ``"last"`` moves it to the new last page.
    """

    def __init__(
        self,
        page_count: int = 1,
        clamp_policy: str = "first",
        on_change: Optional[Callable[[int], None]] = None,
    ) -> None:
        if clamp_policy not in ("first", "last"):
            raise ConfigurationError("Unknown clamp policy", repr(clamp_policy))
        self.clamp_policy = clamp_policy
        self._page_count = max(1, page_count)
        self._current = 1
        self._on_change = on_change

    @property
    def current_page(self) -> int:
        return self._current

    @property
    def page_count(self) -> int:
        return self._page_count

    @property
    def current_anchor(self) -> str:
        return f"page-{self._current}"

    def _set(self, page: int) -> int:
        if page != self._current:
            self._current = page
            if self._on_change is not None:
                self._on_change(page)
        return self._current

    def go_to(self, page: int) -> int:
        """Move to ``page``, clamped to the valid range."""
        return self._set(min(max(1, page), self._page_count))

    def next_page(self) -> int:
        return self.go_to(self._current + 1)

    def previous_page(self) -> int:
        return self.go_to(self._current - 1)

    def go_to_heading(self, entry: HeadingEntry) -> int:
        return self.go_to(entry.page_index)

    def on_page_count_changed(self, page_count: int) -> int:
        """Apply a new page count, clamping the pointer if it now points past the end."""
        self._page_count = max(1, page_count)
        if self._current > self._page_count:
            target = 1 if self.clamp_policy == "first" else self._page_count
            logger.debug(f"Page {self._current} no longer exists, moving to page {target}")
            return self._set(target)
        return self._current
