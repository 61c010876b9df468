"""Case-insensitive substring search over paginated page text."""

from __future__ import annotations

from typing import Iterable, List

from .models.page import Page, PaginationResult


def search_pages(pages: Iterable[Page], query: str) -> List[int]:
    """
    Return the numbers of the pages whose text contains ``query``.

    Matching ignores case; an empty query matches nothing. Whitespace is
    matched like any other substring.
    """
    if not query:
        return []
    needle = query.casefold()
    return [page.number for page in pages if needle in page.text.casefold()]


class PageSearch:
    """Search bound to one pagination result."""

    def __init__(self, result: PaginationResult) -> None:
        self.result = result

    def search(self, query: str) -> List[int]:
        return search_pages(self.result.pages, query)
