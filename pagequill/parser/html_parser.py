"""
HTML Parser - turns editor HTML into the block sequence the engine paginates.

Only the top-level children matter:
- ``<hr>`` becomes a manual page break
- ``<h1>``-``<h3>`` become headings
- any other element becomes an atomic generic block
- bare top-level text becomes a splittable text run
"""

from __future__ import annotations

import logging
import re
from html import escape
from html.parser import HTMLParser
from typing import Iterable, List, Optional, Tuple

from ..exceptions import ParsingError
from ..models.blocks import Block, Generic, Heading, ManualBreak, TextRun

logger = logging.getLogger(__name__)

VOID_TAGS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "param", "source", "track", "wbr",
})
HEADING_TAG = re.compile(r"^h([1-6])$")
_NUMBER = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*(px)?\s*$")


def _parse_height(value: Optional[str]) -> Optional[float]:
    if not value:
        return None
    match = _NUMBER.match(value)
    if not match:
        return None
    return float(match.group(1))


class HTMLBlockParser(HTMLParser):
    """Parser collecting the top-level children of an HTML fragment as blocks."""

    def __init__(self, heading_levels: Iterable[int] = (1, 2, 3)):
        super().__init__(convert_charrefs=True)
        self.heading_levels = frozenset(heading_levels)
        self.blocks: List[Block] = []
        self._stack: List[str] = []
        self._root_tag: Optional[str] = None
        self._root_attrs: List[Tuple[str, Optional[str]]] = []
        self._markup: List[str] = []
        self._text: List[str] = []

    def handle_starttag(self, tag: str, attrs: list) -> None:
        tag = tag.lower()
        if not self._stack:
            if tag in VOID_TAGS:
                self._emit_void(tag, attrs, self.get_starttag_text() or f"<{tag}>")
                return
            self._root_tag = tag
            self._root_attrs = attrs
            self._markup = []
            self._text = []

        self._markup.append(self.get_starttag_text() or f"<{tag}>")
        if tag in VOID_TAGS:
            return
        self._stack.append(tag)

    def handle_startendtag(self, tag: str, attrs: list) -> None:
        tag = tag.lower()
        if not self._stack:
            self._emit_void(tag, attrs, self.get_starttag_text() or f"<{tag} />")
            return
        self._markup.append(self.get_starttag_text() or f"<{tag} />")

    def handle_endtag(self, tag: str) -> None:
        tag = tag.lower()
        if not self._stack:
            logger.debug(f"Ignoring stray closing tag </{tag}>")
            return
        if tag not in self._stack:
            logger.debug(f"Ignoring unmatched closing tag </{tag}>")
            return

        # Close implicitly open descendants as well.
        while self._stack:
            open_tag = self._stack.pop()
            self._markup.append(f"</{open_tag}>")
            if open_tag == tag:
                break
        if not self._stack:
            self._emit_element()

    def handle_data(self, data: str) -> None:
        if self._stack:
            self._markup.append(escape(data, quote=False))
            self._text.append(data)
            return
        if data.strip():
            self.blocks.append(TextRun(data))

    def close(self) -> None:
        super().close()
        if self._stack:
            logger.debug(f"Closing unterminated element <{self._root_tag}>")
            while self._stack:
                self._markup.append(f"</{self._stack.pop()}>")
            self._emit_element()

    def _emit_void(self, tag: str, attrs: list, markup: str) -> None:
        if tag == "hr":
            self.blocks.append(ManualBreak())
            return
        attributes = dict(attrs)
        text = attributes.get("alt") or ""
        self.blocks.append(Generic(
            markup=markup,
            text=text,
            tag=tag,
            height=_parse_height(attributes.get("height")),
        ))

    def _emit_element(self) -> None:
        tag = self._root_tag or "div"
        markup = "".join(self._markup)
        text = "".join(self._text)

        match = HEADING_TAG.match(tag)
        if match and int(match.group(1)) in self.heading_levels:
            self.blocks.append(Heading(level=int(match.group(1)), text=" ".join(text.split()), markup=markup))
        else:
            attributes = dict(self._root_attrs)
            self.blocks.append(Generic(
                markup=markup,
                text=text,
                tag=tag,
                height=_parse_height(attributes.get("height")),
            ))

        self._root_tag = None
        self._root_attrs = []
        self._markup = []
        self._text = []


def parse_blocks(html: str, heading_levels: Iterable[int] = (1, 2, 3)) -> List[Block]:
    """
    Parse an HTML fragment into blocks.

    Args:
        html: Serialized editor content
        heading_levels: Heading levels turned into ``Heading`` blocks

    Returns:
        Blocks in document order

    Raises:
        ParsingError: if ``html`` is not a string
    """
    if not isinstance(html, str):
        raise ParsingError("HTML content must be a string", type(html).__name__)

    parser = HTMLBlockParser(heading_levels)
    parser.feed(html)
    parser.close()
    logger.debug(f"Parsed {len(parser.blocks)} blocks from {len(html)} characters of HTML")
    return parser.blocks
