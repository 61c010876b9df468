"""
Content blocks handed to the pagination engine.

A block is one top-level child of the edited document. Blocks are frozen
values: the engine reads them, slices text runs into fragments and never
mutates the source sequence.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional, Union


@dataclass(frozen=True, slots=True)
class ManualBreak:
    """Explicit page boundary inserted by the user."""

    kind: ClassVar[str] = "manual_break"
    splittable: ClassVar[bool] = False

    def plain_text(self) -> str:
        return ""


@dataclass(frozen=True, slots=True)
class Heading:
    """Section heading (h1-h3 in the editor) feeding the heading index."""

    level: int
    text: str
    markup: str = ""

    kind: ClassVar[str] = "heading"
    splittable: ClassVar[bool] = False

    def plain_text(self) -> str:
        return self.text


@dataclass(frozen=True, slots=True)
class TextRun:
    """Bare run of text; the only block the engine may split across pages."""

    text: str

    kind: ClassVar[str] = "text_run"
    splittable: ClassVar[bool] = True

    def plain_text(self) -> str:
        return self.text


@dataclass(frozen=True, slots=True)
class Generic:
    """
    Atomic content (paragraph, list, image, table...).

    ``markup`` keeps the serialized element for rendering, ``text`` its
    visible text for measuring and search. ``height`` lets content with a
    known extent (images) bypass text measurement.
    """

    markup: str = ""
    text: str = ""
    tag: str = "div"
    height: Optional[float] = None

    kind: ClassVar[str] = "generic"
    splittable: ClassVar[bool] = False

    def plain_text(self) -> str:
        return self.text


Block = Union[ManualBreak, Heading, TextRun, Generic]
