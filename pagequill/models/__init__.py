"""Content and layout models."""

from .blocks import Block, Generic, Heading, ManualBreak, TextRun
from .page import Fragment, HeadingEntry, Page, PaginationResult

__all__ = [
    "Block",
    "Generic",
    "Heading",
    "ManualBreak",
    "TextRun",
    "Fragment",
    "HeadingEntry",
    "Page",
    "PaginationResult",
]
