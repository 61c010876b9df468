"""
PageQuill - fixed-size page layout for rich-text editor content.

Takes a flat sequence of content blocks (headings, text runs, manual page
breaks and opaque blocks such as paragraphs, lists or images) and flows
them onto pages of a fixed size, splitting long text runs across page
boundaries. Alongside the pages it produces:

- a heading index (heading -> page number) for the navigation sidebar
- page search (query -> page numbers)
- HTML and JSON exports of the laid-out pages

Main Components:
- PagedDocument: keeps editor content paginated, with debounced re-flow
- PaginationEngine: one full layout pass over a block sequence
- MeasurementOracle: answers "does this fit on one page?"
- RebuildScheduler: coalesces bursts of edits into one layout pass
- PageNavigator / search_pages: consumers of the layout result
"""

from .api import PagedDocument
from .config import PaginationSettings, load_settings
from .engine import (
    CharacterBudgetOracle,
    LayoutValidator,
    MeasurementOracle,
    PageStyle,
    PaginationEngine,
    RebuildScheduler,
    TextMetricsOracle,
)
from .exceptions import (
    ConfigurationError,
    LayoutError,
    MeasurementUnavailableError,
    PageQuillError,
    ParsingError,
)
from .export import HTMLExporter, JSONExporter
from .models import (
    Block,
    Fragment,
    Generic,
    Heading,
    HeadingEntry,
    ManualBreak,
    Page,
    PaginationResult,
    TextRun,
)
from .navigation import PageNavigator
from .parser import parse_blocks
from .search import PageSearch, search_pages
from .version import __version__

__all__ = [
    # High-level API
    "PagedDocument",
    "PaginationSettings",
    "load_settings",

    # Engine
    "PaginationEngine",
    "PageStyle",
    "MeasurementOracle",
    "CharacterBudgetOracle",
    "TextMetricsOracle",
    "RebuildScheduler",
    "LayoutValidator",

    # Models
    "Block",
    "Generic",
    "Heading",
    "ManualBreak",
    "TextRun",
    "Fragment",
    "Page",
    "HeadingEntry",
    "PaginationResult",

    # Consumers
    "PageNavigator",
    "PageSearch",
    "search_pages",
    "parse_blocks",
    "HTMLExporter",
    "JSONExporter",

    # Exceptions
    "PageQuillError",
    "ParsingError",
    "LayoutError",
    "MeasurementUnavailableError",
    "ConfigurationError",

    "__version__",
]
