"""Pagination engine and its collaborators."""

from .geometry import Padding, Size, mm_to_px
from .heading_index import HeadingIndexBuilder
from .layout_validator import LayoutValidator, reassemble_blocks
from .measurement import CharacterBudgetOracle, MeasurementOracle, TextMetricsOracle
from .page_style import PageStyle
from .pagination_engine import PaginationEngine
from .rebuild_scheduler import RebuildScheduler
from .text_metrics import TextLayout, TextMetricsEngine
from .text_splitter import SplitResult, TextSplitter

__all__ = [
    "Padding",
    "Size",
    "mm_to_px",
    "HeadingIndexBuilder",
    "LayoutValidator",
    "reassemble_blocks",
    "CharacterBudgetOracle",
    "MeasurementOracle",
    "TextMetricsOracle",
    "PageStyle",
    "PaginationEngine",
    "RebuildScheduler",
    "TextLayout",
    "TextMetricsEngine",
    "SplitResult",
    "TextSplitter",
]
