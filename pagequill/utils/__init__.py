"""Helper utilities: logging, caching and font resolution."""

from .cache import Cache
from .font_utils import resolve_base_family, resolve_font_variant
from .logger import add_file_handler, get_logger

__all__ = [
    "Cache",
    "resolve_base_family",
    "resolve_font_variant",
    "add_file_handler",
    "get_logger",
]
