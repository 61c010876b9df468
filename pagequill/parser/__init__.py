"""Parsers turning editor content into blocks."""

from .html_parser import HTMLBlockParser, parse_blocks

__all__ = ["HTMLBlockParser", "parse_blocks"]
