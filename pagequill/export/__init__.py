"""Exporters for paginated content."""

from .html_exporter import HTMLExportConfig, HTMLExporter, fragment_to_html
from .json_exporter import JSONExporter

__all__ = ["HTMLExportConfig", "HTMLExporter", "fragment_to_html", "JSONExporter"]
