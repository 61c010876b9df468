"""JSON export of a pagination result together with the page style it was laid out with."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..engine.page_style import PageStyle
from ..models.page import PaginationResult

logger = logging.getLogger(__name__)


class JSONExporter:
    """Serializes pages, fragments and headings."""

    def __init__(self, title: str = "Document Title", style: Optional[PageStyle] = None, indent: int = 2) -> None:
        self.title = title
        self.style = style or PageStyle()
        self.indent = indent

    def to_dict(self, result: PaginationResult) -> Dict[str, Any]:
        data = {"title": self.title, "page_style": self.style.to_dict()}
        data.update(result.to_dict())
        return data

    def render(self, result: PaginationResult) -> str:
        return json.dumps(self.to_dict(result), indent=self.indent, ensure_ascii=False)

    def export(self, result: PaginationResult, output_path: Union[str, Path]) -> Path:
        target = Path(output_path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.render(result), encoding="utf-8")
        logger.info(f"Wrote pagination JSON to {target}")
        return target
