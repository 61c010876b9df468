"""
Settings for pagination, rebuild scheduling and navigation.

Settings live in an optional JSON file::

    {
        "settings": {"debounce_seconds": 0.2, "clamp_policy": "first"},
        "page_style": {"page_width_mm": 210, "page_height_mm": 297, "font_size": 12}
    }

``PAGEQUILL_CONFIG`` names the file used when no path is given.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from .engine.page_style import PageStyle
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "PAGEQUILL_CONFIG"
CLAMP_POLICIES = ("first", "last")


@dataclass(frozen=True)
class PaginationSettings:
    """Behavioural knobs of a paged document."""

    debounce_seconds: float = 0.2
    clamp_policy: str = "first"
    heading_levels: Tuple[int, ...] = (1, 2, 3)
    cache_size: int = 2048
    strict_validation: bool = False

    def __post_init__(self) -> None:
        if self.debounce_seconds < 0:
            raise ConfigurationError("debounce_seconds cannot be negative", str(self.debounce_seconds))
        if self.clamp_policy not in CLAMP_POLICIES:
            raise ConfigurationError(
                "Unknown clamp policy", f"{self.clamp_policy!r}, expected one of {CLAMP_POLICIES}"
            )
        if self.cache_size < 1:
            raise ConfigurationError("cache_size must be positive", str(self.cache_size))
        if not self.heading_levels or any(level < 1 or level > 6 for level in self.heading_levels):
            raise ConfigurationError("heading_levels must be within 1..6", str(self.heading_levels))

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["heading_levels"] = list(self.heading_levels)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PaginationSettings":
        known = set(cls.__dataclass_fields__)
        unknown = set(data) - known
        if unknown:
            raise ConfigurationError("Unknown settings keys", ", ".join(sorted(unknown)))
        values = dict(data)
        if "heading_levels" in values:
            values["heading_levels"] = tuple(int(level) for level in values["heading_levels"])
        try:
            return cls(**values)
        except TypeError as exc:
            raise ConfigurationError("Invalid settings", str(exc)) from exc


def load_settings(path: Optional[Union[str, Path]] = None) -> Tuple[PaginationSettings, PageStyle]:
    """
    Load settings and page style.

    Args:
        path: JSON file; falls back to ``$PAGEQUILL_CONFIG``, then to defaults

    Returns:
        Tuple (settings, page_style)

    Raises:
        ConfigurationError: if the file is missing, unreadable or invalid
    """
    if path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if not env_path:
            return PaginationSettings(), PageStyle()
        path = env_path

    config_path = Path(path)
    if not config_path.exists():
        raise ConfigurationError("Config file not found", str(config_path))

    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigurationError("Cannot read config file", f"{config_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigurationError("Config root must be an object", str(config_path))
    unknown = set(data) - {"settings", "page_style"}
    if unknown:
        raise ConfigurationError("Unknown config sections", ", ".join(sorted(unknown)))

    settings = PaginationSettings.from_dict(data.get("settings") or {})
    style = PageStyle.from_dict(data.get("page_style") or {})
    logger.debug(f"Loaded settings from {config_path}")
    return settings, style
