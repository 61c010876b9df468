"""Geometry primitives and unit helpers for page calculations.

All page measurements in PageQuill are expressed in CSS pixels (96 dpi),
the unit the editor surface lays content out in.
"""

from __future__ import annotations

from dataclasses import dataclass

CSS_DPI = 96.0
MM_PER_INCH = 25.4
POINTS_PER_INCH = 72.0


@dataclass(frozen=True, slots=True)
class Size:
    width: float
    height: float

    @classmethod
    def from_mm(cls, width_mm: float, height_mm: float) -> "Size":
        return cls(mm_to_px(width_mm), mm_to_px(height_mm))


@dataclass(frozen=True, slots=True)
class Padding:
    top: float = 0.0
    bottom: float = 0.0
    left: float = 0.0
    right: float = 0.0

    @classmethod
    def uniform(cls, value: float) -> "Padding":
        return cls(value, value, value, value)

    @property
    def vertical(self) -> float:
        return self.top + self.bottom

    @property
    def horizontal(self) -> float:
        return self.left + self.right


def mm_to_px(value: float | None, dpi: float = CSS_DPI) -> float:
    if value is None:
        return 0.0
    return float(value) * dpi / MM_PER_INCH


def px_to_points(value: float | None, dpi: float = CSS_DPI) -> float:
    if value is None:
        return 0.0
    return float(value) * POINTS_PER_INCH / dpi


def points_to_px(value: float | None, dpi: float = CSS_DPI) -> float:
    if value is None:
        return 0.0
    return float(value) * dpi / POINTS_PER_INCH
