from __future__ import annotations

from typing import Optional

# Core PDF fonts ship with ReportLab and need no registration.
CORE_FAMILIES = {"Helvetica", "Times-Roman", "Courier"}

FONT_FALLBACKS = {
    "arial": "Helvetica",
    "avenir": "Helvetica",
    "avenir next": "Helvetica",
    "calibri": "Helvetica",
    "helvetica": "Helvetica",
    "helvetica neue": "Helvetica",
    "roboto": "Helvetica",
    "sans-serif": "Helvetica",
    "segoe ui": "Helvetica",
    "system-ui": "Helvetica",
    "-apple-system": "Helvetica",
    "tahoma": "Helvetica",
    "verdana": "Helvetica",
    "cambria": "Times-Roman",
    "georgia": "Times-Roman",
    "serif": "Times-Roman",
    "times": "Times-Roman",
    "times new roman": "Times-Roman",
    "times-roman": "Times-Roman",
    "consolas": "Courier",
    "courier": "Courier",
    "courier new": "Courier",
    "monospace": "Courier",
}

_VARIANTS = {
    "Helvetica": ("Helvetica", "Helvetica-Bold", "Helvetica-Oblique", "Helvetica-BoldOblique"),
    "Times-Roman": ("Times-Roman", "Times-Bold", "Times-Italic", "Times-BoldItalic"),
    "Courier": ("Courier", "Courier-Bold", "Courier-Oblique", "Courier-BoldOblique"),
}


def resolve_base_family(font_family: Optional[str]) -> str:
    """Map a CSS font-family list to the first core font it names."""
    if not font_family:
        return "Helvetica"

    for candidate in font_family.split(","):
        cleaned = candidate.strip().strip("'\"")
        if not cleaned:
            continue
        if cleaned in CORE_FAMILIES:
            return cleaned
        base = FONT_FALLBACKS.get(cleaned.lower())
        if base:
            return base
    return "Helvetica"


def resolve_font_variant(font_family: Optional[str], bold: bool = False, italic: bool = False) -> str:
    regular, bold_face, italic_face, bold_italic = _VARIANTS[resolve_base_family(font_family)]
    if bold and italic:
        return bold_italic
    if bold:
        return bold_face
    if italic:
        return italic_face
    return regular
