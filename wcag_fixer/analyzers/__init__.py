"""
Analyzers - Document parsing and style/color analysis.

Provides:
- Document: BeautifulSoup wrapper with a node arena
- inline_style: style="" declaration parsing
- color: CSS color parsing and contrast math
"""

from .dom_parser import Document
from .color import (
    NAMED_COLORS,
    parse_color,
    parse_background,
    relative_luminance,
    contrast_ratio,
    contrast_ratio_of,
    best_contrast_color,
)
from .inline_style import parse_style, serialize_style, set_declaration

__all__ = [
    "Document",
    "NAMED_COLORS",
    "parse_color",
    "parse_background",
    "relative_luminance",
    "contrast_ratio",
    "contrast_ratio_of",
    "best_contrast_color",
    "parse_style",
    "serialize_style",
    "set_declaration",
]
