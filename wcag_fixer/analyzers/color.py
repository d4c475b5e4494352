"""
Color - CSS color parsing and WCAG contrast math.

Relative luminance uses the sRGB transfer function (linear below 0.03928)
and the 0.2126 / 0.7152 / 0.0722 channel weights. Contrast ratio is
(L_lighter + 0.05) / (L_darker + 0.05), from 1.0 to 21.0.

Alpha is ignored: a semi-transparent color is treated as opaque, since the
color underneath is not known without rendering.
"""

import colorsys
import re
from typing import Dict, Optional, Tuple

RGB = Tuple[int, int, int]

BLACK: RGB = (0, 0, 0)
WHITE: RGB = (255, 255, 255)

NORMAL_TEXT_THRESHOLD = 4.5
LARGE_TEXT_THRESHOLD = 3.0

NAMED_COLORS: Dict[str, RGB] = {
    "black": (0, 0, 0),
    "white": (255, 255, 255),
    "red": (255, 0, 0),
    "green": (0, 128, 0),
    "blue": (0, 0, 255),
    "yellow": (255, 255, 0),
    "orange": (255, 165, 0),
    "purple": (128, 0, 128),
    "pink": (255, 192, 203),
    "brown": (165, 42, 42),
    "gray": (128, 128, 128),
    "grey": (128, 128, 128),
    "silver": (192, 192, 192),
    "lime": (0, 255, 0),
    "aqua": (0, 255, 255),
    "cyan": (0, 255, 255),
    "fuchsia": (255, 0, 255),
    "magenta": (255, 0, 255),
    "maroon": (128, 0, 0),
    "navy": (0, 0, 128),
    "olive": (128, 128, 0),
    "teal": (0, 128, 128),
    "gold": (255, 215, 0),
    "coral": (255, 127, 80),
    "salmon": (250, 128, 114),
    "tomato": (255, 99, 71),
    "crimson": (220, 20, 60),
    "darkred": (139, 0, 0),
    "darkgreen": (0, 100, 0),
    "darkblue": (0, 0, 139),
    "darkgray": (169, 169, 169),
    "darkgrey": (169, 169, 169),
    "dimgray": (105, 105, 105),
    "dimgrey": (105, 105, 105),
    "slategray": (112, 128, 144),
    "lightgray": (211, 211, 211),
    "lightgrey": (211, 211, 211),
    "gainsboro": (220, 220, 220),
    "whitesmoke": (245, 245, 245),
    "lightyellow": (255, 255, 224),
    "lightblue": (173, 216, 230),
    "lightgreen": (144, 238, 144),
    "lightpink": (255, 182, 193),
    "lightcyan": (224, 255, 255),
    "beige": (245, 245, 220),
    "cornsilk": (255, 248, 220),
    "mistyrose": (255, 228, 225),
    "lemonchiffon": (255, 250, 205),
    "ivory": (255, 255, 240),
    "khaki": (240, 230, 140),
    "lavender": (230, 230, 250),
    "linen": (250, 240, 230),
    "snow": (255, 250, 250),
    "azure": (240, 255, 255),
    "mintcream": (245, 255, 250),
    "aliceblue": (240, 248, 255),
    "ghostwhite": (248, 248, 255),
    "honeydew": (240, 255, 240),
    "seashell": (255, 245, 238),
    "wheat": (245, 222, 179),
    "skyblue": (135, 206, 235),
    "steelblue": (70, 130, 180),
    "royalblue": (65, 105, 225),
    "indigo": (75, 0, 130),
    "violet": (238, 130, 238),
    "orchid": (218, 112, 214),
    "chocolate": (210, 105, 30),
    "firebrick": (178, 34, 34),
    "forestgreen": (34, 139, 34),
    "seagreen": (46, 139, 87),
    "darkorange": (255, 140, 0),
    "darkviolet": (148, 0, 211),
}

_HEX = re.compile(r"^#([0-9a-f]{3,4}|[0-9a-f]{6}|[0-9a-f]{8})$")
_FUNCTION = re.compile(r"^(rgba?|hsla?)\(\s*([^)]*)\)$")


# =============================================================================
# PARSING
# =============================================================================


def parse_color(value: Optional[str]) -> Optional[RGB]:
    """
    Parse a CSS color token.

    Supports named colors, #rgb / #rgba / #rrggbb / #rrggbbaa, rgb()/rgba()
    (numbers or percentages, comma or space separated) and hsl()/hsla().

    Args:
        value: Declaration value, possibly with !important

    Returns:
        (r, g, b) with 0-255 channels, or None if the token is not a
        resolvable color (including "transparent" and "inherit")
    """
    if not value:
        return None
    token = value.replace("!important", "").strip().lower()
    if not token:
        return None

    if token in NAMED_COLORS:
        return NAMED_COLORS[token]

    match = _HEX.match(token)
    if match:
        return _parse_hex(match.group(1))

    match = _FUNCTION.match(token)
    if match:
        args = [a for a in re.split(r"[\s,/]+", match.group(2).strip()) if a]
        if len(args) < 3:
            return None
        try:
            if match.group(1).startswith("rgb"):
                return tuple(_rgb_channel(a) for a in args[:3])
            return _hsl_to_rgb(args[0], args[1], args[2])
        except ValueError:
            return None

    return None


def parse_background(value: Optional[str]) -> Optional[RGB]:
    """
    Extract a color from a background or background-color value.

    The background shorthand may mix a color with images and positions; the
    first token that parses as a color wins.
    """
    color = parse_color(value)
    if color is not None or not value:
        return color
    for token in re.findall(r"[a-z]+\([^)]*\)|#[0-9a-fA-F]+|[A-Za-z]+", value):
        color = parse_color(token)
        if color is not None:
            return color
    return None


def _parse_hex(digits: str) -> RGB:
    if len(digits) in (3, 4):
        digits = "".join(c * 2 for c in digits[:3])
    return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


def _rgb_channel(token: str) -> int:
    if token.endswith("%"):
        number = float(token[:-1]) * 255 / 100
    else:
        number = float(token)
    return int(round(min(255.0, max(0.0, number))))


def _hsl_to_rgb(hue: str, saturation: str, lightness: str) -> RGB:
    h = float(hue.replace("deg", "")) % 360 / 360
    s = min(100.0, max(0.0, float(saturation.rstrip("%")))) / 100
    l = min(100.0, max(0.0, float(lightness.rstrip("%")))) / 100
    r, g, b = colorsys.hls_to_rgb(h, l, s)
    return (int(round(r * 255)), int(round(g * 255)), int(round(b * 255)))


# =============================================================================
# CONTRAST MATH
# =============================================================================


def relative_luminance(rgb: RGB) -> float:
    """Relative luminance of an sRGB color, 0.0 (black) to 1.0 (white)."""

    def linear(channel: int) -> float:
        c = channel / 255
        if c <= 0.03928:
            return c / 12.92
        return ((c + 0.055) / 1.055) ** 2.4

    r, g, b = (linear(c) for c in rgb)
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def contrast_ratio(first: RGB, second: RGB) -> float:
    """
    Contrast ratio between two colors, order independent.

    Example:
        contrast_ratio(BLACK, WHITE)  # 21.0
        contrast_ratio(WHITE, WHITE)  # 1.0
    """
    l1 = relative_luminance(first)
    l2 = relative_luminance(second)
    lighter, darker = max(l1, l2), min(l1, l2)
    return (lighter + 0.05) / (darker + 0.05)


def contrast_ratio_of(foreground: str, background: str) -> Optional[float]:
    """Contrast ratio of two CSS color tokens, None if either is unparseable."""
    fg = parse_color(foreground)
    bg = parse_color(background)
    if fg is None or bg is None:
        return None
    return contrast_ratio(fg, bg)


def best_contrast_color(other: RGB) -> RGB:
    """Black or white, whichever contrasts more with the given color."""
    if contrast_ratio(BLACK, other) >= contrast_ratio(WHITE, other):
        return BLACK
    return WHITE


def to_hex(rgb: RGB) -> str:
    return "#{:02x}{:02x}{:02x}".format(*rgb)


def is_light(rgb: RGB, threshold: float = NORMAL_TEXT_THRESHOLD) -> bool:
    """Whether a foreground would fail the threshold on a white page."""
    return contrast_ratio(rgb, WHITE) < threshold
