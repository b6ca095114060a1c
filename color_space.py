"""
Conversions between RGB, hex, HSL and HSV.

HSL and HSV values are rounded to whole degrees/percents for display, so
rgb -> hsl -> rgb is not guaranteed to be exact. hex -> rgb always is.
"""

import math
import re
from dataclasses import dataclass
from typing import NamedTuple


HEX_PATTERN = re.compile(r'^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$', re.IGNORECASE)


class RGB(NamedTuple):
    r: int
    g: int
    b: int


class HSL(NamedTuple):
    h: int  # 0-359
    s: int  # 0-100
    l: int  # 0-100


class HSV(NamedTuple):
    h: int
    s: int
    v: int


@dataclass(frozen=True)
class ColorSample:
    """A color with all of its display representations."""
    rgb: RGB
    hex: str  # '#rrggbb', lowercase
    hsl: HSL
    hsv: HSV


# =============================================================================
# Rounding
# =============================================================================

def round_half_up(x: float) -> int:
    """Round to nearest integer, halves toward +infinity."""
    return int(math.floor(x + 0.5))


def clamp(x: float, low: float, high: float) -> float:
    return max(low, min(high, x))


def clamp_channel(x: float) -> int:
    """Round and clamp a channel value to 0-255."""
    return int(clamp(round_half_up(x), 0, 255))


# =============================================================================
# Hex
# =============================================================================

def rgb_to_hex(r: float, g: float, b: float) -> str:
    """Format RGB channels as '#rrggbb'. Channels are clamped to 0-255."""
    return '#' + ''.join(f"{clamp_channel(c):02x}" for c in (r, g, b))


def hex_to_rgb(hex_str: str) -> RGB:
    """
    Parse '#rrggbb' (leading '#' optional, any case) into RGB.

    Malformed input returns black rather than raising.
    """
    match = HEX_PATTERN.match(hex_str.strip()) if isinstance(hex_str, str) else None
    if not match:
        return RGB(0, 0, 0)
    return RGB(*(int(part, 16) for part in match.groups()))


# =============================================================================
# HSL / HSV
# =============================================================================

def _hue_turns(r: float, g: float, b: float, mx: float, d: float) -> float:
    """Hue in turns (0-1) for normalized channels with max mx and chroma d."""
    if mx == r:
        h = (g - b) / d + (6 if g < b else 0)
    elif mx == g:
        h = (b - r) / d + 2
    else:
        h = (r - g) / d + 4
    return h / 6


def _round_hue(turns: float) -> int:
    return round_half_up(turns * 360) % 360


def rgb_to_hsl(r: float, g: float, b: float) -> HSL:
    """Convert RGB (0-255) to HSL with integer degrees and percents."""
    r, g, b = (clamp(c, 0, 255) / 255 for c in (r, g, b))
    mx = max(r, g, b)
    mn = min(r, g, b)
    l = (mx + mn) / 2

    if mx == mn:
        h = s = 0.0
    else:
        d = mx - mn
        s = d / (2 - mx - mn) if l > 0.5 else d / (mx + mn)
        h = _hue_turns(r, g, b, mx, d)

    return HSL(_round_hue(h), round_half_up(s * 100), round_half_up(l * 100))


def rgb_to_hsv(r: float, g: float, b: float) -> HSV:
    """Convert RGB (0-255) to HSV with integer degrees and percents."""
    r, g, b = (clamp(c, 0, 255) / 255 for c in (r, g, b))
    mx = max(r, g, b)
    mn = min(r, g, b)
    d = mx - mn
    s = 0.0 if mx == 0 else d / mx

    h = 0.0 if mx == mn else _hue_turns(r, g, b, mx, d)

    return HSV(_round_hue(h), round_half_up(s * 100), round_half_up(mx * 100))


def hsl_to_rgb(h: float, s: float, l: float) -> RGB:
    """
    Convert HSL to RGB using the chroma / X / m construction.

    Hue is taken mod 360; saturation and lightness are clamped to 0-100.
    """
    h = h % 360
    s = clamp(s, 0, 100) / 100
    l = clamp(l, 0, 100) / 100

    c = (1 - abs(2 * l - 1)) * s
    x = c * (1 - abs((h / 60) % 2 - 1))
    m = l - c / 2

    sector = int(h // 60)
    r, g, b = [
        (c, x, 0),
        (x, c, 0),
        (0, c, x),
        (0, x, c),
        (x, 0, c),
        (c, 0, x),
    ][sector]

    return RGB(
        clamp_channel((r + m) * 255),
        clamp_channel((g + m) * 255),
        clamp_channel((b + m) * 255),
    )


def hsl_to_hex(h: float, s: float, l: float) -> str:
    return rgb_to_hex(*hsl_to_rgb(h, s, l))


# =============================================================================
# Samples
# =============================================================================

def make_sample(rgb) -> ColorSample:
    """Build a ColorSample from any (r, g, b) sequence."""
    r, g, b = (clamp_channel(c) for c in rgb)
    return ColorSample(
        rgb=RGB(r, g, b),
        hex=rgb_to_hex(r, g, b),
        hsl=rgb_to_hsl(r, g, b),
        hsv=rgb_to_hsv(r, g, b),
    )


def sample_from_hex(hex_str: str) -> ColorSample:
    return make_sample(hex_to_rgb(hex_str))


def luma(r: float, g: float, b: float) -> float:
    """Rec. 601 brightness (0-255), used for dark/light decisions."""
    return 0.299 * r + 0.587 * g + 0.114 * b
