"""
View filters: alternate renderings of an image that make value, hue,
saturation or temperature structure easier to read.

Filters never modify their input; each returns a new PixelBuffer with the
original alpha channel.
"""

from enum import Enum

import numpy as np

from color_space import hsl_to_rgb, rgb_to_hsl, round_half_up
from extract_colors import PixelBuffer


class FilterType(Enum):
    GRAYSCALE = 'grayscale'
    HIGH_CONTRAST = 'highcontrast'
    VALUES = 'values'
    HUE = 'hue'
    SATURATION = 'saturation'
    TEMPERATURE = 'temperature'
    RED = 'red'
    BLUE = 'blue'
    GREEN = 'green'
    YELLOW = 'yellow'


OVERLAY_COLORS = {
    FilterType.RED: (255, 107, 107),
    FilterType.BLUE: (77, 171, 247),
    FilterType.GREEN: (81, 207, 102),
    FilterType.YELLOW: (255, 212, 59),
}

DEFAULT_OVERLAY_OPACITY = 0.3


def _to_bytes(values: np.ndarray) -> np.ndarray:
    """Store floats the way a clamped byte array does: round, then clip."""
    return np.clip(np.rint(values), 0, 255).astype(np.uint8)


def _gray(rgb: np.ndarray) -> np.ndarray:
    return rgb[..., 0] * 0.299 + rgb[..., 1] * 0.587 + rgb[..., 2] * 0.114


def _map_colors(rgb: np.ndarray, fn) -> np.ndarray:
    """Apply a per-color function once per distinct color."""
    flat = rgb.reshape(-1, 3)
    unique, inverse = np.unique(flat, axis=0, return_inverse=True)
    mapped = np.array([fn(*(int(c) for c in color)) for color in unique], dtype=np.float64)
    return mapped.reshape(-1, 3)[inverse.reshape(-1)].reshape(rgb.shape)


def grayscale(rgb: np.ndarray) -> np.ndarray:
    return np.repeat(_gray(rgb)[..., None], 3, axis=-1)


def high_contrast(rgb: np.ndarray) -> np.ndarray:
    value = np.where(_gray(rgb) > 127, 255.0, 0.0)
    return np.repeat(value[..., None], 3, axis=-1)


def value_zones(rgb: np.ndarray) -> np.ndarray:
    """Posterize to three values: shadow, midtone, highlight."""
    gray = _gray(rgb)
    value = np.select([gray < 85, gray < 170], [40.0, 127.0], default=215.0)
    return np.repeat(value[..., None], 3, axis=-1)


def hue_only(rgb: np.ndarray) -> np.ndarray:
    """Every pixel at full saturation and mid lightness, keeping its hue."""
    return _map_colors(rgb, lambda r, g, b: hsl_to_rgb(rgb_to_hsl(r, g, b).h, 100, 50))


def saturation_view(rgb: np.ndarray) -> np.ndarray:
    """Gray level proportional to HSL saturation."""
    def level(r, g, b):
        v = round_half_up(rgb_to_hsl(r, g, b).s * 2.55)
        return (v, v, v)
    return _map_colors(rgb, level)


def temperature_view(rgb: np.ndarray) -> np.ndarray:
    """Warm pixels toward orange, cool pixels toward cyan."""
    rgb = rgb.astype(np.float64)
    temp = (rgb[..., 0] - rgb[..., 2]) / 2
    warm = temp > 0

    out = np.empty_like(rgb)
    out[..., 0] = np.where(warm, np.minimum(255, 127 + temp * 2), 50)
    out[..., 1] = np.where(warm, np.minimum(255, 80 + temp), np.minimum(255, 127 - temp))
    out[..., 2] = np.where(warm, 50, np.minimum(255, 127 - temp * 2))
    return out


def color_overlay(rgb: np.ndarray, color: tuple, opacity: float) -> np.ndarray:
    return rgb.astype(np.float64) * (1 - opacity) + np.array(color, dtype=np.float64) * opacity


def apply_filter(buffer: PixelBuffer, filter_type: FilterType,
                 opacity: float = DEFAULT_OVERLAY_OPACITY) -> PixelBuffer:
    """
    Render `buffer` through a view filter.

    Args:
        buffer: Source image (not modified)
        filter_type: Which view to produce
        opacity: Blend strength for the color overlays (0-1)
    """
    filter_type = FilterType(filter_type)
    rgb = buffer.pixels[..., :3].astype(np.float64)

    if filter_type is FilterType.GRAYSCALE:
        out = grayscale(rgb)
    elif filter_type is FilterType.HIGH_CONTRAST:
        out = high_contrast(rgb)
    elif filter_type is FilterType.VALUES:
        out = value_zones(rgb)
    elif filter_type is FilterType.HUE:
        out = hue_only(buffer.pixels[..., :3])
    elif filter_type is FilterType.SATURATION:
        out = saturation_view(buffer.pixels[..., :3])
    elif filter_type is FilterType.TEMPERATURE:
        out = temperature_view(rgb)
    else:
        out = color_overlay(rgb, OVERLAY_COLORS[filter_type], opacity)

    result = np.empty_like(buffer.pixels)
    result[..., :3] = _to_bytes(out)
    result[..., 3] = buffer.pixels[..., 3]
    return PixelBuffer.from_array(result)
