"""
Region sampling: one dominant color per grid cell, or the mean color of a
user-selected rectangle.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from color_space import RGB, ColorSample, clamp_channel, luma, make_sample, round_half_up
from extract_colors import ALPHA_THRESHOLD, PixelBuffer, quantized_histogram


ZONE_QUANT_STEP = 16  # Finer than the whole-image pass
DARK_PIXEL_LUMA = 20  # Below this a pixel counts as near-black
SHADOW_BUCKET_LUMA = 25  # Buckets below this are skipped unless the zone is dark
DARK_ZONE_FRACTION = 0.60
MIN_REGION_SIZE = 3

ZONE_LABELS = ['TL', 'TM', 'TR', 'BL', 'BM', 'BR']
ZONE_FULL_LABELS = ['Top Left', 'Top Mid', 'Top Right', 'Bot Left', 'Bot Mid', 'Bot Right']


@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    width: int
    height: int


@dataclass(frozen=True)
class Zone:
    """One grid cell and its dominant color."""
    col: int
    row: int
    label: str  # 'TL', 'TM', ... for the 3x2 grid
    full_label: str
    color: ColorSample


def zone_labels(col: int, row: int, cols: int, rows: int) -> tuple[str, str]:
    """Short and long label for a cell. Named labels exist only for 3x2 grids."""
    if (cols, rows) == (3, 2):
        index = row * cols + col
        return ZONE_LABELS[index], ZONE_FULL_LABELS[index]
    return f"R{row + 1}C{col + 1}", f"Row {row + 1} Col {col + 1}"


def dominant_color_of_region(pixels: np.ndarray,
                             quant_step: float = ZONE_QUANT_STEP) -> Optional[RGB]:
    """
    Pick the most representative color of an (h, w, 4) pixel block.

    The most frequent bucket wins, except that near-black buckets are passed
    over unless at least 60% of the block is near-black.

    Returns:
        Dominant RGB, or None if no pixel is opaque enough.
    """
    flat = pixels.reshape(-1, 4)
    valid = flat[flat[:, 3] >= ALPHA_THRESHOLD, :3]
    if len(valid) == 0:
        return None

    # Buckets are compared before clamping, as the brightness test sees them
    histogram = quantized_histogram(valid, quant_step, clip=False)

    dark_count = sum(count for rgb, count in histogram if luma(*rgb) < DARK_PIXEL_LUMA)
    dark_fraction = dark_count / len(valid)

    best = histogram[0][0]
    if dark_fraction < DARK_ZONE_FRACTION:
        lit = next((rgb for rgb, _ in histogram if luma(*rgb) >= SHADOW_BUCKET_LUMA), None)
        if lit is not None:
            best = lit

    return RGB(*(clamp_channel(c) for c in best))


def sample_zones(buffer: PixelBuffer, cols: int = 3, rows: int = 2) -> list[Zone]:
    """
    Split the buffer into a cols x rows grid and find each cell's dominant color.

    Cells are floor(width / cols) by floor(height / rows); leftover pixels on
    the right and bottom edges are ignored. Cells without opaque pixels are
    left out, so fewer than cols * rows zones may be returned.
    """
    if cols < 1 or rows < 1:
        raise ValueError(f"Grid must be at least 1x1, got {cols}x{rows}")

    zone_w = buffer.width // cols
    zone_h = buffer.height // rows
    zones = []

    for row in range(rows):
        for col in range(cols):
            x, y = col * zone_w, row * zone_h
            cell = buffer.pixels[y:y + zone_h, x:x + zone_w]

            rgb = dominant_color_of_region(cell)
            if rgb is None:
                continue

            label, full_label = zone_labels(col, row, cols, rows)
            zones.append(Zone(col=col, row=row, label=label,
                              full_label=full_label, color=make_sample(rgb)))

    return zones


def normalize_rect(x1: float, y1: float, x2: float, y2: float) -> Rect:
    """Turn two drag corners (any order) into a Rect with rounded edges."""
    left = round_half_up(min(x1, x2))
    top = round_half_up(min(y1, y2))
    right = round_half_up(max(x1, x2))
    bottom = round_half_up(max(y1, y2))
    return Rect(left, top, right - left, bottom - top)


def clip_rect(buffer: PixelBuffer, rect: Rect) -> Rect:
    """Intersect a rectangle with the buffer bounds."""
    x0 = max(0, rect.x)
    y0 = max(0, rect.y)
    x1 = min(buffer.width, rect.x + rect.width)
    y1 = min(buffer.height, rect.y + rect.height)
    return Rect(x0, y0, max(0, x1 - x0), max(0, y1 - y0))


def get_region(buffer: PixelBuffer, rect: Rect) -> PixelBuffer:
    """Copy the pixels inside `rect` into a new buffer."""
    r = clip_rect(buffer, rect)
    return PixelBuffer.from_array(buffer.pixels[r.y:r.y + r.height, r.x:r.x + r.width].copy())


def sample_region_average(buffer: PixelBuffer, rect: Rect) -> Optional[ColorSample]:
    """
    Average the opaque pixels of a rectangle.

    Returns:
        Mean color, or None when the rectangle is smaller than 3x3 or holds
        no opaque pixel.
    """
    if rect.width < MIN_REGION_SIZE or rect.height < MIN_REGION_SIZE:
        return None

    r = clip_rect(buffer, rect)
    block = buffer.pixels[r.y:r.y + r.height, r.x:r.x + r.width].reshape(-1, 4)
    valid = block[block[:, 3] >= ALPHA_THRESHOLD, :3]
    if len(valid) == 0:
        return None

    mean = valid.sum(axis=0, dtype=np.int64) / len(valid)
    return make_sample(mean)
