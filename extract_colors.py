#!/usr/bin/env python3
"""
Extract the dominant, mutually distinct colors of an image.

Pixels are quantized per channel, counted, and the most frequent buckets are
kept greedily as long as they stay a minimum distance away from every color
already kept.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

import numpy as np
from PIL import Image

from color_space import RGB, HSL, HSV, ColorSample, hex_to_rgb, make_sample


DEFAULT_QUANT_STEP = 20
DEFAULT_MAX_COLORS = 15
DEFAULT_MIN_DIFFERENCE = 25.0
ALPHA_THRESHOLD = 128

# Channel weights for the luma-weighted distance
DIFFERENCE_WEIGHTS = (0.30, 0.59, 0.11)

# Image size limits (security: prevent decompression bombs)
MAX_IMAGE_PIXELS = 50_000_000  # 50 megapixels
MAX_IMAGE_DIMENSION = 10_000  # 10k pixels per side


class InvalidBufferError(ValueError):
    """Pixel data does not match the declared width and height."""


# =============================================================================
# Pixel Buffer
# =============================================================================

@dataclass(frozen=True, eq=False)
class PixelBuffer:
    """
    Read-only RGBA pixels in row-major order.

    `data` may be bytes, a flat sequence of ints, or an array of shape
    (height, width, 4). It is exposed as `pixels`, a non-writeable uint8 view
    of shape (height, width, 4).
    """
    width: int
    height: int
    data: object

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise InvalidBufferError(f"Negative buffer size {self.width}x{self.height}")

        if isinstance(self.data, (bytes, bytearray, memoryview)):
            arr = np.frombuffer(self.data, dtype=np.uint8)
        else:
            arr = np.asarray(self.data)
            if arr.dtype != np.uint8:
                if arr.dtype.kind not in 'iub' and np.any(arr != np.floor(arr)):
                    raise InvalidBufferError("Channel values must be whole numbers")
                if arr.size and (arr.min() < 0 or arr.max() > 255):
                    raise InvalidBufferError("Channel values must be in 0-255")
                arr = arr.astype(np.uint8)

        expected = self.width * self.height * 4
        if arr.size != expected:
            raise InvalidBufferError(
                f"Buffer has {arr.size} bytes, expected {expected} "
                f"for {self.width}x{self.height} RGBA"
            )

        pixels = arr.reshape(self.height, self.width, 4)
        pixels.flags.writeable = False
        object.__setattr__(self, 'pixels', pixels)

    @classmethod
    def from_array(cls, pixels: np.ndarray) -> 'PixelBuffer':
        """Wrap an (height, width, 4) array."""
        pixels = np.asarray(pixels)
        if pixels.ndim != 3 or pixels.shape[2] != 4:
            raise InvalidBufferError(f"Expected (height, width, 4) array, got {pixels.shape}")
        h, w = pixels.shape[:2]
        return cls(width=w, height=h, data=pixels)

    @classmethod
    def from_image(cls, img: Image.Image) -> 'PixelBuffer':
        return cls.from_array(np.array(img.convert('RGBA')))

    @property
    def pixel_count(self) -> int:
        return self.width * self.height


def load_pixel_buffer(image_path: str, downscale: Optional[int] = None) -> PixelBuffer:
    """
    Load an image file as an RGBA PixelBuffer.

    Args:
        image_path: Path to the input image
        downscale: If set, shrink the image so neither side exceeds this many
            pixels (aspect ratio kept). Images already small enough are untouched.

    Raises:
        FileNotFoundError: If image file doesn't exist
        ValueError: If file is not a valid image or exceeds size limits
    """
    try:
        img = Image.open(image_path)
    except FileNotFoundError:
        raise FileNotFoundError(f"Image not found: {image_path}")
    except Exception as e:
        raise ValueError(f"Could not open image: {e}")

    width, height = img.size
    if width > MAX_IMAGE_DIMENSION or height > MAX_IMAGE_DIMENSION:
        raise ValueError(
            f"Image dimensions {width}x{height} exceed maximum "
            f"{MAX_IMAGE_DIMENSION}x{MAX_IMAGE_DIMENSION}"
        )
    if width * height > MAX_IMAGE_PIXELS:
        raise ValueError(
            f"Image has {width * height:,} pixels, exceeding maximum {MAX_IMAGE_PIXELS:,}"
        )

    img = img.convert('RGBA')
    if downscale:
        img.thumbnail((downscale, downscale))

    return PixelBuffer.from_image(img)


# =============================================================================
# Quantization & Distance
# =============================================================================

def quantize(channels: np.ndarray, step: float) -> np.ndarray:
    """
    Snap channel values to the nearest multiple of `step` (halves round up).

    Results are not clamped, so the top bucket may exceed 255.
    """
    if step <= 0:
        raise ValueError(f"Quantization step must be positive, got {step}")
    return np.floor(channels.astype(np.float64) / step + 0.5) * step


def to_channels(q: np.ndarray) -> np.ndarray:
    """Round bucket values half up to whole channels, as rgb_to_hex does."""
    return np.floor(q + 0.5).astype(np.int64)


def quantize_color(rgb, step: float = DEFAULT_QUANT_STEP) -> RGB:
    """Quantize a single color, clamped to a displayable RGB."""
    q = to_channels(np.clip(quantize(np.asarray(rgb), step), 0, 255))
    return RGB(*(int(c) for c in q))


def color_difference(rgb1, rgb2) -> float:
    """Luma-weighted Euclidean distance between two RGB colors."""
    wr, wg, wb = DIFFERENCE_WEIGHTS
    dr = rgb1[0] - rgb2[0]
    dg = rgb1[1] - rgb2[1]
    db = rgb1[2] - rgb2[2]
    return math.sqrt(wr * dr * dr + wg * dg * dg + wb * db * db)


def _pack(rgb: np.ndarray) -> np.ndarray:
    """Pack (n, 3) integer channels into one integer key per row."""
    return (rgb[:, 0] << 18) | (rgb[:, 1] << 9) | rgb[:, 2]


def _unpack(key: int) -> tuple:
    return (int(key) >> 18, (int(key) >> 9) & 0x1ff, int(key) & 0x1ff)


def quantized_histogram(rgb: np.ndarray, step: float, clip: bool = True) -> list[tuple]:
    """
    Count quantized colors.

    Args:
        rgb: Array of shape (n, 3)
        step: Quantization step
        clip: Clamp buckets to 0-255 before counting

    Returns:
        List of ((r, g, b), count) sorted by count descending. Equal counts
        keep the order in which the bucket first appeared in `rgb`.
    """
    if len(rgb) == 0:
        return []

    q = quantize(rgb, step)
    if clip:
        q = np.clip(q, 0, 255)
    keys = _pack(to_channels(q))

    unique_keys, first_seen, counts = np.unique(keys, return_index=True, return_counts=True)
    order = np.lexsort((first_seen, -counts))

    return [(_unpack(unique_keys[i]), int(counts[i])) for i in order]


# =============================================================================
# Distinct Colors
# =============================================================================

@dataclass(frozen=True)
class DistinctColorEntry:
    """A dominant color with its pixel tally."""
    sample: ColorSample
    count: int
    percentage: float  # Share of valid pixels, 2 decimals

    @property
    def rgb(self) -> RGB:
        return self.sample.rgb

    @property
    def hex(self) -> str:
        return self.sample.hex

    @property
    def hsl(self) -> HSL:
        return self.sample.hsl

    @property
    def hsv(self) -> HSV:
        return self.sample.hsv


def percentage_of(count: int, total: int) -> float:
    """Percentage rounded half up to 2 decimals."""
    return math.floor(count / total * 100 * 100 + 0.5) / 100


def _check_limits(max_colors: int, min_difference: float) -> None:
    if max_colors < 0:
        raise ValueError(f"max_colors must be >= 0, got {max_colors}")
    if min_difference < 0:
        raise ValueError(f"min_difference must be >= 0, got {min_difference}")


def filter_distinct(candidates: Iterable, max_colors: int = DEFAULT_MAX_COLORS,
                    min_difference: float = DEFAULT_MIN_DIFFERENCE) -> list:
    """
    Greedily keep candidates that differ from every kept color.

    Candidates are visited in the given order; the first one is always kept.
    Pairwise checks are O(max_colors^2), which stays small for the intended
    palette sizes.
    """
    _check_limits(max_colors, min_difference)

    distinct = []
    for candidate in candidates:
        if len(distinct) >= max_colors:
            break
        if all(color_difference(candidate.rgb, kept.rgb) >= min_difference for kept in distinct):
            distinct.append(candidate)

    return distinct


def extract_dominant_colors(buffer: PixelBuffer,
                            quant_step: float = DEFAULT_QUANT_STEP,
                            max_colors: int = DEFAULT_MAX_COLORS,
                            min_difference: float = DEFAULT_MIN_DIFFERENCE,
                            alpha_threshold: int = ALPHA_THRESHOLD) -> list[DistinctColorEntry]:
    """
    Extract up to `max_colors` frequent, mutually distinct colors.

    Args:
        buffer: Source pixels (not modified)
        quant_step: Bucket size per channel
        max_colors: Maximum number of colors returned
        min_difference: Minimum color_difference between any two results
        alpha_threshold: Pixels with alpha below this are ignored

    Returns:
        Entries sorted by pixel count descending. Empty if no pixel passes
        the alpha threshold.
    """
    if quant_step <= 0:
        raise ValueError(f"quant_step must be positive, got {quant_step}")
    _check_limits(max_colors, min_difference)

    flat = buffer.pixels.reshape(-1, 4)
    valid = flat[flat[:, 3] >= alpha_threshold, :3]
    valid_pixels = len(valid)
    if valid_pixels == 0:
        return []

    histogram = quantized_histogram(valid, quant_step)

    # Entries are built lazily; the greedy pass usually stops early
    candidates = (
        DistinctColorEntry(
            sample=make_sample(rgb),
            count=count,
            percentage=percentage_of(count, valid_pixels),
        )
        for rgb, count in histogram
    )

    return filter_distinct(candidates, max_colors, min_difference)


# =============================================================================
# Gradient Stacks
# =============================================================================

class SortCategory(Enum):
    VALUE = 'value'
    SATURATION = 'saturation'
    HUE = 'hue'
    FREQUENCY = 'frequency'


def sort_by_category(entries: list[DistinctColorEntry], category: SortCategory) -> list[DistinctColorEntry]:
    """Order colors for a gradient stack. Sorting is stable."""
    if category is SortCategory.VALUE:
        return sorted(entries, key=lambda e: -e.hsv.v)
    if category is SortCategory.SATURATION:
        return sorted(entries, key=lambda e: -e.hsl.s)
    if category is SortCategory.HUE:
        return sorted(entries, key=lambda e: e.hsl.h)
    return sorted(entries, key=lambda e: -e.count)


def category_display_value(entry: DistinctColorEntry, category: SortCategory) -> str:
    if category is SortCategory.VALUE:
        return f"{entry.hsv.v}%"
    if category is SortCategory.SATURATION:
        return f"{entry.hsl.s}%"
    if category is SortCategory.HUE:
        return f"{entry.hsl.h}°"
    return f"{entry.percentage:g}%"


def find_color_positions(buffer: PixelBuffer, target_hex: str, max_positions: int = 2,
                         min_spacing: float = 50, quant_step: float = DEFAULT_QUANT_STEP) -> list[tuple]:
    """
    Find where a quantized color occurs, scanning a coarse grid.

    The grid step grows with image size so roughly 300 points are probed.
    Returned (x, y) positions are at least `min_spacing` pixels apart and
    come out in row-major order, so results are repeatable.
    """
    if max_positions <= 0 or buffer.pixel_count == 0:
        return []

    grid = max(1, math.floor(math.sqrt(buffer.pixel_count / 300)))
    probes = buffer.pixels[::grid, ::grid, :3]
    q = to_channels(np.clip(quantize(probes, quant_step), 0, 255))
    matches = np.argwhere(np.all(q == np.array(hex_to_rgb(target_hex)), axis=-1))

    positions = []
    for row, col in matches:
        x, y = int(col) * grid, int(row) * grid
        if all(math.hypot(px - x, py - y) >= min_spacing for px, py in positions):
            positions.append((x, y))
            if len(positions) >= max_positions:
                break

    return positions


# =============================================================================
# Visualization
# =============================================================================

def visualize_colors(entries: list[DistinctColorEntry], output_path: str) -> None:
    """
    Create a swatch image of the extracted colors with their percentages.

    Args:
        entries: Colors as returned by extract_dominant_colors
        output_path: Path to save the output image
    """
    from PIL import ImageDraw

    swatch_size = 80
    padding = 10
    text_height = 25
    cols = max(1, min(len(entries), 6))
    rows = max(1, (len(entries) + cols - 1) // cols)

    img_width = cols * (swatch_size + padding) + padding
    img_height = rows * (swatch_size + text_height + padding) + padding

    img = Image.new('RGB', (img_width, img_height), (240, 240, 240))
    draw = ImageDraw.Draw(img)

    for i, entry in enumerate(entries):
        row = i // cols
        col = i % cols

        x = padding + col * (swatch_size + padding)
        y = padding + row * (swatch_size + text_height + padding)

        draw.rectangle([x, y, x + swatch_size, y + swatch_size], fill=tuple(entry.rgb))

        # Center text under swatch
        text = f"{entry.percentage:.1f}%"
        bbox = draw.textbbox((0, 0), text)
        text_width = bbox[2] - bbox[0]
        text_x = x + (swatch_size - text_width) // 2
        draw.text((text_x, y + swatch_size + 4), text, fill=(0, 0, 0))

    img.save(output_path)
    print(f"Saved visualization to {output_path}")


if __name__ == '__main__':
    from pathlib import Path

    source_dir = Path('source_images')
    output_dir = Path('output')
    output_dir.mkdir(exist_ok=True)

    for image_path in sorted(source_dir.glob('*.jpeg')):
        print(f"\n{'='*60}")
        print(f"Processing: {image_path.name}")
        print('='*60)

        entries = extract_dominant_colors(load_pixel_buffer(str(image_path), downscale=256))
        visualize_colors(entries, str(output_dir / f"{image_path.stem}_palette.png"))

        for entry in entries:
            print(f"  {entry.hex}: {entry.percentage:.2f}% ({entry.count:,} pixels)")

    print(f"\nDone! Results saved to {output_dir}/")
