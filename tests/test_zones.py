"""Tests for grid zones and rectangle averages."""

import numpy as np
import pytest

from extract_colors import PixelBuffer
from zones import (
    Rect,
    dominant_color_of_region,
    get_region,
    normalize_rect,
    sample_region_average,
    sample_zones,
)

from conftest import solid

CELL_COLORS = [
    (240, 0, 0), (0, 240, 0), (0, 0, 240),
    (240, 240, 0), (0, 240, 240), (240, 0, 240),
]


def grid_image(width=6, height=4, background=(255, 255, 255, 255)):
    """3x2 grid of 2x2 cells, each a different color."""
    pixels = solid(width, height, background)
    for i, rgb in enumerate(CELL_COLORS):
        row, col = divmod(i, 3)
        pixels[row * 2:row * 2 + 2, col * 2:col * 2 + 2] = (*rgb, 255)
    return pixels


def pixel_row(*colors):
    return np.array([[(*rgb, 255) for rgb in colors]], dtype=np.uint8)


class TestSampleZones:

    def test_one_color_per_cell(self):
        zones = sample_zones(PixelBuffer.from_array(grid_image()))
        assert [z.label for z in zones] == ['TL', 'TM', 'TR', 'BL', 'BM', 'BR']
        assert [z.full_label for z in zones][0] == 'Top Left'
        assert [z.color.hex for z in zones] == [
            '#f00000', '#00f000', '#0000f0', '#f0f000', '#00f0f0', '#f000f0']
        assert [(z.col, z.row) for z in zones] == [(0, 0), (1, 0), (2, 0), (0, 1), (1, 1), (2, 1)]

    def test_remainder_dropped(self):
        # Extra right column and bottom row are white and must not leak in
        zones = sample_zones(PixelBuffer.from_array(grid_image(width=7, height=5)))
        assert '#ffffff' not in [z.color.hex for z in zones]
        assert len(zones) == 6

    def test_transparent_cell_skipped(self):
        pixels = grid_image()
        pixels[0:2, 0:2, 3] = 0
        zones = sample_zones(PixelBuffer.from_array(pixels))
        assert len(zones) == 5
        assert zones[0].label == 'TM'

    def test_custom_grid_labels(self, solid_buffer):
        zones = sample_zones(solid_buffer(4, 2), cols=2, rows=1)
        assert [z.label for z in zones] == ['R1C1', 'R1C2']

    def test_tiny_buffer_has_no_zones(self, solid_buffer):
        assert sample_zones(solid_buffer(2, 1)) == []

    def test_invalid_grid(self, solid_buffer):
        with pytest.raises(ValueError):
            sample_zones(solid_buffer(4, 4), cols=0)

    def test_split_image(self, split_image):
        zones = sample_zones(split_image)
        # Middle column is half red, half blue; red is seen first
        assert [z.color.hex for z in zones] == [
            '#ff0000', '#ff0000', '#0000ff', '#ff0000', '#ff0000', '#0000ff']


class TestDominantColorOfRegion:

    def test_prefers_lit_color_when_partly_dark(self):
        # Half near-black: below the 60% cutoff, so the lit bucket wins
        rgb = dominant_color_of_region(pixel_row((0, 0, 0), (128, 128, 128), (0, 0, 0), (0, 0, 240)))
        assert rgb == (128, 128, 128)

    def test_dark_zone_stays_dark(self):
        rgb = dominant_color_of_region(pixel_row((0, 0, 0), (0, 0, 0), (0, 0, 0), (128, 128, 128)))
        assert rgb == (0, 0, 0)

    def test_only_dark_buckets(self):
        rgb = dominant_color_of_region(pixel_row((5, 5, 5), (5, 5, 5), (40, 0, 0)))
        # Every pixel is near-black, so the most frequent bucket wins
        assert rgb == (0, 0, 0)

    def test_top_bucket_clamped(self):
        assert dominant_color_of_region(pixel_row((255, 250, 10))) == (255, 255, 16)

    def test_no_opaque_pixels(self):
        pixels = pixel_row((10, 20, 30))
        pixels[..., 3] = 0
        assert dominant_color_of_region(pixels) is None


class TestRegionAverage:

    def test_uniform_region(self, solid_buffer):
        sample = sample_region_average(solid_buffer(10, 10, (17, 99, 201, 255)), Rect(2, 2, 5, 4))
        assert sample.rgb == (17, 99, 201)

    def test_mean_rounds_half_up(self):
        pixels = solid(3, 3, (0, 0, 0, 255))
        pixels[0, 0] = (9, 18, 255, 255)
        sample = sample_region_average(PixelBuffer.from_array(pixels), Rect(0, 0, 3, 3))
        # 9/9 = 1, 18/9 = 2, 255/9 = 28.33
        assert sample.rgb == (1, 2, 28)

    def test_ignores_transparent_pixels(self):
        pixels = solid(3, 3, (200, 100, 0, 255))
        pixels[1, 1] = (0, 0, 0, 10)
        sample = sample_region_average(PixelBuffer.from_array(pixels), Rect(0, 0, 3, 3))
        assert sample.hex == '#c86400'

    @pytest.mark.parametrize("rect", [Rect(0, 0, 2, 5), Rect(0, 0, 5, 2), Rect(0, 0, 0, 0)])
    def test_too_small(self, solid_buffer, rect):
        assert sample_region_average(solid_buffer(10, 10), rect) is None

    def test_all_transparent(self, solid_buffer):
        assert sample_region_average(solid_buffer(5, 5, (1, 2, 3, 0)), Rect(0, 0, 5, 5)) is None

    def test_rect_clipped_to_buffer(self, split_image):
        sample = sample_region_average(split_image, Rect(50, 30, 40, 40))
        assert sample.hex == '#0000ff'

    def test_rect_outside_buffer(self, split_image):
        assert sample_region_average(split_image, Rect(100, 100, 10, 10)) is None


class TestRects:

    def test_normalize_rect(self):
        assert normalize_rect(10.4, 20.6, 2, 5) == Rect(2, 5, 8, 16)

    def test_get_region(self, split_image):
        region = get_region(split_image, Rect(25, 0, 10, 4))
        assert (region.width, region.height) == (10, 4)
        assert tuple(region.pixels[0, 0]) == (255, 0, 0, 255)
        assert tuple(region.pixels[0, 9]) == (0, 0, 255, 255)
