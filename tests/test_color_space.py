"""Tests for RGB / hex / HSL / HSV conversions."""

import numpy as np
import pytest

from color_space import (
    hex_to_rgb,
    hsl_to_hex,
    hsl_to_rgb,
    make_sample,
    rgb_to_hex,
    rgb_to_hsl,
    rgb_to_hsv,
    round_half_up,
    sample_from_hex,
)


class TestHex:

    @pytest.mark.parametrize("rgb", [(0, 0, 0), (255, 255, 255), (1, 128, 254), (16, 15, 160)])
    def test_round_trip(self, rgb):
        assert hex_to_rgb(rgb_to_hex(*rgb)) == rgb

    def test_lowercase_and_padded(self):
        assert rgb_to_hex(10, 171, 255) == '#0aabff'

    def test_channels_clamped(self):
        assert rgb_to_hex(300, -5, 16) == '#ff0010'

    def test_parse_variants(self):
        assert hex_to_rgb('#FFaa00') == (255, 170, 0)
        assert hex_to_rgb('ffaa00') == (255, 170, 0)

    @pytest.mark.parametrize("bad", ['', '#fff', 'zzzzzz', '#1234567', 'red', None])
    def test_malformed_is_black(self, bad):
        assert hex_to_rgb(bad) == (0, 0, 0)


class TestHsl:

    def test_primaries(self):
        assert rgb_to_hsl(255, 0, 0) == (0, 100, 50)
        assert rgb_to_hsl(0, 255, 0) == (120, 100, 50)
        assert rgb_to_hsl(0, 0, 255) == (240, 100, 50)

    def test_achromatic(self):
        assert rgb_to_hsl(128, 128, 128) == (0, 0, 50)
        assert rgb_to_hsl(0, 0, 0) == (0, 0, 0)
        assert rgb_to_hsl(255, 255, 255) == (0, 0, 100)

    def test_hue_rounding_wraps_to_zero(self):
        # 359.76 degrees rounds to 360, which is 0
        assert rgb_to_hsl(255, 0, 1).h == 0

    def test_to_rgb_primaries(self):
        assert hsl_to_rgb(0, 100, 50) == (255, 0, 0)
        assert hsl_to_rgb(120, 100, 50) == (0, 255, 0)
        assert hsl_to_rgb(240, 100, 50) == (0, 0, 255)

    def test_to_rgb_wraps_and_clamps(self):
        assert hsl_to_rgb(360, 100, 50) == hsl_to_rgb(0, 100, 50)
        assert hsl_to_rgb(-120, 100, 50) == (0, 0, 255)
        assert hsl_to_rgb(0, 150, 50) == (255, 0, 0)
        assert hsl_to_hex(0, 0, 120) == '#ffffff'

    def test_half_sector(self):
        assert hsl_to_rgb(90, 100, 50) == (128, 255, 0)


class TestHsv:

    def test_primaries(self):
        assert rgb_to_hsv(255, 0, 0) == (0, 100, 100)
        assert rgb_to_hsv(0, 0, 128) == (240, 100, 50)

    def test_black(self):
        assert rgb_to_hsv(0, 0, 0) == (0, 0, 0)


class TestBounds:

    def test_random_colors_in_range(self):
        rng = np.random.default_rng(7)
        for r, g, b in rng.integers(0, 256, size=(300, 3)):
            h, s, l = rgb_to_hsl(r, g, b)
            assert 0 <= h < 360 and 0 <= s <= 100 and 0 <= l <= 100
            h, s, v = rgb_to_hsv(r, g, b)
            assert 0 <= h < 360 and 0 <= s <= 100 and 0 <= v <= 100


class TestSamples:

    def test_make_sample(self):
        sample = make_sample((255, 0, 0))
        assert sample.hex == '#ff0000'
        assert sample.hsl == (0, 100, 50)
        assert sample.hsv == (0, 100, 100)

    def test_sample_from_hex(self):
        assert sample_from_hex('#0000FF').rgb == (0, 0, 255)

    def test_round_half_up(self):
        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3
        assert round_half_up(-0.5) == 0
