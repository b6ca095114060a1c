"""Shared fixtures for the color analysis tests."""

import numpy as np
import pytest

from extract_colors import PixelBuffer


def solid(width: int, height: int, rgba) -> np.ndarray:
    """(height, width, 4) array filled with one color."""
    pixels = np.empty((height, width, 4), dtype=np.uint8)
    pixels[...] = rgba
    return pixels


@pytest.fixture
def solid_buffer():
    """Factory for single-color buffers."""
    def make(width, height, rgba=(37, 120, 200, 255)):
        return PixelBuffer.from_array(solid(width, height, rgba))
    return make


@pytest.fixture
def red_blue_buffer():
    """2x2: red top row, blue bottom row."""
    data = bytes([255, 0, 0, 255] * 2 + [0, 0, 255, 255] * 2)
    return PixelBuffer(width=2, height=2, data=data)


@pytest.fixture
def split_image():
    """60x40 image, left half red, right half blue."""
    pixels = solid(60, 40, (0, 0, 255, 255))
    pixels[:, :30] = (255, 0, 0, 255)
    return PixelBuffer.from_array(pixels)
