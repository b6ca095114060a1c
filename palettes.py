"""
Derived color schemes built from a single base color.

All hue arithmetic works on whole degrees, mod 360. Generators never fail:
saturation and lightness are clamped to 0-100.
"""

from dataclasses import dataclass
from enum import Enum

from color_space import HSL, hsl_to_hex


class Scheme(Enum):
    MONOCHROMATIC = 'Monochromatic'
    ANALOGOUS = 'Analogous'
    COMPLEMENTARY = 'Complementary'
    TRIADIC = 'Triadic'
    SPLIT_COMPLEMENTARY = 'Split Comp.'
    TETRADIC = 'Tetradic'


HUE_OFFSETS = {
    Scheme.ANALOGOUS: (-60, -30, 0, 30, 60),
    Scheme.TRIADIC: (0, 120, 240),
    Scheme.SPLIT_COMPLEMENTARY: (0, 150, 210),
    Scheme.TETRADIC: (0, 90, 180, 270),
}

HARMONY_SCHEMES = (Scheme.TRIADIC, Scheme.SPLIT_COMPLEMENTARY, Scheme.TETRADIC)


@dataclass(frozen=True)
class Palette:
    name: str
    colors: tuple  # Hex strings; order matters


def rotate_hue(h: int, degrees: int) -> int:
    return (h + degrees) % 360


def _rotations(base: HSL, offsets) -> list[str]:
    return [hsl_to_hex(rotate_hue(base.h, d), base.s, base.l) for d in offsets]


def generate_monochromatic(base: HSL) -> list[str]:
    """Five steps of lightness (20, 35, 50, 65, 80) at the base hue."""
    return [hsl_to_hex(base.h, base.s, 20 + i * 15) for i in range(5)]


def generate_analogous(base: HSL) -> list[str]:
    return _rotations(base, HUE_OFFSETS[Scheme.ANALOGOUS])


def generate_complementary(base: HSL) -> list[str]:
    """
    Base, complement, a softer base and complement (less saturated,
    lighter), and a richer base (more saturated, darker).
    """
    h, s, l = base
    comp = rotate_hue(h, 180)
    soft_s, soft_l = max(0, s - 20), min(100, l + 10)
    return [
        hsl_to_hex(h, s, l),
        hsl_to_hex(comp, s, l),
        hsl_to_hex(h, soft_s, soft_l),
        hsl_to_hex(comp, soft_s, soft_l),
        hsl_to_hex(h, min(100, s + 20), max(0, l - 10)),
    ]


def generate_triadic(base: HSL) -> list[str]:
    return _rotations(base, HUE_OFFSETS[Scheme.TRIADIC])


def generate_split_complementary(base: HSL) -> list[str]:
    return _rotations(base, HUE_OFFSETS[Scheme.SPLIT_COMPLEMENTARY])


def generate_tetradic(base: HSL) -> list[str]:
    return _rotations(base, HUE_OFFSETS[Scheme.TETRADIC])


GENERATORS = {
    Scheme.MONOCHROMATIC: generate_monochromatic,
    Scheme.ANALOGOUS: generate_analogous,
    Scheme.COMPLEMENTARY: generate_complementary,
    Scheme.TRIADIC: generate_triadic,
    Scheme.SPLIT_COMPLEMENTARY: generate_split_complementary,
    Scheme.TETRADIC: generate_tetradic,
}


def generate_scheme(base: HSL, scheme: Scheme) -> Palette:
    base = HSL(*base)
    return Palette(name=scheme.value, colors=tuple(GENERATORS[scheme](base)))


def dominant_palette(colors: list, limit: int = 5) -> Palette:
    """The first `limit` extracted colors as a palette."""
    return Palette(name='Dominant Colors', colors=tuple(c.hex for c in colors[:limit]))


def generate_palettes(colors: list) -> list[Palette]:
    """
    Dominant colors plus monochromatic, analogous and complementary schemes
    built from the most frequent color.
    """
    if not colors:
        return []

    base = colors[0].hsl
    return [
        dominant_palette(colors),
        generate_scheme(base, Scheme.MONOCHROMATIC),
        generate_scheme(base, Scheme.ANALOGOUS),
        generate_scheme(base, Scheme.COMPLEMENTARY),
    ]


def generate_harmonies(base: HSL) -> list[Palette]:
    return [generate_scheme(base, scheme) for scheme in HARMONY_SCHEMES]
