"""WCAG relative luminance and contrast ratio."""

from dataclasses import dataclass
from enum import Enum


class ContrastLevel(Enum):
    AAA = ('AAA', 'Best')
    AA = ('AA', 'Good')
    AA_LARGE = ('AA Large', 'Large text only')
    FAIL = ('Fail', 'Insufficient')

    @property
    def label(self) -> str:
        return self.value[0]

    @property
    def grade(self) -> str:
        return self.value[1]


@dataclass(frozen=True)
class ContrastResult:
    first: str  # Hex
    second: str
    ratio: float
    level: ContrastLevel


def _linearize(c: float) -> float:
    c = c / 255
    return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4


def relative_luminance(rgb) -> float:
    """Linear-light brightness of an sRGB color (0 black, 1 white)."""
    r, g, b = (_linearize(c) for c in rgb[:3])
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def contrast_ratio(rgb1, rgb2) -> float:
    """Symmetric contrast ratio in [1, 21]."""
    l1 = relative_luminance(rgb1)
    l2 = relative_luminance(rgb2)

    lighter = max(l1, l2)
    darker = min(l1, l2)

    return (lighter + 0.05) / (darker + 0.05)


def contrast_level(ratio: float) -> ContrastLevel:
    if ratio >= 7:
        return ContrastLevel.AAA
    elif ratio >= 4.5:
        return ContrastLevel.AA
    elif ratio >= 3:
        return ContrastLevel.AA_LARGE
    return ContrastLevel.FAIL


def classify_contrast(ratio: float) -> str:
    """'AAA', 'AA', 'AA Large' or 'Fail'."""
    return contrast_level(ratio).label


def check_contrast(color1, color2) -> ContrastResult:
    """Contrast between two colors that have `.rgb` and `.hex`."""
    ratio = contrast_ratio(color1.rgb, color2.rgb)
    return ContrastResult(first=color1.hex, second=color2.hex,
                          ratio=ratio, level=contrast_level(ratio))


def contrast_pairs(colors: list, limit: int = 4) -> list[ContrastResult]:
    """Contrast of each neighbouring pair among the first `limit` colors."""
    subset = colors[:limit]
    return [check_contrast(a, b) for a, b in zip(subset, subset[1:])]
