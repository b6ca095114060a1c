"""
Temperature and mood heuristics over a set of colors.

Colors may be ColorSample / DistinctColorEntry objects or plain (r, g, b)
tuples. Which colors to analyze is always chosen by the caller.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, NamedTuple, Optional

from color_space import HSL, clamp, rgb_to_hsl, rgb_to_hsv, round_half_up


# =============================================================================
# Helpers
# =============================================================================

def _rgb_of(color) -> tuple:
    return tuple(getattr(color, 'rgb', color))[:3]


def _hsl_of(color) -> HSL:
    hsl = getattr(color, 'hsl', None)
    return HSL(*hsl) if hsl is not None else rgb_to_hsl(*_rgb_of(color))


def _value_of(color) -> int:
    hsv = getattr(color, 'hsv', None)
    return hsv[2] if hsv is not None else rgb_to_hsv(*_rgb_of(color))[2]


def is_interesting(color) -> bool:
    """Neither near-black, near-white nor gray."""
    h, s, l = _hsl_of(color)
    return 8 < l < 92 and s > 5


def colors_to_analyze(colors: list, limit: int = 5) -> list:
    """
    Pick up to `limit` colors for analysis.

    For small selections, interesting colors are preferred so that large dark
    or white fills don't dominate; the raw order is used when too few of them
    exist.
    """
    if limit <= 5:
        interesting = [c for c in colors if is_interesting(c)]
        if len(interesting) >= min(limit, 2):
            return interesting[:limit]
    return list(colors[:limit])


def most_interesting_color(colors: list):
    """Most saturated color, penalizing very dark and very light ones."""
    if not colors:
        return None

    def score(color):
        _, s, l = _hsl_of(color)
        return s * (1 - abs(l - 50) / 50)

    # max() keeps the first of equal scores
    return max(colors, key=score)


# =============================================================================
# Temperature
# =============================================================================

@dataclass(frozen=True)
class TemperatureReading:
    average: float  # -100 (cool) .. 100 (warm)
    position: float  # 2-98, for a gauge
    category: str  # 'very cool', 'cool', 'warm', 'very warm'
    description: str


TEMPERATURE_DESCRIPTIONS = {
    'very cool': 'Very cool palette: calming, professional, serene.',
    'cool': 'Cool tones: trust, stability, and tranquility.',
    'warm': 'Warm tones: energetic, friendly, and inviting.',
    'very warm': 'Very warm: exciting, passionate, attention-grabbing.',
}


def color_temperature(rgb) -> float:
    """Red minus blue, scaled to roughly -100..100. Positive is warm."""
    r, _, b = _rgb_of(rgb)
    return (r - b) / 2.55


def temperature_category(avg: float) -> str:
    if avg < -50:
        return 'very cool'
    elif avg < 0:
        return 'cool'
    elif avg < 50:
        return 'warm'
    return 'very warm'


def analyze_temperature(colors: list) -> Optional[TemperatureReading]:
    """Average temperature of the given colors, or None for no colors."""
    if not colors:
        return None

    avg = sum(color_temperature(c) for c in colors) / len(colors)
    category = temperature_category(avg)
    return TemperatureReading(
        average=avg,
        position=clamp(((avg + 100) / 200) * 100, 2, 98),
        category=category,
        description=TEMPERATURE_DESCRIPTIONS[category],
    )


# =============================================================================
# Psychology
# =============================================================================

class PsychologyMode(Enum):
    DESIGN = 'design'
    ARTISTIC = 'artistic'


class Psychology(NamedTuple):
    feeling: str
    description: str


@dataclass(frozen=True)
class Split:
    """Band whose reading depends on saturation or lightness."""
    test: Callable[[HSL], bool]
    passed: Psychology
    failed: Psychology

    def pick(self, hsl: HSL) -> Psychology:
        return self.passed if self.test(hsl) else self.failed


# Neutral rules: (applies, [(condition, reading), ...], fallback)
DESIGN_NEUTRAL = (
    lambda hsl: hsl.s < 15 or hsl.l > 90 or hsl.l < 10,
    [
        (lambda hsl: hsl.l > 90, Psychology(
            'Pure & Clean',
            'Evokes simplicity, innocence, and clarity. Often used in minimal designs.')),
        (lambda hsl: hsl.l < 10, Psychology(
            'Powerful & Formal',
            'Creates sophistication, mystery, and authority. Strong emotional impact.')),
    ],
    Psychology(
        'Neutral & Balanced',
        'Conveys stability, calm, and professionalism. Versatile for any context.'),
)

# Hue bands are half-open [start, end)
DESIGN_HUE_BANDS = [
    (((0, 15), (345, 360)), Psychology(
        'Passionate & Energetic',
        'Red evokes strong emotions, urgency, and excitement. Grabs attention immediately.')),
    (((15, 45),), Psychology(
        'Creative & Enthusiastic',
        'Orange represents energy, warmth, and friendliness. Encourages action and optimism.')),
    (((45, 75),), Psychology(
        'Cheerful & Optimistic',
        'Yellow brings happiness, clarity, and sunshine. Stimulates mental activity.')),
    (((75, 165),), Psychology(
        'Growth & Harmony',
        'Green symbolizes nature, balance, and renewal. Creates a sense of calm and safety.')),
    (((165, 255),), Psychology(
        'Trust & Stability',
        'Blue conveys reliability, peace, and professionalism. Most universally preferred color.')),
    (((255, 285),), Psychology(
        'Creative & Luxurious',
        'Purple represents creativity, royalty, and spirituality. Adds sophistication.')),
    (((285, 345),), Psychology(
        'Romantic & Compassionate',
        'Pink/Magenta evokes care, nurturing, and playfulness. Softens bold designs.')),
]

ARTISTIC_NEUTRAL = (
    lambda hsl: hsl.s < 15,
    [
        (lambda hsl: hsl.l > 85, Psychology(
            'Soft Highlights',
            'Creates gentle illumination. Use for light sources, skin highlights, or ethereal effects.')),
        (lambda hsl: hsl.l < 15, Psychology(
            'Deep Shadows',
            'Adds dramatic depth. Essential for form definition and creating mystery.')),
    ],
    Psychology(
        'Neutral Tones',
        'Perfect for underpainting and base layers. Provides structure without overwhelming.'),
)

ARTISTIC_HUE_BANDS = [
    (((0, 30), (330, 360)), Split(
        lambda hsl: hsl.s > 60,
        Psychology('Bold Reds',
                   'Commands attention. Use sparingly for focal points, passion, or danger.'),
        Psychology('Warm Skin Tones',
                   'Essential for portrait work. Conveys life and warmth in figures.'))),
    (((30, 60),), Psychology(
        'Warm Accents',
        'Orange tones add energy without overwhelming. Great for lighting and atmosphere.')),
    (((60, 150),), Split(
        lambda hsl: hsl.l < 40,
        Psychology('Natural Darks',
                   'Green-based shadows feel organic. Ideal for landscapes and natural subjects.'),
        Psychology('Life & Growth',
                   'Brings vitality to nature scenes. Use for foliage, life, and renewal themes.'))),
    (((150, 270),), Split(
        lambda hsl: hsl.s > 50,
        Psychology('Cool Depths',
                   'Blue creates distance and calm. Perfect for backgrounds, sky, and water.'),
        Psychology('Cool Shadows',
                   'Subtle blues in shadows add realism. Creates atmospheric perspective.'))),
    (((270, 330),), Psychology(
        'Mystical Purples',
        'Adds fantasy and drama. Excellent for magical themes and twilight scenes.')),
]

PSYCHOLOGY_TABLES = {
    PsychologyMode.DESIGN: (DESIGN_NEUTRAL, DESIGN_HUE_BANDS),
    PsychologyMode.ARTISTIC: (ARTISTIC_NEUTRAL, ARTISTIC_HUE_BANDS),
}


def classify_psychology(hsl, mode: PsychologyMode = PsychologyMode.DESIGN) -> Psychology:
    """Feeling and description for a color under the given reading."""
    hsl = HSL(*hsl)
    (applies, special_cases, fallback), bands = PSYCHOLOGY_TABLES[PsychologyMode(mode)]

    if applies(hsl):
        for condition, reading in special_cases:
            if condition(hsl):
                return reading
        return fallback

    h = hsl.h % 360
    for ranges, rule in bands:
        if any(start <= h < end for start, end in ranges):
            return rule.pick(hsl) if isinstance(rule, Split) else rule

    # Bands cover [0, 360); only a non-finite hue gets here
    raise ValueError(f"Hue {hsl.h} outside 0-360")


# =============================================================================
# Value & Saturation
# =============================================================================

@dataclass(frozen=True)
class ValueRange:
    key: str  # 'dark', 'mid', 'light'
    label: str
    count: int
    percentage: int
    colors: tuple  # Hex strings
    feedback: str


VALUE_RANGE_LABELS = {
    'dark': 'Shadows (0-33%)',
    'mid': 'Midtones (34-66%)',
    'light': 'Highlights (67-100%)',
}


def _value_feedback(key: str, percentage: int) -> str:
    if key == 'dark' and percentage > 50:
        return 'Heavy on shadows - consider adding highlights'
    elif key == 'light' and percentage > 50:
        return 'Very bright - add darker values for depth'
    elif key == 'mid' and percentage > 70:
        return 'Mostly midtones - add contrast for impact'
    elif percentage > 0:
        return 'Good balance'
    return ''


def value_distribution(colors: list) -> list[ValueRange]:
    """Split colors into shadows, midtones and highlights by HSV value."""
    if not colors:
        return []

    buckets = {'dark': [], 'mid': [], 'light': []}
    for color in colors:
        value = _value_of(color)
        if value <= 33:
            key = 'dark'
        elif value <= 66:
            key = 'mid'
        else:
            key = 'light'
        buckets[key].append(getattr(color, 'hex', None))

    ranges = []
    for key, members in buckets.items():
        pct = round_half_up(len(members) / len(colors) * 100)
        ranges.append(ValueRange(
            key=key,
            label=VALUE_RANGE_LABELS[key],
            count=len(members),
            percentage=pct,
            colors=tuple(h for h in members if h),
            feedback=_value_feedback(key, pct),
        ))
    return ranges


@dataclass(frozen=True)
class SaturationMood:
    mood: str
    description: str
    average_saturation: float
    vibrant_count: int  # s > 60
    muted_count: int  # s < 30


def saturation_mood(colors: list) -> Optional[SaturationMood]:
    """Overall mood from the average saturation of the colors."""
    if not colors:
        return None

    saturations = [_hsl_of(c).s for c in colors]
    avg = sum(saturations) / len(saturations)

    if avg > 70:
        mood = 'Vibrant & Energetic'
        desc = ('High saturation creates dynamic, eye-catching artwork. '
                'Great for stylized or anime-style pieces.')
    elif avg > 40:
        mood = 'Balanced & Natural'
        desc = ('Moderate saturation feels realistic and versatile. '
                'Perfect for portraits and natural scenes.')
    else:
        mood = 'Muted & Atmospheric'
        desc = ('Low saturation creates mood and atmosphere. '
                'Excellent for dramatic or vintage aesthetics.')

    return SaturationMood(
        mood=mood,
        description=desc,
        average_saturation=avg,
        vibrant_count=sum(1 for s in saturations if s > 60),
        muted_count=sum(1 for s in saturations if s < 30),
    )
