"""Tests for temperature, psychology, value and saturation readings."""

import pytest

from color_space import make_sample
from mood import (
    PsychologyMode,
    analyze_temperature,
    classify_psychology,
    color_temperature,
    colors_to_analyze,
    is_interesting,
    most_interesting_color,
    saturation_mood,
    temperature_category,
    value_distribution,
)

RED = make_sample((255, 0, 0))
BLUE = make_sample((0, 0, 255))
BLACK = make_sample((0, 0, 0))
WHITE = make_sample((255, 255, 255))
GRAY = make_sample((128, 128, 128))


class TestSelection:

    def test_is_interesting(self):
        assert is_interesting(RED)
        assert not is_interesting(BLACK)
        assert not is_interesting(WHITE)
        assert not is_interesting(GRAY)

    def test_prefers_interesting_colors(self):
        assert colors_to_analyze([BLACK, WHITE, RED, BLUE], limit=3) == [RED, BLUE]

    def test_falls_back_to_raw_order(self):
        assert colors_to_analyze([BLACK, WHITE, RED], limit=3) == [BLACK, WHITE, RED]

    def test_large_limit_uses_raw_order(self):
        colors = [BLACK, WHITE, RED, BLUE]
        assert colors_to_analyze(colors, limit=10) == colors

    def test_most_interesting(self):
        pink = make_sample((255, 128, 128))
        assert most_interesting_color([GRAY, pink, BLUE, RED]) is BLUE
        assert most_interesting_color([]) is None


class TestTemperature:

    def test_color_temperature(self):
        assert color_temperature((255, 0, 0)) == pytest.approx(100)
        assert color_temperature(BLUE) == pytest.approx(-100)
        assert color_temperature(GRAY) == 0

    @pytest.mark.parametrize("avg, category", [
        (-80, 'very cool'), (-50, 'cool'), (-1, 'cool'), (0, 'warm'), (49.9, 'warm'), (50, 'very warm'),
    ])
    def test_category(self, avg, category):
        assert temperature_category(avg) == category

    def test_warm_reading(self):
        reading = analyze_temperature([RED])
        assert reading.category == 'very warm'
        assert reading.position == 98
        assert reading.description.startswith('Very warm')

    def test_cool_reading(self):
        reading = analyze_temperature([BLUE])
        assert reading.category == 'very cool'
        assert reading.position == 2

    def test_neutral_reading(self):
        reading = analyze_temperature([GRAY])
        assert reading.category == 'warm'
        assert reading.position == pytest.approx(50)

    def test_balanced_pair(self):
        assert analyze_temperature([RED, BLUE]).average == pytest.approx(0)

    def test_no_colors(self):
        assert analyze_temperature([]) is None


class TestDesignPsychology:

    @pytest.mark.parametrize("hue, feeling", [
        (0, 'Passionate & Energetic'),
        (14, 'Passionate & Energetic'),
        (15, 'Creative & Enthusiastic'),
        (60, 'Cheerful & Optimistic'),
        (75, 'Growth & Harmony'),
        (254, 'Trust & Stability'),
        (255, 'Creative & Luxurious'),
        (285, 'Romantic & Compassionate'),
        (344, 'Romantic & Compassionate'),
        (345, 'Passionate & Energetic'),
    ])
    def test_hue_bands(self, hue, feeling):
        assert classify_psychology((hue, 80, 50)).feeling == feeling

    def test_neutrals(self):
        assert classify_psychology((200, 50, 95)).feeling == 'Pure & Clean'
        assert classify_psychology((200, 50, 5)).feeling == 'Powerful & Formal'
        assert classify_psychology((200, 10, 50)).feeling == 'Neutral & Balanced'

    def test_description_present(self):
        assert classify_psychology((220, 80, 50)).description.startswith('Blue conveys')


class TestArtisticPsychology:

    @pytest.mark.parametrize("hsl, feeling", [
        ((0, 70, 50), 'Bold Reds'),
        ((0, 50, 50), 'Warm Skin Tones'),
        ((329, 50, 50), 'Mystical Purples'),
        ((330, 70, 50), 'Bold Reds'),
        ((45, 50, 50), 'Warm Accents'),
        ((100, 50, 30), 'Natural Darks'),
        ((100, 50, 40), 'Life & Growth'),
        ((200, 60, 50), 'Cool Depths'),
        ((200, 50, 50), 'Cool Shadows'),
        ((200, 10, 90), 'Soft Highlights'),
        ((200, 10, 10), 'Deep Shadows'),
        ((200, 10, 50), 'Neutral Tones'),
        # Lightness alone never makes an artistic neutral
        ((200, 50, 95), 'Cool Shadows'),
    ])
    def test_readings(self, hsl, feeling):
        assert classify_psychology(hsl, PsychologyMode.ARTISTIC).feeling == feeling

    def test_mode_by_name(self):
        assert classify_psychology((0, 70, 50), 'artistic').feeling == 'Bold Reds'

    def test_unknown_mode(self):
        with pytest.raises(ValueError):
            classify_psychology((0, 70, 50), 'painterly')


class TestValueDistribution:

    def test_bright_heavy(self):
        ranges = value_distribution([WHITE, WHITE, BLACK])
        assert [r.key for r in ranges] == ['dark', 'mid', 'light']

        dark, mid, light = ranges
        assert light.percentage == 67
        assert light.colors == ('#ffffff', '#ffffff')
        assert light.feedback == 'Very bright - add darker values for depth'
        assert dark.percentage == 33
        assert dark.feedback == 'Good balance'
        assert mid.count == 0
        assert mid.feedback == ''

    def test_shadow_heavy(self):
        dark = value_distribution([BLACK, BLACK, GRAY])[0]
        assert dark.feedback == 'Heavy on shadows - consider adding highlights'

    def test_midtone_heavy(self):
        mid = value_distribution([GRAY] * 4)[1]
        assert mid.percentage == 100
        assert mid.feedback == 'Mostly midtones - add contrast for impact'

    def test_no_colors(self):
        assert value_distribution([]) == []


class TestSaturationMood:

    def test_vibrant(self):
        mood = saturation_mood([RED, BLUE])
        assert mood.mood == 'Vibrant & Energetic'
        assert mood.vibrant_count == 2
        assert mood.muted_count == 0

    def test_balanced(self):
        assert saturation_mood([(191, 64, 64)]).mood == 'Balanced & Natural'

    def test_muted(self):
        mood = saturation_mood([GRAY])
        assert mood.mood == 'Muted & Atmospheric'
        assert mood.muted_count == 1

    def test_no_colors(self):
        assert saturation_mood([]) is None
