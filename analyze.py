#!/usr/bin/env python3
"""
Unified color analysis pipeline.

Extracts dominant colors, zone colors, palettes and design feedback from an
image and renders them as a prose report or an HTML page.
Four stages: Data Preparation → Feature Extraction → Synthesis → Render
"""

from dataclasses import dataclass, field
from typing import Optional, Union

from color_space import hex_to_rgb, luma
from contrast import ContrastLevel, ContrastResult, contrast_pairs
from extract_colors import (
    DEFAULT_MAX_COLORS,
    DEFAULT_MIN_DIFFERENCE,
    DEFAULT_QUANT_STEP,
    DistinctColorEntry,
    PixelBuffer,
    SortCategory,
    category_display_value,
    extract_dominant_colors,
    load_pixel_buffer,
    sort_by_category,
)
from mood import (
    PsychologyMode,
    SaturationMood,
    TemperatureReading,
    analyze_temperature,
    classify_psychology,
    colors_to_analyze,
    most_interesting_color,
    saturation_mood,
    value_distribution,
)
from palettes import generate_harmonies, generate_palettes
from zones import sample_zones


# =============================================================================
# Constants
# =============================================================================

DOWNSCALE_SIZE = 256  # Longest side after downscaling, in pixels

# How many colors each analysis looks at
TEMPERATURE_COLORS = 10
CONTRAST_COLORS = 4
PSYCHOLOGY_COLORS = 3
VALUE_COLORS = 10
MOOD_COLORS = 5


# =============================================================================
# Stage 1: Data Preparation
# =============================================================================

def prepare_data(source: Union[str, PixelBuffer], downscale: bool = True) -> PixelBuffer:
    """
    Stage 1: Load the image as an RGBA buffer.

    Raises:
        FileNotFoundError: If image file doesn't exist
        ValueError: If file is not a valid image or exceeds size limits
    """
    if isinstance(source, PixelBuffer):
        return source
    return load_pixel_buffer(str(source), downscale=DOWNSCALE_SIZE if downscale else None)


# =============================================================================
# Stage 2: Feature Extraction
# =============================================================================

@dataclass
class FeatureData:
    """Output of Stage 2: Feature Extraction."""
    colors: list  # DistinctColorEntry, most frequent first
    zones: list  # Zone, row-major
    image_shape: tuple  # (height, width)


def extract_features(buffer: PixelBuffer,
                     quant_step: float = DEFAULT_QUANT_STEP,
                     max_colors: int = DEFAULT_MAX_COLORS,
                     min_difference: float = DEFAULT_MIN_DIFFERENCE,
                     cols: int = 3, rows: int = 2) -> FeatureData:
    """Stage 2: Dominant colors for the whole image and for each zone."""
    return FeatureData(
        colors=extract_dominant_colors(buffer, quant_step=quant_step, max_colors=max_colors,
                                       min_difference=min_difference),
        zones=sample_zones(buffer, cols=cols, rows=rows),
        image_shape=(buffer.height, buffer.width),
    )


# =============================================================================
# Stage 3: Synthesis
# =============================================================================

@dataclass
class SynthesisResult:
    """Output of Stage 3: Synthesis."""
    mode: PsychologyMode
    gradient_stacks: dict  # SortCategory -> list of DistinctColorEntry
    palettes: list  # Palette
    harmony_base: Optional[DistinctColorEntry]
    harmonies: list  # Palette
    contrast_pairs: list  # ContrastResult
    temperature: Optional[TemperatureReading]
    psychology: list  # (DistinctColorEntry, Psychology)
    value_ranges: list  # ValueRange
    mood: Optional[SaturationMood]
    temperature_colors: list = field(default_factory=list)


def synthesize(features: FeatureData, mode: PsychologyMode = PsychologyMode.DESIGN) -> SynthesisResult:
    """Stage 3: Turn extracted colors into palettes and feedback."""
    colors = features.colors
    mode = PsychologyMode(mode)

    harmony_base = most_interesting_color(colors)
    temperature_colors = colors_to_analyze(colors, TEMPERATURE_COLORS)

    return SynthesisResult(
        mode=mode,
        gradient_stacks={category: sort_by_category(colors, category) for category in SortCategory},
        palettes=generate_palettes(colors),
        harmony_base=harmony_base,
        harmonies=generate_harmonies(harmony_base.hsl) if harmony_base else [],
        contrast_pairs=contrast_pairs(colors, CONTRAST_COLORS) if len(colors) >= 2 else [],
        temperature=analyze_temperature(temperature_colors),
        psychology=[(c, classify_psychology(c.hsl, mode))
                    for c in colors_to_analyze(colors, PSYCHOLOGY_COLORS)],
        value_ranges=value_distribution(colors_to_analyze(colors, VALUE_COLORS)),
        mood=saturation_mood(colors_to_analyze(colors, MOOD_COLORS)),
        temperature_colors=temperature_colors,
    )


# =============================================================================
# Stage 4: Render
# =============================================================================

def _format_contrast(pair: ContrastResult) -> str:
    return (f"{pair.first} / {pair.second}: {pair.ratio:.2f}:1 "
            f"({pair.level.label}, {pair.level.grade})")


def render(synthesis: SynthesisResult, features: FeatureData) -> str:
    """Stage 4: Render synthesis result as prose."""
    lines = []

    h, w = features.image_shape
    lines.append(f"IMAGE: {w}x{h} | Distinct colors: {len(features.colors)} | Mode: {synthesis.mode.value}")
    lines.append("")

    if not features.colors:
        lines.append("No opaque pixels to analyze.")
        return "\n".join(lines)

    # Colors section
    lines.append("COLORS:")
    for color in features.colors:
        hsl = color.hsl
        hsv = color.hsv
        lines.append(f"  {color.hex} | RGB{tuple(color.rgb)} | HSL({hsl.h}, {hsl.s}%, {hsl.l}%) | "
                     f"HSV({hsv.h}, {hsv.s}%, {hsv.v}%) | {color.percentage:.2f}%")
    lines.append("")

    # Gradient stacks
    lines.append("GRADIENT STACKS:")
    for category, stack in synthesis.gradient_stacks.items():
        values = ", ".join(f"{c.hex} {category_display_value(c, category)}" for c in stack)
        lines.append(f"  {category.value.capitalize()}: {values}")
    lines.append("")

    # Zones
    if features.zones:
        lines.append("ZONES:")
        for zone in features.zones:
            lines.append(f"  [{zone.label}] {zone.full_label}: {zone.color.hex}")
        lines.append("")

    # Palettes
    lines.append("PALETTES:")
    for palette in synthesis.palettes + synthesis.harmonies:
        lines.append(f"  {palette.name}: {' '.join(palette.colors)}")
    if synthesis.harmony_base:
        lines.append(f"  (harmonies built from {synthesis.harmony_base.hex})")
    lines.append("")

    # Temperature
    if synthesis.temperature:
        t = synthesis.temperature
        lines.append(f"TEMPERATURE: {t.category.title()} ({t.average:+.0f})")
        lines.append(f"  {t.description}")
        lines.append("")

    if synthesis.mode is PsychologyMode.DESIGN:
        if synthesis.contrast_pairs:
            lines.append("CONTRAST:")
            for pair in synthesis.contrast_pairs:
                lines.append(f"  - {_format_contrast(pair)}")
            lines.append("")
        lines.append("COLOR PSYCHOLOGY:")
    else:
        lines.append("VALUE DISTRIBUTION:")
        for vr in synthesis.value_ranges:
            feedback = f" - {vr.feedback}" if vr.feedback else ""
            lines.append(f"  {vr.label}: {vr.percentage}%{feedback}")
        lines.append("")
        if synthesis.mood:
            lines.append(f"MOOD: {synthesis.mood.mood}")
            lines.append(f"  {synthesis.mood.description}")
            lines.append("")
        lines.append("ARTISTIC IMPACT:")

    for color, psy in synthesis.psychology:
        lines.append(f"  {color.hex} {psy.feeling}: {psy.description}")

    return "\n".join(lines)


def text_color_for_background(rgb) -> str:
    """Return black or white text color based on background brightness."""
    return "#000" if luma(*rgb) > 128 else "#fff"


def render_html(synthesis: SynthesisResult, features: FeatureData, image_path: str) -> str:
    """Stage 4b: Render synthesis result as HTML."""
    from html import escape

    safe_path = escape(image_path)

    css = """
        * { box-sizing: border-box; margin: 0; padding: 0; }
        body {
            font-family: system-ui, -apple-system, sans-serif;
            background: #f5f5f5;
            color: #333;
            line-height: 1.5;
            padding: 2rem;
            max-width: 900px;
            margin: 0 auto;
        }
        h1 { font-size: 1.5rem; margin-bottom: 0.5rem; }
        h2 { font-size: 1.2rem; margin: 2rem 0 1rem; border-bottom: 1px solid #ddd; padding-bottom: 0.5rem; }
        h3 { font-size: 1rem; margin: 1rem 0 0.5rem; }
        .meta { color: #666; font-size: 0.9rem; margin-bottom: 1rem; }
        .strip {
            display: flex;
            height: 80px;
            border-radius: 8px;
            overflow: hidden;
            box-shadow: 0 2px 8px rgba(0,0,0,0.1);
            margin: 0.5rem 0 1rem;
        }
        .strip .swatch {
            flex: 1;
            display: flex;
            align-items: flex-end;
            justify-content: center;
            padding: 0.5rem;
            font-size: 0.7rem;
            font-weight: 500;
        }
        .zones {
            display: grid;
            gap: 4px;
            margin: 0.5rem 0 1rem;
        }
        .zones .swatch {
            height: 70px;
            border-radius: 6px;
            display: flex;
            align-items: center;
            justify-content: center;
            font-size: 0.75rem;
            font-weight: 600;
        }
        .card {
            background: #fff;
            border-radius: 8px;
            padding: 1rem;
            margin-bottom: 0.75rem;
            box-shadow: 0 1px 3px rgba(0,0,0,0.08);
        }
        .contrast-demo {
            padding: 1rem;
            border-radius: 6px;
            margin-bottom: 0.5rem;
            font-size: 1.1rem;
            font-weight: 600;
        }
        .contrast-badge {
            display: inline-block;
            padding: 0.15rem 0.4rem;
            border-radius: 4px;
            font-size: 0.75rem;
            font-weight: 600;
            margin-left: 0.5rem;
            color: #fff;
        }
        .badge-aaa { background: #22c55e; }
        .badge-aa { background: #3b82f6; }
        .badge-aa-large { background: #f59e0b; }
        .badge-fail { background: #ef4444; }
        .temp-bar {
            position: relative;
            height: 12px;
            border-radius: 6px;
            background: linear-gradient(to right, #3b82f6, #e5e7eb, #f97316);
            margin: 0.5rem 0;
        }
        .temp-needle {
            position: absolute;
            top: -4px;
            width: 4px;
            height: 20px;
            background: #111;
            border-radius: 2px;
        }
        .psych { border-left: 4px solid; }
        .psych .feeling { font-weight: 600; }
        .psych .desc { font-size: 0.85rem; color: #666; }
        .values { font-family: monospace; color: #555; font-size: 0.8rem; }
    """

    lines = [
        '<!DOCTYPE html>',
        '<html lang="en">',
        '<head>',
        '  <meta charset="UTF-8">',
        '  <meta name="viewport" content="width=device-width, initial-scale=1.0">',
        f'  <title>Palette: {safe_path}</title>',
        f'  <style>{css}</style>',
        '</head>',
        '<body>',
    ]

    h, w = features.image_shape
    lines.append('<h1>Color Analysis</h1>')
    lines.append(f'<p class="meta">Source: {safe_path}</p>')
    lines.append(f'<p class="meta">{w}x{h} · {len(features.colors)} distinct colors · '
                 f'{synthesis.mode.value} mode</p>')

    def strip(colors_hex):
        out = ['<div class="strip">']
        for hex_val in colors_hex:
            text_color = text_color_for_background(hex_to_rgb(hex_val))
            out.append(f'  <div class="swatch" style="background:{hex_val}; color:{text_color}">{hex_val}</div>')
        out.append('</div>')
        return out

    # Gradient stacks
    lines.append('<h2>Colors</h2>')
    for category, stack in synthesis.gradient_stacks.items():
        if not stack:
            continue
        lines.append(f'<h3>{category.value.capitalize()}</h3>')
        lines.append('<div class="strip">')
        for color in stack:
            text_color = text_color_for_background(color.rgb)
            label = category_display_value(color, category)
            lines.append(f'  <div class="swatch" style="background:{color.hex}; color:{text_color}">'
                         f'{label}<br>{color.hex}</div>')
        lines.append('</div>')

    # Zones
    if features.zones:
        cols = max(z.col for z in features.zones) + 1
        lines.append('<h2>Color Script</h2>')
        lines.append(f'<div class="zones" style="grid-template-columns: repeat({cols}, 1fr)">')
        for zone in features.zones:
            text_color = text_color_for_background(zone.color.rgb)
            lines.append(f'  <div class="swatch" style="background:{zone.color.hex}; color:{text_color}; '
                         f'grid-column:{zone.col + 1}; grid-row:{zone.row + 1}" title="{zone.full_label}">'
                         f'{zone.label} {zone.color.hex}</div>')
        lines.append('</div>')

    # Palettes
    if synthesis.palettes or synthesis.harmonies:
        lines.append('<h2>Palettes</h2>')
        for palette in synthesis.palettes + synthesis.harmonies:
            lines.append(f'<h3>{escape(palette.name)}</h3>')
            lines.extend(strip(palette.colors))

    # Temperature
    if synthesis.temperature:
        t = synthesis.temperature
        lines.append('<h2>Temperature</h2>')
        lines.append('<div class="card">')
        lines.append(f'  <div class="temp-bar"><div class="temp-needle" style="left:{t.position:.1f}%"></div></div>')
        lines.append(f'  <strong>{t.category.title()}</strong> ({t.average:+.0f})')
        lines.append(f'  <div class="values">{escape(t.description)}</div>')
        lines.append('</div>')

    # Mode-specific feedback
    if synthesis.mode is PsychologyMode.DESIGN:
        if synthesis.contrast_pairs:
            lines.append('<h2>Contrast &amp; Accessibility</h2>')
            for pair in synthesis.contrast_pairs:
                badge_class = {
                    ContrastLevel.AAA: 'badge-aaa',
                    ContrastLevel.AA: 'badge-aa',
                    ContrastLevel.AA_LARGE: 'badge-aa-large',
                }.get(pair.level, 'badge-fail')
                lines.append('<div class="card">')
                lines.append(f'  <div class="contrast-demo" style="background:{pair.first}; color:{pair.second}">'
                             f'Aa {pair.first}</div>')
                lines.append(f'  <div class="values">{pair.ratio:.2f}:1 '
                             f'<span class="contrast-badge {badge_class}">{pair.level.label}</span> '
                             f'{pair.level.grade}</div>')
                lines.append('</div>')
        lines.append('<h2>Color Psychology</h2>')
    else:
        lines.append('<h2>Value Distribution</h2>')
        for vr in synthesis.value_ranges:
            lines.append('<div class="card">')
            lines.append(f'  <strong>{vr.label}</strong> {vr.percentage}%')
            if vr.colors:
                lines.extend('  ' + line for line in strip(vr.colors[:3]))
            if vr.feedback:
                lines.append(f'  <div class="values">{vr.feedback}</div>')
            lines.append('</div>')
        if synthesis.mood:
            lines.append('<h2>Color Mood</h2>')
            lines.append('<div class="card">')
            lines.append(f'  <strong>{synthesis.mood.mood}</strong>')
            lines.append(f'  <div class="values">{synthesis.mood.description}</div>')
            lines.append('</div>')
        lines.append('<h2>Artistic Impact</h2>')

    for color, psy in synthesis.psychology:
        lines.append(f'<div class="card psych" style="border-color:{color.hex}">')
        lines.append(f'  <div class="feeling">{escape(psy.feeling)}</div>')
        lines.append(f'  <div class="desc">{escape(psy.description)}</div>')
        lines.append('</div>')

    lines.append('</body>')
    lines.append('</html>')

    return '\n'.join(lines)


# =============================================================================
# Main Pipeline
# =============================================================================

def run_pipeline(source: Union[str, PixelBuffer],
                 mode: PsychologyMode = PsychologyMode.DESIGN,
                 downscale: bool = True,
                 max_colors: int = DEFAULT_MAX_COLORS,
                 cols: int = 3, rows: int = 2) -> tuple[SynthesisResult, FeatureData]:
    """Run analysis pipeline stages 1-3.

    Returns:
        Tuple of (synthesis_result, feature_data) for rendering.
    """
    # Stage 1: Data Preparation
    buffer = prepare_data(source, downscale=downscale)

    # Stage 2: Feature Extraction
    features = extract_features(buffer, max_colors=max_colors, cols=cols, rows=rows)

    # Stage 3: Synthesis
    synthesis = synthesize(features, mode)

    return synthesis, features


def analyze_image(image_path: str, **kwargs) -> tuple[str, str]:
    """Run the full analysis pipeline on an image.

    Returns:
        Tuple of (prose_output, html_output)
    """
    synthesis, features = run_pipeline(image_path, **kwargs)
    prose = render(synthesis, features)
    html = render_html(synthesis, features, str(image_path))
    return prose, html


# =============================================================================
# CLI
# =============================================================================

def main():
    import argparse
    import sys
    from pathlib import Path

    parser = argparse.ArgumentParser(
        description='Analyze an image and extract its color palette.'
    )
    parser.add_argument(
        '--input', '-i',
        required=True,
        help='Path to the image file'
    )
    parser.add_argument(
        '--output', '-o',
        nargs='?',
        const=True,
        default=None,
        help='Write HTML report. Optionally specify path, otherwise auto-names from input.'
    )
    parser.add_argument(
        '--mode', '-m',
        choices=[m.value for m in PsychologyMode],
        default=PsychologyMode.DESIGN.value,
        help='Feedback style: design (contrast, psychology) or artistic (values, mood)'
    )
    parser.add_argument(
        '--max-colors',
        type=int,
        default=DEFAULT_MAX_COLORS,
        help=f'Maximum distinct colors to extract (default {DEFAULT_MAX_COLORS})'
    )
    parser.add_argument('--cols', type=int, default=3, help='Zone grid columns')
    parser.add_argument('--rows', type=int, default=2, help='Zone grid rows')
    parser.add_argument(
        '--no-downscale',
        action='store_true',
        help=f'Process at full resolution instead of downscaling to {DOWNSCALE_SIZE}px'
    )

    args = parser.parse_args()
    image_path = Path(args.input)

    # Run analysis
    try:
        prose, html = analyze_image(
            str(image_path),
            mode=PsychologyMode(args.mode),
            downscale=not args.no_downscale,
            max_colors=args.max_colors,
            cols=args.cols,
            rows=args.rows,
        )
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error analyzing image: {e}", file=sys.stderr)
        sys.exit(1)

    # Always print prose to terminal
    print(prose)

    # Write HTML if requested
    if args.output:
        if args.output is True:
            output_path = image_path.with_name(f"{image_path.stem}-palette.html")
        else:
            output_path = Path(args.output)

        try:
            output_path.write_text(html)
            print(f"\nWrote: {output_path}")
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            sys.exit(1)


if __name__ == '__main__':
    main()
