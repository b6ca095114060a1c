#!/usr/bin/env python3
"""Write an HTML color report for every image in a directory."""

import argparse
import sys
import time
from pathlib import Path

from analyze import render_html, run_pipeline
from mood import PsychologyMode

IMAGE_SUFFIXES = {'.jpg', '.jpeg', '.png', '.webp', '.gif', '.bmp'}


def find_images(directory: Path) -> list[Path]:
    """Image files directly inside `directory`, sorted by path."""
    return sorted(p for p in directory.iterdir() if p.is_file() and p.suffix.lower() in IMAGE_SUFFIXES)


def write_report(image_path: Path, output_dir: Path, mode: PsychologyMode, downscale: bool) -> str:
    """
    Analyze one image and save its report next to the others.

    Returns:
        One-line summary: color count and temperature category.
    """
    synthesis, features = run_pipeline(str(image_path), mode=mode, downscale=downscale)

    report = output_dir / f"{image_path.stem}-palette.html"
    if report.exists():
        print(f"  Warning: replacing {report.name}", file=sys.stderr)
    report.write_text(render_html(synthesis, features, str(image_path)))

    temperature = synthesis.temperature.category if synthesis.temperature else 'no temperature'
    return f"{len(features.colors)} colors, {temperature}"


def main():
    parser = argparse.ArgumentParser(description='Write HTML color reports for a folder of images.')
    parser.add_argument('--input', '-i', required=True, help='Folder of images')
    parser.add_argument('--output', '-o', required=True, help='Folder for the reports (created if missing)')
    parser.add_argument('--mode', '-m', choices=[m.value for m in PsychologyMode],
                        default=PsychologyMode.DESIGN.value, help='Feedback style for every report')
    parser.add_argument('--no-downscale', action='store_true',
                        help='Analyze at full resolution')
    args = parser.parse_args()

    source = Path(args.input)
    if not source.is_dir():
        print(f"Error: {source} is not a directory", file=sys.stderr)
        sys.exit(2)

    images = find_images(source)
    if not images:
        print(f"No images in {source}", file=sys.stderr)
        sys.exit(2)

    reports = Path(args.output)
    reports.mkdir(parents=True, exist_ok=True)
    mode = PsychologyMode(args.mode)

    errors = {}
    started = time.perf_counter()

    for n, image_path in enumerate(images, 1):
        tick = time.perf_counter()
        try:
            summary = write_report(image_path, reports, mode, downscale=not args.no_downscale)
        except Exception as e:
            errors[image_path.name] = f"{type(e).__name__}: {e}"
            print(f"[{n}/{len(images)}] {image_path.name}: failed ({errors[image_path.name]})",
                  file=sys.stderr)
            continue
        print(f"[{n}/{len(images)}] {image_path.name}: {summary} in {time.perf_counter() - tick:.2f}s")

    done = len(images) - len(errors)
    elapsed = time.perf_counter() - started

    print()
    print(f"Completed: {done}/{len(images)} succeeded in {elapsed:.2f}s, reports in {reports}/")
    if errors:
        for name, error in errors.items():
            print(f"  {name}: {error}")
        sys.exit(1)


if __name__ == '__main__':
    main()
