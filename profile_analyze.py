#!/usr/bin/env python3
"""Time the analysis stages on sample images and show where extraction spends its time."""

import argparse
import cProfile
import io
import pstats
import sys
import time
from pathlib import Path

from analyze import extract_features, prepare_data, render, synthesize
from batch_analyze import find_images

TOP_FUNCTIONS = 30


def profile_image(image_path: str, downscale: bool = True, verbose: bool = True):
    """
    Run each pipeline stage once and time it.

    Returns:
        (timings, buffer): seconds per stage plus 'total', and the prepared buffer.
    """
    timings = {}

    tick = time.perf_counter()
    buffer = prepare_data(image_path, downscale=downscale)
    timings['prepare_data'] = time.perf_counter() - tick

    tick = time.perf_counter()
    features = extract_features(buffer)
    timings['extract_features'] = time.perf_counter() - tick

    tick = time.perf_counter()
    synthesis = synthesize(features)
    timings['synthesize'] = time.perf_counter() - tick

    tick = time.perf_counter()
    render(synthesis, features)
    timings['render'] = time.perf_counter() - tick

    timings['total'] = sum(timings.values())

    if verbose:
        print(f"\n{Path(image_path).name}: {buffer.width}x{buffer.height}, "
              f"{len(features.colors)} colors, {len(features.zones)} zones")
        for stage, seconds in timings.items():
            share = seconds / timings['total'] * 100 if timings['total'] else 0
            print(f"  {stage:<18} {seconds:7.3f}s {share:6.1f}%")

    return timings, buffer


def detailed_profile(image_path: str, downscale: bool = True):
    """cProfile extract_features on one image, loading it beforehand."""
    buffer = prepare_data(image_path, downscale=downscale)

    profiler = cProfile.Profile()
    features = profiler.runcall(extract_features, buffer)

    stream = io.StringIO()
    pstats.Stats(profiler, stream=stream).sort_stats('cumulative').print_stats(TOP_FUNCTIONS)
    print(f"\nextract_features() on {Path(image_path).name}, top {TOP_FUNCTIONS} by cumulative time")
    print(stream.getvalue())

    return features


def main():
    parser = argparse.ArgumentParser(description='Time each pipeline stage on a folder of images.')
    parser.add_argument('--input', '-i', default=str(Path(__file__).parent / "source_images"),
                        help='Folder of images (default: source_images/)')
    parser.add_argument('--no-downscale', action='store_true', help='Profile at full resolution')
    args = parser.parse_args()

    folder = Path(args.input)
    images = find_images(folder) if folder.is_dir() else []
    if not images:
        print(f"No images in {folder}")
        sys.exit(1)

    downscale = not args.no_downscale
    rows = []
    for image in images:
        timings, buffer = profile_image(str(image), downscale=downscale)
        rows.append((image.name, buffer.width, buffer.height, timings['total']))

    print(f"\n{'Image':<35} {'Size':>11} {'Total':>8}")
    for name, width, height, total in rows:
        print(f"{name:<35} {f'{width}x{height}':>11} {total:>7.3f}s")

    detailed_profile(str(images[0]), downscale=downscale)


if __name__ == "__main__":
    main()
