"""
Command line driver: locate the target in a binary mask image.

Usage:
    python -m target_locator.main --config config.example.json \
        --mask mask.png --output overlay.png --debug
"""

import argparse
import json
import os
import sys

import cv2 as cv

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from target_locator import (
    FovCalculator,
    LocatorConfig,
    Overlay,
    TargetLocator,
    TargetLocatorError,
)

# Grey level above which a mask pixel counts as part of a target.
MASK_THRESHOLD = 127


def load_mask(path: str):
    """
    Read an image as a 0 / 255 binary mask. Returns None if unreadable.
    """

    gray = cv.imread(path, cv.IMREAD_GRAYSCALE)
    if gray is None:
        print(f"main.load_mask: Could not read {path}")
        return None

    _, mask = cv.threshold(gray, MASK_THRESHOLD, 255, cv.THRESH_BINARY)
    return mask


def write_overlay(path: str, mask, result, config: LocatorConfig) -> None:
    image = cv.cvtColor(mask, cv.COLOR_GRAY2BGR)
    overlay = Overlay()

    calc = FovCalculator(
        config.camera.horizontal_fov_deg, config.camera.image_width_px
    )
    overlay.draw_fov_grid(image, calc)

    overlay.draw_polygons(image, result.rejected, overlay.GRAY)
    overlay.draw_polygons(image, result.remaining, overlay.YELLOW)
    if result.best is not None:
        overlay.draw_polygons(image, [result.best], overlay.GREEN)
        overlay.draw_polygon_info(image, result.best)
    overlay.draw_solution(image, result.solution)

    if not cv.imwrite(path, image):
        print(f"main.write_overlay: Could not write {path}")


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Locate a rectangular vision target in a binary mask."
    )
    parser.add_argument(
        "--config", type=str, required=True, help="JSON configuration file."
    )
    parser.add_argument(
        "--mask", type=str, required=True, help="Binary mask image."
    )
    parser.add_argument(
        "--output", type=str, help="Optional path for an overlay image."
    )
    parser.add_argument(
        "--debug", action="store_true", help="Print stage diagnostics."
    )

    args = parser.parse_args()

    try:
        config = LocatorConfig.load(args.config)
    except TargetLocatorError as e:
        print(e)
        return 1

    mask = load_mask(args.mask)
    if mask is None:
        return 1

    contours, _ = cv.findContours(
        mask, cv.RETR_LIST, cv.CHAIN_APPROX_SIMPLE
    )

    locator = TargetLocator(config, debug=args.debug)
    result = locator.process(contours, mask)

    print(
        f"Polygons: {len(result.polygons)}  Accepted: {len(result.accepted)}"
    )
    print(json.dumps(result.solution.to_dict()))

    if result.telemetry is not None:
        result.telemetry.publish(lambda key, value: print(f"{key}: {value:.2f}"))

    if result.estimate is not None:
        result.estimate.publish(
            lambda key, value: print(f"Estimated {key}: {value:.2f}")
        )

    if args.output:
        write_overlay(args.output, mask, result, config)

    return 0 if result.has_target else 2


if __name__ == "__main__":
    sys.exit(main())
