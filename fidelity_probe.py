# fidelity_probe.py

"""
Checks that a rendered level map (the vectorised display path) agrees with
the scalar scoring path pixel for pixel at a handful of probe points.

Usage:
    python fidelity_probe.py --map-dir level_maps/seed_12345/minecraft_overworld
"""

import os
import sys
import json
import logging
import argparse
import numpy as np
from PIL import Image

sys.path.append(os.path.abspath(os.path.dirname(__file__)))

from level_scaling.scorer import LevelScorer
from level_scaling import color_maps
from render_level_map import IMAGE_FILENAME, METADATA_FILENAME


def probe_points(resolution: int) -> list[tuple[int, int]]:
    """Corners, centre and a couple of off-axis pixels."""
    last = resolution - 1
    return [
        (0, 0), (last, 0), (0, last), (last, last),
        (resolution // 2, resolution // 2),
        (resolution // 3, (2 * resolution) // 3),
        ((3 * resolution) // 4, resolution // 5),
    ]


def run_probe(map_dir: str, logger: logging.Logger) -> bool:
    """Returns True when every probed pixel matches its independently scored level."""
    # --- 1. Load the map's birth certificate ---
    metadata_path = os.path.join(map_dir, METADATA_FILENAME)
    logger.info(f"Loading map metadata from '{metadata_path}'...")
    try:
        with open(metadata_path, 'r') as f:
            metadata = json.load(f)
    except FileNotFoundError:
        logger.critical(f"Metadata not found. Run render_level_map.py first to create '{map_dir}'.")
        return False

    # IMPORTANT: Palettized images must be converted back to RGB to get pixel data
    rendered_pixels = np.array(Image.open(os.path.join(map_dir, IMAGE_FILENAME)).convert('RGB'))

    # --- 2. Rebuild the scorer from the exact parameters used to render ---
    scorer = LevelScorer(metadata['level_scaling_parameters'], logger)
    lut = color_maps.create_level_lut(scorer.settings.max_level)

    seed = metadata['seed']
    dimension_id = metadata['dimension_id']
    center_x, center_z = metadata['center']
    resolution = metadata['resolution']
    blocks_per_pixel = metadata['blocks_per_pixel']
    half = (resolution - 1) / 2.0

    # --- 3. Score each probe pixel on the scalar path and compare ---
    all_passed = True
    for px, py in probe_points(resolution):
        world_x = center_x + (px - half) * blocks_per_pixel
        world_z = center_z + (py - half) * blocks_per_pixel

        level = scorer.level_at(world_x, world_z, dimension_id, seed)
        expected_color = tuple(int(c) for c in color_maps.get_level_color_array(np.array([level]), lut)[0])
        rendered_color = tuple(int(c) for c in rendered_pixels[py, px])

        result = "PASS" if rendered_color == expected_color else "FAIL"
        if result == "FAIL":
            all_passed = False
        logger.info(
            f"  - Probing pixel ({px}, {py}) at ({world_x:.1f}, {world_z:.1f}): "
            f"level={level}, Rendered={rendered_color}, Scalar={expected_color} -> {result}"
        )

    logger.info("--- Probe Complete ---")
    if all_passed:
        logger.info("SUCCESS: All probed pixels match the scalar scoring path.")
    else:
        logger.error("FAILURE: Mismatch detected between the rendered map and the scalar path.")
    return all_passed


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Verify a rendered level map against the scalar scorer.")
    parser.add_argument("--map-dir", type=str, required=True, help="Directory written by render_level_map.py.")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
    logger = logging.getLogger("FidelityProbe")
    return 0 if run_probe(args.map_dir, logger) else 1


if __name__ == '__main__':
    sys.exit(main())
