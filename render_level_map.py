# render_level_map.py

"""
================================================================================
OFFLINE LEVEL MAP RENDERER
================================================================================
This script is a command-line tool for rendering the level field around a
world position to a colour-coded PNG. It is used to preview how a seed and a
set of tunables distribute difficulty before they ship.

Every render writes a "birth certificate" (map_metadata.json) next to the
image so fidelity_probe.py can recompute any pixel independently.

Usage:
    python render_level_map.py --config path/to/level_config.json
================================================================================
"""
import os
import sys
import json
import logging
import argparse
import time
import numpy as np
from PIL import Image
from tqdm import tqdm

# Add project root to Python path to allow importing from level_scaling
sys.path.append(os.path.abspath(os.path.dirname(__file__)))

from level_scaling.scorer import LevelScorer
from level_scaling.seeds import resolve_seed
from level_scaling import color_maps
from level_scaling import config as DEFAULTS

# Rows scored per progress step.
BAND_ROWS = 32

IMAGE_FILENAME = "level_map.png"
METADATA_FILENAME = "map_metadata.json"


def render_level_map(
    scorer: LevelScorer,
    seed: int,
    dimension_id: str,
    center_x: float,
    center_z: float,
    resolution: int,
    blocks_per_pixel: float,
    output_dir: str,
    logger: logging.Logger,
    show_progress: bool = True
) -> dict:
    """
    Scores a resolution x resolution window and saves it as a PNG plus metadata.
    Returns the metadata dict that was written.
    """
    start_time = time.perf_counter()
    os.makedirs(output_dir, exist_ok=True)

    x_grid, z_grid = scorer.get_coordinate_grid(center_x, center_z, resolution, resolution, blocks_per_pixel)
    levels = np.empty(x_grid.shape, dtype=np.int64)

    bands = range(0, resolution, BAND_ROWS)
    for row in tqdm(bands, desc="Scoring Rows", disable=not show_progress):
        band = slice(row, row + BAND_ROWS)
        levels[band] = scorer.level_grid(x_grid[band], z_grid[band], dimension_id, seed)

    lut = color_maps.create_level_lut(scorer.settings.max_level)
    color_array = color_maps.get_level_color_array(levels, lut)

    image_path = os.path.join(output_dir, IMAGE_FILENAME)
    Image.fromarray(color_array).save(image_path, 'PNG')

    metadata = {
        "seed": seed,
        "dimension_id": dimension_id,
        "center": [center_x, center_z],
        "resolution": resolution,
        "blocks_per_pixel": blocks_per_pixel,
        "level_range": [int(levels.min()), int(levels.max())],
        "mean_level": float(levels.mean()),
        "level_scaling_parameters": scorer.settings.to_dict(),
    }
    metadata_path = os.path.join(output_dir, METADATA_FILENAME)
    with open(metadata_path, 'w') as f:
        json.dump(metadata, f, indent=4)

    elapsed = time.perf_counter() - start_time
    logger.info(
        f"Rendered {resolution}x{resolution} level map for '{dimension_id}' "
        f"(levels {metadata['level_range'][0]}-{metadata['level_range'][1]}, "
        f"mean {metadata['mean_level']:.1f}) in {elapsed:.2f} seconds."
    )
    logger.info(f"Level map saved to: {image_path}")
    return metadata


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Render a colour-coded level map for a seed and configuration.")
    parser.add_argument("--config", type=str, required=True, help="Path to the JSON configuration file.")
    parser.add_argument("--seed", type=int, default=None, help="World seed. Overrides the config file.")
    parser.add_argument("--dimension", type=str, default=None, help="Dimension identifier, e.g. minecraft:the_nether.")
    parser.add_argument("--center-x", type=float, default=0.0)
    parser.add_argument("--center-z", type=float, default=0.0)
    parser.add_argument("--resolution", type=int, default=DEFAULTS.DEFAULT_MAP_RESOLUTION)
    parser.add_argument("--blocks-per-pixel", type=float, default=DEFAULTS.DEFAULT_MAP_BLOCKS_PER_PIXEL)
    parser.add_argument("--output", type=str, default=None, help="Output directory.")
    args = parser.parse_args(argv)

    # 1. --- Setup Logging (Rule 2) ---
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        stream=sys.stdout
    )
    logger = logging.getLogger("LevelMap")

    # 2. --- Load Configuration (Rule 1) ---
    logger.info(f"Loading configuration from: {args.config}")
    try:
        with open(args.config, 'r') as f:
            config = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        logger.critical(f"Failed to load or parse config file: {e}")
        return 1

    dimension_id = args.dimension or config.get('dimension_id', DEFAULTS.DEFAULT_DIMENSION_ID)
    world_seed = args.seed if args.seed is not None else config.get('seed')
    seed = resolve_seed(dimension_id, world_seed)
    if world_seed is None:
        logger.warning(f"No world seed given; using the fallback seed {seed} for '{dimension_id}'.")

    try:
        scorer = LevelScorer(config.get('level_scaling_parameters', {}), logger)
    except ValueError as e:
        logger.critical(f"Invalid level configuration: {e}")
        return 1

    output_dir = args.output or os.path.join("level_maps", f"seed_{seed}", dimension_id.replace(':', '_'))
    render_level_map(
        scorer, seed, dimension_id,
        args.center_x, args.center_z,
        args.resolution, args.blocks_per_pixel,
        output_dir, logger
    )
    logger.info("Next step: Run fidelity_probe.py to verify the rendered map.")
    return 0


# --- Command-Line Interface ---
if __name__ == "__main__":
    sys.exit(main())
