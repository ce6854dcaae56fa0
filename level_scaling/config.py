# level_scaling/config.py

"""
================================================================================
INTERNAL DEFAULT CONFIGURATION
================================================================================
This module contains the default, fallback internal constants for the level
scaling engine. These values are used if they are not explicitly provided by
the caller's configuration.

DO NOT MODIFY THIS FILE FOR A SPECIFIC WORLD.
Instead, pass a configuration dictionary to LevelConfig.from_dict().
================================================================================
"""

# --- Core Switches ---
DEFAULT_ENABLE_MOD = True

# --- Level Range ---
# Levels are always >= MINIMUM_LEVEL. The maximum is user-tunable.
MINIMUM_LEVEL = 1
DEFAULT_MAX_LEVEL = 100
MIN_MAX_LEVEL = 1
MAX_MAX_LEVEL = 200

# --- Noise Field ---
# Divisor applied to world coordinates before sampling. A larger number means
# larger, smoother regions of similar difficulty.
DEFAULT_NOISE_SCALE = 2048.0

# The lowest fraction of max_level the noise alone can produce [0, 1].
# 0.25 means that, away from spawn, levels never drop below 25% of max_level.
DEFAULT_MIN_NOISE_LEVEL_PERCENTAGE = 0.25

# --- Spawn Influence ---
# Within this distance of the world origin (0, 0), levels are pulled linearly
# toward MINIMUM_LEVEL. 0 disables the effect.
DEFAULT_SPAWN_INFLUENCE_RADIUS = 3500.0
MIN_SPAWN_INFLUENCE_RADIUS = 100.0
MAX_SPAWN_INFLUENCE_RADIUS = 10000.0

# --- Dimension Offsets ---
# Flat level bonus added per dimension identifier after blending.
DIMENSION_LEVEL_OFFSETS = {
    "minecraft:the_nether": 10,
    "minecraft:the_end": 20,
}

# --- Stat Bonus Ranges ---
# Each stat is a (min_bonus, max_bonus) pair. A bonus is a signed fraction
# over a baseline of 1.0: -0.75 means 25% of base, 10.0 means 11x base.
STAT_BONUS_RANGES = {
    "health": (-0.75, 10.0),
    "attack": (-0.75, 5.0),
    "loot": (-0.2, 4.0),
    "xp": (-0.2, 12.0),
}

# Recommended bounds for tuning tools. min_bonus lives in [-0.99, 0],
# max_bonus is >= 0 with no upper limit.
MIN_MIN_TOTAL_BONUS = -0.99
MAX_MIN_TOTAL_BONUS = 0.0
MIN_MAX_TOTAL_BONUS = 0.0

# --- Entity Filtering ---
# Entity type identifiers that always stay at MINIMUM_LEVEL.
MOB_BLACKLIST = (
    "minecraft:armor_stand",
    "minecraft:item_frame",
    "minecraft:glow_item_frame",
    "minecraft:painting",
    "minecraft:marker",
    "minecraft:ender_dragon",
    "minecraft:wither",
)

# --- Seeds ---
# Namespace assumed for dimension identifiers written without one.
DEFAULT_DIMENSION_NAMESPACE = "minecraft"
DEFAULT_DIMENSION_ID = "minecraft:overworld"

# --- Entity Hooks ---
# Multipliers closer than this to 1.0 are treated as "no change".
MODIFIER_APPLICATION_THRESHOLD = 0.001
# Any mob that would drop experience drops at least this much.
MINIMUM_XP_DROP = 1

# --- Display Tiers (fraction of max_level / attack multiplier) ---
LEVEL_TIER_THRESHOLDS = {
    "green": 0.3,
    "yellow": 0.6,
    "gold": 0.8,
    # red is anything at or above the gold threshold
}

DANGER_TIER_THRESHOLDS = {
    "green": 1.3,
    "yellow": 2.0,
    "gold": 3.0,
}

# --- Rendering (offline tools) ---
DEFAULT_MAP_RESOLUTION = 512
DEFAULT_MAP_BLOCKS_PER_PIXEL = 32.0
