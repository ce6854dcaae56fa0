# level_scaling/settings.py

"""
================================================================================
LEVEL CONFIGURATION SNAPSHOT
================================================================================
An immutable bundle of every tunable the scorer and stat curves consume. A
fresh LevelConfig is passed into every call; nothing in the engine reads a
process-wide configuration.

Data Contract:
---------------
- Inputs:
    - config (dict): User-defined overrides, keyed by snake_case names.
      Missing keys fall back to level_scaling.config.
- Outputs:
    - LevelConfig: A frozen dataclass. to_dict() gives a JSON-safe copy.
- Side Effects: Unknown keys are logged at WARNING and ignored.
- Invariants: max_level >= 1, noise_scale > 0,
  0 <= min_noise_level_percentage <= 1, spawn_influence_radius >= 0.
================================================================================
"""

import logging
import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, NamedTuple

from . import config as DEFAULTS


class BonusRange(NamedTuple):
    """A (min_bonus, max_bonus) pair for one stat. Either order is accepted."""
    min_bonus: float
    max_bonus: float

    @property
    def low(self) -> float:
        return min(self.min_bonus, self.max_bonus)

    @property
    def high(self) -> float:
        return max(self.min_bonus, self.max_bonus)


# Flat config keys for each stat's bounds, as they appear in config files.
_BONUS_KEYS = {
    "health": ("min_total_health_bonus", "max_total_health_bonus"),
    "attack": ("min_total_attack_bonus", "max_total_attack_bonus"),
    "loot": ("min_total_loot_bonus", "max_total_loot_bonus"),
    "xp": ("min_total_xp_bonus", "max_total_xp_bonus"),
}

_SCALAR_KEYS = (
    "enable_mod",
    "max_level",
    "noise_scale",
    "min_noise_level_percentage",
    "spawn_influence_radius",
    "dimension_level_offsets",
    "mob_blacklist",
)

KNOWN_KEYS = frozenset(_SCALAR_KEYS) | frozenset(k for pair in _BONUS_KEYS.values() for k in pair)

# Recommended tuning windows from level_scaling.config. Values outside them
# are accepted but logged at WARNING.
_RECOMMENDED_RANGES = {
    "max_level": (DEFAULTS.MIN_MAX_LEVEL, DEFAULTS.MAX_MAX_LEVEL),
    "spawn_influence_radius": (DEFAULTS.MIN_SPAWN_INFLUENCE_RADIUS, DEFAULTS.MAX_SPAWN_INFLUENCE_RADIUS),
}


def _default_bonus(stat: str) -> BonusRange:
    return BonusRange(*DEFAULTS.STAT_BONUS_RANGES[stat])


@dataclass(frozen=True)
class LevelConfig:
    enabled: bool = DEFAULTS.DEFAULT_ENABLE_MOD
    max_level: int = DEFAULTS.DEFAULT_MAX_LEVEL
    noise_scale: float = DEFAULTS.DEFAULT_NOISE_SCALE
    min_noise_level_percentage: float = DEFAULTS.DEFAULT_MIN_NOISE_LEVEL_PERCENTAGE
    spawn_influence_radius: float = DEFAULTS.DEFAULT_SPAWN_INFLUENCE_RADIUS
    dimension_level_offsets: Mapping[str, int] = field(
        default_factory=lambda: dict(DEFAULTS.DIMENSION_LEVEL_OFFSETS)
    )
    health_bonus: BonusRange = field(default_factory=lambda: _default_bonus("health"))
    attack_bonus: BonusRange = field(default_factory=lambda: _default_bonus("attack"))
    loot_bonus: BonusRange = field(default_factory=lambda: _default_bonus("loot"))
    xp_bonus: BonusRange = field(default_factory=lambda: _default_bonus("xp"))
    mob_blacklist: frozenset = field(default_factory=lambda: frozenset(DEFAULTS.MOB_BLACKLIST))

    def __post_init__(self):
        if self.max_level < DEFAULTS.MINIMUM_LEVEL:
            raise ValueError(f"max_level must be >= {DEFAULTS.MINIMUM_LEVEL}, got {self.max_level}")
        if not self.noise_scale > 0 or not math.isfinite(self.noise_scale):
            raise ValueError(f"noise_scale must be a finite value > 0, got {self.noise_scale}")
        if not 0.0 <= self.min_noise_level_percentage <= 1.0:
            raise ValueError(
                f"min_noise_level_percentage must be within [0, 1], got {self.min_noise_level_percentage}"
            )
        if not self.spawn_influence_radius >= 0:
            raise ValueError(f"spawn_influence_radius must be >= 0, got {self.spawn_influence_radius}")

        # Freeze the containers so the snapshot cannot drift after creation.
        offsets = {str(k): int(v) for k, v in dict(self.dimension_level_offsets).items()}
        object.__setattr__(self, "dimension_level_offsets", MappingProxyType(offsets))
        object.__setattr__(self, "mob_blacklist", frozenset(self.mob_blacklist))
        for stat in _BONUS_KEYS:
            name = f"{stat}_bonus"
            object.__setattr__(self, name, BonusRange(*getattr(self, name)))

    def bonus_range(self, stat: str) -> BonusRange:
        """Returns the configured bonus range for 'health', 'attack', 'loot' or 'xp'."""
        if stat not in _BONUS_KEYS:
            raise KeyError(f"Unknown stat '{stat}'")
        return getattr(self, f"{stat}_bonus")

    def dimension_offset(self, dimension_id: str) -> int:
        return self.dimension_level_offsets.get(dimension_id, 0)

    @classmethod
    def from_dict(cls, config: dict, logger: logging.Logger = None) -> "LevelConfig":
        """
        Consolidates user overrides with the internal defaults.

        Args:
            config (dict): Overrides keyed by snake_case names.
            logger (logging.Logger, optional): Receives warnings about keys
                that are not recognised.
        """
        logger = logger or logging.getLogger(__name__)
        config = config or {}

        unknown = sorted(set(config) - KNOWN_KEYS)
        if unknown:
            logger.warning(f"Ignoring unknown level configuration keys: {', '.join(unknown)}")

        bonuses = {}
        for stat, (min_key, max_key) in _BONUS_KEYS.items():
            default_min, default_max = DEFAULTS.STAT_BONUS_RANGES[stat]
            bonuses[f"{stat}_bonus"] = BonusRange(
                float(config.get(min_key, default_min)),
                float(config.get(max_key, default_max)),
            )

        settings = cls(
            enabled=bool(config.get('enable_mod', DEFAULTS.DEFAULT_ENABLE_MOD)),
            max_level=int(config.get('max_level', DEFAULTS.DEFAULT_MAX_LEVEL)),
            noise_scale=float(config.get('noise_scale', DEFAULTS.DEFAULT_NOISE_SCALE)),
            min_noise_level_percentage=float(
                config.get('min_noise_level_percentage', DEFAULTS.DEFAULT_MIN_NOISE_LEVEL_PERCENTAGE)
            ),
            spawn_influence_radius=float(
                config.get('spawn_influence_radius', DEFAULTS.DEFAULT_SPAWN_INFLUENCE_RADIUS)
            ),
            dimension_level_offsets=config.get('dimension_level_offsets', DEFAULTS.DIMENSION_LEVEL_OFFSETS),
            mob_blacklist=config.get('mob_blacklist', DEFAULTS.MOB_BLACKLIST),
            **bonuses,
        )
        settings._warn_outside_recommended(logger)
        return settings

    def _warn_outside_recommended(self, logger: logging.Logger):
        for name, (low, high) in _RECOMMENDED_RANGES.items():
            value = getattr(self, name)
            if not low <= value <= high:
                logger.warning(f"{name}={value} is outside the recommended range [{low}, {high}].")
        for stat in _BONUS_KEYS:
            bonus = self.bonus_range(stat)
            if not DEFAULTS.MIN_MIN_TOTAL_BONUS <= bonus.min_bonus <= DEFAULTS.MAX_MIN_TOTAL_BONUS:
                logger.warning(
                    f"min {stat} bonus {bonus.min_bonus} is outside the recommended range "
                    f"[{DEFAULTS.MIN_MIN_TOTAL_BONUS}, {DEFAULTS.MAX_MIN_TOTAL_BONUS}]."
                )
            if bonus.max_bonus < DEFAULTS.MIN_MAX_TOTAL_BONUS:
                logger.warning(f"max {stat} bonus {bonus.max_bonus} is below {DEFAULTS.MIN_MAX_TOTAL_BONUS}.")

    def to_dict(self) -> dict:
        """Returns a JSON-safe dict that from_dict() reads back unchanged."""
        data = {
            'enable_mod': self.enabled,
            'max_level': self.max_level,
            'noise_scale': self.noise_scale,
            'min_noise_level_percentage': self.min_noise_level_percentage,
            'spawn_influence_radius': self.spawn_influence_radius,
            'dimension_level_offsets': dict(self.dimension_level_offsets),
            'mob_blacklist': sorted(self.mob_blacklist),
        }
        for stat, (min_key, max_key) in _BONUS_KEYS.items():
            bonus = self.bonus_range(stat)
            data[min_key] = bonus.min_bonus
            data[max_key] = bonus.max_bonus
        return data
