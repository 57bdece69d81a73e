"""Factory for rolling socketable stones."""
from __future__ import annotations

import logging
import math
from types import MappingProxyType
from typing import Mapping, Sequence

from idlerpg.core.rng import RandomSource, random_pick
from idlerpg.core.types import StatMap
from idlerpg.data.repositories import AffixesRepository, RaritiesRepository, StonesRepository
from idlerpg.domain.entities import Affix, Stone
from idlerpg.services.affix_roller import roll_affixes, stone_affix_rules, weighted_choice
from idlerpg.services.errors import FactoryError

from .equipment_factory import weighted_value
from .id_factory import make_instance_id

logger = logging.getLogger(__name__)

STONE_LEVEL_SCALING = 0.05
STONE_VALUE_FACTOR = 0.5
DEFAULT_STONE_COLOR = "#FFFFFF"

BOSS_STONE_WEIGHT_BONUS: Mapping[str, int] = MappingProxyType({"Rare": 10, "Mythical": 8, "Divine": 5})
LEVEL_STONE_WEIGHT_DIVISOR: Mapping[str, int] = MappingProxyType({"Rare": 10, "Mythical": 20, "Divine": 40})

STONE_BASE_VALUE_WEIGHTS: Mapping[str, float] = MappingProxyType(
    {"damage": 8, "health": 0.3, "mana": 0.2, "armor": 4}
)
STONE_AFFIX_VALUE_WEIGHTS: Mapping[str, float] = MappingProxyType(
    {
        "damage": 8,
        "armor": 4,
        "health": 0.3,
        "mana": 0.2,
        "critChance": 150,
        "dodgeChance": 120,
        "attackSpeed": 30,
        "strength": 3,
        "dexterity": 3,
        "intelligence": 3,
        "vitality": 3,
        "luck": 5,
        "goldFind": 50,
        "magicFind": 80,
        "experienceBonus": 60,
    }
)


def stone_rarity_weights(
    level: int, from_boss: bool, stone_rarities: RaritiesRepository
) -> list[tuple[str, float]]:
    """Drop weights per stone rarity after level and boss adjustments (never below 1)."""
    weights: list[tuple[str, float]] = []
    for rarity in stone_rarities.ids():
        weight = stone_rarities.get(rarity).drop_weight
        divisor = LEVEL_STONE_WEIGHT_DIVISOR.get(rarity)
        if divisor:
            weight += level // divisor
        if from_boss:
            weight += BOSS_STONE_WEIGHT_BONUS.get(rarity, 0)
        weights.append((rarity, max(1, weight)))
    return weights


def choose_stone_rarity(
    level: int, from_boss: bool, stone_rarities: RaritiesRepository, rng: RandomSource
) -> str:
    weights = stone_rarity_weights(level, from_boss, stone_rarities)
    rarity, _ = weighted_choice(weights, rng, weight=lambda entry: entry[1])
    return rarity


def build_stone_name(base_name: str, rarity: str, affixes: Sequence[Affix]) -> str:
    prefix = rarity if rarity != "Common" else ""
    suffix = f" {affixes[0].name}" if affixes and rarity != "Common" else ""
    return f"{prefix} {base_name}{suffix}".strip()


def calculate_stone_value(base_stats: StatMap, affixes: Sequence[Affix], stat_multiplier: float, level: int) -> int:
    total = weighted_value(base_stats, affixes, STONE_BASE_VALUE_WEIGHTS, STONE_AFFIX_VALUE_WEIGHTS)
    return max(1, math.floor(total * level * stat_multiplier * STONE_VALUE_FACTOR))


def generate_stone(
    level: int,
    from_boss: bool = False,
    *,
    stones_repo: StonesRepository,
    affixes_repo: AffixesRepository,
    stone_rarities_repo: RaritiesRepository,
    rng: RandomSource,
) -> Stone:
    """Roll a stone drop; base stats and affixes carry a rarity-sized random spread."""
    rarity_id = choose_stone_rarity(level, from_boss, stone_rarities_repo, rng)
    rarity = stone_rarities_repo.resolve(rarity_id)
    stone_types = stones_repo.ids()
    if not stone_types:
        raise FactoryError("No stone bases are defined.")
    base = stones_repo.get(random_pick(rng, stone_types))

    multiplier = (1 + (level - 1) * STONE_LEVEL_SCALING) * rarity.stat_multiplier
    base_stats: StatMap = {}
    for stat, value in base.base_stats.items():
        if not isinstance(value, (int, float)):
            continue
        variation = 1 + (rng.random() * 2 - 1) * rarity.base_variation
        base_stats[stat] = round(value * multiplier * variation, 2)

    affixes = roll_affixes(
        affixes_repo.pool("stone"), level, rarity, rng, stone_affix_rules(rarity.affix_variation)
    )
    stone = Stone(
        id=make_instance_id("stone", rng),
        name=build_stone_name(base.name, rarity_id, affixes),
        type=base.id,
        rarity=rarity_id,
        level=level,
        base_stats=base_stats,
        affixes=affixes,
        socket_types=base.socket_types,
        value=calculate_stone_value(base_stats, affixes, rarity.stat_multiplier, level),
    )
    logger.debug("Generated stone %s (value %d)", stone.name, stone.value)
    return stone


def get_stone_color(rarity: str, stone_rarities_repo: RaritiesRepository) -> str:
    definition = stone_rarities_repo.find(rarity)
    return definition.color if definition is not None else DEFAULT_STONE_COLOR
