"""Factory for spawning level-scaled enemies."""
from __future__ import annotations

import logging
import math
from types import MappingProxyType
from typing import Mapping

from idlerpg.core.rng import RandomSource, random_pick
from idlerpg.data.repositories import EnemyTypesRepository
from idlerpg.domain.entities import Enemy
from idlerpg.services.errors import FactoryError

from .id_factory import make_instance_id

logger = logging.getLogger(__name__)

BOSS_BASE_CHANCE = 0.02
BOSS_CHANCE_PER_TEN_LEVELS = 0.01
SPECIAL_ABILITY_CHANCE = 0.2

SPECIAL_ABILITIES: tuple[str, ...] = (
    "berserker",
    "precise",
    "regeneration",
    "shield",
    "poison",
    "freeze",
    "lightning",
)

# (roll threshold, type), checked top down; anything lower is melee
_TYPE_THRESHOLDS: tuple[tuple[float, str], ...] = (
    (0.92, "assassin"),
    (0.85, "tank"),
    (0.75, "caster"),
    (0.55, "ranged"),
)

# type -> (chance of first ability, first, second)
_TYPE_ABILITIES: Mapping[str, tuple[float, str, str]] = MappingProxyType(
    {
        "melee": (0.6, "berserker", "precise"),
        "ranged": (0.7, "precise", "poison"),
        "caster": (0.5, "lightning", "freeze"),
        "tank": (0.8, "shield", "regeneration"),
        "assassin": (0.6, "poison", "precise"),
    }
)

# type -> (hp multiplier, armor per level)
_TYPE_DURABILITY: Mapping[str, tuple[float, float]] = MappingProxyType(
    {
        "tank": (1.8, 0.3),
        "boss": (3.5, 0.5),
        "assassin": (0.7, 0.0),
        "caster": (0.9, 0.0),
    }
)


def boss_chance(level: int) -> float:
    return BOSS_BASE_CHANCE + (level // 10) * BOSS_CHANCE_PER_TEN_LEVELS


def roll_enemy_type(rng: RandomSource) -> str:
    roll = rng.random()
    for threshold, enemy_type in _TYPE_THRESHOLDS:
        if roll > threshold:
            return enemy_type
    return "melee"


def roll_special_ability(enemy_type: str, is_boss: bool, rng: RandomSource) -> str | None:
    if is_boss:
        return random_pick(rng, SPECIAL_ABILITIES)
    if rng.random() >= SPECIAL_ABILITY_CHANCE:
        return None
    biased = _TYPE_ABILITIES.get(enemy_type)
    if biased is None:
        return random_pick(rng, SPECIAL_ABILITIES)
    chance, first, second = biased
    return first if rng.random() < chance else second


def enemy_durability(enemy_type: str, level: int) -> tuple[int, int]:
    """Return (max hp, armor) for an enemy of ``enemy_type`` at ``level``."""
    hp = 25 + level * 12
    multiplier, armor_per_level = _TYPE_DURABILITY.get(enemy_type, (1.0, 0.0))
    if enemy_type in _TYPE_DURABILITY:
        hp = math.floor(hp * multiplier)
    return hp, math.floor(level * armor_per_level)


def create_enemy_for_level(
    level: int,
    kind: str | None = None,
    *,
    enemy_types_repo: EnemyTypesRepository,
    rng: RandomSource,
) -> Enemy:
    """Spawn an enemy; a boss roll overrides the requested ``kind``."""
    is_boss = rng.random() < boss_chance(level)
    if is_boss:
        enemy_type = "boss"
    elif kind:
        enemy_type = kind
    else:
        enemy_type = roll_enemy_type(rng)

    hp, armor = enemy_durability(enemy_type, level)
    special_ability = roll_special_ability(enemy_type, is_boss, rng)

    names_def = enemy_types_repo.find(enemy_type) or enemy_types_repo.find("melee")
    if names_def is None:
        raise FactoryError(f"No enemy names defined for type '{enemy_type}'.")
    name = f"{random_pick(rng, names_def.names)} L{level}"
    if is_boss:
        name = f"[BOSS] {name}"

    enemy = Enemy(
        id=make_instance_id("enemy", rng),
        name=name,
        type=enemy_type,
        level=level,
        hp=hp,
        max_hp=hp,
        special_ability=special_ability,
        is_boss=is_boss,
        armor=armor,
    )
    logger.debug("Spawned %s (%s, hp %d, ability %s)", enemy.name, enemy.type, hp, special_ability)
    return enemy
