"""Derive a player's combat statistics from attributes, gear, stones and passives.

Every call starts from the fixed baselines and folds each source in the same
order, so the result depends only on the inputs and repeated calls agree:

1. attribute deltas over the starting attributes
2. legacy flat skills
3. equipment base stats, affixes and socketed stones
4. allocated passive tree nodes
5. the combined stat map applied to the derived fields
6. attribute points granted by gear and passives
7. the legacy single ``equipped`` weapon
8. clamps
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, Mapping

from idlerpg.core.types import ATTRIBUTE_NAMES, StatMap
from idlerpg.domain.attribute_scaling import (
    AttributeScalingBreakdown,
    build_attribute_scaling_breakdown,
    compute_attribute_contributions,
)
from idlerpg.domain.defs import PassiveTreeDef
from idlerpg.domain.entities import Affix, Equipment, Player, Stone
from idlerpg.domain.entities.player import (
    BASE_ATTACK_SPEED,
    BASE_DPS,
    BASE_MAX_HP,
    BASE_MAX_MANA,
    BASE_PROJECTILE_SPEED,
)
from idlerpg.domain.passive_tree import calculate_passive_tree_stats

logger = logging.getLogger(__name__)

MAX_CRIT_CHANCE = 1.0
MAX_LIFE_STEAL = 1.0
MAX_DODGE_CHANCE = 0.95
MAX_BLOCK_CHANCE = 0.75

SKILL_STRENGTH_DPS = 1.0
SKILL_PRECISION_CRIT = 0.01
SKILL_AGILITY_DODGE = 0.01
SKILL_RESILIENCE_ARMOR = 1.0

_SKIPPED_STATS = {"resistance"}


@dataclass(frozen=True, slots=True)
class StatBreakdown:
    """Per-source stat maps for tooltips; ``total`` matches ``calculated_stats``."""

    attributes: AttributeScalingBreakdown
    equipment: StatMap = field(default_factory=dict)
    stones: StatMap = field(default_factory=dict)
    passive: StatMap = field(default_factory=dict)
    total: StatMap = field(default_factory=dict)


def _add_stats(totals: StatMap, stats: Mapping[str, object]) -> None:
    for stat, value in stats.items():
        if stat in _SKIPPED_STATS:
            continue
        if not _is_number(value):
            continue
        totals[stat] = totals.get(stat, 0.0) + value


def _add_affixes(totals: StatMap, affixes: Iterable[Affix]) -> None:
    for affix in affixes:
        _add_stats(totals, {affix.stat: affix.value})


def _merge(*maps: Mapping[str, float]) -> StatMap:
    merged: StatMap = {}
    for stat_map in maps:
        _add_stats(merged, stat_map)
    return merged


def _is_number(value: object) -> bool:
    return not isinstance(value, bool) and isinstance(value, (int, float)) and math.isfinite(value)


def _normalize_gold(gold: object) -> float:
    if not _is_number(gold):
        logger.warning("Player gold was invalid (%r), resetting to 0", gold)
        return 0
    return gold


def _clamp_pool(current: object, maximum: float, name: str) -> float:
    """Clamp hp or mana into ``[0, maximum]``; invalid values refill to ``maximum``."""
    if not _is_number(current):
        logger.warning("Player %s was invalid (%r), resetting to %s", name, current, maximum)
        return maximum
    return max(0.0, min(current, maximum))


def _normalize_equipment(equipment: object) -> Dict[str, Equipment]:
    if not isinstance(equipment, Mapping):
        logger.warning("Player equipment was invalid (%r), resetting to empty", type(equipment).__name__)
        return {}
    cleaned: Dict[str, Equipment] = {}
    for slot, item in equipment.items():
        if item is None:
            continue
        if not isinstance(item, Equipment):
            logger.warning("Dropping malformed equipment in slot %r", slot)
            continue
        cleaned[slot] = item
    return cleaned


def sum_equipment_stats(equipment: Iterable[Equipment]) -> StatMap:
    """Base stats plus affixes of every item; ``resistance`` is skipped."""
    totals: StatMap = {}
    for item in equipment:
        _add_stats(totals, item.base_stats)
        _add_affixes(totals, item.affixes)
    return totals


def sum_socketed_stone_stats(equipment: Iterable[Equipment], stones_by_id: Mapping[str, Stone]) -> StatMap:
    """Stats of every stone socketed in ``equipment``; unknown ids add nothing."""
    totals: StatMap = {}
    for item in equipment:
        for stone_id in item.socketed_stone_ids:
            stone = stones_by_id.get(stone_id)
            if stone is None:
                continue
            _add_stats(totals, stone.base_stats)
            _add_affixes(totals, stone.affixes)
    return totals


def _source_totals(player: Player, equipment: Mapping[str, Equipment], tree: PassiveTreeDef | None):
    stones_by_id = {stone.id: stone for stone in player.stones}
    gear = sum_equipment_stats(equipment.values())
    stones = sum_socketed_stone_stats(equipment.values(), stones_by_id)
    passive = calculate_passive_tree_stats(tree, player.passive_tree) if tree is not None else {}
    return gear, stones, passive


def calculate_player_stats(player: Player, tree: PassiveTreeDef | None = None) -> Player:
    """Return a copy of ``player`` with every derived stat recomputed.

    Invalid gold and equipment maps are repaired with a warning instead of
    raising. Passive nodes only count when ``tree`` is given.
    """
    gold = _normalize_gold(player.gold)
    equipment = _normalize_equipment(player.equipment)

    attrs = build_attribute_scaling_breakdown(player.attributes).contributions
    base_dps = BASE_DPS + attrs.base_dps
    max_hp = BASE_MAX_HP + attrs.max_hp
    max_mana = BASE_MAX_MANA + attrs.max_mana
    crit_chance = attrs.crit_chance
    dodge_chance = attrs.dodge_chance
    mana_regen = attrs.mana_regen
    health_regen = attrs.health_regen
    armor = 0.0
    block_chance = 0.0
    life_steal = 0.0
    attack_speed = BASE_ATTACK_SPEED
    projectile_speed = BASE_PROJECTILE_SPEED

    skills = player.skills or {}
    base_dps += skills.get("strength", 0) * SKILL_STRENGTH_DPS
    crit_chance += skills.get("precision", 0) * SKILL_PRECISION_CRIT
    dodge_chance += skills.get("agility", 0) * SKILL_AGILITY_DODGE
    armor += skills.get("resilience", 0) * SKILL_RESILIENCE_ARMOR

    gear, stones, passive = _source_totals(player, equipment, tree)
    totals = _merge(gear, stones, passive)

    dps = base_dps + totals.get("damage", 0.0)
    armor += totals.get("armor", 0.0)
    max_hp += totals.get("health", 0.0)
    max_mana += totals.get("mana", 0.0)
    crit_chance += totals.get("critChance", 0.0)
    dodge_chance += totals.get("dodgeChance", 0.0)
    block_chance += totals.get("blockChance", 0.0)
    life_steal += totals.get("lifeSteal", 0.0)
    attack_speed += totals.get("attackSpeed", 0.0)
    health_regen += totals.get("healthRegen", 0.0)
    mana_regen += totals.get("manaRegen", 0.0)

    granted = compute_attribute_contributions({name: totals.get(name, 0.0) for name in ATTRIBUTE_NAMES})
    base_dps += granted.base_dps
    dps += granted.base_dps
    max_hp += granted.max_hp
    max_mana += granted.max_mana
    crit_chance += granted.crit_chance
    dodge_chance += granted.dodge_chance
    mana_regen += granted.mana_regen
    health_regen += granted.health_regen

    if player.equipped is not None:
        dps += player.equipped.power
        for extra in player.equipped.extras:
            if extra.key == "hp":
                max_hp += extra.val
            elif extra.key == "dps":
                dps += extra.val
            elif extra.key == "critChance":
                crit_chance += extra.val
            elif extra.key == "dodgeChance":
                dodge_chance += extra.val
            elif extra.key == "lifeSteal":
                life_steal += extra.val
            elif extra.key == "armor":
                armor += extra.val
            elif extra.key == "projectileSpeed":
                projectile_speed += extra.val

    return replace(
        player,
        gold=gold,
        equipment=equipment,
        stones=list(player.stones),
        skills=dict(skills),
        base_dps=base_dps,
        dps=dps,
        max_hp=max_hp,
        hp=_clamp_pool(player.hp, max_hp, "hp"),
        max_mana=max_mana,
        mana=_clamp_pool(player.mana, max_mana, "mana"),
        armor=armor,
        crit_chance=_clamp(crit_chance, MAX_CRIT_CHANCE),
        dodge_chance=_clamp(dodge_chance, MAX_DODGE_CHANCE),
        block_chance=_clamp(block_chance, MAX_BLOCK_CHANCE),
        life_steal=_clamp(life_steal, MAX_LIFE_STEAL),
        health_regen=health_regen,
        mana_regen=mana_regen,
        attack_speed=attack_speed,
        projectile_speed=projectile_speed,
        calculated_stats=totals,
    )


def build_stat_breakdown(player: Player, tree: PassiveTreeDef | None = None) -> StatBreakdown:
    equipment = _normalize_equipment(player.equipment)
    gear, stones, passive = _source_totals(player, equipment, tree)
    return StatBreakdown(
        attributes=build_attribute_scaling_breakdown(player.attributes),
        equipment=gear,
        stones=stones,
        passive=passive,
        total=_merge(gear, stones, passive),
    )


def _clamp(value: float, upper: float) -> float:
    return max(0.0, min(upper, value))
