"""Factory for rolling multi-slot equipment drops."""
from __future__ import annotations

import logging
import math
from types import MappingProxyType
from typing import Iterable, Mapping, Sequence

from idlerpg.core.rng import RandomSource, random_pick
from idlerpg.core.types import RARITIES, StatMap
from idlerpg.data.repositories import AffixesRepository, EquipmentBasesRepository, RaritiesRepository
from idlerpg.domain.defs import DEFAULT_RARITY_COLOR, EquipmentBaseDef
from idlerpg.domain.entities import Affix, Equipment, LegacyExtra, LegacyItem
from idlerpg.domain.sockets import empty_sockets
from idlerpg.services.affix_roller import EQUIPMENT_AFFIX_RULES, roll_affixes
from idlerpg.services.errors import FactoryError

from .id_factory import make_instance_id

logger = logging.getLogger(__name__)

BASE_STAT_LEVEL_SCALING = 0.1

ELEMENT_PREFIXES: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "fire": ("Burning", "Flaming", "Infernal", "Phoenix"),
        "ice": ("Frozen", "Glacial", "Frost", "Winter"),
        "lightning": ("Shocking", "Storm", "Thunder", "Volt"),
        "poison": ("Venomous", "Toxic", "Plague", "Serpent"),
    }
)

BASE_VALUE_WEIGHTS: Mapping[str, float] = MappingProxyType({"damage": 5, "armor": 3, "health": 0.5})
AFFIX_VALUE_WEIGHTS: Mapping[str, float] = MappingProxyType(
    {
        "damage": 5,
        "armor": 3,
        "health": 0.5,
        "mana": 0.3,
        "critChance": 100,
        "dodgeChance": 80,
        "attackSpeed": 20,
        "strength": 2,
        "dexterity": 2,
        "intelligence": 2,
        "vitality": 2,
        "luck": 3,
    }
)

_RANGED_WEAPON_TYPES = {"bow", "crossbow"}

LEGACY_EXTRA_KEYS: Mapping[str, str] = MappingProxyType(
    {
        "health": "hp",
        "critChance": "critChance",
        "dodgeChance": "dodgeChance",
        "lifeSteal": "lifeSteal",
        "armor": "armor",
    }
)


def rarity_chances(level: int, from_boss: bool) -> list[tuple[str, float]]:
    """Per-rarity drop probabilities in Common..Legendary order."""
    if from_boss:
        chances = (
            max(0.0, 0.1 - level * 0.01),
            max(0.0, 0.3 - level * 0.015),
            max(0.2, 0.4 - level * 0.01),
            min(0.3, 0.15 + level * 0.01),
            min(0.2, level * 0.005),
        )
    else:
        chances = (
            max(0.3, 0.7 - level * 0.02),
            max(0.2, 0.25 - level * 0.005),
            min(0.3, level * 0.01),
            min(0.15, level * 0.003),
            min(0.05, level * 0.001),
        )
    return list(zip(RARITIES, chances))


def choose_rarity(level: int, from_boss: bool, rng: RandomSource) -> str:
    draw = rng.random()
    cumulative = 0.0
    for rarity, chance in rarity_chances(level, from_boss):
        cumulative += chance
        if draw <= cumulative:
            return rarity
    return "Common"


def category_weights(level: int) -> tuple[float, float]:
    """Weapon and armor chances; accessories take the remainder."""
    return max(0.3, 0.6 - level * 0.01), min(0.5, 0.3 + level * 0.008)


def choose_category(level: int, rng: RandomSource) -> str:
    weapon_chance, armor_chance = category_weights(level)
    draw = rng.random()
    if draw < weapon_chance:
        return "weapon"
    if draw < weapon_chance + armor_chance:
        return "armor"
    return "accessory"


def choose_damage_type(base: EquipmentBaseDef, elemental_chance: float, rng: RandomSource) -> str:
    elemental = [damage_type for damage_type in base.damage_types if damage_type != "physical"]
    if rng.random() < elemental_chance and len(base.damage_types) > 1 and elemental:
        return random_pick(rng, elemental)
    return "physical"


def scale_base_stats(base_stats: Mapping[str, object], multiplier: float) -> StatMap:
    """Scale numeric base stats, leaving the resistance sub-map untouched."""
    scaled: StatMap = {}
    for stat, value in base_stats.items():
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            scaled[stat] = round(value * multiplier, 2)
        else:
            scaled[stat] = value  # type: ignore[assignment]
    return scaled


def build_equipment_name(
    base_name: str,
    rarity: str,
    level: int,
    damage_type: str | None,
    affixes: Sequence[Affix],
    rng: RandomSource,
) -> str:
    name = base_name
    element_text = ""
    if damage_type and damage_type != "physical":
        prefixes = ELEMENT_PREFIXES.get(damage_type, ())
        if prefixes:
            name = f"{random_pick(rng, prefixes)} {name}"
        element_text = f" [{damage_type.upper()}]"
    if affixes and rarity != "Common":
        strongest = affixes[0]
        for affix in affixes[1:]:
            if affix.tier > strongest.tier:
                strongest = affix
        name = f"{name} {strongest.name}"
    return f"{rarity} {name}{element_text} (L{level})"


def weighted_value(
    base_stats: Mapping[str, object],
    affixes: Iterable[Affix],
    base_weights: Mapping[str, float],
    affix_weights: Mapping[str, float],
) -> float:
    """Weighted stat worth before level and rarity scaling; unknown affix stats weigh 1."""
    total = 0.0
    for stat, weight in base_weights.items():
        value = base_stats.get(stat)
        if isinstance(value, (int, float)):
            total += value * weight
    for affix in affixes:
        total += affix.value * affix_weights.get(affix.stat, 1)
    return total


def calculate_equipment_value(
    base_stats: Mapping[str, object],
    affixes: Iterable[Affix],
    stat_multiplier: float,
    level: int,
) -> int:
    total = weighted_value(base_stats, affixes, BASE_VALUE_WEIGHTS, AFFIX_VALUE_WEIGHTS)
    return max(1, math.floor(total * level * stat_multiplier))


def generate_equipment(
    level: int,
    from_boss: bool = False,
    *,
    bases_repo: EquipmentBasesRepository,
    affixes_repo: AffixesRepository,
    rarities_repo: RaritiesRepository,
    rng: RandomSource,
) -> Equipment:
    """Roll a complete piece of equipment for a drop at ``level``."""
    rarity_id = choose_rarity(level, from_boss, rng)
    rarity = rarities_repo.resolve(rarity_id)
    category = choose_category(level, rng)
    bases = bases_repo.by_category(category)
    if not bases:
        raise FactoryError(f"No equipment bases defined for category '{category}'.")
    base = random_pick(rng, bases)

    damage_type = None
    if category == "weapon":
        damage_type = choose_damage_type(base, rarity.elemental_chance, rng)

    multiplier = (1 + (level - 1) * BASE_STAT_LEVEL_SCALING) * rarity.stat_multiplier
    base_stats = scale_base_stats(base.base_stats, multiplier)
    affixes = roll_affixes(affixes_repo.pool(category), level, rarity, rng, EQUIPMENT_AFFIX_RULES)
    name = build_equipment_name(base.name, rarity_id, level, damage_type, affixes, rng)

    equipment = Equipment(
        id=make_instance_id("eq", rng),
        name=name,
        type=base.id,
        slot=base.slot,
        category=category,
        rarity=rarity_id,
        level=level,
        base_stats=base_stats,
        affixes=affixes,
        damage_type=damage_type,
        requirements=dict(base.requirements),
        sockets=empty_sockets(rarity_id),
        value=calculate_equipment_value(base_stats, affixes, rarity.stat_multiplier, level),
    )
    logger.debug("Generated %s (value %d)", equipment.name, equipment.value)
    return equipment


def to_legacy_item(equipment: Equipment) -> LegacyItem:
    """Flatten multi-slot equipment into the old single-weapon shape.

    Never raises and never modifies ``equipment``; missing stats simply
    produce no extras.
    """
    stats: StatMap = {}
    for source in (equipment.base_stats, {affix.stat: affix.value for affix in equipment.affixes}):
        for stat, value in source.items():
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                stats[stat] = stats.get(stat, 0.0) + value

    damage = stats.get("damage", 0.0)
    power = max(1, math.floor(damage)) if math.isfinite(damage) else 1
    extras = tuple(
        LegacyExtra(key=legacy_key, val=stats[stat])
        for stat, legacy_key in LEGACY_EXTRA_KEYS.items()
        if stats.get(stat)
    )
    return LegacyItem(
        id=equipment.id,
        name=equipment.name,
        rarity=equipment.rarity,
        power=power,
        type="ranged" if equipment.type in _RANGED_WEAPON_TYPES else "melee",
        element=equipment.damage_type or "physical",
        extras=extras,
        value=equipment.value,
    )


def get_rarity_color(rarity: str, rarities_repo: RaritiesRepository) -> str:
    definition = rarities_repo.find(rarity)
    return definition.color if definition is not None else DEFAULT_RARITY_COLOR
