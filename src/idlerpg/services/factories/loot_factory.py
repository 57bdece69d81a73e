"""Factory for the legacy single-weapon loot drop."""
from __future__ import annotations

import logging
import math
from types import MappingProxyType
from typing import List, Mapping

from idlerpg.core.rng import RandomSource, random_pick
from idlerpg.domain.entities import LegacyExtra, LegacyItem

from .id_factory import make_instance_id

logger = logging.getLogger(__name__)

ELEMENTS: tuple[str, ...] = ("physical", "fire", "ice", "lightning", "poison")

_SWORDS = ("Sword", "Axe", "Mace", "Dagger", "Hammer")
_BOWS = ("Bow", "Crossbow", "Longbow", "Shortbow", "Composite Bow")

WEAPON_NAMES: Mapping[str, Mapping[str, tuple[str, ...]]] = MappingProxyType(
    {
        "melee": {
            "physical": _SWORDS,
            "fire": ("Flame Blade", "Inferno Sword", "Burning Axe", "Phoenix Dagger", "Molten Hammer"),
            "ice": ("Frost Sword", "Ice Blade", "Frozen Axe", "Glacial Dagger", "Winter Hammer"),
            "lightning": ("Thunder Sword", "Storm Blade", "Lightning Axe", "Spark Dagger", "Volt Hammer"),
            "poison": ("Venom Blade", "Toxic Sword", "Poison Axe", "Serpent Dagger", "Plague Hammer"),
        },
        "ranged": {
            "physical": _BOWS,
            "fire": ("Flame Bow", "Inferno Crossbow", "Phoenix Longbow", "Burning Shortbow", "Molten Bow"),
            "ice": ("Frost Bow", "Ice Crossbow", "Glacial Longbow", "Winter Shortbow", "Frozen Bow"),
            "lightning": ("Storm Bow", "Thunder Crossbow", "Lightning Longbow", "Spark Shortbow", "Volt Bow"),
            "poison": ("Venom Bow", "Toxic Crossbow", "Serpent Longbow", "Poison Shortbow", "Plague Bow"),
        },
    }
)
LEGENDARY_PREFIXES: tuple[str, ...] = ("Godslayer", "Worldbreaker", "Eternal", "Divine", "Mythical")

ELEMENT_CHANCE: Mapping[str, float] = MappingProxyType(
    {"Magic": 0.3, "Rare": 0.5, "Unique": 0.7, "Legendary": 0.9}
)
POWER_MULTIPLIER: Mapping[str, float] = MappingProxyType(
    {"Common": 1.0, "Magic": 1.3, "Rare": 1.8, "Unique": 2.5, "Legendary": 4.0}
)


def choose_legacy_rarity(level: int, from_boss: bool, rng: RandomSource) -> str:
    roll = rng.random()
    bonus = min(0.05, level * 0.001)
    if roll > 0.999 - bonus:
        rarity = "Legendary"
    elif roll > 0.995 - bonus:
        rarity = "Unique"
    elif roll > 0.92 - bonus:
        rarity = "Rare"
    elif roll > 0.6 - bonus:
        rarity = "Magic"
    else:
        rarity = "Common"

    if from_boss:
        boss_roll = rng.random()
        if boss_roll > 0.7:
            rarity = "Legendary"
        elif boss_roll > 0.4:
            rarity = "Unique"
        elif boss_roll > 0.1:
            rarity = "Rare"
        else:
            rarity = "Magic"
    return rarity


def choose_element(rarity: str, rng: RandomSource) -> str:
    if rarity == "Common":
        return "physical"
    if rng.random() < ELEMENT_CHANCE.get(rarity, 0.0):
        return random_pick(rng, ELEMENTS[1:])
    return "physical"


def legacy_weapon_name(weapon_type: str, element: str, rarity: str, rng: RandomSource) -> str:
    names = WEAPON_NAMES.get(weapon_type, {}).get(element, _SWORDS)
    name = random_pick(rng, names)
    if rarity == "Legendary":
        return f"{random_pick(rng, LEGENDARY_PREFIXES)} {name}"
    return name


def _int_between(rng: RandomSource, low: int, spread: int) -> int:
    return low + math.floor(rng.random() * spread)


def _float_between(rng: RandomSource, low: float, spread: float) -> float:
    return low + rng.random() * spread


def make_extras(rarity: str, element: str, rng: RandomSource) -> tuple[LegacyExtra, ...]:
    """Roll the bonus list for a legacy weapon; Common weapons have none."""
    elemental = element != "physical"
    extras: List[LegacyExtra] = []
    if rarity == "Magic":
        extras.append(LegacyExtra("hp", _int_between(rng, 10, 10)))
        if elemental:
            extras.append(LegacyExtra("elementalDamage", _int_between(rng, 2, 3)))
    elif rarity == "Rare":
        extras.append(LegacyExtra("hp", _int_between(rng, 15, 20)))
        extras.append(LegacyExtra("dps", _int_between(rng, 1, 3)))
        if elemental:
            extras.append(LegacyExtra("elementalDamage", _int_between(rng, 3, 5)))
    elif rarity == "Unique":
        extras.append(LegacyExtra("hp", _int_between(rng, 30, 40)))
        extras.append(LegacyExtra("dps", _int_between(rng, 3, 5)))
        extras.append(LegacyExtra("projectileSpeed", _float_between(rng, 0.5, 1.5)))
        if elemental:
            extras.append(LegacyExtra("elementalDamage", _int_between(rng, 5, 8)))
        if rng.random() < 0.3:
            extras.append(LegacyExtra("critChance", _float_between(rng, 0.02, 0.03)))
    elif rarity == "Legendary":
        extras.append(LegacyExtra("hp", _int_between(rng, 50, 60)))
        extras.append(LegacyExtra("dps", _int_between(rng, 8, 12)))
        extras.append(LegacyExtra("projectileSpeed", _float_between(rng, 1.0, 2.0)))
        extras.append(LegacyExtra("critChance", _float_between(rng, 0.05, 0.05)))
        extras.append(LegacyExtra("dodgeChance", _float_between(rng, 0.03, 0.04)))
        if elemental:
            extras.append(LegacyExtra("elementalDamage", _int_between(rng, 10, 15)))
        if rng.random() < 0.5:
            extras.append(LegacyExtra("lifeSteal", _float_between(rng, 0.05, 0.1)))
        if rng.random() < 0.3:
            extras.append(LegacyExtra("armor", _int_between(rng, 2, 5)))
    return tuple(extras)


def generate_loot(level: int, from_boss: bool = False, *, rng: RandomSource) -> LegacyItem:
    """Roll a legacy weapon drop. Bosses never drop Common weapons."""
    rarity = choose_legacy_rarity(level, from_boss, rng)
    weapon_type = "ranged" if rng.random() > 0.6 else "melee"
    element = choose_element(rarity, rng)
    weapon_name = legacy_weapon_name(weapon_type, element, rarity, rng)

    power_base = max(1, math.floor(level * (1 + rng.random() * 1.6)))
    multiplier = POWER_MULTIPLIER.get(rarity, 1.0)
    power = max(1, math.floor(power_base * multiplier))
    extras = make_extras(rarity, element, rng)

    element_text = f" [{element.upper()}]" if element != "physical" else ""
    item = LegacyItem(
        id=make_instance_id("it", rng),
        name=f"{rarity} {weapon_name}{element_text} (L{level})",
        rarity=rarity,
        power=power,
        type=weapon_type,
        element=element,
        extras=extras,
        value=max(1, math.floor(level * power * (multiplier / 1.5))),
    )
    logger.debug("Generated legacy loot %s (power %d)", item.name, item.power)
    return item
