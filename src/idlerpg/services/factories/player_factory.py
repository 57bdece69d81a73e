"""Factories for new players and for players loaded from saved dictionaries."""
from __future__ import annotations

import logging
import math
from typing import Dict, List, Mapping

from idlerpg.core.rng import RNG, RandomSource
from idlerpg.core.types import ATTRIBUTE_NAMES, EQUIPMENT_SLOTS
from idlerpg.domain.entities import (
    Affix,
    Attributes,
    Equipment,
    LegacyExtra,
    LegacyItem,
    PassiveTreeState,
    Player,
    Stone,
)
from idlerpg.domain.sockets import get_max_sockets
from idlerpg.services.errors import FactoryError

from .id_factory import make_instance_id

logger = logging.getLogger(__name__)

STARTING_NODE = "start"


def create_default_player() -> Player:
    """A level 1 player at baseline attributes with the tree origin allocated."""
    return Player(passive_tree=PassiveTreeState(allocated_nodes={STARTING_NODE: 1}, available_points=0))


def _number(value: object, default: float = 0) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        return default
    return value


def _int(value: object, default: int = 0) -> int:
    return int(_number(value, default))


def _stat_map(raw: object) -> Dict[str, float]:
    if not isinstance(raw, Mapping):
        return {}
    stats: Dict[str, float] = {}
    for stat, value in raw.items():
        if stat == "resistance" and isinstance(value, Mapping):
            stats[stat] = dict(value)  # type: ignore[assignment]
        elif isinstance(value, (int, float)) and not isinstance(value, bool):
            stats[stat] = value
    return stats


def _affixes(raw: object) -> tuple[Affix, ...]:
    if not isinstance(raw, list):
        return ()
    affixes: List[Affix] = []
    for entry in raw:
        if not isinstance(entry, Mapping) or not isinstance(entry.get("stat"), str):
            continue
        affixes.append(
            Affix(
                name=str(entry.get("name", "")),
                stat=entry["stat"],
                value=_number(entry.get("value")),
                tier=_int(entry.get("tier"), 1),
            )
        )
    return tuple(affixes)


def _equipment(slot: str, raw: Mapping[str, object]) -> Equipment:
    rarity = str(raw.get("rarity", "Common"))
    raw_sockets = raw.get("sockets")
    if isinstance(raw_sockets, list):
        sockets = tuple(stone_id if isinstance(stone_id, str) else None for stone_id in raw_sockets)
    else:
        sockets = (None,) * get_max_sockets(rarity)
    requirements = raw.get("requirements")
    return Equipment(
        id=str(raw.get("id", f"eq_{slot}")),
        name=str(raw.get("name", slot.title())),
        type=str(raw.get("type", slot)),
        slot=str(raw.get("slot", slot)),
        category=str(raw.get("category", "armor")),
        rarity=rarity,
        level=_int(raw.get("level"), 1),
        base_stats=_stat_map(raw.get("baseStats")),
        affixes=_affixes(raw.get("affixes")),
        damage_type=raw.get("damageType") if isinstance(raw.get("damageType"), str) else None,
        requirements={k: _int(v) for k, v in requirements.items()} if isinstance(requirements, Mapping) else {},
        sockets=sockets,
        value=max(1, _int(raw.get("value"), 1)),
    )


def _stone(raw: Mapping[str, object], stone_id: str) -> Stone:
    socket_types = raw.get("socketTypes")
    return Stone(
        id=stone_id,
        name=str(raw.get("name", "Stone")),
        type=str(raw.get("type", "")),
        rarity=str(raw.get("rarity", "Common")),
        level=_int(raw.get("level"), 1),
        base_stats=_stat_map(raw.get("baseStats")),
        affixes=_affixes(raw.get("affixes")),
        socket_types=tuple(s for s in socket_types if isinstance(s, str)) if isinstance(socket_types, list) else (),
        value=max(1, _int(raw.get("value"), 1)),
    )


def _stones(raw: object, rng: RandomSource) -> List[Stone]:
    """Parse stones, giving every duplicate id after the first a fresh one."""
    if not isinstance(raw, list):
        return []
    stones: List[Stone] = []
    seen: set[str] = set()
    for entry in raw:
        if not isinstance(entry, Mapping):
            continue
        stone_id = entry.get("id")
        if not isinstance(stone_id, str) or stone_id in seen:
            new_id = make_instance_id("stone", rng)
            while new_id in seen:
                new_id = make_instance_id("stone", rng)
            logger.warning("Reassigned stone id %r to %r", stone_id, new_id)
            stone_id = new_id
        seen.add(stone_id)
        stones.append(_stone(entry, stone_id))
    return stones


def _legacy_item(raw: object) -> LegacyItem | None:
    if not isinstance(raw, Mapping):
        return None
    extras = raw.get("extras")
    return LegacyItem(
        id=str(raw.get("id", "legacy")),
        name=str(raw.get("name", "Weapon")),
        rarity=str(raw.get("rarity", "Common")),
        power=_int(raw.get("power")),
        type=str(raw.get("type", "melee")),
        element=str(raw.get("element", "physical")),
        extras=tuple(
            LegacyExtra(key=str(extra["key"]), val=_number(extra.get("val")))
            for extra in (extras if isinstance(extras, list) else [])
            if isinstance(extra, Mapping) and "key" in extra
        ),
        value=max(1, _int(raw.get("value"), 1)),
    )


def _passive_tree(raw: object) -> PassiveTreeState:
    if not isinstance(raw, Mapping):
        return PassiveTreeState(allocated_nodes={STARTING_NODE: 1})
    allocated = raw.get("allocatedNodes")
    return PassiveTreeState(
        allocated_nodes={
            node_id: _int(rank) for node_id, rank in allocated.items() if _int(rank) > 0
        }
        if isinstance(allocated, Mapping)
        else {},
        available_points=max(0, _int(raw.get("availablePoints"))),
    )


def player_from_dict(raw: Mapping[str, object], rng: RandomSource | None = None) -> Player:
    """Migrate a saved camelCase player dictionary into a typed Player.

    Unknown or malformed fields fall back to defaults with a warning; only a
    payload that is not a mapping at all is rejected. The result still needs a
    pass through ``calculate_player_stats`` before use.
    """
    if not isinstance(raw, Mapping):
        raise FactoryError("Player payload must be a mapping.")
    rng = rng or RNG()
    defaults = create_default_player()

    raw_attributes = raw.get("attributes")
    attributes = Attributes()
    if isinstance(raw_attributes, Mapping):
        for name in ATTRIBUTE_NAMES:
            setattr(attributes, name, _int(raw_attributes.get(name), getattr(attributes, name)))

    equipment: Dict[str, Equipment] = {}
    raw_equipment = raw.get("equipment")
    if isinstance(raw_equipment, Mapping):
        for slot, item in raw_equipment.items():
            if item is None:
                continue
            if slot not in EQUIPMENT_SLOTS or not isinstance(item, Mapping):
                logger.warning("Dropping malformed equipment in slot %r", slot)
                continue
            equipment[slot] = _equipment(slot, item)
    elif raw_equipment is not None:
        logger.warning("Player equipment was invalid, resetting to empty")

    gold = _number(raw.get("gold", 0), math.nan)
    if math.isnan(gold):
        logger.warning("Player gold was invalid (%r), resetting to 0", raw.get("gold"))
        gold = 0

    skills = raw.get("skills")
    return Player(
        level=max(1, _int(raw.get("level"), defaults.level)),
        xp=_int(raw.get("xp")),
        next_level_xp=_int(raw.get("nextLevelXp"), defaults.next_level_xp),
        hp=_number(raw.get("hp"), defaults.hp),
        max_hp=_number(raw.get("maxHp"), defaults.max_hp),
        mana=_number(raw.get("mana"), defaults.mana),
        max_mana=_number(raw.get("maxMana"), defaults.max_mana),
        gold=gold,
        skill_points=_int(raw.get("skillPoints")),
        attribute_points=_int(raw.get("attributePoints")),
        attributes=attributes,
        equipment=equipment,
        stones=_stones(raw.get("stones"), rng),
        passive_tree=_passive_tree(raw.get("passiveTreeState")),
        equipped=_legacy_item(raw.get("equipped")),
        skills={k: _int(v) for k, v in skills.items()} if isinstance(skills, Mapping) else {},
    )
