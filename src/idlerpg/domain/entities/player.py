"""Player aggregate model."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from idlerpg.core.types import StatMap

from .attributes import Attributes
from .equipment import Equipment
from .legacy_item import LegacyItem
from .passive_tree_state import PassiveTreeState
from .stone import Stone

BASE_DPS = 2.0
BASE_MAX_HP = 120.0
BASE_MAX_MANA = 50.0
BASE_ATTACK_SPEED = 1.0
BASE_PROJECTILE_SPEED = 1.0


@dataclass(slots=True)
class Player:
    """Player aggregate; every derived field is rebuilt by calculate_player_stats."""

    level: int = 1
    xp: int = 0
    next_level_xp: int = 100
    hp: float = BASE_MAX_HP
    max_hp: float = BASE_MAX_HP
    mana: float = BASE_MAX_MANA
    max_mana: float = BASE_MAX_MANA
    dps: float = BASE_DPS
    base_dps: float = BASE_DPS
    gold: float = 0
    skill_points: int = 0
    attribute_points: int = 0
    attributes: Attributes = field(default_factory=Attributes)
    equipment: Dict[str, Equipment] = field(default_factory=dict)
    stones: List[Stone] = field(default_factory=list)
    passive_tree: PassiveTreeState = field(default_factory=PassiveTreeState)
    equipped: LegacyItem | None = None
    skills: Dict[str, int] = field(default_factory=dict)
    calculated_stats: StatMap = field(default_factory=dict)

    # derived
    armor: float = 0.0
    crit_chance: float = 0.0
    dodge_chance: float = 0.0
    block_chance: float = 0.0
    life_steal: float = 0.0
    health_regen: float = 0.0
    mana_regen: float = 0.0
    attack_speed: float = BASE_ATTACK_SPEED
    projectile_speed: float = BASE_PROJECTILE_SPEED

    def find_stone(self, stone_id: str) -> Stone | None:
        for stone in self.stones:
            if stone.id == stone_id:
                return stone
        return None
