"""Loot drops bound to the loaded content repositories."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, replace
from typing import List

from idlerpg.core.rng import RNG, RandomSource
from idlerpg.data.repositories import (
    AffixesRepository,
    EnemyTypesRepository,
    EquipmentBasesRepository,
    RaritiesRepository,
    StonesRepository,
)
from idlerpg.domain.entities import Enemy, Equipment, LegacyItem, Player, Stone
from idlerpg.services.factories import (
    create_enemy_for_level,
    generate_equipment,
    generate_loot,
    generate_stone,
    get_rarity_color,
    get_stone_color,
)

logger = logging.getLogger(__name__)

BOSS_XP_PER_LEVEL = 12
XP_PER_LEVEL = 4
NEXT_LEVEL_XP_GROWTH = 1.25


@dataclass(frozen=True, slots=True)
class VictoryReward:
    player: Player
    loot: LegacyItem
    xp: int
    messages: List[str] = field(default_factory=list)


def xp_for_enemy(enemy: Enemy) -> int:
    if enemy.is_boss:
        return math.floor(enemy.level * BOSS_XP_PER_LEVEL)
    return max(1, math.floor(enemy.level * XP_PER_LEVEL))


def apply_experience(player: Player, xp: int) -> tuple[Player, List[str]]:
    """Add ``xp`` and run every level up it pays for; each one refills hp."""
    messages: List[str] = []
    level = player.level
    current = player.xp + xp
    next_level_xp = player.next_level_xp
    skill_points = player.skill_points
    hp = player.hp
    while next_level_xp > 0 and current >= next_level_xp:
        current -= next_level_xp
        level += 1
        skill_points += 1
        hp = player.max_hp
        next_level_xp = math.floor(next_level_xp * NEXT_LEVEL_XP_GROWTH)
        messages.append(f"Leveled up! Now level {level}")
    updated = replace(
        player,
        level=level,
        xp=current,
        next_level_xp=next_level_xp,
        skill_points=skill_points,
        hp=hp,
    )
    return updated, messages


class LootService:
    """Roll equipment, stones, legacy weapons and enemies from content."""

    def __init__(
        self,
        *,
        bases_repo: EquipmentBasesRepository,
        affixes_repo: AffixesRepository,
        rarities_repo: RaritiesRepository,
        stones_repo: StonesRepository,
        stone_rarities_repo: RaritiesRepository,
        enemy_types_repo: EnemyTypesRepository,
        rng: RandomSource | None = None,
    ) -> None:
        self._bases_repo = bases_repo
        self._affixes_repo = affixes_repo
        self._rarities_repo = rarities_repo
        self._stones_repo = stones_repo
        self._stone_rarities_repo = stone_rarities_repo
        self._enemy_types_repo = enemy_types_repo
        self._rng = rng or RNG()

    def roll_equipment(self, level: int, from_boss: bool = False) -> Equipment:
        return generate_equipment(
            level,
            from_boss,
            bases_repo=self._bases_repo,
            affixes_repo=self._affixes_repo,
            rarities_repo=self._rarities_repo,
            rng=self._rng,
        )

    def roll_stone(self, level: int, from_boss: bool = False) -> Stone:
        return generate_stone(
            level,
            from_boss,
            stones_repo=self._stones_repo,
            affixes_repo=self._affixes_repo,
            stone_rarities_repo=self._stone_rarities_repo,
            rng=self._rng,
        )

    def roll_legacy_weapon(self, level: int, from_boss: bool = False) -> LegacyItem:
        return generate_loot(level, from_boss, rng=self._rng)

    def award_victory(self, player: Player, enemy: Enemy) -> VictoryReward:
        """Drop a legacy weapon for a defeated enemy and pay out its gold and xp."""
        loot = self.roll_legacy_weapon(enemy.level, enemy.is_boss)
        if enemy.is_boss:
            messages = [f"BOSS DEFEATED! Epic Loot: {loot.name}"]
        else:
            messages = [f"Enemy defeated! Loot: {loot.name}"]
        xp = xp_for_enemy(enemy)
        updated, level_messages = apply_experience(replace(player, gold=player.gold + loot.value), xp)
        messages.extend(level_messages)
        logger.info("Victory over %s: %d xp, %s", enemy.name, xp, loot.name)
        return VictoryReward(player=updated, loot=loot, xp=xp, messages=messages)

    def spawn_enemy(self, level: int, kind: str | None = None) -> Enemy:
        return create_enemy_for_level(level, kind, enemy_types_repo=self._enemy_types_repo, rng=self._rng)

    def rarity_color(self, rarity: str) -> str:
        return get_rarity_color(rarity, self._rarities_repo)

    def stone_color(self, rarity: str) -> str:
        return get_stone_color(rarity, self._stone_rarities_repo)
