"""Resolution of a single player-versus-enemy combat exchange."""
from __future__ import annotations

import logging
import math
from dataclasses import replace
from types import MappingProxyType
from typing import Mapping

from idlerpg.core.rng import RandomSource
from idlerpg.domain.combat_models import CombatResult
from idlerpg.domain.entities import Enemy, Player

logger = logging.getLogger(__name__)

DAMAGE_VARIANCE = 0.15
CRIT_MULTIPLIER = 1.8
LIGHTNING_CRIT_BONUS = 0.05
MAX_PLAYER_DODGE = 0.95
ENEMY_LEVEL_DODGE = 0.002
MAX_ENEMY_LEVEL_DODGE = 0.08
REVIVE_HP_FRACTION = 0.6
MAX_DEATH_GOLD_PENALTY = 10
ARMOR_REDUCTION_PER_POINT = 0.01
MAX_ARMOR_REDUCTION = 0.8
VITALITY_REDUCTION_PER_POINT = 0.005
MAX_VITALITY_REDUCTION = 0.3
BERSERKER_HP_THRESHOLD = 0.3
BERSERKER_MULTIPLIER = 1.5
PRECISE_CHANCE = 0.15
PRECISE_MULTIPLIER = 1.3

LEGACY_CRIT_BY_RARITY: Mapping[str, float] = MappingProxyType(
    {"Magic": 0.03, "Rare": 0.06, "Unique": 0.10, "Legendary": 0.15}
)
LEGACY_DODGE_BY_RARITY: Mapping[str, float] = MappingProxyType(
    {"Magic": 0.02, "Rare": 0.04, "Unique": 0.07, "Legendary": 0.10}
)
ENEMY_BASE_DODGE: Mapping[str, float] = MappingProxyType({"melee": 0.02, "ranged": 0.05, "caster": 0.03})
ENEMY_BASE_DAMAGE: Mapping[str, float] = MappingProxyType({"melee": 0.9, "ranged": 0.75})

# damage type -> (damage multiplier, status chance, status)
ELEMENT_EFFECTS: Mapping[str, tuple[float, float, str]] = MappingProxyType(
    {
        "fire": (1.10, 0.15, "burning"),
        "ice": (1.0, 0.20, "frozen"),
        "lightning": (1.05, 0.10, "stunned"),
        "poison": (0.80, 0.25, "poisoned"),
    }
)


def calculate_damage_variance(damage: float, rng: RandomSource) -> int:
    """Floor of a uniform draw between 85% and 115% of ``damage``.

    Can reach zero for tiny inputs; callers floor hits at 1.
    """
    low = damage * (1 - DAMAGE_VARIANCE)
    high = damage * (1 + DAMAGE_VARIANCE)
    return math.floor(low + rng.random() * (high - low))


def enemy_dodge_chance(enemy: Enemy) -> float:
    base = ENEMY_BASE_DODGE.get(enemy.type, 0.02)
    return base + min(MAX_ENEMY_LEVEL_DODGE, enemy.level * ENEMY_LEVEL_DODGE)


def player_dodge_chance(player: Player) -> float:
    chance = player.dodge_chance + (player.skills or {}).get("agility", 0) * 0.01
    if player.equipped is not None:
        chance += LEGACY_DODGE_BY_RARITY.get(player.equipped.rarity, 0.0)
    return min(MAX_PLAYER_DODGE, chance)


def player_crit_chance(player: Player, damage_type: str) -> float:
    chance = player.crit_chance
    if player.equipped is not None:
        chance += LEGACY_CRIT_BY_RARITY.get(player.equipped.rarity, 0.0)
    if damage_type == "lightning":
        chance += LIGHTNING_CRIT_BONUS
    return chance


def player_damage_type(player: Player) -> str:
    """The weapon slot's element wins over the legacy weapon's."""
    weapon = player.equipment.get("weapon") if isinstance(player.equipment, Mapping) else None
    if weapon is not None and weapon.damage_type:
        return weapon.damage_type
    if player.equipped is not None:
        return player.equipped.element or "physical"
    return "physical"


def apply_elemental_effect(damage: int, damage_type: str, rng: RandomSource) -> tuple[int, str | None]:
    effect = ELEMENT_EFFECTS.get(damage_type)
    if effect is None:
        return damage, None
    multiplier, chance, status = effect
    if multiplier != 1.0:
        damage = math.floor(damage * multiplier)
    return damage, status if rng.random() < chance else None


def enemy_base_damage(enemy: Enemy) -> float:
    return max(0.5, ENEMY_BASE_DAMAGE.get(enemy.type, 1.0) + enemy.level * 0.5)


def mitigate_damage(damage: int, player: Player) -> int:
    """Apply armor, then vitality, reduction to an incoming hit.

    Each step floors; the result is never below 1.
    """
    armor_reduction = min(MAX_ARMOR_REDUCTION, max(0.0, player.armor) * ARMOR_REDUCTION_PER_POINT)
    damage = math.floor(damage * (1 - armor_reduction))
    vitality_reduction = min(MAX_VITALITY_REDUCTION, max(0, player.attributes.vitality) * VITALITY_REDUCTION_PER_POINT)
    damage = math.floor(damage * (1 - vitality_reduction))
    return max(1, damage)


def simulate_combat_tick(player: Player, enemy: Enemy, rng: RandomSource) -> CombatResult:
    """Resolve one player attack and the enemy's answer to it.

    Neither input is modified; the result carries updated copies. Random draws
    happen in a fixed order: enemy dodge, damage variance, crit, element proc,
    player dodge, block, precise strike, enemy damage variance.
    """
    damage_type = player_damage_type(player)
    player_hp = player.hp
    gold = player.gold
    enemy_hp = enemy.hp

    damage = 0
    enemy_damage = 0
    crit = False
    status_effect: str | None = None
    did_player_hit = True
    did_enemy_hit = False
    player_dodged = False
    player_blocked = False
    enemy_dodged = False
    enemy_defeated = False

    if rng.random() < enemy_dodge_chance(enemy):
        enemy_dodged = True
        did_player_hit = False
        message = f"{enemy.name} dodged player's attack!"
    else:
        damage = max(1, calculate_damage_variance(max(1, math.floor(player.dps)), rng))
        crit = rng.random() < player_crit_chance(player, damage_type)
        if crit:
            damage = math.floor(damage * CRIT_MULTIPLIER)
        damage, status_effect = apply_elemental_effect(damage, damage_type, rng)
        enemy_hp -= damage

        element_text = f" [{damage_type.upper()}]" if damage_type != "physical" else ""
        crit_text = " (CRITICAL!)" if crit else ""
        status_text = f" ({status_effect})" if status_effect else ""
        message = f"Player hits {enemy.name} for {damage}{element_text}{crit_text}{status_text}"

        if enemy_hp <= 0:
            enemy_defeated = True
            message = f"Player dealt final blow to {enemy.name}!"
        elif rng.random() < player_dodge_chance(player):
            player_dodged = True
            message += f". Player dodged {enemy.name}'s attack!"
        elif rng.random() < player.block_chance:
            player_blocked = True
            message += f". Player blocked {enemy.name}'s attack!"
        else:
            did_enemy_hit = True
            base_damage = enemy_base_damage(enemy)
            special_text = ""
            if enemy.special_ability == "berserker" and enemy_hp < enemy.max_hp * BERSERKER_HP_THRESHOLD:
                base_damage *= BERSERKER_MULTIPLIER
                special_text = " (BERSERKER RAGE!)"
            elif enemy.special_ability == "precise" and rng.random() < PRECISE_CHANCE:
                base_damage *= PRECISE_MULTIPLIER
                special_text = " (PRECISE STRIKE!)"
            enemy_damage = mitigate_damage(calculate_damage_variance(base_damage, rng), player)
            player_hp -= enemy_damage
            message += f". {enemy.name} hits back for {enemy_damage}"

            if player_hp <= 0:
                player_hp = max(1, math.floor(player.max_hp * REVIVE_HP_FRACTION))
                gold = max(0, gold - min(MAX_DEATH_GOLD_PENALTY, math.floor(player.level * 2)))
                message += ". Player was knocked out and revived!"
            message += special_text

    logger.debug("Combat tick: %s", message)
    return CombatResult(
        player=replace(player, hp=player_hp, gold=gold),
        enemy=replace(enemy, hp=enemy_hp, status_effects=list(enemy.status_effects)),
        enemy_defeated=enemy_defeated,
        message=message,
        did_player_hit=did_player_hit,
        did_enemy_hit=did_enemy_hit,
        player_dodged=player_dodged,
        player_blocked=player_blocked,
        enemy_dodged=enemy_dodged,
        crit=crit,
        damage=damage,
        enemy_damage=enemy_damage,
        damage_type=damage_type,
        status_effect=status_effect,
    )
