"""Combat domain models."""
from __future__ import annotations

from dataclasses import dataclass

from idlerpg.domain.entities import Enemy, Player


@dataclass(frozen=True, slots=True)
class CombatResult:
    """Snapshot of one combat tick; ``player`` and ``enemy`` are new objects."""

    player: Player
    enemy: Enemy
    enemy_defeated: bool
    message: str
    did_player_hit: bool = False
    did_enemy_hit: bool = False
    player_dodged: bool = False
    player_blocked: bool = False
    enemy_dodged: bool = False
    crit: bool = False
    damage: int = 0
    enemy_damage: int = 0
    damage_type: str = "physical"
    status_effect: str | None = None
