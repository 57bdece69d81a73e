"""Attribute allocation service (spends the player's unspent points)."""
from __future__ import annotations

from dataclasses import dataclass, replace

from idlerpg.core.types import ATTRIBUTE_NAMES
from idlerpg.domain.entities import Player
from idlerpg.services.player_stats_service import PlayerStatsService


@dataclass(frozen=True, slots=True)
class AttributeSpendResult:
    success: bool
    message: str
    player: Player
    available: int


class AttributeAllocationService:
    """Move attribute points into attributes and refresh derived stats."""

    def __init__(self, *, stats_service: PlayerStatsService) -> None:
        self._stats_service = stats_service

    def spend_attribute_point(self, player: Player, attribute: str, amount: int = 1) -> AttributeSpendResult:
        if attribute not in ATTRIBUTE_NAMES:
            return AttributeSpendResult(
                success=False,
                message="Invalid attribute selection.",
                player=player,
                available=player.attribute_points,
            )
        if amount <= 0:
            return AttributeSpendResult(
                success=False,
                message="Amount must be at least 1.",
                player=player,
                available=player.attribute_points,
            )
        if player.attribute_points < amount:
            return AttributeSpendResult(
                success=False,
                message="Not enough attribute points available.",
                player=player,
                available=player.attribute_points,
            )

        new_value = getattr(player.attributes, attribute) + amount
        updated = replace(
            player,
            attributes=replace(player.attributes, **{attribute: new_value}),
            attribute_points=player.attribute_points - amount,
        )
        updated = self._stats_service.recalculate(updated)
        return AttributeSpendResult(
            success=True,
            message=f"{attribute.title()} increased to {new_value}.",
            player=updated,
            available=updated.attribute_points,
        )

    def grant_attribute_points(self, player: Player, amount: int) -> AttributeSpendResult:
        if amount <= 0:
            return AttributeSpendResult(
                success=False,
                message="Grant amount must be at least 1.",
                player=player,
                available=player.attribute_points,
            )
        updated = replace(player, attribute_points=player.attribute_points + amount)
        return AttributeSpendResult(
            success=True,
            message=f"Granted {amount} attribute points.",
            player=updated,
            available=updated.attribute_points,
        )
