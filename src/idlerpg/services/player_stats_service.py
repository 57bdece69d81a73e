"""Stat recalculation bound to the loaded passive tree."""
from __future__ import annotations

from idlerpg.data.repositories import PassiveTreeRepository
from idlerpg.domain.defs import PassiveTreeDef
from idlerpg.domain.entities import Player
from idlerpg.domain.stat_aggregation import StatBreakdown, build_stat_breakdown, calculate_player_stats


class PlayerStatsService:
    """Run the aggregation pipeline with the passive tree from content."""

    def __init__(self, *, passive_tree_repo: PassiveTreeRepository) -> None:
        self._passive_tree_repo = passive_tree_repo

    @property
    def tree(self) -> PassiveTreeDef:
        return self._passive_tree_repo.tree()

    def recalculate(self, player: Player) -> Player:
        return calculate_player_stats(player, self.tree)

    def build_breakdown(self, player: Player) -> StatBreakdown:
        return build_stat_breakdown(player, self.tree)
