"""Passive tree allocation for a player."""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List

from idlerpg.domain.defs import SkillModifier
from idlerpg.domain.entities import Player
from idlerpg.domain.passive_tree import (
    allocate_node,
    can_allocate_node,
    get_allocatable_nodes,
    get_skill_modifiers_from_tree,
)
from idlerpg.services.player_stats_service import PlayerStatsService


@dataclass(frozen=True, slots=True)
class NodeAllocationResult:
    success: bool
    message: str
    player: Player


class PassiveTreeService:
    """Allocate passive nodes and keep the player's stats in step."""

    def __init__(self, *, stats_service: PlayerStatsService) -> None:
        self._stats_service = stats_service

    def allocatable_nodes(self, player: Player) -> List[str]:
        return get_allocatable_nodes(self._stats_service.tree, player.passive_tree)

    def skill_modifiers(self, player: Player) -> List[SkillModifier]:
        return get_skill_modifiers_from_tree(self._stats_service.tree, player.passive_tree)

    def allocate(self, player: Player, node_id: str) -> NodeAllocationResult:
        tree = self._stats_service.tree
        node = tree.nodes.get(node_id)
        if node is None:
            return NodeAllocationResult(False, f"Unknown passive node '{node_id}'.", player)
        if not can_allocate_node(node_id, tree, player.passive_tree):
            return NodeAllocationResult(False, f"{node.name} cannot be allocated.", player)

        state = allocate_node(node_id, tree, player.passive_tree)
        updated = self._stats_service.recalculate(replace(player, passive_tree=state))
        rank = state.rank_of(node_id)
        return NodeAllocationResult(True, f"{node.name} allocated (rank {rank}/{node.max_rank}).", updated)

    def grant_points(self, player: Player, amount: int) -> NodeAllocationResult:
        if amount <= 0:
            return NodeAllocationResult(False, "Grant amount must be at least 1.", player)
        state = replace(player.passive_tree, available_points=player.passive_tree.available_points + amount)
        return NodeAllocationResult(True, f"Granted {amount} passive points.", replace(player, passive_tree=state))
