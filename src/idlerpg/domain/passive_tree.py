"""Passive tree evaluation and allocation rules."""
from __future__ import annotations

import math
from dataclasses import replace
from typing import List

from idlerpg.core.types import StatMap
from idlerpg.domain.defs import PassiveTreeDef, SkillModifier
from idlerpg.domain.entities import PassiveTreeState


def calculate_passive_tree_stats(tree: PassiveTreeDef, state: PassiveTreeState) -> StatMap:
    """Sum node stats scaled by rank over every allocated node.

    Node ids that are not part of ``tree`` contribute nothing, so a state
    saved against an older tree still evaluates.
    """
    totals: StatMap = {}
    for node_id, rank in state.allocated_nodes.items():
        if rank <= 0:
            continue
        node = tree.nodes.get(node_id)
        if node is None:
            continue
        for stat, value in node.stats.items():
            if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
                continue
            totals[stat] = totals.get(stat, 0.0) + value * rank
    return totals


def get_skill_modifiers_from_tree(tree: PassiveTreeDef, state: PassiveTreeState) -> List[SkillModifier]:
    modifiers: List[SkillModifier] = []
    for node_id, rank in state.allocated_nodes.items():
        if rank <= 0:
            continue
        node = tree.nodes.get(node_id)
        if node is None:
            continue
        for modifier in node.skill_modifiers:
            modifiers.append(replace(modifier, value=modifier.value * rank))
    return modifiers


def can_allocate_node(node_id: str, tree: PassiveTreeDef, state: PassiveTreeState) -> bool:
    node = tree.nodes.get(node_id)
    if node is None:
        return False
    if state.rank_of(node_id) >= node.max_rank:
        return False
    if state.available_points < node.cost:
        return False
    return all(state.rank_of(required_id) > 0 for required_id in node.requirements)


def allocate_node(node_id: str, tree: PassiveTreeDef, state: PassiveTreeState) -> PassiveTreeState:
    """Return a new state with one more rank in ``node_id``.

    The input state is returned unchanged when the node cannot be allocated.
    Ranks are never removed.
    """
    if not can_allocate_node(node_id, tree, state):
        return state
    node = tree.nodes[node_id]
    allocated = dict(state.allocated_nodes)
    allocated[node_id] = allocated.get(node_id, 0) + 1
    return PassiveTreeState(
        allocated_nodes=allocated,
        available_points=state.available_points - node.cost,
    )


def get_allocatable_nodes(tree: PassiveTreeDef, state: PassiveTreeState) -> List[str]:
    """Ids of every node that could be allocated right now, in tree order."""
    return [node_id for node_id in tree.nodes if can_allocate_node(node_id, tree, state)]
