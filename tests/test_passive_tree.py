from __future__ import annotations

from idlerpg.domain.defs import PassiveNodeDef, PassiveTreeDef, SkillModifier
from idlerpg.domain.entities import PassiveTreeState
from idlerpg.domain.passive_tree import (
    allocate_node,
    calculate_passive_tree_stats,
    can_allocate_node,
    get_allocatable_nodes,
    get_skill_modifiers_from_tree,
)
from tests.helpers.content import passive_tree_repo

TREE = PassiveTreeDef(
    nodes={
        "start": PassiveNodeDef(id="start", name="Origin", type="travel", cost=0),
        "might": PassiveNodeDef(
            id="might",
            name="Might",
            type="small",
            requirements=("start",),
            stats={"damage": 2.0, "health": 10.0},
            max_rank=3,
        ),
        "focus": PassiveNodeDef(
            id="focus",
            name="Focus",
            type="notable",
            requirements=("might",),
            stats={"critChance": 0.05},
            skill_modifiers=(SkillModifier(skill_id="fireball", property="damage", value=0.1),),
            cost=2,
        ),
    }
)


def test_stats_scale_with_rank() -> None:
    state = PassiveTreeState(allocated_nodes={"start": 1, "might": 3, "focus": 1})
    assert calculate_passive_tree_stats(TREE, state) == {"damage": 6.0, "health": 30.0, "critChance": 0.05}


def test_unknown_and_zero_rank_nodes_contribute_nothing() -> None:
    state = PassiveTreeState(allocated_nodes={"ghost": 2, "might": 0})
    assert calculate_passive_tree_stats(TREE, state) == {}


def test_flag_and_non_finite_node_stats_are_ignored() -> None:
    tree = PassiveTreeDef(
        nodes={
            "odd": PassiveNodeDef(
                id="odd",
                name="Odd",
                type="small",
                stats={"damage": True, "health": float("nan"), "armor": 4.0},  # type: ignore[dict-item]
            )
        },
        starting_node="odd",
    )
    state = PassiveTreeState(allocated_nodes={"odd": 1})
    assert calculate_passive_tree_stats(tree, state) == {"armor": 4.0}


def test_skill_modifiers_multiply_by_rank() -> None:
    tree = PassiveTreeDef(
        nodes={
            "focus": PassiveNodeDef(
                id="focus",
                name="Focus",
                type="small",
                skill_modifiers=(SkillModifier(skill_id="fireball", property="damage", value=0.1),),
                max_rank=2,
            )
        },
        starting_node="focus",
    )
    (modifier,) = get_skill_modifiers_from_tree(tree, PassiveTreeState(allocated_nodes={"focus": 2}))
    assert modifier.value == 0.2
    assert modifier.skill_id == "fireball"


def test_allocation_needs_requirements_and_points() -> None:
    state = PassiveTreeState(allocated_nodes={"start": 1}, available_points=1)
    assert can_allocate_node("might", TREE, state)
    assert not can_allocate_node("focus", TREE, state)
    assert not can_allocate_node("missing", TREE, state)

    broke = PassiveTreeState(allocated_nodes={"start": 1}, available_points=0)
    assert not can_allocate_node("might", TREE, broke)


def test_allocate_spends_cost_and_is_pure() -> None:
    state = PassiveTreeState(allocated_nodes={"start": 1, "might": 1}, available_points=3)
    updated = allocate_node("focus", TREE, state)
    assert updated.rank_of("focus") == 1
    assert updated.available_points == 1
    assert state.rank_of("focus") == 0
    assert state.available_points == 3


def test_allocate_stops_at_max_rank() -> None:
    state = PassiveTreeState(allocated_nodes={"start": 1}, available_points=10)
    for _ in range(5):
        state = allocate_node("might", TREE, state)
    assert state.rank_of("might") == 3
    assert state.available_points == 7


def test_failed_allocation_returns_same_state() -> None:
    state = PassiveTreeState(allocated_nodes={"start": 1}, available_points=0)
    assert allocate_node("might", TREE, state) is state


def test_allocatable_nodes_follow_tree_order() -> None:
    state = PassiveTreeState(allocated_nodes={"start": 1, "might": 1}, available_points=2)
    assert get_allocatable_nodes(TREE, state) == ["might", "focus"]


def test_bundled_tree_opens_four_paths_from_start() -> None:
    tree = passive_tree_repo.tree()
    state = PassiveTreeState(allocated_nodes={"start": 1}, available_points=1)
    assert sorted(get_allocatable_nodes(tree, state)) == ["dex_path_1", "int_path_1", "str_path_1", "vit_path_1"]
