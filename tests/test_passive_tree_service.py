from __future__ import annotations

from idlerpg.services.factories import create_default_player
from idlerpg.services.passive_tree_service import PassiveTreeService
from idlerpg.services.player_stats_service import PlayerStatsService
from tests.helpers.content import passive_tree_repo


def _service() -> PassiveTreeService:
    return PassiveTreeService(stats_service=PlayerStatsService(passive_tree_repo=passive_tree_repo))


def test_allocate_updates_tree_and_stats() -> None:
    service = _service()
    player = service.grant_points(create_default_player(), 2).player

    result = service.allocate(player, "str_path_1")
    assert result.success
    assert result.message == "Might allocated (rank 1/1)."
    assert result.player.passive_tree.available_points == 1
    assert result.player.base_dps == 7


def test_allocate_without_requirement_fails() -> None:
    service = _service()
    player = service.grant_points(create_default_player(), 5).player
    result = service.allocate(player, "str_small_1")
    assert not result.success
    assert result.player is player


def test_allocate_unknown_node_fails() -> None:
    result = _service().allocate(create_default_player(), "nowhere")
    assert not result.success
    assert "Unknown passive node" in result.message


def test_allocatable_nodes_and_modifiers() -> None:
    service = _service()
    player = service.grant_points(create_default_player(), 1).player
    assert "int_path_1" in service.allocatable_nodes(player)
    assert service.skill_modifiers(player) == []


def test_grant_points_rejects_non_positive() -> None:
    assert not _service().grant_points(create_default_player(), 0).success
