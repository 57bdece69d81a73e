from __future__ import annotations

from dataclasses import replace

from idlerpg.services.attribute_allocation_service import AttributeAllocationService
from idlerpg.services.factories import create_default_player
from idlerpg.services.player_stats_service import PlayerStatsService
from tests.helpers.content import passive_tree_repo


def _make_player_and_service(points: int = 0):
    stats_service = PlayerStatsService(passive_tree_repo=passive_tree_repo)
    player = stats_service.recalculate(replace(create_default_player(), attribute_points=points))
    return player, AttributeAllocationService(stats_service=stats_service)


def test_spend_point_raises_attribute_and_stats() -> None:
    player, service = _make_player_and_service(points=2)
    result = service.spend_attribute_point(player, "strength")

    assert result.success
    assert result.message == "Strength increased to 11."
    assert result.available == 1
    assert result.player.attributes.strength == 11
    assert result.player.base_dps == 3
    assert result.player.max_hp == 122


def test_spend_does_not_touch_original_player() -> None:
    player, service = _make_player_and_service(points=1)
    service.spend_attribute_point(player, "vitality")
    assert player.attributes.vitality == 10
    assert player.attribute_points == 1


def test_spend_without_points_fails() -> None:
    player, service = _make_player_and_service(points=0)
    result = service.spend_attribute_point(player, "luck")
    assert not result.success
    assert result.message == "Not enough attribute points available."
    assert result.player is player


def test_spend_rejects_unknown_attribute() -> None:
    player, service = _make_player_and_service(points=3)
    result = service.spend_attribute_point(player, "charisma")
    assert not result.success
    assert result.message == "Invalid attribute selection."


def test_spend_several_points_at_once() -> None:
    player, service = _make_player_and_service(points=5)
    result = service.spend_attribute_point(player, "intelligence", amount=4)
    assert result.player.max_mana == 54
    assert result.available == 1
    assert not service.spend_attribute_point(result.player, "intelligence", amount=2).success


def test_grant_points() -> None:
    player, service = _make_player_and_service()
    assert not service.grant_attribute_points(player, 0).success
    granted = service.grant_attribute_points(player, 3)
    assert granted.success
    assert granted.available == 3
