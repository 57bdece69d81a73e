from __future__ import annotations

import pytest

from idlerpg.domain.entities import Attributes, Equipment, Stone
from idlerpg.domain.sockets import (
    MAX_SOCKETS_BY_RARITY,
    can_equip,
    can_socket_stone,
    clear_sockets,
    embed_stone,
    empty_sockets,
    get_max_sockets,
    has_available_socket,
    remove_stone,
)


def _ring(sockets=(None, None), **overrides) -> Equipment:
    fields = dict(
        id="eq_ring",
        name="Unique Ring",
        type="ring",
        slot="ring",
        category="accessory",
        rarity="Unique",
        level=10,
        sockets=sockets,
    )
    fields.update(overrides)
    return Equipment(**fields)


def _stone(stone_id: str = "stone_1", socket_types=("weapon", "ring")) -> Stone:
    return Stone(id=stone_id, name="Ruby", type="ruby", rarity="Rare", level=10, socket_types=socket_types)


def test_socket_capacity_by_rarity() -> None:
    assert [get_max_sockets(r) for r in ("Common", "Magic", "Rare", "Unique", "Legendary")] == [0, 1, 1, 2, 2]
    assert get_max_sockets("Cursed") == 0
    assert empty_sockets("Unique") == (None, None)


def test_socket_capacity_table_is_read_only() -> None:
    with pytest.raises(TypeError):
        MAX_SOCKETS_BY_RARITY["Common"] = 3  # type: ignore[index]
    assert get_max_sockets("Common") == 0


def test_clear_sockets_reports_freed_stones() -> None:
    ring = _ring(sockets=(None, "stone_1"))
    cleared, freed = clear_sockets(ring)
    assert cleared.sockets == (None, None)
    assert freed == [(1, "stone_1")]
    assert clear_sockets(cleared) == (cleared, [])


def test_can_socket_stone_checks_slot_whitelist() -> None:
    assert can_socket_stone(_stone(), "ring")
    assert not can_socket_stone(_stone(), "boots")


def test_embed_uses_first_free_socket_without_mutating() -> None:
    ring = _ring()
    result = embed_stone(ring, _stone())
    assert result.success
    assert result.stone_id == "stone_1"
    assert result.equipment.sockets == ("stone_1", None)
    assert ring.sockets == (None, None)


def test_embed_rejects_wrong_slot() -> None:
    result = embed_stone(_ring(), _stone(socket_types=("helm",)))
    assert not result.success
    assert "cannot be socketed" in result.message


def test_embed_rejects_same_stone_twice() -> None:
    ring = _ring(sockets=("stone_1", None))
    result = embed_stone(ring, _stone())
    assert not result.success
    assert result.equipment is ring


def test_embed_rejects_full_item() -> None:
    ring = _ring(sockets=("stone_a", "stone_b"))
    assert not has_available_socket(ring)
    result = embed_stone(ring, _stone())
    assert not result.success
    assert "no free socket" in result.message


def test_embed_rejects_occupied_or_missing_index() -> None:
    ring = _ring(sockets=("stone_a", None))
    assert not embed_stone(ring, _stone(), index=0).success
    assert not embed_stone(ring, _stone(), index=5).success
    assert embed_stone(ring, _stone(), index=1).equipment.sockets == ("stone_a", "stone_1")


def test_common_items_have_no_sockets() -> None:
    helm = _ring(sockets=(), rarity="Common")
    assert not embed_stone(helm, _stone()).success


def test_remove_stone_frees_socket() -> None:
    ring = _ring(sockets=("stone_a", "stone_b"))
    result = remove_stone(ring, 1)
    assert result.success
    assert result.stone_id == "stone_b"
    assert result.equipment.sockets == ("stone_a", None)


def test_remove_from_empty_or_missing_socket_fails() -> None:
    ring = _ring()
    assert not remove_stone(ring, 0).success
    assert not remove_stone(ring, -1).success
    assert not remove_stone(ring, 2).success


def test_can_equip_checks_requirements() -> None:
    ring = _ring(requirements={"dexterity": 12})
    assert not can_equip(ring, Attributes())
    assert can_equip(ring, Attributes(dexterity=12))
