from __future__ import annotations

import math

import pytest

from idlerpg.domain.entities import (
    Affix,
    Attributes,
    Equipment,
    LegacyExtra,
    LegacyItem,
    PassiveTreeState,
    Player,
    Stone,
)
from idlerpg.domain.sockets import embed_stone, remove_stone
from idlerpg.domain.stat_aggregation import build_stat_breakdown, calculate_player_stats
from idlerpg.services.factories import create_default_player
from tests.helpers.content import passive_tree_repo


def _sword(**overrides) -> Equipment:
    fields = dict(
        id="eq_sword",
        name="Rare Sword",
        type="sword",
        slot="weapon",
        category="weapon",
        rarity="Rare",
        level=5,
        base_stats={"damage": 8.0, "resistance": {"fire": 0.1}},
        affixes=(Affix(name="of Precision", stat="critChance", value=0.04, tier=1),),
        sockets=(None,),
    )
    fields.update(overrides)
    return Equipment(**fields)


RUBY = Stone(
    id="stone_1",
    name="Ruby",
    type="ruby",
    rarity="Common",
    level=5,
    base_stats={"damage": 3.0, "strength": 2.0},
    socket_types=("weapon", "ring"),
)


def test_baseline_player() -> None:
    player = calculate_player_stats(create_default_player(), passive_tree_repo.tree())
    assert player.base_dps == 2
    assert player.dps == 2
    assert player.max_hp == 120
    assert player.max_mana == 50
    assert player.crit_chance == 0
    assert player.attack_speed == 1
    assert player.calculated_stats == {}


def test_aggregation_is_idempotent() -> None:
    player = create_default_player()
    player.equipment = {"weapon": _sword()}
    player.attributes = Attributes(strength=14, dexterity=12, vitality=11)
    once = calculate_player_stats(player)
    twice = calculate_player_stats(once)
    assert twice.dps == once.dps
    assert twice.max_hp == once.max_hp
    assert twice.crit_chance == once.crit_chance
    assert twice.calculated_stats == once.calculated_stats


def test_input_player_is_not_modified() -> None:
    player = create_default_player()
    player.equipment = {"weapon": _sword()}
    calculate_player_stats(player)
    assert player.dps == 2
    assert player.calculated_stats == {}


def test_attributes_scale_derived_stats() -> None:
    player = create_default_player()
    player.attributes = Attributes(strength=15, dexterity=20, intelligence=12, vitality=13, luck=5)
    result = calculate_player_stats(player)
    assert result.base_dps == 7
    assert result.max_hp == 120 + 5 * 2 + 3 * 3
    assert result.max_mana == 52
    assert result.crit_chance == pytest.approx(0.05)
    assert result.dodge_chance == pytest.approx(0.03)


def test_low_strength_never_reduces_damage() -> None:
    player = create_default_player()
    player.attributes = Attributes(strength=4)
    result = calculate_player_stats(player)
    assert result.base_dps == 2
    assert result.max_hp == 120 - 12


def test_equipment_and_stones_add_stats_and_skip_resistance() -> None:
    player = create_default_player()
    player.stones = [RUBY]
    player.equipment = {"weapon": _sword(sockets=("stone_1",))}
    result = calculate_player_stats(player)

    assert "resistance" not in result.calculated_stats
    assert result.calculated_stats["damage"] == 11.0
    # stone strength counts as a gear attribute point for both dps fields
    assert result.base_dps == 4
    assert result.dps == 4 + 11
    assert result.max_hp == 124
    assert result.crit_chance == pytest.approx(0.04)


def test_passive_nodes_only_count_with_tree() -> None:
    player = create_default_player()
    player.passive_tree = PassiveTreeState(allocated_nodes={"start": 1, "str_path_1": 1})
    without_tree = calculate_player_stats(player)
    with_tree = calculate_player_stats(player, passive_tree_repo.tree())
    assert without_tree.base_dps == 2
    assert with_tree.base_dps == 7
    assert with_tree.max_hp == 130


def test_legacy_weapon_adds_power_and_extras() -> None:
    player = create_default_player()
    player.equipped = LegacyItem(
        id="it_1",
        name="Rare Sword",
        rarity="Rare",
        power=12,
        extras=(LegacyExtra("hp", 20), LegacyExtra("dps", 2), LegacyExtra("projectileSpeed", 0.5)),
    )
    result = calculate_player_stats(player)
    assert result.base_dps == 2
    assert result.dps == 16
    assert result.max_hp == 140
    assert result.projectile_speed == 1.5


def test_chances_are_clamped() -> None:
    player = create_default_player()
    player.equipment = {
        "weapon": _sword(
            affixes=(
                Affix(name="of Luck", stat="critChance", value=3.0, tier=1),
                Affix(name="of Mist", stat="dodgeChance", value=2.0, tier=1),
                Affix(name="of Walls", stat="blockChance", value=-1.0, tier=1),
                Affix(name="of Leech", stat="lifeSteal", value=5.0, tier=1),
            )
        )
    }
    result = calculate_player_stats(player)
    assert result.crit_chance == 1.0
    assert result.dodge_chance == 0.95
    assert result.block_chance == 0.0
    assert result.life_steal == 1.0


def test_hp_never_exceeds_max() -> None:
    player = create_default_player()
    player.hp = 999
    player.attributes = Attributes(vitality=5)
    result = calculate_player_stats(player)
    assert result.hp == result.max_hp == 105


def test_invalid_hp_and_mana_refill_to_max(caplog) -> None:
    player = create_default_player()
    player.hp = math.nan
    player.mana = "full"  # type: ignore[assignment]
    result = calculate_player_stats(player)
    assert result.hp == result.max_hp
    assert result.mana == result.max_mana
    assert "hp was invalid" in caplog.text


def test_negative_hp_is_clamped_to_zero() -> None:
    player = create_default_player()
    player.hp = -15
    assert calculate_player_stats(player).hp == 0


DERIVED_FIELD_BY_STAT = {
    "damage": "dps",
    "armor": "armor",
    "health": "max_hp",
    "mana": "max_mana",
    "critChance": "crit_chance",
    "dodgeChance": "dodge_chance",
    "blockChance": "block_chance",
    "lifeSteal": "life_steal",
    "attackSpeed": "attack_speed",
    "healthRegen": "health_regen",
    "manaRegen": "mana_regen",
    "strength": "dps",
    "dexterity": "crit_chance",
    "intelligence": "max_mana",
    "vitality": "max_hp",
    "luck": "crit_chance",
}


@pytest.mark.parametrize("stat", sorted(DERIVED_FIELD_BY_STAT))
@pytest.mark.parametrize("source", ["base_stats", "affix"])
def test_adding_a_positive_stat_never_lowers_its_derived_stat(stat: str, source: str) -> None:
    player = create_default_player()
    player.equipment = {"weapon": _sword()}
    before = calculate_player_stats(player)

    sword = _sword()
    if source == "base_stats":
        boosted = _sword(base_stats={**sword.base_stats, stat: sword.base_stats.get(stat, 0.0) + 2.0})
    else:
        boosted = _sword(affixes=(*sword.affixes, Affix(name="of Testing", stat=stat, value=0.05, tier=1)))
    player.equipment = {"weapon": boosted}
    after = calculate_player_stats(player)

    field_name = DERIVED_FIELD_BY_STAT[stat]
    assert getattr(after, field_name) >= getattr(before, field_name)
    assert after.calculated_stats[stat] > before.calculated_stats.get(stat, 0.0)


def test_invalid_gold_and_equipment_are_repaired(caplog) -> None:
    player = create_default_player()
    player.gold = math.nan
    player.equipment = None  # type: ignore[assignment]
    result = calculate_player_stats(player)
    assert result.gold == 0
    assert result.equipment == {}
    assert "gold was invalid" in caplog.text


def test_malformed_equipment_entries_are_dropped() -> None:
    player = create_default_player()
    player.equipment = {"weapon": _sword(), "ring": {"name": "not an item"}}  # type: ignore[dict-item]
    result = calculate_player_stats(player)
    assert list(result.equipment) == ["weapon"]


def test_embed_then_remove_restores_stats() -> None:
    player = create_default_player()
    player.stones = [RUBY]
    player.equipment = {"weapon": _sword()}
    before = calculate_player_stats(player)

    embedded = embed_stone(before.equipment["weapon"], RUBY)
    with_stone = calculate_player_stats(Player(**{**_fields(before), "equipment": {"weapon": embedded.equipment}}))
    assert with_stone.dps > before.dps

    removed = remove_stone(embedded.equipment, 0)
    after = calculate_player_stats(Player(**{**_fields(with_stone), "equipment": {"weapon": removed.equipment}}))
    assert after.dps == before.dps
    assert after.max_hp == before.max_hp
    assert after.calculated_stats == before.calculated_stats


def test_breakdown_total_matches_calculated_stats() -> None:
    player = create_default_player()
    player.stones = [RUBY]
    player.equipment = {"weapon": _sword(sockets=("stone_1",))}
    player.passive_tree = PassiveTreeState(allocated_nodes={"start": 1, "str_path_1": 1})
    tree = passive_tree_repo.tree()

    breakdown = build_stat_breakdown(player, tree)
    assert breakdown.stones == {"damage": 3.0, "strength": 2.0}
    assert breakdown.passive == {"strength": 5.0}
    assert breakdown.total == calculate_player_stats(player, tree).calculated_stats


def _fields(player: Player) -> dict:
    return {name: getattr(player, name) for name in Player.__dataclass_fields__}
