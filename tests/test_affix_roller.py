from __future__ import annotations

import pytest

from idlerpg.core.rng import RNG
from idlerpg.domain.defs import AffixDef, RarityDef
from idlerpg.services.affix_roller import (
    EQUIPMENT_AFFIX_RULES,
    max_affix_tier,
    roll_affixes,
    stone_affix_rules,
    weighted_choice,
)
from tests.helpers.content import affixes_repo, rarities_repo
from tests.helpers.scripted_rng import ConstantRandom, ScriptedRandom

POOL = (
    AffixDef(name="of Power", stat="damage", value=3, tier=1, weight=100),
    AffixDef(name="of Might", stat="damage", value=6, tier=2, weight=80),
    AffixDef(name="of Precision", stat="critChance", value=0.02, tier=1, weight=60),
    AffixDef(name="of Swiftness", stat="attackSpeed", value=0.1, tier=1, weight=40),
    AffixDef(name="of Ruin", stat="damage", value=20, tier=5, weight=5),
)


def _rarity(low: int, high: int, multiplier: float = 1.0) -> RarityDef:
    return RarityDef(id="Test", color="#000000", affix_count=(low, high), stat_multiplier=multiplier)


def test_max_affix_tier_unlocks_every_ten_levels_up_to_three() -> None:
    assert max_affix_tier(1, EQUIPMENT_AFFIX_RULES) == 1
    assert max_affix_tier(10, EQUIPMENT_AFFIX_RULES) == 2
    assert max_affix_tier(25, EQUIPMENT_AFFIX_RULES) == 3
    assert max_affix_tier(100, EQUIPMENT_AFFIX_RULES) == 3


def test_stone_tiers_unlock_every_fifteen_levels_up_to_four() -> None:
    rules = stone_affix_rules(0.1)
    assert max_affix_tier(14, rules) == 1
    assert max_affix_tier(15, rules) == 2
    assert max_affix_tier(100, rules) == 4


def test_weighted_choice_walks_cumulative_weights() -> None:
    items = [("a", 1.0), ("b", 3.0)]
    weight = lambda entry: entry[1]  # noqa: E731
    assert weighted_choice(items, ConstantRandom(0.2), weight)[0] == "a"
    assert weighted_choice(items, ConstantRandom(0.3), weight)[0] == "b"
    assert weighted_choice(items, ConstantRandom(0.9999), weight)[0] == "b"


def test_weighted_choice_empty_raises() -> None:
    with pytest.raises(ValueError):
        weighted_choice([], ConstantRandom(0.5))


def test_zero_count_rolls_nothing() -> None:
    assert roll_affixes(POOL, 50, _rarity(0, 0), ConstantRandom(0.5)) == ()


def test_rolled_stats_never_repeat() -> None:
    rng = RNG(99)
    for _ in range(200):
        affixes = roll_affixes(POOL, 40, _rarity(3, 6), rng)
        stats = [affix.stat for affix in affixes]
        assert len(stats) == len(set(stats))


def test_count_is_capped_by_distinct_stats() -> None:
    affixes = roll_affixes(POOL, 40, _rarity(6, 6), RNG(3))
    assert len(affixes) == 3


def test_tier_gating_excludes_high_tiers_at_low_level() -> None:
    rng = RNG(5)
    for _ in range(200):
        for affix in roll_affixes(POOL, 1, _rarity(1, 3), rng):
            assert affix.tier == 1


def test_value_scales_with_level_and_rarity() -> None:
    # count draw 0.0 -> one affix, pick draw 0.0 -> "of Power"
    rng = ScriptedRandom([0.0, 0.0])
    (affix,) = roll_affixes(POOL, 21, _rarity(1, 1, multiplier=2.0), rng)
    assert affix.name == "of Power"
    assert affix.value == pytest.approx(3 * 2.0 * 2.0)


def test_stone_rules_apply_variation_and_floor() -> None:
    tiny = (AffixDef(name="of Dust", stat="luck", value=0.001, tier=1, weight=1),)
    (affix,) = roll_affixes(tiny, 1, _rarity(1, 1), ScriptedRandom([0.0, 0.0, 0.0]), stone_affix_rules(0.2))
    assert affix.value == 0.01


def test_bundled_pools_roll_for_every_rarity() -> None:
    rng = RNG(11)
    for rarity_id in rarities_repo.ids():
        rarity = rarities_repo.get(rarity_id)
        _, high = rarity.affix_count
        affixes = roll_affixes(affixes_repo.pool("weapon"), 30, rarity, rng)
        assert len(affixes) <= high
        assert all(affix.value > 0 for affix in affixes)
