"""Weighted, tier-gated affix rolling shared by equipment and stones."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence, TypeVar

from idlerpg.core.rng import RandomSource, random_int
from idlerpg.domain.defs import AffixDef, RarityDef
from idlerpg.domain.entities import Affix

T = TypeVar("T")

MIN_STONE_AFFIX_VALUE = 0.01


@dataclass(frozen=True, slots=True)
class AffixRollRules:
    """How an item family gates and scales its affixes.

    ``tier_cap`` and ``tier_step`` unlock one more tier every ``tier_step``
    levels up to the cap. ``variation`` is a symmetric random spread applied
    after scaling; ``min_value`` floors the rounded result.
    """

    tier_cap: int
    tier_step: int
    level_scaling: float
    variation: float = 0.0
    min_value: float | None = None


EQUIPMENT_AFFIX_RULES = AffixRollRules(tier_cap=3, tier_step=10, level_scaling=0.05)


def stone_affix_rules(variation: float) -> AffixRollRules:
    return AffixRollRules(
        tier_cap=4,
        tier_step=15,
        level_scaling=0.03,
        variation=variation,
        min_value=MIN_STONE_AFFIX_VALUE,
    )


def max_affix_tier(level: int, rules: AffixRollRules) -> int:
    return min(rules.tier_cap, level // rules.tier_step + 1)


def _default_weight(item: object) -> float:
    return item.weight  # type: ignore[attr-defined]


def weighted_choice(
    items: Sequence[T],
    rng: RandomSource,
    weight: Callable[[T], float] = _default_weight,
) -> T:
    """Pick one element with probability proportional to its weight.

    A single draw in ``[0, total)`` is walked down the list in order; the
    last element absorbs any floating point remainder.
    """
    if not items:
        raise ValueError("Cannot choose from an empty sequence.")
    total = sum(weight(item) for item in items)
    remainder = rng.random() * total
    for item in items:
        remainder -= weight(item)
        if remainder <= 0:
            return item
    return items[-1]


def roll_affixes(
    pool: Sequence[AffixDef],
    level: int,
    rarity: RarityDef,
    rng: RandomSource,
    rules: AffixRollRules = EQUIPMENT_AFFIX_RULES,
) -> tuple[Affix, ...]:
    """Roll a rarity-sized set of affixes with no stat appearing twice."""
    low, high = rarity.affix_count
    count = random_int(rng, low, high)
    if count <= 0:
        return ()

    max_tier = max_affix_tier(level, rules)
    candidates = [affix for affix in pool if affix.tier <= max_tier]
    level_multiplier = 1 + (level - 1) * rules.level_scaling

    rolled: list[Affix] = []
    used_stats: set[str] = set()
    for _ in range(count):
        remaining = [affix for affix in candidates if affix.stat not in used_stats]
        if not remaining:
            break
        chosen = weighted_choice(remaining, rng)
        value = chosen.value * level_multiplier * rarity.stat_multiplier
        if rules.variation:
            value *= 1 + (rng.random() * 2 - 1) * rules.variation
        value = round(value, 2)
        if rules.min_value is not None:
            value = max(rules.min_value, value)
        rolled.append(Affix(name=chosen.name, stat=chosen.stat, value=value, tier=chosen.tier))
        used_stats.add(chosen.stat)
    return tuple(rolled)
