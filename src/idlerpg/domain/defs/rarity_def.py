"""Rarity tier definition structures."""
from __future__ import annotations

from dataclasses import dataclass

DEFAULT_RARITY_COLOR = "#9CA3AF"


@dataclass(frozen=True, slots=True)
class RarityDef:
    """Controls affix count and stat scaling for one rarity tier."""

    id: str
    color: str
    affix_count: tuple[int, int]
    stat_multiplier: float
    elemental_chance: float = 0.1
    drop_weight: float = 0.0
    affix_variation: float = 0.0
    base_variation: float = 0.0


def fallback_rarity(rarity_id: str) -> RarityDef:
    """Neutral tier used when a rarity string is not in the loaded table."""
    return RarityDef(
        id=rarity_id,
        color=DEFAULT_RARITY_COLOR,
        affix_count=(0, 0),
        stat_multiplier=1.0,
    )
