"""Affix pool definition structures."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AffixDef:
    """A weighted, tiered stat modifier before any level/rarity scaling."""

    name: str
    stat: str
    value: float
    tier: int
    weight: float


@dataclass(frozen=True, slots=True)
class AffixPoolDef:
    """Themed affix pool (weapon, armor, accessory, stone)."""

    id: str
    affixes: tuple[AffixDef, ...]
