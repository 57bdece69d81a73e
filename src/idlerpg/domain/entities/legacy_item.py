"""Flattened single-weapon item shape used by pre multi-slot saves."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class LegacyExtra:
    key: str
    val: float


@dataclass(frozen=True, slots=True)
class LegacyItem:
    """Old ``equipped`` weapon: one power scalar plus a list of extras."""

    id: str
    name: str
    rarity: str
    power: int
    type: str = "melee"
    element: str = "physical"
    extras: tuple[LegacyExtra, ...] = ()
    value: int = 1
