"""Attribute models for runtime entities."""
from __future__ import annotations

from dataclasses import dataclass

BASE_STRENGTH = 10
BASE_DEXTERITY = 10
BASE_INTELLIGENCE = 10
BASE_VITALITY = 10
BASE_LUCK = 5


@dataclass(slots=True)
class Attributes:
    """Stores the player's spendable attributes (no scaling applied yet)."""

    strength: int = BASE_STRENGTH
    dexterity: int = BASE_DEXTERITY
    intelligence: int = BASE_INTELLIGENCE
    vitality: int = BASE_VITALITY
    luck: int = BASE_LUCK
