"""Enemy runtime models."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass(slots=True)
class Enemy:
    """Represents a spawned enemy ready for a combat tick."""

    id: str
    name: str
    type: str
    level: int
    hp: float
    max_hp: float
    special_ability: str | None = None
    is_boss: bool = False
    armor: int = 0
    status_effects: List[str] = field(default_factory=list)
