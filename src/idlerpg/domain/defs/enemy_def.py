"""Enemy archetype definition structures."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class EnemyTypeDef:
    """Name pool for one enemy archetype (melee, ranged, caster...)."""

    id: str
    names: tuple[str, ...]
