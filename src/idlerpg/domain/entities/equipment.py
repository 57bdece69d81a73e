"""Equipment runtime models."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from idlerpg.core.types import StatMap


@dataclass(frozen=True, slots=True)
class Affix:
    """A rolled affix: stat and value are final, already scaled."""

    name: str
    stat: str
    value: float
    tier: int


@dataclass(frozen=True, slots=True)
class Equipment:
    """Generated gear; only socket contents change after creation."""

    id: str
    name: str
    type: str
    slot: str
    category: str
    rarity: str
    level: int
    base_stats: StatMap = field(default_factory=dict)
    affixes: tuple[Affix, ...] = ()
    damage_type: str | None = None
    requirements: Mapping[str, int] = field(default_factory=dict)
    sockets: tuple[str | None, ...] = ()
    value: int = 1

    @property
    def socketed_stone_ids(self) -> tuple[str, ...]:
        return tuple(stone_id for stone_id in self.sockets if stone_id)
