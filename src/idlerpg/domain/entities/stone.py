"""Socketable stone runtime model."""
from __future__ import annotations

from dataclasses import dataclass, field

from idlerpg.core.types import StatMap

from .equipment import Affix


@dataclass(frozen=True, slots=True)
class Stone:
    """A generated stone; equipment sockets reference it by id."""

    id: str
    name: str
    type: str
    rarity: str
    level: int
    base_stats: StatMap = field(default_factory=dict)
    affixes: tuple[Affix, ...] = ()
    socket_types: tuple[str, ...] = ()
    value: int = 1
