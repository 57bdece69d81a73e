"""Socketable stone definition structures."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping


@dataclass(frozen=True, slots=True)
class StoneBaseDef:
    id: str
    name: str
    base_stats: Mapping[str, float] = field(default_factory=dict)
    socket_types: tuple[str, ...] = ()
    primary_stat: str | None = None
