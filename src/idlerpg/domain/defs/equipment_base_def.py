"""Equipment base-type definition structures."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping


@dataclass(frozen=True, slots=True)
class EquipmentBaseDef:
    """Static template for one concrete equipment type (sword, helm, ring...)."""

    id: str
    name: str
    category: str
    slot: str
    base_stats: Mapping[str, float] = field(default_factory=dict)
    damage_types: tuple[str, ...] = ()
    requirements: Mapping[str, int] = field(default_factory=dict)
