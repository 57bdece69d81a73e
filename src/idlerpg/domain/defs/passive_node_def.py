"""Passive skill tree definition structures."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from idlerpg.core.types import ModifierType


@dataclass(frozen=True, slots=True)
class SkillModifier:
    """Skill-specific tweak granted by a passive node (consumed by skill execution)."""

    skill_id: str
    property: str
    value: float
    type: ModifierType = "additive"


@dataclass(frozen=True, slots=True)
class PassiveNodeDef:
    """One vertex of the passive tree."""

    id: str
    name: str
    type: str
    description: str = ""
    requirements: tuple[str, ...] = ()
    connections: tuple[str, ...] = ()
    stats: Mapping[str, float] = field(default_factory=dict)
    skill_modifiers: tuple[SkillModifier, ...] = ()
    cost: int = 1
    max_rank: int = 1
    tier: int = 1
    archetype: str | None = None


@dataclass(frozen=True, slots=True)
class PassiveTreeDef:
    """Immutable tree topology keyed by node id."""

    nodes: Mapping[str, PassiveNodeDef]
    starting_node: str = "start"
