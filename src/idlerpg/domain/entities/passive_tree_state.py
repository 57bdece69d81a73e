"""Allocation state of the passive tree."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict


@dataclass(frozen=True, slots=True)
class PassiveTreeState:
    """Node id -> rank plus the unspent point pool."""

    allocated_nodes: Dict[str, int] = field(default_factory=dict)
    available_points: int = 0

    def rank_of(self, node_id: str) -> int:
        return self.allocated_nodes.get(node_id, 0)
