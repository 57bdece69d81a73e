"""Utilities for creating instance identifiers from the injected random source."""
from __future__ import annotations

from idlerpg.core.rng import RandomSource, random_int


def make_instance_id(prefix: str, rng: RandomSource) -> str:
    """Generate an identifier using the provided random source."""
    suffix = random_int(rng, 100000, 999999)
    return f"{prefix}_{suffix}"
