"""Deterministic RNG wrapper built on top of random.Random."""
from __future__ import annotations

from random import Random
from typing import Protocol, Sequence, TypeVar

T_co = TypeVar("T_co")


class RandomSource(Protocol):
    """Anything that can hand out uniform floats in [0.0, 1.0)."""

    def random(self) -> float:
        ...


class RNG:
    """Wrapper around random.Random that provides deterministic helpers."""

    def __init__(self, seed: int | None = None) -> None:
        self._random = Random(seed)

    def randint(self, a: int, b: int) -> int:
        """Return a random integer N such that a <= N <= b."""
        return self._random.randint(a, b)

    def random(self) -> float:
        """Return the next random floating point number in the range [0.0, 1.0)."""
        return self._random.random()


def random_int(rng: RandomSource, a: int, b: int) -> int:
    """Uniform integer in [a, b] drawn from a single float."""
    return a + int(rng.random() * (b - a + 1))


def random_pick(rng: RandomSource, seq: Sequence[T_co]) -> T_co:
    """Uniform element of a non-empty sequence drawn from a single float."""
    if not seq:
        raise ValueError("Cannot choose from an empty sequence.")
    index = min(len(seq) - 1, int(rng.random() * len(seq)))
    return seq[index]


def random_uniform(rng: RandomSource, low: float, high: float) -> float:
    return low + rng.random() * (high - low)
