from __future__ import annotations

from typing import Iterable


class ScriptedRandom:
    """Random source that replays fixed draws, then repeats ``fallback``."""

    def __init__(self, draws: Iterable[float], fallback: float = 0.5) -> None:
        self._draws = list(draws)
        self._fallback = fallback
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        if self._draws:
            return self._draws.pop(0)
        return self._fallback


class ConstantRandom(ScriptedRandom):
    def __init__(self, value: float) -> None:
        super().__init__((), fallback=value)
