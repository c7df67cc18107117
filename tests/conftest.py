from __future__ import annotations

import pytest


class ScriptedRng:
    """Random source that replays a fixed sequence of draws."""

    def __init__(self, draws: list[int]) -> None:
        self._draws = list(draws)
        self.calls = 0

    def getrandbits(self, k: int) -> int:
        value = self._draws[self.calls]
        self.calls += 1
        return value


@pytest.fixture
def scripted_rng():
    return ScriptedRng
