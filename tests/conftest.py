"""Shared fixtures for emulator and service tests."""

from __future__ import annotations

import random

import pytest


class FixedRandom(random.Random):
    """random.Random whose random() always returns one value.

    uniform() returns its midpoint for 0.5; choice() and randrange() also
    derive from random() in a subclass that does not define getrandbits().
    """

    def __init__(self, value: float, seed: int = 0) -> None:
        super().__init__(seed)
        self.value = value

    def random(self) -> float:
        return self.value


@pytest.fixture
def fixed_rng():
    """Factory: fixed_rng(0.5) -> FixedRandom(0.5)."""
    return FixedRandom


@pytest.fixture
def rng():
    return random.Random(1234)
