"""Shared fixtures: a scripted random source for deterministic steps."""

import pytest


class ScriptedRandom:
    """Stands in for ``random``: every roll returns ``roll``, every offset ``offset``."""

    def __init__(self, roll=99, offset=0):
        self.roll = roll
        self.offset = offset
        self.calls = 0

    def randrange(self, stop):
        self.calls += 1
        return min(self.roll, stop - 1)

    def randint(self, a, b):
        self.calls += 1
        return max(a, min(b, self.offset))


@pytest.fixture
def still_rng():
    """Every movement roll fails: only gravity and straight sinking happen."""
    return ScriptedRandom(roll=99, offset=0)

