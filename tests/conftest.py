"""Shared fixtures for the test suite."""

import random

import pytest


class Arbitrary:
    """Random rows, columns and values drawn from a seeded source."""

    def __init__(self, rng: random.Random):
        self.rng = rng

    def row(self) -> int:
        return self.rng.randrange(9)

    col = row

    def value(self) -> int:
        return self.rng.randint(1, 9)

    def two(self):
        """Two different indices 0-8."""
        a, b = self.rng.sample(range(9), 2)
        return a, b

    def two_same_block(self):
        """Two different indices 0-8 inside the same band of three."""
        band = self.rng.randrange(3) * 3
        a, b = self.rng.sample(range(band, band + 3), 2)
        return a, b

    def two_values(self):
        a, b = self.two()
        return a + 1, b + 1


@pytest.fixture(params=[1, 2, 3, 4, 5])
def arbitrary(request):
    """Arbitrary positions; every test using it runs for several seeds."""
    return Arbitrary(random.Random(request.param))
