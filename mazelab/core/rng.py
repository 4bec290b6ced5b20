# mazelab/core/rng.py
"""
Single pseudo-random stream shared by generation steps.

Pass one RandomSource into a generator (and keep reusing it) to make a run
reproducible from its seed. Nothing in mazelab reads the global `random`
state.
"""

import random
from typing import Optional, Sequence, TypeVar

from mazelab import config
from mazelab.core.types import Surface

T = TypeVar("T")


class RandomSource:
    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._random = random.Random(seed)

    def randrange(self, upper: int) -> int:
        return self._random.randrange(upper)

    def choice(self, items: Sequence[T]) -> T:
        return items[self._random.randrange(len(items))]

    def chance(self, probability: float) -> bool:
        return self._random.random() < probability

    def surface(self) -> Surface:
        """Sample a passage surface from the configured d100 distribution."""
        roll = self._random.randrange(config.MAX_CHANCE)
        if roll < config.SWAMP_CHANCE:
            return Surface.SWAMP
        if roll < config.SAND_CHANCE:
            return Surface.SAND
        if roll < config.COIN_CHANCE:
            return Surface.COIN
        if roll < config.ROAD_CHANCE:
            return Surface.ROAD
        return Surface.NORMAL

    def __repr__(self) -> str:
        return f"RandomSource(seed={self.seed!r})"
