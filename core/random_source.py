import math
import random
from typing import Optional

from core.config import GameMode
from core.constants import DEFAULT_SEED
from core.errors import ConfigurationError


class RandomSource:
    """
    Uniform draws used by assignment and growth.
    Threaded explicitly through every call that needs randomness.
    """

    def random(self) -> float:
        raise NotImplementedError

    def random_int(self, low: int, high: int) -> int:
        """Inclusive on both ends."""
        return math.floor(self.random() * (high - low + 1)) + low


class SeededRandom(RandomSource):
    """
    Sine-hash generator over an incrementing counter.
    Same starting seed, same sequence.
    """

    def __init__(self, seed: int = DEFAULT_SEED) -> None:
        self.initial_seed = seed
        self.seed = seed

    def random(self) -> float:
        x = math.sin(self.seed) * 10000
        self.seed += 1
        return x - math.floor(x)


class SystemRandom(RandomSource):
    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()

    def random(self) -> float:
        return self._rng.random()


def make_random_source(mode: GameMode, seed: Optional[int] = None) -> RandomSource:
    if mode == GameMode.FIXED:
        return SeededRandom(DEFAULT_SEED if seed is None else seed)
    if mode == GameMode.RANDOM:
        return SystemRandom()
    raise ConfigurationError(f"Unsupported game mode: {mode!r}")
