import math
import sys

from core.random_source import RandomSource


def standard_normal(rng: RandomSource) -> float:
    """
    Box-Muller draw from two uniforms of the same source.
    """
    u1 = rng.random()
    u2 = rng.random()
    # log(0) guard
    u1 = max(u1, sys.float_info.min)
    return math.sqrt(-2 * math.log(u1)) * math.cos(2 * math.pi * u2)


def generate_increase(rng: RandomSource, mu: float, sigma: float) -> float:
    """
    Log-normal flood increase for one failure point, one decimal.
    Not clamped here: the caller caps the node level at 100.
    """
    normal = math.log(mu) + sigma * standard_normal(rng)
    # half-up to one decimal
    return math.floor(math.exp(normal) * 10 + 0.5) / 10
