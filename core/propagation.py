import logging
import math
from dataclasses import dataclass
from typing import Dict

from core.config import Difficulty, GameParameters
from core.constants import MAX_FLOOD_LEVEL, MIN_FLOOD_LEVEL

logger = logging.getLogger(__name__)


# lower difficulty dampens how much elevation protects a target
ELEVATION_SCALE: Dict[Difficulty, float] = {
    Difficulty.EASY: 0.4,
    Difficulty.MEDIUM: 0.9,
    Difficulty.HARD: 1.0,
}

MIN_ELEVATION_FACTOR = 0.1


@dataclass(frozen=True)
class PropagationResult:
    flood_level: float
    increase: float


def propagate(
    *,
    source_level: float,
    target_level: float,
    source_elevation: float,
    target_elevation: float,
    difficulty: Difficulty,
    params: GameParameters,
) -> PropagationResult:
    """
    Spread flood from source to target.
    No-op unless the source is at or above the threshold
    and strictly above the target.
    """
    if not (
        source_level >= params.propagation_threshold
        and source_level > target_level
    ):
        return PropagationResult(flood_level=target_level, increase=0)

    flood_difference = source_level - target_level
    elevation_difference = source_elevation - target_elevation

    scaled_factor = params.elevation_difference_factor * ELEVATION_SCALE.get(difficulty, 1.0)
    elevation_factor = max(
        MIN_ELEVATION_FACTOR,
        1 + elevation_difference * scaled_factor,
    )

    amount = math.ceil(
        flood_difference * params.flood_difference_factor * elevation_factor
    )
    amount = max(0, min(params.propagation_flood_increase, amount))

    new_level = min(MAX_FLOOD_LEVEL, max(MIN_FLOOD_LEVEL, target_level + amount))

    logger.debug(
        "propagate %.1f -> %.1f (elev %s -> %s): +%s",
        source_level,
        target_level,
        source_elevation,
        target_elevation,
        amount,
    )
    return PropagationResult(flood_level=new_level, increase=amount)
