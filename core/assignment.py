import logging
from dataclasses import dataclass
from typing import List, Tuple

from core.config import Difficulty, GameParameters
from core.errors import ConfigurationError
from core.random_source import RandomSource
from core.state import NodeId

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EpisodeLayout:
    """
    Elevations (A, track, B) and failure points for one episode.
    """
    elevations: Tuple[int, int, int]
    failure_points: Tuple[NodeId, ...]


def rank_nodes_by_elevation(elevations: Tuple[int, int, int]) -> List[NodeId]:
    """
    Highest first. Equal elevations keep declaration order.
    """
    return sorted(NodeId, key=lambda node_id: -elevations[node_id.value])


def shuffle_candidates(rng: RandomSource) -> List[NodeId]:
    candidates = list(NodeId)
    for i in range(len(candidates) - 1, 0, -1):
        j = rng.random_int(0, i)
        candidates[i], candidates[j] = candidates[j], candidates[i]
    return candidates


def _elevation_band(difficulty: Difficulty, params: GameParameters) -> Tuple[int, int]:
    top = params.max_elevation
    if difficulty == Difficulty.EASY:
        return round(top * 0.4), round(top * 0.7)
    if difficulty == Difficulty.MEDIUM:
        return round(top * 0.2), round(top * 0.8)
    if difficulty == Difficulty.HARD:
        return params.min_elevation, top
    raise ConfigurationError(f"Unsupported difficulty: {difficulty!r}")


def assign_episode(
    *,
    difficulty: Difficulty,
    params: GameParameters,
    rng: RandomSource,
) -> EpisodeLayout:
    """
    Draw elevations and failure points for a fresh episode.

    Draw order is fixed (shuffle, A, track, B, then the
    difficulty pick) so seeded runs replay exactly.
    """
    shuffled = shuffle_candidates(rng)
    failure_points = tuple(shuffled[: params.failure_point_num])

    low, high = _elevation_band(difficulty, params)
    elevations = (
        rng.random_int(low, high),
        rng.random_int(low, high),
        rng.random_int(low, high),
    )

    if params.failure_point_num > 0:
        ranked = rank_nodes_by_elevation(elevations)

        if difficulty == Difficulty.MEDIUM:
            # one of the two highest, never the lowest
            failure_points = (ranked[rng.random_int(0, len(ranked) - 2)],)

        elif difficulty == Difficulty.HARD:
            failure_points = (ranked[0],)

    logger.debug(
        "episode layout difficulty=%s elevations=%s failure_points=%s",
        difficulty.value,
        elevations,
        [fp.name for fp in failure_points],
    )
    return EpisodeLayout(elevations=elevations, failure_points=failure_points)
