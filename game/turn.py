import logging
from typing import Tuple

from core.config import Difficulty, GameParameters
from core.constants import MAX_FLOOD_LEVEL
from core.growth import generate_increase
from core.propagation import propagate
from core.random_source import RandomSource
from core.state import GameState, NodeId

logger = logging.getLogger(__name__)


# fixed order; the return legs read the already-updated track level
PROPAGATION_ORDER: Tuple[Tuple[NodeId, NodeId], ...] = (
    (NodeId.STATION_A, NodeId.TRACK),
    (NodeId.STATION_B, NodeId.TRACK),
    (NodeId.TRACK, NodeId.STATION_A),
    (NodeId.TRACK, NodeId.STATION_B),
)


def apply_growth(
    *,
    state: GameState,
    rng: RandomSource,
    params: GameParameters,
) -> None:
    """
    Autonomous rise at every failure point.
    """
    for node_id, node in state.nodes():
        if not node.is_failure_point:
            continue

        increase = generate_increase(
            rng,
            params.flood_log_normal_mu,
            params.flood_log_normal_sigma,
        )
        prev = node.flood_level
        node.flood_level = min(MAX_FLOOD_LEVEL, node.flood_level + increase)
        node.increase_this_round = increase

        state.flood_debug.append(
            {
                "step": "growth",
                "node": node_id.name.lower(),
                "previous": prev,
                "next": node.flood_level,
                "increase": increase,
            }
        )


def apply_propagation(
    *,
    state: GameState,
    difficulty: Difficulty,
    params: GameParameters,
) -> None:
    for source_id, target_id in PROPAGATION_ORDER:
        source = state.node(source_id)
        target = state.node(target_id)

        result = propagate(
            source_level=source.flood_level,
            target_level=target.flood_level,
            source_elevation=source.elevation,
            target_elevation=target.elevation,
            difficulty=difficulty,
            params=params,
        )
        if result.increase == 0:
            continue

        prev = target.flood_level
        target.flood_level = result.flood_level
        target.increase_this_round += result.increase

        state.flood_debug.append(
            {
                "step": "propagation",
                "source": source_id.name.lower(),
                "node": target_id.name.lower(),
                "previous": prev,
                "next": target.flood_level,
                "increase": result.increase,
            }
        )


def update_flood_levels(
    *,
    state: GameState,
    rng: RandomSource,
    difficulty: Difficulty,
    params: GameParameters,
) -> None:
    """
    Execute exactly ONE round of flooding on the given state.
    """

    # reset debug container
    state.flood_debug = []

    # 0. remember last round
    for _, node in state.nodes():
        node.previous_flood_level = node.flood_level
        node.increase_this_round = 0.0

    # 1. failure points rise
    apply_growth(state=state, rng=rng, params=params)

    # 2. neighbours share the water
    apply_propagation(state=state, difficulty=difficulty, params=params)

    # 3. clamp
    state.clamp_levels()

    logger.debug(
        "flood levels A=%.1f track=%.1f B=%.1f",
        state.station_a.flood_level,
        state.track.flood_level,
        state.station_b.flood_level,
    )
