import logging
from enum import Enum
from typing import Optional

from core.config import GameType
from core.rules import apply_decision
from core.state import Decision, GameState, Phase

logger = logging.getLogger(__name__)


class TimeoutCase(Enum):
    NO_PREDICTION = "no_prediction"
    NO_DECISION = "no_decision"
    ALREADY_RESOLVED = "already_resolved"


ALLOW_LABEL = '"Allow Passage"'


def timeout_message(case: TimeoutCase, slider_value: float = 0.0) -> str:
    if case == TimeoutCase.NO_PREDICTION:
        return (
            f"Time's up! Your prediction has been automatically set to {slider_value:g}% "
            f"(the value in the slider) and your decision has been set to {ALLOW_LABEL}."
        )
    if case == TimeoutCase.NO_DECISION:
        return f"Time's up! Your decision has been automatically set to {ALLOW_LABEL}."
    return (
        "Time's up! You have already submitted your prediction and decision. "
        'Please click "Next Round" to continue.'
    )


def classify_timeout(state: GameState) -> Optional[TimeoutCase]:
    """
    Decide the timeout case from the phase alone, never from the clock.
    None means the round has nothing left to resolve.
    """
    if state.phase == Phase.GAME_OVER or state.episode_complete:
        return None
    if state.phase == Phase.PREDICTING:
        return TimeoutCase.NO_PREDICTION
    if state.phase == Phase.DECIDING:
        return TimeoutCase.NO_DECISION
    return TimeoutCase.ALREADY_RESOLVED


def resolve_timeout(
    *,
    state: GameState,
    game_type: GameType,
    slider_value: Optional[float] = None,
) -> Optional[TimeoutCase]:
    """
    Auto-fill whatever the player left open and score it
    exactly like the manual path. Mutates the given state.
    """
    case = classify_timeout(state)
    if case is None:
        return None

    state.time_remaining = 0
    state.timer_expired = True

    if case == TimeoutCase.NO_PREDICTION:
        value = state.slider_value if slider_value is None else slider_value
        state.prediction = value
        apply_decision(state, Decision.ALLOW, game_type)
        state.timeout_message = timeout_message(case, value)

    elif case == TimeoutCase.NO_DECISION:
        apply_decision(state, Decision.ALLOW, game_type)
        state.timeout_message = timeout_message(case)

    else:
        state.timeout_message = timeout_message(case)

    logger.info(
        "timeout episode=%s round=%s case=%s",
        state.episode,
        state.round,
        case.value,
    )
    return case
