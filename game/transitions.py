"""
Pure state transitions of the round/episode machine.

Every function takes the committed state, validates the request and
returns a NEW state with its version bumped. Validation happens before
any copy or random draw, so a rejected call leaves both the state and
the random source untouched. Functions that have nothing to do return
the same object they were given.
"""

import logging
from typing import Optional

from core.assignment import assign_episode
from core.config import Difficulty, GameParameters, GameType
from core.constants import (
    DEFAULT_SLIDER_VALUE,
    MAX_FLOOD_LEVEL,
    MIN_FLOOD_LEVEL,
    TOTAL_EPISODES,
    TOTAL_ROUNDS,
)
from core.errors import InvalidTransition, OutOfRangeInput
from core.random_source import RandomSource
from core.rules import apply_decision
from core.state import Decision, GameState, Phase
from game.timeout import resolve_timeout
from game.turn import update_flood_levels

logger = logging.getLogger(__name__)


def _next(state: GameState) -> GameState:
    new = state.copy()
    new.version += 1
    return new


def _require_phase(state: GameState, phase: Phase, action: str) -> None:
    if state.phase != phase:
        raise InvalidTransition(
            f"Cannot {action} while {state.phase.value}"
        )


def _require_level(value: float, label: str) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise OutOfRangeInput(f"{label} must be a number, got {value!r}") from None
    if not MIN_FLOOD_LEVEL <= value <= MAX_FLOOD_LEVEL:
        raise OutOfRangeInput(
            f"{label} must be between {MIN_FLOOD_LEVEL:g} and {MAX_FLOOD_LEVEL:g}, got {value:g}"
        )
    return value


def _reset_round(state: GameState, params: GameParameters) -> None:
    state.prediction = None
    state.decision = None
    state.train_trapped = False
    state.slider_value = DEFAULT_SLIDER_VALUE
    state.time_remaining = params.time_remaining
    state.timer_expired = False
    state.timeout_message = None
    state.phase = Phase.PREDICTING


def timer_counts(state: GameState) -> bool:
    """
    The clock runs once the pre-game gate is closed and stops
    while an episode waits for its survey.
    """
    return (
        state.timer_running
        and not state.timer_expired
        and state.phase != Phase.GAME_OVER
        and not state.episode_complete
    )


# --------------------------------------------------
# PLAYER INPUT
# --------------------------------------------------

def begin(state: GameState) -> GameState:
    if state.phase == Phase.GAME_OVER:
        raise InvalidTransition("Cannot begin a finished game")
    if state.timer_running:
        return state

    new = _next(state)
    new.timer_running = True
    return new


def update_slider(state: GameState, value: float) -> GameState:
    _require_phase(state, Phase.PREDICTING, "move the prediction slider")
    value = _require_level(value, "Slider value")
    if value == state.slider_value:
        return state

    new = _next(state)
    new.slider_value = value
    return new


def submit_prediction(state: GameState, value: float) -> GameState:
    _require_phase(state, Phase.PREDICTING, "submit a prediction")
    value = _require_level(value, "Prediction")

    new = _next(state)
    new.prediction = value
    new.slider_value = value
    new.phase = Phase.DECIDING
    return new


def submit_decision(state: GameState, allow: bool, *, game_type: GameType) -> GameState:
    _require_phase(state, Phase.DECIDING, "submit a decision")

    new = _next(state)
    change = apply_decision(new, Decision.from_bool(allow), game_type)

    logger.info(
        "decision episode=%s round=%s decision=%s track=%.1f change=%+g trapped=%s",
        new.episode,
        new.round,
        new.decision.value,
        new.track.flood_level,
        change,
        new.train_trapped,
    )
    return new


# --------------------------------------------------
# CLOCK
# --------------------------------------------------

def tick(state: GameState, *, game_type: GameType, seconds: int = 1) -> GameState:
    if seconds < 0:
        raise OutOfRangeInput(f"Cannot tick backwards ({seconds})")
    if seconds == 0 or not timer_counts(state):
        return state

    new = _next(state)
    new.time_remaining = max(0, new.time_remaining - seconds)
    if new.time_remaining == 0:
        resolve_timeout(state=new, game_type=game_type)
    return new


def timeout(
    state: GameState,
    *,
    game_type: GameType,
    slider_value: Optional[float] = None,
) -> GameState:
    if state.phase == Phase.GAME_OVER:
        raise InvalidTransition("Cannot time out a finished game")
    if slider_value is not None:
        slider_value = _require_level(slider_value, "Slider value")
    if state.episode_complete:
        return state

    new = _next(state)
    resolve_timeout(state=new, game_type=game_type, slider_value=slider_value)
    return new


# --------------------------------------------------
# PROGRESSION
# --------------------------------------------------

def advance_round(
    state: GameState,
    *,
    rng: RandomSource,
    difficulty: Difficulty,
    params: GameParameters,
) -> GameState:
    _require_phase(state, Phase.RESOLVED, "advance the round")
    if state.train_trapped:
        raise InvalidTransition("The train is trapped; this episode is over")
    if state.round >= TOTAL_ROUNDS:
        raise InvalidTransition("Last round reached; advance the episode instead")

    new = _next(state)
    update_flood_levels(state=new, rng=rng, difficulty=difficulty, params=params)
    new.round += 1
    _reset_round(new, params)

    logger.info("round %s of episode %s", new.round, new.episode)
    return new


def advance_episode(
    state: GameState,
    *,
    rng: RandomSource,
    difficulty: Difficulty,
    params: GameParameters,
) -> GameState:
    if not state.episode_complete:
        raise InvalidTransition("The episode is still running")

    new = _next(state)
    new.episode_scores.append(new.score)

    if new.episode >= TOTAL_EPISODES:
        new.game_over = True
        new.phase = Phase.GAME_OVER
        new.timer_running = False
        logger.info("game over after %s episodes", new.episode)
        return new

    layout = assign_episode(difficulty=difficulty, params=params, rng=rng)
    new.reset_nodes(
        elevations=layout.elevations,
        failure_points=layout.failure_points,
    )
    new.flood_debug = []
    new.episode += 1
    new.round = 1
    new.score = 0
    _reset_round(new, params)

    logger.info("episode %s started", new.episode)
    return new
