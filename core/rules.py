from core.config import GameType
from core.scoring import is_trapped, remaining_rounds, score_delta
from core.state import Decision, GameState, Phase


def apply_decision(state: GameState, decision: Decision, game_type: GameType) -> float:
    """
    Deterministic round resolution.
    Scores the decision against the current track level and
    moves the state to RESOLVED. Returns the score change.
    """
    trapped = is_trapped(decision, state.track.flood_level)
    change = score_delta(
        game_type,
        decision,
        trapped,
        remaining_rounds(state.round),
    )

    state.decision = decision
    state.train_trapped = trapped
    state.score += change
    state.phase = Phase.RESOLVED

    return change
