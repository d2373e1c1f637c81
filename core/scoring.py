from core.config import GameType
from core.constants import TOTAL_ROUNDS, TRAP_LEVEL
from core.errors import ConfigurationError
from core.state import Decision


# --- punishment ---
DENY_PENALTY = -10
TRAPPED_PENALTY_PER_ROUND = -50

# --- reward ---
DENY_REWARD = 40
PASSAGE_REWARD = 50


def is_trapped(decision: Decision, track_level: float) -> bool:
    return decision == Decision.ALLOW and track_level > TRAP_LEVEL


def remaining_rounds(round_number: int) -> int:
    return TOTAL_ROUNDS - round_number


def score_delta(
    game_type: GameType,
    decision: Decision,
    trapped: bool,
    rounds_left: int,
) -> float:
    """
    Score change for one resolved round.
    """
    if game_type == GameType.PUNISHMENT:
        if decision == Decision.DENY:
            return DENY_PENALTY
        if trapped:
            return TRAPPED_PENALTY_PER_ROUND * rounds_left
        return 0

    if game_type == GameType.REWARD:
        if decision == Decision.DENY:
            return DENY_REWARD
        if trapped:
            return 0
        return PASSAGE_REWARD

    raise ConfigurationError(f"Unsupported game type: {game_type!r}")
