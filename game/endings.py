from enum import Enum
from typing import Optional

from core.constants import TOTAL_EPISODES, TOTAL_ROUNDS
from core.state import GameState, Phase


class EndingType(Enum):
    TRAIN_TRAPPED = "train_trapped"
    ROUNDS_EXHAUSTED = "rounds_exhausted"
    GAME_COMPLETE = "game_complete"


class Ending:
    def __init__(self, ending_type: EndingType, reason: str):
        self.type = ending_type
        self.reason = reason


def check_episode_end(state: GameState) -> Optional[Ending]:
    """
    Check whether the current episode is over and waiting for its survey.
    """
    if state.phase != Phase.RESOLVED:
        return None

    # --- Trapped train ---
    if state.train_trapped:
        return Ending(
            EndingType.TRAIN_TRAPPED,
            "The train was admitted onto a flooded track and is trapped. The episode ends here.",
        )

    # --- Last round played ---
    if state.round >= TOTAL_ROUNDS:
        return Ending(
            EndingType.ROUNDS_EXHAUSTED,
            "All rounds of this episode have been played.",
        )

    return None


def check_game_end(state: GameState) -> Optional[Ending]:
    if state.game_over:
        return Ending(
            EndingType.GAME_COMPLETE,
            f"All {TOTAL_EPISODES} episodes are complete.",
        )
    return None
