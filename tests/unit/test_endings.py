import pytest

from core.state import Decision, GameState, Phase
from game.endings import EndingType, check_episode_end, check_game_end


def _resolved(**overrides):
    state = GameState.initial(elevations=(5, 5, 5))
    state.phase = Phase.RESOLVED
    state.decision = Decision.DENY
    for key, value in overrides.items():
        setattr(state, key, value)
    return state


@pytest.mark.unit
def test_no_ending_mid_episode():
    assert check_episode_end(_resolved(round=4)) is None
    assert check_episode_end(GameState.initial(elevations=(5, 5, 5))) is None


@pytest.mark.unit
def test_trapped_ending():
    ending = check_episode_end(_resolved(round=3, decision=Decision.ALLOW, train_trapped=True))
    assert ending.type == EndingType.TRAIN_TRAPPED


@pytest.mark.unit
def test_last_round_ending():
    assert check_episode_end(_resolved(round=10)).type == EndingType.ROUNDS_EXHAUSTED


@pytest.mark.unit
def test_game_end():
    assert check_game_end(_resolved()) is None
    ending = check_game_end(_resolved(game_over=True, phase=Phase.GAME_OVER))
    assert ending.type == EndingType.GAME_COMPLETE
