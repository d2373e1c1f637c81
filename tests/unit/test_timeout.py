import pytest

from core.config import GameType
from core.state import Decision, GameState, Phase
from game.timeout import TimeoutCase, classify_timeout, resolve_timeout, timeout_message


def _state(phase=Phase.PREDICTING, round_number=3):
    state = GameState.initial(elevations=(5, 5, 5))
    state.phase = phase
    state.round = round_number
    state.timer_running = True
    return state


@pytest.mark.unit
def test_no_prediction_takes_slider_and_allows():
    state = _state()
    case = resolve_timeout(state=state, game_type=GameType.PUNISHMENT, slider_value=40)

    assert case == TimeoutCase.NO_PREDICTION
    assert state.prediction == 40
    assert state.decision == Decision.ALLOW
    assert state.phase == Phase.RESOLVED
    assert state.time_remaining == 0
    assert state.timer_expired
    assert "40%" in state.timeout_message


@pytest.mark.unit
def test_no_prediction_defaults_to_current_slider():
    state = _state()
    state.slider_value = 65
    resolve_timeout(state=state, game_type=GameType.PUNISHMENT)
    assert state.prediction == 65


@pytest.mark.unit
def test_no_decision_allows_and_scores():
    state = _state(Phase.DECIDING, round_number=6)
    state.prediction = 30
    state.track.flood_level = 75

    case = resolve_timeout(state=state, game_type=GameType.PUNISHMENT)

    assert case == TimeoutCase.NO_DECISION
    assert state.prediction == 30
    assert state.decision == Decision.ALLOW
    assert state.train_trapped
    assert state.score == -200


@pytest.mark.unit
def test_already_resolved_only_sets_message():
    state = _state(Phase.RESOLVED)
    state.decision = Decision.DENY
    state.score = -10

    case = resolve_timeout(state=state, game_type=GameType.PUNISHMENT)

    assert case == TimeoutCase.ALREADY_RESOLVED
    assert state.score == -10
    assert state.decision == Decision.DENY
    assert state.timeout_message == timeout_message(TimeoutCase.ALREADY_RESOLVED)


@pytest.mark.unit
def test_nothing_to_resolve_after_episode_end():
    state = _state(Phase.RESOLVED, round_number=10)
    assert classify_timeout(state) is None
    assert resolve_timeout(state=state, game_type=GameType.REWARD) is None
    assert not state.timer_expired


@pytest.mark.unit
def test_messages():
    assert timeout_message(TimeoutCase.NO_PREDICTION, 25).startswith(
        "Time's up! Your prediction has been automatically set to 25%"
    )
    assert "Allow Passage" in timeout_message(TimeoutCase.NO_DECISION)
    assert "Next Round" in timeout_message(TimeoutCase.ALREADY_RESOLVED)


@pytest.mark.unit
def test_last_round_timeout_still_resolves():
    state = _state(Phase.DECIDING, round_number=10)
    state.prediction = 15

    case = resolve_timeout(state=state, game_type=GameType.REWARD)

    assert case == TimeoutCase.NO_DECISION
    assert state.decision == Decision.ALLOW
    assert state.score == 50
    assert state.episode_complete
    assert classify_timeout(state) is None
