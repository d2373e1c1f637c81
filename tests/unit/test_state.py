import pytest

from core.state import GameState, NodeId, Phase


@pytest.mark.unit
def test_initial_state_defaults():
    state = GameState.initial(elevations=(3, 7, 1), failure_points=(NodeId.TRACK,))
    assert state.round == 1
    assert state.episode == 1
    assert state.score == 0
    assert state.phase == Phase.PREDICTING
    assert state.time_remaining == 20
    assert state.slider_value == 25.0
    assert not state.timer_running
    assert [node.elevation for _, node in state.nodes()] == [3, 7, 1]
    assert state.failure_points() == [NodeId.TRACK]
    assert all(node.flood_level == 0 for _, node in state.nodes())


@pytest.mark.unit
def test_clamp_levels():
    state = GameState.initial(elevations=(5, 5, 5))
    state.station_a.flood_level = 130
    state.track.flood_level = -4
    state.clamp_levels()
    assert state.station_a.flood_level == 100
    assert state.track.flood_level == 0


@pytest.mark.unit
def test_copy_is_independent():
    state = GameState.initial(elevations=(5, 5, 5))
    clone = state.copy()
    clone.track.flood_level = 42
    clone.episode_scores.append(-10)
    assert state.track.flood_level == 0
    assert state.episode_scores == []


@pytest.mark.unit
def test_snapshot_is_plain_data():
    state = GameState.initial(elevations=(2, 4, 6), failure_points=(NodeId.STATION_B,))
    snap = state.snapshot()
    assert snap["phase"] == "predicting"
    assert snap["decision"] is None
    assert set(snap["nodes"]) == {"station_a", "track", "station_b"}
    assert snap["nodes"]["station_b"]["is_failure_point"]
    assert snap == state.copy().snapshot()


@pytest.mark.unit
def test_episode_complete():
    state = GameState.initial(elevations=(5, 5, 5))
    state.phase = Phase.RESOLVED
    assert not state.episode_complete

    state.train_trapped = True
    assert state.episode_complete

    state.train_trapped = False
    state.round = 10
    assert state.episode_complete
