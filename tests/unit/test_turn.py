import pytest

from core.config import Difficulty, parameters_for
from core.random_source import SeededRandom
from core.state import GameState, NodeId
from game.turn import apply_growth, update_flood_levels

MEDIUM = parameters_for(Difficulty.MEDIUM)


@pytest.mark.unit
def test_growth_only_at_failure_points(scripted):
    state = GameState.initial(elevations=(5, 5, 5), failure_points=(NodeId.STATION_A,))
    apply_growth(state=state, rng=scripted([0.5, 0.25]), params=MEDIUM)

    assert state.station_a.flood_level == 7.0
    assert state.track.flood_level == 0
    assert state.station_b.flood_level == 0
    assert state.flood_debug[0]["step"] == "growth"


@pytest.mark.unit
def test_round_records_previous_levels(scripted):
    state = GameState.initial(elevations=(5, 5, 5), failure_points=(NodeId.STATION_A,))
    state.station_a.flood_level = 50

    update_flood_levels(
        state=state,
        rng=scripted([0.5, 0.25]),
        difficulty=Difficulty.MEDIUM,
        params=MEDIUM,
    )

    assert state.station_a.previous_flood_level == 50
    assert state.station_a.flood_level == 57
    assert state.station_a.increase_this_round == 7
    # 57 * 0.2 = 11.4 -> 12
    assert state.track.flood_level == 12
    assert state.track.previous_flood_level == 0


@pytest.mark.unit
def test_levels_stay_in_range():
    rng = SeededRandom(3)
    state = GameState.initial(elevations=(9, 0, 2), failure_points=(NodeId.STATION_A,))
    hard = parameters_for(Difficulty.HARD)
    for _ in range(30):
        update_flood_levels(state=state, rng=rng, difficulty=Difficulty.HARD, params=hard)
        for _, node in state.nodes():
            assert 0 <= node.flood_level <= 100


@pytest.mark.unit
def test_debug_reset_each_round(scripted):
    state = GameState.initial(elevations=(5, 5, 5))
    state.flood_debug = [{"step": "stale"}]
    update_flood_levels(
        state=state,
        rng=scripted([]),
        difficulty=Difficulty.MEDIUM,
        params=MEDIUM,
    )
    assert state.flood_debug == []
