import pytest

from core.random_source import RandomSource


class ScriptedRandom(RandomSource):
    """Replays a fixed list of uniforms."""

    def __init__(self, values):
        self.values = list(values)

    def random(self) -> float:
        return self.values.pop(0)


@pytest.fixture
def scripted():
    return ScriptedRandom


def _flood_track(game, level):
    # setup only: growth is random, so force the committed level directly
    game._state.track.flood_level = level


@pytest.fixture
def flood_track():
    return _flood_track
