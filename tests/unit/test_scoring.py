import pytest

from core.config import GameType
from core.scoring import is_trapped, remaining_rounds, score_delta
from core.state import Decision


@pytest.mark.unit
@pytest.mark.parametrize(
    "game_type,decision,trapped,rounds_left,expected",
    [
        (GameType.PUNISHMENT, Decision.DENY, False, 5, -10),
        (GameType.PUNISHMENT, Decision.DENY, True, 5, -10),
        (GameType.PUNISHMENT, Decision.ALLOW, False, 5, 0),
        (GameType.PUNISHMENT, Decision.ALLOW, True, 3, -150),
        (GameType.REWARD, Decision.DENY, False, 5, 40),
        (GameType.REWARD, Decision.ALLOW, False, 5, 50),
        (GameType.REWARD, Decision.ALLOW, True, 5, 0),
    ],
)
def test_score_table(game_type, decision, trapped, rounds_left, expected):
    assert score_delta(game_type, decision, trapped, rounds_left) == expected


@pytest.mark.unit
def test_trapped_only_when_allowed_above_half():
    assert is_trapped(Decision.ALLOW, 50.1)
    assert not is_trapped(Decision.ALLOW, 50)
    assert not is_trapped(Decision.DENY, 90)


@pytest.mark.unit
def test_remaining_rounds():
    assert remaining_rounds(7) == 3
    assert remaining_rounds(10) == 0
