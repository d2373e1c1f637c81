import pytest

from game.cli import parse_decision, parse_prediction


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw,expected",
    [("", 25.0), ("40", 40.0), (" 12.5% ", 12.5), ("101", None), ("-3", None), ("lots", None)],
)
def test_parse_prediction(raw, expected):
    assert parse_prediction(raw, 25.0) == expected


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw,expected",
    [("a", True), ("Allow", True), ("y", True), ("d", False), ("DENY", False), ("no", False), ("maybe", None)],
)
def test_parse_decision(raw, expected):
    assert parse_decision(raw) is expected
