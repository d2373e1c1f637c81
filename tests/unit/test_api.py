import time
from concurrent.futures import ThreadPoolExecutor

import pytest
from fastapi.testclient import TestClient

from api.main import app
from game import transitions

client = TestClient(app)


@pytest.fixture(autouse=True)
def fixed_session():
    response = client.post(
        "/session",
        json={"difficulty": "Easy", "game_type": "reward", "game_mode": "Fixed", "seed": 12},
    )
    assert response.status_code == 200
    return response.json()


@pytest.mark.unit
def test_new_session(fixed_session):
    assert fixed_session["round"] == 1
    assert fixed_session["episode"] == 1
    assert fixed_session["phase"] == "predicting"
    assert fixed_session["settings"]["difficulty"] == "Easy"
    assert set(fixed_session["nodes"]) == {"station_a", "track", "station_b"}


@pytest.mark.unit
def test_round_flow():
    client.post("/begin")
    client.post("/slider", json={"value": 35})
    state = client.post("/prediction", json={"value": 35}).json()
    assert state["phase"] == "deciding"

    state = client.post("/decision", json={"allow": False}).json()
    assert state["phase"] == "resolved"
    assert state["score"] == 40

    state = client.post("/round/next").json()
    assert state["round"] == 2
    assert state["prediction"] is None


@pytest.mark.unit
def test_out_of_order_is_conflict():
    response = client.post("/decision", json={"allow": True})
    assert response.status_code == 409
    assert client.get("/state").json()["version"] == 0


@pytest.mark.unit
def test_out_of_range_input():
    response = client.post("/slider", json={"value": 150})
    assert response.status_code == 422
    assert client.get("/state").json()["slider_value"] == 25.0


@pytest.mark.unit
def test_unknown_difficulty():
    response = client.post("/session", json={"difficulty": "Impossible"})
    assert response.status_code == 400


@pytest.mark.unit
def test_timeout_endpoint():
    state = client.post("/timeout", json={"slider_value": 45}).json()
    assert state["timer_expired"]
    assert state["prediction"] == 45
    assert state["decision"] == "allow"


@pytest.mark.unit
def test_tick_before_begin_does_nothing():
    state = client.post("/tick", json={"seconds": 25}).json()
    assert state["time_remaining"] == 20
    assert not state["timer_expired"]


@pytest.mark.unit
def test_episode_next_requires_finished_episode():
    response = client.post("/episode/next", json={"answers": {}})
    assert response.status_code == 409


@pytest.mark.unit
def test_log_export():
    client.post("/prediction", json={"value": 10})
    entries = client.get("/log").json()
    assert [entry["event"] for entry in entries] == ["start", "prediction"]
    assert entries[0]["settings"]["game_type"] == "reward"


@pytest.mark.unit
def test_restart():
    client.post("/prediction", json={"value": 10})
    state = client.post("/restart").json()
    assert state["phase"] == "predicting"
    assert state["prediction"] is None


@pytest.mark.unit
def test_concurrent_decisions_are_serialized(monkeypatch):
    client.post("/prediction", json={"value": 10})

    submit = transitions.submit_decision

    def slow_submit(*args, **kwargs):
        time.sleep(0.2)
        return submit(*args, **kwargs)

    monkeypatch.setattr(transitions, "submit_decision", slow_submit)

    def decide(_):
        return client.post("/decision", json={"allow": False}).status_code

    with ThreadPoolExecutor(max_workers=2) as pool:
        codes = sorted(pool.map(decide, range(2)))

    assert codes == [200, 409]
    events = [entry["event"] for entry in client.get("/log").json()]
    assert events.count("decision") == 1
    assert client.get("/state").json()["score"] == 40
