import logging
from typing import Callable, Dict, List, Type

from fastapi import FastAPI, HTTPException

from api.schemas import (
    DecisionRequest,
    GameStateResponse,
    LogEntryOut,
    PredictionRequest,
    SessionRequest,
    SliderRequest,
    SurveyRequest,
    TickRequest,
    TimeoutRequest,
)
from api.state import SESSION
from core.config import GameConfig, random_assignment
from core.errors import ConfigurationError, GameError, InvalidTransition, OutOfRangeInput
from core.state import GameState

logger = logging.getLogger(__name__)

ERROR_STATUS: Dict[Type[GameError], int] = {
    InvalidTransition: 409,
    OutOfRangeInput: 422,
    ConfigurationError: 400,
}


app = FastAPI(title="Subway Flood Game API")


def _state_response() -> GameStateResponse:
    game = SESSION.game
    ending = game.episode_ending()
    return GameStateResponse(
        **game.snapshot(),
        ending=ending.type.value if ending else None,
        settings=game.config.to_dict(),
    )


def _apply(operation: Callable[[], GameState]) -> GameStateResponse:
    # one transition at a time: check, transition and commit see the same state
    with SESSION.lock:
        try:
            operation()
        except GameError as exc:
            status = ERROR_STATUS.get(type(exc), 400)
            logger.info("rejected: %s (%s)", exc, status)
            raise HTTPException(status_code=status, detail=str(exc)) from exc
        return _state_response()


@app.post("/session", response_model=GameStateResponse)
def create_session(payload: SessionRequest):
    def _create() -> GameState:
        if payload.assign:
            config = random_assignment()
        else:
            defaults = GameConfig()
            config = GameConfig.from_values(
                difficulty=payload.difficulty or defaults.difficulty,
                game_type=payload.game_type or defaults.game_type,
                game_mode=payload.game_mode or defaults.game_mode,
                seed=payload.seed,
            )
        return SESSION.reset(config).state

    return _apply(_create)


@app.get("/state", response_model=GameStateResponse)
def read_state():
    with SESSION.lock:
        return _state_response()


@app.post("/begin", response_model=GameStateResponse)
def begin():
    return _apply(SESSION.game.begin)


@app.post("/slider", response_model=GameStateResponse)
def move_slider(payload: SliderRequest):
    return _apply(lambda: SESSION.game.update_slider(payload.value))


@app.post("/prediction", response_model=GameStateResponse)
def submit_prediction(payload: PredictionRequest):
    return _apply(lambda: SESSION.game.submit_prediction(payload.value))


@app.post("/decision", response_model=GameStateResponse)
def submit_decision(payload: DecisionRequest):
    return _apply(lambda: SESSION.game.submit_decision(payload.allow))


@app.post("/tick", response_model=GameStateResponse)
def tick(payload: TickRequest):
    return _apply(lambda: SESSION.game.tick(payload.seconds))


@app.post("/timeout", response_model=GameStateResponse)
def timeout(payload: TimeoutRequest):
    return _apply(lambda: SESSION.game.timeout(payload.slider_value))


@app.post("/round/next", response_model=GameStateResponse)
def next_round():
    return _apply(SESSION.game.advance_round)


@app.post("/episode/next", response_model=GameStateResponse)
def next_episode(payload: SurveyRequest):
    return _apply(lambda: SESSION.game.advance_episode(payload.answers))


@app.post("/restart", response_model=GameStateResponse)
def restart():
    return _apply(SESSION.game.restart)


@app.get("/log", response_model=List[LogEntryOut])
def read_log():
    with SESSION.lock:
        entries = SESSION.game.log.to_dicts()
    return [LogEntryOut(**entry) for entry in entries]
