from typing import Any, Dict, List, Optional
from pydantic import BaseModel


class SessionRequest(BaseModel):
    difficulty: Optional[str] = None
    game_type: Optional[str] = None
    game_mode: Optional[str] = None
    seed: Optional[int] = None
    assign: bool = False


class SliderRequest(BaseModel):
    value: float


class PredictionRequest(BaseModel):
    value: float


class DecisionRequest(BaseModel):
    allow: bool


class TickRequest(BaseModel):
    seconds: int = 1


class TimeoutRequest(BaseModel):
    slider_value: Optional[float] = None


class SurveyRequest(BaseModel):
    answers: Dict[str, Any] = {}


class NodeOut(BaseModel):
    flood_level: float
    elevation: int
    is_failure_point: bool
    previous_flood_level: float
    increase_this_round: float


class GameStateResponse(BaseModel):
    version: int
    round: int
    episode: int
    score: float
    phase: str
    prediction: Optional[float]
    decision: Optional[str]
    time_remaining: int
    timer_running: bool
    timer_expired: bool
    timeout_message: Optional[str]
    slider_value: float
    train_trapped: bool
    game_over: bool
    episode_scores: List[float]
    nodes: Dict[str, NodeOut]
    ending: Optional[str] = None
    settings: Dict[str, Any]


class LogEntryOut(BaseModel):
    event: str
    round: int
    episode: int
    timestamp: str
    decision: Optional[str]
    prediction: Optional[float]
    state: Dict[str, Any]
    settings: Optional[Dict[str, Any]] = None
    parameters: Optional[Dict[str, Any]] = None
