import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from core.assignment import assign_episode
from core.config import GameConfig
from core.random_source import RandomSource, make_random_source
from core.state import GameState

from game import transitions
from game.endings import Ending, check_episode_end, check_game_end
from game.log import GameLog, LogSink, RoundLogEntry

logger = logging.getLogger(__name__)


@dataclass
class RoundOutcome:
    state: GameState
    score_change: float
    ending: Optional[Ending]


class FloodGame:
    """
    Owner of the canonical game state.

    All input goes through this object one call at a time; each call
    runs a pure transition and commits the result. The random source
    is only touched from inside those transitions.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        *,
        log_sink: Optional[LogSink] = None,
        rng: Optional[RandomSource] = None,
    ) -> None:
        self.log_sink = log_sink
        self.log = GameLog()
        self.surveys: List[Dict[str, Any]] = []
        self._rng_override = rng
        self.initialize(config or GameConfig())

    # ------------------------------------------------------------------ setup

    def initialize(self, config: GameConfig) -> GameState:
        self.config = config
        self.params = config.parameters
        self.rng = self._rng_override or make_random_source(config.game_mode, config.seed)
        self.surveys = []
        self.log.clear()

        layout = assign_episode(
            difficulty=config.difficulty,
            params=self.params,
            rng=self.rng,
        )
        self._state = GameState.initial(
            elevations=layout.elevations,
            failure_points=layout.failure_points,
            time_remaining=self.params.time_remaining,
        )

        logger.info(
            "game initialized difficulty=%s type=%s mode=%s seed=%s",
            config.difficulty.value,
            config.game_type.value,
            config.game_mode.value,
            config.seed,
        )
        self._emit("start", include_settings=True)
        return self.state

    def restart(self) -> GameState:
        """
        Back to episode 1. Fixed mode replays from the starting seed.
        """
        self._rng_override = None
        return self.initialize(self.config)

    # ------------------------------------------------------------------ reads

    @property
    def state(self) -> GameState:
        """
        Detached copy of the committed state.
        Changes only go through the input methods below.
        """
        return self._state.copy()

    def snapshot(self) -> Dict[str, Any]:
        return self._state.snapshot()

    def episode_ending(self) -> Optional[Ending]:
        return check_game_end(self._state) or check_episode_end(self._state)

    # ------------------------------------------------------------------ input

    def begin(self) -> GameState:
        return self._commit(transitions.begin(self._state), "begin")

    def update_slider(self, value: float) -> GameState:
        return self._commit(transitions.update_slider(self._state, value), None)

    def submit_prediction(self, value: float) -> GameState:
        return self._commit(transitions.submit_prediction(self._state, value), "prediction")

    def submit_decision(self, allow: bool) -> GameState:
        return self._commit(
            transitions.submit_decision(self._state, allow, game_type=self.config.game_type),
            "decision",
        )

    def resolve_round(self, prediction: float, allow: bool) -> RoundOutcome:
        """
        Prediction and decision in one go, for scripted play.
        """
        before = self._state.score
        self.submit_prediction(prediction)
        self.submit_decision(allow)
        return RoundOutcome(
            state=self.state,
            score_change=self._state.score - before,
            ending=self.episode_ending(),
        )

    # ------------------------------------------------------------------ clock

    def tick(self, seconds: int = 1) -> GameState:
        new = transitions.tick(self._state, game_type=self.config.game_type, seconds=seconds)
        event = "timeout" if new.timer_expired and not self._state.timer_expired else None
        return self._commit(new, event)

    def timeout(self, slider_value: Optional[float] = None) -> GameState:
        return self._commit(
            transitions.timeout(
                self._state,
                game_type=self.config.game_type,
                slider_value=slider_value,
            ),
            "timeout",
        )

    # ------------------------------------------------------------------ progression

    def advance_round(self) -> GameState:
        return self._commit(
            transitions.advance_round(
                self._state,
                rng=self.rng,
                difficulty=self.config.difficulty,
                params=self.params,
            ),
            "round",
        )

    def advance_episode(self, survey: Optional[Dict[str, Any]] = None) -> GameState:
        new = transitions.advance_episode(
            self._state,
            rng=self.rng,
            difficulty=self.config.difficulty,
            params=self.params,
        )
        self.surveys.append(
            {"episode": self._state.episode, "answers": dict(survey or {})}
        )
        if new.game_over:
            return self._commit(new, "game_over")
        return self._commit(new, "episode", include_settings=True)

    # ------------------------------------------------------------------ internals

    def _commit(
        self,
        new: GameState,
        event: Optional[str],
        *,
        include_settings: bool = False,
    ) -> GameState:
        if new is self._state:
            return self.state
        self._state = new
        if event:
            self._emit(event, include_settings=include_settings)
        return self.state

    def _emit(self, event: str, *, include_settings: bool = False) -> None:
        entry = RoundLogEntry.capture(
            event,
            self._state,
            settings=self.config.to_dict() if include_settings else None,
            parameters=self.params.to_dict() if include_settings else None,
        )
        self.log.append(entry)

        if self.log_sink is None:
            return
        try:
            self.log_sink(entry)
        except Exception:
            # delivery is the sink's concern
            logger.warning("log sink failed for event %s", event, exc_info=True)
