import os
import random
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Optional, Type, TypeVar

from core.constants import (
    DEFAULT_SEED,
    ELEVATION_DIFFERENCE_FACTOR,
    FAILURE_POINT_NUM,
    FLOOD_DIFFERENCE_FACTOR,
    FLOOD_LOG_NORMAL_MU,
    FLOOD_LOG_NORMAL_SIGMA,
    MAX_ELEVATION,
    MIN_ELEVATION,
    PROPAGATION_FLOOD_INCREASE,
    PROPAGATION_THRESHOLD,
    TIME_REMAINING,
)
from core.errors import ConfigurationError

E = TypeVar("E", bound=Enum)

ENV_DIFFICULTY = "FLOOD_GAME_DIFFICULTY"
ENV_GAME_TYPE = "FLOOD_GAME_TYPE"
ENV_GAME_MODE = "FLOOD_GAME_MODE"
ENV_SEED = "FLOOD_GAME_SEED"


class Difficulty(Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class GameType(Enum):
    PUNISHMENT = "punishment"
    REWARD = "reward"


class GameMode(Enum):
    FIXED = "Fixed"
    RANDOM = "Random"


@dataclass(frozen=True)
class GameParameters:
    """
    Tuning derived from difficulty.
    Immutable for the whole run.
    """
    flood_log_normal_mu: float
    flood_log_normal_sigma: float
    propagation_threshold: float
    propagation_flood_increase: float = PROPAGATION_FLOOD_INCREASE
    elevation_difference_factor: float = ELEVATION_DIFFERENCE_FACTOR
    flood_difference_factor: float = FLOOD_DIFFERENCE_FACTOR
    time_remaining: int = TIME_REMAINING
    failure_point_num: int = FAILURE_POINT_NUM
    min_elevation: int = MIN_ELEVATION
    max_elevation: int = MAX_ELEVATION

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


DIFFICULTY_PARAMETERS: Dict[Difficulty, GameParameters] = {
    Difficulty.EASY: GameParameters(
        flood_log_normal_mu=5,
        flood_log_normal_sigma=0.6,
        propagation_threshold=15,
    ),
    Difficulty.MEDIUM: GameParameters(
        flood_log_normal_mu=FLOOD_LOG_NORMAL_MU,
        flood_log_normal_sigma=1.1,
        propagation_threshold=PROPAGATION_THRESHOLD,
    ),
    Difficulty.HARD: GameParameters(
        flood_log_normal_mu=9,
        flood_log_normal_sigma=1.6,
        propagation_threshold=5,
    ),
}


def parameters_for(difficulty: Difficulty) -> GameParameters:
    try:
        return DIFFICULTY_PARAMETERS[difficulty]
    except KeyError:
        raise ConfigurationError(f"Unsupported difficulty: {difficulty!r}") from None


def _coerce_enum(enum_cls: Type[E], value: Any, label: str) -> E:
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        wanted = value.strip().lower()
        for member in enum_cls:
            if wanted in (member.value.lower(), member.name.lower()):
                return member
    raise ConfigurationError(f"Unsupported {label}: {value!r}")


@dataclass(frozen=True)
class GameConfig:
    """
    Settings chosen once per participant.
    The seed only matters in Fixed mode.
    """
    difficulty: Difficulty = Difficulty.MEDIUM
    game_type: GameType = GameType.PUNISHMENT
    game_mode: GameMode = GameMode.RANDOM
    seed: int = DEFAULT_SEED

    @classmethod
    def from_values(
        cls,
        *,
        difficulty: Any = Difficulty.MEDIUM,
        game_type: Any = GameType.PUNISHMENT,
        game_mode: Any = GameMode.RANDOM,
        seed: Optional[Any] = None,
    ) -> "GameConfig":
        if seed is None:
            seed = DEFAULT_SEED
        try:
            seed = int(seed)
        except (TypeError, ValueError):
            raise ConfigurationError(f"Seed must be an integer: {seed!r}") from None

        return cls(
            difficulty=_coerce_enum(Difficulty, difficulty, "difficulty"),
            game_type=_coerce_enum(GameType, game_type, "game type"),
            game_mode=_coerce_enum(GameMode, game_mode, "game mode"),
            seed=seed,
        )

    @property
    def parameters(self) -> GameParameters:
        return parameters_for(self.difficulty)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "difficulty": self.difficulty.value,
            "game_type": self.game_type.value,
            "game_mode": self.game_mode.value,
            "seed": self.seed,
        }


def config_from_env(environ: Optional[Dict[str, str]] = None) -> GameConfig:
    env = os.environ if environ is None else environ
    return GameConfig.from_values(
        difficulty=env.get(ENV_DIFFICULTY, Difficulty.MEDIUM.value),
        game_type=env.get(ENV_GAME_TYPE, GameType.PUNISHMENT.value),
        game_mode=env.get(ENV_GAME_MODE, GameMode.RANDOM.value),
        seed=env.get(ENV_SEED),
    )


def random_assignment(rng: Optional[random.Random] = None) -> GameConfig:
    """
    Assign a participant to one difficulty / game-type cell.
    Assigned games always run in Random mode with a fresh seed.
    """
    rng = rng or random.Random()
    combinations = [
        (difficulty, game_type)
        for difficulty in Difficulty
        for game_type in GameType
    ]
    difficulty, game_type = rng.choice(combinations)
    return GameConfig(
        difficulty=difficulty,
        game_type=game_type,
        game_mode=GameMode.RANDOM,
        seed=rng.randrange(1_000_000),
    )
