import threading
from typing import Optional

from core.config import GameConfig, config_from_env
from game.simulation import FloodGame


class GameSession:
    """
    Shared in-memory game session.
    One participant, one game at a time.
    Endpoints run in a threadpool, so every read and
    transition happens under `lock`.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        self.game = FloodGame(config or config_from_env())
        self.lock = threading.Lock()

    def reset(self, config: GameConfig) -> FloodGame:
        self.game.initialize(config)
        return self.game


# SINGLETON (intentional for now)
SESSION = GameSession()
