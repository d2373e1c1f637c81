from dataclasses import dataclass, asdict
from datetime import datetime, UTC
from typing import Any, Callable, Dict, List, Optional

from core.state import GameState


@dataclass(frozen=True)
class RoundLogEntry:
    """
    Snapshot taken after an observable change.
    Export only; the simulation never reads it back.
    """
    event: str
    round: int
    episode: int
    timestamp: str
    state: Dict[str, Any]
    decision: Optional[str]
    prediction: Optional[float]
    settings: Optional[Dict[str, Any]] = None
    parameters: Optional[Dict[str, Any]] = None

    @classmethod
    def capture(
        cls,
        event: str,
        state: GameState,
        *,
        settings: Optional[Dict[str, Any]] = None,
        parameters: Optional[Dict[str, Any]] = None,
    ) -> "RoundLogEntry":
        return cls(
            event=event,
            round=state.round,
            episode=state.episode,
            timestamp=datetime.now(UTC).isoformat(),
            state=state.snapshot(),
            decision=state.decision.value if state.decision else None,
            prediction=state.prediction,
            settings=settings,
            parameters=parameters,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


LogSink = Callable[[RoundLogEntry], None]


class GameLog:
    def __init__(self) -> None:
        self.entries: List[RoundLogEntry] = []

    def append(self, entry: RoundLogEntry) -> None:
        self.entries.append(entry)

    def clear(self) -> None:
        self.entries = []

    def to_dicts(self) -> List[Dict[str, Any]]:
        return [entry.to_dict() for entry in self.entries]

    def __len__(self) -> int:
        return len(self.entries)
