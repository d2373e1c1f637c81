import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from core.constants import (
    DEFAULT_SLIDER_VALUE,
    MAX_FLOOD_LEVEL,
    MIN_FLOOD_LEVEL,
    TOTAL_ROUNDS,
    TIME_REMAINING,
)


class NodeId(Enum):
    # declaration order doubles as the elevation tie-break order
    STATION_A = 0
    TRACK = 1
    STATION_B = 2


NODE_LABELS: Dict[NodeId, str] = {
    NodeId.STATION_A: "Station A",
    NodeId.TRACK: "Track Node",
    NodeId.STATION_B: "Station B",
}


class Decision(Enum):
    ALLOW = "allow"
    DENY = "deny"

    @classmethod
    def from_bool(cls, allow: bool) -> "Decision":
        return cls.ALLOW if allow else cls.DENY


class Phase(Enum):
    PREDICTING = "predicting"
    DECIDING = "deciding"
    RESOLVED = "resolved"
    GAME_OVER = "game_over"


# --------------------------------------------------
# NODES
# --------------------------------------------------

@dataclass
class NodeState:
    flood_level: float = 0.0
    elevation: int = 0
    is_failure_point: bool = False
    previous_flood_level: float = 0.0
    increase_this_round: float = 0.0

    def clamp(self) -> None:
        self.flood_level = max(MIN_FLOOD_LEVEL, min(MAX_FLOOD_LEVEL, self.flood_level))


# --------------------------------------------------
# GAME STATE
# --------------------------------------------------

@dataclass
class GameState:
    round: int
    episode: int
    score: float
    station_a: NodeState
    track: NodeState
    station_b: NodeState
    prediction: Optional[float] = None
    decision: Optional[Decision] = None
    phase: Phase = Phase.PREDICTING
    time_remaining: int = TIME_REMAINING
    timer_running: bool = False
    timer_expired: bool = False
    timeout_message: Optional[str] = None
    slider_value: float = DEFAULT_SLIDER_VALUE
    train_trapped: bool = False
    game_over: bool = False
    episode_scores: List[float] = field(default_factory=list)
    flood_debug: List[Dict[str, Any]] = field(default_factory=list)
    version: int = 0

    @classmethod
    def initial(
        cls,
        *,
        elevations: Tuple[int, int, int],
        failure_points: Tuple[NodeId, ...] = (),
        time_remaining: int = TIME_REMAINING,
    ) -> "GameState":
        """
        Factory for round 1 of episode 1.
        Elevations are given in declaration order.
        """
        state = cls(
            round=1,
            episode=1,
            score=0,
            station_a=NodeState(),
            track=NodeState(),
            station_b=NodeState(),
            time_remaining=time_remaining,
        )
        state.reset_nodes(elevations=elevations, failure_points=failure_points)
        return state

    def node(self, node_id: NodeId) -> NodeState:
        if node_id == NodeId.STATION_A:
            return self.station_a
        if node_id == NodeId.TRACK:
            return self.track
        return self.station_b

    def nodes(self) -> List[Tuple[NodeId, NodeState]]:
        return [(node_id, self.node(node_id)) for node_id in NodeId]

    def failure_points(self) -> List[NodeId]:
        return [node_id for node_id, node in self.nodes() if node.is_failure_point]

    def reset_nodes(
        self,
        *,
        elevations: Tuple[int, int, int],
        failure_points: Tuple[NodeId, ...],
    ) -> None:
        for node_id, elevation in zip(NodeId, elevations):
            node = self.node(node_id)
            node.flood_level = 0.0
            node.previous_flood_level = 0.0
            node.increase_this_round = 0.0
            node.elevation = elevation
            node.is_failure_point = node_id in failure_points

    def clamp_levels(self) -> None:
        for _, node in self.nodes():
            node.clamp()

    @property
    def episode_complete(self) -> bool:
        return self.phase == Phase.RESOLVED and (
            self.train_trapped or self.round >= TOTAL_ROUNDS
        )

    def copy(self) -> "GameState":
        return copy.deepcopy(self)

    def snapshot(self) -> Dict[str, Any]:
        """
        Plain, JSON-ready view of the state.
        Two equal states always give equal snapshots.
        """
        def _node(node: NodeState) -> Dict[str, Any]:
            return {
                "flood_level": node.flood_level,
                "elevation": node.elevation,
                "is_failure_point": node.is_failure_point,
                "previous_flood_level": node.previous_flood_level,
                "increase_this_round": node.increase_this_round,
            }

        return {
            "version": self.version,
            "round": self.round,
            "episode": self.episode,
            "score": self.score,
            "phase": self.phase.value,
            "prediction": self.prediction,
            "decision": self.decision.value if self.decision else None,
            "time_remaining": self.time_remaining,
            "timer_running": self.timer_running,
            "timer_expired": self.timer_expired,
            "timeout_message": self.timeout_message,
            "slider_value": self.slider_value,
            "train_trapped": self.train_trapped,
            "game_over": self.game_over,
            "episode_scores": list(self.episode_scores),
            "nodes": {
                node_id.name.lower(): _node(node)
                for node_id, node in self.nodes()
            },
            "flood_debug": copy.deepcopy(self.flood_debug),
        }
