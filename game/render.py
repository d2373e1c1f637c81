from typing import Optional

from rich.console import Group
from rich.table import Table
from rich.text import Text

from core.config import GameConfig
from core.constants import MAX_ELEVATION, MIN_ELEVATION, TOTAL_EPISODES, TOTAL_ROUNDS
from core.state import NODE_LABELS, Decision, GameState, NodeId, NodeState, Phase

LOW_COLOR = (45, 49, 80)
HIGH_COLOR = (78, 204, 163)

TRACK_WIDTH = 36


def elevation_color(elevation: float) -> str:
    span = MAX_ELEVATION - MIN_ELEVATION
    t = (elevation - MIN_ELEVATION) / span if span else 0.0
    r, g, b = (
        round(lo + (hi - lo) * t)
        for lo, hi in zip(LOW_COLOR, HIGH_COLOR)
    )
    return f"rgb({r},{g},{b})"


def track_revealed(state: GameState) -> bool:
    # the track level is what the player predicts
    return state.phase in (Phase.RESOLVED, Phase.GAME_OVER)


def train_position(state: GameState) -> NodeId:
    if not track_revealed(state) or state.decision != Decision.ALLOW:
        return NodeId.STATION_A
    if state.train_trapped:
        return NodeId.TRACK
    return NodeId.STATION_B


def _level_text(node_id: NodeId, node: NodeState, state: GameState) -> str:
    if node_id == NodeId.TRACK and not track_revealed(state):
        return "?"
    return f"{node.flood_level:.1f}%"


def render_map(state: GameState) -> Text:
    """
    One-line subway map: A ---- track ---- B, with the train marker.
    """
    train_at = train_position(state)
    half = TRACK_WIDTH // 2

    text = Text()
    for i, (node_id, node) in enumerate(state.nodes()):
        marker = "[T]" if train_at == node_id else "(o)"
        style = elevation_color(node.elevation)
        if train_at == node_id and state.train_trapped:
            style = "bold red"
        text.append(marker, style=style)
        if i < 2:
            text.append("-" * half, style=elevation_color(state.track.elevation))

    if track_revealed(state) and state.train_trapped:
        text.append("  TRAPPED", style="bold red")
    return text


def render_nodes(state: GameState) -> Table:
    table = Table(expand=False)
    table.add_column("Node")
    table.add_column("Elevation", justify="right")
    table.add_column("Water", justify="right")
    table.add_column("Change", justify="right")

    for node_id, node in state.nodes():
        revealed = node_id != NodeId.TRACK or track_revealed(state)
        change = f"{node.increase_this_round:+.1f}" if revealed else "-"
        table.add_row(
            Text(NODE_LABELS[node_id]),
            Text(f"{node.elevation}m", style=elevation_color(node.elevation)),
            _level_text(node_id, node, state),
            change,
        )
    return table


def render_status(state: GameState, config: Optional[GameConfig] = None) -> Text:
    lines = [
        f"Episode: {state.episode}/{TOTAL_EPISODES}",
        f"Round: {state.round}/{TOTAL_ROUNDS}",
        f"Score: {state.score:g}",
        f"Time left: {state.time_remaining}s",
        f"Phase: {state.phase.value}",
    ]
    if state.prediction is not None:
        lines.append(f"Prediction: {state.prediction:g}%")
    if state.decision is not None:
        lines.append(f"Decision: {state.decision.value}")
    if config is not None:
        lines.append(
            f"Game: {config.game_type.value} / {config.difficulty.value} / {config.game_mode.value}"
        )
    return Text("\n".join(lines))


def render(state: GameState, config: Optional[GameConfig] = None) -> Group:
    """
    Pure projection of the state; nothing here feeds back into the game.
    """
    parts = [render_map(state), render_nodes(state), render_status(state, config)]
    if state.timeout_message:
        parts.append(Text(state.timeout_message, style="yellow"))
    return Group(*parts)
