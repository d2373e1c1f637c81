from __future__ import annotations

from datetime import datetime, UTC

from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Container, Horizontal
from textual.widgets import RichLog, Static

from core.config import GameConfig, config_from_env
from core.errors import GameError
from core.state import Phase
from game.log import RoundLogEntry
from game.render import render_map, render_nodes, render_status
from game.simulation import FloodGame

SLIDER_STEP = 5.0

HELP_TEXT = (
    "[s] start  [left/right] slider  [p] predict  "
    "[a] allow  [d] deny  [n] next  [r] restart  [q] quit"
)


class FloodTUI(App[None]):
    CSS = """
    #root {
        layout: vertical;
    }
    #top {
        layout: horizontal;
        height: 70%;
    }
    #map-panel {
        width: 60%;
        border: solid $border;
        padding: 1;
    }
    #log-panel {
        width: 40%;
        border: solid $border;
        padding: 1;
    }
    #bottom-panel {
        height: 30%;
        layout: horizontal;
    }
    #status-panel {
        width: 60%;
        border: solid $border;
        padding: 1;
    }
    #prediction-panel {
        width: 40%;
        border: solid $border;
        padding: 1;
    }
    #event-log {
        height: 1fr;
        overflow-x: hidden;
    }
    """

    BINDINGS = [
        ("s", "start", "Start"),
        ("left", "slider(-1)", "Lower"),
        ("right", "slider(1)", "Raise"),
        ("p", "predict", "Predict"),
        ("a", "decide(True)", "Allow"),
        ("d", "decide(False)", "Deny"),
        ("n", "next", "Next"),
        ("r", "restart", "Restart"),
        ("q", "quit", "Quit"),
        ("ctrl+c", "quit", "Quit"),
    ]

    def __init__(self, config: GameConfig | None = None) -> None:
        super().__init__()
        self._session_id = datetime.now(UTC).strftime("%Y%m%d-%H%M%S")
        self.game = FloodGame(config or config_from_env(), log_sink=self._on_log_entry)
        self._mounted = False

    def compose(self) -> ComposeResult:
        with Container(id="root"):
            with Horizontal(id="top"):
                with Container(id="map-panel"):
                    yield Static(id="map")
                    yield Static(id="nodes")
                with Container(id="log-panel"):
                    yield RichLog(id="event-log", highlight=True, markup=True)
            with Horizontal(id="bottom-panel"):
                with Container(id="status-panel"):
                    yield Static(id="status-bar")
                with Container(id="prediction-panel"):
                    yield Static(id="prediction-bar")

    def on_mount(self) -> None:
        self._mounted = True
        # arrow keys drive the slider, not the log scroll
        self.query_one("#event-log", RichLog).can_focus = False
        self._set_panel_titles()
        self._append_log_line(f"[SESSION] {self._session_id}")
        self._append_log_line(HELP_TEXT)
        self._refresh()
        self.set_interval(1.0, self._on_tick)

    # ------------------------------------------------------------------ clock

    def _on_tick(self) -> None:
        was_expired = self.game.state.timer_expired
        self.game.tick()
        if self.game.state.timer_expired and not was_expired:
            message = self.game.state.timeout_message
            if message:
                self._append_log_line(message, style="yellow")
        self._refresh()

    # ------------------------------------------------------------------ actions

    def action_start(self) -> None:
        self._run(self.game.begin)

    def action_slider(self, direction: int) -> None:
        state = self.game.state
        if state.phase != Phase.PREDICTING:
            return
        value = min(100.0, max(0.0, state.slider_value + direction * SLIDER_STEP))
        self._run(lambda: self.game.update_slider(value))

    def action_predict(self) -> None:
        self._run(lambda: self.game.submit_prediction(self.game.state.slider_value))

    def action_decide(self, allow: bool) -> None:
        self._run(lambda: self.game.submit_decision(allow))

    def action_next(self) -> None:
        ending = self.game.episode_ending()
        if ending is None:
            self._run(self.game.advance_round)
            return
        if self.game.state.game_over:
            return
        self._append_log_line(f"[ENDING] {ending.reason}")
        self._run(self.game.advance_episode)

    def action_restart(self) -> None:
        self._run(self.game.restart)

    # ------------------------------------------------------------------ helpers

    def _run(self, operation) -> None:
        try:
            operation()
        except GameError as exc:
            self._append_log_line(str(exc), style="red")
        self._refresh()

    def _on_log_entry(self, entry: RoundLogEntry) -> None:
        if not self._mounted:
            return
        line = f"[E{entry.episode} R{entry.round}] {entry.event}"
        if entry.prediction is not None:
            line += f" prediction={entry.prediction:g}"
        if entry.decision:
            line += f" decision={entry.decision}"
        self._append_log_line(line)

    def _append_log_line(self, text: str, style: str = "") -> None:
        log = self.query_one("#event-log", RichLog)
        log.write(Text(text, style=style, no_wrap=False, overflow="fold"))

    def _refresh(self) -> None:
        state = self.game.state
        self.query_one("#map", Static).update(render_map(state))
        self.query_one("#nodes", Static).update(render_nodes(state))
        self.query_one("#status-bar", Static).update(render_status(state, self.game.config))

        if not state.timer_running and state.phase != Phase.GAME_OVER:
            prediction = "Press [s] to start the game."
        elif state.phase == Phase.PREDICTING:
            prediction = f"Prediction: {state.slider_value:g}%  (left/right, then p)"
        elif state.phase == Phase.DECIDING:
            prediction = "Admit the train? a = allow, d = deny"
        elif state.phase == Phase.RESOLVED:
            prediction = "Press n to continue."
        else:
            prediction = "Game over. Thank you for playing."
        self.query_one("#prediction-bar", Static).update(Text(prediction))

    def _set_panel_titles(self) -> None:
        self.query_one("#map-panel", Container).border_title = "Subway Map"
        self.query_one("#log-panel", Container).border_title = "Events"
        self.query_one("#status-panel", Container).border_title = "Game"
        self.query_one("#prediction-panel", Container).border_title = "Your Move"


if __name__ == "__main__":
    FloodTUI().run()
