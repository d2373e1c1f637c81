import logging
import os
import time
from typing import Callable, Tuple, TypeVar

from rich.console import Console

from core.config import config_from_env
from core.errors import GameError
from core.state import Phase
from game.cli import prompt_config, prompt_decision, prompt_prediction, prompt_survey
from game.render import render
from game.simulation import FloodGame

T = TypeVar("T")

LOG_LEVEL_ENV = "FLOOD_GAME_LOG_LEVEL"

console = Console()


def configure_logging() -> None:
    logging.basicConfig(
        level=os.getenv(LOG_LEVEL_ENV, "WARNING").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _timed(prompt: Callable[[], T]) -> Tuple[T, float]:
    started = time.monotonic()
    value = prompt()
    return value, time.monotonic() - started


def _run_clock(game: FloodGame, elapsed: float) -> bool:
    """
    Feed the time spent at a prompt into the game as ticks.
    Returns True when the round timed out while the player was typing.
    """
    was_expired = game.state.timer_expired
    game.tick(int(elapsed))
    fired = game.state.timer_expired and not was_expired
    if fired and game.state.timeout_message:
        console.print(f"\n[yellow]{game.state.timeout_message}[/yellow]")
    return fired


def main():
    configure_logging()

    config = prompt_config(config_from_env())
    game = FloodGame(config)

    console.print("\n[bold]Subway Flood Prediction Game[/bold]")
    console.print(
        f"Each round you have {game.params.time_remaining}s to predict and decide."
    )
    input("\n[ENTER] Start...")
    game.begin()

    # --- MAIN LOOP ---
    while not game.state.game_over:
        state = game.state

        print("\n==============================")
        print(f"EPISODE {state.episode} / ROUND {state.round}")
        print("==============================")
        console.print(render(state, game.config))

        try:
            if state.phase == Phase.PREDICTING:
                value, elapsed = _timed(lambda: prompt_prediction(state.slider_value))
                if not _run_clock(game, elapsed):
                    game.submit_prediction(value)

            elif state.phase == Phase.DECIDING:
                allow, elapsed = _timed(prompt_decision)
                if not _run_clock(game, elapsed):
                    game.submit_decision(allow)

            elif state.phase == Phase.RESOLVED:
                ending = game.episode_ending()
                if ending:
                    console.print(f"\n[bold]{ending.reason}[/bold]")
                    answers = prompt_survey(state.episode)
                    game.advance_episode(answers)
                else:
                    _, elapsed = _timed(lambda: input("\n[ENTER] Next round..."))
                    _run_clock(game, elapsed)
                    game.advance_round()

        except GameError as exc:
            console.print(f"[red]{exc}[/red]")

    # --- END OF GAME ---
    console.print("\n=== END OF GAME ===")
    for episode, score in enumerate(game.state.episode_scores, start=1):
        console.print(f"Episode {episode}: {score:g}")


if __name__ == "__main__":
    main()
