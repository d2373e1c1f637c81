from typing import Any, Dict, Optional, Type, TypeVar

from core.config import Difficulty, GameConfig, GameMode, GameType
from core.constants import MAX_FLOOD_LEVEL, MIN_FLOOD_LEVEL

T = TypeVar("T")


def _choose_enum(enum_cls: Type[T], current: T) -> T:
    values = list(enum_cls)

    while True:
        print("\nChoose value (press ENTER or '-' to keep current):")
        for i, v in enumerate(values):
            marker = " (current)" if v == current else ""
            print(f"[{i}] {v.value}{marker}")

        choice = input("> ").strip()

        # Keep current value
        if choice == "" or choice == "-":
            return current

        # Try numeric choice
        if choice.isdigit():
            idx = int(choice)
            if 0 <= idx < len(values):
                return values[idx]

        print("Invalid choice. Try again.")


def prompt_config(current: GameConfig) -> GameConfig:
    print("\n--- Difficulty ---")
    difficulty = _choose_enum(Difficulty, current.difficulty)
    print("\n--- Game type ---")
    game_type = _choose_enum(GameType, current.game_type)
    print("\n--- Game mode ---")
    game_mode = _choose_enum(GameMode, current.game_mode)

    seed = current.seed
    if game_mode == GameMode.FIXED:
        raw = input(f"Seed (ENTER keeps {seed}): ").strip()
        if raw.lstrip("-").isdigit():
            seed = int(raw)

    return GameConfig(
        difficulty=difficulty,
        game_type=game_type,
        game_mode=game_mode,
        seed=seed,
    )


def parse_prediction(raw: str, default: float) -> Optional[float]:
    raw = raw.strip().rstrip("%")
    if raw == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        return None
    if not MIN_FLOOD_LEVEL <= value <= MAX_FLOOD_LEVEL:
        return None
    return value


def prompt_prediction(default: float) -> float:
    while True:
        raw = input(
            f"\nPredict the track node water level in % (ENTER keeps {default:g}): "
        )
        value = parse_prediction(raw, default)
        if value is not None:
            return value
        print("Enter a number between 0 and 100.")


def parse_decision(raw: str) -> Optional[bool]:
    choice = raw.strip().lower()
    if choice in ("a", "allow", "y", "yes"):
        return True
    if choice in ("d", "deny", "n", "no"):
        return False
    return None


def prompt_decision() -> bool:
    while True:
        allow = parse_decision(input("Admit the train? [a]llow / [d]eny: "))
        if allow is not None:
            return allow
        print("Invalid choice. Try again.")


def prompt_survey(episode: int) -> Dict[str, Any]:
    print(f"\n--- Episode {episode} survey ---")
    notes = input("Anything to note about this episode? (ENTER to skip) ").strip()
    return {"notes": notes} if notes else {}
