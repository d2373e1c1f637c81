class GameError(Exception):
    """
    Base class for every rejected game operation.
    The state machine raises before mutating anything.
    """


class InvalidTransition(GameError):
    """Action submitted in a phase that does not accept it."""


class OutOfRangeInput(GameError):
    """Numeric input outside its allowed range."""


class ConfigurationError(GameError):
    """Unsupported difficulty, game type or game mode."""
