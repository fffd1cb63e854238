"""Engine exceptions."""


class GameError(ValueError):
    """An action violated a rule precondition (wrong turn, locked card, ...)."""


class NotFoundError(GameError, LookupError):
    """A referenced player, card or target does not exist."""


class GameOverError(GameError):
    """The game already reached a terminal status."""
