"""Game status enumeration."""

from enum import Enum, auto


class GameStatus(Enum):
    """
    Game status machine states.

    Flow: ACTIVE → WON (target reached) or ACTIVE → LOST (turn limit passed)
    """

    # Play in progress
    ACTIVE = auto()

    # Some player completed the target number of features
    WON = auto()

    # The round counter passed max_turns
    LOST = auto()

    def __str__(self) -> str:
        return self.name.title()

    @property
    def is_terminal(self) -> bool:
        """Check if no further transition can leave this status."""
        return not VALID_TRANSITIONS[self]


# Valid status transitions
VALID_TRANSITIONS: dict[GameStatus, list[GameStatus]] = {
    GameStatus.ACTIVE: [GameStatus.WON, GameStatus.LOST],
    GameStatus.WON: [],  # Terminal state
    GameStatus.LOST: [],  # Terminal state
}
