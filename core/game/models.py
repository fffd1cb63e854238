"""Game aggregate - players, zones, log and the status machine."""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

from transitions import Machine

from core.cards import EventCard, FeatureCard, ResourceCard
from core.errors import NotFoundError
from core.game.rules import GameConfig
from core.game.state import GameStatus


def epoch_millis() -> int:
    return int(time.time() * 1000)


class LogType(Enum):
    """Action log entry categories."""

    START = "START"
    DRAW = "DRAW"
    TRADE = "TRADE"
    COMPLETE = "COMPLETE"
    EVENT = "EVENT"
    PASS = "PASS"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ActionLogEntry:
    """One immutable line of the audit log."""

    id: str
    ts: int
    player_id: str
    turn: int
    type: LogType
    message: str
    data: dict[str, Any] | None = field(default=None, compare=False)


@dataclass
class Challenge:
    """Pending competition deadline for one player."""

    must_complete_by_turn: int
    applied_turn: int


@dataclass
class PtoLock:
    """A card kept in hand but unusable until available_on_turn."""

    card_id: str
    available_on_turn: int


@dataclass
class Player:
    """A seat at the table."""

    id: str
    name: str
    seat: int
    hand: list[ResourceCard] = field(default_factory=list)
    active_feature: FeatureCard | None = None
    completed_features: list[str] = field(default_factory=list)
    score: int = 0
    challenge: Challenge | None = None
    pto_cards: list[PtoLock] = field(default_factory=list)
    traded_this_turn: bool = False

    def resource_cards(self) -> list[ResourceCard]:
        """Return the hand cards that carry a role."""
        return [c for c in self.hand if isinstance(c, ResourceCard)]

    def find_card(self, card_id: str) -> ResourceCard | None:
        """Return the hand card with this id, if held."""
        for card in self.hand:
            if card.id == card_id:
                return card
        return None

    def remove_card(self, card_id: str) -> ResourceCard | None:
        """Remove and return the hand card with this id, if held."""
        for idx, card in enumerate(self.hand):
            if card.id == card_id:
                return self.hand.pop(idx)
        return None

    def locked_card_ids(self, turn: int) -> set[str]:
        """Return ids under a PTO lock that has not matured by this turn."""
        return {lock.card_id for lock in self.pto_cards if lock.available_on_turn > turn}


@dataclass
class Game:
    """
    The live game aggregate.

    Every engine operation mutates one of these in place. The status field is
    driven by a transitions machine so WON and LOST can never be left.
    """

    STATES = [s.name.lower() for s in GameStatus]

    TRANSITIONS = [
        {"trigger": "win", "source": "active", "dest": "won"},
        {"trigger": "lose", "source": "active", "dest": "lost"},
    ]

    id: str
    created_at: int
    config: GameConfig
    players: list[Player]
    feature_deck: list[FeatureCard] = field(default_factory=list)
    discard_pile: list[FeatureCard] = field(default_factory=list)
    log: list[ActionLogEntry] = field(default_factory=list)
    turn: int = 1
    active_player: str = ""
    target_features: int = 0
    drawn_this_turn: bool = False
    pending_event: EventCard | None = None
    clock: Callable[[], int] = field(default=epoch_millis, repr=False, compare=False)
    card_seq: int = field(default=0, repr=False)
    log_seq: int = field(default=0, repr=False)

    def __post_init__(self) -> None:
        if not self.active_player and self.players:
            self.active_player = self.players[0].id

        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="active",
            auto_transitions=False,
            model_attribute="_machine_state",
        )

    @property
    def status(self) -> GameStatus:
        """Get current game status as enum."""
        return GameStatus[self._machine_state.upper()]  # type: ignore

    def get_player(self, player_id: str) -> Player:
        """Look up a player by id."""
        for player in self.players:
            if player.id == player_id:
                return player
        raise NotFoundError("Player not found")

    @property
    def current_player(self) -> Player:
        """Return the player whose turn it is."""
        return self.get_player(self.active_player)

    def next_card_seq(self) -> int:
        """Return a fresh per-game sequence number for generated card ids."""
        self.card_seq += 1
        return self.card_seq
