"""Draw resolution - a resource card or a pending event."""

from dataclasses import dataclass
from typing import Literal

from core.cards import EventCard, EventKind, Level, ResourceCard, Role
from core.errors import GameError
from core.game.log import push_log
from core.game.models import Game, LogType
from core.rng import SeededRng

ROLE_POOL: tuple[Role, ...] = (Role.DEV, Role.PM, Role.UX, Role.CONTRACTOR)
EVENT_POOL: tuple[EventKind, ...] = (EventKind.LAYOFF, EventKind.REORG, EventKind.COMPETITION, EventKind.PTO)


@dataclass(frozen=True)
class DrawResult:
    """What a draw produced."""

    type: Literal["RESOURCE", "EVENT"]
    card: ResourceCard | EventCard


def create_resource_card(game: Game, rng: SeededRng) -> ResourceCard:
    """Roll a role, then a level (ignored for contractors), then an id."""
    role = ROLE_POOL[rng.int(len(ROLE_POOL))]
    level = Level.from_roll(rng.next())
    card_id = f"R-{game.next_card_seq()}-{rng.int(9999)}"
    return ResourceCard.create(card_id, role, level)


def create_event_card(game: Game, rng: SeededRng) -> EventCard:
    """Roll an event kind, then an id."""
    kind = EVENT_POOL[rng.int(len(EVENT_POOL))]
    return EventCard(id=f"E-{game.next_card_seq()}-{rng.int(9999)}", kind=kind)


def draw_for_player(game: Game, player_id: str, rng: SeededRng) -> DrawResult:
    """
    Resolve the active player's single draw for this turn.

    A roll below resource_weight adds a resource card to the hand. Otherwise
    an event card becomes game.pending_event for later resolution. Either way
    the turn's draw is used up.

    Raises:
        NotFoundError: Unknown player
        GameError: Not this player's turn, already drew, or an event is
            still pending when another is drawn
    """
    player = game.get_player(player_id)
    if game.active_player != player_id:
        raise GameError("Not active player's turn")
    if game.drawn_this_turn:
        raise GameError("Already drew this turn")

    roll = rng.next()
    if roll < game.config.resource_weight:
        card = create_resource_card(game, rng)
        player.hand.append(card)
        push_log(
            game, player_id, game.turn, LogType.DRAW, f"Drew resource {card.role}",
            data={"card_id": card.id},
        )
        result = DrawResult(type="RESOURCE", card=card)
    else:
        if game.pending_event is not None:
            raise GameError("Pending event already awaiting acknowledgment")
        event = create_event_card(game, rng)
        game.pending_event = event
        push_log(
            game, player_id, game.turn, LogType.DRAW, f"Drew event {event.kind} (pending)",
            data={"event_id": event.id},
        )
        result = DrawResult(type="EVENT", card=event)

    game.drawn_this_turn = True
    return result
