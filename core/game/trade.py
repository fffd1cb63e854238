"""Trading - the active player gives one resource card to another player."""

from dataclasses import dataclass

from core.cards import ResourceCard
from core.errors import GameError, NotFoundError
from core.game.log import push_log
from core.game.models import Game, LogType


@dataclass(frozen=True)
class TradeResult:
    """A completed one-way trade."""

    card_id: str
    from_player: str
    to_player: str


def trade_card(game: Game, from_player_id: str, to_player_id: str, card_id: str) -> TradeResult:
    """
    Move one resource card between hands, at most once per player turn.

    Raises:
        NotFoundError: Unknown player or card not in the giver's hand
        GameError: Giver is not active, self-trade, already traded this turn,
            or the card is not a resource card
    """
    if game.active_player != from_player_id:
        raise GameError("Not active player")
    if from_player_id == to_player_id:
        raise GameError("Cannot trade with self")
    giver = game.get_player(from_player_id)
    receiver = game.get_player(to_player_id)

    if giver.traded_this_turn:
        raise GameError("Trade already performed this turn")

    card = giver.find_card(card_id)
    if card is None:
        raise NotFoundError("Card not in hand")
    if not isinstance(card, ResourceCard):
        raise GameError("Only resource cards tradable")

    giver.remove_card(card_id)
    receiver.hand.append(card)
    giver.traded_this_turn = True

    push_log(
        game, from_player_id, game.turn, LogType.TRADE,
        f"Traded card {card_id} to {to_player_id}",
        data={"card_id": card_id, "to": to_player_id},
    )
    return TradeResult(card_id=card_id, from_player=from_player_id, to_player=to_player_id)
