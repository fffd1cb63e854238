"""Turn and round progression, competition penalties and PTO timers."""

from dataclasses import dataclass

from core.game.log import push_log
from core.game.models import Game, LogType, Player
from core.game.state import GameStatus

PENALTY_DISCARDS = 2


@dataclass(frozen=True)
class TurnEndResult:
    """Where the game stands after a turn ends."""

    next_player_id: str
    turn: int
    status: GameStatus


def tick_timers(game: Game) -> None:
    """Drop matured PTO locks. Runs once per full round."""
    for player in game.players:
        if not player.pto_cards:
            continue
        before = len(player.pto_cards)
        player.pto_cards = [lock for lock in player.pto_cards if lock.available_on_turn > game.turn]
        if len(player.pto_cards) != before:
            push_log(game, player.id, game.turn, LogType.EVENT, "PTO card(s) unlocked")


def _apply_competition_penalty(game: Game, player: Player) -> None:
    """Forfeit the latest completion, or else discard up to two resource cards."""
    if player.completed_features:
        removed = player.completed_features.pop()
        push_log(
            game, player.id, game.turn, LogType.EVENT,
            f"Competition penalty removed feature {removed}",
        )
    else:
        for card in player.resource_cards()[-PENALTY_DISCARDS:][::-1]:
            player.remove_card(card.id)
        push_log(
            game, player.id, game.turn, LogType.EVENT,
            "Competition penalty discarded 2 resources (or fewer if not enough)",
        )
    player.challenge = None


def end_player_turn(game: Game) -> TurnEndResult:
    """
    End the active player's turn.

    Applies a due competition penalty, rotates to the next seat and, when the
    rotation wraps to seat 0, starts a new round: the turn counter advances,
    timers tick and the game is lost once the turn passes max_turns. A game
    that is already WON or LOST is returned unchanged.
    """
    if game.status != GameStatus.ACTIVE:
        return TurnEndResult(game.active_player, game.turn, game.status)

    current = game.current_player
    if current.challenge is not None and game.turn >= current.challenge.must_complete_by_turn:
        _apply_competition_penalty(game, current)

    idx = game.players.index(current)
    next_idx = (idx + 1) % len(game.players)
    game.active_player = game.players[next_idx].id
    game.drawn_this_turn = False
    current.traded_this_turn = False

    if next_idx == 0:
        game.turn += 1
        tick_timers(game)
        push_log(game, game.active_player, game.turn, LogType.PASS, "New round commenced")

        if game.turn > game.config.max_turns:
            game.lose()
            push_log(game, game.active_player, game.turn, LogType.PASS, "Max turns exceeded - loss")

    return TurnEndResult(game.active_player, game.turn, game.status)
