"""Event card resolution - LAYOFF, REORG, COMPETITION and PTO."""

from dataclasses import dataclass

from core.cards import EventCard, EventKind
from core.errors import GameError
from core.game.log import push_log
from core.game.models import Challenge, Game, LogType, PtoLock
from core.rng import SeededRng

PTO_LOCK_TURNS = 2


@dataclass(frozen=True)
class EventSelection:
    """Optional player choices when acknowledging an event."""

    card_id: str | None = None
    target_player_id: str | None = None


@dataclass(frozen=True)
class EventResolution:
    """Outcome of resolving one event."""

    applied: bool
    description: str


def _log_event(game: Game, player_id: str, message: str) -> None:
    push_log(game, player_id, game.turn, LogType.EVENT, message)


def apply_layoff(
    game: Game,
    player_id: str,
    rng: SeededRng,
    selection: EventSelection | None = None,
) -> EventResolution:
    """Remove one resource card from the player's hand."""
    player = game.get_player(player_id)
    candidates = player.resource_cards()
    if not candidates:
        _log_event(game, player_id, "Layoff hit but no resource to remove")
        return EventResolution(False, "No resource removed")

    # The random pick is always rolled; a selection only overrides it
    pick = candidates[rng.int(len(candidates))]
    if selection and selection.card_id:
        chosen = next((c for c in candidates if c.id == selection.card_id), None)
        if chosen is None:
            raise GameError("Selected card not found for Layoff")
        pick = chosen

    player.remove_card(pick.id)
    _log_event(game, player_id, "Layoff removed a resource card")
    return EventResolution(True, f"Removed {pick.role}")


def apply_reorg(
    game: Game,
    player_id: str,
    rng: SeededRng,
    selection: EventSelection | None = None,
) -> EventResolution:
    """Move one resource card from the player to another player."""
    if len(game.players) < 2:
        _log_event(game, player_id, "Reorg no-op (single player)")
        return EventResolution(False, "No-op single player")

    source = game.get_player(player_id)
    transferable = source.resource_cards()
    if not transferable:
        _log_event(game, player_id, "Reorg no resource to transfer")
        return EventResolution(False, "No resource to move")

    others = [p for p in game.players if p.id != source.id]
    target = others[rng.int(len(others))]
    if selection and selection.target_player_id:
        chosen_target = next((p for p in others if p.id == selection.target_player_id), None)
        if chosen_target is None:
            raise GameError("Selected target player invalid for Reorg")
        target = chosen_target

    pick = transferable[rng.int(len(transferable))]
    if selection and selection.card_id:
        chosen = next((c for c in transferable if c.id == selection.card_id), None)
        if chosen is None:
            raise GameError("Selected card invalid for Reorg")
        pick = chosen

    source.remove_card(pick.id)
    target.hand.append(pick)
    _log_event(game, player_id, f"Reorg moved 1 card to {target.id}")
    return EventResolution(True, f"Moved card to {target.id}")


def apply_competition(game: Game, player_id: str) -> EventResolution:
    """Give the player until next turn to complete a feature."""
    player = game.get_player(player_id)
    if player.challenge is not None:
        _log_event(game, player_id, "Competition challenge already pending")
        return EventResolution(False, "Challenge already pending")

    player.challenge = Challenge(must_complete_by_turn=game.turn + 1, applied_turn=game.turn)
    _log_event(game, player_id, "Competition challenge set for next turn")
    return EventResolution(True, "Must complete next turn")


def apply_pto(
    game: Game,
    player_id: str,
    rng: SeededRng | None = None,
    selection: EventSelection | None = None,
) -> EventResolution:
    """Lock one resource card until two turns from now. Without an rng the first card is taken."""
    player = game.get_player(player_id)
    candidates = player.resource_cards()
    if not candidates:
        _log_event(game, player_id, "PTO no resource to lock")
        return EventResolution(False, "No card to lock")

    pick = candidates[rng.int(len(candidates))] if rng else candidates[0]
    if selection and selection.card_id:
        chosen = next((c for c in candidates if c.id == selection.card_id), None)
        if chosen is None:
            raise GameError("Selected card invalid for PTO")
        pick = chosen

    unlock_turn = game.turn + PTO_LOCK_TURNS
    player.pto_cards.append(PtoLock(card_id=pick.id, available_on_turn=unlock_turn))
    _log_event(game, player_id, f"PTO locked card {pick.id} until turn {unlock_turn}")
    return EventResolution(True, "Card locked")


def resolve_event(
    game: Game,
    player_id: str,
    event: EventCard,
    rng: SeededRng,
    selection: EventSelection | None = None,
) -> EventResolution:
    """
    Apply an event to the acting player.

    Writes exactly one EVENT log entry. The caller clears game.pending_event
    once this returns.

    Raises:
        NotFoundError: Unknown player
        GameError: A selection names a card or target that is not eligible
    """
    match event.kind:
        case EventKind.LAYOFF:
            return apply_layoff(game, player_id, rng, selection)
        case EventKind.REORG:
            return apply_reorg(game, player_id, rng, selection)
        case EventKind.COMPETITION:
            return apply_competition(game, player_id)
        case EventKind.PTO:
            return apply_pto(game, player_id, rng, selection)
    raise ValueError(f"Unknown event kind: {event.kind!r}")
