"""Bounded action log."""

from typing import Any

from core.game.models import ActionLogEntry, Game, LogType


def push_log(
    game: Game,
    player_id: str,
    turn: int,
    type: LogType,
    message: str,
    ts: int | None = None,
    data: dict[str, Any] | None = None,
) -> ActionLogEntry:
    """
    Append an entry, then trim the oldest entries beyond log_retention.

    Args:
        game: Game to log against
        player_id: Acting (or affected) player
        turn: Turn number to record
        type: Entry category
        message: Human-readable summary
        ts: Epoch milliseconds (defaults to the game clock)
        data: Optional structured details

    Returns:
        The appended entry
    """
    game.log_seq += 1
    entry = ActionLogEntry(
        id=f"log-{game.log_seq}",
        ts=ts if ts is not None else game.clock(),
        player_id=player_id,
        turn=turn,
        type=type,
        message=message,
        data=data,
    )
    game.log.append(entry)

    overflow = len(game.log) - game.config.log_retention
    if overflow > 0:
        del game.log[:overflow]
    return entry
