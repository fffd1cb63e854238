"""Game engine operations and state."""

from core.game.completion import (
    CompletionCandidate,
    CompletionResult,
    attempt_complete,
    derive_completion_candidates,
)
from core.game.draw import DrawResult, draw_for_player
from core.game.emitter import EventEmitter, Notification, NotificationType
from core.game.events import EventResolution, EventSelection, resolve_event
from core.game.log import push_log
from core.game.models import ActionLogEntry, Challenge, Game, LogType, Player, PtoLock
from core.game.rules import GameConfig
from core.game.setup import create_game
from core.game.state import GameStatus
from core.game.trade import TradeResult, trade_card
from core.game.turn import TurnEndResult, end_player_turn, tick_timers

__all__ = [
    "ActionLogEntry",
    "Challenge",
    "CompletionCandidate",
    "CompletionResult",
    "DrawResult",
    "EventEmitter",
    "EventResolution",
    "EventSelection",
    "Game",
    "GameConfig",
    "GameStatus",
    "LogType",
    "Notification",
    "NotificationType",
    "Player",
    "PtoLock",
    "TradeResult",
    "TurnEndResult",
    "attempt_complete",
    "create_game",
    "derive_completion_candidates",
    "draw_for_player",
    "end_player_turn",
    "push_log",
    "resolve_event",
    "tick_timers",
    "trade_card",
]
