"""Live game registry - one owned Game + SeededRng pair per game id."""

import threading
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Callable, Sequence

from api.schemas import EventAckRequest, FullStateResponse, ReplayResponse, StartGameRequest
from api.serializer import build_full_state, build_replay
from config import config
from core.errors import GameError, GameOverError, NotFoundError
from core.game import (
    CompletionResult,
    DrawResult,
    EventEmitter,
    EventResolution,
    EventSelection,
    Game,
    GameStatus,
    NotificationType,
    TradeResult,
    TurnEndResult,
    attempt_complete,
    create_game,
    draw_for_player,
    end_player_turn,
    resolve_event,
    trade_card,
)
from core.rng import SeededRng


@dataclass
class GameSession:
    """
    A live game with the only RNG allowed to drive it.

    Every operation runs under the session lock, so concurrent callers of the
    same game are serialized. Pending-event and game-over gating live here;
    the engine functions only check their own preconditions.
    """

    game: Game
    rng: SeededRng
    expires_at: datetime = field(default_factory=datetime.now)
    events: EventEmitter = field(default_factory=EventEmitter)
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    @property
    def id(self) -> str:
        """Return the game id."""
        return self.game.id

    def _require_active(self) -> None:
        if self.game.status != GameStatus.ACTIVE:
            raise GameOverError(f"Game is {self.game.status.name}")

    def _require_no_pending(self) -> None:
        if self.game.pending_event is not None:
            raise GameError("Pending event must be acknowledged")

    def _guarded(self, action: str, fn: Callable[[], Any]) -> Any:
        """Run an engine call, announcing rejections to subscribers."""
        try:
            return fn()
        except GameError as e:
            self.events.emit_new(
                NotificationType.INVALID_ACTION, self.id, action=action, message=str(e)
            )
            raise

    def _announce_status(self) -> None:
        if self.game.status == GameStatus.WON:
            self.events.emit_new(NotificationType.GAME_WON, self.id, turn=self.game.turn)
        elif self.game.status == GameStatus.LOST:
            self.events.emit_new(NotificationType.GAME_LOST, self.id, turn=self.game.turn)

    def draw(self) -> DrawResult:
        """Draw for the active player."""
        with self.lock:
            def run() -> DrawResult:
                self._require_active()
                self._require_no_pending()
                return draw_for_player(self.game, self.game.active_player, self.rng)

            result = self._guarded("draw", run)
            if result.type == "EVENT":
                self.events.emit_new(
                    NotificationType.EVENT_DRAWN, self.id, event=result.card.kind.value
                )
            else:
                self.events.emit_new(NotificationType.CARD_DRAWN, self.id, card_id=result.card.id)
            return result

    def acknowledge_event(self, request: EventAckRequest | None = None) -> EventResolution:
        """Resolve the pending event for the active player, then clear it."""
        with self.lock:
            def run() -> EventResolution:
                self._require_active()
                event = self.game.pending_event
                if event is None:
                    raise GameError("No pending event")
                selection = (
                    EventSelection(card_id=request.card_id, target_player_id=request.target_player_id)
                    if request
                    else None
                )
                resolution = resolve_event(self.game, self.game.active_player, event, self.rng, selection)
                self.game.pending_event = None
                return resolution

            resolution = self._guarded("event_ack", run)
            self.events.emit_new(
                NotificationType.EVENT_RESOLVED,
                self.id,
                applied=resolution.applied,
                description=resolution.description,
            )
            return resolution

    def complete(
        self,
        player_id: str,
        feature_ids: Sequence[str],
        resource_card_ids: Sequence[str],
    ) -> CompletionResult:
        """Complete a player's active feature."""
        with self.lock:
            def run() -> CompletionResult:
                self._require_active()
                self._require_no_pending()
                return attempt_complete(self.game, player_id, feature_ids, resource_card_ids)

            result = self._guarded("complete", run)
            self.events.emit_new(
                NotificationType.FEATURE_COMPLETED,
                self.id,
                player_id=player_id,
                points=result.points_awarded,
            )
            self._announce_status()
            return result

    def trade(self, from_player_id: str, to_player_id: str, card_id: str) -> TradeResult:
        """Give one resource card from the active player to another."""
        with self.lock:
            def run() -> TradeResult:
                self._require_active()
                self._require_no_pending()
                return trade_card(self.game, from_player_id, to_player_id, card_id)

            result = self._guarded("trade", run)
            self.events.emit_new(
                NotificationType.CARD_TRADED,
                self.id,
                card_id=card_id,
                from_player=from_player_id,
                to_player=to_player_id,
            )
            return result

    def pass_turn(self) -> TurnEndResult:
        """End the active player's turn. A finished game is returned unchanged."""
        with self.lock:
            def run() -> TurnEndResult:
                self._require_no_pending()
                return end_player_turn(self.game)

            previous_turn = self.game.turn
            was_active = self.game.status == GameStatus.ACTIVE
            result = self._guarded("pass", run)
            if was_active:
                self.events.emit_new(
                    NotificationType.TURN_ENDED, self.id, next_player_id=result.next_player_id
                )
                if result.turn != previous_turn:
                    self.events.emit_new(NotificationType.ROUND_STARTED, self.id, turn=result.turn)
                self._announce_status()
            return result

    def full_state(self) -> FullStateResponse:
        """Snapshot for clients."""
        with self.lock:
            return build_full_state(self.game, self.rng)

    def replay(self) -> ReplayResponse:
        """Seed and log export."""
        with self.lock:
            return build_replay(self.game, self.rng)


class GameRegistry:
    """
    In-memory registry of live games.

    Replaces a process-wide current-game singleton: each entry owns its game
    and RNG. Entries expire after game_ttl idle seconds and the oldest entry
    is evicted once max_games is reached.
    """

    def __init__(
        self,
        game_ttl: int | None = None,
        max_games: int | None = None,
        clock: Callable[[], int] | None = None,
    ) -> None:
        self._game_ttl = game_ttl or config.registry.game_ttl
        self._max_games = max_games or config.registry.max_games
        self._clock = clock
        self._sessions: dict[str, GameSession] = {}
        self._lock = threading.Lock()

    def _touch(self, session: GameSession) -> None:
        session.expires_at = datetime.now() + timedelta(seconds=self._game_ttl)

    def create(self, request: StartGameRequest) -> GameSession:
        """Start a game from a validated request and register it."""
        game, rng = create_game(
            request.resolved_player_names(),
            config=request.config_overrides(),
            seed=request.seed,
            clock=self._clock,
        )
        session = GameSession(game=game, rng=rng)
        self._touch(session)

        with self._lock:
            self._cleanup_expired_locked()
            while len(self._sessions) >= self._max_games:
                oldest = min(self._sessions.values(), key=lambda s: s.expires_at)
                del self._sessions[oldest.id]
            # Same-millisecond starts would share an id
            if game.id in self._sessions:
                base, n = game.id, 1
                while f"{base}-{n}" in self._sessions:
                    n += 1
                game.id = f"{base}-{n}"
            self._sessions[game.id] = session

        session.events.emit_new(
            NotificationType.GAME_STARTED,
            game.id,
            players=[p.id for p in game.players],
            seed=rng.seed,
        )
        return session

    def get(self, game_id: str) -> GameSession:
        """Return a live session and refresh its expiry."""
        with self._lock:
            session = self._sessions.get(game_id)
            if session is not None and session.expires_at < datetime.now():
                del self._sessions[game_id]
                session = None
            if session is None:
                raise NotFoundError(f"Game not found: {game_id}")
            self._touch(session)
            return session

    def delete(self, game_id: str) -> None:
        """Drop a game; unknown ids are ignored."""
        with self._lock:
            self._sessions.pop(game_id, None)

    def cleanup_expired(self) -> int:
        """Remove expired games and return how many were dropped."""
        with self._lock:
            return self._cleanup_expired_locked()

    def _cleanup_expired_locked(self) -> int:
        now = datetime.now()
        expired = [gid for gid, s in self._sessions.items() if s.expires_at < now]
        for gid in expired:
            del self._sessions[gid]
        return len(expired)

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, game_id: object) -> bool:
        return game_id in self._sessions


# Global registry instance
_registry: GameRegistry | None = None


def get_registry() -> GameRegistry:
    """Get or create the process registry."""
    global _registry
    if _registry is None:
        _registry = GameRegistry()
    return _registry
