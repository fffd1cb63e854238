"""Game notifications for subscribers such as state broadcasters."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Any, Callable


class NotificationType(Enum):
    """Types of game notifications."""

    # Game flow
    GAME_STARTED = auto()
    ROUND_STARTED = auto()
    TURN_ENDED = auto()
    GAME_WON = auto()
    GAME_LOST = auto()

    # Player actions
    CARD_DRAWN = auto()
    EVENT_DRAWN = auto()
    EVENT_RESOLVED = auto()
    CARD_TRADED = auto()
    FEATURE_COMPLETED = auto()

    # Rejected actions
    INVALID_ACTION = auto()


@dataclass(frozen=True)
class Notification:
    """
    Immutable game notification.

    Notifications are how the session layer tells outside observers that the
    game changed; the engine functions never emit them.
    """

    type: NotificationType
    game_id: str
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return f"{self.type.name}: {self.data}"


# Type alias for notification handlers
NotificationHandler = Callable[[Notification], None]


class EventEmitter:
    """
    Simple synchronous emitter for game notifications.

    Allows subscribing to specific notification types or all of them.
    """

    def __init__(self) -> None:
        """Initialize the emitter."""
        self._handlers: dict[NotificationType | None, list[NotificationHandler]] = {}
        self._history: list[Notification] = []

    def subscribe(
        self,
        handler: NotificationHandler,
        notification_type: NotificationType | None = None,
    ) -> None:
        """
        Subscribe to notifications.

        Args:
            handler: Function to call when a notification is emitted
            notification_type: Specific type to subscribe to, or None for all
        """
        self._handlers.setdefault(notification_type, []).append(handler)

    def unsubscribe(
        self,
        handler: NotificationHandler,
        notification_type: NotificationType | None = None,
    ) -> None:
        """Remove a handler; unknown handlers are ignored."""
        handlers = self._handlers.get(notification_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, notification: Notification) -> None:
        """Record a notification and call type-specific, then catch-all handlers."""
        self._history.append(notification)

        for handler in self._handlers.get(notification.type, []):
            handler(notification)
        for handler in self._handlers.get(None, []):
            handler(notification)

    def emit_new(
        self,
        notification_type: NotificationType,
        game_id: str,
        **data: Any,
    ) -> Notification:
        """
        Create and emit a new notification.

        Returns:
            The created notification
        """
        notification = Notification(type=notification_type, game_id=game_id, data=data)
        self.emit(notification)
        return notification

    @property
    def history(self) -> list[Notification]:
        """Return the notification history."""
        return self._history.copy()

    def clear_history(self) -> None:
        """Clear the notification history."""
        self._history.clear()
