"""Card definitions - resource, feature and event cards."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Role(Enum):
    """Staff roles a resource card can represent."""

    DEV = "DEV"
    PM = "PM"
    UX = "UX"
    CONTRACTOR = "CONTRACTOR"

    def __str__(self) -> str:
        return self.value

    @property
    def is_wildcard(self) -> bool:
        """Contractors stand in for any role at a flat rate."""
        return self == Role.CONTRACTOR


# Roles features may require; contractors only ever fill gaps
CORE_ROLES: tuple[Role, ...] = (Role.DEV, Role.PM, Role.UX)


class Level(Enum):
    """Seniority levels with their point values."""

    ENTRY = "ENTRY"
    JUNIOR = "JUNIOR"
    SENIOR = "SENIOR"
    CONTRACT = "CONTRACT"

    def __str__(self) -> str:
        return self.value

    @property
    def points(self) -> int:
        """Return the points a card of this level is worth."""
        return {
            Level.ENTRY: 1,
            Level.JUNIOR: 2,
            Level.SENIOR: 3,
            Level.CONTRACT: CONTRACTOR_POINTS,
        }[self]

    @classmethod
    def from_roll(cls, roll: float) -> "Level":
        """Map a [0, 1) roll onto ENTRY / JUNIOR / SENIOR."""
        if roll < 0.33:
            return cls.ENTRY
        if roll < 0.66:
            return cls.JUNIOR
        return cls.SENIOR


CONTRACTOR_POINTS = 2


class EventKind(Enum):
    """Disruption events a draw can produce."""

    LAYOFF = "LAYOFF"
    REORG = "REORG"
    COMPETITION = "COMPETITION"
    PTO = "PTO"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class ResourceCard:
    """Immutable staff card held in a player's hand."""

    id: str
    role: Role
    level: Level
    points: int

    def __str__(self) -> str:
        return f"{self.role}:{self.points}"

    @property
    def is_contractor(self) -> bool:
        """Check if this card is a contractor wildcard."""
        return self.role.is_wildcard

    @classmethod
    def create(cls, card_id: str, role: Role, level: Level | None = None) -> "ResourceCard":
        """Build a card whose points follow from its level."""
        if role == Role.CONTRACTOR:
            level = Level.CONTRACT
        elif level is None or level == Level.CONTRACT:
            raise ValueError(f"{role} cards need an ENTRY, JUNIOR or SENIOR level")
        return cls(id=card_id, role=role, level=level, points=level.points)


@dataclass(frozen=True, slots=True)
class Requirement:
    """Minimum points a feature needs from one role."""

    role: Role
    min_points: int


@dataclass(frozen=True)
class FeatureCard:
    """Immutable feature definition that players complete for points."""

    id: str
    name: str
    total_points: int
    requirements: tuple[Requirement, ...]
    description: str = ""

    def __str__(self) -> str:
        return f"{self.id} {self.name}"


@dataclass(frozen=True)
class EventCard:
    """A drawn disruption, pending until acknowledged."""

    id: str
    kind: EventKind
    payload: dict[str, Any] = field(default_factory=dict, compare=False)

    def __str__(self) -> str:
        return f"{self.kind} ({self.id})"
