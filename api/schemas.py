"""Pydantic schemas for game requests and state snapshots."""

from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from config import config

_limits = config.limits


# Request schemas
class StartGameRequest(BaseModel):
    """Request to start a new game."""

    player_count: int | None = Field(default=None, ge=1, le=_limits.max_players)
    player_names: list[str] | None = Field(default=None, max_length=_limits.max_players)
    seed: str | None = None
    resource_weight: float | None = Field(default=None, gt=0, le=1)
    single_completion_per_turn: bool | None = None
    max_turns: int | None = None
    target_multiplier: int | None = None

    @field_validator("max_turns")
    @classmethod
    def clamp_max_turns(cls, v: int | None) -> int | None:
        """Keep turn limits within a playable range."""
        if v is None:
            return None
        return min(_limits.max_max_turns, max(_limits.min_max_turns, v))

    @field_validator("target_multiplier")
    @classmethod
    def clamp_target_multiplier(cls, v: int | None) -> int | None:
        """Keep the per-player target within a playable range."""
        if v is None:
            return None
        return min(_limits.max_target_multiplier, max(_limits.min_target_multiplier, v))

    @model_validator(mode="after")
    def require_players(self) -> "StartGameRequest":
        """Either a count or a list of names must be supplied."""
        if not (self.player_count or self.player_names):
            raise ValueError("player_count required")
        return self

    def resolved_player_names(self) -> list[str]:
        """Names in seat order; blanks become 'Player N', long names are cut."""
        count = self.player_count or len(self.player_names or [])
        raw = self.player_names or [f"Player {i + 1}" for i in range(count)]
        names = []
        for i, name in enumerate(raw):
            trimmed = (name or "").strip()
            names.append(trimmed[: _limits.max_name_length] if trimmed else f"Player {i + 1}")
        return names

    def config_overrides(self) -> dict[str, Any]:
        """Return the GameConfig overrides this request carries."""
        return {
            "resource_weight": self.resource_weight,
            "single_completion_per_turn": self.single_completion_per_turn,
            "max_turns": self.max_turns,
            "target_multiplier": self.target_multiplier,
        }


class EventAckRequest(BaseModel):
    """Choices supplied when acknowledging a pending event."""

    card_id: str | None = None
    target_player_id: str | None = None


# Card schemas
class ResourceCardResponse(BaseModel):
    """Resource card representation."""

    id: str
    role: str
    level: str
    points: int


class RequirementResponse(BaseModel):
    """Per-role requirement of a feature."""

    role: str
    min_points: int


class FeatureResponse(BaseModel):
    """Feature card representation."""

    id: str
    name: str
    description: str
    total_points: int
    requirements: list[RequirementResponse]


class PendingEventResponse(BaseModel):
    """Event awaiting acknowledgment."""

    id: str
    type: str
    payload: dict[str, Any] = Field(default_factory=dict)


# Player schemas
class ChallengeResponse(BaseModel):
    """Competition deadline."""

    must_complete_by_turn: int


class PtoLockResponse(BaseModel):
    """Card locked by PTO."""

    card_id: str
    available_on_turn: int


class PlayerSummary(BaseModel):
    """Public view of one player."""

    id: str
    name: str
    seat: int
    score: int
    completed: int
    active: bool
    feature: FeatureResponse | None
    challenge: ChallengeResponse | None
    pto_locks: list[PtoLockResponse] | None


class CandidateRequirementResponse(BaseModel):
    """Coverage of one requirement by the active player's hand."""

    role: str
    min_points: int
    have: int
    deficit: int


class CompletionCandidateResponse(BaseModel):
    """Whether the active feature can be completed right now."""

    feature_id: str
    name: str
    total_points: int
    requirements: list[CandidateRequirementResponse]
    missing_roles: list[str]
    can_complete: bool


class ActivePlayerView(BaseModel):
    """Private view of the player whose turn it is."""

    id: str
    feature: FeatureResponse | None
    hand: list[ResourceCardResponse]
    candidates: list[CompletionCandidateResponse]


# Game schemas
class RngStateResponse(BaseModel):
    """Seed and draw position of the game RNG."""

    seed: str
    position: int


class ConfigResponse(BaseModel):
    """Client-relevant configuration."""

    max_turns: int
    target_multiplier: int
    single_completion_per_turn: bool
    resource_weight: float


class FullStateResponse(BaseModel):
    """Complete game snapshot for clients."""

    id: str
    status: str
    turn: int
    target: int
    players: list[PlayerSummary]
    active_player: ActivePlayerView
    rng: RngStateResponse
    config: ConfigResponse
    pending_event: PendingEventResponse | None


class LogEntryResponse(BaseModel):
    """One action log entry."""

    id: str
    ts: int
    player_id: str
    turn: int
    type: str
    message: str
    data: dict[str, Any] | None = None


class ReplayPlayer(BaseModel):
    """Per-player totals for a replay export."""

    id: str
    name: str
    completed: int
    score: int


class GameConfigResponse(BaseModel):
    """Full normalized configuration."""

    seed: str
    single_completion_per_turn: bool
    resource_weight: float
    log_retention: int
    target_multiplier: int
    max_turns: int


class ReplayResponse(BaseModel):
    """Seed, config and log needed to replay or audit a game."""

    id: str
    status: str
    seed: RngStateResponse
    turn: int
    target: int
    config: GameConfigResponse
    players: list[ReplayPlayer]
    log: list[LogEntryResponse]
