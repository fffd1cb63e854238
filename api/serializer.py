"""Read-only builders that turn a live game into client snapshots."""

from dataclasses import asdict

from api.schemas import (
    ActivePlayerView,
    CandidateRequirementResponse,
    ChallengeResponse,
    CompletionCandidateResponse,
    ConfigResponse,
    FeatureResponse,
    FullStateResponse,
    GameConfigResponse,
    LogEntryResponse,
    PendingEventResponse,
    PlayerSummary,
    PtoLockResponse,
    ReplayPlayer,
    ReplayResponse,
    RequirementResponse,
    ResourceCardResponse,
    RngStateResponse,
)
from core.cards import FeatureCard, ResourceCard
from core.game import Game, Player, derive_completion_candidates
from core.game.models import ActionLogEntry
from core.rng import SeededRng


def serialize_resource_card(card: ResourceCard) -> ResourceCardResponse:
    """Serialize a resource card."""
    return ResourceCardResponse(
        id=card.id,
        role=card.role.value,
        level=card.level.value,
        points=card.points,
    )


def serialize_feature(feature: FeatureCard | None) -> FeatureResponse | None:
    """Serialize a feature card, passing None through."""
    if feature is None:
        return None
    return FeatureResponse(
        id=feature.id,
        name=feature.name,
        description=feature.description,
        total_points=feature.total_points,
        requirements=[
            RequirementResponse(role=r.role.value, min_points=r.min_points)
            for r in feature.requirements
        ],
    )


def serialize_player(player: Player, active_player_id: str) -> PlayerSummary:
    """Serialize the public view of a player."""
    return PlayerSummary(
        id=player.id,
        name=player.name,
        seat=player.seat,
        score=player.score,
        completed=len(player.completed_features),
        active=player.id == active_player_id,
        feature=serialize_feature(player.active_feature),
        challenge=(
            ChallengeResponse(must_complete_by_turn=player.challenge.must_complete_by_turn)
            if player.challenge
            else None
        ),
        pto_locks=[
            PtoLockResponse(card_id=lock.card_id, available_on_turn=lock.available_on_turn)
            for lock in player.pto_cards
        ] or None,
    )


def serialize_candidates(game: Game, player_id: str) -> list[CompletionCandidateResponse]:
    """Serialize the completion preview for a player."""
    return [
        CompletionCandidateResponse(
            feature_id=c.feature_id,
            name=c.name,
            total_points=c.total_points,
            requirements=[
                CandidateRequirementResponse(
                    role=r.role.value, min_points=r.min_points, have=r.have, deficit=r.deficit
                )
                for r in c.requirements
            ],
            missing_roles=[role.value for role in c.missing_roles],
            can_complete=c.can_complete,
        )
        for c in derive_completion_candidates(game, player_id)
    ]


def serialize_log_entry(entry: ActionLogEntry) -> LogEntryResponse:
    """Serialize an action log entry."""
    return LogEntryResponse(
        id=entry.id,
        ts=entry.ts,
        player_id=entry.player_id,
        turn=entry.turn,
        type=entry.type.value,
        message=entry.message,
        data=entry.data,
    )


def _rng_state(rng: SeededRng) -> RngStateResponse:
    return RngStateResponse(**asdict(rng.state()))


def build_full_state(game: Game, rng: SeededRng) -> FullStateResponse:
    """Build the full client snapshot. Never mutates the game."""
    active = game.current_player
    return FullStateResponse(
        id=game.id,
        status=game.status.name,
        turn=game.turn,
        target=game.target_features,
        players=[serialize_player(p, game.active_player) for p in game.players],
        active_player=ActivePlayerView(
            id=active.id,
            feature=serialize_feature(active.active_feature),
            hand=[serialize_resource_card(c) for c in active.hand],
            candidates=serialize_candidates(game, active.id),
        ),
        rng=_rng_state(rng),
        config=ConfigResponse(
            max_turns=game.config.max_turns,
            target_multiplier=game.config.target_multiplier,
            single_completion_per_turn=game.config.single_completion_per_turn,
            resource_weight=game.config.resource_weight,
        ),
        pending_event=(
            PendingEventResponse(
                id=game.pending_event.id,
                type=game.pending_event.kind.value,
                payload=game.pending_event.payload,
            )
            if game.pending_event
            else None
        ),
    )


def build_replay(game: Game, rng: SeededRng) -> ReplayResponse:
    """Build the seed + log export used for audit and replay."""
    return ReplayResponse(
        id=game.id,
        status=game.status.name,
        seed=_rng_state(rng),
        turn=game.turn,
        target=game.target_features,
        config=GameConfigResponse(**asdict(game.config)),
        players=[
            ReplayPlayer(id=p.id, name=p.name, completed=len(p.completed_features), score=p.score)
            for p in game.players
        ],
        log=[serialize_log_entry(e) for e in game.log],
    )
