"""Feature completion, contractor wildcard scoring and win detection."""

import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Sequence

from core.cards import CONTRACTOR_POINTS, FeatureCard, ResourceCard, Role
from core.errors import GameError, NotFoundError
from core.game.log import push_log
from core.game.models import Game, LogType, Player
from core.game.state import GameStatus

CONTRACTOR_PENALTY = 0.95


@dataclass(frozen=True)
class CompletionResult:
    """Outcome of a successful completion."""

    points_awarded: int
    completed: list[str]
    win: bool


@dataclass(frozen=True)
class RequirementStatus:
    """Coverage of one role requirement by the cards in hand."""

    role: Role
    min_points: int
    have: int
    deficit: int


@dataclass(frozen=True)
class CompletionCandidate:
    """Read-only preview of whether the active feature can be completed."""

    feature_id: str
    name: str
    total_points: int
    requirements: list[RequirementStatus] = field(default_factory=list)
    missing_roles: list[Role] = field(default_factory=list)
    can_complete: bool = False


def points_by_role(cards: Sequence[ResourceCard]) -> dict[Role, int]:
    """Sum non-contractor points per role."""
    totals: dict[Role, int] = {}
    for card in cards:
        if not card.is_contractor:
            totals[card.role] = totals.get(card.role, 0) + card.points
    return totals


def derive_completion_candidates(game: Game, player_id: str) -> list[CompletionCandidate]:
    """
    Preview the player's active feature against their whole hand.

    Nothing is mutated. Returns an empty list for unknown players or players
    without an active feature.
    """
    player = next((p for p in game.players if p.id == player_id), None)
    if player is None or player.active_feature is None:
        return []

    feature = player.active_feature
    hand = player.resource_cards()
    contractors = sum(1 for c in hand if c.is_contractor)
    have_by_role = points_by_role(hand)

    requirements = []
    for req in feature.requirements:
        have = have_by_role.get(req.role, 0)
        requirements.append(
            RequirementStatus(
                role=req.role,
                min_points=req.min_points,
                have=have,
                deficit=max(0, req.min_points - have),
            )
        )

    total_deficit = sum(r.deficit for r in requirements)
    return [
        CompletionCandidate(
            feature_id=feature.id,
            name=feature.name,
            total_points=feature.total_points,
            requirements=requirements,
            missing_roles=[r.role for r in requirements if r.have == 0 and r.deficit > 0],
            can_complete=total_deficit == 0 or contractors * CONTRACTOR_POINTS >= total_deficit,
        )
    ]


def _resolve_cards(player: Player, card_ids: Sequence[str]) -> list[ResourceCard]:
    duplicates = [card_id for card_id, n in Counter(card_ids).items() if n > 1]
    if duplicates:
        raise GameError(f"Duplicate card id: {duplicates[0]}")

    cards = []
    for card_id in card_ids:
        card = player.find_card(card_id)
        if card is None:
            raise NotFoundError(f"Card not found: {card_id}")
        cards.append(card)
    return cards


def _check_requirements(feature: FeatureCard, cards: Sequence[ResourceCard]) -> int:
    """Return the contractor count, raising if the cards cannot cover the feature."""
    have_by_role = points_by_role(cards)
    contractors = sum(1 for c in cards if c.is_contractor)

    budget = contractors * CONTRACTOR_POINTS
    for req in feature.requirements:
        budget -= max(0, req.min_points - have_by_role.get(req.role, 0))
        if budget < 0:
            raise GameError("Insufficient points for requirements")
    return contractors


def _retire_feature(game: Game, feature: FeatureCard) -> None:
    """Move a completed feature to the discard pile exactly once."""
    for idx, card in enumerate(game.feature_deck):
        if card.id == feature.id:
            game.discard_pile.append(game.feature_deck.pop(idx))
            return
    if not any(card.id == feature.id for card in game.discard_pile):
        game.discard_pile.append(feature)


def attempt_complete(
    game: Game,
    player_id: str,
    feature_ids: Sequence[str],
    resource_card_ids: Sequence[str],
) -> CompletionResult:
    """
    Complete the player's active feature with the given hand cards.

    Each contractor covers up to 2 missing points of any role. Using any
    contractor at all costs 5% of the feature's points (floored). The used
    cards are consumed, the next feature is drawn into the slot, a pending
    competition challenge is cleared and the win condition is checked.

    Args:
        game: Game to mutate
        player_id: Completing player
        feature_ids: Must contain only the player's active feature id
        resource_card_ids: Hand cards to spend

    Returns:
        Points awarded, completed feature ids and whether the game was won

    Raises:
        NotFoundError: Unknown player or a card id not in hand
        GameError: Empty or foreign feature ids, no active feature, a PTO
            locked card, a duplicated card id, or insufficient points
    """
    if not feature_ids:
        raise GameError("No features specified")
    player = game.get_player(player_id)

    locked = player.locked_card_ids(game.turn)
    if any(card_id in locked for card_id in resource_card_ids):
        raise GameError("Attempted to use locked PTO card")

    feature = player.active_feature
    if feature is None:
        raise GameError("No active feature")
    if any(fid != feature.id for fid in feature_ids):
        raise GameError("Can only complete active feature")

    cards = _resolve_cards(player, resource_card_ids)
    contractors = _check_requirements(feature, cards)

    points = feature.total_points
    if contractors:
        points = math.floor(points * CONTRACTOR_PENALTY)

    player.completed_features.append(feature.id)
    _retire_feature(game, feature)
    player.active_feature = game.feature_deck.pop(0) if game.feature_deck else None
    player.score += points
    for card in cards:
        player.remove_card(card.id)

    push_log(
        game, player_id, game.turn, LogType.COMPLETE,
        f"Completed 1 feature(s) for {points} points",
        data={"feature_id": feature.id, "cards": list(resource_card_ids)},
    )

    if player.challenge is not None:
        push_log(game, player_id, game.turn, LogType.EVENT, "Competition challenge satisfied")
        player.challenge = None

    win = len(player.completed_features) >= game.target_features
    if win and game.status == GameStatus.ACTIVE:
        game.win()
        push_log(game, player_id, game.turn, LogType.COMPLETE, "Win condition reached")

    return CompletionResult(points_awarded=points, completed=[feature.id], win=win)
