#!/usr/bin/env python3
"""
Batch game simulation.

Plays N seeded games with a naive policy and prints win/loss statistics:
every turn the active player draws, accepts whatever event comes up,
completes their feature whenever the hand covers it, then passes.
"""

import json
import time
from dataclasses import dataclass

from api.registry import GameRegistry, GameSession, get_registry
from api.schemas import StartGameRequest
from config import config
from core.cards import Role
from core.game import GameStatus, derive_completion_candidates
from core.rng import to_base36


@dataclass
class SimulationSummary:
    """Aggregate results over a batch of games."""

    games: int
    wins: int
    losses: int
    avg_score: float
    seed_base: str


def choose_completion_cards(session: GameSession) -> list[str] | None:
    """
    Pick hand cards that cover the active feature, or None if it cannot be done.

    Spends every unlocked card of a required role, then just enough
    contractors to close the remaining gap.
    """
    game = session.game
    player = game.current_player
    candidates = derive_completion_candidates(game, player.id)
    if not candidates or not candidates[0].can_complete or player.active_feature is None:
        return None

    locked = player.locked_card_ids(game.turn)
    usable = [c for c in player.hand if c.id not in locked]
    required = {r.role for r in player.active_feature.requirements}

    chosen = [c for c in usable if c.role in required]
    have: dict[Role, int] = {}
    for card in chosen:
        have[card.role] = have.get(card.role, 0) + card.points
    gap = sum(max(0, r.min_points - have.get(r.role, 0)) for r in player.active_feature.requirements)

    contractors = [c for c in usable if c.is_contractor]
    while gap > 0 and contractors:
        chosen.append(contractors.pop())
        gap -= 2
    if gap > 0:
        return None
    return [c.id for c in chosen]


def play_turn(session: GameSession) -> None:
    """Draw, resolve any event, try to complete, pass."""
    game = session.game
    session.draw()
    if game.pending_event is not None:
        session.acknowledge_event()

    card_ids = choose_completion_cards(session)
    if card_ids is not None and game.current_player.active_feature is not None:
        session.complete(game.active_player, [game.current_player.active_feature.id], card_ids)

    if game.status == GameStatus.ACTIVE:
        session.pass_turn()


def run_single(seed: str, players: int, registry: GameRegistry | None = None) -> GameSession:
    """Play one game to a terminal status."""
    if registry is None:
        registry = get_registry()
    session = registry.create(StartGameRequest(player_count=players, seed=seed))
    try:
        while session.game.status == GameStatus.ACTIVE:
            play_turn(session)
    finally:
        registry.delete(session.id)
    return session


def simulate(players: int, games: int, seed: str | None = None) -> SimulationSummary:
    """Run a batch; one game uses the seed as-is, more use '<seed>-<i>'."""
    base = seed or f"sim-{to_base36(int(time.time() * 1000))}"
    sessions = [
        run_single(base if games == 1 else f"{base}-{i}", players)
        for i in range(games)
    ]
    wins = sum(1 for s in sessions if s.game.status == GameStatus.WON)
    losses = sum(1 for s in sessions if s.game.status == GameStatus.LOST)
    total_score = sum(p.score for s in sessions for p in s.game.players)
    return SimulationSummary(
        games=games,
        wins=wins,
        losses=losses,
        avg_score=total_score / games if games else 0.0,
        seed_base=base,
    )


def main() -> None:
    """Main entry point."""
    import argparse

    defaults = config.simulation
    parser = argparse.ArgumentParser(
        description="Simulate seeded games and report win/loss statistics",
    )
    parser.add_argument(
        "--players",
        type=int,
        default=defaults.players,
        help=f"Players per game, 1-{config.limits.max_players} (default: {defaults.players})",
    )
    parser.add_argument(
        "--games",
        type=int,
        default=defaults.games,
        help=f"Number of games to play (default: {defaults.games})",
    )
    parser.add_argument(
        "--seed",
        type=str,
        default=defaults.seed,
        help="Seed, or seed prefix when playing several games",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the summary as JSON",
    )
    args = parser.parse_args()

    if not 1 <= args.players <= config.limits.max_players:
        parser.error(f"--players must be between 1 and {config.limits.max_players}")
    if args.games < 1:
        parser.error("--games must be at least 1")

    summary = simulate(args.players, args.games, args.seed)

    if args.json:
        print(json.dumps(summary.__dict__, indent=2))
        return

    print(f"Games:      {summary.games}")
    print(f"Wins:       {summary.wins}")
    print(f"Losses:     {summary.losses}")
    print(f"Avg score:  {summary.avg_score:.2f}")
    print(f"Seed base:  {summary.seed_base}")


if __name__ == "__main__":
    main()
