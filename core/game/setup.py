"""Game construction."""

from typing import Any, Callable, Mapping, Sequence

from core.cards import CORE_ROLES, FeatureCard, Level, ResourceCard
from core.deck import create_feature_deck, draw_feature
from core.errors import GameError
from core.game.log import push_log
from core.game.models import Game, LogType, Player, epoch_millis
from core.game.rules import GameConfig
from core.rng import SeededRng, create_rng, to_base36

MAX_PLAYERS = 4
STARTING_HAND_SIZE = 3


def _starting_card(game: Game, player: Player, index: int, rng: SeededRng) -> ResourceCard:
    level = Level.from_roll(rng.next())
    role = CORE_ROLES[(player.seat + index) % len(CORE_ROLES)]
    card_id = f"SR-{game.next_card_seq()}-{rng.int(9999)}"
    return ResourceCard.create(card_id, role, level)


def create_game(
    player_names: Sequence[str],
    config: GameConfig | Mapping[str, Any] | None = None,
    seed: str | None = None,
    feature_deck: list[FeatureCard] | None = None,
    clock: Callable[[], int] | None = None,
) -> tuple[Game, SeededRng]:
    """
    Build a fresh game and the RNG that must drive it from now on.

    Args:
        player_names: Seat order; 1 to 4 names
        config: GameConfig or mapping of overrides
        seed: Overrides config.seed when given
        feature_deck: Replaces the thematic catalog (still shuffled)
        clock: Epoch-millisecond source for ids and log timestamps

    Returns:
        (game, rng). Callers must keep this rng instance; re-creating it from
        the seed only reproduces the game if every call is replayed.
    """
    if not player_names:
        raise GameError("At least one player required")
    if len(player_names) > MAX_PLAYERS:
        raise GameError(f"Maximum {MAX_PLAYERS} players supported")

    normalized = GameConfig.normalize(config, seed)
    rng = create_rng(normalized.seed or None)
    if normalized.seed != rng.seed:
        normalized = GameConfig.normalize(normalized, rng.seed)

    clock = clock or epoch_millis
    created_at = clock()
    players = [Player(id=f"P{idx + 1}", name=name, seat=idx) for idx, name in enumerate(player_names)]

    game = Game(
        id=f"game-{to_base36(created_at)}",
        created_at=created_at,
        config=normalized,
        players=players,
        feature_deck=create_feature_deck(rng, feature_deck),
        target_features=len(players) * normalized.target_multiplier,
        clock=clock,
    )

    for player in players:
        player.active_feature = draw_feature(game.feature_deck)
        for i in range(STARTING_HAND_SIZE):
            player.hand.append(_starting_card(game, player, i, rng))

    push_log(game, players[0].id, 0, LogType.START, "Game created")
    return game, rng
