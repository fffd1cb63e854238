"""Tests for the game aggregate, status machine and action log."""

import pytest
from transitions import MachineError

from core.cards import Role
from core.errors import NotFoundError
from core.game import Game, GameConfig, GameStatus, LogType, Player, PtoLock, create_game, push_log
from core.game.state import VALID_TRANSITIONS


class TestGameStatus:
    """Tests for status values and transitions."""

    def test_terminal_flags(self):
        """Test WON and LOST are terminal."""
        assert not GameStatus.ACTIVE.is_terminal
        assert GameStatus.WON.is_terminal
        assert GameStatus.LOST.is_terminal

    def test_valid_transitions(self):
        """Test the transition table."""
        assert VALID_TRANSITIONS[GameStatus.ACTIVE] == [GameStatus.WON, GameStatus.LOST]
        assert VALID_TRANSITIONS[GameStatus.WON] == []
        assert VALID_TRANSITIONS[GameStatus.LOST] == []


class TestGameMachine:
    """Tests for the status machine on Game."""

    def test_starts_active(self, solo_game):
        """Test initial status."""
        game, _ = solo_game
        assert game.status == GameStatus.ACTIVE
        assert game.is_active()

    def test_lose(self, solo_game):
        """Test ACTIVE to LOST."""
        game, _ = solo_game
        game.lose()
        assert game.status == GameStatus.LOST

    @pytest.mark.parametrize("first,second", [("win", "win"), ("win", "lose"), ("lose", "win")])
    def test_no_transition_out_of_terminal(self, solo_game, first, second):
        """Test a terminal status cannot be left."""
        game, _ = solo_game
        getattr(game, first)()
        status = game.status
        with pytest.raises(MachineError):
            getattr(game, second)()
        assert game.status == status

    def test_active_player_defaults_to_first_seat(self):
        """Test __post_init__ picks seat 0."""
        game = Game(
            id="g",
            created_at=0,
            config=GameConfig(),
            players=[Player(id="P1", name="A", seat=0), Player(id="P2", name="B", seat=1)],
        )
        assert game.active_player == "P1"
        assert game.current_player.name == "A"

    def test_get_player_unknown(self, solo_game):
        """Test lookups of unknown ids."""
        game, _ = solo_game
        with pytest.raises(NotFoundError, match="Player not found"):
            game.get_player("nobody")

    def test_card_sequence(self, solo_game):
        """Test the per-game id counter."""
        game, _ = solo_game
        start = game.card_seq
        assert game.next_card_seq() == start + 1
        assert game.next_card_seq() == start + 2


class TestPlayer:
    """Tests for Player hand helpers."""

    def test_find_and_remove(self, make_card):
        """Test hand lookups."""
        card = make_card("x", Role.UX, 2)
        player = Player(id="P1", name="A", seat=0, hand=[card])
        assert player.find_card("x") is card
        assert player.find_card("y") is None
        assert player.remove_card("y") is None
        assert player.remove_card("x") is card
        assert player.hand == []

    def test_locked_card_ids(self):
        """Test locks apply until their available turn."""
        player = Player(
            id="P1", name="A", seat=0,
            pto_cards=[PtoLock("a", 3), PtoLock("b", 5)],
        )
        assert player.locked_card_ids(2) == {"a", "b"}
        assert player.locked_card_ids(3) == {"b"}
        assert player.locked_card_ids(5) == set()


class TestPushLog:
    """Tests for the bounded action log."""

    def test_entry_fields(self, solo_game, fixed_clock):
        """Test ids, timestamps and data."""
        game, _ = solo_game
        entry = push_log(game, "P1", 4, LogType.TRADE, "hello", data={"k": 1})
        assert entry.id == "log-2"
        assert entry.ts == fixed_clock()
        assert entry.turn == 4
        assert entry.data == {"k": 1}
        assert game.log[-1] is entry

    def test_explicit_timestamp(self, solo_game):
        """Test a caller-supplied ts is kept."""
        game, _ = solo_game
        assert push_log(game, "P1", 1, LogType.PASS, "x", ts=42).ts == 42

    def test_ids_are_unique_and_ordered(self, solo_game):
        """Test monotonically increasing ids."""
        game, _ = solo_game
        for i in range(5):
            push_log(game, "P1", 1, LogType.PASS, f"m{i}")
        ids = [int(e.id.split("-")[1]) for e in game.log]
        assert ids == sorted(ids)
        assert len(set(ids)) == len(ids)

    def test_retention_trims_oldest(self, fixed_clock):
        """Test the ring buffer keeps only the newest entries."""
        game, _ = create_game(["A"], seed="r", config={"log_retention": 3}, clock=fixed_clock)
        for i in range(5):
            push_log(game, "P1", 1, LogType.PASS, f"m{i}")
        assert [e.message for e in game.log] == ["m2", "m3", "m4"]
        assert game.log[-1].id == "log-6"

    def test_entries_immutable(self, solo_game):
        """Test log entries are frozen."""
        game, _ = solo_game
        with pytest.raises(AttributeError):
            game.log[0].message = "rewritten"
