"""Tests for the feature catalog, deck generator and shuffle."""

from core.cards import Role
from core.deck import (
    FEATURE_CATALOG,
    create_feature_deck,
    draw_feature,
    generate_placeholder_deck,
    shuffle,
)
from core.rng import SeededRng


class TestCatalog:
    """Tests for the thematic feature catalog."""

    def test_catalog_size_and_ids(self):
        """Test 30 uniquely numbered features."""
        assert len(FEATURE_CATALOG) == 30
        assert [f.id for f in FEATURE_CATALOG] == [f"F{i}" for i in range(1, 31)]

    def test_catalog_requirements_use_core_roles(self):
        """Test that no feature requires contractors."""
        for feature in FEATURE_CATALOG:
            assert feature.requirements
            assert all(r.role != Role.CONTRACTOR for r in feature.requirements)
            assert all(r.min_points > 0 for r in feature.requirements)

    def test_first_feature(self):
        """Test a known catalog entry."""
        first = FEATURE_CATALOG[0]
        assert first.name == "Azure AD Single Sign-On"
        assert first.total_points == 5
        assert [(r.role, r.min_points) for r in first.requirements] == [
            (Role.DEV, 3),
            (Role.PM, 2),
        ]


class TestPlaceholderDeck:
    """Tests for generate_placeholder_deck."""

    def test_no_size_returns_catalog_copy(self):
        """Test the default deck is the catalog."""
        deck = generate_placeholder_deck()
        assert deck == list(FEATURE_CATALOG)
        deck.pop()
        assert len(FEATURE_CATALOG) == 30

    def test_generated_ids(self):
        """Test generated ids and names."""
        deck = generate_placeholder_deck(8)
        assert [f.id for f in deck] == [f"LG{i}" for i in range(1, 9)]
        assert deck[0].name == "Legacy Feature 1"

    def test_difficulty_cycles(self):
        """Test difficulty runs from min to max and wraps."""
        deck = generate_placeholder_deck(8)
        assert [f.total_points for f in deck] == [2, 3, 4, 5, 6, 7, 8, 2]
        assert all(f.total_points == sum(r.min_points for r in f.requirements) for f in deck)

    def test_role_count_by_difficulty(self):
        """Test 1 role below 4, 2 roles below 7, else 3."""
        deck = generate_placeholder_deck(7)
        assert [len(f.requirements) for f in deck] == [1, 1, 2, 2, 2, 3, 3]

    def test_known_requirements(self):
        """Test rotated role order and point split."""
        deck = generate_placeholder_deck(6)
        assert [(r.role, r.min_points) for r in deck[0].requirements] == [(Role.DEV, 2)]
        assert [(r.role, r.min_points) for r in deck[2].requirements] == [
            (Role.UX, 2),
            (Role.DEV, 2),
        ]
        assert [(r.role, r.min_points) for r in deck[5].requirements] == [
            (Role.UX, 2),
            (Role.DEV, 3),
            (Role.PM, 2),
        ]


class TestShuffle:
    """Tests for the seeded shuffle."""

    def test_shuffle_in_place(self):
        """Test that the same list object is returned."""
        cards = list(range(10))
        assert shuffle(cards, SeededRng("s")) is cards
        assert sorted(cards) == list(range(10))

    def test_shuffle_reproducible(self):
        """Test that one seed gives one order."""
        a = shuffle(list(range(20)), SeededRng("same"))
        b = shuffle(list(range(20)), SeededRng("same"))
        assert a == b

    def test_shuffle_consumes_n_minus_one(self):
        """Test RNG consumption of a Fisher-Yates pass."""
        rng = SeededRng("count")
        shuffle(list(range(10)), rng)
        assert rng.state().position == 9

    def test_shuffle_trivial_lists(self):
        """Test empty and single-element lists draw nothing."""
        rng = SeededRng("tiny")
        assert shuffle([], rng) == []
        assert shuffle([1], rng) == [1]
        assert rng.state().position == 0


class TestFeatureDeck:
    """Tests for create_feature_deck and draw_feature."""

    def test_create_does_not_touch_base(self):
        """Test that an injected deck is copied before shuffling."""
        base = generate_placeholder_deck(5)
        original = list(base)
        deck = create_feature_deck(SeededRng("x"), base)
        assert base == original
        assert sorted(f.id for f in deck) == sorted(f.id for f in base)

    def test_create_defaults_to_catalog(self):
        """Test the default deck content."""
        deck = create_feature_deck(SeededRng("x"))
        assert {f.id for f in deck} == {f.id for f in FEATURE_CATALOG}

    def test_draw_pops_front(self):
        """Test drawing from the top."""
        deck = generate_placeholder_deck(3)
        assert draw_feature(deck).id == "LG1"
        assert [f.id for f in deck] == ["LG2", "LG3"]

    def test_draw_empty(self):
        """Test an exhausted deck yields None."""
        assert draw_feature([]) is None
