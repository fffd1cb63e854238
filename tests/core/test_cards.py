"""Tests for resource, feature and event cards."""

import pytest

from core.cards import (
    CORE_ROLES,
    EventCard,
    EventKind,
    FeatureCard,
    Level,
    Requirement,
    ResourceCard,
    Role,
)


class TestLevel:
    """Tests for seniority levels."""

    def test_level_points(self):
        """Test level point values."""
        assert Level.ENTRY.points == 1
        assert Level.JUNIOR.points == 2
        assert Level.SENIOR.points == 3
        assert Level.CONTRACT.points == 2

    @pytest.mark.parametrize(
        "roll,expected",
        [
            (0.0, Level.ENTRY),
            (0.329, Level.ENTRY),
            (0.33, Level.JUNIOR),
            (0.659, Level.JUNIOR),
            (0.66, Level.SENIOR),
            (0.999, Level.SENIOR),
        ],
    )
    def test_from_roll(self, roll, expected):
        """Test level thresholds."""
        assert Level.from_roll(roll) == expected


class TestResourceCard:
    """Tests for the ResourceCard class."""

    def test_create_sets_points_from_level(self):
        """Test that points follow the level."""
        card = ResourceCard.create("c1", Role.DEV, Level.SENIOR)
        assert card.points == 3
        assert card.level == Level.SENIOR
        assert not card.is_contractor

    def test_contractor_ignores_level(self):
        """Test that contractors are always CONTRACT level worth 2."""
        card = ResourceCard.create("c2", Role.CONTRACTOR, Level.ENTRY)
        assert card.level == Level.CONTRACT
        assert card.points == 2
        assert card.is_contractor

    def test_core_role_needs_level(self):
        """Test that a core role without a level is rejected."""
        with pytest.raises(ValueError):
            ResourceCard.create("c3", Role.PM)
        with pytest.raises(ValueError):
            ResourceCard.create("c3", Role.PM, Level.CONTRACT)

    def test_card_immutability(self):
        """Test that cards are immutable."""
        card = ResourceCard.create("c4", Role.UX, Level.JUNIOR)
        with pytest.raises(AttributeError):
            card.points = 5

    def test_card_str(self):
        """Test string representation."""
        assert str(ResourceCard.create("c5", Role.UX, Level.JUNIOR)) == "UX:2"


class TestFeatureCard:
    """Tests for the FeatureCard class."""

    def test_defaults_and_str(self):
        """Test the description default and string form."""
        feature = FeatureCard(
            id="F2",
            name="Teams Presence Sync",
            total_points=6,
            requirements=(
                Requirement(Role.DEV, 3),
                Requirement(Role.UX, 1),
                Requirement(Role.PM, 2),
            ),
        )
        assert str(feature) == "F2 Teams Presence Sync"
        assert feature.description == ""

    def test_core_roles_exclude_contractor(self):
        """Test that only DEV, PM and UX are requirement roles."""
        assert CORE_ROLES == (Role.DEV, Role.PM, Role.UX)
        assert Role.CONTRACTOR.is_wildcard
        assert not any(r.is_wildcard for r in CORE_ROLES)


class TestEventCard:
    """Tests for the EventCard class."""

    def test_payload_defaults_empty(self):
        """Test default payload."""
        event = EventCard(id="E-1-42", kind=EventKind.PTO)
        assert event.payload == {}
        assert str(event) == "PTO (E-1-42)"

    def test_payload_not_part_of_equality(self):
        """Test that equality ignores the payload."""
        a = EventCard(id="E-1", kind=EventKind.LAYOFF, payload={"x": 1})
        b = EventCard(id="E-1", kind=EventKind.LAYOFF)
        assert a == b
