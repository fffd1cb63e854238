"""Pytest fixtures for game engine tests."""

import pytest

from core.cards import FeatureCard, Level, Requirement, ResourceCard, Role
from core.game import create_game
from core.rng import SeededRng

FIXED_MILLIS = 1_700_000_000_000


class ScriptedRng(SeededRng):
    """SeededRng that returns scripted values first, then the real stream."""

    def __init__(self, values: list[float], seed: str = "scripted") -> None:
        super().__init__(seed)
        self._script = list(values)

    def next(self) -> float:
        if self._script:
            self._count += 1
            return self._script.pop(0)
        return super().next()


@pytest.fixture
def fixed_clock():
    """Clock that always reports the same epoch millisecond."""
    return lambda: FIXED_MILLIS


@pytest.fixture
def scripted_rng():
    """Factory for RNGs with a scripted prefix."""
    return ScriptedRng


@pytest.fixture
def make_card():
    """Factory for resource cards: make_card('d3', Role.DEV, 3)."""
    levels = {1: Level.ENTRY, 2: Level.JUNIOR, 3: Level.SENIOR}

    def _make(card_id: str, role: Role, points: int = 2) -> ResourceCard:
        if role == Role.CONTRACTOR:
            return ResourceCard.create(card_id, role)
        return ResourceCard.create(card_id, role, levels[points])

    return _make


@pytest.fixture
def sso_feature():
    """Feature needing DEV 3 and PM 2, worth 5."""
    return FeatureCard(
        id="F1",
        name="Azure AD Single Sign-On",
        total_points=5,
        requirements=(Requirement(Role.DEV, 3), Requirement(Role.PM, 2)),
    )


@pytest.fixture
def small_deck():
    """Five easy single-role features."""
    return [
        FeatureCard(
            id=f"S{i}",
            name=f"Small Feature {i}",
            total_points=2,
            requirements=(Requirement(Role.DEV, 1),),
        )
        for i in range(1, 6)
    ]


@pytest.fixture
def solo_game(fixed_clock):
    """A seeded one-player game and its RNG."""
    return create_game(["Ada"], seed="solo", clock=fixed_clock)


@pytest.fixture
def duo_game(fixed_clock):
    """A seeded two-player game and its RNG."""
    return create_game(["Ada", "Grace"], seed="duo", clock=fixed_clock)


@pytest.fixture
def trio_game(fixed_clock):
    """A seeded three-player game and its RNG."""
    return create_game(["Ada", "Grace", "Linus"], seed="trio", clock=fixed_clock)
