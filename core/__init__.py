"""Core feature-delivery card game engine - 100% transport-agnostic."""

from core.cards import EventCard, EventKind, FeatureCard, Level, Requirement, ResourceCard, Role
from core.rng import SeededRng, SeedState

__all__ = [
    "EventCard",
    "EventKind",
    "FeatureCard",
    "Level",
    "Requirement",
    "ResourceCard",
    "Role",
    "SeededRng",
    "SeedState",
]
