"""Configuration management with environment variable support."""

import os
from dataclasses import dataclass, field


@dataclass(frozen=True)
class RegistryConfig:
    """Live game registry configuration."""

    game_ttl: int = field(
        default_factory=lambda: int(os.getenv("SILOSOFT_GAME_TTL", "3600"))
    )  # Idle seconds before a game is dropped
    max_games: int = field(
        default_factory=lambda: int(os.getenv("SILOSOFT_MAX_GAMES", "100"))
    )


@dataclass(frozen=True)
class StartLimits:
    """Bounds applied to start-game requests."""

    max_players: int = 4
    min_max_turns: int = 3
    max_max_turns: int = 50
    min_target_multiplier: int = 1
    max_target_multiplier: int = 12
    max_name_length: int = 20


@dataclass(frozen=True)
class SimulationConfig:
    """Defaults for the batch simulation CLI."""

    players: int = field(
        default_factory=lambda: int(os.getenv("SILOSOFT_SIM_PLAYERS", "1"))
    )
    games: int = field(
        default_factory=lambda: int(os.getenv("SILOSOFT_SIM_GAMES", "1"))
    )
    seed: str | None = field(default_factory=lambda: os.getenv("SILOSOFT_SIM_SEED"))


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    registry: RegistryConfig = field(default_factory=RegistryConfig)
    limits: StartLimits = field(default_factory=StartLimits)
    simulation: SimulationConfig = field(default_factory=SimulationConfig)


# Global configuration instance
config = AppConfig()
