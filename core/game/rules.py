"""Game configuration."""

from dataclasses import dataclass, fields, replace
from typing import Any, Mapping


@dataclass(frozen=True)
class GameConfig:
    """
    Tunable game parameters.

    Anything not supplied falls back to the standard game.
    """

    # Empty means derive a seed from the clock at game creation
    seed: str = ""

    # Carried for clients; no engine operation enforces it
    single_completion_per_turn: bool = False

    # Probability that a draw yields a resource instead of an event
    resource_weight: float = 0.8

    # Ring buffer size for the action log
    log_retention: int = 200

    # Completed features needed per player to win
    target_multiplier: int = 3

    # Rounds allowed before the game is lost
    max_turns: int = 10

    def __post_init__(self) -> None:
        """Validate parameter ranges."""
        if not 0.0 < self.resource_weight <= 1.0:
            raise ValueError("resource_weight must be in (0, 1]")
        if self.log_retention <= 0:
            raise ValueError("log_retention must be positive")
        if self.target_multiplier < 1:
            raise ValueError("target_multiplier must be at least 1")
        if self.max_turns < 1:
            raise ValueError("max_turns must be at least 1")

    @classmethod
    def normalize(
        cls,
        config: "GameConfig | Mapping[str, Any] | None" = None,
        seed: str | None = None,
    ) -> "GameConfig":
        """
        Resolve a config from an instance, a mapping of overrides, or nothing.

        Mapping keys that are None are treated as absent. An explicit seed
        takes precedence over the config's own.
        """
        if config is None:
            resolved = cls()
        elif isinstance(config, cls):
            resolved = config
        else:
            known = {f.name for f in fields(cls)}
            unknown = set(config) - known
            if unknown:
                raise ValueError(f"Unknown config keys: {sorted(unknown)}")
            resolved = cls(**{k: v for k, v in config.items() if v is not None})

        if seed:
            resolved = replace(resolved, seed=seed)
        return resolved
