"""
Run configuration for room decoration.

Scene content (rooms, spawn groups) is configured in code; this holds the
knobs of the placement search itself.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass

# Attempts per instance before giving up on it
DEFAULT_MAX_ATTEMPTS = 50


@dataclass
class DecoratorConfig:
    """Placement search configuration."""

    max_attempts: int = DEFAULT_MAX_ATTEMPTS  # Sample/validate cycles per instance
    seed: int | None = None  # Seed for the default rng (None = fresh entropy)
    log_shortfalls: bool = True  # Warn when an instance finds no position

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1 (got {self.max_attempts})")

    @classmethod
    def for_testing(cls, seed: int = 0) -> DecoratorConfig:
        """Deterministic config for tests."""
        return cls(seed=seed)

    def to_dict(self) -> dict:
        """Flat dict, for logging alongside results."""
        return asdict(self)
