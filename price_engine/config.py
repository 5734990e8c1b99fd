"""
Configuration management.
"""

import os
from dataclasses import dataclass, field
from typing import Optional


def _optional_int(name: str) -> Optional[int]:
    value = os.getenv(name, "").strip()
    return int(value) if value else None


@dataclass
class EngineConfig:
    """
    Engine configuration.

    Loads from environment variables with sensible defaults.
    """

    # Training
    n_samples: int = field(default_factory=lambda: int(os.getenv("PRICE_ENGINE_N_SAMPLES", "2000")))
    random_seed: Optional[int] = field(default_factory=lambda: _optional_int("PRICE_ENGINE_RANDOM_SEED"))
    ridge_fallback: float = field(
        default_factory=lambda: float(os.getenv("PRICE_ENGINE_RIDGE_FALLBACK", "1e-6"))
    )

    # Prediction
    prediction_delay_seconds: float = field(
        default_factory=lambda: float(os.getenv("PRICE_ENGINE_PREDICTION_DELAY", "0.8"))
    )

    # Output
    verbose: bool = field(
        default_factory=lambda: os.getenv("PRICE_ENGINE_VERBOSE", "true").lower() == "true"
    )

    @classmethod
    def load(cls) -> "EngineConfig":
        """Load configuration from environment."""
        return cls()

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "n_samples": self.n_samples,
            "random_seed": self.random_seed,
            "ridge_fallback": self.ridge_fallback,
            "prediction_delay_seconds": self.prediction_delay_seconds,
            "verbose": self.verbose,
        }
