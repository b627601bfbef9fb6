"""
Solver configuration.

All tunables live on ``SolverConfig``; it can be round-tripped through a JSON
file so a benchmark or a session can be reproduced with the same settings.
"""

import json
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Dict


# ============================================================================
# CONSTANTS
# ============================================================================

WORD_LENGTH = 5
MAX_GUESSES = 6


@dataclass
class SolverConfig:
    # Pools larger than this are ranked by letter frequency instead of entropy
    heuristic_threshold: int = 2000
    # Extra allowed-guess words added to the remaining pool as candidates
    top_allowed_guesses: int = 100
    max_candidates: int = 2000
    max_suggestions: int = 20
    # Worker emits a progress message every N candidates
    progress_interval: int = 100
    max_guesses: int = MAX_GUESSES
    opener_count: int = 10

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValueError(f"{f.name} must be an integer, got {value!r}")
        if self.top_allowed_guesses < 0:
            raise ValueError("top_allowed_guesses must be >= 0")
        for name in ("heuristic_threshold", "max_candidates", "max_suggestions",
                     "progress_interval", "max_guesses", "opener_count"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be >= 1")

    @classmethod
    def from_dict(cls, config_dict: Dict) -> "SolverConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(config_dict) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")
        return cls(**config_dict)

    def to_dict(self) -> Dict:
        return asdict(self)


def save_config(config: SolverConfig, file_path: Path):
    """Saves the configuration object to a JSON file."""
    with open(file_path, 'w') as f:
        json.dump(config.to_dict(), f, indent=4)


def load_config_from_file(config_path: str) -> SolverConfig:
    """Loads the solver configuration from a JSON file."""
    config_file = Path(config_path)
    if not config_file.is_file():
        raise FileNotFoundError(f"Configuration file not found at: {config_path}")

    with open(config_file, 'r') as f:
        config_dict = json.load(f)

    return SolverConfig.from_dict(config_dict)
