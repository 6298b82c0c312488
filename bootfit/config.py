"""Centralized configuration for reproducible bootstrap runs.

Defines immutable defaults for random seeds, resampling settings, worker
counts, and model defaults so that command-line runs and notebooks produce
identical intervals for identical inputs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Config:
    """Immutable configuration defaults for the project."""

    # Random seeds
    RANDOM_SEED: int = 42

    # Bootstrap settings
    BOOTSTRAP_N_RESAMPLES: int = 1000
    BOOTSTRAP_CONFIDENCE_LEVEL: float = 0.95
    BOOTSTRAP_METHOD: str = "percentile"

    # Parallelism (1 = sequential)
    N_WORKERS: int = 1

    # Model defaults
    KEEP_INTERCEPT: bool = False


# Convenience re-exports and constants
RANDOM_SEED: int = Config.RANDOM_SEED
OUTPUT_FORMATS: list[str] = ["table", "markdown", "csv", "json"]

# Public datasets used by the walkthroughs. Listed for reference and for the
# command line; the library itself never downloads anything.
DATASET_URLS: dict[str, str] = {
    "scoobydoo": "https://raw.githubusercontent.com/rfordatascience/tidytuesday/master/data/2021/2021-07-13/scoobydoo.csv",
    "superbowl": "https://raw.githubusercontent.com/rfordatascience/tidytuesday/master/data/2021/2021-03-02/youtube.csv",
}

# Formulas matching the walkthroughs' models.
DATASET_FORMULAS: dict[str, str] = {
    "superbowl": "year ~ funny + show_product_quickly + patriotic + celebrity + danger + animals + use_sex",
}


_CONFIG_SINGLETON: Optional[Config] = None


def get_config() -> Config:
    """Return a singleton `Config` instance."""

    global _CONFIG_SINGLETON
    if _CONFIG_SINGLETON is None:
        _CONFIG_SINGLETON = Config()
    return _CONFIG_SINGLETON
