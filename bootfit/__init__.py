"""
bootfit: Bootstrap confidence intervals for fitted model terms.

Resamples a dataset with replacement, refits a user-supplied model on each
resample, and reports percentile intervals for every coefficient.
"""

__all__ = [
    "Config",
    "RANDOM_SEED",
    "__version__",
    # Core (eager imports; lightweight)
    "estimate_intervals",
    "percentile_interval",
    "IntervalTable",
    "TermInterval",
    # Errors
    "BootstrapError",
    "EmptyDatasetError",
    "InvalidConfidenceLevelError",
    "InconsistentTermsError",
    "ModelFitError",
    # Models (lazy-imported via __getattr__)
    "FittedModel",
    "TermEstimates",
    "Formula",
    "OLSFitter",
    "EstimatorFitter",
    # Reports
    "format_intervals",
]

__version__ = "0.1.0"

from typing import Any

from bootfit.config import Config, RANDOM_SEED
from bootfit.errors import (
    BootstrapError,
    EmptyDatasetError,
    InvalidConfidenceLevelError,
    InconsistentTermsError,
    ModelFitError,
)
from bootfit.validation import (
    estimate_intervals,
    percentile_interval,
    IntervalTable,
    TermInterval,
)


def __getattr__(name: str) -> Any:  # lazy attribute access to avoid heavy deps at import time
    if name in {"FittedModel", "TermEstimates", "Formula", "OLSFitter", "EstimatorFitter"}:
        import bootfit.models as _models

        return getattr(_models, name)
    if name == "format_intervals":
        from bootfit.report import format_intervals as _fi

        return _fi
    raise AttributeError(f"module 'bootfit' has no attribute {name!r}")
