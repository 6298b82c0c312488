"""Fit collaborators: the FittedModel interface, OLS, and scikit-learn adapters."""

from __future__ import annotations

from typing import Any

from bootfit.models.base import FittedModel, TermEstimates, extract_terms
from bootfit.models.formula import Formula

__all__ = [
    "FittedModel",
    "TermEstimates",
    "extract_terms",
    "Formula",
    "OLSFitter",
    "OLSModel",
    "EstimatorFitter",
    "EstimatorModel",
]


def __getattr__(name: str) -> Any:  # lazy imports
    if name in {"OLSFitter", "OLSModel"}:
        from bootfit.models import ols as _ols

        return getattr(_ols, name)
    if name in {"EstimatorFitter", "EstimatorModel"}:
        from bootfit.models import estimator as _est

        return getattr(_est, name)
    raise AttributeError(f"module 'bootfit.models' has no attribute {name!r}")
