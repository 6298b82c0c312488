"""Statistical validation: bootstrap confidence intervals for model terms.

Public API:
- estimate_intervals, percentile_interval
- IntervalTable, TermInterval
"""

from __future__ import annotations

from bootfit.validation.intervals import estimate_intervals, percentile_interval
from bootfit.validation.results import IntervalTable, TermInterval

__all__ = [
    "estimate_intervals",
    "percentile_interval",
    "IntervalTable",
    "TermInterval",
]
