"""Result containers for bootstrap interval estimation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator

import pandas as pd

from bootfit.config import Config


@dataclass(frozen=True)
class TermInterval:
    """Percentile interval for one model term.

    ``estimate`` comes from the fit on the original (unresampled) dataset.
    ``replicates`` is empty unless replicate retention was requested.
    """

    term: str
    estimate: float
    lower: float
    upper: float
    std_error: float
    replicates: tuple[float, ...] = ()

    @property
    def width(self) -> float:
        return self.upper - self.lower

    def contains(self, value: float) -> bool:
        return self.lower <= value <= self.upper


@dataclass(frozen=True)
class IntervalTable:
    """All term intervals from one run plus the settings that produced them."""

    intervals: tuple[TermInterval, ...]
    n_resamples: int
    confidence_level: float
    seed: int
    keep_replicates: bool
    method: str = Config.BOOTSTRAP_METHOD

    def __iter__(self) -> Iterator[TermInterval]:
        return iter(self.intervals)

    def __len__(self) -> int:
        return len(self.intervals)

    def __getitem__(self, term: str) -> TermInterval:
        for interval in self.intervals:
            if interval.term == term:
                return interval
        raise KeyError(term)

    @property
    def terms(self) -> list[str]:
        return [i.term for i in self.intervals]

    def to_frame(self) -> pd.DataFrame:
        """One row per term: term, point_estimate, lower, upper, std_error[, replicates]."""

        rows: list[dict[str, Any]] = []
        for i in self.intervals:
            row: dict[str, Any] = {
                "term": i.term,
                "point_estimate": i.estimate,
                "lower": i.lower,
                "upper": i.upper,
                "std_error": i.std_error,
            }
            if self.keep_replicates:
                row["replicates"] = list(i.replicates)
            rows.append(row)
        columns = ["term", "point_estimate", "lower", "upper", "std_error"]
        if self.keep_replicates:
            columns.append("replicates")
        return pd.DataFrame(rows, columns=columns)

    def replicates_frame(self) -> pd.DataFrame:
        """Long-format replicates: one (resample, term, estimate) row each.

        Raises
        ------
        ValueError
            If replicates were not retained.
        """

        if not self.keep_replicates:
            raise ValueError("replicates were not kept; rerun with keep_replicates=True")
        rows = [
            {"resample": idx, "term": i.term, "estimate": value}
            for i in self.intervals
            for idx, value in enumerate(i.replicates)
        ]
        return pd.DataFrame(rows, columns=["resample", "term", "estimate"])

    def to_dict(self) -> dict[str, Any]:
        """JSON-serializable representation."""

        out: dict[str, Any] = {
            "method": self.method,
            "n_resamples": self.n_resamples,
            "confidence_level": self.confidence_level,
            "seed": self.seed,
            "keep_replicates": self.keep_replicates,
            "intervals": [],
        }
        for i in self.intervals:
            item: dict[str, Any] = {
                "term": i.term,
                "point_estimate": i.estimate,
                "lower": i.lower,
                "upper": i.upper,
                "std_error": i.std_error,
            }
            if self.keep_replicates:
                item["replicates"] = list(i.replicates)
            out["intervals"].append(item)
        return out
