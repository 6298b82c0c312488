"""Minimal ``response ~ predictor + predictor`` formulas.

Only column selection is supported: no interactions, transforms or
intercept suppression. ``y ~ .`` selects every column except the response.
"""

from __future__ import annotations

from dataclasses import dataclass

import pandas as pd


@dataclass(frozen=True)
class Formula:
    """A response column and an ordered tuple of predictor columns."""

    response: str
    predictors: tuple[str, ...]

    @classmethod
    def parse(cls, text: str) -> "Formula":
        """Parse ``"y ~ a + b"``.

        Raises
        ------
        ValueError
            If the formula lacks exactly one ``~`` or names no predictors.
        """

        if text.count("~") != 1:
            raise ValueError(f"formula must contain exactly one '~': {text!r}")
        lhs, rhs = (part.strip() for part in text.split("~"))
        if not lhs:
            raise ValueError(f"formula has no response: {text!r}")
        predictors = tuple(p.strip() for p in rhs.split("+") if p.strip())
        if not predictors:
            raise ValueError(f"formula has no predictors: {text!r}")
        if "." in predictors and len(predictors) > 1:
            raise ValueError("'.' cannot be combined with named predictors")
        return cls(response=lhs, predictors=predictors)

    def resolve(self, frame: pd.DataFrame) -> "Formula":
        """Expand ``.`` against ``frame`` and check that all columns exist.

        Raises
        ------
        KeyError
            If the response or a predictor is not a column of ``frame``.
        """

        columns = [str(c) for c in frame.columns]
        if self.response not in columns:
            raise KeyError(f"response column not found: {self.response!r}")
        if self.predictors == (".",):
            return Formula(self.response, tuple(c for c in columns if c != self.response))
        missing = [p for p in self.predictors if p not in columns]
        if missing:
            raise KeyError(f"predictor columns not found: {missing}")
        return self

    def to_patsy(self) -> str:
        """Render as a patsy formula, quoting names that are not identifiers."""

        def _q(name: str) -> str:
            return name if name.isidentifier() else f'Q("{name}")'

        return f"{_q(self.response)} ~ " + " + ".join(_q(p) for p in self.predictors)

    def __str__(self) -> str:
        return f"{self.response} ~ " + " + ".join(self.predictors)
