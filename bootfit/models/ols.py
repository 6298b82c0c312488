"""Ordinary least squares fits through the statsmodels formula interface.

Boolean and string predictors are treatment coded by patsy, so a boolean
column ``funny`` contributes the term ``funny[T.True]``.
"""

from __future__ import annotations

from typing import Any

import numpy as np
import pandas as pd
import statsmodels.formula.api as smf

from bootfit.models.base import FittedModel
from bootfit.models.formula import Formula

INTERCEPT = "Intercept"


class OLSModel(FittedModel):
    """Fitted OLS regression.

    Parameters
    ----------
    results:
        statsmodels ``RegressionResults``.
    keep_intercept:
        Whether ``terms()`` reports the intercept.
    """

    def __init__(self, results: Any, *, keep_intercept: bool = False) -> None:
        self.results = results
        self.keep_intercept = keep_intercept

    def terms(self) -> dict[str, float]:
        return {
            str(name): float(value)
            for name, value in self.results.params.items()
            if self.keep_intercept or name != INTERCEPT
        }

    def to_dict(self) -> dict[str, Any]:
        meta = super().to_dict()
        return {
            "terms": meta,
            "nobs": int(self.results.nobs),
            "r_squared": float(self.results.rsquared),
        }


class OLSFitter:
    """Callable fit function: ``OLSFitter("y ~ x")(frame) -> OLSModel``.

    Parameters
    ----------
    formula:
        ``"response ~ p1 + p2"`` or a parsed ``Formula``.
    keep_intercept:
        Report the intercept as a term. Defaults to False.

    Raises
    ------
    numpy.linalg.LinAlgError
        When the design matrix is rank deficient (e.g. a predictor with zero
        variance in a resample). statsmodels would otherwise silently return
        a minimum-norm solution.
    """

    def __init__(self, formula: str | Formula, *, keep_intercept: bool = False) -> None:
        self.formula = Formula.parse(formula) if isinstance(formula, str) else formula
        self.keep_intercept = keep_intercept

    def __call__(self, frame: pd.DataFrame) -> OLSModel:
        resolved = self.formula.resolve(frame)
        model = smf.ols(resolved.to_patsy(), data=frame)
        exog = np.asarray(model.exog, dtype=float)
        rank = int(np.linalg.matrix_rank(exog))
        if rank < exog.shape[1]:
            raise np.linalg.LinAlgError(
                f"design matrix is rank deficient (rank {rank} < {exog.shape[1]} columns)"
            )
        return OLSModel(model.fit(), keep_intercept=self.keep_intercept)

    def __repr__(self) -> str:
        return f"OLSFitter({str(self.formula)!r}, keep_intercept={self.keep_intercept})"
