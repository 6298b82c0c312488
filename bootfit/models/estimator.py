"""Adapter turning a scikit-learn estimator into a bootstrap fit function.

Linear models report ``coef_`` (and optionally ``intercept_``); tree-based
models report ``feature_importances_``. The estimator is cloned for every
fit so hyperparameters chosen elsewhere (e.g. by a grid search) are reused
without sharing fitted state between resamples.
"""

from __future__ import annotations

from typing import Any

import numpy as np
import pandas as pd
from sklearn.base import clone

from bootfit.models.base import FittedModel
from bootfit.models.formula import Formula


def design_matrix(frame: pd.DataFrame, formula: Formula) -> tuple[pd.DataFrame, pd.Series]:
    """Return ``(X, y)`` with non-numeric predictors one-hot encoded."""

    resolved = formula.resolve(frame)
    X = pd.get_dummies(frame[list(resolved.predictors)], drop_first=True, dtype=float)
    y = frame[resolved.response]
    return X, y


class EstimatorModel(FittedModel):
    """A fitted scikit-learn estimator and the design columns it was fitted on."""

    def __init__(self, estimator: Any, columns: list[str], *, keep_intercept: bool = False) -> None:
        self.estimator = estimator
        self.columns = columns
        self.keep_intercept = keep_intercept

    def terms(self) -> dict[str, float]:
        est = self.estimator
        if hasattr(est, "coef_"):
            coef = np.atleast_2d(np.asarray(est.coef_, dtype=float))
            if coef.shape[0] != 1:
                raise ValueError("multi-output or multiclass coefficients are not supported")
            out = {"Intercept": float(np.ravel(est.intercept_)[0])} if self.keep_intercept else {}
            out.update({col: float(v) for col, v in zip(self.columns, coef[0])})
            return out
        if hasattr(est, "feature_importances_"):
            return {col: float(v) for col, v in zip(self.columns, est.feature_importances_)}
        raise TypeError(f"{type(est).__name__} exposes neither coef_ nor feature_importances_")


class EstimatorFitter:
    """Callable fit function wrapping a scikit-learn estimator.

    Parameters
    ----------
    estimator:
        Unfitted estimator template, e.g. ``DecisionTreeClassifier(max_depth=4)``.
    formula:
        ``"response ~ p1 + p2"`` or a parsed ``Formula``.
    keep_intercept:
        Report ``intercept_`` for linear models.
    """

    def __init__(self, estimator: Any, formula: str | Formula, *, keep_intercept: bool = False) -> None:
        self.estimator = estimator
        self.formula = Formula.parse(formula) if isinstance(formula, str) else formula
        self.keep_intercept = keep_intercept

    def __call__(self, frame: pd.DataFrame) -> EstimatorModel:
        X, y = design_matrix(frame, self.formula)
        fitted = clone(self.estimator).fit(X, y)
        return EstimatorModel(fitted, [str(c) for c in X.columns], keep_intercept=self.keep_intercept)

    def __repr__(self) -> str:
        return f"EstimatorFitter({self.estimator!r}, {str(self.formula)!r})"
