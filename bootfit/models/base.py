"""Abstract interface for fitted models consumed by the bootstrap estimator.

The estimator only needs one capability from a fit: a mapping from term name
to estimated value. Concrete fitters (OLS, scikit-learn estimators, or any
user-supplied callable) return an object implementing ``terms()``.

Example
-------
```python
class SlopeOnly(FittedModel):
    def __init__(self, slope: float) -> None:
        self.slope = slope

    def terms(self) -> dict[str, float]:
        return {"x": self.slope}
```
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Mapping

import pandas as pd


class FittedModel(ABC):
    """Result of fitting a model to one dataset.

    Notes
    -----
    ``terms`` must return the same keys for every dataset fitted with the same
    formula; the estimator treats any difference as a fatal error.
    """

    @abstractmethod
    def terms(self) -> Mapping[str, float]:
        """Return a mapping from term name to estimated coefficient value."""

    def to_dict(self) -> dict[str, Any]:
        """Return term estimates suitable for JSON serialization."""

        return {str(k): float(v) for k, v in self.terms().items()}


class TermEstimates(FittedModel):
    """Plain container of term estimates.

    Parameters
    ----------
    estimates:
        Mapping from term name to value. Insertion order is preserved.
    """

    def __init__(self, estimates: Mapping[str, float]) -> None:
        self._estimates: dict[str, float] = {str(k): float(v) for k, v in estimates.items()}

    def terms(self) -> dict[str, float]:
        return dict(self._estimates)

    def __repr__(self) -> str:
        return f"TermEstimates({self._estimates!r})"


FitFunction = Callable[[pd.DataFrame], "FittedModel | Mapping[str, float]"]


def extract_terms(result: Any) -> dict[str, float]:
    """Return the term mapping from a fit result.

    Accepts a ``FittedModel`` (or any object with a callable ``terms``) or a
    plain mapping.

    Raises
    ------
    TypeError
        If ``result`` exposes neither.
    """

    terms_fn = getattr(result, "terms", None)
    if callable(terms_fn):
        raw = terms_fn()
    elif isinstance(result, Mapping):
        raw = result
    else:
        raise TypeError(
            f"fit_fn must return a FittedModel or a mapping of term estimates, got {type(result).__name__}"
        )
    return {str(k): float(v) for k, v in raw.items()}
