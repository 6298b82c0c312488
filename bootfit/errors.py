"""Error types raised by the bootstrap interval estimator.

Every error is terminal for the current run: callers receive either a
complete interval table or one of these exceptions.
"""

from __future__ import annotations

from typing import Iterable


class BootstrapError(Exception):
    """Base class for all bootstrap estimation failures."""


class EmptyDatasetError(BootstrapError, ValueError):
    """Raised when the input dataset has zero rows."""

    def __init__(self, message: str = "dataset must contain at least one row") -> None:
        super().__init__(message)


class InvalidConfidenceLevelError(BootstrapError, ValueError):
    """Raised when ``confidence_level`` is not strictly between 0 and 1."""

    def __init__(self, confidence_level: float) -> None:
        self.confidence_level = confidence_level
        super().__init__(f"confidence_level must be in (0, 1), got {confidence_level!r}")


class InconsistentTermsError(BootstrapError):
    """Raised when a resample's fit yields a different term set than the original fit."""

    def __init__(self, resample_index: int, expected: Iterable[str], actual: Iterable[str]) -> None:
        expected_set = set(expected)
        actual_set = set(actual)
        self.resample_index = resample_index
        self.missing: list[str] = sorted(expected_set - actual_set)
        self.extra: list[str] = sorted(actual_set - expected_set)
        super().__init__(
            f"resample {resample_index} produced a different term set "
            f"(missing={self.missing}, extra={self.extra})"
        )


class ModelFitError(BootstrapError):
    """Raised when the model-fitting function fails.

    The collaborator's exception is chained as ``__cause__``.
    ``resample_index`` is ``None`` when the fit on the original dataset failed.
    """

    def __init__(self, resample_index: int | None, cause: BaseException) -> None:
        self.resample_index = resample_index
        self.cause = cause
        where = "original dataset" if resample_index is None else f"resample {resample_index}"
        super().__init__(f"model fit failed on {where}: {type(cause).__name__}: {cause}")


__all__ = [
    "BootstrapError",
    "EmptyDatasetError",
    "InvalidConfidenceLevelError",
    "InconsistentTermsError",
    "ModelFitError",
]
