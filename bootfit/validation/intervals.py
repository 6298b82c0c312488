"""Nonparametric bootstrap confidence intervals for model terms.

Rows of the dataset are resampled uniformly with replacement, the model is
refit on each resample, and per-term percentile intervals are read off the
replicate distribution.

Each resample draws from its own random sub-stream spawned from a single
``numpy.random.SeedSequence``, so a seeded run gives identical results
whether it executes sequentially or on a thread pool.

References
----------
- Efron, B., & Tibshirani, R. J. (1993). An Introduction to the Bootstrap.
- Davison, A. C., & Hinkley, D. V. (1997). Bootstrap Methods and their
  Application.

Examples
--------
>>> import pandas as pd
>>> from bootfit.validation import estimate_intervals
>>> from bootfit.models import OLSFitter
>>> df = pd.DataFrame({"x": range(10), "y": [2.1 * v for v in range(10)]})
>>> table = estimate_intervals(df, OLSFitter("y ~ x"), num_resamples=200, random_seed=42)
>>> table.terms
['x']
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Sequence
import logging
import numbers
import threading

import numpy as np
import pandas as pd
from tqdm import tqdm

from bootfit.config import Config
from bootfit.dataset import Dataset, as_frame, draw_indices, take_rows
from bootfit.errors import InconsistentTermsError, InvalidConfidenceLevelError, ModelFitError
from bootfit.models.base import FitFunction, extract_terms
from bootfit.validation.results import IntervalTable, TermInterval


_LOGGER = logging.getLogger(__name__)

# SeedSequence only accepts non-negative entropy; negative seeds are reduced.
_SEED_MODULUS = 2**128


def _check_positive_int(value: object, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ValueError(f"{name} must be a positive integer, got {value!r}")
    if int(value) <= 0:
        raise ValueError(f"{name} must be > 0")
    return int(value)


def _check_confidence_level(confidence_level: float) -> float:
    cl = float(confidence_level)
    if not (0.0 < cl < 1.0):
        raise InvalidConfidenceLevelError(confidence_level)
    return cl


def percentile_interval(values: Sequence[float] | np.ndarray, confidence_level: float) -> tuple[float, float]:
    """Return the percentile-method interval of ``values``.

    Bounds are the ``(1-c)/2`` and ``1-(1-c)/2`` empirical quantiles, linearly
    interpolated between order statistics.
    """

    cl = _check_confidence_level(confidence_level)
    arr = np.asarray(values, dtype=float)
    if arr.size == 0:
        raise ValueError("cannot compute an interval from zero replicates")
    alpha = 1.0 - cl
    lower = float(np.percentile(arr, 100.0 * (alpha / 2.0)))
    upper = float(np.percentile(arr, 100.0 * (1.0 - alpha / 2.0)))
    return lower, upper


def _fit(frame: pd.DataFrame, fit_fn: FitFunction, resample_index: int | None) -> dict[str, float]:
    try:
        return extract_terms(fit_fn(frame))
    except Exception as exc:
        raise ModelFitError(resample_index, exc) from exc


def _run_resample(
    frame: pd.DataFrame,
    fit_fn: FitFunction,
    resample_index: int,
    seed_seq: np.random.SeedSequence,
    expected_terms: list[str],
    stop: threading.Event | None = None,
) -> tuple[int, dict[str, float]] | None:
    if stop is not None and stop.is_set():
        return None
    try:
        rng = np.random.default_rng(seed_seq)
        resample = take_rows(frame, draw_indices(len(frame), rng))
        terms = _fit(resample, fit_fn, resample_index)
        if set(terms) != set(expected_terms):
            raise InconsistentTermsError(resample_index, expected_terms, terms)
    except (ModelFitError, InconsistentTermsError):
        if stop is not None:
            stop.set()
        raise
    return resample_index, terms


def estimate_intervals(
    dataset: Dataset,
    fit_fn: FitFunction,
    num_resamples: int | None = None,
    confidence_level: float | None = None,
    keep_replicates: bool = False,
    random_seed: int | None = None,
    *,
    n_workers: int | None = None,
    progress: bool = False,
) -> IntervalTable:
    """Compute percentile bootstrap intervals for every term of a model.

    Parameters
    ----------
    dataset:
        Non-empty ``DataFrame`` or ordered sequence of row mappings.
    fit_fn:
        Callable mapping a ``DataFrame`` to a ``FittedModel`` (or a plain
        mapping of term estimates). Must be thread-safe if ``n_workers > 1``.
    num_resamples:
        Number of bootstrap resamples. Defaults to Config.BOOTSTRAP_N_RESAMPLES.
    confidence_level:
        Interval level in (0, 1). Defaults to Config.BOOTSTRAP_CONFIDENCE_LEVEL.
    keep_replicates:
        Retain every replicate estimate (in resample order) in the result.
    random_seed:
        Integer seed for reproducibility, recorded as ``IntervalTable.seed``.
        Negative seeds are reduced modulo 2**128. ``None`` draws fresh OS
        entropy and records the entropy actually used.
    n_workers:
        Threads used for refitting. Defaults to Config.N_WORKERS (sequential).
    progress:
        Show a tqdm progress bar on stderr.

    Returns
    -------
    IntervalTable
        One ``TermInterval`` per term, in the original fit's term order.

    Raises
    ------
    ValueError
        If ``num_resamples`` or ``n_workers`` is not a positive integer, or
        ``random_seed`` is not an integer.
    InvalidConfidenceLevelError
        If ``confidence_level`` is not strictly between 0 and 1.
    EmptyDatasetError
        If ``dataset`` has zero rows.
    ModelFitError
        If ``fit_fn`` raises on the original dataset or any resample. The run
        stops at the first failure; no partial result is returned.
    InconsistentTermsError
        If a resample's fit yields a different term set than the original fit.
    """

    n = _check_positive_int(
        num_resamples if num_resamples is not None else Config.BOOTSTRAP_N_RESAMPLES, "num_resamples"
    )
    cl = _check_confidence_level(
        confidence_level if confidence_level is not None else Config.BOOTSTRAP_CONFIDENCE_LEVEL
    )
    workers = _check_positive_int(n_workers if n_workers is not None else Config.N_WORKERS, "n_workers")
    if random_seed is not None and (isinstance(random_seed, bool) or not isinstance(random_seed, numbers.Integral)):
        raise ValueError(f"random_seed must be an integer or None, got {random_seed!r}")

    frame = as_frame(dataset)
    root = np.random.SeedSequence(None if random_seed is None else int(random_seed) % _SEED_MODULUS)
    children = root.spawn(n)

    _LOGGER.info(
        "Bootstrapping %d rows: %d resamples, confidence=%.3f, workers=%d",
        len(frame),
        n,
        cl,
        workers,
    )

    point = _fit(frame, fit_fn, None)
    term_names = list(point)
    if not term_names:
        raise ModelFitError(None, ValueError("fit_fn returned no terms"))
    column = {t: j for j, t in enumerate(term_names)}
    values = np.empty((n, len(term_names)), dtype=float)

    def _store(resample_index: int, terms: dict[str, float]) -> None:
        for t, v in terms.items():
            values[resample_index, column[t]] = v

    try:
        if workers == 1:
            for i in tqdm(range(n), desc="resamples", disable=not progress):
                _store(*_run_resample(frame, fit_fn, i, children[i], term_names))
        else:
            stop = threading.Event()
            executor = ThreadPoolExecutor(max_workers=workers)
            try:
                futures = [
                    executor.submit(_run_resample, frame, fit_fn, i, children[i], term_names, stop)
                    for i in range(n)
                ]
                for fut in tqdm(as_completed(futures), total=n, desc="resamples", disable=not progress):
                    result = fut.result()
                    if result is not None:
                        _store(*result)
            finally:
                executor.shutdown(wait=True, cancel_futures=True)
    except (ModelFitError, InconsistentTermsError) as exc:
        _LOGGER.error("Bootstrap aborted: %s", exc)
        raise

    intervals: list[TermInterval] = []
    for t in term_names:
        samples = values[:, column[t]]
        lower, upper = percentile_interval(samples, cl)
        std_error = float(np.std(samples, ddof=1)) if n > 1 else 0.0
        intervals.append(
            TermInterval(
                term=t,
                estimate=point[t],
                lower=lower,
                upper=upper,
                std_error=std_error,
                replicates=tuple(float(v) for v in samples) if keep_replicates else (),
            )
        )

    _LOGGER.info("Bootstrap finished: %d terms", len(intervals))
    return IntervalTable(
        intervals=tuple(intervals),
        n_resamples=n,
        confidence_level=cl,
        seed=int(random_seed) if random_seed is not None else int(root.entropy),
        keep_replicates=bool(keep_replicates),
    )


__all__ = [
    "estimate_intervals",
    "percentile_interval",
]
