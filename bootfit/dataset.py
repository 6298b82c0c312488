"""In-memory dataset helpers: coercion, resampling, and fingerprinting."""

from __future__ import annotations

from hashlib import sha256 as _sha256
from typing import Any, Mapping, Sequence, Union

import numpy as np
import pandas as pd

from bootfit.errors import EmptyDatasetError


Dataset = Union[pd.DataFrame, Sequence[Mapping[str, Any]]]


def as_frame(dataset: Dataset) -> pd.DataFrame:
    """Return ``dataset`` as a ``DataFrame`` with a fresh ``RangeIndex``.

    Accepts a ``DataFrame`` (copied, so callers' data is never mutated) or an
    ordered sequence of row mappings. Rows with no columns still count as rows.

    Raises
    ------
    EmptyDatasetError
        If the dataset has zero rows.
    """

    if isinstance(dataset, pd.DataFrame):
        frame = dataset.reset_index(drop=True).copy()
    else:
        records = list(dataset)
        frame = pd.DataFrame.from_records(records)
        if len(frame) != len(records):
            frame = pd.DataFrame(index=pd.RangeIndex(len(records)))
    if len(frame) == 0:
        raise EmptyDatasetError()
    return frame


def draw_indices(n_rows: int, rng: np.random.Generator) -> np.ndarray:
    """Return ``n_rows`` row positions sampled uniformly with replacement."""

    return rng.integers(0, n_rows, size=n_rows)


def take_rows(frame: pd.DataFrame, indices: np.ndarray) -> pd.DataFrame:
    """Build a resample from row positions."""

    return frame.iloc[indices].reset_index(drop=True)


def fingerprint(frame: pd.DataFrame) -> str:
    """Return a SHA256 digest of the frame's contents and column names."""

    h = _sha256()
    h.update("\x1f".join(map(str, frame.columns)).encode("utf-8"))
    h.update(pd.util.hash_pandas_object(frame, index=False).to_numpy().tobytes())
    return h.hexdigest()


__all__ = [
    "Dataset",
    "as_frame",
    "draw_indices",
    "take_rows",
    "fingerprint",
]
