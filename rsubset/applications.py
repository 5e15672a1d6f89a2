"""Everyday data tasks written in terms of the subsetting operators.

Each helper here is a thin composition of :func:`~rsubset.select.subset`
with an index built from the data: lookup tables use names, matching and
ordering use integer positions, filtering uses logical masks. None of them
modify their input.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import numpy as np
import pandas as pd

from .core import EMPTY, Vector, is_na, names
from .errors import InvalidIndexError
from .index import as_index_values
from .select import subset
from .types import Name, RawIndex


def which(mask: RawIndex) -> Vector:
    """1-based positions of the ``True`` entries of a logical vector.

    ``NA`` entries are skipped. Names of a named :class:`Vector` mask are
    carried over to the positions.

    Parameters
    ----------
    mask : RawIndex
        A logical vector.

    Returns
    -------
    Vector
        Positions, in increasing order.
    """
    values = as_index_values(mask)
    for value in values:
        if not (is_na(value) or isinstance(value, (bool, np.bool_))):
            raise InvalidIndexError("which() needs a logical vector")
    hits = [k for k, value in enumerate(values) if not is_na(value) and value]
    mask_names = mask.names if isinstance(mask, Vector) else None
    return Vector(
        [k + 1 for k in hits],
        names=None if mask_names is None else [mask_names[k] for k in hits],
    )


def lookup(table: Vector, keys: RawIndex) -> Vector:
    """Translate ``keys`` through a named vector used as a lookup table.

    Unknown keys translate to ``NA``. The result is unnamed.

    Examples
    --------
    >>> table = Vector({"m": "Male", "f": "Female", "u": None})
    >>> lookup(table, ["m", "f", "u", "f"]).tolist()
    ['Male', 'Female', None, 'Female']
    """
    return Vector(subset(table, keys).tolist())


def order(x: Vector | pd.Series, decreasing: bool = False) -> Vector:
    """1-based positions that sort ``x``, ties kept in order, ``NA`` last."""
    if isinstance(x, Vector):
        x = pd.Series([None if is_na(value) else value for value in x.tolist()])
    positions = x.reset_index(drop=True).sort_values(
        ascending=not decreasing, kind="stable", na_position="last"
    )
    return Vector((positions.index + 1).tolist())


def order_by(
    x: Vector | pd.DataFrame,
    columns: Name | Sequence[Name] | None = None,
    decreasing: bool = False,
) -> Vector | pd.DataFrame:
    """Sort a vector, or the rows of a data frame, by integer subsetting.

    Parameters
    ----------
    x : Vector | pandas.DataFrame
        What to sort.
    columns : Name | Sequence[Name], optional
        Data frame columns to sort by. Required for data frames.
    decreasing : bool, default False
        Sort in decreasing order.

    Returns
    -------
    Vector | pandas.DataFrame
        A sorted copy.
    """
    if isinstance(x, Vector):
        return subset(x, order(x, decreasing=decreasing))
    if columns is None:
        raise ValueError("columns are required to order a data frame")
    if isinstance(columns, str) or not isinstance(columns, Sequence):
        columns = [columns]
    keys = x.loc[:, list(columns)].reset_index(drop=True)
    positions = keys.sort_values(
        by=list(columns),
        ascending=not decreasing,
        kind="stable",
        na_position="last",
    ).index
    return subset(x, (positions + 1).tolist(), EMPTY, drop=False)


def match_rows(info: pd.DataFrame, keys: RawIndex, by: Name) -> pd.DataFrame:
    """Pick one row of ``info`` per key, matching on column ``by``.

    This is matching and merging by hand: ``match()`` the keys against the
    column, then subset the rows with the resulting integer positions. Keys
    without a match point past the last row and so produce a row of ``NA``.

    Parameters
    ----------
    info : pandas.DataFrame
        The table to draw rows from.
    keys : RawIndex
        The values to look up, in output order.
    by : Name
        Column of ``info`` holding the keys.

    Returns
    -------
    pandas.DataFrame
        One row per key.
    """
    first: dict[Any, int] = {}
    for k, value in enumerate(info[by].tolist()):
        first.setdefault(value, k + 1)
    past_end = info.shape[0] + 1
    positions = [first.get(key, past_end) for key in as_index_values(keys)]
    return subset(info, positions, EMPTY, drop=False)


def sample_rows(
    df: pd.DataFrame,
    n: int | None = None,
    replace: bool = False,
    seed: int | None = None,
) -> pd.DataFrame:
    """Random rows of ``df``, a random permutation when ``n`` is None.

    Parameters
    ----------
    df : pandas.DataFrame
        The table to sample.
    n : int, optional
        Number of rows to draw. Defaults to every row.
    replace : bool, default False
        Draw with replacement (bootstrap).
    seed : int, optional
        Seed for :func:`numpy.random.default_rng`.

    Returns
    -------
    pandas.DataFrame
        The sampled rows.
    """
    nrow = df.shape[0]
    if n is None:
        n = nrow
    if not replace and n > nrow:
        raise ValueError(
            f"cannot take a sample of {n} rows from {nrow} without replacement"
        )
    rng = np.random.default_rng(seed)
    positions = rng.choice(nrow, size=n, replace=replace) + 1
    return subset(df, positions.tolist(), EMPTY, drop=False)


def expand_counts(df: pd.DataFrame, count_column: Name) -> pd.DataFrame:
    """Expand aggregated rows: repeat each row as many times as its count."""
    counts = df[count_column].tolist()
    for count in counts:
        if is_na(count) or count < 0:
            raise ValueError(f"counts must be non-negative, got {count!r}")
    positions = np.repeat(np.arange(1, df.shape[0] + 1), [int(c) for c in counts])
    return subset(df, positions.tolist(), EMPTY, drop=False)


def drop_columns(df: pd.DataFrame, columns: Sequence[Name]) -> pd.DataFrame:
    """Copy of ``df`` without ``columns`` (names that are absent are ignored)."""
    doomed = set(columns)
    return subset(df, [name for name in names(df) if name not in doomed])


def filter_rows(df: pd.DataFrame, mask: RawIndex) -> pd.DataFrame:
    """Rows where ``mask`` is ``True``; ``NA`` counts as ``False``."""
    return subset(df, which(mask), EMPTY, drop=False)
