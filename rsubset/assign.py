"""Assignment operators: ``[<-`` (assign), ``[[<-`` (assign_element), ``$<-``.

All three mutate the caller's container in place and return ``None``.
Targets are found with the same normalization used for selection; the
replacement values are recycled over the targets and must divide their
number exactly.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

import numpy as np
import pandas as pd

from .core import (
    EMPTY,
    NA,
    Array,
    RList,
    Vector,
    _Flat,
    frame_cells,
    is_na,
    object_array,
    row_names,
)
from .errors import (
    DimensionMismatchError,
    InvalidIndexError,
    LengthMismatchError,
    OutOfBoundsError,
)
from .index import (
    NormalizedIndex,
    as_index_values,
    as_matrix_index,
    as_position,
    index_type,
    normalize_coordinates,
    normalize_index,
)
from .select import extract
from .types import RawIndex

logger = logging.getLogger(__name__)


def as_replacement(value: Any) -> list[Any]:
    """Flatten a replacement value into the list of values to recycle."""
    if isinstance(value, (_Flat, Array)):
        return value.tolist()
    if isinstance(value, pd.DataFrame):
        return frame_cells(value).tolist()
    if isinstance(value, np.ndarray):
        return value.ravel(order="F").tolist()
    if isinstance(value, pd.Series):
        return value.tolist()
    if isinstance(value, Mapping):
        return list(value.values())
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        return [value]
    return list(value)


def check_lengths(n_targets: int, n_values: int) -> None:
    """Raise unless ``n_values`` recycles exactly over ``n_targets``.

    Raises
    ------
    LengthMismatchError
        If there are targets but no values, or the target count is not a
        multiple of the value count.
    """
    if n_targets == 0:
        return
    if n_values == 0:
        raise LengthMismatchError("replacement has length zero")
    if n_targets % n_values != 0:
        raise LengthMismatchError(
            f"number of items to replace ({n_targets}) is not a multiple of "
            f"replacement length ({n_values})"
        )


def _known_positions(idx: NormalizedIndex, n_values: int) -> np.ndarray:
    """Positions to write, skipping ``NA`` subscripts when that is unambiguous."""
    if not idx.missing.any():
        return idx.positions
    if n_values > 1:
        raise InvalidIndexError("NAs are not allowed in subscripted assignments")
    return idx.positions[~idx.missing]


def assign(x: Any, *indices: RawIndex, value: Any) -> None:
    """R's ``[<-``: replace the selected elements of ``x`` in place.

    Parameters
    ----------
    x : Vector | RList | Array | pandas.DataFrame
        The container to modify.
    *indices : RawIndex
        No index (every element, keeping the container's type), one index
        (flat, list mode for data frames, or a coordinate matrix) or one
        index per axis.
    value : Any
        Replacement values, recycled over the targets. ``None`` removes the
        selected elements of a list or columns of a data frame.

    Raises
    ------
    LengthMismatchError
        If the values cannot be recycled exactly over the targets.
    OutOfBoundsError
        If an array or data frame row target lies past the end.
    """
    if isinstance(x, _Flat):
        if len(indices) > 1:
            raise DimensionMismatchError(
                f"incorrect number of subscripts: {len(indices)} "
                "for a one-axis container"
            )
        _assign_flat(x, indices[0] if indices else EMPTY, value)
    elif isinstance(x, Array):
        _assign_array(x, indices, value)
    elif isinstance(x, pd.DataFrame):
        _assign_frame(x, indices, value)
    else:
        raise TypeError(f"cannot assign into an object of type {type(x).__name__}")


def _grow(x: _Flat, extent: int, new_names: Sequence[Any]) -> None:
    n_old = len(x)
    pad = extent - n_old
    if pad <= 0:
        return
    if isinstance(x, Vector):
        x.values = np.concatenate([x.values, object_array([NA] * pad)])
    else:
        x.values.extend([None] * pad)
    if new_names or x.names is not None:
        old = x.names if x.names is not None else [""] * n_old
        x.names = old + list(new_names) + [""] * (pad - len(new_names))
    logger.debug(
        "Extended %s from %d to %d elements", type(x).__name__, n_old, extent
    )


def _remove(x: RList, positions: Iterable[int]) -> None:
    gone = {int(p) for p in positions if 0 <= p < len(x)}
    keep = [k for k in range(len(x)) if k not in gone]
    x.values = [x.values[k] for k in keep]
    if x.names is not None:
        x.names = [x.names[k] for k in keep]
    logger.debug("Removed %d element(s) from list", len(gone))


def _assign_flat(x: _Flat, index: RawIndex, value: Any) -> None:
    idx = normalize_index(index, len(x), x.names, for_assignment=True)
    if value is None:
        if isinstance(x, RList):
            _remove(x, idx.positions)
            return
        raise LengthMismatchError("replacement has length zero")
    values = as_replacement(value)
    positions = _known_positions(idx, len(values))
    check_lengths(len(positions), len(values))
    _grow(x, idx.extent, idx.new_names)
    for k, p in enumerate(positions):
        x.values[p] = values[k % len(values)]


def _flat_targets(
    dims: Sequence[int], dimnames: Sequence[Any], index: RawIndex
) -> NormalizedIndex:
    """Targets of a single index on a multi-axis container, as flat positions."""
    matrix = as_matrix_index(index)
    if matrix is not None and index_type(matrix.ravel().tolist()) == "logical":
        index = matrix.ravel(order="F").tolist()
        matrix = None
    if matrix is not None:
        return normalize_coordinates(matrix, dims, dimnames)
    names = dimnames[0] if len(dims) == 1 else None
    return normalize_index(index, int(np.prod(dims)), names)


def _in_bounds(positions: np.ndarray, total: int) -> None:
    if (positions >= total).any():
        bad = int(positions[positions >= total][0]) + 1
        raise OutOfBoundsError(
            f"subscript {bad} out of bounds for {total} elements", key=bad
        )


def _assign_array(x: Array, indices: Sequence[RawIndex], value: Any) -> None:
    if value is None:
        raise LengthMismatchError("replacement has length zero")
    values = as_replacement(value)
    if len(indices) <= 1:
        idx = _flat_targets(x.dim, x.dimnames, indices[0] if indices else EMPTY)
        targets = _known_positions(idx, len(values))
        _in_bounds(targets, len(x))
    else:
        if len(indices) != x.ndim:
            raise DimensionMismatchError(
                f"incorrect number of subscripts: {len(indices)} for {x.ndim} axes"
            )
        idxs = [
            normalize_index(raw, extent, axis_names)
            for raw, extent, axis_names in zip(indices, x.dim, x.dimnames)
        ]
        for idx in idxs:
            if idx.missing.any():
                raise InvalidIndexError(
                    "NAs and unknown names are not allowed in subscripted assignments"
                )
            _in_bounds(idx.positions, idx.length)
        grid = np.meshgrid(*[idx.positions for idx in idxs], indexing="ij")
        coords = [axis.ravel(order="F") for axis in grid]
        targets = np.ravel_multi_index(coords, x.dim, order="F")

    check_lengths(len(targets), len(values))
    for k, t in enumerate(targets):
        x.values[np.unravel_index(int(t), x.dim, order="F")] = values[k % len(values)]


def _recycle(values: list[Any], n: int) -> list[Any]:
    if len(values) == n:
        return values
    if not values or n == 0 or n % len(values) != 0:
        raise LengthMismatchError(
            f"replacement has {len(values)} rows, data has {n}"
        )
    return [values[k % len(values)] for k in range(n)]


def _write_cells(df: pd.DataFrame, cells: Iterable[tuple[int, int, Any]]) -> None:
    """Apply ``(row, col, value)`` writes in order, one column rewrite each."""
    by_column: dict[int, list[tuple[int, Any]]] = {}
    for r, c, v in cells:
        by_column.setdefault(int(c), []).append((int(r), v))
    for c, writes in by_column.items():
        column = df.iloc[:, c].tolist()
        for r, v in writes:
            column[r] = v
        df.isetitem(c, column)


def _check_no_holes(df: pd.DataFrame, idx: NormalizedIndex) -> None:
    ncol = df.shape[1]
    new = sorted({int(p) for p in idx.positions if p >= ncol})
    if new != list(range(ncol, ncol + len(new))):
        raise InvalidIndexError("new columns would leave holes after existing columns")


def _add_columns(df: pd.DataFrame, idx: NormalizedIndex) -> None:
    """Append the columns that ``idx`` refers to past the last column."""
    for p in sorted({int(p) for p in idx.positions if p >= df.shape[1]}):
        k = p - idx.length
        name = idx.new_names[k] if k < len(idx.new_names) else f"V{p + 1}"
        df[name] = [NA] * df.shape[0]
        logger.debug("Added column %r", name)


def _assign_frame(df: pd.DataFrame, indices: Sequence[RawIndex], value: Any) -> None:
    if len(indices) > 2:
        raise DimensionMismatchError(
            f"incorrect number of subscripts: {len(indices)} for a data frame"
        )
    if len(indices) == 2:
        _assign_frame_cells(df, indices[0], indices[1], value)
        return
    index = indices[0] if indices else EMPTY
    if as_matrix_index(index) is not None:
        if value is None:
            raise LengthMismatchError("replacement has length zero")
        values = as_replacement(value)
        idx = _flat_targets(df.shape, [row_names(df), list(df.columns)], index)
        targets = _known_positions(idx, len(values))
        _in_bounds(targets, df.size)
        check_lengths(len(targets), len(values))
        rows, cols = np.unravel_index(targets.astype(np.int64), df.shape, order="F")
        writes = (
            (r, c, values[k % len(values)])
            for k, (r, c) in enumerate(zip(rows, cols))
        )
        _write_cells(df, writes)
        return
    _assign_frame_columns(df, index, value)


def _assign_frame_columns(df: pd.DataFrame, index: RawIndex, value: Any) -> None:
    """List-mode assignment: whole columns."""
    idx = normalize_index(index, df.shape[1], list(df.columns), for_assignment=True)
    if idx.missing.any():
        raise InvalidIndexError("missing values are not allowed in column subscripts")
    if value is None:
        doomed = [df.columns[p] for p in set(idx.positions.tolist()) if p < df.shape[1]]
        df.drop(columns=doomed, inplace=True)
        logger.debug("Removed column(s) %r", doomed)
        return

    if isinstance(value, pd.DataFrame):
        columns = [value.iloc[:, j].tolist() for j in range(value.shape[1])]
    elif isinstance(value, RList):
        columns = [as_replacement(element) for element in value.tolist()]
    else:
        columns = [as_replacement(value)]
    check_lengths(len(idx), len(columns))
    recycled = [
        _recycle(columns[k % len(columns)], df.shape[0]) for k in range(len(idx))
    ]
    _check_no_holes(df, idx)

    _add_columns(df, idx)
    for p, column in zip(idx.positions, recycled):
        df.isetitem(int(p), column)


def _assign_frame_cells(
    df: pd.DataFrame, i: RawIndex, j: RawIndex, value: Any
) -> None:
    """Matrix-mode assignment: the rows x columns cross product."""
    if value is None:
        raise LengthMismatchError("replacement has length zero")
    values = as_replacement(value)
    rows = normalize_index(i, df.shape[0], row_names(df))
    cols = normalize_index(j, df.shape[1], list(df.columns), for_assignment=True)
    if cols.missing.any():
        raise InvalidIndexError("missing values are not allowed in column subscripts")
    row_positions = _known_positions(rows, len(values))
    _in_bounds(row_positions, df.shape[0])
    check_lengths(len(row_positions) * len(cols), len(values))
    _check_no_holes(df, cols)
    _add_columns(df, cols)

    def cells():
        k = 0
        for c in cols.positions:
            for r in row_positions:
                yield r, c, values[k % len(values)]
                k += 1

    _write_cells(df, cells())


def _check_key(key: Any) -> None:
    """Reject a key that cannot refer to exactly one known position."""
    if is_na(key):
        raise InvalidIndexError("missing value in a single-element subscript")
    if isinstance(key, (int, float, np.integer, np.floating)):
        p = as_position(key)
        if p is None:
            raise InvalidIndexError(f"invalid subscript {key!r}")
        if p < 1:
            raise InvalidIndexError("attempt to select less than one element")


def assign_element(x: Any, *indices: RawIndex, value: Any) -> None:
    """R's ``[[<-``: replace exactly one element of ``x`` in place.

    Assigning ``None`` to a list element or data frame column removes it.
    A sequence of keys descends through nested lists, creating missing
    intermediate lists.

    Raises
    ------
    InvalidIndexError
        For a missing or ``None`` index, or a key that is not a single
        position or name.
    LengthMismatchError
        If an atomic element is replaced by more or fewer than one value.
    """
    if not indices or any(index is None for index in indices):
        raise InvalidIndexError("subscript is NULL or missing")
    if len(indices) > 1:
        if value is None or len(as_replacement(value)) != 1:
            raise LengthMismatchError(
                "more elements supplied than there are to replace"
            )
        for raw in indices:
            keys = as_index_values(raw)
            if len(keys) != 1:
                raise InvalidIndexError(
                    "each subscript must select exactly one position"
                )
            _check_key(keys[0])
        assign(x, *indices, value=value)
        return

    keys = as_index_values(indices[0])
    if not keys:
        raise InvalidIndexError("attempt to select less than one element")
    if len(keys) > 1:
        if not isinstance(x, RList):
            raise InvalidIndexError("more than one key is only valid for nested lists")
        container = x
        for key in keys[:-1]:
            child = extract(container, key)
            if child is None:
                child = RList([])
                assign_element(container, key, value=child)
            elif not isinstance(child, RList):
                raise InvalidIndexError(
                    "recursive assignment only descends through lists"
                )
            container = child
        assign_element(container, keys[-1], value=value)
        return

    key = keys[0]
    _check_key(key)
    if isinstance(x, RList):
        _assign_flat(x, [key], None if value is None else RList([value]))
    elif isinstance(x, pd.DataFrame):
        _assign_frame_columns(df=x, index=[key], value=value)
    elif isinstance(x, (Vector, Array)):
        if value is None or len(as_replacement(value)) != 1:
            raise LengthMismatchError(
                "more elements supplied than there are to replace"
            )
        assign(x, [key], value=value)
    else:
        raise TypeError(f"cannot assign into an object of type {type(x).__name__}")


def assign_dollar(x: Any, name: str, value: Any) -> None:
    """R's ``$<-``: set or remove a list element or data frame column by exact name."""
    if isinstance(x, (Vector, Array)):
        raise InvalidIndexError("$ operator is invalid for atomic vectors")
    if not isinstance(name, str):
        raise InvalidIndexError("$ requires a name")
    assign_element(x, name, value=value)
