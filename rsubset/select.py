"""Selection operators: ``[`` (subset), ``[[`` (extract) and ``$`` (dollar).

``subset`` returns possibly many elements and never fails for positions
that do not exist: atomic vectors answer ``NA`` and lists answer a ``None``
slot. ``extract`` returns exactly one element and fails for the same
conditions on atomic containers, while list-like containers answer
``None``. ``dollar`` is ``extract`` by name with unique-prefix matching.

Multi-axis containers (:class:`~rsubset.core.Array` and data frames) accept
one index per axis, a single flat index in column-major order, or a
coordinate matrix with one row per element.
"""

from __future__ import annotations

import logging
import warnings
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

import numpy as np
import pandas as pd

from .core import (
    NA,
    Array,
    RList,
    Vector,
    _Flat,
    frame_cells,
    frame_column,
    is_na,
    row_names,
)
from .errors import (
    DimensionMismatchError,
    InvalidIndexError,
    NoSuchNameError,
    OutOfBoundsError,
    PartialMatchWarning,
)
from .index import (
    MISSING,
    NormalizedIndex,
    as_index_values,
    as_matrix_index,
    as_position,
    index_type,
    normalize_coordinates,
    normalize_index,
)
from .options import get_options
from .types import Name, RawIndex

logger = logging.getLogger(__name__)


class Hit(str, Enum):
    HIT = "hit"
    OUT_OF_BOUNDS = "out_of_bounds"
    MISSING = "missing"


@dataclass(frozen=True)
class Selection:
    """Positions selected from a flat container, not yet copied out.

    Attributes
    ----------
    container : Vector | RList
        The container the positions refer to.
    positions : np.ndarray
        0-based positions in selection order.
    status : tuple[Hit, ...]
        Whether each position is a real element, past the end, or unknown.
    """

    container: _Flat
    positions: np.ndarray
    status: tuple[Hit, ...]

    def __len__(self) -> int:
        return len(self.positions)

    @property
    def hits(self) -> int:
        """Number of positions that refer to real elements."""
        return sum(s is Hit.HIT for s in self.status)

    def materialize(self) -> _Flat:
        """Copy the selected elements into a new container of the same kind."""
        x = self.container
        fill = None if isinstance(x, RList) else NA
        values = [
            x.values[p] if s is Hit.HIT else fill
            for p, s in zip(self.positions, self.status)
        ]
        names = None
        if x.names is not None:
            names = [
                x.names[p] if s is Hit.HIT else NA
                for p, s in zip(self.positions, self.status)
            ]
        return type(x)(values, names)


def _status(idx: NormalizedIndex) -> tuple[Hit, ...]:
    return tuple(
        Hit.MISSING if p == MISSING
        else Hit.OUT_OF_BOUNDS if p >= idx.length
        else Hit.HIT
        for p in idx.positions
    )


def locate(x: _Flat, index: RawIndex) -> Selection:
    """Resolve ``index`` against a flat container without copying anything.

    Parameters
    ----------
    x : Vector | RList
        The container.
    index : RawIndex
        Positions, negative positions, a logical mask, names, ``EMPTY`` or a
        zero-length index.

    Returns
    -------
    Selection
        The selected positions and their hit status.
    """
    idx = normalize_index(index, len(x), x.names)
    return Selection(x, idx.positions, _status(idx))


def subset(x: Any, *indices: RawIndex, drop: bool | None = None) -> Any:
    """R's ``[``: select possibly many elements.

    Parameters
    ----------
    x : Vector | RList | Array | pandas.DataFrame | None
        The container. ``None`` (R's ``NULL``) always selects to ``None``.
    *indices : RawIndex
        No index (copy everything), one index (flat, list mode for data
        frames, or a coordinate matrix) or one index per axis.
    drop : bool, optional
        Simplify the result by dropping extent-1 axes (arrays) or a single
        selected column (data frames in matrix mode). Defaults to
        ``get_options().drop``.

    Returns
    -------
    Any
        A new container; the input is never modified.

    Raises
    ------
    DimensionMismatchError
        If the number of indices does not fit the container.
    """
    if drop is None:
        drop = get_options().drop
    if x is None:
        return None
    if isinstance(x, _Flat):
        if not indices:
            return type(x)(x)
        if len(indices) != 1:
            raise DimensionMismatchError(
                f"incorrect number of dimensions: {len(indices)} indices "
                "for a one-axis container"
            )
        return locate(x, indices[0]).materialize()
    if isinstance(x, Array):
        return _subset_array(x, indices, drop)
    if isinstance(x, pd.DataFrame):
        return _subset_frame(x, indices, drop)
    raise TypeError(f"cannot subset an object of type {type(x).__name__}")


def _flat_or_coordinates(cells: Array, index: RawIndex) -> Vector:
    """Select from a multi-axis container with a single index."""
    matrix = as_matrix_index(index)
    if matrix is not None and index_type(matrix.ravel().tolist()) == "logical":
        index = matrix.ravel(order="F").tolist()
        matrix = None
    if matrix is not None:
        idx = normalize_coordinates(matrix, cells.dim, cells.dimnames)
    else:
        idx = normalize_index(index, len(cells))
    flat = cells.flat()
    return Vector(
        [flat[p] if s is Hit.HIT else NA for p, s in zip(idx.positions, _status(idx))]
    )


def _subset_array(x: Array, indices: Sequence[RawIndex], drop: bool) -> Any:
    if not indices:
        return Array(x.values.copy(), dimnames=x.dimnames)
    if len(indices) == 1 and x.ndim > 1:
        return _flat_or_coordinates(x, indices[0])
    if len(indices) != x.ndim:
        raise DimensionMismatchError(
            f"incorrect number of dimensions: {len(indices)} indices "
            f"for {x.ndim} axes"
        )

    idxs = [
        normalize_index(raw, extent, axis_names)
        for raw, extent, axis_names in zip(indices, x.dim, x.dimnames)
    ]
    shape = tuple(len(idx) for idx in idxs)
    valid = [(idx.positions != MISSING) & (idx.positions < idx.length) for idx in idxs]
    out = np.full(shape, NA, dtype=object)
    source = x.values[np.ix_(*[idx.positions[v] for idx, v in zip(idxs, valid)])]
    out[np.ix_(*[np.flatnonzero(v) for v in valid])] = source

    dimnames = []
    for idx, v, axis_names in zip(idxs, valid, x.dimnames):
        if axis_names is None:
            dimnames.append(None)
        else:
            dimnames.append(
                [axis_names[p] if ok else NA for p, ok in zip(idx.positions, v)]
            )
    result = Array(out, dimnames=dimnames)
    return simplify(result) if drop else result


def _subset_frame(df: pd.DataFrame, indices: Sequence[RawIndex], drop: bool) -> Any:
    if not indices:
        return df.copy()
    if len(indices) == 1:
        index = indices[0]
        if as_matrix_index(index) is not None:
            return _flat_or_coordinates(frame_cells(df), index)
        cols = _frame_columns(df, index)
        return df.iloc[:, cols].copy()
    if len(indices) != 2:
        raise DimensionMismatchError(
            f"incorrect number of dimensions: {len(indices)} indices for a data frame"
        )

    rows = normalize_index(indices[0], df.shape[0], row_names(df))
    cols = _frame_columns(df, indices[1])
    valid = (rows.positions != MISSING) & (rows.positions < rows.length)
    if valid.all():
        result = df.iloc[rows.positions, cols].copy()
    else:
        data = {}
        for k, j in enumerate(cols):
            column = df.iloc[:, j].to_numpy(dtype=object)
            data[k] = [
                column[p] if ok else NA for p, ok in zip(rows.positions, valid)
            ]
        labels = [df.index[p] if ok else "NA" for p, ok in zip(rows.positions, valid)]
        result = pd.DataFrame(data, index=labels).infer_objects()
        result.columns = [df.columns[j] for j in cols]
    if drop and len(cols) == 1:
        return Vector(result.iloc[:, 0].tolist())
    return result


def _frame_columns(df: pd.DataFrame, index: RawIndex) -> np.ndarray:
    idx = normalize_index(index, df.shape[1], list(df.columns))
    if (idx.missing | idx.out_of_bounds).any():
        raise InvalidIndexError("undefined columns selected")
    return idx.positions


def simplify(result: Any) -> Any:
    """Collapse a result to the lowest-dimensional adequate representation.

    * arrays lose every extent-1 axis; one remaining axis becomes a named
      :class:`Vector`, none remaining becomes a length-1 vector
    * a length-1 :class:`RList` becomes its element
    * a :class:`Vector` loses its names
    * a one-column data frame becomes that column
    """
    if isinstance(result, Array):
        keep = [axis for axis, extent in enumerate(result.dim) if extent != 1]
        if not keep:
            return Vector(result.tolist())
        if len(keep) == 1:
            return Vector(result.tolist(), names=result.dimnames[keep[0]])
        if len(keep) == result.ndim:
            return result
        squeezed = result.values.squeeze(
            axis=tuple(a for a in range(result.ndim) if a not in keep)
        )
        return Array(squeezed, dimnames=[result.dimnames[a] for a in keep])
    if isinstance(result, RList) and len(result) == 1:
        return result.values[0]
    if isinstance(result, Vector):
        return Vector(result.values.tolist())
    if isinstance(result, pd.DataFrame) and result.shape[1] == 1:
        return frame_column(result, 0)
    return result


def _partial_match(candidates: Sequence[Name], name: str) -> int | None:
    """Exact match, else the single candidate that ``name`` is a prefix of."""
    for k, candidate in enumerate(candidates):
        if not is_na(candidate) and candidate == name:
            return k
    matches = [
        k
        for k, candidate in enumerate(candidates)
        if isinstance(candidate, str) and candidate.startswith(name)
    ]
    if len(matches) != 1:
        return None
    logger.debug("Partial match of %r to %r", name, candidates[matches[0]])
    if get_options().warn_partial_match:
        warnings.warn(
            f"partial match of '{name}' to '{candidates[matches[0]]}'",
            PartialMatchWarning,
            stacklevel=3,
        )
    return matches[0]


def _resolve_one(
    key: Any,
    length: int,
    names: Sequence[Name] | None,
    *,
    list_like: bool,
    exact: bool = True,
    depth: int = 1,
) -> int | None:
    """Resolve a single ``[[`` key to a 0-based position.

    Returns ``MISSING`` for an ``NA`` key and ``None`` when a list-like
    container has nothing at that key.
    """
    if is_na(key):
        return MISSING
    if isinstance(key, (bool, np.bool_)):
        key = int(key)
    if isinstance(key, str):
        if names is not None:
            if exact:
                for k, name in enumerate(names):
                    if not is_na(name) and name == key:
                        return k
            else:
                found = _partial_match(names, key)
                if found is not None:
                    return found
        if list_like:
            return None
        raise NoSuchNameError(f"no element named {key!r}", key=key, depth=depth)
    if isinstance(key, (int, float, np.integer, np.floating)):
        i = as_position(key)
        if i is None:
            return MISSING
        if i < 0:
            raise InvalidIndexError("invalid negative subscript for a single element")
        if i == 0:
            raise InvalidIndexError("attempt to select less than one element")
        if i > length:
            if list_like:
                return None
            raise OutOfBoundsError(
                f"subscript {i} out of bounds for length {length}", key=key, depth=depth
            )
        return i - 1
    raise InvalidIndexError(f"invalid subscript type '{type(key).__name__}'")


def _extract_one(x: Any, key: Any, *, exact: bool, depth: int) -> Any:
    if isinstance(x, RList):
        p = _resolve_one(
            key, len(x), x.names, list_like=True, exact=exact, depth=depth
        )
        if p is None or p == MISSING:
            logger.debug("Nothing at %r in a list of length %d", key, len(x))
            return None
        return x.values[p]
    if isinstance(x, pd.DataFrame):
        p = _resolve_one(
            key, x.shape[1], list(x.columns), list_like=True, exact=exact, depth=depth
        )
        if p is None or p == MISSING:
            return None
        return frame_column(x, p)
    if isinstance(x, Vector):
        p = _resolve_one(
            key, len(x), x.names, list_like=False, exact=exact, depth=depth
        )
        return NA if p == MISSING else x.values[p]
    if isinstance(x, Array):
        names = x.dimnames[0] if x.ndim == 1 else None
        p = _resolve_one(key, len(x), names, list_like=False, exact=exact, depth=depth)
        return NA if p == MISSING else x.flat()[p]
    raise TypeError(f"cannot extract from an object of type {type(x).__name__}")


def extract(x: Any, *indices: RawIndex, exact: bool = True) -> Any:
    """R's ``[[``: select exactly one element and return it unwrapped.

    Parameters
    ----------
    x : Vector | RList | Array | pandas.DataFrame
        The container.
    *indices : RawIndex
        A single key (1-based position or name), a sequence of keys for
        recursive descent through nested lists, or one key per axis.
    exact : bool, default True
        When False, names may match by unique prefix.

    Returns
    -------
    Any
        The element. List-like containers answer ``None`` for a position past
        the end or an unmatched name.

    Raises
    ------
    InvalidIndexError
        For a ``None`` index or several keys where one is required.
    OutOfBoundsError
        For a position past the end of an atomic container.
    NoSuchNameError
        For an unmatched name on an atomic container.
    """
    if not indices or any(index is None for index in indices):
        raise InvalidIndexError("subscript is NULL or missing")
    if len(indices) > 1:
        return _extract_cell(x, indices, exact=exact)

    keys = as_index_values(indices[0])
    if not keys:
        raise InvalidIndexError("attempt to select less than one element")
    if len(keys) == 1:
        return _extract_one(x, keys[0], exact=exact, depth=1)
    if not isinstance(x, (RList, pd.DataFrame)):
        raise InvalidIndexError("attempt to select more than one element")

    value = x
    for depth, key in enumerate(keys, start=1):
        value = _extract_one(value, key, exact=exact, depth=depth)
        if depth == len(keys):
            break
        if value is None:
            raise OutOfBoundsError(
                f"nothing found at {key!r}", key=key, depth=depth
            )
        if not isinstance(value, (RList, pd.DataFrame, Vector, Array)):
            raise InvalidIndexError(f"recursive indexing failed at level {depth + 1}")
    return value


def _extract_cell(x: Any, indices: Sequence[RawIndex], *, exact: bool) -> Any:
    if isinstance(x, pd.DataFrame):
        dims = x.shape
        axis_names = [row_names(x), list(x.columns)]
    elif isinstance(x, Array):
        dims = x.dim
        axis_names = x.dimnames
    else:
        raise DimensionMismatchError(
            f"incorrect number of subscripts: {len(indices)} for a one-axis container"
        )
    if len(indices) != len(dims):
        raise DimensionMismatchError(
            f"incorrect number of subscripts: {len(indices)} for {len(dims)} axes"
        )

    coords = []
    for raw, extent, names in zip(indices, dims, axis_names):
        keys = as_index_values(raw)
        if len(keys) != 1:
            raise InvalidIndexError("each subscript must select exactly one position")
        p = _resolve_one(keys[0], extent, names, list_like=False, exact=exact)
        if p == MISSING:
            return NA
        coords.append(p)
    if isinstance(x, pd.DataFrame):
        return x.iat[coords[0], coords[1]]
    return x.values[tuple(coords)]


def dollar(x: Any, name: str) -> Any:
    """R's ``$``: element of a list or column of a data frame by name.

    An exact match wins; otherwise ``name`` may be an unambiguous prefix of
    one name. Returns ``None`` when nothing matches.

    Raises
    ------
    InvalidIndexError
        On atomic vectors and arrays, or when ``name`` is not a string.
    """
    if x is None:
        return None
    if isinstance(x, (Vector, Array)):
        raise InvalidIndexError("$ operator is invalid for atomic vectors")
    if not isinstance(name, str):
        raise InvalidIndexError("$ requires a name")
    if isinstance(x, RList):
        p = _partial_match(x.names or [], name)
        return None if p is None else x.values[p]
    if isinstance(x, pd.DataFrame):
        p = _partial_match(list(x.columns), name)
        return None if p is None else frame_column(x, p)
    raise TypeError(f"$ is not defined for {type(x).__name__}")
