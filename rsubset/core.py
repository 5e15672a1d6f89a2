"""Container types and missing-value markers for rsubset.

This module defines the containers the subsetting operators work on:

- Vector: an atomic vector (one axis, scalar elements, optional names)
- RList: a generic list (one axis, arbitrary elements, optional names)
- Array: an N-axis array stored in column-major order (matrices included)

Data frames are plain :class:`pandas.DataFrame` objects. The missing-value
marker ``NA`` is :data:`pandas.NA`; R's ``NULL`` is Python ``None``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

import numpy as np
import pandas as pd

from .types import Name

NA = pd.NA
EMPTY = slice(None)


def is_na(value: Any) -> bool:
    """True for ``NA`` and floating point NaN."""
    if value is NA:
        return True
    if isinstance(value, (float, np.floating)):
        return bool(np.isnan(value))
    return False


def is_empty_index(index: Any) -> bool:
    """True when ``index`` is the select-everything marker."""
    return (
        isinstance(index, slice)
        and index.start is None
        and index.stop is None
        and index.step is None
    )


def object_array(values: Iterable[Any]) -> np.ndarray:
    """Build a 1-D object array without letting numpy unpack nested elements."""
    values = list(values)
    out = np.empty(len(values), dtype=object)
    for i, value in enumerate(values):
        out[i] = value
    return out


def same_values(xs: Sequence[Any] | None, ys: Sequence[Any] | None) -> bool:
    """Elementwise equality where ``NA`` equals ``NA`` and nothing else."""
    if xs is None or ys is None:
        return xs is None and ys is None
    if len(xs) != len(ys):
        return False
    for a, b in zip(xs, ys):
        if is_na(a) or is_na(b):
            if not (is_na(a) and is_na(b)):
                return False
        elif not bool(a == b):
            return False
    return True


def _check_names(names: Sequence[Name] | None, n: int) -> list[Name] | None:
    if names is None:
        return None
    names = list(names)
    if len(names) != n:
        raise ValueError(
            f"Length mismatch: {n} elements but {len(names)} names"
        )
    return names


class _Flat:
    """Shared behaviour of the one-axis containers."""

    def __init__(self, values: Any = (), names: Sequence[Name] | None = None):
        if isinstance(values, _Flat):
            if names is None:
                names = values.names
            values = values.tolist()
        elif isinstance(values, Mapping):
            if names is None:
                names = list(values.keys())
            values = list(values.values())
        elif isinstance(values, np.ndarray):
            values = values.ravel(order="F").tolist()
        elif isinstance(values, (str, bytes)) or not isinstance(values, Iterable):
            values = [values]
        self._set(list(values))
        self.names = _check_names(names, len(self))

    def _set(self, values: list) -> None:
        raise NotImplementedError

    def tolist(self) -> list:
        raise NotImplementedError

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self):
        return iter(self.tolist())

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return same_values(self.tolist(), other.tolist()) and same_values(
            self.names, other.names
        )

    __hash__ = None

    def __repr__(self) -> str:
        if self.names is None:
            return f"{type(self).__name__}({self.tolist()!r})"
        return f"{type(self).__name__}({self.tolist()!r}, names={self.names!r})"


class Vector(_Flat):
    """An atomic vector.

    Elements are scalars stored in a numpy object array so that ``NA`` can
    sit next to any element type.

    Parameters
    ----------
    values : iterable, mapping or scalar
        The elements. A mapping supplies both names and values; a scalar
        becomes a length-1 vector.
    names : Sequence[Name], optional
        One name per element.
    """

    def _set(self, values: list) -> None:
        self.values = object_array(values)

    def tolist(self) -> list:
        return self.values.tolist()

    def to_numpy(self, dtype: Any = None) -> np.ndarray:
        """Return the elements as a numpy array, ``NA`` becoming NaN."""
        data = [np.nan if value is NA else value for value in self.values]
        return np.asarray(data, dtype=dtype)


class RList(_Flat):
    """A generic list whose elements may be any value, including containers.

    Parameters
    ----------
    values : iterable or mapping
        The elements. A mapping supplies both names and values.
    names : Sequence[Name], optional
        One name per element.
    """

    def _set(self, values: list) -> None:
        self.values = values

    def tolist(self) -> list:
        return list(self.values)

    def to_dict(self) -> dict:
        """Return a ``name -> element`` dict (requires names)."""
        if self.names is None:
            raise ValueError("RList has no names")
        return dict(zip(self.names, self.values))


class Array:
    """An N-axis array stored in column-major (first axis fastest) order.

    Parameters
    ----------
    data : iterable or numpy.ndarray
        Elements in column-major order. A numpy array with ``dim=None``
        keeps its own shape and element positions.
    dim : Sequence[int], optional
        Extent of each axis. Defaults to a single axis.
    dimnames : Sequence[Sequence[Name] | None], optional
        Per-axis names, ``None`` for an unnamed axis.
    """

    def __init__(
        self,
        data: Any,
        dim: Sequence[int] | None = None,
        dimnames: Sequence[Sequence[Name] | None] | None = None,
    ):
        if isinstance(data, np.ndarray):
            if dim is None:
                dim = data.shape
            flat = data.ravel(order="F")
        else:
            flat = object_array(data)
            if dim is None:
                dim = (len(flat),)
        dim = tuple(int(d) for d in dim)
        if int(np.prod(dim)) != len(flat):
            raise ValueError(
                f"Length mismatch: dims {dim} need {int(np.prod(dim))} elements, "
                f"got {len(flat)}"
            )
        self.values = object_array(flat).reshape(dim, order="F")
        if dimnames is None:
            dimnames = [None] * len(dim)
        if len(dimnames) != len(dim):
            raise ValueError(
                f"Length mismatch: {len(dim)} axes but {len(dimnames)} dimnames"
            )
        self.dimnames = [
            _check_names(axis_names, extent)
            for axis_names, extent in zip(dimnames, dim)
        ]

    @property
    def dim(self) -> tuple[int, ...]:
        return self.values.shape

    @property
    def ndim(self) -> int:
        return self.values.ndim

    def __len__(self) -> int:
        return self.values.size

    def flat(self) -> np.ndarray:
        """Elements in column-major order."""
        return self.values.ravel(order="F")

    def tolist(self) -> list:
        """Elements in column-major order as a list."""
        return self.flat().tolist()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Array):
            return NotImplemented
        return (
            self.dim == other.dim
            and same_values(self.tolist(), other.tolist())
            and all(same_values(a, b) for a, b in zip(self.dimnames, other.dimnames))
        )

    __hash__ = None

    def __repr__(self) -> str:
        return f"Array({self.tolist()!r}, dim={self.dim!r}, dimnames={self.dimnames!r})"


def matrix(
    data: Any,
    nrow: int | None = None,
    ncol: int | None = None,
    byrow: bool = False,
    dimnames: Sequence[Sequence[Name] | None] | None = None,
) -> Array:
    """Build a 2-axis :class:`Array`, recycling ``data`` to fill it.

    Parameters
    ----------
    data : iterable or scalar
        Elements, column by column unless ``byrow`` is set.
    nrow, ncol : int, optional
        Extents. Whichever is missing is derived from ``len(data)``.
    byrow : bool, default False
        Fill row by row instead.
    dimnames : sequence, optional
        ``[row_names, col_names]``.

    Returns
    -------
    Array
        The matrix.
    """
    if isinstance(data, (str, bytes)) or not isinstance(data, Iterable):
        data = [data]
    data = list(data)
    if nrow is None and ncol is None:
        nrow, ncol = len(data), 1
    elif nrow is None:
        nrow = -(-len(data) // ncol)
    elif ncol is None:
        ncol = -(-len(data) // nrow)
    n = nrow * ncol
    cells = [data[k % len(data)] for k in range(n)] if data else [NA] * n
    if byrow:
        grid = object_array(cells).reshape((nrow, ncol))
        return Array(grid, dimnames=dimnames)
    return Array(cells, (nrow, ncol), dimnames)


def array(
    data: Any,
    dim: Sequence[int],
    dimnames: Sequence[Sequence[Name] | None] | None = None,
) -> Array:
    """Build an :class:`Array` of shape ``dim``, recycling ``data``."""
    if isinstance(data, (str, bytes)) or not isinstance(data, Iterable):
        data = [data]
    data = list(data)
    n = int(np.prod(dim))
    cells = [data[k % len(data)] for k in range(n)] if data else [NA] * n
    return Array(cells, dim, dimnames)


def names(x: Any) -> list[Name] | None:
    """Element names of a flat container, column names of a data frame."""
    if isinstance(x, _Flat):
        return x.names
    if isinstance(x, pd.DataFrame):
        return list(x.columns)
    if isinstance(x, Array):
        return x.dimnames[0] if x.ndim == 1 else None
    raise TypeError(f"names() is not defined for {type(x).__name__}")


def dim(x: Any) -> tuple[int, ...] | None:
    """Axis extents, or ``None`` for one-axis containers."""
    if isinstance(x, Array):
        return x.dim
    if isinstance(x, pd.DataFrame):
        return x.shape
    return None


def length(x: Any) -> int:
    """R's ``length()``: element count, column count for data frames."""
    if x is None:
        return 0
    if isinstance(x, pd.DataFrame):
        return x.shape[1]
    if isinstance(x, (_Flat, Array)):
        return len(x)
    return 1


def row_names(df: pd.DataFrame) -> list[str]:
    """R-style row names: the string form of each index label."""
    return [str(label) for label in df.index]


def frame_column(df: pd.DataFrame, position: int) -> Vector:
    """The column at 0-based ``position`` as an unnamed :class:`Vector`."""
    return Vector(df.iloc[:, position].tolist())


def frame_cells(df: pd.DataFrame) -> Array:
    """The cells of a data frame as a 2-axis :class:`Array` with dimnames."""
    return Array(
        df.to_numpy(dtype=object),
        dimnames=[row_names(df), list(df.columns)],
    )
