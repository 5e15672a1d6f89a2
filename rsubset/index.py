"""Index normalization.

Every operator in rsubset starts by turning the raw index a caller wrote
into a :class:`NormalizedIndex`: one of six kinds plus the 0-based
positions it resolves to along a single axis.

* positive positions select, in order, with repeats and zeros dropped
* negative positions exclude, keeping the original order
* logical masks are recycled to the axis length
* names are matched against the axis names
* ``EMPTY`` selects the whole axis
* a zero-length index selects nothing

Positions past the end of the axis are kept (sequence selection turns them
into ``NA``, assignment grows the container) and ``MISSING`` marks a
position whose value is unknown (an ``NA`` or infinite position in the
index, or an unmatched name).
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

from .core import Array, RList, Vector, is_empty_index, is_na
from .errors import (
    DimensionMismatchError,
    InvalidIndexError,
    MixedSignError,
    NoNameMappingError,
    RecyclingWarning,
)
from .options import get_options
from .types import Name, RawIndex

logger = logging.getLogger(__name__)

MISSING = -1


class IndexKind(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    MASK = "mask"
    NAMES = "names"
    EMPTY = "empty"
    ZERO_LENGTH = "zero_length"


@dataclass(frozen=True)
class NormalizedIndex:
    """An index resolved against one axis.

    Attributes
    ----------
    kind : IndexKind
        How the raw index was interpreted.
    positions : np.ndarray
        0-based positions in selection order. ``MISSING`` marks an unknown
        position; values ``>= length`` are past the end of the axis.
    length : int
        Extent of the axis the index was resolved against.
    new_names : tuple
        Names that did not match, in order of first appearance. Only filled
        for assignment, where position ``length + k`` is ``new_names[k]``.
    """

    kind: IndexKind
    positions: np.ndarray
    length: int
    new_names: tuple = ()

    def __len__(self) -> int:
        return len(self.positions)

    @property
    def missing(self) -> np.ndarray:
        """Boolean array, True where the position is unknown."""
        return self.positions == MISSING

    @property
    def out_of_bounds(self) -> np.ndarray:
        """Boolean array, True where the position is past the end."""
        return self.positions >= self.length

    @property
    def extent(self) -> int:
        """Axis length needed to hold every known position."""
        known = self.positions[self.positions != MISSING]
        if len(known) == 0:
            return self.length
        return max(self.length, int(known.max()) + 1)


def as_index_values(raw: RawIndex) -> list[Any]:
    """Flatten a raw index into a plain list of scalars.

    Raises
    ------
    InvalidIndexError
        For list containers, multi-axis arrays and nested sequences.
    """
    if raw is None:
        return []
    if isinstance(raw, RList):
        raise InvalidIndexError("invalid subscript type 'list'")
    if isinstance(raw, Vector):
        return raw.tolist()
    if isinstance(raw, Array):
        if raw.ndim > 1 and sum(d > 1 for d in raw.dim) > 1:
            raise InvalidIndexError(
                "a matrix index is only valid as a whole-container index"
            )
        return raw.tolist()
    if isinstance(raw, np.ndarray):
        if raw.ndim > 1:
            raise InvalidIndexError(
                "a matrix index is only valid as a whole-container index"
            )
        return raw.tolist()
    if isinstance(raw, pd.Series):
        return raw.tolist()
    if isinstance(raw, (str, bytes)) or not isinstance(raw, Sequence):
        if isinstance(raw, slice):
            raise InvalidIndexError(
                "only the empty slice is supported; use positions instead"
            )
        return [raw]
    values = list(raw)
    for value in values:
        if isinstance(value, (list, tuple, np.ndarray, Vector, RList, Array)):
            raise InvalidIndexError("nested sequences are not valid indices")
    return values


def index_type(values: Sequence[Any]) -> str:
    """Classify index elements as ``"logical"``, ``"numeric"`` or ``"character"``.

    ``NA`` elements adopt the type of their neighbours; an all-``NA`` index
    is logical.
    """
    kinds = set()
    for value in values:
        if is_na(value):
            continue
        if isinstance(value, (bool, np.bool_)):
            kinds.add("logical")
        elif isinstance(value, (int, float, np.integer, np.floating)):
            kinds.add("numeric")
        elif isinstance(value, str):
            kinds.add("character")
        else:
            raise InvalidIndexError(
                f"invalid subscript type '{type(value).__name__}'"
            )
    if len(kinds) > 1:
        raise InvalidIndexError(f"cannot mix {' and '.join(sorted(kinds))} subscripts")
    return kinds.pop() if kinds else "logical"


def as_position(value: Any) -> int | None:
    """Truncate a numeric subscript toward zero, ``None`` for ``NA`` or infinity."""
    if is_na(value):
        return None
    if isinstance(value, (float, np.floating)) and not np.isfinite(value):
        return None
    return int(value)


def normalize_index(
    raw: RawIndex,
    length: int,
    names: Sequence[Name] | None = None,
    *,
    for_assignment: bool = False,
) -> NormalizedIndex:
    """Resolve a raw index against an axis of ``length`` elements.

    Parameters
    ----------
    raw : RawIndex
        The index as written by the caller: 1-based positions (negative to
        exclude), booleans, names, ``EMPTY`` or a zero-length sequence.
    length : int
        Extent of the axis.
    names : Sequence[Name], optional
        Names along the axis, required for a name index.
    for_assignment : bool, default False
        Resolve unmatched names to new positions past the end instead of
        ``MISSING``, and allow names on an unnamed axis.

    Returns
    -------
    NormalizedIndex
        The classified index.

    Raises
    ------
    MixedSignError
        If positive (or ``NA``) and negative positions are combined.
    NoNameMappingError
        If a name index is used on an unnamed axis outside assignment.
    InvalidIndexError
        If the index has an unsupported type or excludes a position past the
        end of the axis.
    """
    if is_empty_index(raw):
        return _make(IndexKind.EMPTY, np.arange(length), length)
    values = as_index_values(raw)
    if not values:
        return _make(IndexKind.ZERO_LENGTH, np.array([], dtype=int), length)

    kind = index_type(values)
    if kind == "numeric":
        return _normalize_numeric(values, length)
    if kind == "logical":
        return _normalize_mask(values, length)
    return _normalize_names(values, length, names, for_assignment)


def _make(
    kind: IndexKind, positions: Any, length: int, new_names: tuple = ()
) -> NormalizedIndex:
    positions = np.asarray(positions, dtype=np.int64)
    logger.debug(
        "Normalized %s index: %d position(s) on axis of length %d",
        kind.value,
        len(positions),
        length,
    )
    return NormalizedIndex(kind, positions, length, new_names)


def _normalize_numeric(values: list[Any], length: int) -> NormalizedIndex:
    ints = [as_position(v) for v in values]
    has_na = any(i is None for i in ints)
    has_neg = any(i is not None and i < 0 for i in ints)
    has_pos = any(i is not None and i > 0 for i in ints)
    if has_neg and (has_pos or has_na):
        what = "positive" if has_pos else "NA"
        raise MixedSignError(f"can't mix {what} and negative subscripts")

    if has_neg:
        excluded = {-i - 1 for i in ints if i < 0}
        too_far = [i for i in ints if -i > length]
        if too_far:
            raise InvalidIndexError(
                f"negative subscript {too_far[0]} is out of bounds for length {length}"
            )
        keep = [p for p in range(length) if p not in excluded]
        return _make(IndexKind.NEGATIVE, keep, length)

    kept = [i for i in ints if i is None or i != 0]
    if not kept:
        return _make(IndexKind.ZERO_LENGTH, [], length)
    positions = [MISSING if i is None else i - 1 for i in kept]
    return _make(IndexKind.POSITIVE, positions, length)


def _normalize_mask(values: list[Any], length: int) -> NormalizedIndex:
    n = len(values)
    if n < length:
        if length % n != 0 and get_options().warn_on_recycle:
            warnings.warn(
                f"logical index of length {n} recycled to axis length {length}, "
                "which is not a multiple",
                RecyclingWarning,
                stacklevel=4,
            )
        values = [values[k % n] for k in range(length)]
    positions = [
        MISSING if is_na(v) else k
        for k, v in enumerate(values)
        if is_na(v) or bool(v)
    ]
    return _make(IndexKind.MASK, positions, length)


def _normalize_names(
    values: list[Any],
    length: int,
    names: Sequence[Name] | None,
    for_assignment: bool,
) -> NormalizedIndex:
    if names is None:
        if not for_assignment:
            raise NoNameMappingError("names index used on an axis without names")
        names = []
    lookup: dict[Name, int] = {}
    for k, name in enumerate(names):
        if not is_na(name) and name not in lookup:
            lookup[name] = k

    positions = []
    new_names: list[Name] = []
    for value in values:
        if is_na(value):
            positions.append(MISSING)
        elif value in lookup:
            positions.append(lookup[value])
        elif for_assignment:
            if value not in new_names:
                new_names.append(value)
            positions.append(length + new_names.index(value))
        else:
            positions.append(MISSING)
    return _make(IndexKind.NAMES, positions, length, tuple(new_names))


def as_matrix_index(raw: RawIndex) -> np.ndarray | None:
    """Return ``raw`` as a 2-D object array if it is a matrix index."""
    if isinstance(raw, Array) and raw.ndim == 2:
        return raw.values
    if isinstance(raw, np.ndarray) and raw.ndim == 2:
        return raw.astype(object)
    if isinstance(raw, pd.DataFrame):
        return raw.to_numpy(dtype=object)
    return None


def normalize_coordinates(
    matrix: np.ndarray,
    dim: Sequence[int],
    dimnames: Sequence[Sequence[Name] | None] | None = None,
) -> NormalizedIndex:
    """Resolve a coordinate matrix to flat column-major positions.

    Each row of ``matrix`` holds one full coordinate, either 1-based
    positions or names matched against ``dimnames``. Rows containing a zero
    are dropped; rows containing ``NA`` or an unmatched name resolve to
    ``MISSING``; rows past the end of any axis resolve to the total element
    count, i.e. out of bounds.

    Raises
    ------
    DimensionMismatchError
        If the matrix does not have one column per axis.
    """
    dim = tuple(dim)
    if dimnames is None:
        dimnames = [None] * len(dim)
    if matrix.ndim != 2 or matrix.shape[1] != len(dim):
        raise DimensionMismatchError(
            f"coordinate matrix has {matrix.shape[-1]} column(s) "
            f"but the container has {len(dim)} axes"
        )
    kind = index_type(matrix.ravel().tolist())
    if kind == "logical":
        raise InvalidIndexError("a logical matrix is not a coordinate matrix")
    total = int(np.prod(dim))

    lookups = []
    for axis_names in dimnames:
        lookup: dict[Name, int] = {}
        for k, name in enumerate(axis_names or []):
            if not is_na(name):
                lookup.setdefault(name, k)
        lookups.append(lookup)

    positions = []
    for row in matrix:
        coords = []
        dropped = missing = past_end = False
        for axis, value in enumerate(row):
            if is_na(value):
                missing = True
                continue
            if kind == "character":
                if dimnames[axis] is None:
                    raise NoNameMappingError(
                        f"axis {axis + 1} has no names to match {value!r}"
                    )
                if value not in lookups[axis]:
                    missing = True
                    continue
                coords.append(lookups[axis][value])
                continue
            i = as_position(value)
            if i is None:
                missing = True
                continue
            if i < 0:
                raise InvalidIndexError(
                    "negative values are not allowed in a matrix subscript"
                )
            if i == 0:
                dropped = True
            elif i > dim[axis]:
                past_end = True
            coords.append(i - 1)
        if dropped:
            continue
        if missing:
            positions.append(MISSING)
        elif past_end:
            positions.append(total)
        else:
            positions.append(int(np.ravel_multi_index(coords, dim, order="F")))
    return _make(IndexKind.POSITIVE, positions, total)
