"""Package-wide options controlling simplification and diagnostics."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, fields, replace


@dataclass
class SubsetOptions:
    """Options consulted by the subsetting operators.

    Attributes
    ----------
    drop : bool, default True
        Default for the ``drop`` argument of :func:`rsubset.subset`. When
        True, results are simplified to the lowest-dimensional adequate
        representation.
    warn_on_recycle : bool, default True
        Emit a :class:`~rsubset.errors.RecyclingWarning` when a logical
        index does not divide the axis length exactly.
    warn_partial_match : bool, default False
        Emit a :class:`~rsubset.errors.PartialMatchWarning` when ``$``
        resolves a name by unique prefix.
    """

    drop: bool = True
    warn_on_recycle: bool = True
    warn_partial_match: bool = False

    def __post_init__(self):
        """Validate option types."""
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, bool):
                raise TypeError(
                    f"Option '{f.name}' must be a bool, got {type(value).__name__}"
                )


_options = SubsetOptions()


def get_options() -> SubsetOptions:
    """Return the active options."""
    return _options


def set_options(**overrides) -> SubsetOptions:
    """Replace fields of the active options and return the previous ones."""
    global _options
    previous = _options
    known = {f.name for f in fields(SubsetOptions)}
    unknown = set(overrides) - known
    if unknown:
        raise KeyError(f"Unknown option(s): {sorted(unknown)}")
    _options = replace(_options, **overrides)
    return previous


@contextmanager
def option_context(**overrides) -> Iterator[SubsetOptions]:
    """Temporarily override options inside a ``with`` block."""
    previous = set_options(**overrides)
    try:
        yield _options
    finally:
        set_options(**{f.name: getattr(previous, f.name) for f in fields(previous)})
