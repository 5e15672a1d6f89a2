"""Structured error and warning types raised by the subsetting operators."""

from __future__ import annotations

from collections.abc import Hashable


class SubsetError(Exception):
    """Base class for rsubset errors."""


class MixedSignError(SubsetError):
    """Positive and negative positions were combined in one index."""


class NoNameMappingError(SubsetError):
    """A name index was used on an axis that carries no names."""


class InvalidIndexError(SubsetError):
    """The index cannot be interpreted for this container or operator."""


class DimensionMismatchError(SubsetError):
    """The index shape does not agree with the container's number of axes."""


class LengthMismatchError(SubsetError):
    """Replacement values cannot be recycled over the assignment targets."""


class _KeyedError(SubsetError):
    """Error that remembers the offending key and the nesting depth."""

    def __init__(self, message: str, key: Hashable = None, depth: int = 1) -> None:
        super().__init__(message)
        self.message = message
        self.key = key
        self.depth = depth

    def __str__(self) -> str:
        if self.depth > 1:
            return f"{self.message} (at recursion level {self.depth})"
        return self.message


class OutOfBoundsError(_KeyedError):
    """A single-result selection referred to a position past the end."""


class NoSuchNameError(_KeyedError):
    """A single-result selection referred to a name that does not exist."""


class RecyclingWarning(UserWarning):
    """A shorter sequence did not divide the target length exactly."""


class PartialMatchWarning(UserWarning):
    """``$`` resolved a name through an unambiguous prefix."""
