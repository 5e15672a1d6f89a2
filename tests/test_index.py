"""Tests for index normalization."""

import math
import warnings

import numpy as np
import pytest

from rsubset import (
    EMPTY,
    NA,
    IndexKind,
    InvalidIndexError,
    MixedSignError,
    NoNameMappingError,
    RecyclingWarning,
    RList,
    Vector,
    normalize_index,
    option_context,
)
from rsubset.errors import DimensionMismatchError
from rsubset.index import MISSING, normalize_coordinates


class TestNumericIndex:
    """Positive, negative and zero positions."""

    def test_positive_positions_are_zero_based(self):
        """Test that 1-based positions become 0-based."""
        idx = normalize_index([3, 1], 4)

        assert idx.kind is IndexKind.POSITIVE
        assert idx.positions.tolist() == [2, 0]

    def test_repeats_are_kept_in_order(self):
        """Test that repeated positions are kept in index order."""
        assert normalize_index([2, 2, 1], 4).positions.tolist() == [1, 1, 0]

    def test_non_integers_truncate_toward_zero(self):
        """Test truncation of fractional positions toward zero."""
        assert normalize_index([2.9, 1.1], 4).positions.tolist() == [1, 0]
        assert normalize_index([-1.7], 4).positions.tolist() == [1, 2, 3]

    def test_zeros_are_dropped(self):
        """Test that zeros select nothing."""
        idx = normalize_index([0, 2, 0], 4)

        assert idx.kind is IndexKind.POSITIVE
        assert idx.positions.tolist() == [1]

    def test_only_zeros_is_zero_length(self):
        """Test an index made only of zeros."""
        assert normalize_index(0, 4).kind is IndexKind.ZERO_LENGTH

    def test_negative_positions_exclude(self):
        """Test exclusion by negative positions."""
        idx = normalize_index([-3, -1], 4)

        assert idx.kind is IndexKind.NEGATIVE
        assert idx.positions.tolist() == [1, 3]

    def test_negative_with_zero(self):
        """Test negative positions mixed with zero."""
        assert normalize_index([-1, 0], 3).positions.tolist() == [1, 2]

    def test_mixed_signs_fail(self):
        """Test error when positive and negative positions are mixed."""
        with pytest.raises(MixedSignError, match="positive and negative"):
            normalize_index([1, -1], 4)

    def test_na_with_negative_fails(self):
        """Test error when NA is mixed with negative positions."""
        with pytest.raises(MixedSignError, match="NA and negative"):
            normalize_index([-1, NA], 4)

    def test_negative_past_end_fails(self):
        """Test error for a negative position past the end."""
        with pytest.raises(InvalidIndexError, match="out of bounds"):
            normalize_index([-5], 4)

    def test_positions_past_end_are_kept(self):
        """Test that positions past the end extend the index."""
        idx = normalize_index([2, 6], 4)

        assert idx.positions.tolist() == [1, 5]
        assert idx.out_of_bounds.tolist() == [False, True]
        assert idx.extent == 6

    def test_na_position_is_missing(self):
        """Test that an NA position resolves to MISSING."""
        idx = normalize_index([1, NA], 4)

        assert idx.positions.tolist() == [0, MISSING]
        assert idx.missing.tolist() == [False, True]

    def test_infinite_position_is_missing(self):
        """Test that an infinite position resolves to MISSING."""
        idx = normalize_index([2, math.inf], 4)

        assert idx.positions.tolist() == [1, MISSING]

    def test_negative_infinity_with_negative_fails(self):
        """Test error when negative infinity is mixed with negatives."""
        with pytest.raises(MixedSignError, match="NA and negative"):
            normalize_index([-1, -math.inf], 4)


class TestLogicalIndex:
    """Masks, recycling and NA propagation."""

    def test_exact_mask(self):
        """Test a mask as long as the container."""
        idx = normalize_index([True, False, True, False], 4)

        assert idx.kind is IndexKind.MASK
        assert idx.positions.tolist() == [0, 2]

    def test_short_mask_recycles_silently_when_exact_multiple(self):
        """Test recycling a mask whose length divides the container."""
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            idx = normalize_index([True, False], 4)

        assert idx.positions.tolist() == [0, 2]

    def test_partial_recycle_warns(self):
        """Test warning when a mask recycles partially."""
        with pytest.warns(RecyclingWarning):
            idx = normalize_index([True, False, False], 4)

        assert idx.positions.tolist() == [0, 3]

    def test_partial_recycle_warning_can_be_disabled(self):
        """Test disabling the partial recycling warning."""
        with option_context(warn_on_recycle=False):
            with warnings.catch_warnings():
                warnings.simplefilter("error")
                normalize_index([True, False, False], 4)

    def test_na_in_mask_propagates(self):
        """Test that NA in a mask selects a missing element."""
        idx = normalize_index([True, NA, False], 3)

        assert idx.positions.tolist() == [0, MISSING]

    def test_long_mask_selects_past_end(self):
        """Test a mask longer than the container."""
        idx = normalize_index([True, False, True], 2)

        assert idx.positions.tolist() == [0, 2]
        assert idx.out_of_bounds.tolist() == [False, True]

    def test_numpy_bool_array(self):
        """Test a numpy boolean array as a mask."""
        mask = np.array([False, True, True])

        assert normalize_index(mask, 3).positions.tolist() == [1, 2]


class TestNameIndex:
    """Character indices."""

    def test_names_match(self):
        """Test matching names to positions."""
        idx = normalize_index(["c", "a"], 3, ["a", "b", "c"])

        assert idx.kind is IndexKind.NAMES
        assert idx.positions.tolist() == [2, 0]

    def test_first_match_wins(self):
        """Test that duplicated names match their first occurrence."""
        assert normalize_index("a", 3, ["a", "b", "a"]).positions.tolist() == [0]

    def test_unmatched_name_is_missing(self):
        """Test that an unmatched name resolves to MISSING."""
        idx = normalize_index(["b", "z"], 3, ["a", "b", "c"])

        assert idx.positions.tolist() == [1, MISSING]

    def test_no_names_fails(self):
        """Test error for names on an unnamed axis."""
        with pytest.raises(NoNameMappingError):
            normalize_index("a", 3)

    def test_assignment_creates_positions_for_new_names(self):
        """Test new positions for unmatched names under assignment."""
        idx = normalize_index(
            ["b", "z", "z", "w"], 3, ["a", "b", "c"], for_assignment=True
        )

        assert idx.positions.tolist() == [1, 3, 3, 4]
        assert idx.new_names == ("z", "w")
        assert idx.extent == 5

    def test_assignment_allows_unnamed_axis(self):
        """Test names under assignment on an unnamed axis."""
        idx = normalize_index("a", 2, for_assignment=True)

        assert idx.positions.tolist() == [2]
        assert idx.new_names == ("a",)


class TestEmptyAndZeroLength:
    """Empty and zero-length indices."""

    def test_empty_selects_everything(self):
        """Test that the empty index selects every position."""
        idx = normalize_index(EMPTY, 3)

        assert idx.kind is IndexKind.EMPTY
        assert idx.positions.tolist() == [0, 1, 2]

    @pytest.mark.parametrize("raw", [[], (), None, np.array([], dtype=int)])
    def test_zero_length(self, raw):
        """Test zero-length indices of several types."""
        idx = normalize_index(raw, 3)

        assert idx.kind is IndexKind.ZERO_LENGTH
        assert len(idx) == 0


class TestInvalidIndex:
    """Indices that cannot be normalized."""

    def test_mixed_types(self):
        """Test error when positions and names are mixed."""
        with pytest.raises(InvalidIndexError, match="cannot mix"):
            normalize_index([1, "a"], 3, ["a", "b", "c"])

    def test_nested_sequence(self):
        """Test error for a nested sequence."""
        with pytest.raises(InvalidIndexError, match="nested"):
            normalize_index([[1, 2]], 3)

    def test_list_container(self):
        """Test error for a generic list used as an index."""
        with pytest.raises(InvalidIndexError, match="list"):
            normalize_index(RList([1]), 3)

    def test_non_empty_slice(self):
        """Test error for a slice other than the empty index."""
        with pytest.raises(InvalidIndexError, match="slice"):
            normalize_index(slice(1, 2), 3)

    def test_vector_index(self):
        """Test a Vector used as an index."""
        assert normalize_index(Vector([2, 3]), 3).positions.tolist() == [1, 2]


class TestCoordinates:
    """Coordinate-matrix normalization."""

    def test_rows_become_column_major_positions(self):
        """Test coordinate rows resolving to column-major positions."""
        coords = np.array([[1, 1], [3, 1], [2, 3]])

        idx = normalize_coordinates(coords, (3, 3))

        assert idx.positions.tolist() == [0, 2, 7]

    def test_row_past_end_is_out_of_bounds(self):
        """Test a coordinate row past the end of an axis."""
        idx = normalize_coordinates(np.array([[2, 4]]), (3, 3))

        assert idx.out_of_bounds.tolist() == [True]

    def test_infinite_coordinate_is_missing(self):
        """Test that an infinite coordinate resolves to MISSING."""
        idx = normalize_coordinates(np.array([[np.inf, 1], [1, 1]]), (3, 3))

        assert idx.positions.tolist() == [MISSING, 0]

    def test_row_with_zero_is_dropped(self):
        """Test that a coordinate row containing zero is dropped."""
        idx = normalize_coordinates(np.array([[0, 1], [1, 1]]), (3, 3))

        assert idx.positions.tolist() == [0]

    def test_names(self):
        """Test coordinate rows made of dimension names."""
        coords = np.array([["r2", "B"]])
        dimnames = [["r1", "r2", "r3"], ["A", "B", "C"]]

        idx = normalize_coordinates(coords, (3, 3), dimnames)

        assert idx.positions.tolist() == [4]

    def test_wrong_column_count(self):
        """Test error when the matrix has the wrong number of columns."""
        with pytest.raises(DimensionMismatchError):
            normalize_coordinates(np.array([[1, 1, 1]]), (3, 3))
