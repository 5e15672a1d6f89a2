"""Tests for the helpers built on the subsetting operators."""

import pandas as pd
import pytest

from rsubset import (
    NA,
    InvalidIndexError,
    Vector,
    drop_columns,
    expand_counts,
    filter_rows,
    lookup,
    match_rows,
    order,
    order_by,
    sample_rows,
    which,
)


@pytest.fixture
def grades():
    """Lookup table for matching and merging by hand."""
    return pd.DataFrame(
        {
            "grade": [3, 2, 1],
            "desc": ["Excellent", "Good", "Poor"],
            "fail": [False, False, True],
        }
    )


class TestWhich:
    """Test positions of true values."""

    def test_positions(self):
        """Test positions of true values, skipping NA."""
        assert which(Vector([True, False, NA, True])) == Vector([1, 4])

    def test_names_are_kept(self):
        """Test that names follow the positions."""
        mask = Vector([False, True, True], names=["a", "b", "c"])

        assert which(mask) == Vector([2, 3], names=["b", "c"])

    def test_plain_list(self):
        """Test a plain list of booleans."""
        assert which([False, False]) == Vector([])

    def test_needs_logical(self):
        """Test error for a non-logical input."""
        with pytest.raises(InvalidIndexError, match="logical"):
            which([1, 2])


class TestLookup:
    """Test lookup tables indexed by name."""

    def test_lookup_table(self):
        """Test translating codes through a lookup table."""
        table = Vector({"m": "Male", "f": "Female", "u": None})

        result = lookup(table, ["m", "f", "u", "f", "m", "m"])

        assert result.tolist() == ["Male", "Female", None, "Female", "Male", "Male"]
        assert result.names is None

    def test_unknown_key_is_na(self):
        """Test that an unknown code gives NA."""
        table = Vector({"m": "Male"})

        assert lookup(table, ["x"]).tolist()[0] is NA


class TestOrder:
    """Test ordering and sorting by index."""

    def test_order(self):
        """Test the ordering permutation."""
        assert order(Vector([3, 1, 2])) == Vector([2, 3, 1])

    def test_decreasing(self):
        """Test a decreasing ordering."""
        assert order(Vector([3, 1, 2]), decreasing=True) == Vector([1, 3, 2])

    def test_ties_keep_their_order(self):
        """Test that ties keep their original order."""
        assert order(Vector([2, 1, 2, 1])) == Vector([2, 4, 1, 3])

    def test_na_last(self):
        """Test that NA sorts last."""
        assert order(Vector([3, NA, 1])) == Vector([3, 1, 2])

    def test_order_by_vector(self):
        """Test sorting a vector."""
        assert order_by(Vector(["c", "a", "b"])) == Vector(["a", "b", "c"])

    def test_order_by_frame(self, df):
        """Test sorting a frame by one column."""
        result = order_by(df, "y")

        assert result["x"].tolist() == [3, 2, 1]

    def test_order_by_several_columns(self):
        """Test sorting a frame by several columns."""
        frame = pd.DataFrame({"a": [2, 1, 2, 1], "b": [1, 2, 0, 1]})

        result = order_by(frame, ["a", "b"], decreasing=True)

        assert result["b"].tolist() == [1, 0, 2, 1]

    def test_order_by_frame_needs_columns(self, df):
        """Test error when no sort columns are given."""
        with pytest.raises(ValueError, match="columns are required"):
            order_by(df)


class TestMatchRows:
    """Test matching rows by key."""

    def test_matching_and_merging(self, grades):
        """Test matching keys to rows."""
        result = match_rows(grades, [1, 2, 2, 3, 1], by="grade")

        assert result["desc"].tolist() == ["Poor", "Good", "Good", "Excellent", "Poor"]
        assert result["fail"].tolist() == [True, False, False, False, True]

    def test_unmatched_key_gives_na_row(self, grades):
        """Test that an unmatched key gives an NA row."""
        result = match_rows(grades, [1, 9], by="grade")

        assert result.shape == (2, 3)
        assert result["desc"].isna().tolist() == [False, True]

    def test_all_unmatched(self, grades):
        """Test matching with no key found."""
        result = match_rows(grades, [9], by="grade")

        assert result.iloc[0].isna().all()


class TestSampleRows:
    """Test random row samples."""

    def test_permutation(self, df):
        """Test a random permutation of rows."""
        result = sample_rows(df, seed=1)

        assert result.shape == df.shape
        assert sorted(result["x"].tolist()) == [1, 2, 3]

    def test_seed_is_reproducible(self, df):
        """Test that a seed makes sampling reproducible."""
        pd.testing.assert_frame_equal(
            sample_rows(df, 2, seed=42), sample_rows(df, 2, seed=42)
        )

    def test_bootstrap(self, df):
        """Test sampling rows with replacement."""
        result = sample_rows(df, 10, replace=True, seed=0)

        assert result.shape[0] == 10
        assert set(result["x"]) <= {1, 2, 3}

    def test_too_many_without_replacement(self, df):
        """Test error when sampling too many rows without replacement."""
        with pytest.raises(ValueError, match="without replacement"):
            sample_rows(df, 5)


class TestExpandCounts:
    """Test expanding aggregated rows."""

    def test_repeats_rows(self):
        """Test repeating rows by their counts."""
        counts = pd.DataFrame({"x": ["a", "b", "c"], "n": [2, 0, 1]})

        assert expand_counts(counts, "n")["x"].tolist() == ["a", "a", "c"]

    def test_negative_count(self):
        """Test error for a negative count."""
        counts = pd.DataFrame({"x": ["a"], "n": [-1]})

        with pytest.raises(ValueError, match="non-negative"):
            expand_counts(counts, "n")


class TestRemovalAndFiltering:
    """Test dropping columns and filtering rows."""

    def test_drop_columns(self, df):
        """Test dropping columns by name."""
        result = drop_columns(df, ["y", "absent"])

        assert list(result.columns) == ["x", "z"]
        assert list(df.columns) == ["x", "y", "z"]

    def test_filter_rows_with_series(self, df):
        """Test filtering rows by a boolean series."""
        assert filter_rows(df, df["x"] > 1)["z"].tolist() == ["b", "c"]

    def test_filter_rows_treats_na_as_false(self, df):
        """Test that NA in a filter drops the row."""
        assert filter_rows(df, [True, NA, True])["x"].tolist() == [1, 3]
