"""
Tests for input validation utilities.

Validates every function in core/validation.py:
    - check_array: conversion, dtype coercion, object rejection
    - check_finite: NaN/Inf detection
    - check_1d: dimensionality
    - check_min_samples: minimum sample count
    - check_probabilities: range and shape of probability vectors
    - check_strictly_increasing: grid ordering
    - check_positive_int: integer configuration values
"""

import numpy as np
import pytest

from pyshotlength.core.exceptions import DimensionError, ValidationError
from pyshotlength.core.validation import (
    check_1d,
    check_array,
    check_finite,
    check_min_samples,
    check_positive_int,
    check_probabilities,
    check_strictly_increasing,
)


# ═══════════════════════════════════════════════════════════════════════
# check_array
# ═══════════════════════════════════════════════════════════════════════


class TestCheckArray:

    def test_list_to_float_array(self):
        result = check_array([1, 2, 3], "x")
        assert result.dtype == np.float64
        np.testing.assert_array_equal(result, [1.0, 2.0, 3.0])

    def test_float32_promoted(self):
        result = check_array(np.array([1.5, 2.5], dtype=np.float32), "x")
        assert result.dtype == np.float64

    def test_rejects_mixed_types(self):
        with pytest.raises(ValidationError, match="x: converted to object dtype"):
            check_array([1.0, None, 3.0], "x")

    def test_rejects_strings(self):
        with pytest.raises(ValidationError, match="non-numeric dtype"):
            check_array(["a", "b"], "x")

    def test_pandas_series(self):
        pd = pytest.importorskip("pandas")
        result = check_array(pd.Series([1.0, 2.0, np.nan]), "x")
        assert result.dtype == np.float64
        assert np.isnan(result[2])


# ═══════════════════════════════════════════════════════════════════════
# check_finite / check_1d / check_min_samples
# ═══════════════════════════════════════════════════════════════════════


class TestCheckFinite:

    def test_finite_passes(self):
        check_finite(np.array([1.0, 2.0]), "x")

    def test_counts_reported(self):
        with pytest.raises(ValidationError, match=r"2 NaN, 1 Inf"):
            check_finite(np.array([np.nan, 1.0, np.nan, -np.inf]), "x")


class TestCheckShape:

    def test_1d_passes(self):
        check_1d(np.zeros(3), "x")

    def test_2d_rejected(self):
        with pytest.raises(DimensionError, match=r"expected 1D array, got 2D"):
            check_1d(np.zeros((3, 2)), "x")

    def test_min_samples(self):
        check_min_samples(np.zeros(1), 1, "x")
        with pytest.raises(ValidationError, match="at least 1 samples, got 0"):
            check_min_samples(np.zeros(0), 1, "x")


# ═══════════════════════════════════════════════════════════════════════
# check_probabilities
# ═══════════════════════════════════════════════════════════════════════


class TestCheckProbabilities:

    def test_scalar_becomes_1d(self):
        result = check_probabilities(0.5, "probs")
        assert result.shape == (1,)

    def test_closed_interval_accepts_edges(self):
        result = check_probabilities([0.0, 0.5, 1.0], "probs")
        np.testing.assert_array_equal(result, [0.0, 0.5, 1.0])

    def test_open_interval_rejects_edges(self):
        with pytest.raises(ValidationError, match=r"\(0, 1\)"):
            check_probabilities([0.0, 0.5], "probs", closed=False)

    @pytest.mark.parametrize("bad", [-0.01, 1.01, 2.0])
    def test_out_of_range(self, bad):
        with pytest.raises(ValidationError, match=r"probs: probabilities must lie in \[0, 1\]"):
            check_probabilities([0.5, bad], "probs")

    def test_nan_rejected(self):
        with pytest.raises(ValidationError, match="non-finite"):
            check_probabilities([0.5, np.nan], "probs")

    def test_empty_rejected(self):
        with pytest.raises(ValidationError):
            check_probabilities([], "probs")

    def test_2d_rejected(self):
        with pytest.raises(DimensionError):
            check_probabilities([[0.1, 0.2]], "probs")


class TestCheckStrictlyIncreasing:

    def test_increasing_passes(self):
        check_strictly_increasing(np.array([0.1, 0.2, 0.3]), "grid")

    def test_repeat_rejected(self):
        with pytest.raises(ValidationError, match="0.2 followed by 0.2 at position 1"):
            check_strictly_increasing(np.array([0.1, 0.2, 0.2]), "grid")

    def test_decreasing_rejected(self):
        with pytest.raises(ValidationError, match="strictly increasing"):
            check_strictly_increasing(np.array([0.3, 0.2]), "grid")


class TestCheckPositiveInt:

    def test_accepts(self):
        assert check_positive_int(np.int64(4), "n_jobs") == 4

    @pytest.mark.parametrize("bad", [0, -2, 1.5, True, "3"])
    def test_rejects(self, bad):
        with pytest.raises(ValidationError, match="n_jobs"):
            check_positive_int(bad, "n_jobs")
