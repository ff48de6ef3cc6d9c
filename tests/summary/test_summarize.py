"""
Tests for summarize(), summarize_many() and summary_table().

Reference values for the exponential case are the population quantile
skewness and kurtosis of Exp(1):

    skewness = log(4/3) / log(3)
    kurtosis = (log(3) + log(1.4)) / log(3)
"""

import warnings

import numpy as np
import pytest

from pyshotlength import summarize, summarize_many
from pyshotlength.core.exceptions import (
    DegenerateDistributionError,
    ValidationError,
)
from pyshotlength.quantiles import SampleDesign, hdquantile
from pyshotlength.summary import SUMMARY_PROBS, summary_table


class TestSymmetricSample:

    @pytest.fixture
    def result(self):
        return summarize(np.arange(1.0, 11.0), label="1..10")

    def test_counts_and_extremes(self, result):
        assert result.count == 10
        assert result.mean == pytest.approx(5.5)
        assert result.min == 1.0
        assert result.max == 10.0

    def test_median(self, result):
        assert result.median == pytest.approx(5.5, abs=1e-12)

    def test_quartiles_symmetric(self, result):
        assert result.q25 + result.q75 == pytest.approx(11.0, abs=1e-12)
        assert result.iqr == pytest.approx(result.q75 - result.q25)

    def test_zero_skewness(self, result):
        assert result.skewness == pytest.approx(0.0, abs=1e-12)

    def test_kurtosis_positive(self, result):
        assert result.kurtosis > 0.0

    def test_quartiles_match_hdquantile(self, result):
        direct = hdquantile(np.arange(1.0, 11.0), [0.25, 0.5, 0.75])
        assert result.q25 == pytest.approx(direct[0.25], rel=1e-12)
        assert result.median == pytest.approx(direct[0.5], rel=1e-12)
        assert result.q75 == pytest.approx(direct[0.75], rel=1e-12)


class TestFormulas:

    def test_skewness_and_kurtosis_from_octiles(self, shot_lengths):
        result = summarize(shot_lengths)
        q125, q25, q375, q50, q625, q75, q875 = result.record.quantiles
        iqr = q75 - q25
        assert result.skewness == pytest.approx((q25 + q75 - 2 * q50) / iqr, rel=1e-12)
        assert result.kurtosis == pytest.approx(((q875 - q625) + (q375 - q125)) / iqr, rel=1e-12)
        np.testing.assert_array_equal(result.record.probabilities, SUMMARY_PROBS)

    def test_extremes_are_exact(self, shot_lengths):
        result = summarize(shot_lengths)
        assert result.min == shot_lengths.min()
        assert result.max == shot_lengths.max()

    def test_exponential_population_values(self, rng):
        x = rng.exponential(scale=4.0, size=10_000)
        result = summarize(x)
        assert result.skewness == pytest.approx(np.log(4 / 3) / np.log(3), abs=0.08)
        assert result.kurtosis == pytest.approx(
            (np.log(3) + np.log(1.4)) / np.log(3), abs=0.08
        )

    def test_right_skew_detected(self, shot_lengths):
        assert summarize(shot_lengths).skewness > 0.0

    def test_scale_free(self, shot_lengths):
        a = summarize(shot_lengths)
        b = summarize(shot_lengths * 24.0)
        assert b.skewness == pytest.approx(a.skewness, rel=1e-9)
        assert b.kurtosis == pytest.approx(a.kurtosis, rel=1e-9)


class TestDegenerate:

    def test_constant_sample_raises(self):
        with pytest.raises(DegenerateDistributionError, match="interquartile range is zero") as exc:
            summarize(np.full(10, 3.0), label="static")
        assert exc.value.q25 == 3.0
        assert exc.value.q75 == 3.0
        assert exc.value.label == "static"

    def test_single_observation_raises(self):
        with pytest.raises(DegenerateDistributionError):
            summarize([7.0])

    def test_allow_degenerate(self):
        with pytest.warns(RuntimeWarning, match="Interquartile range is zero"):
            result = summarize(np.full(10, 3.0), allow_degenerate=True)
        assert result.skewness is None
        assert result.kurtosis is None
        assert result.record.is_degenerate
        assert result.iqr == 0.0
        assert result.median == 3.0
        assert any("Interquartile range is zero" in w for w in result.warnings)
        assert "undefined" in result.summary()

    def test_long_run_of_ties(self):
        with pytest.raises(DegenerateDistributionError) as exc:
            summarize([1.0] * 199 + [1000.0])
        assert exc.value.q25 == 1.0
        assert exc.value.q75 == 1.0

    @pytest.mark.parametrize("sample", [
        [1.0] * 199 + [1000.0],
        [2.0] * 300 + [3.0],
        [4.0] * 50 + [5.0] * 3 + [6.0] * 50,
    ])
    def test_quartiles_ordered_on_ties(self, sample):
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", RuntimeWarning)
            result = summarize(sample, allow_degenerate=True)
        assert result.min <= result.q25 <= result.median <= result.q75 <= result.max
        assert result.iqr >= 0.0

    def test_rounded_durations(self, shot_lengths):
        result = summarize(np.round(shot_lengths, 1))
        assert result.min <= result.q25 <= result.median <= result.q75 <= result.max
        assert result.iqr > 0.0


class TestInputs:

    def test_na_rm(self):
        result = summarize([1.0, 2.0, np.nan, 3.0, 4.0], na_rm=True)
        assert result.count == 4
        assert result.info['n_removed'] == 1
        assert any("Removed 1 missing" in w for w in result.warnings)

    def test_nan_rejected(self):
        with pytest.raises(ValidationError):
            summarize([1.0, np.nan, 3.0])

    def test_empty_rejected(self):
        with pytest.raises(ValidationError):
            summarize([])

    def test_design_input(self):
        design = SampleDesign.from_array([4.0, 1.0, 3.0, 2.0], label="d")
        assert summarize(design).label == "d"

    def test_design_label_conflict(self):
        design = SampleDesign.from_array([4.0, 1.0, 3.0, 2.0], label="d")
        with pytest.raises(ValidationError, match="conflicts"):
            summarize(design, label="e")

    def test_label_names_unlabelled_design(self):
        design = SampleDesign.from_array([4.0, 1.0, 3.0, 2.0])
        assert summarize(design, label="e").label == "e"
        assert summarize(design, label=None).label is None

    def test_unknown_backend(self):
        with pytest.raises(ValidationError, match="Unknown backend"):
            summarize([1.0, 2.0, 3.0], backend="gpu")


class TestOutput:

    def test_as_dict_keys(self, shot_lengths):
        record = summarize(shot_lengths).as_dict()
        assert list(record) == [
            'count', 'mean', 'min', 'q25', 'median', 'q75', 'max', 'iqr',
            'skewness', 'kurtosis',
        ]

    def test_summary_text(self):
        text = summarize(np.arange(1.0, 11.0), label="1..10").summary()
        lines = text.splitlines()
        assert lines[0] == "1..10"
        assert lines[1].split() == ["Shots", "10"]
        assert lines[2].split() == ["Mean", "5.5"]
        assert lines[3].split() == ["Min.", "1.0"]

    def test_repr(self):
        assert repr(summarize(np.arange(1.0, 11.0))).startswith("SummarySolution(n=10, median=5.5")

    def test_metadata(self, shot_lengths):
        result = summarize(shot_lengths)
        assert result.backend_name == 'cpu_harrell_davis'
        assert result.backend_name == hdquantile(shot_lengths, [0.5]).backend_name
        assert result.info['method'] == 'harrell_davis'
        assert 'quantiles' in result.timing


class TestSummarizeMany:

    def test_order_and_labels(self, silent_and_sound):
        silent, sound = silent_and_sound
        films = {**sound, **silent}
        results = summarize_many(films)
        assert list(results) == list(films)
        assert all(results[k].label == k for k in films)
        assert all(results[k].count == len(films[k]) for k in films)

    def test_degenerate_member(self):
        with pytest.warns(RuntimeWarning):
            results = summarize_many(
                {'a': [1.0, 2.0, 5.0], 'b': [2.0, 2.0]}, allow_degenerate=True,
            )
        assert results['a'].skewness is not None
        assert results['b'].skewness is None

    def test_degenerate_member_raises(self):
        with pytest.raises(DegenerateDistributionError, match="sample 'b'"):
            summarize_many({'a': [1.0, 2.0, 5.0], 'b': [2.0, 2.0]})

    def test_empty(self):
        with pytest.raises(ValidationError):
            summarize_many({})

    def test_table(self, silent_and_sound):
        silent, _ = silent_and_sound
        table = summary_table(summarize_many(silent))
        lines = table.splitlines()
        assert lines[0].split() == list(silent)
        assert lines[1].split()[0] == "Shots"
        assert len(lines) == 11
