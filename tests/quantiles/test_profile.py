"""
Tests for profile() and profile_many().
"""

import numpy as np
import pytest

from pyshotlength import profile, profile_many
from pyshotlength.core.exceptions import ValidationError
from pyshotlength.quantiles import ProbabilityGrid, hdquantile


class TestProfile:

    def test_default_grid(self, shot_lengths):
        prof = profile(shot_lengths)
        assert len(prof) == 19
        assert prof.grid.equals(ProbabilityGrid.default())

    def test_matches_hdquantile(self, shot_lengths):
        grid = ProbabilityGrid.from_values([0.1, 0.5, 0.9])
        prof = profile(shot_lengths, grid)
        direct = hdquantile(shot_lengths, [0.1, 0.5, 0.9])
        np.testing.assert_array_equal(prof.quantiles, direct.quantiles)

    def test_non_decreasing(self, shot_lengths):
        prof = profile(shot_lengths, ProbabilityGrid.from_range(0.01, 0.99, 0.01))
        assert np.all(np.diff(prof.quantiles) >= 0.0)

    def test_plain_sequence_grid(self, shot_lengths):
        prof = profile(shot_lengths, [0.25, 0.75])
        assert list(prof) == [0.25, 0.75]

    def test_grid_must_increase(self, shot_lengths):
        with pytest.raises(ValidationError, match="strictly increasing"):
            profile(shot_lengths, [0.75, 0.25])

    def test_summary_text(self, shot_lengths):
        text = profile(shot_lengths, [0.5], label="Sunrise").summary()
        assert text.startswith("Harrell-Davis quantiles: Sunrise")
        assert "n = 400" in text

    def test_repr(self, shot_lengths):
        assert repr(profile(shot_lengths, label="Sunrise")) == "QuantileSolution('Sunrise', n=400, k=19)"

    def test_series_label(self, shot_lengths):
        pd = pytest.importorskip("pandas")
        prof = profile(pd.Series(shot_lengths, name="Faust"))
        assert prof.label == "Faust"


class TestProfileMany:

    def test_order_and_labels(self, silent_and_sound):
        silent, _ = silent_and_sound
        profiles = profile_many(silent)
        assert list(profiles) == list(silent)
        for label, prof in profiles.items():
            assert prof.label == label
            assert prof.n == len(silent[label])

    def test_threads_match_serial(self, silent_and_sound):
        silent, sound = silent_and_sound
        films = {**silent, **sound}
        serial = profile_many(films, n_jobs=1)
        threaded = profile_many(films, n_jobs=2)
        assert list(serial) == list(threaded)
        for label in films:
            np.testing.assert_array_equal(serial[label].quantiles, threaded[label].quantiles)

    def test_all_cores(self, silent_and_sound):
        silent, _ = silent_and_sound
        profiles = profile_many(silent, n_jobs=-1)
        assert len(profiles) == 3

    def test_shared_grid(self, silent_and_sound):
        silent, _ = silent_and_sound
        grid = ProbabilityGrid.from_range(0.1, 0.9, 0.2)
        profiles = profile_many(silent, grid)
        assert all(p.grid.equals(grid) for p in profiles.values())

    def test_se(self, silent_and_sound):
        _, sound = silent_and_sound
        profiles = profile_many(sound, [0.5], se=True)
        assert all(p.se.shape == (1,) for p in profiles.values())

    def test_empty_mapping(self):
        with pytest.raises(ValidationError, match="at least one"):
            profile_many({})

    @pytest.mark.parametrize("n_jobs", [0, -2, 1.5])
    def test_bad_n_jobs(self, silent_and_sound, n_jobs):
        silent, _ = silent_and_sound
        with pytest.raises(ValidationError, match="n_jobs"):
            profile_many(silent, n_jobs=n_jobs)

    def test_error_in_one_sample_propagates(self):
        with pytest.raises(ValidationError, match="sample 'b'"):
            profile_many({'a': [1.0, 2.0], 'b': []}, n_jobs=2)
