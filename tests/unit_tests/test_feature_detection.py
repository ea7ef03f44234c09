"""Tests for greedy isotope envelope feature detection.

Tests:
- End-to-end detection of single envelopes at z=1, 2, 3
- Charge state 0 and empty input handling
- Peak exclusivity, m/z ordering and minimum envelope size
- Ranking by total volume and deterministic output
- Parameter validation
"""

import unittest
import numpy as np
import pytest

from alphaenvelope.constants import CARBON_ISOTOPE_SPACING
from alphaenvelope.features import (
    FEATURE_DTYPE,
    Feature,
    FeatureDetectionParams,
    Peak,
    build_candidate_graphs,
    build_feature,
    detect_features,
    features_to_array,
    lookup_reference_envelope,
    rank_features,
)


def _check_invariants(features, peaks):
    """Exclusivity, ascending m/z and minimum size for every feature."""
    mz_by_id = dict(zip(peaks['id'].tolist(), peaks['fitted_mz'].tolist()))
    seen = set()
    for feature in features:
        assert feature.n_peaks >= 2
        mzs = [mz_by_id[pid] for pid in feature.peak_ids]
        assert all(b > a for a, b in zip(mzs, mzs[1:]))
        assert seen.isdisjoint(feature.peak_ids)
        seen.update(feature.peak_ids)


class TestSingleEnvelope:
    """Test detection of one isolated envelope."""

    def test_three_peak_z1(self):
        peaks = [
            Peak(0, 500.0, 60.0, 100.0, 0.0, 0.01, 1.0, 0.0),
            Peak(1, 501.0033, 60.0, 40.0, 0.0, 0.01, 1.0, 0.0),
            Peak(2, 502.0066, 60.0, 10.0, 0.0, 0.01, 1.0, 0.0),
        ]
        features = detect_features(peaks, FeatureDetectionParams(charge_states=(1,)))

        assert len(features) == 1
        feature = features[0]
        assert feature.id == 0
        assert feature.charge_state == 1
        assert feature.peak_ids == [0, 1, 2]
        assert feature.monoisotopic_mz == 500.0
        assert feature.total_height == pytest.approx(150.0)
        assert 0.0 < feature.score <= 1.0

    def test_aggregates(self, three_peak_envelope):
        feature = detect_features(three_peak_envelope)[0]

        assert feature.monoisotopic_rt == 60.0
        assert feature.monoisotopic_height == 100.0
        assert feature.monoisotopic_volume == 1000.0
        assert feature.average_rt == pytest.approx(60.0)
        assert feature.average_rt_sigma == pytest.approx(1.0)
        assert feature.average_rt_delta == pytest.approx(0.5)
        assert feature.average_mz_sigma == pytest.approx(0.01)
        expected_mz = (500.0 * 100 + 501.0033 * 40 + 502.0066 * 10) / 150.0
        assert feature.average_mz == pytest.approx(expected_mz)
        assert feature.total_volume == pytest.approx(1500.0)
        assert feature.max_height == 100.0
        assert feature.max_volume == 1000.0

    def test_default_charge_states(self, three_peak_envelope):
        features = detect_features(three_peak_envelope)
        assert len(features) == 1
        assert features[0].charge_state == 1
        assert features[0].n_peaks == 3

    def test_z2_envelope(self, make_peaks, envelope_mzs):
        reference = lookup_reference_envelope(1200.0)
        peaks = make_peaks(envelope_mzs(600.0, 2, 4), reference[:4] * 10.0, sigma_mz=0.005)

        features = detect_features(peaks)

        assert len(features) == 1
        assert features[0].charge_state == 2
        assert features[0].peak_ids == [0, 1, 2, 3]

    def test_z3_heavy_envelope(self, make_peaks, envelope_mzs):
        # Mass 2100 Da: second isotope is the most abundant
        reference = lookup_reference_envelope(2100.0)
        peaks = make_peaks(envelope_mzs(700.0, 3, 4), reference[:4] * 10.0, sigma_mz=0.005)

        features = detect_features(peaks)

        assert len(features) == 1
        assert features[0].charge_state == 3
        assert features[0].peak_ids == [0, 1, 2, 3]
        assert features[0].monoisotopic_mz == 700.0

    def test_input_order_irrelevant(self, three_peak_envelope):
        shuffled = three_peak_envelope[[2, 0, 1]]
        features = detect_features(shuffled)

        assert len(features) == 1
        assert features[0].peak_ids == [0, 1, 2]

    def test_structured_array_matches_peak_list(self, three_peak_envelope):
        peak_list = [Peak(*row) for row in three_peak_envelope.tolist()]

        from_array = detect_features(three_peak_envelope)
        from_list = detect_features(peak_list)

        assert from_array == from_list

    def test_leading_noise_peak_left_unassigned(self, make_peaks):
        # Weak peak one spacing below the monoisotope
        mzs = [500.0 - CARBON_ISOTOPE_SPACING, 500.0, 501.0033, 502.0066]
        peaks = make_peaks(mzs, [10.0, 100.0, 40.0, 10.0])

        features = detect_features(peaks, FeatureDetectionParams(charge_states=(1,)))

        assert len(features) == 1
        assert features[0].peak_ids == [1, 2, 3]
        assert features[0].monoisotopic_mz == 500.0


class TestNoFeatures:
    """Test inputs that yield no features."""

    def test_empty_peaks(self):
        assert detect_features([]) == []

    def test_no_charge_states(self, three_peak_envelope):
        assert detect_features(three_peak_envelope, FeatureDetectionParams(charge_states=())) == []

    def test_charge_zero_only(self, three_peak_envelope):
        params = FeatureDetectionParams(charge_states=(0,))
        assert detect_features(three_peak_envelope, params) == []

    def test_charge_zero_is_ignored(self, three_peak_envelope):
        with_zero = detect_features(three_peak_envelope, FeatureDetectionParams(charge_states=(0, 1)))
        without = detect_features(three_peak_envelope, FeatureDetectionParams(charge_states=(1,)))
        assert with_zero == without

    def test_single_peak(self, make_peaks):
        assert detect_features(make_peaks([500.0], [100.0])) == []

    def test_mass_above_reference_table(self, make_peaks, envelope_mzs):
        # 4100 Da at z=1 is beyond the largest reference mass
        peaks = make_peaks(envelope_mzs(4100.0, 1, 3), [100.0, 100.0, 80.0])
        assert detect_features(peaks, FeatureDetectionParams(charge_states=(1,))) == []

    def test_rt_separated_peaks(self, make_peaks):
        peaks = make_peaks([500.0, 501.0033], [100.0, 30.0], rts=[60.0, 90.0])
        assert detect_features(peaks) == []


class TestMultipleEnvelopes:
    """Test several envelopes and noise in one run."""

    @pytest.fixture
    def mixed_peaks(self, make_peaks, envelope_mzs):
        mzs, heights, rts = [], [], []
        for mono_mz, charge, rt, scale, n in [
            (400.0, 1, 100.0, 1000.0, 3),
            (600.0, 2, 200.0, 10.0, 4),
            (700.0, 3, 300.0, 10.0, 4),
        ]:
            reference = lookup_reference_envelope(mono_mz * charge)
            mzs.extend(envelope_mzs(mono_mz, charge, n))
            heights.extend(reference[:n] * scale)
            rts.extend([rt] * n)
        return make_peaks(mzs, heights, rts=rts, sigma_mz=0.005)

    def test_charges_and_ranking(self, mixed_peaks):
        features = detect_features(mixed_peaks)

        assert len(features) == 3
        assert [f.id for f in features] == [0, 1, 2]
        assert [f.charge_state for f in features] == [1, 3, 2]
        volumes = [f.total_volume for f in features]
        assert volumes == sorted(volumes, reverse=True)
        _check_invariants(features, mixed_peaks)

    def test_invariants_with_noise(self, mixed_peaks, make_peaks):
        rng = np.random.default_rng(11)
        n_noise = 400
        noise = make_peaks(
            rng.uniform(380.0, 720.0, n_noise),
            rng.uniform(1.0, 500.0, n_noise),
            rts=rng.uniform(90.0, 310.0, n_noise),
            sigma_mz=0.01,
            sigma_rt=5.0,
            ids=np.arange(100, 100 + n_noise),
        )
        peaks = np.concatenate([mixed_peaks, noise])

        features = detect_features(peaks)

        assert len(features) > 0
        _check_invariants(features, peaks)
        assert [f.id for f in features] == list(range(len(features)))

    def test_deterministic(self, mixed_peaks):
        first = detect_features(mixed_peaks)
        second = detect_features(mixed_peaks.copy())
        assert first == second


class TestClaimingAcrossCharges:
    """Test that peaks claimed under one charge are hidden from the others."""

    @pytest.fixture
    def overlapping_peaks(self, make_peaks, envelope_mzs):
        # z=2 series at 600 m/z; peaks 0 -> 2 -> 4 also form a z=1 series.
        # Peak 4 is outside the RT window of peak 3, so only z=1 reaches it.
        reference = lookup_reference_envelope(1200.0)
        mzs = envelope_mzs(600.0, 2, 4) + [600.0 + 2 * CARBON_ISOTOPE_SPACING]
        heights = list(reference[:4] * 10.0) + [20.0]
        return make_peaks(
            mzs,
            heights,
            rts=[60.0, 60.0, 60.0, 60.0, 60.5],
            sigma_mz=0.005,
            sigma_rt=[1.0, 1.0, 1.0, 0.1, 1.0],
        )

    def test_graphs_overlap(self, overlapping_peaks):
        z1, z2 = build_candidate_graphs(overlapping_peaks, (1, 2))
        unclaimed = np.zeros(len(overlapping_peaks), dtype=np.bool_)

        assert [p.tolist() for p in z1.paths_from(0, unclaimed)] == [[0, 2, 4]]
        assert [p.tolist() for p in z2.paths_from(0, unclaimed)] == [[0, 1, 2, 3]]

    def test_claimed_peaks_hidden_from_other_charge(self, overlapping_peaks):
        z1, _ = build_candidate_graphs(overlapping_peaks, (1, 2))
        claimed = np.zeros(len(overlapping_peaks), dtype=np.bool_)

        claimed[[1, 2]] = True
        assert [p.tolist() for p in z1.paths_from(0, claimed)] == [[0]]

        claimed[[0, 3]] = True
        assert z1.paths_from(0, claimed) == []
        assert [p.tolist() for p in z1.paths_from(4, claimed)] == [[4]]

    def test_shared_peaks_assigned_once(self, overlapping_peaks):
        features = detect_features(overlapping_peaks, FeatureDetectionParams(charge_states=(1, 2)))

        assert len(features) == 1
        assert features[0].charge_state == 2
        assert features[0].peak_ids == [0, 1, 2, 3]
        _check_invariants(features, overlapping_peaks)


class TestRanking:
    """Test volume ranking and id assignment."""

    def _feature(self, volume, tag):
        return Feature(
            id=-1, score=1.0, charge_state=1,
            monoisotopic_mz=500.0, monoisotopic_rt=60.0,
            monoisotopic_height=1.0, monoisotopic_volume=1.0,
            average_rt=60.0, average_rt_sigma=1.0, average_rt_delta=0.0,
            average_mz=500.0, average_mz_sigma=0.01,
            total_height=1.0, total_volume=volume,
            max_height=1.0, max_volume=1.0, peak_ids=[tag],
        )

    def test_descending_volume(self):
        ranked = rank_features([self._feature(1.0, 0), self._feature(3.0, 1), self._feature(2.0, 2)])
        assert [f.peak_ids[0] for f in ranked] == [1, 2, 0]
        assert [f.id for f in ranked] == [0, 1, 2]

    def test_ties_keep_detection_order(self):
        ranked = rank_features([self._feature(2.0, 0), self._feature(5.0, 1), self._feature(2.0, 2)])
        assert [f.peak_ids[0] for f in ranked] == [1, 0, 2]


class TestBuildFeature:
    """Test feature aggregation from a peak window."""

    def test_zero_total_height_discarded(self, make_peaks):
        peaks = make_peaks([500.0, 501.0033], [0.0, 0.0])
        assert build_feature(peaks, np.array([0, 1]), 1, 0.9) is None

    def test_window_subset(self, make_peaks):
        peaks = make_peaks([499.0, 500.0, 501.0033], [5.0, 100.0, 40.0], ids=[9, 8, 7])
        feature = build_feature(peaks, np.array([1, 2]), 1, 0.95)

        assert feature.peak_ids == [8, 7]
        assert feature.monoisotopic_mz == 500.0
        assert feature.total_height == 140.0
        assert feature.score == 0.95
        assert feature.id == -1


class TestFeaturesToArray(unittest.TestCase):
    """Test structured array export."""

    def test_export(self):
        peaks = [
            Peak(0, 500.0, 60.0, 100.0, 1000.0, 0.01, 1.0, 0.5),
            Peak(1, 501.0033, 60.0, 40.0, 400.0, 0.01, 1.0, 0.5),
        ]
        features = detect_features(peaks)
        arr = features_to_array(features)

        self.assertEqual(arr.dtype, FEATURE_DTYPE)
        self.assertEqual(len(arr), 1)
        self.assertEqual(arr['n_peaks'][0], 2)
        self.assertEqual(arr['charge_state'][0], 1)
        self.assertAlmostEqual(arr['total_volume'][0], 1400.0)

    def test_empty(self):
        self.assertEqual(len(features_to_array([])), 0)


class TestParams(unittest.TestCase):
    """Test parameter validation and constructors."""

    def test_defaults(self):
        params = FeatureDetectionParams()
        self.assertEqual(params.charge_states, (1, 2, 3, 4, 5))
        self.assertEqual(params.isotope_spacing, CARBON_ISOTOPE_SPACING)
        self.assertEqual(params.max_deviation, 0.35)

    def test_charge_range(self):
        params = FeatureDetectionParams.from_charge_range(2, 4)
        self.assertEqual(params.charge_states, (2, 3, 4))

    def test_charge_range_reversed(self):
        with self.assertRaises(ValueError):
            FeatureDetectionParams.from_charge_range(4, 2)

    def test_list_charges_normalized(self):
        params = FeatureDetectionParams(charge_states=[3, 1])
        self.assertEqual(params.charge_states, (3, 1))

    def test_negative_charge(self):
        with self.assertRaises(ValueError):
            FeatureDetectionParams(charge_states=(1, -2))

    def test_invalid_spacing(self):
        with self.assertRaises(ValueError):
            FeatureDetectionParams(isotope_spacing=0.0)

    def test_invalid_deviation(self):
        with self.assertRaises(ValueError):
            FeatureDetectionParams(max_deviation=-0.1)


if __name__ == '__main__':
    unittest.main()
