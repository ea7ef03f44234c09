"""
Isotope envelope feature detection with automatic charge state assignment.

Groups fitted peaks into features, one per isotope envelope, by solving the
charge state and the isotope series together:

1. Sort peaks by m/z and build one candidate graph per charge state
2. For each seed peak (ascending m/z), enumerate all isotope paths per charge
3. Score every path against the averagine reference for its total mass
4. Accept the best window over all charges/paths as a feature and claim its
   peaks for every charge state
5. Rank features by total volume

Peaks are a shared resource: once claimed, a peak is invisible to later path
searches, so every peak ends up in at most one feature. There is no minimum
score; the best alignment with at least two peaks is always accepted.

Examples
--------
>>> from alphaenvelope.features import Peak, detect_features
>>> peaks = [
...     Peak(0, 500.0, 60.0, 100.0, 1000.0, 0.01, 1.0),
...     Peak(1, 501.0033, 60.0, 40.0, 400.0, 0.01, 1.0),
...     Peak(2, 502.0066, 60.0, 10.0, 100.0, 0.01, 1.0),
... ]
>>> features = detect_features(peaks)
>>> features[0].charge_state, features[0].peak_ids
(1, [0, 1, 2])
"""

import logging
import numpy as np
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from ..constants import (
    CARBON_ISOTOPE_SPACING,
    DEFAULT_CHARGE_STATES,
    MAX_ENVELOPE_DEVIATION,
    MIN_ENVELOPE_PEAKS,
)
from .candidate_graph import CandidateGraph, build_candidate_graphs
from .envelope_matching import match_envelope
from .path_search import find_all_paths
from .peaks import PeakInput, as_peak_array
from .reference_envelopes import lookup_reference_envelope

logger = logging.getLogger(__name__)


@dataclass
class FeatureDetectionParams:
    """Parameters for isotope envelope feature detection."""

    # Charge states hypothesized for every seed (0 = no charge, never matches)
    charge_states: Tuple[int, ...] = DEFAULT_CHARGE_STATES

    # Isotope spacing (Da); the m/z step at charge z is spacing / z
    isotope_spacing: float = CARBON_ISOTOPE_SPACING

    # Envelope window truncation threshold (fraction of anchor height)
    max_deviation: float = MAX_ENVELOPE_DEVIATION

    def __post_init__(self):
        self.charge_states = tuple(int(z) for z in self.charge_states)
        negative = [z for z in self.charge_states if z < 0]
        if negative:
            raise ValueError(f"Charge states must be >= 0, got {negative}")
        if self.isotope_spacing <= 0:
            raise ValueError(f"isotope_spacing must be positive, got {self.isotope_spacing}")
        if self.max_deviation <= 0:
            raise ValueError(f"max_deviation must be positive, got {self.max_deviation}")

    @classmethod
    def from_charge_range(
        cls,
        min_charge: int,
        max_charge: int,
        **kwargs
    ) -> 'FeatureDetectionParams':
        """Create parameters trying every charge in [min_charge, max_charge].

        Args:
            min_charge: Lowest charge state
            max_charge: Highest charge state (inclusive)
            **kwargs: Remaining FeatureDetectionParams fields

        Returns:
            FeatureDetectionParams
        """
        if max_charge < min_charge:
            raise ValueError(
                f"max_charge ({max_charge}) must be >= min_charge ({min_charge})"
            )
        return cls(charge_states=tuple(range(min_charge, max_charge + 1)), **kwargs)


@dataclass
class Feature:
    """Isotope envelope of one ion, aggregated over its peaks."""

    id: int
    score: float
    charge_state: int

    # Lowest-m/z (monoisotopic) peak of the envelope
    monoisotopic_mz: float
    monoisotopic_rt: float
    monoisotopic_height: float
    monoisotopic_volume: float

    # Averages over constituent peaks (m/z is height weighted)
    average_rt: float
    average_rt_sigma: float
    average_rt_delta: float
    average_mz: float
    average_mz_sigma: float

    total_height: float
    total_volume: float
    max_height: float
    max_volume: float

    # Peak identifiers in ascending m/z order
    peak_ids: List[int] = field(default_factory=list)

    @property
    def n_peaks(self) -> int:
        return len(self.peak_ids)


FEATURE_DTYPE = np.dtype([
    ('id', 'i8'),
    ('score', 'f8'),
    ('charge_state', 'i8'),
    ('monoisotopic_mz', 'f8'),
    ('monoisotopic_rt', 'f8'),
    ('monoisotopic_height', 'f8'),
    ('monoisotopic_volume', 'f8'),
    ('average_rt', 'f8'),
    ('average_rt_sigma', 'f8'),
    ('average_rt_delta', 'f8'),
    ('average_mz', 'f8'),
    ('average_mz_sigma', 'f8'),
    ('total_height', 'f8'),
    ('total_volume', 'f8'),
    ('max_height', 'f8'),
    ('max_volume', 'f8'),
    ('n_peaks', 'i8'),
])


@dataclass
class _Candidate:
    score: float
    charge_state: int
    window: np.ndarray  # m/z-sorted peak indices


def build_feature(
    sorted_peaks: np.ndarray,
    window: np.ndarray,
    charge_state: int,
    score: float
) -> Optional[Feature]:
    """Aggregate a window of m/z-sorted peaks into a Feature.

    Args:
        sorted_peaks: PEAK_DTYPE array sorted by fitted_mz
        window: Indices into sorted_peaks, ascending
        charge_state: Assigned charge
        score: Envelope match score

    Returns:
        Feature with id -1 (assigned after ranking), or None if the window
        has no positive total height
    """
    rows = sorted_peaks[window]
    heights = rows['fitted_height']
    volumes = rows['fitted_volume']

    total_height = float(heights.sum())
    if total_height <= 0.0:
        return None

    first = rows[0]
    return Feature(
        id=-1,
        score=float(score),
        charge_state=int(charge_state),
        monoisotopic_mz=float(first['fitted_mz']),
        monoisotopic_rt=float(first['fitted_rt']),
        monoisotopic_height=float(first['fitted_height']),
        monoisotopic_volume=float(first['fitted_volume']),
        average_rt=float(rows['fitted_rt'].mean()),
        average_rt_sigma=float(rows['sigma_rt'].mean()),
        average_rt_delta=float(rows['rt_delta'].mean()),
        average_mz=float((rows['fitted_mz'] * heights).sum() / total_height),
        average_mz_sigma=float(rows['sigma_mz'].mean()),
        total_height=total_height,
        total_volume=float(volumes.sum()),
        max_height=float(heights.max()),
        max_volume=float(volumes.max()),
        peak_ids=[int(x) for x in rows['id']],
    )


def _best_candidate(
    seed: int,
    sorted_peaks: np.ndarray,
    heights: np.ndarray,
    graphs: Sequence[CandidateGraph],
    claimed: np.ndarray,
    max_deviation: float
) -> Optional[_Candidate]:
    """Best envelope window over all charge states and paths for one seed."""
    seed_mz = sorted_peaks['fitted_mz'][seed]
    best = None

    for graph in graphs:
        charge = graph.charge_state
        if charge == 0:
            continue

        reference = lookup_reference_envelope(seed_mz * charge)
        if reference is None:
            logger.debug(
                "Seed %d: mass %.3f (z=%d) outside reference table",
                seed, seed_mz * charge, charge
            )
            continue

        paths = find_all_paths(graph.indptr, graph.indices, claimed, seed)
        for path in paths:
            if len(path) < MIN_ENVELOPE_PEAKS:
                continue

            match = match_envelope(heights[path], reference, max_deviation)
            if match is None:
                continue

            if best is None or match.score > best.score:
                best = _Candidate(
                    score=match.score,
                    charge_state=charge,
                    window=path[match.start:match.stop].copy(),
                )

    return best


def rank_features(features: List[Feature]) -> List[Feature]:
    """Sort features by total volume (descending) and assign sequential ids.

    The sort is stable: equal volumes keep their detection order.
    """
    ranked = sorted(features, key=lambda f: f.total_volume, reverse=True)
    for i, feature in enumerate(ranked):
        feature.id = i
    return ranked


def detect_features(
    peaks: PeakInput,
    params: Optional[FeatureDetectionParams] = None
) -> List[Feature]:
    """Detect isotope envelope features in a set of fitted peaks.

    Args:
        peaks: Sequence of Peak objects or PEAK_DTYPE structured array
        params: Detection parameters (defaults to FeatureDetectionParams())

    Returns:
        Features ranked by total volume, ids 0..n-1
    """
    if params is None:
        params = FeatureDetectionParams()

    peak_array = as_peak_array(peaks)
    n_peaks = len(peak_array)
    if n_peaks == 0 or len(params.charge_states) == 0:
        logger.info("No peaks or charge states, nothing to detect")
        return []

    order = np.argsort(peak_array['fitted_mz'], kind='stable')
    sorted_peaks = peak_array[order]
    heights = np.ascontiguousarray(sorted_peaks['fitted_height'], dtype=np.float64)

    graphs = build_candidate_graphs(
        sorted_peaks, params.charge_states, params.isotope_spacing
    )
    n_edges = sum(graph.n_edges for graph in graphs)
    logger.info(
        f"Built {len(graphs)} candidate graphs over {n_peaks:,} peaks "
        f"({n_edges:,} edges, charges {list(params.charge_states)})"
    )

    claimed = np.zeros(n_peaks, dtype=np.bool_)
    features = []

    i = 0
    while i < n_peaks:
        if claimed[i]:
            i += 1
            continue

        best = _best_candidate(
            i, sorted_peaks, heights, graphs, claimed, params.max_deviation
        )
        if best is None:
            i += 1
            continue

        feature = build_feature(sorted_peaks, best.window, best.charge_state, best.score)
        if feature is None:
            logger.debug("Seed %d: discarded window with zero total height", i)
            i += 1
            continue

        # A window that does not start at the seed leaves it for another try
        if best.window[0] == i:
            i += 1

        claimed[best.window] = True
        features.append(feature)

    features = rank_features(features)

    n_claimed = int(claimed.sum())
    logger.info(
        f"✓ Detected {len(features):,} features from {n_peaks:,} peaks "
        f"({n_claimed:,} peaks assigned)"
    )

    return features


def features_to_array(features: Sequence[Feature]) -> np.ndarray:
    """Convert features to a FEATURE_DTYPE structured array.

    Peak id lists are reduced to their length (n_peaks).
    """
    result = np.zeros(len(features), dtype=FEATURE_DTYPE)
    for row, feature in enumerate(features):
        for name in FEATURE_DTYPE.names:
            if name == 'n_peaks':
                result[name][row] = feature.n_peaks
            else:
                result[name][row] = getattr(feature, name)
    return result
