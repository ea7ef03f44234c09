"""MS1 isotope envelope feature detection.

This module provides:
- Peak records and structured array conversion
- Candidate isotope graphs per charge state
- Isotope path enumeration
- Averagine reference envelope lookup
- Rolling weighted envelope matching
- Greedy feature assembly with peak exclusivity
"""

from .peaks import (
    PEAK_DTYPE,
    Peak,
    as_peak_array,
    peaks_to_array,
)

from .reference_envelopes import (
    AVERAGINE_TABLE,
    find_reference_index,
    lookup_reference_envelope,
    reference_envelope_masses,
)

from .candidate_graph import (
    CandidateGraph,
    build_candidate_graph,
    build_candidate_graphs,
)

from .path_search import find_all_paths

from .envelope_matching import (
    EnvelopeMatch,
    match_envelope,
    rolling_weighted_similarity,
)

from .feature_detection import (
    FEATURE_DTYPE,
    Feature,
    FeatureDetectionParams,
    build_feature,
    detect_features,
    features_to_array,
    rank_features,
)

__all__ = [
    # Peaks
    'PEAK_DTYPE',
    'Peak',
    'as_peak_array',
    'peaks_to_array',

    # Reference envelopes
    'AVERAGINE_TABLE',
    'find_reference_index',
    'lookup_reference_envelope',
    'reference_envelope_masses',

    # Candidate graphs and paths
    'CandidateGraph',
    'build_candidate_graph',
    'build_candidate_graphs',
    'find_all_paths',

    # Envelope matching
    'EnvelopeMatch',
    'match_envelope',
    'rolling_weighted_similarity',

    # Feature detection
    'FEATURE_DTYPE',
    'Feature',
    'FeatureDetectionParams',
    'build_feature',
    'detect_features',
    'features_to_array',
    'rank_features',
]
