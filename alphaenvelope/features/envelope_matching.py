"""
Rolling weighted similarity between observed and reference isotope envelopes.

The most abundant reference isotope is rolled through every position of the
observed height series. For each alignment the window grows outwards from the
anchor while observed heights (relative to the anchor) stay within
``max_deviation`` of the reference relative intensities, and is scored with a
weighted similarity:

    score = Σ a·b² / (sqrt(Σ a²·b) · sqrt(Σ b³))

This is a cosine similarity with weights b, so isotopes predicted to be
abundant dominate and noisy low-abundance isotopes barely count. The
reference norm runs over the full reference envelope, so windows that cover
little of the predicted intensity score lower.

Examples
--------
>>> match = match_envelope(np.array([100.0, 40.0, 10.0]),
...                        np.array([100.0, 27.35, 5.17, 0.72, 0.09]))
>>> match.start, match.stop
(0, 3)
"""

import numpy as np
from numba import njit
from dataclasses import dataclass
from typing import Optional, Tuple

from ..constants import MAX_ENVELOPE_DEVIATION, MIN_ENVELOPE_PEAKS


@dataclass
class EnvelopeMatch:
    """Best alignment of an observed series against a reference envelope."""

    score: float
    start: int  # First observed index in the window
    stop: int   # One past the last observed index

    @property
    def size(self) -> int:
        return self.stop - self.start


@njit
def rolling_weighted_similarity(
    observed: np.ndarray,
    reference: np.ndarray,
    max_deviation: float = MAX_ENVELOPE_DEVIATION
) -> Tuple[float, int, int]:
    """Align a reference envelope to observed heights at its best position.

    Args:
        observed: Observed heights in ascending m/z order
        reference: Reference relative intensities (percent of maximum)
        max_deviation: Truncate the window where |a/a_anchor - b/b_max|
            reaches this value

    Returns:
        Tuple of (score, start, stop) with [start, stop) the window into
        observed; (0.0, 0, 0) if no window of at least two peaks exists
    """
    n_obs = len(observed)
    n_ref = len(reference)
    if n_obs < MIN_ENVELOPE_PEAKS or n_ref < MIN_ENVELOPE_PEAKS:
        return 0.0, 0, 0

    # Reference maximum (first occurrence) and weighted norm
    norm_ref = 0.0
    max_ref = 0.0
    max_ref_idx = 0
    for j in range(n_ref):
        norm_ref += reference[j] * reference[j] * reference[j]
        if reference[j] > max_ref:
            max_ref = reference[j]
            max_ref_idx = j
    if max_ref <= 0.0:
        return 0.0, 0, 0
    norm_ref = np.sqrt(norm_ref)

    best_score = 0.0
    best_start = 0
    best_stop = 0

    for k in range(n_obs):
        anchor = observed[k]
        if anchor <= 0.0:
            continue

        # observed[i] pairs with reference[i + shift]
        shift = max_ref_idx - k
        lo = max(0, k - max_ref_idx)
        hi = min(n_obs, n_ref - max_ref_idx + k)

        # The reference predicts nothing below its first isotope; a strong
        # peak there keeps the monoisotopic seed from losing to a window
        # that starts one peak later
        if lo > 0 and observed[lo - 1] / anchor >= max_deviation:
            continue

        dot = 0.0
        norm_obs = 0.0

        # Center -> left
        start = lo
        for i in range(k - 1, lo - 1, -1):
            a = observed[i]
            b = reference[i + shift]
            if abs(a / anchor - b / max_ref) >= max_deviation:
                start = i + 1
                break
            dot += a * b * b
            norm_obs += a * a * b

        # Center -> right (includes the anchor)
        stop = hi
        for i in range(k, hi):
            a = observed[i]
            b = reference[i + shift]
            if abs(a / anchor - b / max_ref) >= max_deviation:
                stop = i
                break
            dot += a * b * b
            norm_obs += a * a * b

        if stop - start < MIN_ENVELOPE_PEAKS or norm_obs <= 0.0:
            continue

        score = dot / (np.sqrt(norm_obs) * norm_ref)
        if score > best_score:
            best_score = score
            best_start = start
            best_stop = stop

    if best_stop - best_start < MIN_ENVELOPE_PEAKS:
        return 0.0, 0, 0
    return best_score, best_start, best_stop


def match_envelope(
    observed: np.ndarray,
    reference: np.ndarray,
    max_deviation: float = MAX_ENVELOPE_DEVIATION
) -> Optional[EnvelopeMatch]:
    """Match observed heights against a reference envelope.

    Args:
        observed: Observed heights in ascending m/z order
        reference: Reference relative intensities
        max_deviation: Window truncation threshold

    Returns:
        EnvelopeMatch, or None if no window of at least two peaks qualifies
    """
    score, start, stop = rolling_weighted_similarity(
        np.ascontiguousarray(observed, dtype=np.float64),
        np.ascontiguousarray(reference, dtype=np.float64),
        max_deviation,
    )
    if stop - start < MIN_ENVELOPE_PEAKS:
        return None
    return EnvelopeMatch(score=float(score), start=int(start), stop=int(stop))
