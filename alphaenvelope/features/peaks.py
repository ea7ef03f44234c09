"""
Centroided peak records consumed by feature detection.

Peaks come from the upstream peak fitting step as either a list of ``Peak``
objects or a numpy structured array with the ``PEAK_DTYPE`` fields. Numba
kernels only ever see the columnar form.
"""

import numpy as np
from dataclasses import dataclass, astuple
from typing import Sequence, Union


PEAK_DTYPE = np.dtype([
    ('id', 'i8'),
    ('fitted_mz', 'f8'),
    ('fitted_rt', 'f8'),
    ('fitted_height', 'f8'),
    ('fitted_volume', 'f8'),
    ('sigma_mz', 'f8'),
    ('sigma_rt', 'f8'),
    ('rt_delta', 'f8'),
])


@dataclass(frozen=True)
class Peak:
    """A fitted peak with position, intensity and uncertainty."""

    id: int
    fitted_mz: float
    fitted_rt: float
    fitted_height: float
    fitted_volume: float = 0.0
    sigma_mz: float = 0.0
    sigma_rt: float = 0.0
    rt_delta: float = 0.0


PeakInput = Union[np.ndarray, Sequence[Peak]]


def peaks_to_array(peaks: Sequence[Peak]) -> np.ndarray:
    """Convert ``Peak`` objects to a ``PEAK_DTYPE`` structured array.

    Args:
        peaks: Sequence of Peak objects

    Returns:
        Structured numpy array, one row per peak, in input order
    """
    return np.array([astuple(peak) for peak in peaks], dtype=PEAK_DTYPE)


def as_peak_array(peaks: PeakInput) -> np.ndarray:
    """Normalize peak input to a ``PEAK_DTYPE`` structured array.

    Structured arrays are accepted with any field order (and extra fields),
    as long as every ``PEAK_DTYPE`` field is present.

    Args:
        peaks: Sequence of Peak objects or a structured numpy array

    Returns:
        Structured numpy array with exactly the ``PEAK_DTYPE`` fields

    Raises:
        ValueError: If a structured array lacks required fields
    """
    if isinstance(peaks, np.ndarray):
        if peaks.dtype.names is None:
            raise ValueError("Peak array must be a structured array with named fields")

        missing = [name for name in PEAK_DTYPE.names if name not in peaks.dtype.names]
        if missing:
            raise ValueError(f"Peak array is missing required fields: {', '.join(missing)}")

        result = np.empty(len(peaks), dtype=PEAK_DTYPE)
        for name in PEAK_DTYPE.names:
            result[name] = peaks[name]
        return result

    return peaks_to_array(list(peaks))
