"""Pytest configuration for AlphaEnvelope tests.

Provides peak factories for building small synthetic isotope envelopes and
a helper for hand-written candidate graphs.
"""

import numpy as np
import pytest

from alphaenvelope.constants import CARBON_ISOTOPE_SPACING
from alphaenvelope.features.peaks import PEAK_DTYPE


def _make_peak_array(mzs, heights, rts=60.0, sigma_mz=0.01, sigma_rt=1.0, volumes=None, ids=None):
    n = len(mzs)
    peaks = np.zeros(n, dtype=PEAK_DTYPE)
    peaks['id'] = np.arange(n) if ids is None else ids
    peaks['fitted_mz'] = mzs
    peaks['fitted_rt'] = rts
    peaks['fitted_height'] = heights
    if volumes is None:
        peaks['fitted_volume'] = np.asarray(heights, dtype=np.float64) * 10.0
    else:
        peaks['fitted_volume'] = volumes
    peaks['sigma_mz'] = sigma_mz
    peaks['sigma_rt'] = sigma_rt
    peaks['rt_delta'] = 0.5
    return peaks


def _envelope_mzs(mono_mz, charge, n_isotopes, spacing=CARBON_ISOTOPE_SPACING):
    return [mono_mz + i * spacing / charge for i in range(n_isotopes)]


def _make_csr(adjacency):
    indptr = np.zeros(len(adjacency) + 1, dtype=np.int64)
    indptr[1:] = np.cumsum([len(successors) for successors in adjacency])
    indices = np.array(
        [node for successors in adjacency for node in successors], dtype=np.int64
    )
    return indptr, indices


@pytest.fixture
def make_peaks():
    """Factory for PEAK_DTYPE arrays.

    Scalars for rts/sigma_mz/sigma_rt are broadcast to every peak. Volumes
    default to 10x the height, ids to the row index.
    """
    return _make_peak_array


@pytest.fixture
def envelope_mzs():
    """Factory for the m/z values of an isotope series."""
    return _envelope_mzs


@pytest.fixture
def make_csr():
    """Factory for CSR (indptr, indices) arrays from successor lists."""
    return _make_csr


@pytest.fixture
def three_peak_envelope():
    """z=1 envelope at 500 m/z: heights 100, 40, 10, equal RT."""
    return _make_peak_array(
        [500.0, 501.0033, 502.0066],
        [100.0, 40.0, 10.0],
        rts=60.0,
        sigma_mz=0.01,
        sigma_rt=1.0,
    )


# Random seed for reproducibility
@pytest.fixture(scope="session", autouse=True)
def set_random_seed():
    """Set random seed for reproducible tests."""
    np.random.seed(42)
