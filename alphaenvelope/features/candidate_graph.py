"""
Candidate isotope graphs, one per hypothesized charge state.

Each graph connects every m/z-sorted peak to the peaks that could be its next
isotope at that charge: m/z within ±sigma_mz of ``mz + spacing / charge`` and
RT within ±sigma_rt of the peak's own RT. Edges always point to higher
indices, so every graph is a DAG.

Graphs are stored in CSR form (``indptr``, ``indices``) over the single
m/z-sorted peak array. Whether a node has been consumed by a feature is not
stored here: the feature assembler owns one ``claimed`` flag per peak that is
shared by every charge-state graph.
"""

import numpy as np
import numba as nb
from numba import njit
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from ..constants import CARBON_ISOTOPE_SPACING
from .path_search import find_all_paths


@dataclass
class CandidateGraph:
    """Successor graph over m/z-sorted peaks for a single charge state."""

    charge_state: int
    peak_ids: np.ndarray   # Peak identifier of each node (m/z order)
    indptr: np.ndarray     # Node i owns indices[indptr[i]:indptr[i + 1]]
    indices: np.ndarray    # Successor node indices, ascending per node

    @property
    def n_nodes(self) -> int:
        return len(self.indptr) - 1

    @property
    def n_edges(self) -> int:
        return len(self.indices)

    def successors(self, node: int) -> np.ndarray:
        """Indices of the possible next isotopes of a node."""
        return self.indices[self.indptr[node]:self.indptr[node + 1]]

    def paths_from(self, root: int, claimed: np.ndarray) -> List[np.ndarray]:
        """All maximal unclaimed isotope paths starting at root."""
        return list(find_all_paths(self.indptr, self.indices, claimed, root))


@njit
def _scan_successors(
    i: int,
    mz: np.ndarray,
    rt: np.ndarray,
    sigma_mz: np.ndarray,
    sigma_rt: np.ndarray,
    mz_offset: float,
    out: np.ndarray,
    start: int,
    write: bool
) -> int:
    """Count (and optionally store) the successors of peak i.

    Relies on mz being sorted: the scan stops at the first peak past the
    upper m/z bound.

    Returns:
        Number of successors found
    """
    expected_mz = mz[i] + mz_offset
    min_mz = expected_mz - sigma_mz[i]
    max_mz = expected_mz + sigma_mz[i]
    min_rt = rt[i] - sigma_rt[i]
    max_rt = rt[i] + sigma_rt[i]

    count = 0
    for j in range(i + 1, len(mz)):
        if mz[j] > max_mz:
            break
        if mz[j] > min_mz and rt[j] > min_rt and rt[j] < max_rt:
            if write:
                out[start + count] = j
            count += 1
    return count


@njit(parallel=True)
def build_candidate_graph_numba(
    mz: np.ndarray,
    rt: np.ndarray,
    sigma_mz: np.ndarray,
    sigma_rt: np.ndarray,
    mz_offset: float
) -> Tuple[np.ndarray, np.ndarray]:
    """Build the CSR successor arrays for one isotope spacing.

    Two passes over the peaks (count, then fill), each parallel over peaks.
    Every peak writes only its own slice, so the passes are race free.

    Args:
        mz: Fitted m/z values (MUST BE SORTED)
        rt: Fitted retention times
        sigma_mz: m/z sigma per peak (half width of the m/z window)
        sigma_rt: RT sigma per peak (half width of the RT window)
        mz_offset: Expected m/z distance to the next isotope

    Returns:
        Tuple of (indptr, indices)
    """
    n_peaks = len(mz)
    dummy = np.empty(0, dtype=np.int64)

    counts = np.zeros(n_peaks, dtype=np.int64)
    for i in nb.prange(n_peaks):
        counts[i] = _scan_successors(
            i, mz, rt, sigma_mz, sigma_rt, mz_offset, dummy, 0, False
        )

    indptr = np.zeros(n_peaks + 1, dtype=np.int64)
    indptr[1:] = np.cumsum(counts)

    indices = np.empty(indptr[n_peaks], dtype=np.int64)
    for i in nb.prange(n_peaks):
        _scan_successors(
            i, mz, rt, sigma_mz, sigma_rt, mz_offset, indices, indptr[i], True
        )

    return indptr, indices


def build_candidate_graph(
    sorted_peaks: np.ndarray,
    charge_state: int,
    isotope_spacing: float = CARBON_ISOTOPE_SPACING
) -> CandidateGraph:
    """Build the candidate graph for a single charge state.

    Charge state 0 means "no charge" and produces a graph without edges.

    Args:
        sorted_peaks: PEAK_DTYPE array sorted by fitted_mz
        charge_state: Hypothesized charge
        isotope_spacing: Isotope mass spacing (Da)

    Returns:
        CandidateGraph for the charge state
    """
    n_peaks = len(sorted_peaks)
    peak_ids = np.ascontiguousarray(sorted_peaks['id'], dtype=np.int64)

    if charge_state == 0 or n_peaks == 0:
        return CandidateGraph(
            charge_state=charge_state,
            peak_ids=peak_ids,
            indptr=np.zeros(n_peaks + 1, dtype=np.int64),
            indices=np.empty(0, dtype=np.int64),
        )

    indptr, indices = build_candidate_graph_numba(
        np.ascontiguousarray(sorted_peaks['fitted_mz'], dtype=np.float64),
        np.ascontiguousarray(sorted_peaks['fitted_rt'], dtype=np.float64),
        np.ascontiguousarray(sorted_peaks['sigma_mz'], dtype=np.float64),
        np.ascontiguousarray(sorted_peaks['sigma_rt'], dtype=np.float64),
        isotope_spacing / charge_state,
    )

    return CandidateGraph(
        charge_state=charge_state,
        peak_ids=peak_ids,
        indptr=indptr,
        indices=indices,
    )


def build_candidate_graphs(
    sorted_peaks: np.ndarray,
    charge_states: Sequence[int],
    isotope_spacing: float = CARBON_ISOTOPE_SPACING
) -> List[CandidateGraph]:
    """Build one candidate graph per charge state, in the given order."""
    return [
        build_candidate_graph(sorted_peaks, charge, isotope_spacing)
        for charge in charge_states
    ]
