"""Tests for isotope path enumeration."""

import numpy as np

from alphaenvelope.features.candidate_graph import build_candidate_graph
from alphaenvelope.features.path_search import find_all_paths


def _paths(indptr, indices, claimed, root):
    return sorted(tuple(int(x) for x in path) for path in find_all_paths(indptr, indices, claimed, root))


class TestFindAllPaths:
    """Test maximal path enumeration on hand-written graphs."""

    def test_linear_chain(self, make_csr):
        indptr, indices = make_csr([[1], [2], []])
        claimed = np.zeros(3, dtype=np.bool_)
        assert _paths(indptr, indices, claimed, 0) == [(0, 1, 2)]

    def test_isolated_root(self, make_csr):
        indptr, indices = make_csr([[], []])
        claimed = np.zeros(2, dtype=np.bool_)
        assert _paths(indptr, indices, claimed, 1) == [(1,)]

    def test_branching_returns_every_maximal_path(self, make_csr):
        # 0 -> {1, 2}, 1 -> 3
        indptr, indices = make_csr([[1, 2], [3], [], []])
        claimed = np.zeros(4, dtype=np.bool_)
        assert _paths(indptr, indices, claimed, 0) == [(0, 1, 3), (0, 2)]

    def test_diamond(self, make_csr):
        # 0 -> {1, 2} -> 3
        indptr, indices = make_csr([[1, 2], [3], [3], []])
        claimed = np.zeros(4, dtype=np.bool_)
        assert _paths(indptr, indices, claimed, 0) == [(0, 1, 3), (0, 2, 3)]

    def test_claimed_successor_skipped(self, make_csr):
        indptr, indices = make_csr([[1, 2], [3], [], []])
        claimed = np.array([False, True, False, False])
        assert _paths(indptr, indices, claimed, 0) == [(0, 2)]

    def test_claimed_tail_ends_path(self, make_csr):
        indptr, indices = make_csr([[1], [2], []])
        claimed = np.array([False, False, True])
        assert _paths(indptr, indices, claimed, 0) == [(0, 1)]

    def test_claimed_root(self, make_csr):
        indptr, indices = make_csr([[1], []])
        claimed = np.array([True, False])
        assert _paths(indptr, indices, claimed, 0) == []

    def test_paths_ascending(self, make_csr):
        indptr, indices = make_csr([[1, 2, 3], [2, 3], [3], []])
        claimed = np.zeros(4, dtype=np.bool_)
        paths = _paths(indptr, indices, claimed, 0)

        # 0-1-2-3, 0-1-3, 0-2-3, 0-3
        assert len(paths) == 4
        for path in paths:
            assert list(path) == sorted(path)
            assert path[-1] == 3


class TestGraphPaths:
    """Test paths on graphs built from peaks."""

    def test_envelope_path(self, three_peak_envelope):
        graph = build_candidate_graph(three_peak_envelope, 1)
        claimed = np.zeros(3, dtype=np.bool_)

        paths = graph.paths_from(0, claimed)
        assert len(paths) == 1
        np.testing.assert_array_equal(paths[0], [0, 1, 2])

    def test_charge_zero_single_node(self, three_peak_envelope):
        graph = build_candidate_graph(three_peak_envelope, 0)
        claimed = np.zeros(3, dtype=np.bool_)

        paths = graph.paths_from(0, claimed)
        assert len(paths) == 1
        assert len(paths[0]) == 1
