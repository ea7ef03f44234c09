"""
Isotope path enumeration over candidate graphs.

Explicit-stack depth-first search returning every maximal path of unclaimed
nodes from a root. Branches are all kept: a root with two possible M+1 peaks
yields (at least) two paths.
"""

import numpy as np
from numba import njit, types
from numba.typed import List


path_type = types.int64[::1]


@njit
def find_all_paths(
    indptr: np.ndarray,
    indices: np.ndarray,
    claimed: np.ndarray,
    root: int
) -> List:
    """Enumerate all maximal unclaimed paths starting at root.

    A path ends when its last node has no unclaimed successor. A path whose
    last node is itself claimed is dropped.

    Args:
        indptr: CSR row pointer of the candidate graph
        indices: CSR successor indices of the candidate graph
        claimed: Boolean flag per node, True if consumed by a feature
        root: Start node

    Returns:
        Typed list of int64 arrays (node indices in ascending m/z order)
    """
    paths = List.empty_list(path_type)
    stack = List.empty_list(path_type)

    start = np.empty(1, dtype=np.int64)
    start[0] = root
    stack.append(start)

    while len(stack) > 0:
        path = stack.pop()
        last = path[len(path) - 1]
        if claimed[last]:
            continue

        finished = True
        for e in range(indptr[last], indptr[last + 1]):
            node = indices[e]
            if claimed[node]:
                continue
            finished = False
            extended = np.empty(len(path) + 1, dtype=np.int64)
            extended[:len(path)] = path
            extended[len(path)] = node
            stack.append(extended)

        if finished:
            paths.append(path)

    return paths
