"""Connected components of the auxiliary graph and their CSV output."""

from collections.abc import Iterable

import numpy as np

from address_clustering.atomic import atomic_output
from address_clustering.components.types import CSV_CHUNK_ROWS, CSV_HEADER, ComponentAssignment
from address_clustering.components.union_find import DisjointSet
from address_clustering.graph.types import BUFFER_SIZE


def dense_labels(roots: np.ndarray) -> tuple[np.ndarray, int]:
    """
    Relabel representatives to 0..C-1.

    Components are numbered in order of their smallest node id, so the
    labels depend only on the partition and not on union order.
    """
    if len(roots) == 0:
        return np.empty(0, dtype=np.int64), 0

    _, first_index, inverse = np.unique(roots, return_index=True, return_inverse=True)
    order = np.argsort(first_index)
    rank = np.empty_like(order)
    rank[order] = np.arange(len(order))
    return rank[inverse.ravel()], len(order)


def compute_components(
    num_nodes: int,
    edge_chunks: Iterable[np.ndarray],
    dense: bool = True,
) -> ComponentAssignment:
    """
    Partition node ids 0..num_nodes-1 into connected components.

    With dense=False the labels are the raw union-find representatives,
    which are only meaningful as an equivalence relation.
    """
    forest = DisjointSet(num_nodes)
    for chunk in edge_chunks:
        forest.union_edges(chunk)

    roots = forest.roots()
    if dense:
        labels, num_components = dense_labels(roots)
    else:
        labels, num_components = roots, forest.count
    return ComponentAssignment(labels, num_components)


def write_assignment_csv(
    path: str,
    assignment: ComponentAssignment,
    header: bool = True,
    chunk_rows: int = CSV_CHUNK_ROWS,
) -> None:
    """Write one `node_id,component_id` row per node, in node id order."""
    labels = assignment.labels
    with atomic_output(path, "w", buffering=BUFFER_SIZE, encoding="ascii", newline="") as handle:
        if header:
            handle.write(CSV_HEADER + "\n")
        for start in range(0, len(labels), chunk_rows):
            stop = min(start + chunk_rows, len(labels))
            rows = np.column_stack((np.arange(start, stop), labels[start:stop]))
            np.savetxt(handle, rows, fmt="%d", delimiter=",")


def read_assignment_csv(path: str) -> np.ndarray:
    """Read a clustering CSV back into a label array indexed by node id."""
    labels: list[int] = []
    with open(path, encoding="ascii") as handle:
        for line_number, line in enumerate(handle, start=1):
            line = line.strip()
            if not line or (line_number == 1 and line == CSV_HEADER):
                continue
            node_id, comp_id = line.split(",")
            if int(node_id) != len(labels):
                raise ValueError(f"{path}:{line_number}: expected node id {len(labels)}, got {node_id}")
            labels.append(int(comp_id))
    return np.array(labels, dtype=np.int64)
