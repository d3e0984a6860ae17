"""Tests for component computation and CSV output."""

import numpy as np
import pytest

from address_clustering.components.analyze import (
    compute_components,
    dense_labels,
    read_assignment_csv,
    write_assignment_csv,
)
from address_clustering.components.types import ComponentAssignment


def chunks(*pairs_lists: list[tuple[int, int]]) -> list[np.ndarray]:
    return [np.array(pairs, dtype=np.int32).reshape(-1, 2) for pairs in pairs_lists]


class TestComputeComponents:
    """Test cases for compute_components."""

    def test_dense_labels_follow_smallest_node(self) -> None:
        assignment = compute_components(6, chunks([(4, 5), (1, 3)], [(3, 5)]))

        assert assignment.labels.tolist() == [0, 1, 2, 1, 1, 1]
        assert assignment.num_components == 3
        assert assignment.component_sizes().tolist() == [1, 4, 1]

    def test_isolated_nodes_are_own_components(self) -> None:
        assignment = compute_components(3, [])

        assert assignment.labels.tolist() == [0, 1, 2]
        assert assignment.num_components == 3

    def test_raw_labels_induce_same_partition(self) -> None:
        edge_chunks = chunks([(0, 2), (2, 4)])
        dense = compute_components(5, edge_chunks)
        raw = compute_components(5, edge_chunks, dense=False)

        assert raw.num_components == dense.num_components == 3
        for a in range(5):
            for b in range(5):
                same_raw = raw.labels[a] == raw.labels[b]
                same_dense = dense.labels[a] == dense.labels[b]
                assert same_raw == same_dense

    def test_repeated_runs_are_identical(self) -> None:
        edge_chunks = chunks([(7, 1), (2, 9), (1, 2), (4, 5)])
        first = compute_components(10, edge_chunks)
        second = compute_components(10, [chunk[::-1] for chunk in edge_chunks])

        assert np.array_equal(first.labels, second.labels)

    def test_no_nodes(self) -> None:
        assignment = compute_components(0, [])
        assert assignment.num_nodes == 0
        assert assignment.num_components == 0


def test_dense_labels_relabels_representatives() -> None:
    labels, count = dense_labels(np.array([7, 7, 2, 7, 2, 5], dtype=np.int32))
    assert labels.tolist() == [0, 0, 1, 0, 1, 2]
    assert count == 3


class TestAssignmentCsv:
    """Test cases for writing and reading the clustering CSV."""

    def test_writes_header_and_rows(self, tmp_path) -> None:
        path = tmp_path / "clusters.csv"
        assignment = ComponentAssignment(np.array([0, 0, 1]), 2)
        write_assignment_csv(str(path), assignment)

        assert path.read_text() == "node_id,comp_id\n0,0\n1,0\n2,1\n"

    def test_without_header_and_chunked(self, tmp_path) -> None:
        path = tmp_path / "clusters.csv"
        assignment = ComponentAssignment(np.array([0, 1, 1, 0, 2]), 3)
        write_assignment_csv(str(path), assignment, header=False, chunk_rows=2)

        assert path.read_text() == "0,0\n1,1\n2,1\n3,0\n4,2\n"

    def test_read_back(self, tmp_path) -> None:
        path = tmp_path / "clusters.csv"
        write_assignment_csv(str(path), ComponentAssignment(np.array([3, 1, 3]), 2))

        assert read_assignment_csv(str(path)).tolist() == [3, 1, 3]

    def test_read_rejects_gaps(self, tmp_path) -> None:
        path = tmp_path / "clusters.csv"
        path.write_text("node_id,comp_id\n0,0\n2,0\n")

        with pytest.raises(ValueError, match="expected node id 1"):
            read_assignment_csv(str(path))
