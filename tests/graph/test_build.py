"""Tests for graph construction helpers."""

import numpy as np

from address_clustering.graph.build import EdgeAccumulator, GraphBuilder, build_graph
from address_clustering.graph.index import AddressIndex
from address_clustering.graph.types import Transaction


def edge_set(graph) -> set[tuple[int, int]]:
    return {tuple(edge) for edge in graph.edges.tolist()}


class TestGraphBuilder:
    """Test cases for GraphBuilder and build_graph."""

    def test_star_links_every_input_to_first_input(self) -> None:
        graph = build_graph([Transaction(inputs=(10, 20, 30, 40), outputs=())])

        assert graph.num_nodes == 4
        assert edge_set(graph) == {(0, 1), (0, 2), (0, 3)}

    def test_single_input_produces_no_edge(self) -> None:
        graph = build_graph([Transaction(inputs=(10,), outputs=(20,))])

        assert graph.num_nodes == 2
        assert graph.num_edges == 0
        assert graph.edges.shape == (0, 2)

    def test_repeated_inputs_in_one_transaction_collapse(self) -> None:
        graph = build_graph([Transaction(inputs=(7, 7, 7), outputs=())])

        assert graph.num_nodes == 1
        assert graph.num_edges == 0

    def test_duplicates_within_transaction_do_not_change_hub(self) -> None:
        graph = build_graph([Transaction(inputs=(5, 6, 5, 7), outputs=())])

        assert edge_set(graph) == {(0, 1), (0, 2)}

    def test_outputs_become_nodes_after_inputs(self) -> None:
        index = AddressIndex()
        graph = build_graph([Transaction(inputs=(1, 2), outputs=(3, 1, 4))], index)

        assert graph.num_nodes == 4
        assert [index.get(address) for address in (1, 2, 3, 4)] == [0, 1, 2, 3]

    def test_deduplicates_edges_across_transactions(self) -> None:
        transactions = [
            Transaction(inputs=(1, 2), outputs=()),
            Transaction(inputs=(2, 1), outputs=()),
            Transaction(inputs=(1, 2, 3), outputs=()),
        ]
        graph = build_graph(transactions)

        # (1,2) appears three times; (2,1) normalizes to the same pair.
        assert edge_set(graph) == {(0, 1), (0, 2)}
        assert graph.num_edges == 2

    def test_edges_are_normalized_and_sorted(self) -> None:
        transactions = [
            Transaction(inputs=(), outputs=(100, 200, 300)),
            Transaction(inputs=(300, 100), outputs=()),
            Transaction(inputs=(200, 100), outputs=()),
        ]
        graph = build_graph(transactions)

        edges = graph.edges.tolist()
        assert edges == sorted(edges)
        assert all(u < v for u, v in edges)
        assert edges == [[0, 1], [0, 2]]

    def test_ids_are_reproducible(self) -> None:
        transactions = [
            Transaction(inputs=(9, 4), outputs=(2,)),
            Transaction(inputs=(2, 8), outputs=(9, 11)),
        ]
        first = build_graph(transactions)
        second = build_graph(transactions)

        assert first.num_nodes == second.num_nodes == 5
        assert np.array_equal(first.edges, second.edges)

    def test_stats_are_collected(self) -> None:
        builder = GraphBuilder()
        builder.add_transactions(
            [
                Transaction(inputs=(1, 2, 3), outputs=(4,)),
                Transaction(inputs=(1, 2), outputs=(4, 5)),
            ]
        )
        builder.build()

        stats = builder.stats
        assert stats.transactions == 2
        assert stats.input_addresses == 5
        assert stats.output_addresses == 3
        assert stats.candidate_edges == 3
        assert stats.num_edges == 2
        assert stats.num_nodes == 5


class TestEdgeAccumulator:
    """Test cases for EdgeAccumulator."""

    def test_empty(self) -> None:
        edges = EdgeAccumulator().unique_edges()
        assert edges.shape == (0, 2)
        assert edges.dtype == np.int32

    def test_ignores_self_loops(self) -> None:
        accumulator = EdgeAccumulator()
        accumulator.add(3, 3)
        assert accumulator.unique_edges().shape == (0, 2)
        assert accumulator.added == 0

    def test_deduplicates_across_flushes_and_compactions(self) -> None:
        accumulator = EdgeAccumulator(flush_size=3, compact_size=5)
        pairs = [(5, 1), (1, 5), (2, 3), (0, 9), (3, 2), (1, 5), (7, 8), (9, 0), (4, 6)] * 3
        for u, v in pairs:
            accumulator.add(u, v)

        edges = accumulator.unique_edges().tolist()
        assert edges == [[0, 9], [1, 5], [2, 3], [4, 6], [7, 8]]
        assert accumulator.added == len(pairs)

    def test_large_node_ids_survive_packing(self) -> None:
        accumulator = EdgeAccumulator()
        accumulator.add(2**31 - 1, 2**31 - 2)
        accumulator.add(0, 2**31 - 1)

        assert accumulator.unique_edges().tolist() == [
            [0, 2**31 - 1],
            [2**31 - 2, 2**31 - 1],
        ]
