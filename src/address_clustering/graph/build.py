"""Auxiliary graph construction from transactions."""

from collections.abc import Iterable

import numpy as np

from address_clustering.errors import GraphCapacityError
from address_clustering.graph.index import AddressIndex
from address_clustering.graph.types import (
    EDGE_COMPACT_SIZE,
    EDGE_FLUSH_SIZE,
    MAX_INT32,
    AuxiliaryGraph,
    BuildStats,
    NodeId,
    Transaction,
)

_LOW_MASK = 0xFFFFFFFF


class EdgeAccumulator:
    """
    Collects undirected edges and deduplicates them by sort + unique.

    Each edge is normalized to (min, max) and packed into one 64-bit key,
    so sorting the keys orders edges by (u, v). Keys go to a plain list
    first, then into numpy chunks that are merged with np.unique whenever
    the buffered total doubles.
    """

    def __init__(self, flush_size: int = EDGE_FLUSH_SIZE, compact_size: int = EDGE_COMPACT_SIZE):
        self._flush_size = flush_size
        self._compact_at = compact_size
        self._compact_size = compact_size
        self._pending: list[int] = []
        self._chunks: list[np.ndarray] = []
        self._buffered = 0
        self.added = 0

    def add(self, u: NodeId, v: NodeId) -> None:
        if u == v:
            return
        if u > v:
            u, v = v, u
        self._pending.append((u << 32) | v)
        self.added += 1
        if len(self._pending) >= self._flush_size:
            self._flush()

    def _flush(self) -> None:
        if self._pending:
            self._chunks.append(np.array(self._pending, dtype=np.int64))
            self._buffered += len(self._pending)
            self._pending = []
        if self._buffered >= self._compact_at:
            self._compact()

    def _compact(self) -> None:
        if self._chunks:
            merged = np.unique(np.concatenate(self._chunks))
        else:
            merged = np.empty(0, dtype=np.int64)
        self._chunks = [merged]
        self._buffered = len(merged)
        # Next compaction once the buffer has doubled again.
        self._compact_at = max(self._compact_size, 2 * self._buffered)

    def unique_edges(self) -> np.ndarray:
        """Return the sorted, deduplicated edges as an (M, 2) int32 array."""
        self._flush()
        self._compact()
        keys = self._chunks[0]
        edges = np.empty((len(keys), 2), dtype=np.int32)
        edges[:, 0] = keys >> 32
        edges[:, 1] = keys & _LOW_MASK
        return edges


class GraphBuilder:
    """
    Streams transactions into an address index and an edge set.

    Inputs of one transaction are joined in a star: every later distinct
    input links to the first input of that transaction.
    """

    def __init__(self, index: AddressIndex | None = None, stats: BuildStats | None = None):
        self.index = index if index is not None else AddressIndex()
        self.stats = stats if stats is not None else BuildStats()
        self._edges = EdgeAccumulator()

    def add_transaction(self, transaction: Transaction) -> None:
        index = self.index
        stats = self.stats
        stats.transactions += 1
        stats.input_addresses += len(transaction.inputs)
        stats.output_addresses += len(transaction.outputs)

        hub: NodeId | None = None
        for address in dict.fromkeys(transaction.inputs):
            node_id = index.lookup_or_insert(address)
            if hub is None:
                hub = node_id
            else:
                self._edges.add(hub, node_id)

        for address in transaction.outputs:
            index.lookup_or_insert(address)

    def add_transactions(self, transactions: Iterable[Transaction]) -> None:
        for transaction in transactions:
            self.add_transaction(transaction)

    def build(self) -> AuxiliaryGraph:
        edges = self._edges.unique_edges()
        if len(edges) > MAX_INT32:
            raise GraphCapacityError(f"{len(edges)} unique edges exceed the int32 edge count field")

        self.stats.candidate_edges = self._edges.added
        self.stats.num_nodes = len(self.index)
        self.stats.num_edges = len(edges)
        return AuxiliaryGraph(len(self.index), edges)


def build_graph(
    transactions: Iterable[Transaction],
    index: AddressIndex | None = None,
) -> AuxiliaryGraph:
    """Build the auxiliary graph for a sequence of transactions."""
    builder = GraphBuilder(index)
    builder.add_transactions(transactions)
    return builder.build()
