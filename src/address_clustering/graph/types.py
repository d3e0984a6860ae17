"""Shared type definitions and constants for graph construction."""

from dataclasses import dataclass, field
from typing import TypeAlias

import numpy as np

Address: TypeAlias = int
NodeId: TypeAlias = int

# 1MB buffer for efficient I/O.
BUFFER_SIZE = 1024 * 1024

# Pending packed edge keys held in a plain list before moving into numpy.
EDGE_FLUSH_SIZE = 1 << 20

# Compact flushed chunks once this many keys are buffered.
EDGE_COMPACT_SIZE = 1 << 25

# Edges per chunk when streaming a graph file.
EDGE_CHUNK_SIZE = 1 << 22

# Log progress every N transaction lines.
PROGRESS_EVERY = 1_000_000

# Largest value of a 4-byte signed field.
MAX_INT32 = 2**31 - 1


@dataclass(frozen=True, slots=True)
class Transaction:
    """Input and output addresses of one transaction, in file order."""

    inputs: tuple[Address, ...]
    outputs: tuple[Address, ...]


@dataclass(frozen=True, slots=True)
class GraphHeader:
    num_nodes: int
    num_edges: int


@dataclass(frozen=True)
class AuxiliaryGraph:
    """
    Node count plus the deduplicated edge list.

    `edges` is an (M, 2) int32 array with edges[i, 0] < edges[i, 1].
    """

    num_nodes: int
    edges: np.ndarray = field(repr=False)

    @property
    def num_edges(self) -> int:
        return len(self.edges)

    @property
    def header(self) -> GraphHeader:
        return GraphHeader(self.num_nodes, self.num_edges)


@dataclass
class BuildStats:
    """Statistics from one builder run."""

    lines_read: int = 0
    blank_lines: int = 0
    transactions: int = 0
    input_addresses: int = 0
    output_addresses: int = 0
    candidate_edges: int = 0
    num_nodes: int = 0
    num_edges: int = 0
