"""
Binary serialization of the auxiliary graph.

Format version 1. Every integer is a 4-byte signed big-endian value:

    offset 0:  N  (node count)
    offset 4:  M  (edge count)
    offset 8:  M records of (u, v), 8 bytes each

The file size must be exactly 8 + 8 * M. A file written with the other byte
order fails that check whenever it has edges, because its edge count decodes
to a different value. With M = 0 the swapped count is still 0, so such a
file passes and its node count is read byte-swapped; the layout carries no
magic number to tell the two apart.
"""

import os
import struct
from collections.abc import Iterator

import numpy as np

from address_clustering.atomic import atomic_output
from address_clustering.errors import CorruptionError, GraphCapacityError
from address_clustering.graph.types import (
    BUFFER_SIZE,
    EDGE_CHUNK_SIZE,
    MAX_INT32,
    AuxiliaryGraph,
    GraphHeader,
)

GRAPH_FORMAT_VERSION = 1

HEADER = struct.Struct(">ii")
HEADER_SIZE = HEADER.size
EDGE_DTYPE = np.dtype(">i4")
EDGE_RECORD_SIZE = 2 * EDGE_DTYPE.itemsize

# Environment variable to override the number of edges per I/O chunk.
AC_EDGE_CHUNK_ENV = "AC_EDGE_CHUNK"


def get_edge_chunk_size() -> int:
    """Edges per chunk, from AC_EDGE_CHUNK if set, else EDGE_CHUNK_SIZE."""
    override = os.environ.get(AC_EDGE_CHUNK_ENV, "")
    if not override:
        return EDGE_CHUNK_SIZE
    chunk_size = int(override)
    if chunk_size <= 0:
        raise ValueError(f"{AC_EDGE_CHUNK_ENV} must be positive, got {override}")
    return chunk_size


def graph_file_size(num_edges: int) -> int:
    return HEADER_SIZE + EDGE_RECORD_SIZE * num_edges


def write_graph(path: str, graph: AuxiliaryGraph, chunk_size: int | None = None) -> int:
    """
    Write `graph` to `path` and return the number of bytes written.

    The header is written as a placeholder, the edges are streamed in
    chunks, then the header is patched with the counts actually written.
    The file only appears at `path` once all of that succeeded.
    """
    if graph.num_nodes > MAX_INT32:
        raise GraphCapacityError(f"{graph.num_nodes} nodes exceed the int32 node count field")
    if graph.edges.ndim != 2 or graph.edges.shape[1] != 2:
        raise ValueError(f"edges must have shape (M, 2), got {graph.edges.shape}")

    chunk_size = chunk_size or get_edge_chunk_size()
    with atomic_output(path, buffering=BUFFER_SIZE) as handle:
        handle.write(HEADER.pack(0, 0))
        written = 0
        for start in range(0, graph.num_edges, chunk_size):
            block = graph.edges[start : start + chunk_size].astype(EDGE_DTYPE)
            handle.write(block.tobytes())
            written += len(block)

        handle.seek(0)
        handle.write(HEADER.pack(graph.num_nodes, written))
        handle.seek(0, os.SEEK_END)

    return graph_file_size(written)


def read_header(path: str) -> GraphHeader:
    """Read the counts and check them against the file size."""
    size = os.path.getsize(path)
    if size < HEADER_SIZE:
        raise CorruptionError(path, size, f"file is {size} bytes, shorter than the header")

    with open(path, "rb") as handle:
        num_nodes, num_edges = HEADER.unpack(handle.read(HEADER_SIZE))

    if num_nodes < 0:
        raise CorruptionError(path, 0, f"negative node count {num_nodes}")
    if num_edges < 0:
        raise CorruptionError(path, 4, f"negative edge count {num_edges}")

    expected = graph_file_size(num_edges)
    if size != expected:
        raise CorruptionError(
            path,
            4,
            f"header declares {num_edges} edges ({expected} bytes) but file has {size} bytes",
        )
    return GraphHeader(num_nodes, num_edges)


def _check_endpoints(path: str, block: np.ndarray, num_nodes: int, offset: int) -> None:
    bad = (block < 0) | (block >= num_nodes)
    if bad.any():
        position = int(np.flatnonzero(bad.ravel())[0])
        node_id = int(block.ravel()[position])
        raise CorruptionError(
            path,
            offset + position * EDGE_DTYPE.itemsize,
            f"node id {node_id} outside [0, {num_nodes})",
        )


def iter_edge_chunks(
    path: str,
    header: GraphHeader | None = None,
    chunk_size: int | None = None,
) -> Iterator[np.ndarray]:
    """
    Stream the edge list as (k, 2) native int32 arrays.

    Endpoints are range-checked against the header's node count before each
    chunk is yielded.
    """
    if header is None:
        header = read_header(path)
    chunk_size = chunk_size or get_edge_chunk_size()

    with open(path, "rb", buffering=BUFFER_SIZE) as handle:
        handle.seek(HEADER_SIZE)
        offset = HEADER_SIZE
        remaining = header.num_edges
        while remaining:
            count = min(chunk_size, remaining)
            raw = handle.read(count * EDGE_RECORD_SIZE)
            if len(raw) != count * EDGE_RECORD_SIZE:
                raise CorruptionError(path, offset + len(raw), "unexpected end of file")

            block = np.frombuffer(raw, dtype=EDGE_DTYPE).reshape(-1, 2).astype(np.int32)
            _check_endpoints(path, block, header.num_nodes, offset)
            yield block

            offset += len(raw)
            remaining -= count


def read_graph(path: str) -> AuxiliaryGraph:
    """Load a whole graph file into memory."""
    header = read_header(path)
    chunks = list(iter_edge_chunks(path, header))
    if chunks:
        edges = np.concatenate(chunks)
    else:
        edges = np.empty((0, 2), dtype=np.int32)
    return AuxiliaryGraph(header.num_nodes, edges)
