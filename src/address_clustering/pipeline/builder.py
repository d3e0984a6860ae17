import logging
import time
from pathlib import Path

from address_clustering.graph.build import GraphBuilder
from address_clustering.graph.codec import write_graph
from address_clustering.graph.index import write_address_map
from address_clustering.graph.parse import read_transactions
from address_clustering.graph.types import PROGRESS_EVERY, BuildStats

logger = logging.getLogger(__name__)


def run_builder(
    input_path: str,
    output_path: str,
    address_map_path: str | None = None,
) -> BuildStats:
    """
    Build the auxiliary graph of a transaction log and write it to disk.

    Pass 1 streams the transactions into the address index and edge buffer.
    Pass 2 sorts and deduplicates the edges and writes the graph file. The
    optional address map is written before the graph file and removed
    again if the graph write fails, so a failed run leaves neither behind.
    """
    total_start = time.perf_counter()
    logger.info(
        "Starting builder: input=%s, output=%s%s",
        Path(input_path).name,
        Path(output_path).name,
        f", address_map={Path(address_map_path).name}" if address_map_path else "",
    )

    stats = BuildStats()
    builder = GraphBuilder(stats=stats)

    # Pass 1: assign node ids and collect candidate edges.
    t1_start = time.perf_counter()
    for transaction in read_transactions(input_path, stats):
        builder.add_transaction(transaction)
        if stats.transactions % PROGRESS_EVERY == 0:
            logger.debug(
                "Processed %d transactions, %d addresses so far",
                stats.transactions,
                len(builder.index),
            )
    t1 = time.perf_counter() - t1_start

    if stats.blank_lines > 0:
        logger.warning(
            "Pass 1: %d blank lines skipped (read=%d, transactions=%d)",
            stats.blank_lines,
            stats.lines_read,
            stats.transactions,
        )
    logger.info(
        "Pass 1 done: %d transactions, %d addresses in %.2fs",
        stats.transactions,
        len(builder.index),
        t1,
    )

    # Pass 2: deduplicate edges and serialize.
    t2_start = time.perf_counter()
    graph = builder.build()
    logger.debug("Edges deduplicated: %d candidates -> %d unique", stats.candidate_edges, stats.num_edges)

    if address_map_path:
        write_address_map(address_map_path, builder.index)
    try:
        size = write_graph(output_path, graph)
    except BaseException:
        # No address map without its graph file.
        if address_map_path:
            Path(address_map_path).unlink(missing_ok=True)
        raise
    t2 = time.perf_counter() - t2_start
    logger.info("Pass 2 done: %d edges, %d bytes written in %.2fs", graph.num_edges, size, t2)

    total_time = time.perf_counter() - total_start
    logger.info(
        "Result: %d nodes, %d edges (total %.2fs)",
        stats.num_nodes,
        stats.num_edges,
        total_time,
    )
    return stats


def main_build(input_path: str, output_path: str, address_map_path: str | None = None) -> None:
    """Main entry point that prints the graph summary to stdout."""
    start = time.perf_counter()
    stats = run_builder(input_path, output_path, address_map_path)
    elapsed = time.perf_counter() - start
    print(f"Nodes:\t{stats.num_nodes}")
    print(f"Edges:\t{stats.num_edges}")
    print(f"Time:\t{elapsed:.3f} s")
