import logging
import time
from pathlib import Path

from address_clustering.components.analyze import compute_components, write_assignment_csv
from address_clustering.components.types import AnalysisStats
from address_clustering.graph.codec import iter_edge_chunks, read_header

logger = logging.getLogger(__name__)


def run_analyzer(
    input_path: str,
    output_path: str,
    num_nodes: int | None = None,
    header: bool = True,
    dense: bool = True,
) -> AnalysisStats:
    """
    Compute the connected components of a graph file and write them as CSV.

    The header is validated against the file size before any edge is read,
    and every edge chunk is range-checked before it is merged, so a corrupt
    graph aborts the run before the CSV is created.

    `num_nodes` widens the node range beyond the header's count; it may not
    shrink it.
    """
    total_start = time.perf_counter()
    logger.info(
        "Starting analyzer: input=%s, output=%s",
        Path(input_path).name,
        Path(output_path).name,
    )

    graph_header = read_header(input_path)
    total_nodes = graph_header.num_nodes
    if num_nodes is not None:
        if num_nodes < graph_header.num_nodes:
            raise ValueError(
                f"num_nodes={num_nodes} is smaller than the {graph_header.num_nodes} nodes in {input_path}"
            )
        total_nodes = num_nodes
    logger.debug("Header: %d nodes, %d edges", graph_header.num_nodes, graph_header.num_edges)

    t1_start = time.perf_counter()
    assignment = compute_components(
        total_nodes,
        iter_edge_chunks(input_path, graph_header),
        dense=dense,
    )
    t1 = time.perf_counter() - t1_start
    logger.info("Union-find done: %d components in %.2fs", assignment.num_components, t1)

    t2_start = time.perf_counter()
    write_assignment_csv(output_path, assignment, header=header)
    t2 = time.perf_counter() - t2_start
    logger.info("CSV written: %d rows in %.2fs", assignment.num_nodes, t2)

    sizes = assignment.component_sizes()
    stats = AnalysisStats(
        num_nodes=total_nodes,
        num_edges=graph_header.num_edges,
        num_components=assignment.num_components,
        largest_component=int(sizes.max()) if len(sizes) else 0,
    )

    total_time = time.perf_counter() - total_start
    logger.info(
        "Result: %d components, largest has %d nodes (total %.2fs)",
        stats.num_components,
        stats.largest_component,
        total_time,
    )
    return stats


def main_analyze(
    input_path: str,
    output_path: str,
    num_nodes: int | None = None,
    header: bool = True,
    dense: bool = True,
) -> None:
    """Main entry point that prints the clustering summary to stdout."""
    start = time.perf_counter()
    stats = run_analyzer(input_path, output_path, num_nodes=num_nodes, header=header, dense=dense)
    elapsed = time.perf_counter() - start
    print(f"Nodes:\t\t{stats.num_nodes}")
    print(f"Edges:\t\t{stats.num_edges}")
    print(f"Components:\t{stats.num_components}")
    print(f"Time:\t\t{elapsed:.3f} s")
