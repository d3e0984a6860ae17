"""Command-line interface for the builder and analyzer."""

import argparse
import logging
import sys
from collections.abc import Sequence

from address_clustering.errors import ClusteringError
from address_clustering.pipeline.analyzer import main_analyze
from address_clustering.pipeline.builder import main_build

logger = logging.getLogger(__name__)


def configure_logging(level: int = logging.INFO) -> None:
    """Configure logging to write to stderr."""
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Logging level (default: INFO)",
    )

    parser = argparse.ArgumentParser(
        prog="address-clustering",
        description="Cluster addresses with the multi-input heuristic.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    builder = commands.add_parser(
        "builder",
        parents=[common],
        help="Build the auxiliary graph from a transaction log.",
    )
    builder.add_argument(
        "input_file",
        help="Path to the transaction log (<metadata>:<inputs>:<outputs> per line)",
    )
    builder.add_argument("output_file", help="Path of the binary graph file to write")
    builder.add_argument(
        "--address-map",
        metavar="PATH",
        help="Also write an address,node_id CSV for correlating node ids with addresses",
    )

    analyzer = commands.add_parser(
        "analyzer",
        parents=[common],
        help="Compute the connected components of an auxiliary graph.",
    )
    analyzer.add_argument("input_file", help="Path to the binary graph file")
    analyzer.add_argument("output_file", help="Path of the node_id,component_id CSV to write")
    analyzer.add_argument(
        "--num-nodes",
        type=positive_int,
        help="Total node count to use instead of the header's (must not be smaller)",
    )
    analyzer.add_argument(
        "--no-header",
        action="store_true",
        help="Do not write the node_id,comp_id header line",
    )
    analyzer.add_argument(
        "--raw-labels",
        action="store_true",
        help="Write union-find representatives instead of dense component ids",
    )

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    # Configure logging based on --log-level
    configure_logging(getattr(logging, args.log_level))

    try:
        if args.command == "builder":
            main_build(args.input_file, args.output_file, args.address_map)
        else:
            main_analyze(
                args.input_file,
                args.output_file,
                num_nodes=args.num_nodes,
                header=not args.no_header,
                dense=not args.raw_labels,
            )
    except (ClusteringError, OSError, ValueError) as exc:
        logger.error("%s failed: %s", args.command, exc)
        return 1

    return 0


def builder_main() -> int:
    """Console script: builder <input_file> <output_file>."""
    return main(["builder", *sys.argv[1:]])


def analyzer_main() -> int:
    """Console script: analyzer <input_file> <output_file>."""
    return main(["analyzer", *sys.argv[1:]])


if __name__ == "__main__":
    sys.exit(main())
