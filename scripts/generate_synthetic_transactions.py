#!/usr/bin/env python3
"""
Synthetic transaction log generator for builder/analyzer benchmarks.

Generates a newline-delimited `<metadata>:<inputs>:<outputs>` file. Addresses
are grouped into entities; every transaction spends from addresses of a
single entity, so the expected clustering has at most one component per
entity (fewer when an entity's spends never link all of its addresses).
"""

import argparse
import random
import sys

# Large buffer for efficient streaming writes
BUFFER_SIZE = 1024 * 1024  # 1MB


def format_items(addresses: list[int], rng: random.Random) -> str:
    """Render addresses as `address,value` items joined by semicolons."""
    return ";".join(f"{address},{rng.randint(1, 10**8)}" for address in addresses)


def generate_synthetic_dataset(
    output_path: str,
    num_transactions: int,
    num_entities: int,
    addresses_per_entity: int,
    max_inputs: int,
    max_outputs: int,
    seed: int,
) -> int:
    """
    Generate a synthetic transaction log.

    Streams output line-by-line to avoid memory issues.

    Args:
        output_path: Path to output file.
        num_transactions: Number of lines to write.
        num_entities: Number of simulated owners.
        addresses_per_entity: Addresses controlled by each owner.
        max_inputs: Upper bound on inputs per transaction.
        max_outputs: Upper bound on outputs per transaction.
        seed: Random seed for reproducibility.

    Returns:
        Total number of lines written.
    """
    rng = random.Random(seed)
    address_space = num_entities * addresses_per_entity
    total_lines = 0

    with open(output_path, "w", encoding="ascii", buffering=BUFFER_SIZE) as f:
        for tx_id in range(num_transactions):
            entity = rng.randrange(num_entities)
            first = entity * addresses_per_entity
            num_inputs = rng.randint(1, max_inputs)
            inputs = [first + rng.randrange(addresses_per_entity) for _ in range(num_inputs)]

            num_outputs = rng.randint(1, max_outputs)
            outputs = [rng.randrange(address_space) for _ in range(num_outputs)]

            f.write(f"{tx_id}:{format_items(inputs, rng)}:{format_items(outputs, rng)}\n")
            total_lines += 1

            # Progress indicator every 1M transactions
            if (tx_id + 1) % 1_000_000 == 0:
                print(f"  Generated {tx_id + 1}/{num_transactions} transactions...", file=sys.stderr)

    return total_lines


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Generate a synthetic transaction log.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # 10M transactions over 1M entities
  python generate_synthetic_transactions.py --out data/synthetic.txt --transactions 10000000

  # Wider transactions (more edges per line)
  python generate_synthetic_transactions.py --out data/wide.txt --max-inputs 20
""",
    )

    parser.add_argument("--out", required=True, help="Output file path")
    parser.add_argument(
        "--transactions",
        type=int,
        default=1_000_000,
        help="Number of transactions (default: 1000000)",
    )
    parser.add_argument(
        "--entities",
        type=int,
        default=100_000,
        help="Number of simulated owners (default: 100000)",
    )
    parser.add_argument(
        "--addresses-per-entity",
        type=int,
        default=8,
        help="Addresses controlled by each owner (default: 8)",
    )
    parser.add_argument(
        "--max-inputs",
        type=int,
        default=4,
        help="Maximum inputs per transaction (default: 4)",
    )
    parser.add_argument(
        "--max-outputs",
        type=int,
        default=3,
        help="Maximum outputs per transaction (default: 3)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=1,
        help="Random seed for reproducibility (default: 1)",
    )

    args = parser.parse_args()

    # Validate
    for name in ("transactions", "entities", "addresses_per_entity", "max_inputs", "max_outputs"):
        if getattr(args, name) < 1:
            parser.error(f"--{name.replace('_', '-')} must be at least 1")

    print(f"Output: {args.out}", file=sys.stderr)
    print(f"Transactions: {args.transactions:,}", file=sys.stderr)
    print(f"Entities: {args.entities:,} x {args.addresses_per_entity} addresses", file=sys.stderr)
    print(f"Seed: {args.seed}", file=sys.stderr)

    total_lines = generate_synthetic_dataset(
        output_path=args.out,
        num_transactions=args.transactions,
        num_entities=args.entities,
        addresses_per_entity=args.addresses_per_entity,
        max_inputs=args.max_inputs,
        max_outputs=args.max_outputs,
        seed=args.seed,
    )

    print(f"Done! Wrote {total_lines:,} lines to {args.out}", file=sys.stderr)


if __name__ == "__main__":
    main()
