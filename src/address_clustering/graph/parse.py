"""Parsing utilities for transaction log lines."""

from collections.abc import Iterable, Iterator

from address_clustering.errors import FormatError
from address_clustering.graph.types import BUFFER_SIZE, Address, BuildStats, Transaction


def parse_address_list(field: bytes) -> tuple[Address, ...]:
    """
    Parse a semicolon-separated list of comma-separated items.

    The first field of each item is the address; the rest (value, etc.) is
    ignored. Empty items are skipped.
    """
    addresses = []
    for item in field.split(b";"):
        if not item:
            continue
        address_field = item.split(b",", 1)[0].strip()
        if not address_field:
            raise ValueError(f"empty address in item {item!r}")
        # Plain decimal only: no underscores, no leading '+'.
        digits = address_field[1:] if address_field.startswith(b"-") else address_field
        if not digits.isdigit():
            raise ValueError(f"address {address_field!r} is not an integer")
        addresses.append(int(address_field))
    return tuple(addresses)


def parse_transaction_line(raw_line: bytes) -> Transaction | None:
    """
    Parse one `<metadata>:<inputs>:<outputs>` line.

    Returns None for blank lines and raises ValueError for malformed ones.
    """
    line = raw_line.rstrip(b"\n\r")
    if not line.strip():
        return None

    parts = line.split(b":")
    if len(parts) != 3:
        raise ValueError(f"expected 3 colon-separated fields, got {len(parts)}")

    _metadata, inputs, outputs = parts
    return Transaction(parse_address_list(inputs), parse_address_list(outputs))


def iter_transactions(
    lines: Iterable[bytes],
    path: str = "<stream>",
    stats: BuildStats | None = None,
) -> Iterator[Transaction]:
    """Yield transactions from raw lines, aborting on the first malformed one."""
    for line_number, raw_line in enumerate(lines, start=1):
        if stats is not None:
            stats.lines_read += 1
        try:
            transaction = parse_transaction_line(raw_line)
        except ValueError as exc:
            raise FormatError(path, line_number, str(exc)) from exc

        if transaction is None:
            if stats is not None:
                stats.blank_lines += 1
            continue
        yield transaction


def read_transactions(path: str, stats: BuildStats | None = None) -> Iterator[Transaction]:
    """Read and parse all transactions from a log file."""
    with open(path, "rb", buffering=BUFFER_SIZE) as handle:
        yield from iter_transactions(handle, path, stats)
