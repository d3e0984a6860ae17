"""Dense node identifiers for addresses."""

from collections.abc import Iterator

from address_clustering.atomic import atomic_output
from address_clustering.errors import GraphCapacityError
from address_clustering.graph.types import BUFFER_SIZE, MAX_INT32, Address, NodeId


class AddressIndex:
    """
    Assigns node ids 0, 1, 2, ... to addresses in first-seen order.

    Ids are never renumbered, so the same input stream always yields the
    same assignment. Dict insertion order doubles as id order.
    """

    def __init__(self, max_nodes: int = MAX_INT32):
        self._max_nodes = max_nodes
        self._ids: dict[Address, NodeId] = {}

    def lookup_or_insert(self, address: Address) -> NodeId:
        node_id = self._ids.get(address)
        if node_id is None:
            node_id = len(self._ids)
            if node_id >= self._max_nodes:
                raise GraphCapacityError(
                    f"more than {self._max_nodes} distinct addresses, node ids would overflow"
                )
            self._ids[address] = node_id
        return node_id

    def get(self, address: Address) -> NodeId | None:
        return self._ids.get(address)

    def items(self) -> Iterator[tuple[Address, NodeId]]:
        """Yield (address, node_id) pairs in node id order."""
        return iter(self._ids.items())

    def __len__(self) -> int:
        return len(self._ids)

    def __contains__(self, address: object) -> bool:
        return address in self._ids


def write_address_map(path: str, index: AddressIndex) -> None:
    """Write `address,node_id` rows in node id order."""
    with atomic_output(path, "w", buffering=BUFFER_SIZE, encoding="ascii", newline="") as handle:
        handle.write("address,node_id\n")
        handle.writelines(f"{address},{node_id}\n" for address, node_id in index.items())
