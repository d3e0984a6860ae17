"""Auxiliary graph construction and serialization."""

from address_clustering.graph.build import GraphBuilder, build_graph
from address_clustering.graph.codec import read_graph, read_header, write_graph
from address_clustering.graph.index import AddressIndex
from address_clustering.graph.parse import read_transactions

__all__ = [
    "AddressIndex",
    "GraphBuilder",
    "build_graph",
    "read_graph",
    "read_header",
    "read_transactions",
    "write_graph",
]
