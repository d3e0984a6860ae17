"""Connected-components analysis of the auxiliary graph."""

from address_clustering.components.analyze import compute_components, write_assignment_csv
from address_clustering.components.union_find import DisjointSet

__all__ = ["DisjointSet", "compute_components", "write_assignment_csv"]
