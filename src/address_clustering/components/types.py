"""Shared constants and result structures for component analysis."""

from dataclasses import dataclass, field

import numpy as np

CSV_HEADER = "node_id,comp_id"

# Rows formatted per np.savetxt call.
CSV_CHUNK_ROWS = 1 << 20


@dataclass(frozen=True)
class ComponentAssignment:
    """Component label of every node, indexed by node id."""

    labels: np.ndarray = field(repr=False)
    num_components: int

    @property
    def num_nodes(self) -> int:
        return len(self.labels)

    def component_sizes(self) -> np.ndarray:
        return np.bincount(self.labels, minlength=self.num_components)


@dataclass
class AnalysisStats:
    """Statistics from one analyzer run."""

    num_nodes: int = 0
    num_edges: int = 0
    num_components: int = 0
    largest_component: int = 0
