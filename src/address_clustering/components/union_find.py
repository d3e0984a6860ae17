"""Disjoint-set forest over dense node ids."""

import numpy as np


class DisjointSet:
    """
    Union-find with path compression and union by size.

    Elements are the indices 0..n-1 of two plain lists, which keep the
    per-edge find/union loop on Python ints. The forest only moves into a
    numpy int32 array when every element is resolved in `roots()`.
    """

    def __init__(self, size: int):
        self.parent = list(range(size))
        self.size = [1] * size
        self.count = size

    def __len__(self) -> int:
        return len(self.parent)

    def find(self, x: int) -> int:
        parent = self.parent
        root = x
        while parent[root] != root:
            root = parent[root]

        # Point every node on the walked path straight at the root.
        while x != root:
            next_x = parent[x]
            parent[x] = root
            x = next_x
        return root

    def union(self, a: int, b: int) -> bool:
        """Merge the sets holding a and b; False if they were already one set."""
        root_a = self.find(a)
        root_b = self.find(b)
        if root_a == root_b:
            return False

        size = self.size
        if size[root_a] < size[root_b]:
            root_a, root_b = root_b, root_a
        self.parent[root_b] = root_a
        size[root_a] += size[root_b]
        self.count -= 1
        return True

    def union_edges(self, edges: np.ndarray) -> int:
        """Apply union to every row of an (k, 2) edge array; return merges done."""
        union = self.union
        merged = 0
        for u, v in edges.tolist():
            if union(u, v):
                merged += 1
        return merged

    def roots(self) -> np.ndarray:
        """
        Representative of every element.

        Resolves all elements at once by pointer jumping (parent = parent[parent])
        until the forest is flat, and keeps the flattened forest.
        """
        parent = np.array(self.parent, dtype=np.int32)
        while True:
            grandparent = parent[parent]
            if np.array_equal(grandparent, parent):
                break
            parent = grandparent
        self.parent = parent.tolist()
        return parent
