"""
Union-Find (Disjoint Set Union) over dense integer indices.

- find(x): representative of the set containing x, O(α(n)) amortized
- union(x, y): merge the sets containing x and y, O(α(n)) amortized
- connected(x, y): whether x and y share a set

Elements are the integers [0, size). Community detection builds a fresh
instance per call from the user registry indices.
"""

from typing import Dict, List


class DisjointSet:
    """
    Union-Find with path compression and union by rank.

    Example:
        >>> ds = DisjointSet(4)
        >>> ds.union(0, 1)
        0
        >>> ds.union(1, 2)
        0
        >>> ds.connected(0, 2)
        True
        >>> ds.connected(0, 3)
        False
    """

    def __init__(self, size: int) -> None:
        self._parent: List[int] = list(range(size))
        self._rank: List[int] = [0] * size

    def __len__(self) -> int:
        return len(self._parent)

    def find(self, element: int) -> int:
        """
        Find the representative (root) of the set containing element.

        Uses path compression: every node on the walked path is pointed
        directly at the root.
        """
        root = element
        while self._parent[root] != root:
            root = self._parent[root]

        current = element
        while self._parent[current] != root:
            next_node = self._parent[current]
            self._parent[current] = root
            current = next_node

        return root

    def union(self, x: int, y: int) -> int:
        """
        Merge the sets containing x and y.

        Attaches the lower-rank root under the higher-rank one; on a tie the
        root of x wins and its rank grows by one.

        Returns the representative of the merged set.
        """
        root_x = self.find(x)
        root_y = self.find(y)

        if root_x == root_y:
            return root_x

        if self._rank[root_x] < self._rank[root_y]:
            self._parent[root_x] = root_y
            return root_y
        elif self._rank[root_x] > self._rank[root_y]:
            self._parent[root_y] = root_x
            return root_x
        else:
            self._parent[root_y] = root_x
            self._rank[root_x] += 1
            return root_x

    def connected(self, x: int, y: int) -> bool:
        """Check if x and y are in the same set."""
        return self.find(x) == self.find(y)

    def groups(self) -> Dict[int, List[int]]:
        """
        Get all disjoint sets.

        Returns:
            Mapping from each set's representative to its members, members in
            ascending order.
        """
        sets: Dict[int, List[int]] = {}
        for element in range(len(self._parent)):
            sets.setdefault(self.find(element), []).append(element)
        return sets
