"""
Disjoint-set (union-find) structure.

Tracks a partition of elements into non-overlapping sets. Used for
connectivity bookkeeping while a spanning forest is built.
"""

from typing import Dict, Hashable, Iterable, List


class UnionFind:
    """
    Union-find over an explicit set of elements.

    Trees are linked by rank, which keeps every parent chain logarithmic in
    the component size. `find` never restructures the trees.

    Example:
        uf = UnionFind(["A", "B", "C", "D", "E"])
        uf.union("A", "B")
        uf.union("C", "D")
        uf.connected("B", "E")  # False
    """

    def __init__(self, elements: Iterable[Hashable] = ()):
        self.parent: Dict[Hashable, Hashable] = {}
        self.rank: Dict[Hashable, int] = {}
        self.count = 0  # number of disjoint sets
        for element in elements:
            self.add(element)

    def __contains__(self, element) -> bool:
        return element in self.parent

    def __len__(self) -> int:
        return len(self.parent)

    def add(self, element: Hashable) -> None:
        """Add `element` as a singleton set. No-op if already present."""
        if element in self.parent:
            return
        self.parent[element] = element
        self.rank[element] = 0
        self.count += 1

    def find(self, element: Hashable) -> Hashable:
        """
        Representative of the set containing `element`.

        Raises:
            KeyError: element was never added
        """
        parent = self.parent[element]
        while parent != element:
            element = parent
            parent = self.parent[element]
        return element

    def union(self, a: Hashable, b: Hashable) -> bool:
        """
        Merge the sets containing `a` and `b`.

        Returns:
            True if two sets were merged, False if already connected
        """
        root_a = self.find(a)
        root_b = self.find(b)
        if root_a == root_b:
            return False

        if self.rank[root_a] < self.rank[root_b]:
            root_a, root_b = root_b, root_a
        self.parent[root_b] = root_a
        if self.rank[root_a] == self.rank[root_b]:
            self.rank[root_a] += 1

        self.count -= 1
        return True

    def connected(self, a: Hashable, b: Hashable) -> bool:
        return self.find(a) == self.find(b)

    def groups(self) -> List[List[Hashable]]:
        """Current partition; groups and members follow insertion order."""
        by_root: Dict[Hashable, List[Hashable]] = {}
        for element in self.parent:
            by_root.setdefault(self.find(element), []).append(element)
        return list(by_root.values())
