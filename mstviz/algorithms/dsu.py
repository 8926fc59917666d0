"""Disjoint-set union (union-find) with union by rank and path compression."""

from __future__ import annotations

from typing import Dict, Iterable, List, Set, Tuple

from mstviz.types.base import NodeId


class DisjointSetUnion:
    """Partition of elements ``0..n-1`` into disjoint sets.

    ``union`` attaches the lower-rank root under the higher-rank one, bounding
    tree height logarithmically; ``find`` re-points every node it visits
    directly at the root. There is no delete or undo: splitting a set is not
    supported.

    Element ids outside ``0..n-1`` are a caller error and raise ``IndexError``.
    """

    def __init__(self, n: int) -> None:
        self.parent: List[NodeId] = list(range(n))
        self.rank: List[int] = [0] * n
        self._count = n

    def __len__(self) -> int:
        return len(self.parent)

    @property
    def count(self) -> int:
        """Number of distinct sets (roots)."""
        return self._count

    def find(self, x: NodeId) -> NodeId:
        """Return the root of ``x``'s set, compressing the visited path."""
        if x < 0:
            raise IndexError(f"Element {x} is out of range")
        parent = self.parent
        root = x
        while parent[root] != root:
            root = parent[root]
        # Second pass: point every visited node straight at the root
        while parent[x] != root:
            parent[x], x = root, parent[x]
        return root

    def union(self, a: NodeId, b: NodeId) -> bool:
        """Merge the sets of ``a`` and ``b``.

        Returns:
            True if two sets were merged, False if ``a`` and ``b`` already
            shared a root (the pair would close a cycle).
        """
        ra = self.find(a)
        rb = self.find(b)
        if ra == rb:
            return False
        if self.rank[ra] < self.rank[rb]:
            ra, rb = rb, ra
        self.parent[rb] = ra
        if self.rank[ra] == self.rank[rb]:
            self.rank[ra] += 1
        self._count -= 1
        return True

    def connected(self, a: NodeId, b: NodeId) -> bool:
        return self.find(a) == self.find(b)

    def groups(self) -> Dict[NodeId, Set[NodeId]]:
        """Return ``{root: members}`` for every set, reflecting the current state."""
        out: Dict[NodeId, Set[NodeId]] = {}
        for i in range(len(self.parent)):
            out.setdefault(self.find(i), set()).add(i)
        return out


def count_components(n: int, pairs: Iterable[Tuple[NodeId, NodeId]]) -> int:
    """Return the number of connected components of ``n`` nodes joined by ``pairs``."""
    dsu = DisjointSetUnion(n)
    for u, v in pairs:
        dsu.union(u, v)
    return dsu.count
