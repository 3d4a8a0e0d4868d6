import operator


class WeightedQuickUnionUF:
    """
    Disjoint sets over the flat site indices 0..n-1. Unions hang the
    smaller tree under the larger one and every find flattens the path
    it walked.
    """

    def __init__(self, n):
        if n <= 0:
            raise ValueError("n must be > 0")

        self.parent = list(range(n))

        # tree sizes, only meaningful at roots
        self.size = [1] * n

        self.count = n

    def __len__(self):
        return len(self.parent)

    def get_count(self):
        return self.count

    def _validate(self, p):
        n = len(self.parent)
        if p < 0 or p >= n:
            raise IndexError(f"index {p} is not between 0 and {n-1}")

    def find(self, p):
        """
        Root of the tree holding p. Nodes passed on the way up are pointed
        straight at that root.
        """
        self._validate(p)

        root = p
        while root != self.parent[root]:
            root = self.parent[root]

        while p != root:
            next_p = self.parent[p]
            self.parent[p] = root
            p = next_p

        return root

    def connected(self, p, q):
        return self.find(p) == self.find(q)

    def _link(self, rootP, rootQ):
        # smaller tree goes under the larger one; returns the new root
        if self.size[rootP] < self.size[rootQ]:
            self.parent[rootP] = rootQ
            self.size[rootQ] += self.size[rootP]
            root = rootQ
        else:
            self.parent[rootQ] = rootP
            self.size[rootP] += self.size[rootQ]
            root = rootP

        self.count -= 1
        return root

    def union(self, p, q):
        """
        Joins the trees of p and q and returns the surviving root.
        """
        rootP = self.find(p)
        rootQ = self.find(q)

        if rootP == rootQ:
            return rootP

        return self._link(rootP, rootQ)


class AugmentedUnionUF(WeightedQuickUnionUF):
    """
    Union-find that carries one value per component.

    ``values`` has one entry per site, but only the entry at a component's
    current root is authoritative. On every union the two root values are
    combined with ``merge`` and written to whichever root survives, so
    ``merge`` must be associative and commutative.
    """

    def __init__(self, n, values, merge=operator.or_):
        super().__init__(n)
        if len(values) != n:
            raise ValueError(f"expected {n} values, got {len(values)}")
        self.values = values
        self.merge = merge

    def value(self, p):
        """
        Returns the value of the component containing 'p'.
        """
        return self.values[self.find(p)]

    def union(self, p, q):
        rootP = self.find(p)
        rootQ = self.find(q)

        if rootP == rootQ:
            return rootP

        merged = self.merge(self.values[rootP], self.values[rootQ])
        root = self._link(rootP, rootQ)
        self.values[root] = merged
        return root
