"""
Site percolation on an n by n grid.

Each site carries a small status bitmask. The bitmask array doubles as the
value array of an :class:`AugmentedUnionUF` whose merge is bitwise OR, so the
entry at a component's root always says whether that component is open,
touches the top row and touches the bottom row.
"""

import logging
import operator

import numpy as np

from .union_find import AugmentedUnionUF

logger = logging.getLogger(__name__)

OPEN = 1
CONNECTED_TO_TOP = 2
CONNECTED_TO_BOTTOM = 4
PERCOLATING = OPEN | CONNECTED_TO_TOP | CONNECTED_TO_BOTTOM

FULL = OPEN | CONNECTED_TO_TOP

# values returned by Percolation.grid()
BLOCKED_SITE = 0
OPEN_SITE = 1
FULL_SITE = 2


def is_int(value) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


class Percolation:
    # create a n by n grid with all sites blocked
    def __init__(self, n: int):
        if not is_int(n) or n < 1:
            raise ValueError(f"n must be a positive integer, got {n!r}")

        self.gridSize = int(n)
        self.gridSquare = self.gridSize * self.gridSize

        self.status = np.zeros(self.gridSquare, dtype=np.uint8)
        self.status[:self.gridSize] |= CONNECTED_TO_TOP
        self.status[self.gridSquare - self.gridSize:] |= CONNECTED_TO_BOTTOM

        self.uf = AugmentedUnionUF(self.gridSquare, self.status, operator.or_)

        self.openSite = 0
        self._percolates = False

    @property
    def size(self) -> int:
        return self.gridSize

    # open the site[row, col] if it's not open yet
    def open(self, row: int, col: int) -> None:
        self.validState(row, col)
        flatIndex = self.flattenGrid(row, col)

        if self.status[flatIndex] & OPEN:
            return

        self.status[flatIndex] |= OPEN
        self.openSite += 1

        if self.gridSize == 1:
            self._markPercolating()
            return

        ## up
        if row > 1:
            self.validConnection(flatIndex, flatIndex - self.gridSize)
        ## down
        if row < self.gridSize:
            self.validConnection(flatIndex, flatIndex + self.gridSize)
        ## left
        if col > 1:
            self.validConnection(flatIndex, flatIndex - 1)
        ## right
        if col < self.gridSize:
            self.validConnection(flatIndex, flatIndex + 1)

        if self.uf.value(flatIndex) == PERCOLATING:
            self._markPercolating()

    def validConnection(self, p1: int, p2: int) -> None:
        """
        Joins open site p1 to neighbour p2 when p2 is open as well.

        Closed sites only carry their row's boundary bit, so they must never
        join a component.
        """
        if self.status[p2] & OPEN:
            self.uf.union(p1, p2)

    def _markPercolating(self) -> None:
        if not self._percolates:
            logger.debug("%dx%d grid percolates after %d open sites",
                         self.gridSize, self.gridSize, self.openSite)
        self._percolates = True

    # is site[row, col] open?
    def isOpen(self, row: int, col: int) -> bool:
        self.validState(row, col)
        return bool(self.status[self.flattenGrid(row, col)] & OPEN)

    # is site[row, col] connected to the top row through open sites?
    def isFull(self, row: int, col: int) -> bool:
        self.validState(row, col)
        return (int(self.uf.value(self.flattenGrid(row, col))) & FULL) == FULL

    def percolates(self) -> bool:
        return self._percolates

    def numberOfOpenSites(self) -> int:
        return self.openSite

    def openFraction(self) -> float:
        return self.openSite / self.gridSquare

    def grid(self) -> np.ndarray:
        """
        Returns an n x n array of site states: BLOCKED_SITE, OPEN_SITE or
        FULL_SITE.
        """
        roots = np.fromiter((self.uf.find(i) for i in range(self.gridSquare)),
                            dtype=np.intp, count=self.gridSquare)
        is_open = (self.status & OPEN) != 0
        is_full = (self.status[roots] & FULL) == FULL
        states = np.where(is_full, FULL_SITE, np.where(is_open, OPEN_SITE, BLOCKED_SITE))
        return states.reshape(self.gridSize, self.gridSize)

    def validState(self, row: int, col: int) -> None:
        if not self.isOnGrid(row, col):
            raise ValueError(
                f"site ({row!r}, {col!r}) is outside the grid, "
                f"row and col must be between 1 and {self.gridSize}")

    def flattenGrid(self, row: int, col: int) -> int:
        return self.gridSize * (row - 1) + (col - 1)

    def isOnGrid(self, row: int, col: int) -> bool:
        if not (is_int(row) and is_int(col)):
            return False
        return 1 <= row <= self.gridSize and 1 <= col <= self.gridSize

    def __repr__(self) -> str:
        return (f"Percolation(n={self.gridSize}, open={self.openSite}, "
                f"percolates={self._percolates})")
