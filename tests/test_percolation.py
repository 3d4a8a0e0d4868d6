import random

import numpy as np
import pytest

from square_percolation.percolation import (
    BLOCKED_SITE,
    CONNECTED_TO_BOTTOM,
    CONNECTED_TO_TOP,
    FULL_SITE,
    OPEN,
    OPEN_SITE,
    Percolation,
)


def all_sites(n):
    return [(r, c) for r in range(1, n + 1) for c in range(1, n + 1)]


@pytest.mark.parametrize("n", [1, 2, 5])
def test_fresh_grid(n):
    p = Percolation(n)
    assert p.numberOfOpenSites() == 0
    assert not p.percolates()
    for r, c in all_sites(n):
        assert not p.isOpen(r, c)
        assert not p.isFull(r, c)


@pytest.mark.parametrize("n", [0, -1, 2.5, True, "3"])
def test_invalid_size(n):
    with pytest.raises(ValueError):
        Percolation(n)


def test_boundary_bits():
    p = Percolation(3)
    assert list(p.status) == [CONNECTED_TO_TOP] * 3 + [0] * 3 + [CONNECTED_TO_BOTTOM] * 3

    single = Percolation(1)
    assert single.status[0] == CONNECTED_TO_TOP | CONNECTED_TO_BOTTOM


def test_single_site_grid():
    p = Percolation(1)
    p.open(1, 1)
    assert p.percolates()
    assert p.isFull(1, 1)
    assert p.numberOfOpenSites() == 1


def test_column_scenario():
    p = Percolation(3)
    p.open(1, 1)
    assert p.isFull(1, 1)
    assert not p.percolates()

    p.open(2, 1)
    assert p.isFull(2, 1)
    assert not p.percolates()

    p.open(3, 1)
    assert p.isFull(3, 1)
    assert p.percolates()
    assert p.numberOfOpenSites() == 3


def test_open_is_idempotent():
    p = Percolation(4)
    p.open(2, 3)
    status = p.status.copy()
    p.open(2, 3)
    assert p.numberOfOpenSites() == 1
    assert np.array_equal(status, p.status)


def test_no_connection_through_blocked_sites():
    p = Percolation(2)
    p.open(1, 1)
    p.open(2, 2)
    assert not p.percolates()
    assert not p.isFull(2, 2)

    p.open(1, 2)
    assert p.isFull(2, 2)
    assert p.percolates()


def test_right_edge_does_not_wrap_to_next_row():
    p = Percolation(3)
    p.open(1, 3)
    p.open(2, 1)
    assert p.isFull(1, 3)
    assert not p.isFull(2, 1)


def test_no_backwash_into_bottom_row():
    p = Percolation(3)
    for r in range(1, 4):
        p.open(r, 1)
    assert p.percolates()
    p.open(3, 3)
    assert p.isOpen(3, 3)
    assert not p.isFull(3, 3)


def test_percolation_stays_set_after_more_opens():
    p = Percolation(2)
    p.open(1, 1)
    p.open(2, 1)
    assert p.percolates()
    p.open(2, 2)
    p.open(1, 2)
    assert p.percolates()
    assert p.numberOfOpenSites() == 4


@pytest.mark.parametrize("seed", range(5))
def test_full_grid_percolates_in_any_order(seed):
    n = 6
    sites = all_sites(n)
    random.Random(seed).shuffle(sites)

    p = Percolation(n)
    opened = 0
    was_percolating = False
    for r, c in sites:
        p.open(r, c)
        opened += 1
        assert p.numberOfOpenSites() == opened
        assert p.percolates() or not was_percolating
        was_percolating = p.percolates()
    assert p.percolates()

    for r, c in all_sites(n):
        assert p.isFull(r, c)


def test_full_implies_open():
    n = 8
    rng = random.Random(3)
    p = Percolation(n)
    for _ in range(40):
        p.open(rng.randint(1, n), rng.randint(1, n))
        for r, c in all_sites(n):
            if p.isFull(r, c):
                assert p.isOpen(r, c)


@pytest.mark.parametrize("call", ["open", "isOpen", "isFull"])
@pytest.mark.parametrize("row,col", [(0, 1), (5, 1), (1, 0), (1, 5), (-1, -1)])
def test_out_of_range(call, row, col):
    p = Percolation(4)
    with pytest.raises(ValueError):
        getattr(p, call)(row, col)
    assert p.numberOfOpenSites() == 0


def test_open_bit_is_per_site():
    p = Percolation(3)
    p.open(2, 2)
    p.open(2, 3)
    assert p.status[4] & OPEN
    assert p.status[5] & OPEN
    assert not p.isOpen(2, 1)


def test_grid_states():
    p = Percolation(3)
    p.open(1, 2)
    p.open(2, 2)
    p.open(3, 1)
    expected = np.array([
        [BLOCKED_SITE, FULL_SITE, BLOCKED_SITE],
        [BLOCKED_SITE, FULL_SITE, BLOCKED_SITE],
        [OPEN_SITE, BLOCKED_SITE, BLOCKED_SITE],
    ])
    assert np.array_equal(p.grid(), expected)


def test_open_fraction_and_repr():
    p = Percolation(2)
    p.open(1, 1)
    assert p.openFraction() == 0.25
    assert p.size == 2
    assert repr(p) == "Percolation(n=2, open=1, percolates=False)"
