import logging
import math
import random
from multiprocessing import Pool

import numpy as np
from tqdm import tqdm

from .percolation import Percolation, is_int

logger = logging.getLogger(__name__)

# z value of the 95% normal confidence interval
CONFIDENCE = 1.96


def run_trial(n: int, rng) -> float:
    """
    Opens random sites of a fresh n x n grid until it percolates and returns
    the fraction of sites that ended up open.

    :param rng: anything with an inclusive ``randint(a, b)``, e.g. random.Random
    """
    simulator = Percolation(n)
    while not simulator.percolates():
        row = rng.randint(1, n)
        col = rng.randint(1, n)
        simulator.open(row, col)
    return simulator.openFraction()


def _seeded_trial(task):
    n, seed = task
    return run_trial(n, random.Random(seed))


def trial_seeds(seed, trials: int):
    """
    One independent seed per trial, derived from ``seed`` (fresh entropy when None).
    """
    return [int(s) for s in np.random.SeedSequence(seed).generate_state(trials)]


def _validate(n, trials):
    if not (is_int(n) and is_int(trials)) or n < 1 or trials < 1:
        raise ValueError(
            f"grid size n and trials count must be positive integers, got n={n!r}, trials={trials!r}")


def validate_sweep(sizes, trials):
    """
    Checks every grid size and the trial count before anything runs.
    Returns the sizes as a list.
    """
    sizes = list(sizes)
    if not sizes:
        raise ValueError("at least one grid size is required")
    for n in sizes:
        _validate(n, trials)
    return sizes


class PercolationStats:
    def __init__(self, n: int, trials: int, seed=None, workers: int = 1, progress: bool = False):
        _validate(n, trials)

        self.gridSize = int(n)
        self.trialCount = int(trials)
        self.seed = seed

        payload = [(n, s) for s in trial_seeds(seed, trials)]
        logger.info("running %d trials on a %dx%d grid (workers=%d)", trials, n, n, workers)

        bar = dict(total=trials, desc=f"n={n}", unit="trial", disable=not progress)
        if workers <= 1:
            self.trialResults = [_seeded_trial(t) for t in tqdm(payload, **bar)]
        else:
            with Pool(processes=workers) as pool:
                self.trialResults = list(tqdm(pool.imap(_seeded_trial, payload), **bar))

        self._mean = float(np.mean(self.trialResults))
        if trials > 1:
            self._stddev = float(np.std(self.trialResults, ddof=1))
        else:
            self._stddev = 0.0
        logger.debug("n=%d mean=%.6f stddev=%.6f", n, self._mean, self._stddev)

    @property
    def results(self):
        return list(self.trialResults)

    def mean(self) -> float:
        return self._mean

    def stddev(self) -> float:
        return self._stddev

    def _halfwidth(self) -> float:
        return CONFIDENCE * self._stddev / math.sqrt(self.trialCount)

    def confidenceLo(self) -> float:
        return self._mean - self._halfwidth()

    def confidenceHi(self) -> float:
        return self._mean + self._halfwidth()

    def confidence_interval(self):
        return self.confidenceLo(), self.confidenceHi()

    def report(self):
        print("="*60)
        print(f"STATS REPORT (n = {self.gridSize}, trials = {self.trialCount})")
        print("="*60)

        print(f"mean value of critical value pc = {self.mean(): .6f}")
        print(f"std value of critical value pc = {self.stddev(): .6f}")
        lo, hi = self.confidence_interval()
        print(f"the 95% confidence interval is {lo} ~ {hi}")
        print("="*60)


def run_sweep(sizes, trials: int, seed=None, workers: int = 1, progress: bool = False):
    """
    Runs PercolationStats for every grid size in ``sizes``, in order.

    Each size gets its own child of ``seed``.
    """
    sizes = validate_sweep(sizes, trials)

    children = np.random.SeedSequence(seed).spawn(len(sizes))
    all_stats = []
    for n, child in zip(sizes, children):
        all_stats.append(PercolationStats(
            n, trials,
            seed=int(child.generate_state(1)[0]),
            workers=workers,
            progress=progress,
        ))
    return all_stats
