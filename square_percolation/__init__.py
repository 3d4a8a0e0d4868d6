from .union_find import AugmentedUnionUF, WeightedQuickUnionUF
from .percolation import (
    CONNECTED_TO_BOTTOM,
    CONNECTED_TO_TOP,
    OPEN,
    PERCOLATING,
    Percolation,
)
from .stats import CONFIDENCE, PercolationStats, run_sweep, run_trial
from .analysis import ThresholdFit, extrapolate_threshold

__version__ = "0.1.0"
