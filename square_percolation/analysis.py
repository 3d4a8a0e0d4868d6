from dataclasses import dataclass

import numpy as np
from scipy.stats import linregress

# finite-size scaling exponent -1/nu for 2D percolation
DEFAULT_EXPONENT = -3/4


@dataclass(frozen=True)
class ThresholdFit:
    pc_inf: float
    slope: float
    r_squared: float
    exponent: float = DEFAULT_EXPONENT

    def line(self, x):
        return self.slope * np.asarray(x, dtype=float) + self.pc_inf


def scaling_variable(L_values, exponent=DEFAULT_EXPONENT):
    return np.asarray(L_values, dtype=float) ** exponent


def extrapolate_threshold(L_values, means, exponent=DEFAULT_EXPONENT) -> ThresholdFit:
    """
    Fits mean critical probability against L^(exponent). The intercept at
    X=0 is the infinite-lattice estimate pc(infinity).
    """
    L_values = np.asarray(L_values, dtype=float)
    means = np.asarray(means, dtype=float)

    if L_values.shape != means.shape:
        raise ValueError("L_values and means must have the same length")
    if len(np.unique(L_values)) < 2:
        raise ValueError("need at least two distinct grid sizes to extrapolate")

    slope, intercept, r_value, p_value, std_err = linregress(scaling_variable(L_values, exponent), means)
    return ThresholdFit(pc_inf=float(intercept), slope=float(slope),
                        r_squared=float(r_value**2), exponent=exponent)
