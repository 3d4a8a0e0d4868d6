import numpy as np
import matplotlib.pyplot as plt
from matplotlib.colors import ListedColormap

from .analysis import DEFAULT_EXPONENT, extrapolate_threshold, scaling_variable
from .percolation import BLOCKED_SITE, FULL_SITE

# blocked, open, full
SITE_COLOURS = ['black', 'white', 'deepskyblue']


def plot_threshold_vs_size(L_values, means, stds):
    """
    Error bar plot of the mean critical probability against system size L.
    """
    fig, ax = plt.subplots(figsize=(10, 6))

    ax.errorbar(
        L_values,
        means,
        yerr=stds,
        fmt='o-',
        color='blue',
        ecolor='blue',
        capsize=5,
        label=r'Mean $p_c \pm \sigma$'
    )

    ax.set_xlabel('Linear System Size ($L$)', fontsize=14)
    ax.set_ylabel(r'Mean Critical Probability ($\bar{p}_c$)', fontsize=14)
    ax.set_title('Mean $p_c$ vs. System Size ($L$)', fontsize=16)

    ax.grid(True, linestyle='--', alpha=0.6)
    ax.legend(loc='best')
    return fig


def plot_extrapolation(L_values, means, exponent=DEFAULT_EXPONENT):
    """
    Plots mean critical probability vs L^(exponent) with the fitted line
    extended to X=0. Returns (figure, fit).
    """
    means = np.asarray(means, dtype=float)
    fit = extrapolate_threshold(L_values, means, exponent)
    X_scaling = scaling_variable(L_values, exponent)

    X_plot_max = float(np.max(X_scaling) * 1.05)
    X_line = np.linspace(0.0, X_plot_max, 100)

    fig, ax = plt.subplots(figsize=(10, 6))
    ax.plot(X_line, fit.line(X_line), color='blue', linestyle='--',
            label=f"Fit: $p_c(\\infty)$ = {fit.pc_inf:.5f}")
    ax.plot(X_scaling, means, 'o', color='blue', markersize=8,
            label=r"Data $\bar{p}_c(L)$")
    ax.plot(0, fit.pc_inf, 'x', color='blue', markersize=10)

    ax.set_xlabel(f'$L^{{{exponent:.2f}}}$', fontsize=14)
    ax.set_ylabel(r'Mean Critical Probability ($\bar{p}_c$)', fontsize=14)
    ax.set_title('Finite-Size Scaling Extrapolation', fontsize=16)

    ax.set_xlim(-0.05 * X_plot_max, X_plot_max)
    all_y = np.append(means, fit.pc_inf)
    ax.set_ylim(0.95 * float(np.min(all_y)), 1.05 * float(np.max(all_y)))

    ax.grid(True, linestyle='--', alpha=0.6)
    ax.legend(loc='best')
    return fig, fit


def plot_grid(percolation, title=None):
    """
    Draws the blocked / open / full sites of a Percolation model.
    """
    states = percolation.grid()
    n = percolation.size

    fig, ax = plt.subplots(figsize=(6, 6))
    ax.imshow(states, cmap=ListedColormap(SITE_COLOURS),
              vmin=BLOCKED_SITE, vmax=FULL_SITE, interpolation='nearest')
    ax.set_xticks([])
    ax.set_yticks([])
    if title is None:
        title = (f"{n}x{n} grid, {percolation.numberOfOpenSites()} open sites "
                 f"({percolation.openFraction():.4f})")
    ax.set_title(title)
    return fig
