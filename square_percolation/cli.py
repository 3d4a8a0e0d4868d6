import argparse
import logging
import os
import random

import numpy as np

from .analysis import DEFAULT_EXPONENT, extrapolate_threshold
from .percolation import Percolation
from .stats import PercolationStats, run_sweep, validate_sweep

logger = logging.getLogger(__name__)


def _use_file_backend():
    import matplotlib
    matplotlib.use("Agg")


def cmd_stats(args):
    stats = PercolationStats(args.n, args.trials, seed=args.seed,
                             workers=args.workers, progress=args.progress)
    print(f"mean = {stats.mean()}")
    print(f"stddev = {stats.stddev()}")
    print(f"95% confidence interval = [{stats.confidenceLo()}, {stats.confidenceHi()}]")
    return 0


def cmd_sweep(args):
    if args.Lstep < 1:
        raise ValueError(f"--Lstep must be positive, got {args.Lstep}")
    L_values = list(range(args.Lmin, args.Lmax + 1, args.Lstep))
    if not L_values:
        raise ValueError(f"empty size range {args.Lmin}..{args.Lmax}")
    validate_sweep(L_values, args.t)

    print("Starting Monte Carlo Percolation Analysis...")
    print(f"System sizes (N): {args.Lmin} to {args.Lmax}, step {args.Lstep}")
    print(f"Trials per size: {args.t}")

    all_stats = run_sweep(L_values, args.t, seed=args.seed,
                          workers=args.workers, progress=args.progress)
    for stats in all_stats:
        stats.report()

    means = [s.mean() for s in all_stats]
    stds = [s.stddev() for s in all_stats]

    print("\n--- Simulation Complete ---")
    if len(L_values) >= 2:
        fit = extrapolate_threshold(L_values, means, args.exponent)
        print(f"\n--- Extrapolation Results (exponent {args.exponent:.2f}) ---")
        print(f"pc(infinity) = {fit.pc_inf:.6f}, R^2 = {fit.r_squared:.4f}")
        print("-------------------------------------------------------")
    else:
        logger.warning("only one grid size, skipping extrapolation")

    if args.plot:
        _use_file_backend()
        from .plotting import plot_extrapolation, plot_threshold_vs_size

        os.makedirs(args.plot, exist_ok=True)
        print("plotting...")
        fig = plot_threshold_vs_size(np.array(L_values), means, stds)
        fig.savefig(os.path.join(args.plot, "threshold_vs_size.png"))
        if len(L_values) >= 2:
            fig, _ = plot_extrapolation(np.array(L_values), means, args.exponent)
            fig.savefig(os.path.join(args.plot, "extrapolation.png"))
        logger.info("figures written to %s", args.plot)
    return 0


def cmd_show(args):
    if args.out:
        _use_file_backend()
    import matplotlib.pyplot as plt
    from .plotting import plot_grid

    rng = random.Random(args.seed)
    simulator = Percolation(args.n)
    while not simulator.percolates():
        simulator.open(rng.randint(1, args.n), rng.randint(1, args.n))
    print(f"percolates after {simulator.numberOfOpenSites()} open sites "
          f"(fraction {simulator.openFraction():.6f})")

    fig = plot_grid(simulator)
    if args.out:
        fig.savefig(args.out)
        logger.info("grid written to %s", args.out)
    else:
        plt.show()
    return 0


def build_parser():
    parser = argparse.ArgumentParser(
        prog="square-percolation",
        description="Run a Monte Carlo simulation for 2D site percolation."
    )
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help="-v for progress messages, -vv for debug output.")
    sub = parser.add_subparsers(dest="command", required=True)

    def add_common(p):
        p.add_argument('--seed', type=int, default=None, help="Random seed for reproducible runs.")
        p.add_argument('--workers', type=int, default=1, help="Worker processes for running trials.")
        p.add_argument('--progress', action='store_true', help="Show a progress bar.")

    p = sub.add_parser("stats", help="Estimate the threshold for one grid size.")
    p.add_argument('n', type=int, help="Size of the square grid (n x n).")
    p.add_argument('trials', type=int, help="The number of Monte Carlo trials to perform.")
    add_common(p)
    p.set_defaults(func=cmd_stats)

    p = sub.add_parser("sweep", help="Estimate the threshold over a range of sizes and extrapolate.")
    p.add_argument('--Lmin', type=int, default=50, help="Minimum size of the square grid (N_min x N_min).")
    p.add_argument('--Lmax', type=int, default=200, help="Maximum size of the square grid (N_max x N_max).")
    p.add_argument('--Lstep', type=int, default=50, help="Step size for increasing the grid size N.")
    p.add_argument('--t', type=int, default=500, help="The number of Monte Carlo trials to perform.")
    p.add_argument('--exponent', type=float, default=DEFAULT_EXPONENT,
                   help="Finite-size scaling exponent used for extrapolation.")
    p.add_argument('--plot', metavar="DIR", default=None, help="Write PNG figures to this directory.")
    add_common(p)
    p.set_defaults(func=cmd_sweep)

    p = sub.add_parser("show", help="Run one trial and draw the final grid.")
    p.add_argument('n', type=int, help="Size of the square grid (n x n).")
    p.add_argument('--seed', type=int, default=None, help="Random seed for reproducible runs.")
    p.add_argument('--out', default=None, help="Save the figure here instead of showing it.")
    p.set_defaults(func=cmd_show)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        return args.func(args)
    except ValueError as e:
        parser.error(str(e))


if __name__ == "__main__":
    raise SystemExit(main())
