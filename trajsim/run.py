"""
trajsim Runner
==============

Generates one simulation type at several noise levels and reports the
resulting long-format table. Optionally renders it to an HTML chart.

Usage:
    python -m trajsim --type ps --noises 0.5,1,1.5,2 -n 10 --freq 0.5 --end 30
    python -m trajsim --type psd --damp 1,0.1 --noises 0.5 --plot psd.html
    python -m trajsim sims/manifest.yaml
    python -m trajsim sims/manifest.yaml --seed 7 --noises 1
"""

import argparse
import logging
from typing import List, Optional

import polars as pl

from trajsim.core.base import SimulationConfig
from trajsim.core.multi import generate_multi
from trajsim.core.perturbation import get_rng
from trajsim.core.registry import list_types
from trajsim.io.manifest import load_manifest
from trajsim.validation.arguments import InvalidArgument, SimulationError
from trajsim.validation.table_validation import validate_table
from trajsim.viz.plot import plot


def _float_list(text: str) -> List[float]:
    try:
        return [float(v) for v in text.split(',') if v.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected comma-separated numbers, got {text!r}")


def build_config(args: argparse.Namespace) -> SimulationConfig:
    """Merge manifest (if any) with command-line overrides."""
    if args.manifest:
        config = load_manifest(args.manifest)
    elif args.type:
        config = SimulationConfig(type=args.type)
    else:
        raise InvalidArgument("Either a manifest or --type is required")

    if args.type:
        config.type = args.type
    for name in ('noises', 'n', 'freq', 'end', 'seed'):
        value = getattr(args, name)
        if value is not None:
            setattr(config, name, value)

    if args.slope is not None:
        config.params['slope'] = args.slope
    if args.damp is not None:
        config.params['damp_params'] = args.damp
    if args.interval_stim is not None:
        config.params['interval_stim'] = args.interval_stim
    if args.lambda_ is not None:
        config.params['lambda_'] = args.lambda_

    return config.validate()


def run(
    config: SimulationConfig,
    plot_path: Optional[str] = None,
    facet: bool = True,
    verbose: bool = True,
) -> pl.DataFrame:
    """
    Run one multi-noise simulation.

    Args:
        config: Simulation settings
        plot_path: If set, write the chart as HTML there
        facet: One chart panel per noise level
        verbose: Print progress

    Returns:
        Combined long-format DataFrame
    """
    if verbose:
        print("=" * 70)
        print(f"TRAJSIM: {config.type} x {len(config.noises) + 1} noise levels")
        print("=" * 70)
        print(f"Trajectories per level: {config.n}")
        print(f"Grid: [0, {config.end}) step {config.freq}")
        if config.params:
            print(f"Params: {config.params}")

    df = generate_multi(rng=get_rng(config.seed), **config.to_kwargs())

    if verbose:
        report = validate_table(df, facet_col='noise')
        print(report.summary())
        print(df.head())

    if plot_path:
        fig = plot(df, facet=facet)
        fig.write_html(plot_path)
        if verbose:
            print(f"  -> {plot_path}")

    return df


def build_parser() -> argparse.ArgumentParser:
    """Command-line arguments of the runner."""
    parser = argparse.ArgumentParser(
        prog='trajsim',
        description="Synthetic oscillating trajectories at several noise levels",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Types: {', '.join(list_types())}

Usage:
  python -m trajsim --type ps --noises 0.5,1,1.5,2 -n 10 --freq 0.5 --end 30
  python -m trajsim sims/manifest.yaml --plot sims.html
"""
    )
    parser.add_argument('manifest', nargs='?', help='Path to manifest.yaml (or its directory)')
    parser.add_argument('--type', choices=list_types(), help='Simulation type')
    parser.add_argument('--noises', type=_float_list, help='Comma-separated noise levels (0 is implicit)')
    parser.add_argument('-n', type=int, help='Trajectories per noise level')
    parser.add_argument('--freq', type=float, help='Spacing between two time points')
    parser.add_argument('--end', type=float, help='End of the time grid (exclusive)')
    parser.add_argument('--seed', type=int, help='Random seed')
    parser.add_argument('--slope', type=float, help='Trend slope (pst)')
    parser.add_argument('--damp', type=_float_list, help='Damping A,L (psd, nad)')
    parser.add_argument('--interval-stim', dest='interval_stim', type=float,
                        help='Time between stimulations (edls)')
    parser.add_argument('--lambda', dest='lambda_', type=float, help='Decay rate (edls)')
    parser.add_argument('--plot', help='Write the chart to this HTML file')
    parser.add_argument('--no-facet', action='store_true', help='Single chart panel')
    parser.add_argument('-q', '--quiet', action='store_true', help='Suppress output')
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')
    return parser


def main(argv: Optional[List[str]] = None):
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(name)s %(levelname)s: %(message)s')

    try:
        config = build_config(args)
        run(
            config,
            plot_path=args.plot,
            facet=not args.no_facet,
            verbose=not args.quiet,
        )
    except (SimulationError, FileNotFoundError) as e:
        parser.error(str(e))


if __name__ == '__main__':
    main()
