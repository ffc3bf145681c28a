#!/usr/bin/env python3
"""
Jump Force-Velocity Profiling - CLI Entry Point

Usage:
    python main.py profile EXPORT.csv [--params P.json] [--output OUT.csv] [--plots DIR]
    python main.py synthetic [--athletes N] [--seed S] [--output OUT.csv]
    python main.py params [--output P.json]
"""

import sys
import argparse
import json

from core.params import ProfilingParams, load_params
from core.profiler import profile_athletes
from data.forcedecks_loader import ForceDecksLoader
from data.synthetic import generate_athlete_pool, generate_dataset, to_forcedecks_frame
from analysis.reports import (
    export_conditions_csv,
    export_profiles_csv,
    generate_profile_report,
    skipped_athletes,
)
from analysis.visualizations import save_fvi_summary, save_profile_plots


def run_profile(
    csv_path: str,
    params_path: str = None,
    output_path: str = None,
    conditions_path: str = None,
    plots_dir: str = None,
    verbose: bool = True
):
    """Profile every athlete in a ForceDecks export."""
    params = load_params(params_path) if params_path else ProfilingParams()

    loader = ForceDecksLoader(csv_path, params=params)
    loader.load(verbose=verbose)

    result = profile_athletes(loader.to_raw_trials(), params, verbose=verbose)
    print(generate_profile_report(result))

    missing = skipped_athletes(result)
    if missing:
        print(f"No profile for {len(missing)} athlete(s): {', '.join(missing)}")

    if output_path:
        export_profiles_csv(result, output_path)
        print(f"Profiles saved to: {output_path}")

    if conditions_path:
        export_conditions_csv(result, conditions_path)
        print(f"Conditions saved to: {conditions_path}")

    if plots_dir:
        paths = save_profile_plots(result.outcomes, plots_dir)
        paths.append(save_fvi_summary(result.profiles, plots_dir, result.params))
        print(f"Saved {len(paths)} plot(s) to: {plots_dir}")

    return result


def run_synthetic(
    n_athletes: int = 8,
    seed: int = 42,
    height_noise_cm: float = 0.5,
    output_path: str = None
):
    """Generate a synthetic ForceDecks-style export and profile it."""
    print(f"Generating {n_athletes} synthetic athletes (seed {seed})...")

    pool = generate_athlete_pool(n_athletes, seed=seed)
    rows = generate_dataset(pool, height_noise_cm=height_noise_cm, seed=seed)

    if output_path:
        to_forcedecks_frame(rows).to_csv(output_path, index=False)
        print(f"Synthetic export saved to: {output_path}")

    result = profile_athletes(rows, verbose=True)
    print(generate_profile_report(result, title="Synthetic Jump F-V Profiling Report"))

    print("Target profiles:")
    for profile in pool:
        print(f"  {profile.name:<25} Sfv/kg {profile.slope_per_kg:>7.2f}  "
              f"Pmax/kg {profile.p_max_per_kg:>6.2f}")

    return result


def run_params(output_path: str = None):
    """Print or save the default parameters."""
    params = ProfilingParams()
    if output_path:
        params.save(output_path)
        print(f"Default parameters saved to: {output_path}")
    else:
        print(json.dumps(params.to_dict(), indent=2))


def main():
    parser = argparse.ArgumentParser(description='Jump Force-Velocity Profiling')
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Profile command
    prof_parser = subparsers.add_parser('profile', help='Profile athletes from a ForceDecks export')
    prof_parser.add_argument('csv', help='ForceDecks CSV export')
    prof_parser.add_argument('--params', default=None, help='Parameters JSON file')
    prof_parser.add_argument('--output', default=None, help='Write profiles CSV')
    prof_parser.add_argument('--conditions', default=None, help='Write per-athlete conditions CSV')
    prof_parser.add_argument('--plots', default=None, help='Directory for F-V plots')
    prof_parser.add_argument('--quiet', action='store_true', help='Only print the report')

    # Synthetic command
    syn_parser = subparsers.add_parser('synthetic', help='Profile a synthetic dataset')
    syn_parser.add_argument('--athletes', type=int, default=8, help='Number of athletes')
    syn_parser.add_argument('--seed', type=int, default=42, help='Random seed')
    syn_parser.add_argument('--noise', type=float, default=0.5, help='Jump height noise SD (cm)')
    syn_parser.add_argument('--output', default=None, help='Write the synthetic export CSV')

    # Params command
    par_parser = subparsers.add_parser('params', help='Show default parameters')
    par_parser.add_argument('--output', default=None, help='Write parameters JSON')

    args = parser.parse_args()

    try:
        if args.command == 'profile':
            run_profile(args.csv, args.params, args.output, args.conditions,
                        args.plots, verbose=not args.quiet)
        elif args.command == 'synthetic':
            run_synthetic(args.athletes, args.seed, args.noise, args.output)
        elif args.command == 'params':
            run_params(args.output)
        else:
            parser.print_help()
    except (ValueError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
