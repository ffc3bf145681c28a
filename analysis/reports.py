"""
Report generation utilities for jump force-velocity profiling.

Generates the results table, a fixed-width text report and CSV exports.
"""

from typing import Dict, List
from datetime import datetime
import csv
import math

import pandas as pd

from core.profiler import AthleteProfile, ProfilingResult, summarize_recommendations


# Decimal places used when presenting results
ROUNDING: Dict[str, int] = {
    'body_mass_kg': 1,
    'depth_med_m': 3,
    'force_at_zero_n': 1,
    'velocity_at_zero_ms': 2,
    'max_power_w': 1,
    'slope_actual': 1,
    'slope_per_kg': 2,
    'slope_opt_per_kg': 2,
    'fvi_percent': 1,
    'r_squared': 3,
    'p_max_per_kg': 2,
    'height_potential_pct': 1,
}

RESULT_COLUMNS = [
    'athlete_id',
    'body_mass_kg',
    'depth_med_m',
    'force_at_zero_n',
    'velocity_at_zero_ms',
    'max_power_w',
    'slope_actual',
    'slope_per_kg',
    'slope_opt_per_kg',
    'fvi_percent',
    'r_squared',
    'recommendation',
]


def results_to_dataframe(
    result: ProfilingResult,
    rounded: bool = True,
    extended: bool = False
) -> pd.DataFrame:
    """
    Build the results table, one row per profiled athlete.

    Args:
        result: Profiling result
        rounded: Round to reporting precision
        extended: Include p_max_per_kg, height_potential_pct and n_trials

    Returns:
        DataFrame in athlete order
    """
    df = result.to_dataframe()

    columns = list(RESULT_COLUMNS)
    if extended:
        columns += ['p_max_per_kg', 'height_potential_pct', 'n_trials']
    df = df[columns]

    if rounded:
        df = df.round({k: v for k, v in ROUNDING.items() if k in df.columns})

    return df


def _fmt(value: float, width: int, decimals: int) -> str:
    if value is None or not math.isfinite(value):
        return f"{'NA':>{width}}"
    return f"{value:>{width}.{decimals}f}"


def _profile_row(p: AthleteProfile) -> str:
    return (f"{p.athlete_id[:20]:<20} "
            f"{_fmt(p.body_mass_kg, 6, 1)} "
            f"{_fmt(p.force_at_zero_n, 8, 1)} "
            f"{_fmt(p.velocity_at_zero_ms, 6, 2)} "
            f"{_fmt(p.max_power_w, 8, 1)} "
            f"{_fmt(p.slope_per_kg, 7, 2)} "
            f"{_fmt(p.slope_opt_per_kg, 7, 2)} "
            f"{_fmt(p.fvi_percent, 6, 1)} "
            f"{_fmt(p.r_squared, 6, 3)}  "
            f"{p.recommendation.value}\n")


def generate_profile_report(
    result: ProfilingResult,
    title: str = "Jump Force-Velocity Profiling Report"
) -> str:
    """
    Generate a text report from a profiling result.

    Args:
        result: Profiling result
        title: Report title

    Returns:
        Formatted report string
    """
    timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    profiles = result.profiles

    report = f"""
{'='*100}
{title}
{'='*100}
Generated: {timestamp}
Valid trials:              {result.n_valid_trials:>6d}
Athletes:                  {len(result.outcomes):>6d}
Profiled:                  {len(profiles):>6d}
Skipped:                   {len(result.skipped):>6d}

"""

    report += """
PER-ATHLETE PROFILES
--------------------
"""
    report += (f"{'Athlete':<20} {'BM':>6} {'F0':>8} {'V0':>6} {'Pmax':>8} "
               f"{'Sfv/kg':>7} {'Opt/kg':>7} {'FVI%':>6} {'R2':>6}  Recommendation\n")
    report += "-" * 100 + "\n"

    for p in profiles:
        report += _profile_row(p)

    counts = summarize_recommendations(result)
    report += """
RECOMMENDATIONS
---------------
"""
    for label, count in counts.items():
        report += f"{label:<25} {count:>4d}\n"

    if result.conditions:
        report += """
CONDITIONS
----------
"""
        for condition in result.conditions:
            action = "skipped" if condition.condition.skips_athlete else "reported"
            report += f"{condition.athlete_id[:20]:<20} {condition.condition.value:<32} {action:<9} {condition.detail}\n"

    report += "\n" + "=" * 100 + "\n"
    return report


def export_profiles_csv(
    result: ProfilingResult,
    filepath: str,
    rounded: bool = True
) -> None:
    """
    Export profiles to CSV.

    Args:
        result: Profiling result
        filepath: Output file path
        rounded: Round to reporting precision
    """
    results_to_dataframe(result, rounded=rounded, extended=True).to_csv(filepath, index=False)


def export_conditions_csv(
    result: ProfilingResult,
    filepath: str
) -> None:
    """
    Export per-athlete conditions to CSV.

    Args:
        result: Profiling result
        filepath: Output file path
    """
    headers = ['athlete_id', 'condition', 'skipped', 'detail']

    with open(filepath, 'w', newline='') as f:
        writer = csv.DictWriter(f, fieldnames=headers)
        writer.writeheader()

        for c in result.conditions:
            writer.writerow({
                'athlete_id': c.athlete_id,
                'condition': c.condition.value,
                'skipped': c.condition.skips_athlete,
                'detail': c.detail,
            })


def skipped_athletes(result: ProfilingResult) -> List[str]:
    """Ids of athletes without a profile, in athlete order."""
    return [o.athlete_id for o in result.outcomes if o.is_skipped]
