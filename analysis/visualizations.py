"""
Visualization utilities for jump force-velocity profiles.

Provides charts for:
- Individual F-V profiles (trials, fitted line, load labels)
- FVI summary across athletes with classification bands
"""

from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union
import re

import numpy as np
import matplotlib.pyplot as plt

from core.params import ProfilingParams
from core.profiler import AthleteOutcome, AthleteProfile


BAND_COLORS = {
    'High Force Deficit': 'red',
    'Low Force Deficit': 'orange',
    'Well Balanced': 'green',
    'Low Velocity Deficit': 'gold',
    'High Velocity Deficit': 'purple',
    'Insufficient Data': 'grey',
}


def plot_fv_profile(
    outcome: AthleteOutcome,
    figsize: Tuple[int, int] = (8, 6),
    ax: Optional[plt.Axes] = None
) -> plt.Figure:
    """
    Plot mean force against mean velocity for one athlete.

    Each trial is labelled with its additional load; the fitted F-V line
    is drawn when a regression is available.

    Args:
        outcome: Athlete outcome with derived trials
        figsize: Figure size
        ax: Optional existing axes

    Returns:
        Matplotlib figure
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.get_figure()

    trials = outcome.derived_trials
    velocities = np.array([t.mean_velocity_ms for t in trials], dtype=float)
    forces = np.array([t.mean_force_n for t in trials], dtype=float)

    ax.scatter(velocities, forces, s=50, color='black', zorder=3)
    for t in trials:
        ax.annotate(f"{t.additional_load_kg:g} kg",
                    (t.mean_velocity_ms, t.mean_force_n),
                    textcoords='offset points', xytext=(0, 10),
                    ha='center', fontsize=8)

    title = f"F–V Profile: {outcome.athlete_id}"
    if outcome.regression is not None and len(velocities) > 0:
        reg = outcome.regression
        v_line = np.linspace(velocities.min(), velocities.max(), 50)
        ax.plot(v_line, reg.predict_force(v_line), 'b-', linewidth=2, label='Linear fit')
        title += f"   |   R² = {reg.r_squared:.3f}"

    if trials:
        body_mass = np.mean([t.body_mass_kg for t in trials])
        depth_cm = trials[0].pushoff_depth_m * 100
        ax.text(0.5, 1.01, f"Body mass = {body_mass:.1f} kg | Depth = {depth_cm:.1f} cm",
                transform=ax.transAxes, ha='center', va='bottom', fontsize=9)
        ax.set_ylim(top=forces.max() * 1.02 + 0.05 * np.ptp(forces))

    ax.set_xlabel('Mean Velocity (m/s)')
    ax.set_ylabel('Force (N)')
    ax.set_title(title, pad=20)
    ax.grid(True, alpha=0.3)

    return fig


def plot_fvi_summary(
    profiles: Sequence[AthleteProfile],
    params: Optional[ProfilingParams] = None,
    title: str = "Force-Velocity Imbalance",
    figsize: Tuple[int, int] = (10, 6),
    ax: Optional[plt.Axes] = None
) -> plt.Figure:
    """
    Horizontal bar chart of FVI per athlete over the classification bands.

    Athletes with undefined FVI are drawn as empty rows.

    Args:
        profiles: Athlete profiles
        params: Band edges (uses defaults if None)
        title: Plot title
        figsize: Figure size
        ax: Optional existing axes

    Returns:
        Matplotlib figure
    """
    if params is None:
        params = ProfilingParams()

    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.get_figure()

    fvi = np.array([p.fvi_percent for p in profiles], dtype=float)
    finite = fvi[np.isfinite(fvi)]
    x_max = max(180.0, finite.max() * 1.1) if len(finite) else 180.0

    edges = [0, params.fvi_high_force_deficit, params.fvi_low_force_deficit,
             params.fvi_balanced_high, params.fvi_low_velocity_deficit, x_max]
    labels = ['High Force Deficit', 'Low Force Deficit', 'Well Balanced',
              'Low Velocity Deficit', 'High Velocity Deficit']
    for lo, hi, label in zip(edges[:-1], edges[1:], labels):
        ax.axvspan(lo, hi, alpha=0.1, color=BAND_COLORS[label], label=label)

    y = np.arange(len(profiles))
    colors = [BAND_COLORS[p.recommendation.value] for p in profiles]
    ax.barh(y, np.nan_to_num(fvi, nan=0.0, posinf=x_max), color=colors, alpha=0.8)
    ax.axvline(100, color='black', linestyle='--', linewidth=1)

    ax.set_yticks(y)
    ax.set_yticklabels([p.athlete_id[:15] for p in profiles])
    ax.set_xlim(0, x_max)
    ax.set_xlabel('FVI (% of optimal slope)')
    ax.set_title(title)
    ax.legend(loc='lower right', fontsize=8)
    ax.grid(True, axis='x', alpha=0.3)

    return fig


def _safe_filename(name: str) -> str:
    return re.sub(r'[^A-Za-z0-9_.-]+', '_', name).strip('_') or 'athlete'


def save_profile_plots(
    outcomes: Sequence[AthleteOutcome],
    output_dir: Union[str, Path],
    dpi: int = 120
) -> List[Path]:
    """
    Save one F-V plot per profiled athlete as PNG.

    Returns:
        Paths written, in athlete order
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    paths = []
    for outcome in outcomes:
        if outcome.is_skipped:
            continue
        fig = plot_fv_profile(outcome)
        path = output_dir / f"fv_profile_{_safe_filename(outcome.athlete_id)}.png"
        fig.savefig(path, dpi=dpi, bbox_inches='tight')
        plt.close(fig)
        paths.append(path)

    return paths


def save_fvi_summary(
    profiles: Sequence[AthleteProfile],
    output_dir: Union[str, Path],
    params: Optional[ProfilingParams] = None,
    dpi: int = 120
) -> Path:
    """Save the FVI summary chart as fvi_summary.png."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    fig = plot_fvi_summary(profiles, params)
    path = output_dir / "fvi_summary.png"
    fig.savefig(path, dpi=dpi, bbox_inches='tight')
    plt.close(fig)

    return path
