"""
Jump kinematics and mean concentric force (Samozino method).

Based on:
- Samozino et al. (2008): A simple method for measuring force, velocity
  and power output during squat jump

Mean push-off velocity and force are derived from jump height and push-off
distance alone, assuming constant acceleration over the push-off.
"""

from dataclasses import dataclass
from typing import List, Sequence, Tuple
import math

import numpy as np

from .params import G
from .trials import TrialRecord


@dataclass(frozen=True)
class DerivedTrial:
    """A validated trial with its push-off kinematics."""
    athlete_id: str
    body_mass_kg: float
    additional_load_kg: float
    jump_height_m: float
    pushoff_depth_m: float          # athlete median, not the raw depth
    total_system_mass_kg: float
    takeoff_velocity_ms: float
    mean_velocity_ms: float
    mean_acceleration_ms2: float
    mean_force_n: float


def median_depth(trials: Sequence[TrialRecord]) -> float:
    """Median push-off depth (m) across an athlete's trials."""
    if not trials:
        return math.nan
    return float(np.median([t.pushoff_depth_m for t in trials]))


def derive_trial(
    trial: TrialRecord,
    depth_m: float,
    gravity: float = G
) -> DerivedTrial:
    """
    Compute push-off kinematics for one trial.

    v_to = sqrt(2·g·h), v_mean = v_to / 2
    a_mean = v_to² / (2·s), F_mean = m_total · (g + a_mean)

    Args:
        trial: Validated trial
        depth_m: Push-off distance to use (athlete median)
        gravity: Gravitational acceleration (m/s^2)

    Returns:
        DerivedTrial
    """
    total_mass = trial.body_mass_kg + trial.additional_load_kg
    takeoff_velocity = math.sqrt(2 * gravity * trial.jump_height_m)
    mean_velocity = takeoff_velocity / 2

    with np.errstate(divide='ignore', invalid='ignore'):
        mean_acceleration = float(np.float64(takeoff_velocity ** 2) / (2 * np.float64(depth_m)))
    mean_force = total_mass * (gravity + mean_acceleration)

    return DerivedTrial(
        athlete_id=trial.athlete_id,
        body_mass_kg=trial.body_mass_kg,
        additional_load_kg=trial.additional_load_kg,
        jump_height_m=trial.jump_height_m,
        pushoff_depth_m=depth_m,
        total_system_mass_kg=total_mass,
        takeoff_velocity_ms=takeoff_velocity,
        mean_velocity_ms=mean_velocity,
        mean_acceleration_ms2=mean_acceleration,
        mean_force_n=mean_force,
    )


def derive_trials(
    trials: Sequence[TrialRecord],
    gravity: float = G
) -> Tuple[float, List[DerivedTrial]]:
    """
    Derive kinematics for one athlete's trials.

    Push-off distance is assumed constant across loads, so every trial uses
    the athlete's median depth. Trials whose mean velocity or force is not
    finite are dropped.

    Args:
        trials: One athlete's validated trials
        gravity: Gravitational acceleration (m/s^2)

    Returns:
        Tuple of (median_depth_m, derived_trials)
    """
    depth = median_depth(trials)

    derived = []
    for trial in trials:
        d = derive_trial(trial, depth, gravity)
        if math.isfinite(d.mean_velocity_ms) and math.isfinite(d.mean_force_n):
            derived.append(d)

    return depth, derived


def trial_arrays(derived: Sequence[DerivedTrial]) -> Tuple[np.ndarray, np.ndarray]:
    """Velocity and force columns of derived trials as arrays."""
    velocities = np.array([d.mean_velocity_ms for d in derived], dtype=float)
    forces = np.array([d.mean_force_n for d in derived], dtype=float)
    return velocities, forces
