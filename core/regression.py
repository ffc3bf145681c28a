"""
Linear force-velocity regression.

F(v) = F0 + S_fv · v

F0 is the intercept (force at zero velocity), S_fv the slope (negative for a
real athlete), V0 = -F0 / S_fv the velocity at zero force and, under the
parabolic power-velocity relation implied by a linear F-V line,
Pmax = F0 · V0 / 4.
"""

from dataclasses import dataclass
from typing import Sequence, Tuple
import math

import numpy as np
from scipy import stats

from .errors import DegenerateFitError, InsufficientTrialsError, InvalidMassError
from .kinematics import DerivedTrial, trial_arrays


@dataclass(frozen=True)
class FVRegression:
    """Result of a linear F-V fit."""
    force_at_zero_n: float       # F0 (N)
    slope_actual: float          # S_fv (N·s/m)
    velocity_at_zero_ms: float   # V0 (m/s)
    max_power_w: float           # Pmax (W)
    r_squared: float
    n_trials: int

    def predict_force(self, velocity_ms):
        """Force on the fitted line at the given velocity."""
        return self.force_at_zero_n + self.slope_actual * np.asarray(velocity_ms, dtype=float)


def _ratio(numerator: float, denominator: float) -> float:
    """IEEE division: x/0 gives ±inf or NaN instead of raising."""
    with np.errstate(divide='ignore', invalid='ignore'):
        return float(np.float64(numerator) / np.float64(denominator))


def fit_force_velocity(
    derived: Sequence[DerivedTrial],
    athlete_id: str = '',
    min_trials: int = 2
) -> FVRegression:
    """
    Ordinary least-squares fit of mean force on mean velocity.

    Args:
        derived: One athlete's derived trials
        athlete_id: Used in error messages
        min_trials: Minimum number of trials required

    Returns:
        FVRegression

    Raises:
        InsufficientTrialsError: Fewer than min_trials trials
        DegenerateFitError: Velocities all identical or coefficients non-finite
    """
    if len(derived) < min_trials:
        raise InsufficientTrialsError(
            athlete_id, f"has {len(derived)} valid trial(s), needs at least {min_trials}"
        )

    velocities, forces = trial_arrays(derived)

    # linregress refuses a vertical line
    if np.ptp(velocities) == 0:
        raise DegenerateFitError(athlete_id, "all trials have the same mean velocity")

    fit = stats.linregress(velocities, forces)
    force_at_zero = float(fit.intercept)
    slope = float(fit.slope)

    if not (math.isfinite(force_at_zero) and math.isfinite(slope)):
        raise DegenerateFitError(athlete_id, "non-finite regression coefficients")

    velocity_at_zero = _ratio(-force_at_zero, slope)
    max_power = force_at_zero * velocity_at_zero / 4

    return FVRegression(
        force_at_zero_n=force_at_zero,
        slope_actual=slope,
        velocity_at_zero_ms=velocity_at_zero,
        max_power_w=max_power,
        r_squared=float(fit.rvalue) ** 2,
        n_trials=len(derived),
    )


def normalize_per_kg(
    regression: FVRegression,
    derived: Sequence[DerivedTrial],
    athlete_id: str = ''
) -> Tuple[float, float, float]:
    """
    Express slope and Pmax per kg of body mass.

    The lightest recorded body mass stands in for unloaded body weight.

    Returns:
        Tuple of (slope_per_kg, p_max_per_kg, mass_min)

    Raises:
        InvalidMassError: If the minimum body mass is non-finite or <= 0
    """
    masses = [d.body_mass_kg for d in derived]
    mass_min = min(masses) if masses else math.nan

    if not (math.isfinite(mass_min) and mass_min > 0):
        raise InvalidMassError(athlete_id, f"invalid minimum body mass ({mass_min})")

    slope_per_kg = regression.slope_actual / mass_min
    p_max_per_kg = regression.max_power_w / mass_min

    return slope_per_kg, p_max_per_kg, mass_min
