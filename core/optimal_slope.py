"""
Optimal force-velocity slope for vertical jumping.

Based on:
- Samozino et al. (2012): Optimal force-velocity profile in ballistic
  movements. Altius: citius or fortius?
- Samozino et al. (2014): Force-velocity profile: imbalance determination
  and effect on lower limb ballistic performance

For a fixed push-off distance and maximal power, jump height depends on how
that power is split between force and velocity. The slope that maximizes
height is the real root of a depressed cubic, solved here in closed form.
All quantities are per kg of body mass.
"""

from typing import Tuple
import math

import numpy as np
from scipy.optimize import minimize_scalar

from .params import G


def signed_cbrt(value: float) -> float:
    """
    Real cube root that keeps the sign of its argument.

    value ** (1/3) is complex for negative floats; the real root of a
    negative number is the negated root of its magnitude.
    """
    return math.copysign(abs(value) ** (1.0 / 3.0), value)


def has_valid_slope_inputs(pushoff_distance_m: float, power_per_kg: float) -> bool:
    """Whether push-off distance and power/kg allow an optimal slope."""
    return (
        math.isfinite(pushoff_distance_m) and pushoff_distance_m > 0
        and math.isfinite(power_per_kg) and power_per_kg > 0
    )


def optimal_slope_per_kg(
    pushoff_distance_m: float,
    power_per_kg: float,
    gravity: float = G
) -> float:
    """
    Closed-form optimal F-V slope (N·s/m/kg).

    Args:
        pushoff_distance_m: Push-off distance s (m)
        power_per_kg: Maximal power P (W/kg)
        gravity: Gravitational acceleration (m/s^2)

    Returns:
        Optimal slope (always negative), or NaN if s or P is not finite and
        positive, or the cube root term vanishes
    """
    if not has_valid_slope_inputs(pushoff_distance_m, power_per_kg):
        return math.nan

    s = pushoff_distance_m
    p = power_per_kg
    g = gravity

    try:
        radical_inner = 2 * g**3 * s**9 * p**6 + 27 * s**8 * p**8
        radical = 6 * math.sqrt(3) * math.sqrt(radical_inner)
        x_input = (
            -(g**6 * s**6)
            - 18 * g**3 * s**5 * p**2
            - 54 * s**4 * p**4
            + radical
        )
        x = signed_cbrt(x_input)

        if x == 0 or not math.isfinite(x):
            return math.nan

        tmp = (
            -(g**2) / (3 * p)
            - (-(g**4) * s**4 - 12 * g * s**3 * p**2) / (3 * s**2 * p * x)
            + x / (3 * s**2 * p)
        )
    except (OverflowError, ZeroDivisionError):
        return math.nan

    if not math.isfinite(tmp):
        return math.nan

    return -abs(tmp)


def theoretical_jump_height(
    slope_per_kg: float,
    power_per_kg: float,
    pushoff_distance_m: float,
    gravity: float = G
) -> float:
    """
    Jump height predicted by the ballistic push-off model.

    With F0 = 2·sqrt(-P·S) and mean force F = F0 + S·v over the push-off,
    the work-energy balance (F - g)·s = 2·v² gives the mean velocity v and
    the height h = 2·v² / g.

    Returns:
        Height (m), 0 when F0 cannot lift the body, NaN for invalid input
    """
    if not (math.isfinite(slope_per_kg) and slope_per_kg < 0):
        return math.nan
    if not has_valid_slope_inputs(pushoff_distance_m, power_per_kg):
        return math.nan

    s = pushoff_distance_m
    f0 = 2 * math.sqrt(-power_per_kg * slope_per_kg)
    if f0 <= gravity:
        return 0.0

    b = slope_per_kg * s
    mean_velocity = (b + math.sqrt(b**2 + 8 * s * (f0 - gravity))) / 4
    return 2 * mean_velocity**2 / gravity


def numerical_optimal_slope(
    pushoff_distance_m: float,
    power_per_kg: float,
    gravity: float = G,
    bounds: Tuple[float, float] = (-300.0, -0.01)
) -> float:
    """
    Optimal slope found by maximizing theoretical_jump_height numerically.

    Used to cross-check the closed-form solution.

    Returns:
        Slope (N·s/m/kg) or NaN for invalid input
    """
    if not has_valid_slope_inputs(pushoff_distance_m, power_per_kg):
        return math.nan

    def negative_height(slope):
        return -theoretical_jump_height(slope, power_per_kg, pushoff_distance_m, gravity)

    result = minimize_scalar(
        negative_height,
        bounds=bounds,
        method='bounded',
        options={'xatol': 1e-6}
    )
    return float(result.x)


def jump_height_potential(
    slope_per_kg: float,
    slope_opt_per_kg: float,
    power_per_kg: float,
    pushoff_distance_m: float,
    gravity: float = G
) -> float:
    """
    Predicted height at the actual slope as % of the height at the optimum.

    100% means the athlete already jumps as high as their power allows.
    """
    h_actual = theoretical_jump_height(slope_per_kg, power_per_kg, pushoff_distance_m, gravity)
    h_optimal = theoretical_jump_height(slope_opt_per_kg, power_per_kg, pushoff_distance_m, gravity)

    if not (np.isfinite(h_actual) and np.isfinite(h_optimal)) or h_optimal <= 0:
        return math.nan
    return h_actual / h_optimal * 100
