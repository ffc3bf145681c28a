"""
Force-velocity imbalance (FVI) and training-focus classification.

FVI = |S_fv / S_fv_opt| × 100

Below 100% the athlete's profile is flatter than optimal (force deficit),
above 100% steeper than optimal (velocity deficit).
"""

from enum import Enum
from typing import Optional
import math

from .params import ProfilingParams


class Recommendation(Enum):
    """Training focus derived from FVI."""
    INSUFFICIENT_DATA = "Insufficient Data"
    HIGH_FORCE_DEFICIT = "High Force Deficit"
    LOW_FORCE_DEFICIT = "Low Force Deficit"
    WELL_BALANCED = "Well Balanced"
    LOW_VELOCITY_DEFICIT = "Low Velocity Deficit"
    HIGH_VELOCITY_DEFICIT = "High Velocity Deficit"


def calculate_fvi(slope_per_kg: float, slope_opt_per_kg: float) -> float:
    """
    FVI as a percentage of the optimal slope.

    Returns:
        FVI (%), or NaN when the optimal slope is non-finite or zero
    """
    if not math.isfinite(slope_opt_per_kg) or slope_opt_per_kg == 0:
        return math.nan
    return abs(slope_per_kg / slope_opt_per_kg) * 100


def classify_fvi(
    fvi_percent: float,
    params: Optional[ProfilingParams] = None
) -> Recommendation:
    """
    Map FVI to a training-focus category.

    Bands (defaults):
        - < 60: High Force Deficit
        - 60 to < 90: Low Force Deficit
        - 90 to 110: Well Balanced
        - > 110 to 140: Low Velocity Deficit
        - > 140: High Velocity Deficit

    Args:
        fvi_percent: FVI (%); NaN means undefined
        params: Profiling parameters with band edges (uses defaults if None)

    Returns:
        Recommendation
    """
    if params is None:
        params = ProfilingParams()

    if fvi_percent is None or math.isnan(fvi_percent):
        return Recommendation.INSUFFICIENT_DATA
    elif fvi_percent < params.fvi_high_force_deficit:
        return Recommendation.HIGH_FORCE_DEFICIT
    elif fvi_percent < params.fvi_low_force_deficit:
        return Recommendation.LOW_FORCE_DEFICIT
    elif fvi_percent <= params.fvi_balanced_high:
        return Recommendation.WELL_BALANCED
    elif fvi_percent <= params.fvi_low_velocity_deficit:
        return Recommendation.LOW_VELOCITY_DEFICIT
    else:
        return Recommendation.HIGH_VELOCITY_DEFICIT
