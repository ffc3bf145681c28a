"""
Core equations for vertical jump force-velocity profiling.

This package provides:
- Trial validation (unit conversion, filtering, grouping)
- Push-off kinematics and mean force (Samozino method)
- Linear F-V regression (F0, V0, Pmax)
- Optimal F-V slope (closed-form cubic solution)
- F-V imbalance classification
- The per-athlete profiling pipeline
"""

# Parameters
from .params import (
    G,
    ProfilingParams,
    load_params,
)

# Errors
from .errors import (
    ProfilingError,
    DataQualityError,
    MissingColumnsError,
    AthleteProfilingError,
    InsufficientTrialsError,
    DegenerateFitError,
    InvalidMassError,
)

# Trial validation
from .trials import (
    RAW_FIELDS,
    RawTrial,
    TrialRecord,
    validate_trial,
    validate_trials,
    group_by_athlete,
)

# Kinematics
from .kinematics import (
    DerivedTrial,
    median_depth,
    derive_trial,
    derive_trials,
)

# Regression
from .regression import (
    FVRegression,
    fit_force_velocity,
    normalize_per_kg,
)

# Optimal slope
from .optimal_slope import (
    signed_cbrt,
    optimal_slope_per_kg,
    theoretical_jump_height,
    numerical_optimal_slope,
    jump_height_potential,
)

# Imbalance
from .imbalance import (
    Recommendation,
    calculate_fvi,
    classify_fvi,
)

# Pipeline
from .profiler import (
    ConditionType,
    AthleteCondition,
    AthleteProfile,
    AthleteOutcome,
    ProfilingResult,
    profile_athlete,
    profile_athletes,
    summarize_recommendations,
)

__all__ = [
    # Parameters
    'G',
    'ProfilingParams',
    'load_params',
    # Errors
    'ProfilingError',
    'DataQualityError',
    'MissingColumnsError',
    'AthleteProfilingError',
    'InsufficientTrialsError',
    'DegenerateFitError',
    'InvalidMassError',
    # Trials
    'RAW_FIELDS',
    'RawTrial',
    'TrialRecord',
    'validate_trial',
    'validate_trials',
    'group_by_athlete',
    # Kinematics
    'DerivedTrial',
    'median_depth',
    'derive_trial',
    'derive_trials',
    # Regression
    'FVRegression',
    'fit_force_velocity',
    'normalize_per_kg',
    # Optimal slope
    'signed_cbrt',
    'optimal_slope_per_kg',
    'theoretical_jump_height',
    'numerical_optimal_slope',
    'jump_height_potential',
    # Imbalance
    'Recommendation',
    'calculate_fvi',
    'classify_fvi',
    # Pipeline
    'ConditionType',
    'AthleteCondition',
    'AthleteProfile',
    'AthleteOutcome',
    'ProfilingResult',
    'profile_athlete',
    'profile_athletes',
    'summarize_recommendations',
]
