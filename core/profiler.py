"""
Jump Profiler: per-athlete force-velocity profiling pipeline.

Ties together the individual modules:
- Trial validation and grouping
- Kinematics with median push-off distance
- Linear F-V regression and per-kg normalization
- Optimal slope and FVI classification

Each athlete yields an AthleteOutcome. Athletes that cannot be profiled
carry the conditions that explain why, so a batch never fails because of a
single athlete.
"""

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union
import math

import numpy as np
import pandas as pd

from .errors import AthleteProfilingError, DegenerateFitError, InsufficientTrialsError, InvalidMassError
from .imbalance import Recommendation, calculate_fvi, classify_fvi
from .kinematics import DerivedTrial, derive_trials
from .optimal_slope import jump_height_potential, optimal_slope_per_kg
from .params import ProfilingParams
from .regression import FVRegression, fit_force_velocity, normalize_per_kg
from .trials import RawRow, TrialRecord, group_by_athlete, validate_trials


class ConditionType(Enum):
    """Reasons an athlete's profile is missing or incomplete."""
    INSUFFICIENT_TRIALS = "InsufficientTrials"
    DEGENERATE_FIT = "DegenerateFit"
    INVALID_MASS = "InvalidMass"
    INSUFFICIENT_OPTIMAL_SLOPE_INPUTS = "InsufficientOptimalSlopeInputs"

    @property
    def skips_athlete(self) -> bool:
        """Whether the condition removes the athlete from the output."""
        return self is not ConditionType.INSUFFICIENT_OPTIMAL_SLOPE_INPUTS


_ERROR_CONDITIONS = {
    InsufficientTrialsError: ConditionType.INSUFFICIENT_TRIALS,
    DegenerateFitError: ConditionType.DEGENERATE_FIT,
    InvalidMassError: ConditionType.INVALID_MASS,
}


@dataclass(frozen=True)
class AthleteCondition:
    """A condition recorded against one athlete."""
    athlete_id: str
    condition: ConditionType
    detail: str = ""

    def __str__(self) -> str:
        return f"{self.athlete_id}: {self.condition.value} ({self.detail})"


@dataclass(frozen=True)
class AthleteProfile:
    """
    Force-velocity profile of one athlete.

    Slopes per kg are in N·s/m/kg; fvi_percent and height_potential_pct are
    NaN when the optimal slope is undefined.
    """
    athlete_id: str
    body_mass_kg: float          # mean across trials
    depth_med_m: float
    force_at_zero_n: float       # F0
    velocity_at_zero_ms: float   # V0
    max_power_w: float           # Pmax
    slope_actual: float
    slope_per_kg: float
    slope_opt_per_kg: float
    fvi_percent: float
    r_squared: float
    recommendation: Recommendation
    p_max_per_kg: float = math.nan
    height_potential_pct: float = math.nan
    n_trials: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert profile to dictionary with the recommendation as text."""
        d = asdict(self)
        d['recommendation'] = self.recommendation.value
        return d


@dataclass
class AthleteOutcome:
    """
    Everything the pipeline produced for one athlete.

    `profile` is None when a skipping condition was hit. `derived_trials`
    and `regression` are kept for rendering.
    """
    athlete_id: str
    profile: Optional[AthleteProfile] = None
    conditions: List[AthleteCondition] = field(default_factory=list)
    derived_trials: List[DerivedTrial] = field(default_factory=list)
    regression: Optional[FVRegression] = None

    @property
    def is_skipped(self) -> bool:
        return self.profile is None


@dataclass
class ProfilingResult:
    """Outcomes of one profiling run, in athlete first-seen order."""
    outcomes: List[AthleteOutcome]
    params: ProfilingParams
    n_valid_trials: int = 0

    @property
    def profiles(self) -> List[AthleteProfile]:
        return [o.profile for o in self.outcomes if o.profile is not None]

    @property
    def conditions(self) -> List[AthleteCondition]:
        return [c for o in self.outcomes for c in o.conditions]

    @property
    def skipped(self) -> List[AthleteCondition]:
        """Conditions that removed an athlete from the output."""
        return [c for c in self.conditions if c.condition.skips_athlete]

    def get_outcome(self, athlete_id: str) -> Optional[AthleteOutcome]:
        for outcome in self.outcomes:
            if outcome.athlete_id == athlete_id:
                return outcome
        return None

    def to_dataframe(self) -> pd.DataFrame:
        """Profiles as a DataFrame (full precision, one row per athlete)."""
        columns = list(AthleteProfile.__dataclass_fields__)
        return pd.DataFrame([p.to_dict() for p in self.profiles], columns=columns)


def profile_athlete(
    athlete_id: str,
    trials: Sequence[TrialRecord],
    params: Optional[ProfilingParams] = None
) -> AthleteOutcome:
    """
    Run the profiling pipeline for one athlete.

    Args:
        athlete_id: Athlete identifier
        trials: The athlete's validated trials
        params: Profiling parameters (uses defaults if None)

    Returns:
        AthleteOutcome with either a profile or a skipping condition
    """
    if params is None:
        params = ProfilingParams()

    g = params.gravity
    outcome = AthleteOutcome(athlete_id=athlete_id)

    depth_med, derived = derive_trials(trials, gravity=g)
    outcome.derived_trials = derived

    try:
        regression = fit_force_velocity(derived, athlete_id, params.min_trials)
        outcome.regression = regression
        slope_per_kg, p_max_per_kg, _ = normalize_per_kg(regression, derived, athlete_id)
    except AthleteProfilingError as e:
        outcome.conditions.append(
            AthleteCondition(athlete_id, _ERROR_CONDITIONS[type(e)], e.detail)
        )
        return outcome

    slope_opt = optimal_slope_per_kg(depth_med, p_max_per_kg, gravity=g)
    if math.isnan(slope_opt):
        outcome.conditions.append(AthleteCondition(
            athlete_id,
            ConditionType.INSUFFICIENT_OPTIMAL_SLOPE_INPUTS,
            f"depth={depth_med:.3f} m, power={p_max_per_kg:.2f} W/kg",
        ))

    fvi = calculate_fvi(slope_per_kg, slope_opt)

    outcome.profile = AthleteProfile(
        athlete_id=athlete_id,
        body_mass_kg=float(np.mean([d.body_mass_kg for d in derived])),
        depth_med_m=depth_med,
        force_at_zero_n=regression.force_at_zero_n,
        velocity_at_zero_ms=regression.velocity_at_zero_ms,
        max_power_w=regression.max_power_w,
        slope_actual=regression.slope_actual,
        slope_per_kg=slope_per_kg,
        slope_opt_per_kg=slope_opt,
        fvi_percent=fvi,
        r_squared=regression.r_squared,
        recommendation=classify_fvi(fvi, params),
        p_max_per_kg=p_max_per_kg,
        height_potential_pct=jump_height_potential(
            slope_per_kg, slope_opt, p_max_per_kg, depth_med, gravity=g
        ),
        n_trials=regression.n_trials,
    )
    return outcome


def profile_athletes(
    rows: Union[pd.DataFrame, Iterable[RawRow]],
    params: Optional[ProfilingParams] = None,
    verbose: bool = False
) -> ProfilingResult:
    """
    Profile every athlete in a dataset of raw jump rows.

    Args:
        rows: Raw rows (see core.trials.RAW_FIELDS) or a DataFrame of them
        params: Profiling parameters (uses defaults if None)
        verbose: Print a line for each athlete with a condition

    Returns:
        ProfilingResult

    Raises:
        ValueError: If params are invalid
        DataQualityError: If no row survives validation
    """
    if params is None:
        params = ProfilingParams()

    ok, message = params.validate()
    if not ok:
        raise ValueError(f"Invalid profiling parameters: {message}")

    trials = validate_trials(rows, params)
    groups = group_by_athlete(trials)

    outcomes = []
    for athlete_id, athlete_trials in groups.items():
        outcome = profile_athlete(athlete_id, athlete_trials, params)
        if verbose:
            for condition in outcome.conditions:
                action = "Skipping" if condition.condition.skips_athlete else "Reported"
                print(f"  {action} {condition}")
        outcomes.append(outcome)

    return ProfilingResult(
        outcomes=outcomes,
        params=params,
        n_valid_trials=len(trials),
    )


def summarize_recommendations(result: ProfilingResult) -> Dict[str, int]:
    """Count profiles per recommendation, in band order."""
    counts = {r.value: 0 for r in Recommendation}
    for profile in result.profiles:
        counts[profile.recommendation.value] += 1
    return counts
