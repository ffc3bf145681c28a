"""
Trial record validation.

Raw jump rows arrive in the units of a force plate export (kg, cm). This
module converts them to SI units, drops rows that cannot be used, and groups
the survivors by athlete.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union
import math

import pandas as pd

from .errors import DataQualityError
from .params import ProfilingParams


RAW_FIELDS = (
    'athlete_id',
    'body_mass_kg',
    'additional_load_kg',
    'jump_height_cm',
    'depth_cm',
)


@dataclass(frozen=True)
class RawTrial:
    """One jump as exported, before unit conversion."""
    athlete_id: Any
    body_mass_kg: Any
    additional_load_kg: Any
    jump_height_cm: Any
    depth_cm: Any


@dataclass(frozen=True)
class TrialRecord:
    """A validated jump trial in SI units."""
    athlete_id: str
    body_mass_kg: float
    additional_load_kg: float
    jump_height_m: float
    pushoff_depth_m: float


RawRow = Union[RawTrial, Mapping[str, Any]]


def _as_float(value: Any) -> float:
    """Coerce to float; anything unparseable becomes NaN."""
    if value is None or isinstance(value, bool):
        return math.nan
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def _as_athlete_id(value: Any) -> Optional[str]:
    if value is None or pd.isna(value):
        return None
    athlete_id = str(value).strip()
    return athlete_id or None


def _row_fields(row: RawRow) -> Dict[str, Any]:
    if isinstance(row, RawTrial):
        return {name: getattr(row, name) for name in RAW_FIELDS}
    return {name: row.get(name) for name in RAW_FIELDS}


def validate_trial(
    row: RawRow,
    params: Optional[ProfilingParams] = None
) -> Optional[TrialRecord]:
    """
    Convert one raw row to a TrialRecord.

    Height and depth are converted from cm to m; depth is made positive
    since exports report countermovement depth with either sign.

    Args:
        row: RawTrial or mapping with the RAW_FIELDS keys
        params: Profiling parameters (uses defaults if None)

    Returns:
        TrialRecord, or None if the row is unusable
    """
    if params is None:
        params = ProfilingParams()

    fields = _row_fields(row)

    athlete_id = _as_athlete_id(fields['athlete_id'])
    mass = _as_float(fields['body_mass_kg'])
    load = _as_float(fields['additional_load_kg'])
    jump_height = _as_float(fields['jump_height_cm']) / 100
    depth = abs(_as_float(fields['depth_cm']) / 100)

    if athlete_id is None:
        return None
    if not (math.isfinite(jump_height) and jump_height > 0):
        return None
    if not (math.isfinite(depth) and depth > 0):
        return None
    if not (math.isfinite(mass) and math.isfinite(load)):
        return None
    if load < 0 and not params.allow_negative_load:
        return None

    return TrialRecord(
        athlete_id=athlete_id,
        body_mass_kg=mass,
        additional_load_kg=load,
        jump_height_m=jump_height,
        pushoff_depth_m=depth,
    )


def validate_trials(
    rows: Union[pd.DataFrame, Iterable[RawRow]],
    params: Optional[ProfilingParams] = None
) -> List[TrialRecord]:
    """
    Validate a whole dataset, silently dropping unusable rows.

    Args:
        rows: DataFrame with RAW_FIELDS columns, or an iterable of raw rows
        params: Profiling parameters (uses defaults if None)

    Returns:
        Validated trials in input order

    Raises:
        DataQualityError: If no row survives validation
    """
    if isinstance(rows, pd.DataFrame):
        rows = rows.to_dict('records')

    trials = []
    for row in rows:
        trial = validate_trial(row, params)
        if trial is not None:
            trials.append(trial)

    if not trials:
        raise DataQualityError(
            "No valid rows after filtering. Check column names/units and data quality."
        )

    return trials


def group_by_athlete(trials: Iterable[TrialRecord]) -> Dict[str, Tuple[TrialRecord, ...]]:
    """
    Group trials by athlete.

    Athletes appear in the order they are first seen; trials keep their
    input order within each athlete.
    """
    groups: Dict[str, List[TrialRecord]] = {}
    for trial in trials:
        groups.setdefault(trial.athlete_id, []).append(trial)
    return {athlete_id: tuple(group) for athlete_id, group in groups.items()}
