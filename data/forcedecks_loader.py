"""
ForceDecks Jump Export Loader
=============================

Loads loaded/unloaded jump trials from a VALD ForceDecks CSV export and
renames the columns the profiler needs.

Expected export columns:
- Name: Athlete name
- BW [KG]: Body weight (kg)
- Additional Load [kg]: External load (kg), 0 for unloaded jumps
- Jump Height (Imp-Mom) [cm]: Jump height from impulse-momentum
- Countermovement Depth [cm]: Push-off depth (sign ignored)

Other exports work too if a column map to the canonical names is given.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Union

import pandas as pd

from core.errors import MissingColumnsError
from core.params import ProfilingParams
from core.trials import RAW_FIELDS, RawTrial, validate_trial


DEFAULT_COLUMN_MAP: Dict[str, str] = {
    'Name': 'athlete_id',
    'BW [KG]': 'body_mass_kg',
    'Additional Load [kg]': 'additional_load_kg',
    'Jump Height (Imp-Mom) [cm]': 'jump_height_cm',
    'Countermovement Depth [cm]': 'depth_cm',
}


@dataclass
class JumpDatasetStats:
    """Statistics about the loaded dataset."""
    n_rows: int
    n_valid_rows: int
    n_athletes: int
    avg_trials_per_athlete: float

    @property
    def n_dropped_rows(self) -> int:
        return self.n_rows - self.n_valid_rows


def rename_columns(
    raw: pd.DataFrame,
    column_map: Optional[Dict[str, str]] = None
) -> pd.DataFrame:
    """
    Select and rename export columns to the canonical RAW_FIELDS.

    Columns already carrying a canonical name are accepted as-is.

    Raises:
        MissingColumnsError: If a required column is absent
    """
    if column_map is None:
        column_map = DEFAULT_COLUMN_MAP

    source_for = {canonical: source for source, canonical in column_map.items()}

    missing = []
    selected = {}
    for canonical in RAW_FIELDS:
        source = source_for.get(canonical)
        if source is not None and source in raw.columns:
            selected[canonical] = raw[source]
        elif canonical in raw.columns:
            selected[canonical] = raw[canonical]
        else:
            missing.append(source or canonical)

    if missing:
        raise MissingColumnsError(missing)

    df = pd.DataFrame(selected, columns=list(RAW_FIELDS))
    for col in RAW_FIELDS[1:]:
        df[col] = pd.to_numeric(df[col], errors='coerce')
    return df


class ForceDecksLoader:
    """
    Loader for ForceDecks jump exports.

    Keeps the renamed table and reports how many rows will survive
    validation.
    """

    def __init__(
        self,
        data_path: Union[str, Path],
        column_map: Optional[Dict[str, str]] = None,
        params: Optional[ProfilingParams] = None
    ):
        """
        Initialize the loader.

        Args:
            data_path: Path to the CSV export
            column_map: Export header -> canonical name (ForceDecks if None)
            params: Profiling parameters used to count valid rows
        """
        self.data_path = Path(data_path)
        self.column_map = column_map or DEFAULT_COLUMN_MAP
        self.params = params or ProfilingParams()
        self.raw_data: Optional[pd.DataFrame] = None
        self.trials: Optional[pd.DataFrame] = None
        self.stats: Optional[JumpDatasetStats] = None

    def load(self, verbose: bool = True) -> pd.DataFrame:
        """
        Load and rename the export.

        Args:
            verbose: Print loading information

        Returns:
            DataFrame with RAW_FIELDS columns, one row per jump
        """
        if verbose:
            print("=" * 70)
            print("LOADING FORCEDECKS JUMP EXPORT")
            print("=" * 70)

        self.raw_data = pd.read_csv(self.data_path)

        if verbose:
            print(f"Loaded {len(self.raw_data):,} rows from {self.data_path.name}")

        self.trials = rename_columns(self.raw_data, self.column_map)
        self._calculate_stats(verbose)

        return self.trials

    def _calculate_stats(self, verbose: bool = True) -> None:
        """Count rows that pass validation."""
        valid = [
            trial for trial in (validate_trial(row, self.params) for row in self.to_raw_trials())
            if trial is not None
        ]
        n_athletes = len({t.athlete_id for t in valid})

        self.stats = JumpDatasetStats(
            n_rows=len(self.trials),
            n_valid_rows=len(valid),
            n_athletes=n_athletes,
            avg_trials_per_athlete=len(valid) / n_athletes if n_athletes else 0.0,
        )

        if verbose:
            print(f"\nDataset Statistics:")
            print(f"  Athletes: {self.stats.n_athletes}")
            print(f"  Valid trials: {self.stats.n_valid_rows:,}")
            print(f"  Dropped rows: {self.stats.n_dropped_rows:,}")
            print(f"  Avg trials/athlete: {self.stats.avg_trials_per_athlete:.1f}")

    def to_raw_trials(self) -> List[RawTrial]:
        """Loaded rows as RawTrial records, in file order."""
        if self.trials is None:
            raise RuntimeError("Call load() before to_raw_trials()")
        return [RawTrial(**row) for row in self.trials.to_dict('records')]


def load_forcedecks_csv(
    data_path: Union[str, Path],
    column_map: Optional[Dict[str, str]] = None,
    verbose: bool = False
) -> List[RawTrial]:
    """Load an export straight to RawTrial records."""
    loader = ForceDecksLoader(data_path, column_map)
    loader.load(verbose=verbose)
    return loader.to_raw_trials()
