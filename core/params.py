"""
Tunable parameters for jump force-velocity profiling.

Physical constants and classification thresholds used across the profiling
pipeline. Defaults reproduce Samozino's vertical jump method and the usual
FVI training-focus bands.
"""

from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Dict, Any, Tuple, Union
import json
import math


G = 9.81  # gravitational acceleration (m/s^2)


@dataclass
class ProfilingParams:
    """
    Parameters for the per-athlete profiling pipeline.

    FVI thresholds are percentages of the optimal slope. A value below
    `fvi_high_force_deficit` is a large force deficit, values up to
    `fvi_balanced_high` (inclusive) are balanced, and so on.
    """

    # ═══════════════════════════════════════════════════════════════════════════
    # PHYSICS
    # ═══════════════════════════════════════════════════════════════════════════

    gravity: float = G

    # ═══════════════════════════════════════════════════════════════════════════
    # DATA REQUIREMENTS
    # ═══════════════════════════════════════════════════════════════════════════

    min_trials: int = 2                 # Fewer valid trials: athlete skipped
    allow_negative_load: bool = False   # Reject rows with load < 0

    # ═══════════════════════════════════════════════════════════════════════════
    # FVI BANDS (% of optimal slope)
    # ═══════════════════════════════════════════════════════════════════════════

    fvi_high_force_deficit: float = 60.0    # Below: High Force Deficit
    fvi_low_force_deficit: float = 90.0     # Below: Low Force Deficit
    fvi_balanced_high: float = 110.0        # Up to: Well Balanced
    fvi_low_velocity_deficit: float = 140.0  # Up to: Low Velocity Deficit

    def to_dict(self) -> Dict[str, Any]:
        """Convert parameters to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'ProfilingParams':
        """Create parameters from dictionary."""
        return cls(**d)

    def validate(self) -> Tuple[bool, str]:
        """Validate parameter constraints."""
        issues = []

        if not (math.isfinite(self.gravity) and self.gravity > 0):
            issues.append("gravity must be finite and positive")

        if self.min_trials < 2:
            issues.append("min_trials must be at least 2 for a linear fit")

        thresholds = [
            self.fvi_high_force_deficit,
            self.fvi_low_force_deficit,
            self.fvi_balanced_high,
            self.fvi_low_velocity_deficit,
        ]
        if not all(math.isfinite(t) for t in thresholds):
            issues.append("FVI thresholds must be finite")
        elif not (0 < thresholds[0] < thresholds[1] <= thresholds[2] < thresholds[3]):
            issues.append("FVI thresholds must be positive and in ascending order")

        if issues:
            return False, "; ".join(issues)
        return True, "Valid"

    def save(self, path: Union[str, Path]) -> None:
        """Write parameters as JSON."""
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)


def load_params(path: Union[str, Path]) -> ProfilingParams:
    """
    Load parameters from a JSON file.

    Keys missing from the file keep their defaults.

    Raises:
        ValueError: If the file holds unknown keys or invalid values,
            including values of the wrong type
    """
    with open(path) as f:
        data = json.load(f)

    known = set(ProfilingParams().to_dict())
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"Unknown parameter(s) in {path}: {', '.join(sorted(unknown))}")

    params = ProfilingParams.from_dict(data)
    try:
        ok, message = params.validate()
    except TypeError as e:
        raise ValueError(f"Invalid parameters in {path}: {e}") from e
    if not ok:
        raise ValueError(f"Invalid parameters in {path}: {message}")
    return params
