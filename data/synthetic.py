"""
Synthetic jump data generation.

Generates athletes with a known force-velocity profile and the loaded jump
trials such an athlete would produce, by inverting the ballistic push-off
model. Useful for testing the profiler against known answers:
- Archetypes spread across the FVI bands
- Optional measurement noise on jump height and depth
- Output as RawTrial rows or a ForceDecks-style DataFrame
"""

from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any, Sequence
import math

import numpy as np
import pandas as pd

from core.optimal_slope import optimal_slope_per_kg
from core.params import G
from core.trials import RawTrial
from data.forcedecks_loader import DEFAULT_COLUMN_MAP


DEFAULT_LOADS = (0.0, 20.0, 40.0, 60.0, 80.0)


@dataclass
class JumperProfile:
    """
    Athlete with a known force-velocity profile.

    Force and slope are per kg of body mass; Pmax/kg follows from
    F0 and the slope.
    """
    id: str
    name: str
    body_mass_kg: float
    f0_per_kg: float             # N/kg
    slope_per_kg: float          # N·s/m/kg, negative
    pushoff_depth_m: float
    loads_kg: List[float] = field(default_factory=lambda: list(DEFAULT_LOADS))

    @property
    def v0(self) -> float:
        return -self.f0_per_kg / self.slope_per_kg

    @property
    def p_max_per_kg(self) -> float:
        return self.f0_per_kg * self.v0 / 4

    def to_dict(self) -> Dict[str, Any]:
        """Convert profile to dictionary."""
        return {
            'id': self.id,
            'name': self.name,
            'body_mass_kg': self.body_mass_kg,
            'f0_per_kg': self.f0_per_kg,
            'slope_per_kg': self.slope_per_kg,
            'v0': self.v0,
            'p_max_per_kg': self.p_max_per_kg,
            'pushoff_depth_m': self.pushoff_depth_m,
            'loads_kg': list(self.loads_kg),
        }


def profile_from_power(
    id: str,
    name: str,
    body_mass_kg: float,
    p_max_per_kg: float,
    fvi_ratio: float,
    pushoff_depth_m: float,
    loads_kg: Sequence[float] = DEFAULT_LOADS,
    gravity: float = G
) -> JumperProfile:
    """
    Build a profile from power and an imbalance ratio.

    The slope is fvi_ratio × optimal slope, so fvi_ratio = 1.0 is a
    perfectly balanced athlete. F0 follows from Pmax = -F0² / (4·S).
    """
    slope_opt = optimal_slope_per_kg(pushoff_depth_m, p_max_per_kg, gravity)
    slope = fvi_ratio * slope_opt
    f0 = 2 * math.sqrt(-p_max_per_kg * slope)

    return JumperProfile(
        id=id,
        name=name,
        body_mass_kg=body_mass_kg,
        f0_per_kg=f0,
        slope_per_kg=slope,
        pushoff_depth_m=pushoff_depth_m,
        loads_kg=list(loads_kg),
    )


def mean_pushoff_velocity(
    profile: JumperProfile,
    load_kg: float,
    gravity: float = G
) -> float:
    """
    Mean push-off velocity (m/s) of a jump with the given load.

    Solves F0 + S·v - m·g = 2·m·v² / s for v, with F0 and S in absolute
    units and m the system mass. NaN if the athlete cannot lift the load.
    """
    f0 = profile.f0_per_kg * profile.body_mass_kg
    slope = profile.slope_per_kg * profile.body_mass_kg
    m = profile.body_mass_kg + load_kg
    s = profile.pushoff_depth_m

    if f0 <= m * gravity:
        return math.nan

    a = 2 * m / s
    discriminant = slope**2 + 4 * a * (f0 - m * gravity)
    return (slope + math.sqrt(discriminant)) / (2 * a)


def generate_jump_trials(
    profile: JumperProfile,
    height_noise_cm: float = 0.0,
    depth_noise_cm: float = 0.0,
    gravity: float = G
) -> List[RawTrial]:
    """
    Generate one jump per load for an athlete.

    Depth is reported negative, as force plate exports do. Loads the
    athlete cannot lift produce no trial.

    Args:
        profile: Athlete profile
        height_noise_cm: SD of Gaussian noise on jump height (cm)
        depth_noise_cm: SD of Gaussian noise on depth (cm)
        gravity: Gravitational acceleration (m/s^2)

    Returns:
        List of RawTrial
    """
    trials = []
    for load in profile.loads_kg:
        v_mean = mean_pushoff_velocity(profile, load, gravity)
        if not math.isfinite(v_mean) or v_mean <= 0:
            continue

        height_cm = 2 * v_mean**2 / gravity * 100
        depth_cm = profile.pushoff_depth_m * 100

        if height_noise_cm > 0:
            height_cm += np.random.normal(0, height_noise_cm)
        if depth_noise_cm > 0:
            depth_cm += np.random.normal(0, depth_noise_cm)

        trials.append(RawTrial(
            athlete_id=profile.name,
            body_mass_kg=profile.body_mass_kg,
            additional_load_kg=load,
            jump_height_cm=height_cm,
            depth_cm=-depth_cm,
        ))

    return trials


# ═══════════════════════════════════════════════════════════════════════════════
# JUMPER ARCHETYPES
# ═══════════════════════════════════════════════════════════════════════════════

def create_force_deficient(id_num: int) -> JumperProfile:
    """Velocity-dominant jumper, profile well below optimal."""
    return profile_from_power(
        id=f"force_deficient_{id_num}",
        name=f"Force Deficient {id_num}",
        body_mass_kg=np.random.uniform(60, 80),
        p_max_per_kg=np.random.uniform(20, 28),
        fvi_ratio=np.random.uniform(0.40, 0.55),
        pushoff_depth_m=np.random.uniform(0.35, 0.45),
    )


def create_balanced(id_num: int) -> JumperProfile:
    """Jumper close to the optimal profile."""
    return profile_from_power(
        id=f"balanced_{id_num}",
        name=f"Balanced {id_num}",
        body_mass_kg=np.random.uniform(65, 90),
        p_max_per_kg=np.random.uniform(24, 32),
        fvi_ratio=np.random.uniform(0.95, 1.05),
        pushoff_depth_m=np.random.uniform(0.30, 0.45),
    )


def create_velocity_deficient(id_num: int) -> JumperProfile:
    """Strength-dominant jumper, profile steeper than optimal."""
    return profile_from_power(
        id=f"velocity_deficient_{id_num}",
        name=f"Velocity Deficient {id_num}",
        body_mass_kg=np.random.uniform(80, 105),
        p_max_per_kg=np.random.uniform(22, 30),
        fvi_ratio=np.random.uniform(1.50, 1.80),
        pushoff_depth_m=np.random.uniform(0.30, 0.40),
    )


def create_mild_force_deficit(id_num: int) -> JumperProfile:
    """Slightly force-deficient jumper."""
    return profile_from_power(
        id=f"mild_force_deficit_{id_num}",
        name=f"Mild Force Deficit {id_num}",
        body_mass_kg=np.random.uniform(60, 85),
        p_max_per_kg=np.random.uniform(20, 30),
        fvi_ratio=np.random.uniform(0.65, 0.85),
        pushoff_depth_m=np.random.uniform(0.30, 0.45),
    )


ARCHETYPE_CREATORS = [
    (create_force_deficient, 1),
    (create_mild_force_deficit, 1),
    (create_balanced, 1),
    (create_velocity_deficient, 1),
]


def generate_athlete_pool(
    n_athletes: int = 8,
    seed: Optional[int] = None
) -> List[JumperProfile]:
    """
    Generate jumpers spread across the FVI bands.

    Args:
        n_athletes: Number of athletes
        seed: Random seed for reproducibility

    Returns:
        List of JumperProfile
    """
    if seed is not None:
        np.random.seed(seed)

    profiles = []

    for creator, default_count in ARCHETYPE_CREATORS:
        for i in range(default_count):
            if len(profiles) >= n_athletes:
                break
            profiles.append(creator(i + 1))

    while len(profiles) < n_athletes:
        creator, _ = ARCHETYPE_CREATORS[np.random.randint(len(ARCHETYPE_CREATORS))]
        profiles.append(creator(len(profiles) + 1))

    return profiles[:n_athletes]


def generate_dataset(
    profiles: Sequence[JumperProfile],
    height_noise_cm: float = 0.0,
    depth_noise_cm: float = 0.0,
    seed: Optional[int] = None
) -> List[RawTrial]:
    """Jump trials for every profile, athletes in order."""
    if seed is not None:
        np.random.seed(seed)

    rows = []
    for profile in profiles:
        rows.extend(generate_jump_trials(profile, height_noise_cm, depth_noise_cm))
    return rows


def to_forcedecks_frame(rows: Sequence[RawTrial]) -> pd.DataFrame:
    """Raw trials as a DataFrame with ForceDecks export headers."""
    header_for = {canonical: header for header, canonical in DEFAULT_COLUMN_MAP.items()}
    records = [
        {header_for[name]: getattr(row, name) for name in header_for}
        for row in rows
    ]
    return pd.DataFrame(records, columns=list(DEFAULT_COLUMN_MAP))
