"""
Comprehensive tests for the jump force-velocity profiling equations.

Tests cover:
1. Trial validation and grouping
2. Kinematics and median push-off depth
3. Linear F-V regression and per-kg normalization
4. Optimal slope (closed form and numerical cross-check)
5. FVI classification
6. Full profiling pipeline
7. Parameters

Run with: python -m pytest tests/test_equations.py -v
"""

import math

import pytest
import numpy as np
import pandas as pd

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.errors import (
    DataQualityError,
    DegenerateFitError,
    InsufficientTrialsError,
    InvalidMassError,
)
from core.params import G, ProfilingParams, load_params
from core.trials import (
    RawTrial,
    TrialRecord,
    group_by_athlete,
    validate_trial,
    validate_trials,
)
from core.kinematics import DerivedTrial, derive_trial, derive_trials, median_depth
from core.regression import fit_force_velocity, normalize_per_kg
from core.optimal_slope import (
    jump_height_potential,
    numerical_optimal_slope,
    optimal_slope_per_kg,
    signed_cbrt,
    theoretical_jump_height,
)
from core.imbalance import Recommendation, calculate_fvi, classify_fvi
from core.profiler import ConditionType, profile_athlete, profile_athletes
from data.synthetic import generate_jump_trials, profile_from_power


def make_trial(athlete_id='A', mass=80.0, load=0.0, height_m=0.35, depth_m=0.40):
    return TrialRecord(
        athlete_id=athlete_id,
        body_mass_kg=mass,
        additional_load_kg=load,
        jump_height_m=height_m,
        pushoff_depth_m=depth_m,
    )


def make_derived(velocities, forces, mass=80.0):
    """Derived trials with the given mean velocities and forces."""
    return [
        DerivedTrial(
            athlete_id='A',
            body_mass_kg=mass,
            additional_load_kg=0.0,
            jump_height_m=0.3,
            pushoff_depth_m=0.4,
            total_system_mass_kg=mass,
            takeoff_velocity_ms=2 * v,
            mean_velocity_ms=v,
            mean_acceleration_ms2=0.0,
            mean_force_n=f,
        )
        for v, f in zip(velocities, forces)
    ]


# =============================================================================
# Trial Validation Tests
# =============================================================================

class TestTrialValidation:
    """Tests for raw row validation."""

    def test_converts_cm_to_m(self):
        """Height and depth are converted from cm to m."""
        trial = validate_trial(RawTrial('A', 80, 20, 35.0, 40.0))
        assert trial.jump_height_m == pytest.approx(0.35)
        assert trial.pushoff_depth_m == pytest.approx(0.40)
        assert trial.additional_load_kg == 20.0

    def test_negative_depth_made_positive(self):
        """Exports report depth as negative; sign is ignored."""
        trial = validate_trial(RawTrial('A', 80, 0, 35.0, -42.0))
        assert trial.pushoff_depth_m == pytest.approx(0.42)

    def test_zero_load_is_valid(self):
        """Unloaded jumps have load 0."""
        assert validate_trial(RawTrial('A', 80, 0, 35.0, 40.0)) is not None

    @pytest.mark.parametrize('row', [
        RawTrial('A', 80, 0, 0.0, 40.0),            # zero height
        RawTrial('A', 80, 0, -5.0, 40.0),           # negative height
        RawTrial('A', 80, 0, 35.0, 0.0),            # zero depth
        RawTrial('A', 80, 0, float('nan'), 40.0),   # missing height
        RawTrial('A', 80, 0, 35.0, float('inf')),   # infinite depth
        RawTrial('A', float('nan'), 0, 35.0, 40.0),  # missing mass
        RawTrial('A', 80, float('inf'), 35.0, 40.0),  # infinite load
        RawTrial('A', 80, 'abc', 35.0, 40.0),       # non-numeric load
        RawTrial('', 80, 0, 35.0, 40.0),            # empty id
        RawTrial(None, 80, 0, 35.0, 40.0),          # missing id
    ])
    def test_invalid_rows_rejected(self, row):
        """Rows with unusable values are dropped."""
        assert validate_trial(row) is None

    def test_negative_load_rejected_by_default(self):
        """Negative additional load is invalid data."""
        assert validate_trial(RawTrial('A', 80, -10, 35.0, 40.0)) is None

    def test_negative_load_allowed_by_param(self):
        """Assisted jumps can be accepted explicitly."""
        params = ProfilingParams(allow_negative_load=True)
        trial = validate_trial(RawTrial('A', 80, -10, 35.0, 40.0), params)
        assert trial.additional_load_kg == -10

    def test_mapping_rows_accepted(self):
        """Rows may be plain dicts with canonical keys."""
        row = {
            'athlete_id': 'A',
            'body_mass_kg': 80,
            'additional_load_kg': 0,
            'jump_height_cm': 30,
            'depth_cm': 40,
        }
        assert validate_trial(row).jump_height_m == pytest.approx(0.30)

    def test_invalid_rows_dropped_silently(self):
        """Dataset validation keeps only usable rows, in order."""
        rows = [
            RawTrial('A', 80, 0, 35.0, 40.0),
            RawTrial('A', 80, 0, 0.0, 40.0),
            RawTrial('B', 70, 20, 25.0, 38.0),
        ]
        trials = validate_trials(rows)
        assert [t.athlete_id for t in trials] == ['A', 'B']

    def test_dataframe_input(self):
        """A DataFrame with canonical columns is accepted."""
        df = pd.DataFrame({
            'athlete_id': ['A', 'A'],
            'body_mass_kg': [80.0, 80.0],
            'additional_load_kg': [0.0, 20.0],
            'jump_height_cm': [35.0, 28.0],
            'depth_cm': [-40.0, -41.0],
        })
        assert len(validate_trials(df)) == 2

    def test_empty_after_filtering_is_fatal(self):
        """No surviving rows raises DataQualityError."""
        rows = [RawTrial('A', 80, 0, 0.0, 40.0), RawTrial('B', 80, 0, 30.0, 0.0)]
        with pytest.raises(DataQualityError):
            validate_trials(rows)

    def test_empty_input_is_fatal(self):
        with pytest.raises(DataQualityError):
            validate_trials([])

    def test_padded_ids_are_one_athlete(self):
        """Surrounding whitespace in ids is ignored."""
        rows = [RawTrial('Alice ', 62, 0, 38.0, 40.0), RawTrial(' Alice', 62, 20, 29.0, 40.0)]
        trials = validate_trials(rows)
        assert list(group_by_athlete(trials)) == ['Alice']

    def test_grouping_keeps_first_seen_order(self):
        """Athletes are grouped in first-seen order."""
        trials = [make_trial('B'), make_trial('A'), make_trial('B', load=20)]
        groups = group_by_athlete(trials)
        assert list(groups) == ['B', 'A']
        assert len(groups['B']) == 2
        assert groups['B'][1].additional_load_kg == 20


# =============================================================================
# Kinematics Tests
# =============================================================================

class TestKinematics:
    """Tests for push-off kinematics."""

    def test_median_depth_substitution(self):
        """Every derived trial uses the athlete's median depth."""
        trials = [
            make_trial(load=0, depth_m=0.30),
            make_trial(load=20, depth_m=0.35),
            make_trial(load=40, depth_m=0.40),
        ]
        depth, derived = derive_trials(trials)
        assert depth == 0.35
        assert all(d.pushoff_depth_m == 0.35 for d in derived)

    def test_median_depth_even_count(self):
        """Even counts average the two middle depths."""
        trials = [make_trial(depth_m=0.30), make_trial(depth_m=0.40)]
        assert median_depth(trials) == pytest.approx(0.35)

    def test_median_depth_empty(self):
        assert math.isnan(median_depth([]))

    def test_derived_values(self):
        """Check the Samozino formulas on a hand-computed trial."""
        trial = make_trial(mass=80, load=20, height_m=0.40, depth_m=0.40)
        d = derive_trial(trial, 0.40)

        v_to = math.sqrt(2 * G * 0.40)
        assert d.total_system_mass_kg == 100
        assert d.takeoff_velocity_ms == pytest.approx(v_to)
        assert d.mean_velocity_ms == pytest.approx(v_to / 2)
        assert d.mean_acceleration_ms2 == pytest.approx(G)   # v_to² / 2s = 2gh / 2s
        assert d.mean_force_n == pytest.approx(100 * 2 * G)

    def test_force_finite_and_positive(self):
        """Valid inputs always give finite, positive velocity and force."""
        for height in [0.05, 0.2, 0.5]:
            for depth in [0.1, 0.3, 0.6]:
                for load in [0, 40, 100]:
                    d = derive_trial(make_trial(load=load, height_m=height), depth)
                    assert math.isfinite(d.mean_velocity_ms)
                    assert math.isfinite(d.mean_force_n)
                    assert d.mean_force_n > 0
                    assert d.mean_acceleration_ms2 >= 0

    def test_heavier_load_more_force(self):
        """At equal height, more system mass needs more force."""
        light = derive_trial(make_trial(load=0, height_m=0.3), 0.4)
        heavy = derive_trial(make_trial(load=40, height_m=0.3), 0.4)
        assert heavy.mean_force_n > light.mean_force_n


# =============================================================================
# Regression Tests
# =============================================================================

class TestRegression:
    """Tests for the linear F-V fit."""

    def test_perfect_linear_fit(self):
        """Three collinear points give the exact line."""
        derived = make_derived([1.0, 1.5, 2.0], [2800, 2600, 2400])
        reg = fit_force_velocity(derived)
        assert reg.slope_actual == pytest.approx(-400.0)
        assert reg.force_at_zero_n == pytest.approx(3200.0)
        assert reg.r_squared == pytest.approx(1.0)
        assert reg.n_trials == 3

    def test_v0_and_pmax_identities(self):
        """V0 = -F0/slope and Pmax = F0·V0/4."""
        derived = make_derived([1.0, 1.3, 1.6, 2.1], [2750, 2650, 2480, 2300])
        reg = fit_force_velocity(derived)
        assert reg.velocity_at_zero_ms == pytest.approx(-reg.force_at_zero_n / reg.slope_actual)
        assert reg.max_power_w == pytest.approx(reg.force_at_zero_n * reg.velocity_at_zero_ms / 4)
        assert 0 < reg.r_squared < 1

    def test_v0_pmax_values(self):
        derived = make_derived([1.0, 1.5, 2.0], [2800, 2600, 2400])
        reg = fit_force_velocity(derived)
        assert reg.velocity_at_zero_ms == pytest.approx(8.0)
        assert reg.max_power_w == pytest.approx(6400.0)

    def test_predict_force(self):
        reg = fit_force_velocity(make_derived([1.0, 2.0], [2800, 2400]))
        predicted = reg.predict_force([0.0, 8.0])
        assert predicted[0] == pytest.approx(3200.0)
        assert predicted[1] == pytest.approx(0.0, abs=1e-9)

    def test_two_trials_enough(self):
        """Two trials define a line."""
        reg = fit_force_velocity(make_derived([1.0, 2.0], [2800, 2400]))
        assert reg.slope_actual == pytest.approx(-400.0)

    def test_single_trial_insufficient(self):
        """One trial cannot be fitted."""
        with pytest.raises(InsufficientTrialsError):
            fit_force_velocity(make_derived([1.0], [2800]), 'A')

    def test_identical_velocities_degenerate(self):
        """A vertical line has no finite slope."""
        with pytest.raises(DegenerateFitError):
            fit_force_velocity(make_derived([1.2, 1.2, 1.2], [2000, 2100, 2200]), 'A')

    def test_per_kg_normalization(self):
        """Per-kg values use the minimum body mass."""
        derived = make_derived([1.0, 1.5], [2800, 2600], mass=80.0)
        derived[1] = DerivedTrial(**{**derived[1].__dict__, 'body_mass_kg': 82.0})
        reg = fit_force_velocity(derived)
        slope_per_kg, p_max_per_kg, mass_min = normalize_per_kg(reg, derived)
        assert mass_min == 80.0
        assert slope_per_kg == pytest.approx(-400.0 / 80.0)
        assert p_max_per_kg == pytest.approx(6400.0 / 80.0)

    def test_invalid_mass(self):
        """Non-positive body mass cannot be normalized."""
        derived = make_derived([1.0, 1.5], [2800, 2600], mass=0.0)
        reg = fit_force_velocity(derived)
        with pytest.raises(InvalidMassError):
            normalize_per_kg(reg, derived, 'A')


# =============================================================================
# Optimal Slope Tests
# =============================================================================

class TestOptimalSlope:
    """Tests for the optimal F-V slope."""

    def test_signed_cbrt(self):
        """Cube root keeps the sign of its argument."""
        assert signed_cbrt(27.0) == pytest.approx(3.0)
        assert signed_cbrt(-27.0) == pytest.approx(-3.0)
        assert signed_cbrt(0.0) == 0.0
        assert math.isnan(signed_cbrt(float('nan')))

    def test_known_value(self):
        """s = 0.4 m, Pmax = 25 W/kg gives about -14.02 N·s/m/kg."""
        assert optimal_slope_per_kg(0.4, 25.0) == pytest.approx(-14.023, abs=0.01)

    def test_negative_and_finite_over_grid(self):
        """Plausible inputs always give a finite negative slope."""
        for s in np.linspace(0.1, 0.6, 11):
            for p in np.linspace(10, 60, 11):
                slope = optimal_slope_per_kg(s, p)
                assert math.isfinite(slope), f"s={s}, P={p}"
                assert slope < 0, f"s={s}, P={p}"

    @pytest.mark.parametrize('s, p', [
        (0.0, 25.0),
        (-0.3, 25.0),
        (0.4, 0.0),
        (0.4, -10.0),
        (float('nan'), 25.0),
        (0.4, float('inf')),
    ])
    def test_invalid_inputs_undefined(self, s, p):
        """Non-positive or non-finite inputs give NaN."""
        assert math.isnan(optimal_slope_per_kg(s, p))

    def test_zero_cube_root_undefined(self, monkeypatch):
        """A vanishing cube root gives NaN instead of infinity."""
        monkeypatch.setattr('core.optimal_slope.signed_cbrt', lambda value: 0.0)
        assert math.isnan(optimal_slope_per_kg(0.4, 25.0))

    def test_weak_dependence_on_power(self):
        """The optimum is set mostly by push-off distance, not power."""
        slopes = [optimal_slope_per_kg(0.4, p) for p in (20.0, 30.0, 40.0)]
        assert max(slopes) - min(slopes) < 1.0

    def test_flatter_with_longer_pushoff(self):
        """A longer push-off favours velocity (flatter optimum)."""
        assert optimal_slope_per_kg(0.5, 25.0) > optimal_slope_per_kg(0.3, 25.0)

    @pytest.mark.parametrize('s, p', [(0.25, 20.0), (0.4, 25.0), (0.55, 40.0)])
    def test_matches_numerical_optimum(self, s, p):
        """Closed form agrees with direct maximization of jump height."""
        closed = optimal_slope_per_kg(s, p)
        numeric = numerical_optimal_slope(s, p)
        assert numeric == pytest.approx(closed, rel=1e-2)

    def test_optimal_slope_maximizes_height(self):
        """Height at the optimum beats nearby slopes."""
        s, p = 0.4, 25.0
        opt = optimal_slope_per_kg(s, p)
        h_opt = theoretical_jump_height(opt, p, s)
        assert h_opt > theoretical_jump_height(opt * 0.7, p, s)
        assert h_opt > theoretical_jump_height(opt * 1.3, p, s)

    def test_no_jump_without_enough_force(self):
        """F0 below body weight means zero height."""
        assert theoretical_jump_height(-0.5, 10.0, 0.4) == 0.0

    def test_height_potential(self):
        """At the optimum the potential is 100%, elsewhere lower."""
        s, p = 0.4, 25.0
        opt = optimal_slope_per_kg(s, p)
        assert jump_height_potential(opt, opt, p, s) == pytest.approx(100.0)
        assert jump_height_potential(opt * 0.5, opt, p, s) < 100.0
        assert math.isnan(jump_height_potential(-10.0, float('nan'), p, s))


# =============================================================================
# Imbalance Tests
# =============================================================================

class TestImbalance:
    """Tests for FVI and classification."""

    def test_fvi_calculation(self):
        assert calculate_fvi(-10.0, -20.0) == pytest.approx(50.0)
        assert calculate_fvi(-20.0, -10.0) == pytest.approx(200.0)

    def test_fvi_undefined(self):
        """FVI needs a finite, non-zero optimal slope."""
        assert math.isnan(calculate_fvi(-10.0, float('nan')))
        assert math.isnan(calculate_fvi(-10.0, 0.0))
        assert math.isnan(calculate_fvi(-10.0, float('-inf')))

    def test_band_boundaries(self):
        """Band edges fall on the documented side."""
        assert classify_fvi(60.0) == Recommendation.LOW_FORCE_DEFICIT
        assert classify_fvi(90.0) == Recommendation.WELL_BALANCED
        assert classify_fvi(110.0) == Recommendation.WELL_BALANCED
        assert classify_fvi(140.0) == Recommendation.LOW_VELOCITY_DEFICIT
        assert classify_fvi(59.999) == Recommendation.HIGH_FORCE_DEFICIT
        assert classify_fvi(140.001) == Recommendation.HIGH_VELOCITY_DEFICIT

    def test_band_interiors(self):
        assert classify_fvi(30.0) == Recommendation.HIGH_FORCE_DEFICIT
        assert classify_fvi(75.0) == Recommendation.LOW_FORCE_DEFICIT
        assert classify_fvi(100.0) == Recommendation.WELL_BALANCED
        assert classify_fvi(125.0) == Recommendation.LOW_VELOCITY_DEFICIT
        assert classify_fvi(250.0) == Recommendation.HIGH_VELOCITY_DEFICIT

    def test_undefined_is_insufficient_data(self):
        assert classify_fvi(float('nan')) == Recommendation.INSUFFICIENT_DATA

    def test_labels(self):
        """Labels match the published category names."""
        assert Recommendation.WELL_BALANCED.value == "Well Balanced"
        assert Recommendation.INSUFFICIENT_DATA.value == "Insufficient Data"

    def test_custom_bands(self):
        """Band edges come from the parameters."""
        params = ProfilingParams(fvi_balanced_high=120.0)
        assert classify_fvi(115.0, params) == Recommendation.WELL_BALANCED
        assert classify_fvi(115.0) == Recommendation.LOW_VELOCITY_DEFICIT


# =============================================================================
# Pipeline Tests
# =============================================================================

ATHLETE_A = [
    RawTrial('Athlete A', 80.0, 0.0, 40.0, -40.0),
    RawTrial('Athlete A', 80.0, 20.0, 30.0, -42.0),
    RawTrial('Athlete A', 80.0, 40.0, 22.0, -38.0),
]
ATHLETE_B = [
    RawTrial('Athlete B', 70.0, 0.0, 35.0, -36.0),
]


class TestProfiler:
    """Tests for the full profiling pipeline."""

    def test_end_to_end_two_athletes(self):
        """One profiled athlete, one skipped with a reason."""
        result = profile_athletes(ATHLETE_A + ATHLETE_B)

        assert len(result.profiles) == 1
        profile = result.profiles[0]
        assert profile.athlete_id == 'Athlete A'
        assert profile.recommendation != Recommendation.INSUFFICIENT_DATA
        assert profile.slope_actual < 0
        assert profile.slope_opt_per_kg < 0
        assert math.isfinite(profile.fvi_percent)
        assert profile.depth_med_m == pytest.approx(0.40)
        assert profile.body_mass_kg == pytest.approx(80.0)
        assert profile.n_trials == 3

        assert len(result.skipped) == 1
        skip = result.skipped[0]
        assert skip.athlete_id == 'Athlete B'
        assert skip.condition == ConditionType.INSUFFICIENT_TRIALS

    def test_outcomes_in_first_seen_order(self):
        result = profile_athletes(ATHLETE_B + ATHLETE_A)
        assert [o.athlete_id for o in result.outcomes] == ['Athlete B', 'Athlete A']
        assert result.get_outcome('Athlete B').is_skipped
        assert not result.get_outcome('Athlete A').is_skipped

    def test_profile_consistent_with_components(self):
        """Profile fields agree with the individual equations."""
        outcome = profile_athletes(ATHLETE_A).outcomes[0]
        p = outcome.profile
        assert p.velocity_at_zero_ms == pytest.approx(-p.force_at_zero_n / p.slope_actual)
        assert p.max_power_w == pytest.approx(p.force_at_zero_n * p.velocity_at_zero_ms / 4)
        assert p.slope_per_kg == pytest.approx(p.slope_actual / 80.0)
        assert p.slope_opt_per_kg == pytest.approx(optimal_slope_per_kg(0.40, p.max_power_w / 80.0))
        assert p.fvi_percent == pytest.approx(abs(p.slope_per_kg / p.slope_opt_per_kg) * 100)
        assert p.recommendation == classify_fvi(p.fvi_percent)
        assert len(outcome.derived_trials) == 3

    def test_no_valid_rows_is_fatal(self):
        with pytest.raises(DataQualityError):
            profile_athletes([RawTrial('A', 80, 0, 0.0, 40.0)])

    def test_invalid_params_rejected(self):
        params = ProfilingParams(fvi_low_force_deficit=30.0)
        with pytest.raises(ValueError):
            profile_athletes(ATHLETE_A, params)

    def test_degenerate_fit_skipped(self):
        """Identical jumps cannot define a line."""
        rows = [RawTrial('C', 75, 0, 30.0, 40.0), RawTrial('C', 75, 0, 30.0, 40.0)]
        result = profile_athletes(rows)
        assert result.profiles == []
        assert result.skipped[0].condition == ConditionType.DEGENERATE_FIT

    def test_invalid_mass_skipped(self):
        """Zero body mass passes validation but cannot be normalized."""
        rows = [RawTrial('D', 0, 20, 30.0, 40.0), RawTrial('D', 0, 40, 22.0, 40.0)]
        result = profile_athletes(rows)
        assert result.skipped[0].condition == ConditionType.INVALID_MASS

    def test_undefined_optimal_slope_keeps_profile(self):
        """Negative power gives Insufficient Data but keeps F0/V0/Pmax."""
        rows = [RawTrial('E', 80, 0, 20.0, 40.0), RawTrial('E', 80, 40, 30.0, 40.0)]
        result = profile_athletes(rows)

        assert len(result.profiles) == 1
        profile = result.profiles[0]
        assert profile.recommendation == Recommendation.INSUFFICIENT_DATA
        assert math.isnan(profile.slope_opt_per_kg)
        assert math.isnan(profile.fvi_percent)
        assert math.isfinite(profile.force_at_zero_n)
        assert profile.slope_actual > 0

        assert result.skipped == []
        assert result.conditions[0].condition == ConditionType.INSUFFICIENT_OPTIMAL_SLOPE_INPUTS

    def test_zero_cube_root_keeps_profile(self, monkeypatch):
        """An undefined optimum from a zero cube root is reported, not skipped."""
        monkeypatch.setattr('core.optimal_slope.signed_cbrt', lambda value: 0.0)
        trials = [make_trial(load=0, height_m=0.40), make_trial(load=40, height_m=0.25)]
        outcome = profile_athlete('A', trials)

        assert not outcome.is_skipped
        assert outcome.profile.recommendation == Recommendation.INSUFFICIENT_DATA
        assert math.isnan(outcome.profile.slope_opt_per_kg)
        assert [c.condition for c in outcome.conditions] == [
            ConditionType.INSUFFICIENT_OPTIMAL_SLOPE_INPUTS
        ]

    def test_profile_athlete_direct(self):
        """Single-athlete entry point returns a tagged outcome."""
        trials = [make_trial(load=0, height_m=0.40), make_trial(load=40, height_m=0.25)]
        outcome = profile_athlete('A', trials)
        assert outcome.profile is not None
        assert outcome.regression.n_trials == 2
        assert outcome.conditions == []

    def test_synthetic_balanced_athlete(self):
        """A perfectly balanced synthetic athlete is classified as such."""
        target = profile_from_power('b1', 'Balanced', 75.0, 28.0, 1.0, 0.40)
        result = profile_athletes(generate_jump_trials(target))

        p = result.profiles[0]
        assert p.slope_per_kg == pytest.approx(target.slope_per_kg, rel=1e-6)
        assert p.p_max_per_kg == pytest.approx(target.p_max_per_kg, rel=1e-6)
        assert p.r_squared == pytest.approx(1.0)
        assert p.fvi_percent == pytest.approx(100.0, abs=1e-3)
        assert p.height_potential_pct == pytest.approx(100.0, abs=1e-3)
        assert p.recommendation == Recommendation.WELL_BALANCED

    @pytest.mark.parametrize('ratio, expected', [
        (0.45, Recommendation.HIGH_FORCE_DEFICIT),
        (0.75, Recommendation.LOW_FORCE_DEFICIT),
        (1.25, Recommendation.LOW_VELOCITY_DEFICIT),
        (1.60, Recommendation.HIGH_VELOCITY_DEFICIT),
    ])
    def test_synthetic_imbalances(self, ratio, expected):
        """Synthetic athletes land in the band of their imbalance."""
        target = profile_from_power('x', 'X', 80.0, 26.0, ratio, 0.38,
                                    loads_kg=[0, 10, 20, 30])
        result = profile_athletes(generate_jump_trials(target))
        p = result.profiles[0]
        assert p.fvi_percent == pytest.approx(ratio * 100, rel=1e-4)
        assert p.recommendation == expected

    def test_verbose_reports_skips(self, capsys):
        profile_athletes(ATHLETE_A + ATHLETE_B, verbose=True)
        out = capsys.readouterr().out
        assert "Skipping Athlete B: InsufficientTrials" in out

    def test_dataframe_view(self):
        df = profile_athletes(ATHLETE_A + ATHLETE_B).to_dataframe()
        assert list(df['athlete_id']) == ['Athlete A']
        assert df['recommendation'].iloc[0] in {r.value for r in Recommendation}


# =============================================================================
# Parameter Tests
# =============================================================================

class TestParams:
    """Tests for profiling parameters."""

    def test_defaults_valid(self):
        ok, message = ProfilingParams().validate()
        assert ok
        assert message == "Valid"

    def test_threshold_order_enforced(self):
        ok, message = ProfilingParams(fvi_balanced_high=150.0).validate()
        assert not ok
        assert "ascending" in message

    def test_min_trials_enforced(self):
        ok, _ = ProfilingParams(min_trials=1).validate()
        assert not ok

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "params.json"
        ProfilingParams(min_trials=3).save(path)
        assert load_params(path).min_trials == 3

    def test_partial_file_keeps_defaults(self, tmp_path):
        path = tmp_path / "params.json"
        path.write_text('{"allow_negative_load": true}')
        params = load_params(path)
        assert params.allow_negative_load is True
        assert params.gravity == G

    def test_unknown_key_rejected(self, tmp_path):
        path = tmp_path / "params.json"
        path.write_text('{"show_plots": true}')
        with pytest.raises(ValueError, match="Unknown parameter"):
            load_params(path)

    @pytest.mark.parametrize('content', [
        '{"min_trials": "3"}',
        '{"gravity": "9.81"}',
        '{"fvi_balanced_high": null}',
    ])
    def test_wrong_type_rejected(self, tmp_path, content):
        """Wrong-typed values are reported as ValueError."""
        path = tmp_path / "params.json"
        path.write_text(content)
        with pytest.raises(ValueError, match="Invalid parameters"):
            load_params(path)

    def test_min_trials_applied(self):
        """Raising min_trials skips athletes with fewer trials."""
        result = profile_athletes(ATHLETE_A, ProfilingParams(min_trials=4))
        assert result.skipped[0].condition == ConditionType.INSUFFICIENT_TRIALS


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
