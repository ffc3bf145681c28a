"""Reporting and visualization utilities."""

from .reports import (
    results_to_dataframe,
    generate_profile_report,
    export_profiles_csv,
    export_conditions_csv,
    skipped_athletes,
)
from .visualizations import (
    plot_fv_profile,
    plot_fvi_summary,
    save_profile_plots,
    save_fvi_summary,
)

__all__ = [
    'results_to_dataframe',
    'generate_profile_report',
    'export_profiles_csv',
    'export_conditions_csv',
    'skipped_athletes',
    'plot_fv_profile',
    'plot_fvi_summary',
    'save_profile_plots',
    'save_fvi_summary',
]
