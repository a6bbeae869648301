"""Plotting modules for the REEM model."""

from .mass_evolution import (
    setup_style,
    plot_mass_evolution,
    plot_fractional_difference,
    create_summary_figure,
)

__all__ = [
    "setup_style",
    "plot_mass_evolution",
    "plot_fractional_difference",
    "create_summary_figure",
]
