"""Relativity-Emergent Effective Mass (REEM) - a toy cosmological mass model.

This package implements a model where the inertial mass of a particle is a
constant Standard Model baseline plus a small correction sourced by a
decaying background field:
- The baseline is m_base = k_1·φ_vev (Higgs VEV)
- The background field dilutes like radiation, φ₀(a) = φ₀,now·a⁻⁴
- The correction is k_2·φ₀(a)·(H(a)·L(a)/c), with L = c/H the Hubble radius
- The enhancement m_eff/m_base is capped for reporting at 1.05

Key modules:
    cosmology: H(a), field decay, Hubble length, redshift conversions,
        fixed-step scale-factor integrator
    mass_model: Effective mass samples, redshift sweep, benchmark evaluations
    analysis: Summary numbers and chart series
    plots: Evolution figures
    run_analysis: Command-line pipeline writing JSON results and figures

Example usage:
    >>> from reem import EffectiveMassModel
    >>> model = EffectiveMassModel()
    >>> table = model.sweep_evolution(steps=500)
    >>> print(f"m_eff/m_base at z=1100: {model.evaluate_at_decoupling().m_eff_factor:.3f}")
"""

__version__ = "1.0.0"

from typing import Optional

# Constants and configuration
from .utils.constants import (
    PhysicalConstants,
    CosmologicalParameters,
    DEFAULT_CONSTANTS,
    PLANCK_2018,
    Z_DECOUPLING,
)
from .utils.config import ModelConfig

# Cosmology
from .cosmology import (
    ScaleFactorHistory,
    hubble_rate,
    dlna_dt,
    field_decay,
    hubble_length_scale,
    redshift_to_scale_factor,
    scale_factor_to_redshift,
    integrate_scale_factor,
    integrate_scale_factor_reference,
)

# Effective mass
from .mass_model import (
    EffectiveMassSample,
    LocalFrameMass,
    MassEvolutionTable,
    EffectiveMassModel,
    DEFAULT_MODEL,
    RECORD_FIELDS,
    evaluate_at,
    evaluate_local_velocity,
    sweep_evolution,
    evaluate_at_decoupling,
    evaluate_at_present,
    evaluate_local_frame,
    standard_model_baseline,
)

# Analysis
from .analysis import (
    MassSummary,
    summarize_model,
    build_chart_data,
    print_summary,
)


def quick_summary(model: Optional[EffectiveMassModel] = None) -> dict:
    """Print the benchmark evaluations of the model.

    Args:
        model: Model to evaluate (default: default constants, Planck 2018)

    Returns:
        Dictionary with the decoupling, present and local-frame results
    """
    summary = summarize_model(model)
    print_summary(summary)
    return summary.as_dict()


__all__ = [
    # Version
    "__version__",
    # Constants and config
    "PhysicalConstants",
    "CosmologicalParameters",
    "DEFAULT_CONSTANTS",
    "PLANCK_2018",
    "Z_DECOUPLING",
    "ModelConfig",
    # Cosmology
    "ScaleFactorHistory",
    "hubble_rate",
    "dlna_dt",
    "field_decay",
    "hubble_length_scale",
    "redshift_to_scale_factor",
    "scale_factor_to_redshift",
    "integrate_scale_factor",
    "integrate_scale_factor_reference",
    # Effective mass
    "EffectiveMassSample",
    "LocalFrameMass",
    "MassEvolutionTable",
    "EffectiveMassModel",
    "DEFAULT_MODEL",
    "RECORD_FIELDS",
    "evaluate_at",
    "evaluate_local_velocity",
    "sweep_evolution",
    "evaluate_at_decoupling",
    "evaluate_at_present",
    "evaluate_local_frame",
    "standard_model_baseline",
    # Analysis
    "MassSummary",
    "summarize_model",
    "build_chart_data",
    "print_summary",
    # Convenience
    "quick_summary",
]
