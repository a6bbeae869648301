"""Summary and reporting functions for REEM model analysis.

This module turns a sweep and the three benchmark evaluations into the
numbers a report or chart needs: the enhancement at decoupling, the
late-time deviation from the Standard Model baseline, and the fractional
mass shift from Earth's motion through the CMB.
"""

from dataclasses import dataclass
from typing import Dict, Optional

import numpy as np
from numpy.typing import NDArray

from ..utils.constants import PhysicalConstants
from ..mass_model import (
    EffectiveMassModel,
    EffectiveMassSample,
    LocalFrameMass,
    MassEvolutionTable,
    DEFAULT_MODEL,
)

# Floor for log10(z) so the z = 0 sample stays plottable
LOG_Z_FLOOR = 1e-4


@dataclass(frozen=True)
class MassSummary:
    """Benchmark evaluations of the effective mass model."""

    decoupling: EffectiveMassSample
    present: EffectiveMassSample
    local_frame: LocalFrameMass
    m_base: float

    @property
    def decoupling_enhancement_percent(self) -> float:
        """Capped enhancement at decoupling, in percent."""
        return (self.decoupling.m_eff_factor - 1.0) * 100.0

    @property
    def present_enhancement(self) -> float:
        """m_eff/m_base - 1 today."""
        return self.present.m_eff_factor - 1.0

    @property
    def local_fractional_shift(self) -> float:
        return self.local_frame.fractional_shift

    def as_dict(self) -> Dict[str, object]:
        return {
            "m_base": self.m_base,
            "decoupling": self.decoupling.as_dict(),
            "present": self.present.as_dict(),
            "local_frame": self.local_frame.as_dict(),
            "decoupling_enhancement_percent": self.decoupling_enhancement_percent,
            "present_enhancement": self.present_enhancement,
            "local_fractional_shift": self.local_fractional_shift,
        }


def summarize_model(model: Optional[EffectiveMassModel] = None) -> MassSummary:
    """Evaluate the model at decoupling, today and in the local frame."""
    if model is None:
        model = DEFAULT_MODEL

    return MassSummary(
        decoupling=model.evaluate_at_decoupling(),
        present=model.evaluate_at_present(),
        local_frame=model.evaluate_local_frame(),
        m_base=model.constants.m_base,
    )


def build_chart_data(
    table: MassEvolutionTable,
    constants: PhysicalConstants,
) -> Dict[str, NDArray[np.floating]]:
    """Per-sample series for plotting the sweep against the baseline.

    Returns:
        Dictionary of equal-length arrays:
        - z: Redshift
        - m_eff_cosmo: Effective mass [kg]
        - m_base_standard: Baseline mass [kg]
        - fractional_difference: (m_eff - m_base)/m_base
        - log_z: log10(max(z, 1e-4))
        - log_m_eff: log10(m_eff)
        - log_m_base: log10(m_base)
    """
    m_base = constants.m_base
    z = table.z
    m_eff = table.m_eff
    m_base_standard = np.full_like(m_eff, m_base)

    return {
        "z": z,
        "m_eff_cosmo": m_eff,
        "m_base_standard": m_base_standard,
        "fractional_difference": table.fractional_difference(m_base),
        "log_z": np.log10(np.maximum(z, LOG_Z_FLOOR)),
        "log_m_eff": np.log10(m_eff),
        "log_m_base": np.log10(m_base_standard),
    }


def print_summary(summary: MassSummary) -> None:
    """Print a human-readable summary of the benchmark evaluations."""
    dec = summary.decoupling
    now = summary.present
    local = summary.local_frame

    print("=" * 60)
    print("REEM - RELATIVITY-EMERGENT EFFECTIVE MASS")
    print("=" * 60)

    print(f"\nMass at Decoupling (z = {dec.z:.0f}):")
    print(f"  m_eff           = {dec.m_eff:.2e} kg")
    print(f"  m_base          = {summary.m_base:.2e} kg")
    print(f"  Enhancement     = {summary.decoupling_enhancement_percent:.2f}%")

    print(f"\nCurrent Mass (z = {now.z:.0f}):")
    print(f"  m_eff           = {now.m_eff:.2e} kg")
    print(f"  m_base          = {summary.m_base:.2e} kg")
    print(f"  Deviation       = {summary.present_enhancement:.2e}")

    print("\nLocal Frame (v_CMB):")
    print(f"  m_eff           = {local.m_eff:.2e} kg")
    print(f"  m_motion        = {local.m_motion:.2e} kg")
    print(f"  Fractional shift = {local.fractional_shift:.2e}")

    print("\n" + "=" * 60)
