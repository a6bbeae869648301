"""Physical constants and cosmological parameters for the REEM model.

Primitive constants are stored as dataclass fields. Everything derived from
them (H0 in s⁻¹, the Higgs VEV mass, the present CMB mass density, the
baseline mass and the motion coupling k_2) is a property, so a variant built
with ``dataclasses.replace`` always stays self-consistent.

Derivation order:
    primitive constants -> phi_vev, phi_0_now, H0_SI -> m_base -> k_2
"""

from dataclasses import dataclass, fields
from typing import Final, Dict


@dataclass(frozen=True)
class PhysicalConstants:
    """Physical constants and model couplings (SI units)."""

    # Fundamental constants
    c: float = 2.99792458e8  # Speed of light [m/s]
    h: float = 6.62607015e-34  # Planck constant [J·s]
    m_e: float = 9.1093837e-31  # Electron mass [kg]
    GeV_to_kg: float = 1.783e-27  # GeV/c² in kg

    # Expansion
    H0_km: float = 67.4  # Hubble constant [km/s/Mpc]
    km_s_Mpc_to_si: float = 3.241e-20  # 1 km/s/Mpc in s⁻¹

    # Background field and frame
    rho_CMB: float = 4.2e-14  # CMB energy density [J/m³]
    phi_vev_GeV: float = 246.0  # Higgs VEV [GeV]
    v_CMB: float = 370e3  # Earth's velocity relative to the CMB [m/s]

    # Couplings
    k_1: float = 1.0  # Baseline mass coupling
    epsilon: float = 1e-8  # Dimensionless motion-term parameter
    max_m_eff_factor: float = 1.05  # Cap on m_eff/m_base

    @property
    def H0_SI(self) -> float:
        """Hubble constant [s⁻¹]."""
        return self.H0_km * self.km_s_Mpc_to_si

    @property
    def phi_vev(self) -> float:
        """Higgs VEV expressed as a mass [kg]."""
        return self.phi_vev_GeV * self.GeV_to_kg

    @property
    def phi_0_now(self) -> float:
        """Present CMB mass density ρ_CMB/c² [kg/m³]."""
        return self.rho_CMB / (self.c * self.c)

    @property
    def m_base(self) -> float:
        """Baseline (Standard Model) mass k_1·φ_vev [kg]."""
        return self.k_1 * self.phi_vev

    @property
    def k_2(self) -> float:
        """Motion-term coupling ε·m_base/φ₀,now [m³]."""
        return self.epsilon * self.m_base / self.phi_0_now

    def get(self, name: str) -> float:
        """Look up a primitive or derived constant by name."""
        if name in DERIVED_CONSTANTS or name in {f.name for f in fields(self)}:
            return getattr(self, name)
        raise KeyError(f"Unknown constant: {name!r}")

    def as_dict(self) -> Dict[str, float]:
        """All primitive and derived constants keyed by name."""
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        for name in DERIVED_CONSTANTS:
            values[name] = getattr(self, name)
        return values


DERIVED_CONSTANTS: Final[tuple] = ("H0_SI", "phi_vev", "phi_0_now", "m_base", "k_2")


@dataclass(frozen=True)
class CosmologicalParameters:
    """Density fractions entering H(a) = H0·sqrt(Ωm/a³ + Ωr/a⁴ + ΩΛ).

    No curvature term is used. Supplying a set that is physically sensible
    is the caller's job; nothing here rejects a non-flat set.
    """

    Om0: float = 0.315  # Matter
    Or0: float = 5e-5  # Radiation
    Ol0: float = 0.685  # Dark energy

    @property
    def Ok0(self) -> float:
        """Curvature implied by closure (informational only)."""
        return 1.0 - self.Om0 - self.Or0 - self.Ol0

    def as_dict(self) -> Dict[str, float]:
        return {"Om0": self.Om0, "Or0": self.Or0, "Ol0": self.Ol0}


# Default constant set
DEFAULT_CONSTANTS: Final[PhysicalConstants] = PhysicalConstants()

# Planck 2018 density fractions
PLANCK_2018: Final[CosmologicalParameters] = CosmologicalParameters()

# Redshift of CMB decoupling used as the early-universe benchmark
Z_DECOUPLING: Final[float] = 1100.0


def convert_H0_to_si(H0_km_s_Mpc: float, constants: PhysicalConstants = DEFAULT_CONSTANTS) -> float:
    """Convert H0 from km/s/Mpc to s⁻¹."""
    return H0_km_s_Mpc * constants.km_s_Mpc_to_si
