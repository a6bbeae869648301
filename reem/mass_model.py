"""Effective mass model for REEM.

The effective inertial mass blends a constant baseline with a correction
sourced by the decaying background field:

    m_eff(a) = k_1·φ_vev + k_2·φ₀(a)·(H(a)·L(a)/c)

with L(a) = c/H(a). The length-scale ratio H·L/c cancels to one, but the
expression is kept as written so a different length scale can be dropped
into :meth:`EffectiveMassModel.length_scale` without touching the formula.

The enhancement factor m_eff/m_base is capped at ``max_m_eff_factor``;
the cap applies to the reported ratio only, never to m_eff itself.

A separate velocity branch replaces H·L/c with v/c:

    m_eff,local(v) = k_1·φ_vev + k_2·φ₀·(v/c)
"""

from dataclasses import dataclass, asdict
from typing import Dict, Iterator, List, Optional, Tuple
import logging

import numpy as np
from numpy.typing import NDArray

from .utils.constants import (
    PhysicalConstants,
    CosmologicalParameters,
    DEFAULT_CONSTANTS,
    PLANCK_2018,
    Z_DECOUPLING,
)
from .utils.numerics import check_divergence, DivergenceResult
from .cosmology import (
    hubble_rate,
    hubble_length_scale,
    field_decay,
    redshift_to_scale_factor,
    scale_factor_to_redshift,
)

logger = logging.getLogger(__name__)


# Keys of one sweep record, in output order
RECORD_FIELDS: Tuple[str, ...] = (
    "a",
    "z",
    "phi_0",
    "m_base_local",
    "m_motion",
    "m_eff",
    "m_eff_factor",
)


@dataclass(frozen=True)
class EffectiveMassSample:
    """One evaluation of the effective mass."""

    a: float  # Scale factor
    z: float  # Redshift
    phi_0: float  # Background field value [kg/m³]
    m_base_local: float  # Baseline contribution [kg]
    m_motion: float  # Motion/expansion contribution [kg]
    m_eff: float  # Total effective mass, uncapped [kg]
    m_eff_factor: float  # min(m_eff/m_base, max_m_eff_factor)

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class LocalFrameMass:
    """Effective mass in the local frame moving at v_CMB."""

    m_eff: float
    m_base: float
    m_motion: float
    fractional_shift: float

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class MassEvolutionTable:
    """Effective mass samples in order of increasing redshift.

    The sample order is the redshift order and must be kept by consumers.
    """

    samples: Tuple[EffectiveMassSample, ...]

    def __len__(self) -> int:
        return len(self.samples)

    def __iter__(self) -> Iterator[EffectiveMassSample]:
        return iter(self.samples)

    def __getitem__(self, index: int) -> EffectiveMassSample:
        return self.samples[index]

    def column(self, name: str) -> NDArray[np.floating]:
        """Values of one record field as an array."""
        if name not in RECORD_FIELDS:
            raise KeyError(f"Unknown column: {name!r}")
        return np.array([getattr(s, name) for s in self.samples], dtype=float)

    @property
    def a(self) -> NDArray[np.floating]:
        return self.column("a")

    @property
    def z(self) -> NDArray[np.floating]:
        return self.column("z")

    @property
    def phi_0(self) -> NDArray[np.floating]:
        return self.column("phi_0")

    @property
    def m_base_local(self) -> NDArray[np.floating]:
        return self.column("m_base_local")

    @property
    def m_motion(self) -> NDArray[np.floating]:
        return self.column("m_motion")

    @property
    def m_eff(self) -> NDArray[np.floating]:
        return self.column("m_eff")

    @property
    def m_eff_factor(self) -> NDArray[np.floating]:
        return self.column("m_eff_factor")

    def fractional_difference(self, m_base: float) -> NDArray[np.floating]:
        """(m_eff - m_base)/m_base at each sample."""
        return (self.m_eff - m_base) / m_base

    def to_records(self) -> List[Dict[str, float]]:
        """Samples as plain dicts keyed by the record fields."""
        return [{name: getattr(s, name) for name in RECORD_FIELDS} for s in self.samples]

    def check_finite(self) -> DivergenceResult:
        """Flag samples whose effective mass is NaN or infinite."""
        return check_divergence(self.m_eff, name="m_eff")


class EffectiveMassModel:
    """Effective mass calculator bound to an immutable constant set.

    Holds no mutable state: every method is a pure function of its
    arguments, the constants and the density fractions.
    """

    def __init__(
        self,
        constants: PhysicalConstants = DEFAULT_CONSTANTS,
        cosmology: CosmologicalParameters = PLANCK_2018,
    ):
        """Initialize the model.

        Args:
            constants: Physical constants and couplings
            cosmology: Density fractions used by H(a)
        """
        self._constants = constants
        self._cosmology = cosmology

    @property
    def constants(self) -> PhysicalConstants:
        return self._constants

    @property
    def cosmology(self) -> CosmologicalParameters:
        return self._cosmology

    def __repr__(self) -> str:
        return f"EffectiveMassModel(constants={self._constants!r}, cosmology={self._cosmology!r})"

    def hubble_rate(self, a: float) -> float:
        """H(a) for this model's densities [s⁻¹]."""
        cosmo = self._cosmology
        return hubble_rate(a, cosmo.Om0, cosmo.Or0, cosmo.Ol0, self._constants)

    def length_scale(self, a: float) -> float:
        """Length scale of the motion term (Hubble radius) [m]."""
        cosmo = self._cosmology
        return hubble_length_scale(a, cosmo.Om0, cosmo.Or0, cosmo.Ol0, self._constants)

    def _sample(self, a: float, z: float, phi0_override: Optional[float] = None) -> EffectiveMassSample:
        const = self._constants

        phi_0 = phi0_override if phi0_override is not None else field_decay(a, constants=const)
        m_base_local = const.k_1 * const.phi_vev
        L = self.length_scale(a)
        H = self.hubble_rate(a)
        m_motion = const.k_2 * phi_0 * ((H * L) / const.c)

        m_eff = m_base_local + m_motion
        m_eff_factor = min(m_eff / const.m_base, const.max_m_eff_factor)

        return EffectiveMassSample(
            a=float(a),
            z=float(z),
            phi_0=float(phi_0),
            m_base_local=float(m_base_local),
            m_motion=float(m_motion),
            m_eff=float(m_eff),
            m_eff_factor=float(m_eff_factor),
        )

    def evaluate_at(self, a: float, phi0_override: Optional[float] = None) -> EffectiveMassSample:
        """Effective mass at scale factor ``a``.

        Args:
            a: Scale factor (> 0; a <= 0 is undefined)
            phi0_override: Background field value to use instead of φ₀(a)

        Returns:
            EffectiveMassSample with z = 1/a - 1
        """
        return self._sample(a, scale_factor_to_redshift(a), phi0_override)

    def evaluate_at_redshift(self, z: float, phi0_override: Optional[float] = None) -> EffectiveMassSample:
        """Effective mass at redshift ``z``, recording ``z`` as given."""
        return self._sample(redshift_to_scale_factor(z), z, phi0_override)

    def evaluate_local_velocity(self, v: float, phi0: Optional[float] = None) -> float:
        """Velocity-induced effective mass k_1·φ_vev + k_2·φ₀·(v/c) [kg]."""
        const = self._constants
        if phi0 is None:
            phi0 = const.phi_0_now
        m_base_local = const.k_1 * const.phi_vev
        m_motion = const.k_2 * phi0 * (v / const.c)
        return m_base_local + m_motion

    def sweep_evolution(
        self,
        steps: int = 500,
        z_max: float = Z_DECOUPLING,
        z_min: float = 0.0,
    ) -> MassEvolutionTable:
        """Sample the effective mass on a linear redshift grid.

        Args:
            steps: Number of intervals; steps+1 samples from z_min to z_max
            z_max: Last redshift (inclusive)
            z_min: First redshift

        Returns:
            MassEvolutionTable ordered by increasing z

        Raises:
            ValueError: If steps < 0
        """
        if steps < 0:
            raise ValueError(f"steps = {steps} must be >= 0")

        z_grid = np.linspace(z_min, z_max, steps + 1)
        logger.debug(f"Sweeping effective mass over {len(z_grid)} redshifts in [{z_min}, {z_max}]")

        table = MassEvolutionTable(tuple(self.evaluate_at_redshift(z) for z in z_grid))

        finite = table.check_finite()
        if finite.has_divergence:
            logger.warning(finite.message)

        return table

    def evaluate_at_decoupling(self) -> EffectiveMassSample:
        """Effective mass at decoupling (z = 1100)."""
        return self.evaluate_at_redshift(Z_DECOUPLING)

    def evaluate_at_present(self) -> EffectiveMassSample:
        """Effective mass today (a = 1)."""
        return self.evaluate_at(1.0)

    def evaluate_local_frame(self) -> LocalFrameMass:
        """Effective mass for Earth's motion relative to the CMB."""
        const = self._constants
        m_eff = self.evaluate_local_velocity(const.v_CMB, const.phi_0_now)
        m_base = const.m_base
        m_motion = m_eff - m_base
        return LocalFrameMass(
            m_eff=m_eff,
            m_base=m_base,
            m_motion=m_motion,
            fractional_shift=m_motion / m_base,
        )

    def standard_model_baseline(self, a: float) -> float:
        """Constant Standard Model mass, for a flat reference line [kg]."""
        return self._constants.m_base


# Model bound to the default constants and Planck 2018 densities
DEFAULT_MODEL = EffectiveMassModel()


def evaluate_at(a: float, phi0_override: Optional[float] = None) -> EffectiveMassSample:
    return DEFAULT_MODEL.evaluate_at(a, phi0_override)


def evaluate_local_velocity(v: float, phi0: Optional[float] = None) -> float:
    return DEFAULT_MODEL.evaluate_local_velocity(v, phi0)


def sweep_evolution(steps: int = 500) -> MassEvolutionTable:
    return DEFAULT_MODEL.sweep_evolution(steps)


def evaluate_at_decoupling() -> EffectiveMassSample:
    return DEFAULT_MODEL.evaluate_at_decoupling()


def evaluate_at_present() -> EffectiveMassSample:
    return DEFAULT_MODEL.evaluate_at_present()


def evaluate_local_frame() -> LocalFrameMass:
    return DEFAULT_MODEL.evaluate_local_frame()


def standard_model_baseline(a: float) -> float:
    return DEFAULT_MODEL.standard_model_baseline(a)
