"""Configuration classes for REEM runs."""

from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict
import logging

import numpy as np

from .constants import (
    PhysicalConstants,
    CosmologicalParameters,
    DEFAULT_CONSTANTS,
    PLANCK_2018,
    Z_DECOUPLING,
)

logger = logging.getLogger(__name__)

# Planck 2018 fractions close to 1 only within 5e-5
FLATNESS_TOLERANCE = 1e-3


@dataclass
class ModelConfig:
    """Full REEM configuration: constants, densities and sweep settings.

    Attributes:
        constants: Physical constants and couplings
        cosmology: Density fractions used by H(a)
        z_min: First redshift of the sweep
        z_max: Last redshift of the sweep (inclusive)
        steps: Number of sweep intervals; the sweep has steps+1 samples
        output_dir: Where the analysis runner writes results
    """

    constants: PhysicalConstants = field(default_factory=lambda: DEFAULT_CONSTANTS)
    cosmology: CosmologicalParameters = field(default_factory=lambda: PLANCK_2018)

    # Sweep settings
    z_min: float = 0.0
    z_max: float = Z_DECOUPLING
    steps: int = 500

    # Output settings
    output_dir: str = "results"

    def get_z_array(self) -> np.ndarray:
        """Return the linear redshift grid of the sweep."""
        return np.linspace(self.z_min, self.z_max, self.steps + 1)

    def validate(self) -> tuple[bool, list[str]]:
        """Validate configuration.

        Returns:
            Tuple of (is_valid, list of error messages)
        """
        errors = []

        if self.steps < 0:
            errors.append(f"steps = {self.steps} must be >= 0")

        if self.z_min < 0:
            errors.append(f"z_min = {self.z_min} must be >= 0")

        if self.z_max <= self.z_min:
            errors.append(f"z_max = {self.z_max} must be > z_min = {self.z_min}")

        if self.constants.max_m_eff_factor < 1.0:
            errors.append(
                f"max_m_eff_factor = {self.constants.max_m_eff_factor} caps m_eff below m_base"
            )

        # Curvature is never part of H(a); a non-flat set is only reported
        Ok0 = self.cosmology.Ok0
        if abs(Ok0) > FLATNESS_TOLERANCE:
            logger.warning(
                f"Density fractions are not flat (implied Omega_k = {Ok0:.3e}); "
                "H(a) ignores curvature"
            )

        return len(errors) == 0, errors

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ModelConfig":
        """Build a configuration from a JSON-style parameter table.

        ``constants`` and ``cosmology`` hold overrides of the default
        primitive values; the remaining keys map onto the sweep settings.

        Raises:
            ValueError: On unknown keys
        """
        data = dict(data)
        constants = _override(DEFAULT_CONSTANTS, data.pop("constants", {}), "constants")
        cosmology = _override(PLANCK_2018, data.pop("cosmology", {}), "cosmology")

        allowed = {"z_min", "z_max", "steps", "output_dir"}
        unknown = set(data) - allowed
        if unknown:
            raise ValueError(f"Unknown configuration keys: {sorted(unknown)}")

        if "steps" in data:
            data["steps"] = int(data["steps"])

        return cls(constants=constants, cosmology=cosmology, **data)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "constants": self.constants.as_dict(),
            "cosmology": self.cosmology.as_dict(),
            "z_min": self.z_min,
            "z_max": self.z_max,
            "steps": self.steps,
            "output_dir": self.output_dir,
        }


def _override(base, overrides: Dict[str, Any], section: str):
    """Return ``base`` with primitive fields replaced from ``overrides``."""
    names = {f.name for f in fields(base)}
    unknown = set(overrides) - names
    if unknown:
        raise ValueError(f"Unknown {section} keys: {sorted(unknown)}")
    return replace(base, **{k: float(v) for k, v in overrides.items()})
