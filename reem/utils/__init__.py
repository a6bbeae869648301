"""REEM utility modules."""

from .constants import (
    PhysicalConstants,
    CosmologicalParameters,
    DEFAULT_CONSTANTS,
    PLANCK_2018,
    Z_DECOUPLING,
)
from .config import ModelConfig
from .numerics import A_FLOOR, clamp_scale_factor, check_divergence

__all__ = [
    "PhysicalConstants",
    "CosmologicalParameters",
    "DEFAULT_CONSTANTS",
    "PLANCK_2018",
    "Z_DECOUPLING",
    "ModelConfig",
    "A_FLOOR",
    "clamp_scale_factor",
    "check_divergence",
]
