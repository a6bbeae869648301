"""Numerical utilities for REEM computations."""

from dataclasses import dataclass
from typing import Optional, TypeVar
import numpy as np
from numpy.typing import NDArray


T = TypeVar("T", float, NDArray[np.floating])

# Floor applied to the scale factor before evaluating H(a)
A_FLOOR = 1e-10


def clamp_scale_factor(a: T, floor: float = A_FLOOR) -> T:
    """Clamp the scale factor to a small positive floor.

    Keeps H(a) finite as a -> 0. Works on scalars and arrays.
    """
    if isinstance(a, np.ndarray):
        return np.maximum(a, floor)
    return max(a, floor)


@dataclass
class DivergenceResult:
    """Result of divergence check."""

    has_divergence: bool
    divergence_indices: Optional[NDArray[np.intp]] = None
    divergence_values: Optional[NDArray[np.floating]] = None
    message: str = ""


def check_divergence(
    values: NDArray[np.floating],
    threshold: float = np.inf,
    check_nan: bool = True,
    check_inf: bool = True,
    name: str = "values",
) -> DivergenceResult:
    """Check array for non-finite or oversized entries.

    Args:
        values: Array to check
        threshold: Value magnitude threshold for divergence (default: none)
        check_nan: Whether to flag NaN as divergence
        check_inf: Whether to flag Inf as divergence
        name: Name of quantity for the message

    Returns:
        DivergenceResult with divergence information
    """
    values = np.asarray(values, dtype=float)
    with np.errstate(invalid="ignore"):
        divergent = np.abs(values) > threshold

    if check_nan:
        divergent |= np.isnan(values)
    if check_inf:
        divergent |= np.isinf(values)

    if np.any(divergent):
        indices = np.where(divergent)[0]
        return DivergenceResult(
            has_divergence=True,
            divergence_indices=indices,
            divergence_values=values[divergent],
            message=f"{name}: divergence at {len(indices)} points; "
            f"first at index {indices[0]}, value = {values[indices[0]]:.3e}",
        )

    return DivergenceResult(has_divergence=False, message=f"{name}: no divergence detected")
