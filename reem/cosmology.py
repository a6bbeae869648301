"""Background cosmology functions for the REEM model.

Pure functions of explicit inputs plus an immutable constant set:

    H(a)     = H0 · sqrt(Ωm/a³ + Ωr/a⁴ + ΩΛ)     (flat, no curvature term)
    φ₀(a)    = φ₀,now · a⁻⁴                       (radiation-like dilution)
    L(a)     = c / H(a)                           (Hubble radius)
    z        = 1/a - 1,   a = 1/(1+z)

The scale-factor integrator is a fixed-step explicit Euler pass of
d(ln a)/dt = H(a). It is first order, so its error grows as O(dt); it is
not used by the published mass results. A tight-tolerance scipy solution on
the same grid is available to measure that error.
"""

from dataclasses import dataclass
from typing import Optional, TypeVar
import numpy as np
from numpy.typing import NDArray
from scipy.integrate import solve_ivp

from .utils.constants import PhysicalConstants, DEFAULT_CONSTANTS, PLANCK_2018
from .utils.numerics import clamp_scale_factor


T = TypeVar("T", float, NDArray[np.floating])

# Initial scale factor of the integrator
A_INIT = 1e-4


@dataclass
class ScaleFactorHistory:
    """Scale factor and Hubble rate sampled on a uniform time grid."""

    t: NDArray[np.floating]  # Time [s]
    a: NDArray[np.floating]  # Scale factor
    H: NDArray[np.floating]  # Hubble rate [s⁻¹]

    @property
    def z(self) -> NDArray[np.floating]:
        """Redshift at each sample."""
        return scale_factor_to_redshift(self.a)


def hubble_rate(
    a: T,
    Om0: float = PLANCK_2018.Om0,
    Or0: float = PLANCK_2018.Or0,
    Ol0: float = PLANCK_2018.Ol0,
    constants: PhysicalConstants = DEFAULT_CONSTANTS,
) -> T:
    """Hubble rate H(a) in s⁻¹.

    The scale factor is floored at 1e-10 so a -> 0 stays finite.
    """
    a_clamped = clamp_scale_factor(a)
    return constants.H0_SI * np.sqrt(Om0 / a_clamped**3 + Or0 / a_clamped**4 + Ol0)


def dlna_dt(
    lna: float,
    Om0: float = PLANCK_2018.Om0,
    Or0: float = PLANCK_2018.Or0,
    Ol0: float = PLANCK_2018.Ol0,
    constants: PhysicalConstants = DEFAULT_CONSTANTS,
) -> float:
    """Right-hand side d(ln a)/dt = H(a)."""
    return hubble_rate(np.exp(lna), Om0, Or0, Ol0, constants)


def field_decay(a: T, phi0_now: Optional[float] = None, constants: PhysicalConstants = DEFAULT_CONSTANTS) -> T:
    """Background field φ₀(a) = φ₀,now · (1/a)⁴.

    Diverges as a -> 0; a = 0 is undefined.
    """
    if phi0_now is None:
        phi0_now = constants.phi_0_now
    return phi0_now * (1.0 / a) ** 4


def hubble_length_scale(
    a: T,
    Om0: float = PLANCK_2018.Om0,
    Or0: float = PLANCK_2018.Or0,
    Ol0: float = PLANCK_2018.Ol0,
    constants: PhysicalConstants = DEFAULT_CONSTANTS,
) -> T:
    """Cosmological length scale L = c/H(a) [m]."""
    return constants.c / hubble_rate(a, Om0, Or0, Ol0, constants)


def redshift_to_scale_factor(z: T) -> T:
    """a = 1/(1+z)."""
    return 1.0 / (1.0 + z)


def scale_factor_to_redshift(a: T) -> T:
    """z = 1/a - 1."""
    return (1.0 / a) - 1.0


def _time_grid(t0: float, tmax: float, steps: int) -> NDArray[np.floating]:
    if steps <= 0:
        raise ValueError(f"steps = {steps} must be a positive integer")
    return np.linspace(t0, tmax, steps + 1)


def integrate_scale_factor(
    t0: float,
    tmax: float,
    steps: int = 1000,
    a_init: float = A_INIT,
    Om0: float = PLANCK_2018.Om0,
    Or0: float = PLANCK_2018.Or0,
    Ol0: float = PLANCK_2018.Ol0,
    constants: PhysicalConstants = DEFAULT_CONSTANTS,
) -> ScaleFactorHistory:
    """Integrate d(ln a)/dt = H(a) with fixed-step explicit Euler.

    Starts from ln(a_init) at t0 and takes ``steps`` steps of size
    (tmax - t0)/steps, returning steps+1 samples. First order: expect
    O(dt) error, large for coarse grids.

    Args:
        t0: Start time [s]
        tmax: End time [s]
        steps: Number of Euler steps
        a_init: Scale factor at t0

    Returns:
        ScaleFactorHistory with t, a, H arrays

    Raises:
        ValueError: If steps <= 0
    """
    t = _time_grid(t0, tmax, steps)
    dt = (tmax - t0) / steps

    a = np.empty(steps + 1)
    H = np.empty(steps + 1)

    lna = np.log(a_init)
    for i in range(steps + 1):
        a_val = np.exp(lna)
        a[i] = a_val
        H[i] = hubble_rate(a_val, Om0, Or0, Ol0, constants)

        if i < steps:
            lna += dlna_dt(lna, Om0, Or0, Ol0, constants) * dt

    return ScaleFactorHistory(t=t, a=a, H=H)


def integrate_scale_factor_reference(
    t0: float,
    tmax: float,
    steps: int = 1000,
    a_init: float = A_INIT,
    Om0: float = PLANCK_2018.Om0,
    Or0: float = PLANCK_2018.Or0,
    Ol0: float = PLANCK_2018.Ol0,
    constants: PhysicalConstants = DEFAULT_CONSTANTS,
    rtol: float = 1e-10,
    atol: float = 1e-12,
) -> ScaleFactorHistory:
    """Solve the same problem as :func:`integrate_scale_factor` with solve_ivp.

    Sampled on the identical time grid so the Euler error can be read off
    sample by sample.
    """
    t = _time_grid(t0, tmax, steps)

    def rhs(_t, y):
        return [dlna_dt(y[0], Om0, Or0, Ol0, constants)]

    sol = solve_ivp(
        rhs,
        (t0, tmax),
        [np.log(a_init)],
        method="DOP853",
        t_eval=t,
        rtol=rtol,
        atol=atol,
    )
    if not sol.success:
        raise RuntimeError(f"Reference integration failed: {sol.message}")

    a = np.exp(sol.y[0])
    return ScaleFactorHistory(t=t, a=a, H=hubble_rate(a, Om0, Or0, Ol0, constants))
