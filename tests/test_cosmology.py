"""Tests for background cosmology functions."""

import pytest
import numpy as np
from numpy.testing import assert_allclose

from reem.utils.constants import DEFAULT_CONSTANTS, PLANCK_2018
from reem.utils.numerics import A_FLOOR, clamp_scale_factor, check_divergence
from reem.cosmology import (
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


class TestHubbleRate:
    """Tests for H(a)."""

    def test_present_value(self):
        """H(1) = H0·sqrt(Ωm + Ωr + ΩΛ)."""
        expected = DEFAULT_CONSTANTS.H0_SI * np.sqrt(0.315 + 5e-5 + 0.685)
        assert_allclose(hubble_rate(1.0), expected, rtol=1e-14)

    def test_formula(self):
        """H(a) should follow the flat Friedmann form."""
        a = 0.2
        expected = DEFAULT_CONSTANTS.H0_SI * np.sqrt(0.315 / a**3 + 5e-5 / a**4 + 0.685)
        assert_allclose(hubble_rate(a), expected, rtol=1e-14)

    def test_custom_densities(self):
        """Pure de Sitter gives H = H0."""
        assert_allclose(hubble_rate(0.3, Om0=0.0, Or0=0.0, Ol0=1.0), DEFAULT_CONSTANTS.H0_SI, rtol=1e-14)

    def test_increases_into_past(self):
        """H should grow as a decreases."""
        H = hubble_rate(np.array([1.0, 0.5, 0.1, 1e-3]))
        assert np.all(np.diff(H) > 0)

    def test_zero_clamped(self):
        """a = 0 should be floored, not divide by zero."""
        H0 = hubble_rate(0.0)
        assert np.isfinite(H0)
        assert H0 > 0
        assert H0 == hubble_rate(A_FLOOR)

    def test_negative_clamped(self):
        assert hubble_rate(-1.0) == hubble_rate(A_FLOOR)

    def test_array_matches_scalar(self):
        a = np.array([0.01, 0.1, 1.0])
        H = hubble_rate(a)
        for i, a_i in enumerate(a):
            assert_allclose(H[i], hubble_rate(float(a_i)), rtol=1e-14)

    def test_clamp_helper(self):
        assert clamp_scale_factor(0.5) == 0.5
        assert clamp_scale_factor(0.0) == A_FLOOR
        assert_allclose(clamp_scale_factor(np.array([0.0, 1.0])), [A_FLOOR, 1.0])


class TestFieldAndLength:
    """Tests for φ₀(a) and L(a)."""

    def test_field_today(self):
        assert_allclose(field_decay(1.0), DEFAULT_CONSTANTS.phi_0_now, rtol=1e-14)

    def test_field_radiation_scaling(self):
        """φ₀ should scale as a⁻⁴."""
        assert_allclose(field_decay(0.5), 16 * DEFAULT_CONSTANTS.phi_0_now, rtol=1e-14)
        assert_allclose(field_decay(0.1, phi0_now=2.0), 2.0e4, rtol=1e-12)

    def test_hubble_length(self):
        """L = c/H."""
        for a in [1.0, 0.5, 1e-3]:
            assert_allclose(hubble_length_scale(a), DEFAULT_CONSTANTS.c / hubble_rate(a), rtol=1e-14)

    def test_hubble_length_today(self):
        """Hubble radius today is of order 1e26 m."""
        L0 = hubble_length_scale(1.0)
        assert 1e26 < L0 < 2e26


class TestRedshiftConversion:
    """Tests for a <-> z conversions."""

    def test_present(self):
        assert redshift_to_scale_factor(0.0) == 1.0
        assert scale_factor_to_redshift(1.0) == 0.0

    def test_decoupling(self):
        assert redshift_to_scale_factor(1100.0) == 1.0 / 1101.0

    @pytest.mark.parametrize("z", [0.0, 0.5, 1.0, 3.0, 10.0, 1100.0, 1e6])
    def test_round_trip_z(self, z):
        assert_allclose(scale_factor_to_redshift(redshift_to_scale_factor(z)), z, rtol=1e-12, atol=1e-12)

    @pytest.mark.parametrize("a", [1.0, 0.75, 0.1, 1e-3, 1.0 / 1101])
    def test_round_trip_a(self, a):
        assert_allclose(redshift_to_scale_factor(scale_factor_to_redshift(a)), a, rtol=1e-12)

    def test_arrays(self):
        z = np.linspace(0, 1100, 11)
        assert_allclose(scale_factor_to_redshift(redshift_to_scale_factor(z)), z, rtol=1e-12, atol=1e-12)


class TestScaleFactorIntegration:
    """Tests for the fixed-step Euler integrator."""

    # Over 1e10 s starting at a = 1e-4, ln a grows by about 0.02
    T_MAX = 1e10

    def test_output_shape(self):
        history = integrate_scale_factor(0.0, self.T_MAX, steps=10)
        assert isinstance(history, ScaleFactorHistory)
        assert len(history.t) == 11
        assert len(history.a) == 11
        assert len(history.H) == 11

    def test_initial_condition(self):
        history = integrate_scale_factor(0.0, self.T_MAX, steps=10)
        assert_allclose(history.a[0], 1e-4, rtol=1e-12)
        assert history.t[0] == 0.0
        assert history.t[-1] == self.T_MAX

    def test_uniform_time_steps(self):
        history = integrate_scale_factor(5.0, 105.0, steps=4)
        assert_allclose(history.t, [5.0, 30.0, 55.0, 80.0, 105.0])

    def test_expanding(self):
        history = integrate_scale_factor(0.0, self.T_MAX, steps=50)
        assert np.all(np.diff(history.a) > 0)

    def test_hubble_paired(self):
        """Each H sample should be H(a) at the same step."""
        history = integrate_scale_factor(0.0, self.T_MAX, steps=10)
        assert_allclose(history.H, hubble_rate(history.a), rtol=1e-14)

    def test_single_euler_step(self):
        """One step: ln a1 = ln a0 + H(a0)·dt."""
        history = integrate_scale_factor(0.0, self.T_MAX, steps=1)
        expected = np.exp(np.log(1e-4) + hubble_rate(1e-4) * self.T_MAX)
        assert_allclose(history.a[1], expected, rtol=1e-12)

    def test_dlna_dt(self):
        assert_allclose(dlna_dt(np.log(0.5)), hubble_rate(0.5), rtol=1e-12)

    @pytest.mark.parametrize("steps", [0, -3])
    def test_invalid_steps(self, steps):
        with pytest.raises(ValueError):
            integrate_scale_factor(0.0, self.T_MAX, steps=steps)

    def test_redshift_property(self):
        history = integrate_scale_factor(0.0, self.T_MAX, steps=5)
        assert_allclose(history.z, 1.0 / history.a - 1.0)

    def test_first_order_error(self):
        """Euler error should shrink roughly linearly with dt."""
        errors = []
        for steps in (10, 100):
            euler = integrate_scale_factor(0.0, self.T_MAX, steps=steps)
            ref = integrate_scale_factor_reference(0.0, self.T_MAX, steps=steps)
            errors.append(np.log(euler.a[-1]) - np.log(ref.a[-1]))

        coarse, fine = errors
        # H decreases as a grows, so explicit Euler overshoots
        assert coarse > 0
        assert fine > 0
        assert 5.0 < coarse / fine < 20.0

    def test_reference_grid(self):
        ref = integrate_scale_factor_reference(0.0, self.T_MAX, steps=20)
        assert len(ref.a) == 21
        assert_allclose(ref.a[0], 1e-4, rtol=1e-12)


class TestDivergenceCheck:
    """Tests for check_divergence."""

    def test_finite(self):
        result = check_divergence(np.array([1.0, 2.0, 3.0]))
        assert not result.has_divergence

    def test_nan_and_inf(self):
        result = check_divergence(np.array([1.0, np.nan, np.inf]), name="m_eff")
        assert result.has_divergence
        assert list(result.divergence_indices) == [1, 2]
        assert "m_eff" in result.message

    def test_threshold(self):
        result = check_divergence(np.array([1.0, 1e12]), threshold=1e10)
        assert result.has_divergence
        assert list(result.divergence_indices) == [1]
