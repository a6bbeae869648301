"""Tests for summary and chart data."""

import dataclasses
import typing
from typing import Optional

import pytest
import numpy as np
from numpy.testing import assert_allclose

import reem
from reem.utils.constants import DEFAULT_CONSTANTS
from reem.mass_model import EffectiveMassModel
from reem.analysis import (
    MassSummary,
    summarize_model,
    build_chart_data,
    print_summary,
    LOG_Z_FLOOR,
)


class TestMassSummary:
    """Tests for summarize_model."""

    @pytest.fixture
    def summary(self):
        return summarize_model()

    def test_type(self, summary):
        assert isinstance(summary, MassSummary)
        assert summary.m_base == DEFAULT_CONSTANTS.m_base

    def test_decoupling_enhancement(self, summary):
        """The capped factor gives a 5% enhancement at decoupling."""
        assert_allclose(summary.decoupling_enhancement_percent, 5.0, rtol=1e-12)

    def test_present_enhancement(self, summary):
        assert_allclose(summary.present_enhancement, DEFAULT_CONSTANTS.epsilon, rtol=1e-6)

    def test_local_shift(self, summary):
        assert summary.local_fractional_shift == summary.local_frame.fractional_shift
        assert 0 < summary.local_fractional_shift < 1e-6

    def test_custom_model(self):
        const = dataclasses.replace(DEFAULT_CONSTANTS, epsilon=0.0)
        summary = summarize_model(EffectiveMassModel(const))
        assert summary.decoupling_enhancement_percent == 0.0
        assert summary.local_fractional_shift == 0.0

    def test_as_dict(self, summary):
        data = summary.as_dict()
        assert data["decoupling"]["z"] == 1100.0
        assert data["present"]["a"] == 1.0
        assert set(data["local_frame"]) == {"m_eff", "m_base", "m_motion", "fractional_shift"}

    def test_print_summary(self, summary, capsys):
        print_summary(summary)
        out = capsys.readouterr().out
        assert "Decoupling" in out
        assert "5.00%" in out
        assert "Local Frame (v_CMB):" in out

    def test_quick_summary(self, capsys):
        data = reem.quick_summary()
        assert "Current Mass" in capsys.readouterr().out
        assert_allclose(data["decoupling_enhancement_percent"], 5.0, rtol=1e-12)

    def test_quick_summary_model_is_optional(self):
        hints = typing.get_type_hints(reem.quick_summary)
        assert hints["model"] == Optional[EffectiveMassModel]


class TestChartData:
    """Tests for build_chart_data."""

    @pytest.fixture
    def data(self):
        table = EffectiveMassModel().sweep_evolution(100)
        return build_chart_data(table, DEFAULT_CONSTANTS)

    def test_series_lengths(self, data):
        assert set(data) == {
            "z", "m_eff_cosmo", "m_base_standard", "fractional_difference",
            "log_z", "log_m_eff", "log_m_base",
        }
        assert all(len(v) == 101 for v in data.values())

    def test_log_z_floor(self, data):
        """z = 0 maps to log10 of the floor."""
        assert_allclose(data["log_z"][0], np.log10(LOG_Z_FLOOR))
        assert_allclose(data["log_z"][-1], np.log10(1100.0))

    def test_baseline_flat(self, data):
        assert np.all(data["m_base_standard"] == DEFAULT_CONSTANTS.m_base)
        assert_allclose(data["log_m_base"], np.log10(DEFAULT_CONSTANTS.m_base))

    def test_fractional_difference(self, data):
        expected = (data["m_eff_cosmo"] - DEFAULT_CONSTANTS.m_base) / DEFAULT_CONSTANTS.m_base
        assert_allclose(data["fractional_difference"], expected)

    def test_log_mass(self, data):
        assert_allclose(data["log_m_eff"], np.log10(data["m_eff_cosmo"]))
        assert np.all(data["log_m_eff"] >= data["log_m_base"])
