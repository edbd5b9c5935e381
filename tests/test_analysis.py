"""Tests for qualitative Greek banding."""

import pytest
from bspricer import ValuationEngine, CALL, PUT
from bspricer.analysis import (
    classify_moneyness, band_delta, band_gamma, band_theta, band_vega, band_rho,
    describe,
)
from bspricer.config import AnalysisConfig


class TestMoneyness:
    @pytest.mark.parametrize("S,K,kind,expected", [
        (100, 100, CALL, "ATM"),
        (100.5, 100, PUT, "ATM"),
        (120, 100, CALL, "ITM"),
        (120, 100, PUT, "OTM"),
        (80, 100, CALL, "OTM"),
        (80, 100, PUT, "ITM"),
    ])
    def test_labels(self, S, K, kind, expected):
        assert classify_moneyness(S, K, kind) == expected

    def test_band_width(self):
        assert classify_moneyness(104, 100, CALL, atm_band=0.05) == "ATM"


class TestBands:
    def test_defaults(self):
        assert band_delta(0.1) == "low"
        assert band_delta(-0.5) == "medium"
        assert band_delta(0.9) == "high"
        assert band_gamma(0.02) == "medium"
        assert band_theta(-0.1) == "high"
        assert band_vega(0.05) == "low"
        assert band_rho(-0.5) == "high"

    def test_custom_thresholds(self):
        cfg = AnalysisConfig(delta=(0.05, 0.1))
        assert band_delta(0.5, cfg) == "high"

    def test_boundaries_are_medium(self):
        cfg = AnalysisConfig(gamma=(0.01, 0.05))
        assert band_gamma(0.01, cfg) == "medium"
        assert band_gamma(0.05, cfg) == "medium"

    def test_invalid_thresholds(self):
        with pytest.raises(ValueError):
            AnalysisConfig(vega=(0.5, 0.1))


class TestDescribe:
    def test_atm_call(self):
        lines = describe(ValuationEngine(100, 100, 1.0, 0.05, 0.2), CALL)
        assert len(lines) == 6
        assert lines[0].startswith("Call is ATM")
        assert "medium directional exposure" in lines[1]
        assert "Vega 0.3752 per 1% vol: high" in lines[4]
        assert "Rho +0.5323 per 1% rate: high" in lines[5]

    def test_deep_otm_put(self):
        lines = describe(ValuationEngine(150, 100, 0.25, 0.05, 0.2), PUT)
        assert lines[0].startswith("Put is OTM")
        assert "low directional exposure" in lines[1]
