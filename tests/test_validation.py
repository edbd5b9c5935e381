"""Tests for the parity sweep and stress testing."""

import numpy as np
import pytest
from bspricer import OptionParameters, CALL, PUT
from bspricer.validation import parity_sweep, stress_test

OPT = OptionParameters(S=100, K=100, T=1.0, r=0.05, sigma=0.2)


class TestParitySweep:
    def test_all_pass(self):
        scenarios = [
            OPT,
            {"S": 80, "K": 100, "T": 0.5, "r": -0.01, "sigma": 0.35},
            (120, 90, 2.0, 0.03, 0.15),
        ]
        result = parity_sweep(scenarios)
        assert result["passed"]
        assert result["residuals"].shape == (3,)
        assert result["max_abs_residual"] < 1e-10
        assert result["failures"] == []

    def test_invalid_scenario_isolated(self):
        scenarios = [OPT, (100, 100, 0.0, 0.05, 0.2), (90, 100, 1.0, 0.05, 0.25)]
        result = parity_sweep(scenarios)
        assert result["passed"]
        assert len(result["failures"]) == 1
        idx, msg = result["failures"][0]
        assert idx == 1
        assert "expired" in msg
        assert np.isnan(result["residuals"][1])
        assert not np.isnan(result["residuals"][2])

    def test_malformed_scenarios_isolated(self):
        scenarios = [
            (100, 100, 1.0, 0.05, 0.2),
            {"S": 100, "K": 100, "T": 1.0, "sigma": 0.2},
            (100, 100, 1.0),
            ("abc", 100, 1.0, 0.05, 0.2),
            42,
            OPT,
        ]
        result = parity_sweep(scenarios)
        assert result["passed"]
        assert [i for i, _ in result["failures"]] == [1, 2, 3, 4]
        msgs = dict(result["failures"])
        assert "r" in msgs[1]
        assert "expected 5" in msgs[2]
        assert "non-numeric" in msgs[3]
        assert "unsupported" in msgs[4]
        assert not np.isnan(result["residuals"][5])

    def test_all_invalid(self):
        result = parity_sweep([(0, 100, 1.0, 0.05, 0.2)])
        assert np.isnan(result["max_abs_residual"])

    def test_tolerance_applied(self):
        result = parity_sweep([OPT], tol=0.0)
        assert result["passed"] == (result["residuals"][0] == 0.0)


class TestStressTest:
    def test_output_shape(self):
        spots = np.array([0.9, 1.0, 1.1])
        vols = np.array([-0.05, 0.0, 0.05])
        rates = np.array([-0.01, 0.0, 0.01])
        result = stress_test(OPT, spots, vols, rates, CALL)
        assert result.shape == (3, 3, 3)

    def test_call_monotone_in_spot(self):
        spots = np.array([0.8, 0.9, 1.0, 1.1, 1.2])
        result = stress_test(OPT, spots, [0.0], [0.0], CALL)
        prices = result[:, 0, 0]
        assert np.all(np.diff(prices) > 0)

    def test_put_falls_with_rate(self):
        rates = np.array([-0.02, 0.0, 0.02])
        result = stress_test(OPT, [1.0], [0.0], rates, PUT)
        assert np.all(np.diff(result[0, 0, :]) < 0)

    def test_vol_floor(self):
        result = stress_test(OPT, [1.0], [-1.0], [0.0], CALL)
        assert np.isfinite(result).all()

    def test_base_point_matches_engine(self):
        from bspricer import bs_price
        result = stress_test(OPT, [1.0], [0.0], [0.0], CALL)
        assert result[0, 0, 0] == pytest.approx(bs_price(OPT, CALL))
