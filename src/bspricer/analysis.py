"""Qualitative reading of prices and Greeks.

Bands are presentation heuristics with configurable thresholds; they carry
no pricing meaning and nothing in the engine depends on them.
"""

from __future__ import annotations

from typing import Optional

from .black_scholes import ValuationEngine
from .config import AnalysisConfig, DisplayConfig
from .core import CALL, normalise_kind

LOW, MEDIUM, HIGH = "low", "medium", "high"


def classify_moneyness(S: float, K: float, kind: str = CALL, atm_band: float = 0.01) -> str:
    """'ITM', 'ATM' or 'OTM' for the given side.

    Within ``atm_band`` (relative) of the strike counts as at the money.
    """
    kind = normalise_kind(kind)
    ratio = S / K
    if abs(ratio - 1.0) <= atm_band:
        return "ATM"
    in_the_money = ratio > 1.0 if kind == CALL else ratio < 1.0
    return "ITM" if in_the_money else "OTM"


def _band(value: float, thresholds: tuple[float, float]) -> str:
    lo, hi = thresholds
    mag = abs(value)
    if mag < lo:
        return LOW
    if mag > hi:
        return HIGH
    return MEDIUM


def band_delta(delta: float, config: Optional[AnalysisConfig] = None) -> str:
    return _band(delta, (config or AnalysisConfig()).delta)


def band_gamma(gamma: float, config: Optional[AnalysisConfig] = None) -> str:
    return _band(gamma, (config or AnalysisConfig()).gamma)


def band_theta(theta_per_day: float, config: Optional[AnalysisConfig] = None) -> str:
    return _band(theta_per_day, (config or AnalysisConfig()).theta)


def band_vega(vega_per_pct: float, config: Optional[AnalysisConfig] = None) -> str:
    return _band(vega_per_pct, (config or AnalysisConfig()).vega)


def band_rho(rho_per_pct: float, config: Optional[AnalysisConfig] = None) -> str:
    return _band(rho_per_pct, (config or AnalysisConfig()).rho)


def describe(
    engine: ValuationEngine,
    kind: str = CALL,
    config: Optional[AnalysisConfig] = None,
    display: Optional[DisplayConfig] = None,
) -> list[str]:
    """Human-readable commentary lines for one side of the contract."""
    config = config or AnalysisConfig()
    display = display or DisplayConfig()
    kind = normalise_kind(kind)
    g = engine.greeks(kind)

    theta_day = g["theta"] / display.days_per_year
    vega_pct = g["vega"] / 100.0
    rho_pct = g["rho"] / 100.0
    moneyness = classify_moneyness(engine.S, engine.K, kind, config.atm_band)
    side = "Call" if kind == CALL else "Put"

    return [
        f"{side} is {moneyness} (S/K = {engine.S / engine.K:.4f}).",
        f"Delta {g['delta']:+.4f}: {band_delta(g['delta'], config)} directional exposure; "
        f"price moves about {abs(g['delta']):.2f} per 1.00 move in the underlying.",
        f"Gamma {g['gamma']:.4f}: {band_gamma(g['gamma'], config)} convexity.",
        f"Theta {theta_day:+.4f}/day: {band_theta(theta_day, config)} time decay.",
        f"Vega {vega_pct:.4f} per 1% vol: {band_vega(vega_pct, config)} volatility sensitivity.",
        f"Rho {rho_pct:+.4f} per 1% rate: {band_rho(rho_pct, config)} rate sensitivity.",
    ]
