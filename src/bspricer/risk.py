"""Bump-and-reprice risk.

Numerical Greeks via finite differences on any pricer callable (used to
cross-check the closed-form Greeks), and spot × vol scenario grids.
"""

from __future__ import annotations

import numpy as np
from typing import Callable, Optional

from .black_scholes import ValuationEngine

__all__ = [
    "engine_pricer",
    "numerical_greeks",
    "scenario_grid",
]


def engine_pricer(S: float, K: float, T: float, r: float, sigma: float, kind: str) -> float:
    """Default pricer: closed-form price from a fresh :class:`ValuationEngine`."""
    return ValuationEngine(S, K, T, r, sigma).price(kind)


# ---------------------------------------------------------------------------
# Numerical Greeks
# ---------------------------------------------------------------------------

def numerical_greeks(
    pricer_func: Optional[Callable[..., float]],
    S: float,
    K: float,
    T: float,
    r: float,
    sigma: float,
    kind: str,
    *,
    bump_pct: float = 0.01,
) -> dict[str, float]:
    """Compute Greeks via finite differences on an arbitrary pricer.

    Parameters
    ----------
    pricer_func : callable or None
        ``pricer_func(S, K, T, r, sigma, kind) -> float``.  ``None`` uses
        :func:`engine_pricer`.
    S, K, T, r, sigma : float
        Market and instrument parameters.
    kind : str
        ``"call"`` or ``"put"``.
    bump_pct : float
        Relative bump size for spot and vol; absolute for rate (default 0.01).

    Returns
    -------
    dict[str, float]
        Keys: ``delta``, ``gamma``, ``vega``, ``theta``, ``rho``.  Theta is
        the one-day calendar decay annualised (per year), matching the
        sign convention of the analytic theta; within the last day the step
        is half the remaining maturity.  The downward vol bump is floored
        at 1e-6 and vega divides by the actual spread.
    """
    if pricer_func is None:
        pricer_func = engine_pricer

    P0 = pricer_func(S, K, T, r, sigma, kind)

    # --- Delta & Gamma (spot bump) ---
    eps_S = bump_pct * S
    P_up = pricer_func(S + eps_S, K, T, r, sigma, kind)
    P_dn = pricer_func(S - eps_S, K, T, r, sigma, kind)
    delta = (P_up - P_dn) / (2.0 * eps_S)
    gamma = (P_up - 2.0 * P0 + P_dn) / (eps_S ** 2)

    # --- Vega (vol bump) ---
    eps_v = max(bump_pct * sigma, 1e-4)
    P_vup = pricer_func(S, K, T, r, sigma + eps_v, kind)
    sig_dn = max(sigma - eps_v, 1e-6)
    P_vdn = pricer_func(S, K, T, r, sig_dn, kind)
    vega = (P_vup - P_vdn) / (sigma + eps_v - sig_dn)

    # --- Theta (time decay, 1-day bump, shrunk inside the last day) ---
    dt = min(1.0 / 365.0, 0.5 * T)
    P_t = pricer_func(S, K, T - dt, r, sigma, kind)
    theta_val = (P_t - P0) / dt

    # --- Rho (rate bump) ---
    eps_r = bump_pct
    P_rup = pricer_func(S, K, T, r + eps_r, sigma, kind)
    P_rdn = pricer_func(S, K, T, r - eps_r, sigma, kind)
    rho = (P_rup - P_rdn) / (2.0 * eps_r)

    return {
        "delta": float(delta),
        "gamma": float(gamma),
        "vega": float(vega),
        "theta": float(theta_val),
        "rho": float(rho),
    }


# ---------------------------------------------------------------------------
# Scenario grid
# ---------------------------------------------------------------------------

def scenario_grid(
    S: float,
    K: float,
    T: float,
    r: float,
    sigma: float,
    kind: str,
    spot_range: np.ndarray,
    vol_range: np.ndarray,
) -> dict:
    """Evaluate price and delta across a 2-D (spot × vol) scenario grid.

    ``S`` and ``sigma`` are the base point and are validated like any other
    input; the grid axes replace them.

    Parameters
    ----------
    spot_range : array, shape (n_spot,)
        Spot values to evaluate.
    vol_range : array, shape (n_vol,)
        Volatility values to evaluate.

    Returns
    -------
    dict
        ``"spot_values"``, ``"vol_values"``, ``"prices"`` and ``"deltas"``
        (each shape n_spot×n_vol), ``"base_price"``.
    """
    from .black_scholes_vec import bs_price_vec, bs_greeks_vec

    base = ValuationEngine(S, K, T, r, sigma)
    spot_range = np.asarray(spot_range, dtype=float)
    vol_range = np.asarray(vol_range, dtype=float)
    spots, vols = np.meshgrid(spot_range, vol_range, indexing="ij")

    prices = bs_price_vec(spots, K, T, r, vols, kind)
    deltas = bs_greeks_vec(spots, K, T, r, vols, kind)["delta"]

    return {
        "spot_values": spot_range.copy(),
        "vol_values": vol_range.copy(),
        "prices": prices,
        "deltas": deltas,
        "base_price": base.price(kind),
    }
