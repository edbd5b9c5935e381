# black_scholes_vec.py
# Vectorised Black-Scholes pricing, Greeks, and parity residual.
# All public functions accept scalars *or* NumPy arrays and broadcast.

from __future__ import annotations
import numpy as np
from scipy.special import erfc

from .exceptions import InvalidParameter

_INV_SQRT2 = 1.0 / np.sqrt(2.0)
_SQRT_2PI = np.sqrt(2.0 * np.pi)


def _N(x):
    """Vectorised standard-normal CDF (erfc form, tail-accurate)."""
    return 0.5 * erfc(-np.asarray(x, dtype=float) * _INV_SQRT2)


def _n(x):
    """Vectorised standard-normal PDF."""
    x = np.asarray(x, dtype=float)
    return np.exp(-0.5 * x * x) / _SQRT_2PI


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------
def _first_bad(mask: np.ndarray, values: np.ndarray) -> float:
    idx = int(np.flatnonzero(mask.ravel())[0])
    return float(np.broadcast_to(values, mask.shape).ravel()[idx])


def validate_arrays(S, K, T, sigma) -> None:
    """Element-wise version of :func:`bspricer.core.validate_inputs`.

    Fields are checked in the same order as the scalar engine and the first
    failing field raises, reporting the first offending element.
    """
    S, K, T, sigma = (np.asarray(x, dtype=float) for x in (S, K, T, sigma))
    checks = [
        (S, ~(S > 0), "S", "non_positive", "Stock price must be positive"),
        (K, ~(K > 0), "K", "non_positive", "Strike price must be positive"),
        (T, (T < 0) | np.isnan(T), "T", "negative", "Time to maturity cannot be negative"),
        (T, T == 0, "T", "expired", "Time to maturity cannot be zero (option expired)"),
        (sigma, (sigma < 0) | np.isnan(sigma), "sigma", "negative", "Volatility cannot be negative"),
        (sigma, sigma == 0, "sigma", "zero", "Volatility cannot be zero"),
    ]
    for values, bad, field, reason, msg in checks:
        bad = np.asarray(bad)
        if bad.any():
            raise InvalidParameter(field, reason, msg, _first_bad(bad, values))


def _d1_d2(S, K, T, r, sigma):
    """Compute d1, d2 arrays.  All inputs broadcast."""
    S, K, T, r, sigma = (np.asarray(x, dtype=float) for x in (S, K, T, r, sigma))
    sqrt_T = np.sqrt(T)
    sig_sqrt_T = sigma * sqrt_T
    d1 = (np.log(S / K) + (r + 0.5 * sigma * sigma) * T) / sig_sqrt_T
    d2 = d1 - sig_sqrt_T
    return d1, d2


def _is_call(kind) -> np.ndarray:
    """Return boolean mask: True where kind is a call; reject anything else."""
    kind = np.asarray(kind)
    flat = [str(k).strip().lower() for k in kind.flat]
    for k in flat:
        if k not in ("call", "c", "put", "p"):
            raise ValueError(f"kind must be 'call' or 'put', got {k!r}")
    mask = np.array([k in ("call", "c") for k in flat], dtype=bool)
    if kind.ndim == 0:
        return np.bool_(mask[0])
    return mask.reshape(kind.shape)


# ---------------------------------------------------------------------------
# Vectorised price
# ---------------------------------------------------------------------------
def bs_price_vec(S, K, T, r, sigma, kind) -> np.ndarray:
    """Vectorised Black-Scholes price.

    Parameters accept scalars or arrays; NumPy broadcasting rules apply.

    Returns
    -------
    np.ndarray
        Option prices (same shape as broadcasted inputs).

    Raises
    ------
    InvalidParameter
        If any element of ``S``, ``K``, ``T`` or ``sigma`` is out of range.
    """
    S, K, T, r, sigma = (np.asarray(x, dtype=float) for x in (S, K, T, r, sigma))
    validate_arrays(S, K, T, sigma)
    d1, d2 = _d1_d2(S, K, T, r, sigma)
    disc_r = np.exp(-r * T)

    call_px = S * _N(d1) - disc_r * K * _N(d2)
    put_px  = disc_r * K * _N(-d2) - S * _N(-d1)

    is_call = _is_call(kind)
    return np.where(is_call, call_px, put_px)


# ---------------------------------------------------------------------------
# Vectorised Greeks
# ---------------------------------------------------------------------------
def bs_greeks_vec(S, K, T, r, sigma, kind) -> dict[str, np.ndarray]:
    """Vectorised Black-Scholes Greeks.

    Returns dict with keys: delta, gamma, vega, theta, rho.
    Vega is dPrice/dSigma (absolute), theta is per year.
    """
    S, K, T, r, sigma = (np.asarray(x, dtype=float) for x in (S, K, T, r, sigma))
    validate_arrays(S, K, T, sigma)
    d1, d2 = _d1_d2(S, K, T, r, sigma)
    disc_r = np.exp(-r * T)
    sqrt_T = np.sqrt(T)
    n_d1 = _n(d1)
    is_call = _is_call(kind)

    # Common
    gamma = n_d1 / (S * sigma * sqrt_T)
    vega  = S * n_d1 * sqrt_T

    # Call-specific
    delta_c = _N(d1)
    theta_c = -S * n_d1 * sigma / (2 * sqrt_T) - r * K * disc_r * _N(d2)
    rho_c   = K * T * disc_r * _N(d2)

    # Put-specific
    delta_p = _N(d1) - 1.0
    theta_p = -S * n_d1 * sigma / (2 * sqrt_T) + r * K * disc_r * _N(-d2)
    rho_p   = -K * T * disc_r * _N(-d2)

    delta = np.where(is_call, delta_c, delta_p)
    theta = np.where(is_call, theta_c, theta_p)
    rho   = np.where(is_call, rho_c, rho_p)

    return {"delta": delta, "gamma": gamma, "vega": vega, "theta": theta, "rho": rho}


# ---------------------------------------------------------------------------
# Vectorised parity residual
# ---------------------------------------------------------------------------
def bs_parity_residual_vec(S, K, T, r, sigma) -> np.ndarray:
    """``(C - P) - (S - K e^(-rT))`` element-wise; zero up to rounding."""
    S, K, T, r, sigma = (np.asarray(x, dtype=float) for x in (S, K, T, r, sigma))
    call_px = bs_price_vec(S, K, T, r, sigma, "call")
    put_px = bs_price_vec(S, K, T, r, sigma, "put")
    return (call_px - put_px) - (S - K * np.exp(-r * T))
