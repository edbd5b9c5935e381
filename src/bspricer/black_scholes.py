# black_scholes.py
# Closed-form Black-Scholes valuation of a European option on a
# non-dividend-paying underlying: price, Greeks and a parity diagnostic.

from __future__ import annotations

import math
from math import exp, log, sqrt

from .core import CALL, PUT, OptionParameters, normalise_kind

PI       = math.pi
SQRT_2PI = math.sqrt(2.0 * math.pi)
INV_SQRT2 = 1.0 / math.sqrt(2.0)


def normal_cdf(x: float) -> float:
    """Standard normal CDF via ``0.5 * erfc(-x / sqrt(2))``.

    The erfc form keeps full relative precision in the lower tail, where
    ``0.5 * (1 + erf(x / sqrt(2)))`` cancels to zero.
    """
    return 0.5 * math.erfc(-x * INV_SQRT2)


def normal_pdf(x: float) -> float:
    """Standard normal PDF."""
    return exp(-0.5 * x * x) / SQRT_2PI


class ValuationEngine:
    """Black-Scholes calculator bound to one set of market inputs.

    The inputs are validated once, on construction, and cannot be changed
    afterwards; every method is a pure function of them.

    >>> eng = ValuationEngine(100, 100, 1.0, 0.05, 0.2)
    >>> round(eng.calculate_call_price(), 4)
    10.4506
    """

    __slots__ = ("_p",)

    def __init__(self, S: float, K: float, T: float, r: float, sigma: float):
        object.__setattr__(self, "_p", OptionParameters(S, K, T, r, sigma))

    @classmethod
    def from_params(cls, params: OptionParameters) -> "ValuationEngine":
        # OptionParameters is already validated and frozen
        eng = object.__new__(cls)
        object.__setattr__(eng, "_p", params)
        return eng

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is read-only")

    def __reduce__(self):
        # copy / pickle rebuild through from_params, not slot assignment
        return (type(self).from_params, (self._p,))

    def __repr__(self) -> str:
        p = self._p
        return (f"{type(self).__name__}(S={p.S!r}, K={p.K!r}, T={p.T!r}, "
                f"r={p.r!r}, sigma={p.sigma!r})")

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------
    @property
    def params(self) -> OptionParameters:
        return self._p

    @property
    def S(self) -> float:
        return self._p.S

    @property
    def K(self) -> float:
        return self._p.K

    @property
    def T(self) -> float:
        return self._p.T

    @property
    def r(self) -> float:
        return self._p.r

    @property
    def sigma(self) -> float:
        return self._p.sigma

    # ------------------------------------------------------------------
    # Building blocks
    # ------------------------------------------------------------------
    normal_cdf = staticmethod(normal_cdf)
    normal_pdf = staticmethod(normal_pdf)

    def d1(self) -> float:
        """d1 = [ln(S/K) + (r + sigma^2/2) T] / (sigma sqrt(T))"""
        p = self._p
        return (log(p.S / p.K) + (p.r + 0.5 * p.sigma * p.sigma) * p.T) / (p.sigma * sqrt(p.T))

    def d2(self) -> float:
        """d2 = d1 - sigma sqrt(T)"""
        return self.d1() - self._p.sigma * sqrt(self._p.T)

    def discount_factor(self) -> float:
        return exp(-self._p.r * self._p.T)

    # ------------------------------------------------------------------
    # Prices
    # ------------------------------------------------------------------
    def calculate_call_price(self) -> float:
        """C = S N(d1) - K e^(-rT) N(d2)"""
        p = self._p
        d1, d2 = self.d1(), self.d2()
        return p.S * normal_cdf(d1) - p.K * self.discount_factor() * normal_cdf(d2)

    def calculate_put_price(self) -> float:
        """P = K e^(-rT) N(-d2) - S N(-d1)"""
        p = self._p
        d1, d2 = self.d1(), self.d2()
        return p.K * self.discount_factor() * normal_cdf(-d2) - p.S * normal_cdf(-d1)

    # ------------------------------------------------------------------
    # Greeks
    # ------------------------------------------------------------------
    def calculate_delta_call(self) -> float:
        return normal_cdf(self.d1())

    def calculate_delta_put(self) -> float:
        return normal_cdf(self.d1()) - 1.0

    def calculate_gamma(self) -> float:
        """Shared by calls and puts: N'(d1) / (S sigma sqrt(T))."""
        p = self._p
        return normal_pdf(self.d1()) / (p.S * p.sigma * sqrt(p.T))

    def calculate_theta_call(self) -> float:
        """Calendar-time decay of the call, per year (divide by 365 for per day)."""
        p = self._p
        d1, d2 = self.d1(), self.d2()
        decay = -(p.S * normal_pdf(d1) * p.sigma) / (2.0 * sqrt(p.T))
        return decay - p.r * p.K * self.discount_factor() * normal_cdf(d2)

    def calculate_theta_put(self) -> float:
        """Calendar-time decay of the put, per year."""
        p = self._p
        d1, d2 = self.d1(), self.d2()
        decay = -(p.S * normal_pdf(d1) * p.sigma) / (2.0 * sqrt(p.T))
        return decay + p.r * p.K * self.discount_factor() * normal_cdf(-d2)

    def calculate_vega(self) -> float:
        """Shared by calls and puts, per 1.00 of volatility (not per 1%)."""
        p = self._p
        return p.S * sqrt(p.T) * normal_pdf(self.d1())

    def calculate_rho_call(self) -> float:
        p = self._p
        return p.K * p.T * self.discount_factor() * normal_cdf(self.d2())

    def calculate_rho_put(self) -> float:
        p = self._p
        return -p.K * p.T * self.discount_factor() * normal_cdf(-self.d2())

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------
    def verify_put_call_parity(self) -> float:
        """Signed residual ``(C - P) - (S - K e^(-rT))``.

        Zero in exact arithmetic; the caller applies its own tolerance.
        """
        p = self._p
        lhs = self.calculate_call_price() - self.calculate_put_price()
        return lhs - (p.S - p.K * self.discount_factor())

    # Short names
    call_price = calculate_call_price
    put_price = calculate_put_price
    delta_call = calculate_delta_call
    delta_put = calculate_delta_put
    gamma = calculate_gamma
    theta_call = calculate_theta_call
    theta_put = calculate_theta_put
    vega = calculate_vega
    rho_call = calculate_rho_call
    rho_put = calculate_rho_put
    put_call_parity_residual = verify_put_call_parity

    # ------------------------------------------------------------------
    # Per-kind views
    # ------------------------------------------------------------------
    def price(self, kind: str = CALL) -> float:
        kind = normalise_kind(kind)
        if kind == CALL:
            return self.calculate_call_price()
        return self.calculate_put_price()

    def greeks(self, kind: str = CALL) -> dict[str, float]:
        """Price and Greeks for one side of the contract.

        Vega is dPrice/dSigma and theta is per year, as returned by the
        individual ``calculate_*`` methods.
        """
        kind = normalise_kind(kind)
        if kind == CALL:
            return {
                "price": self.calculate_call_price(),
                "delta": self.calculate_delta_call(),
                "gamma": self.calculate_gamma(),
                "vega":  self.calculate_vega(),
                "theta": self.calculate_theta_call(),
                "rho":   self.calculate_rho_call(),
            }
        return {
            "price": self.calculate_put_price(),
            "delta": self.calculate_delta_put(),
            "gamma": self.calculate_gamma(),
            "vega":  self.calculate_vega(),
            "theta": self.calculate_theta_put(),
            "rho":   self.calculate_rho_put(),
        }


def price(params: OptionParameters, kind: str = CALL) -> float:
    return ValuationEngine.from_params(params).price(kind)


def greeks(params: OptionParameters, kind: str = CALL) -> dict[str, float]:
    return ValuationEngine.from_params(params).greeks(kind)


__all__ = [
    "PI", "SQRT_2PI", "INV_SQRT2",
    "normal_cdf", "normal_pdf",
    "ValuationEngine", "price", "greeks",
    "CALL", "PUT",
]
