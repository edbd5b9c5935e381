from __future__ import annotations

import math
from dataclasses import dataclass

from .exceptions import InvalidParameter


CALL = "call"
PUT  = "put"
KINDS = (CALL, PUT)


def validate_inputs(S: float, K: float, T: float, sigma: float) -> None:
    """Check option inputs in a fixed order, raising on the first violation.

    The rate ``r`` is deliberately absent: negative rates are legitimate.
    Comparisons are written so that NaN fails the positivity checks.
    """
    if not S > 0:
        raise InvalidParameter("S", "non_positive", "Stock price must be positive", S)
    if not K > 0:
        raise InvalidParameter("K", "non_positive", "Strike price must be positive", K)
    if T < 0 or math.isnan(T):
        raise InvalidParameter("T", "negative", "Time to maturity cannot be negative", T)
    if T == 0:
        raise InvalidParameter(
            "T", "expired", "Time to maturity cannot be zero (option expired)", T
        )
    if sigma < 0 or math.isnan(sigma):
        raise InvalidParameter("sigma", "negative", "Volatility cannot be negative", sigma)
    if sigma == 0:
        raise InvalidParameter("sigma", "zero", "Volatility cannot be zero", sigma)


def normalise_kind(kind: str) -> str:
    """Map ``"call"/"c"/"put"/"p"`` (any case) to :data:`CALL` or :data:`PUT`."""
    k = str(kind).strip().lower()
    if k in {"call", "c"}:
        return CALL
    if k in {"put", "p"}:
        return PUT
    raise ValueError(f"kind must be 'call' or 'put', got {kind!r}")


@dataclass(frozen=True)
class OptionParameters:
    """The five Black-Scholes inputs for one European option.

    Parameters
    ----------
    S : float
        Spot price of the underlying.
    K : float
        Strike price.
    T : float
        Time to maturity in years.
    r : float
        Continuously-compounded risk-free rate (any sign).
    sigma : float
        Annualised volatility.

    Raises
    ------
    InvalidParameter
        If any constrained field is out of range.
    """
    S: float
    K: float
    T: float          # years
    r: float          # continuous risk-free
    sigma: float

    def __post_init__(self):
        validate_inputs(self.S, self.K, self.T, self.sigma)

    def as_tuple(self) -> tuple[float, float, float, float, float]:
        return (self.S, self.K, self.T, self.r, self.sigma)
