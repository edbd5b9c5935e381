# bspricer — Black-Scholes European option valuation
# Public API

# Data model & errors
from .core import OptionParameters, CALL, PUT
from .exceptions import InvalidParameter

# Closed-form engine
from .black_scholes import (
    ValuationEngine, normal_cdf, normal_pdf,
    price as bs_price, greeks as bs_greeks,
)

# Vectorised pricers
from .black_scholes_vec import bs_price_vec, bs_greeks_vec, bs_parity_residual_vec

# Risk & validation
from .risk import numerical_greeks, scenario_grid
from .validation import parity_sweep, stress_test

__all__ = [
    # Data model
    "OptionParameters", "CALL", "PUT", "InvalidParameter",
    # Engine
    "ValuationEngine", "normal_cdf", "normal_pdf",
    "bs_price", "bs_greeks",
    # Vectorised
    "bs_price_vec", "bs_greeks_vec", "bs_parity_residual_vec",
    # Risk
    "numerical_greeks", "scenario_grid",
    # Validation
    "parity_sweep", "stress_test",
]

__version__ = "0.1.0"
