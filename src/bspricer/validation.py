"""Model self-consistency checks.

Put-call parity sweeps over many scenarios and spot / vol / rate stress
cubes built on the closed-form engine.
"""

from __future__ import annotations

import numpy as np
from typing import Iterable, Mapping, Union

from .black_scholes import ValuationEngine
from .core import CALL, OptionParameters

__all__ = [
    "parity_sweep",
    "stress_test",
]

Scenario = Union[OptionParameters, Mapping[str, float], tuple]


_FIELDS = ("S", "K", "T", "r", "sigma")


def _engine_for(scenario: Scenario) -> ValuationEngine:
    """Build an engine; malformed scenarios raise ``ValueError``."""
    if isinstance(scenario, OptionParameters):
        return ValuationEngine.from_params(scenario)
    if isinstance(scenario, Mapping):
        missing = [k for k in _FIELDS if k not in scenario]
        if missing:
            raise ValueError(f"missing key(s): {', '.join(missing)}")
        values = [scenario[k] for k in _FIELDS]
    else:
        try:
            values = list(scenario)
        except TypeError:
            raise ValueError(f"unsupported scenario type: {type(scenario).__name__}")
        if len(values) != len(_FIELDS):
            raise ValueError(f"expected 5 values (S, K, T, r, sigma), got {len(values)}")
    try:
        values = [float(v) for v in values]
    except (TypeError, ValueError):
        raise ValueError(f"non-numeric value in scenario: {values!r}")
    return ValuationEngine(*values)


# ---------------------------------------------------------------------------
# Put-call parity
# ---------------------------------------------------------------------------

def parity_sweep(scenarios: Iterable[Scenario], *, tol: float = 1e-9) -> dict:
    """Evaluate the put-call parity residual for each scenario.

    Parameters
    ----------
    scenarios : iterable
        ``OptionParameters``, mappings with keys ``S, K, T, r, sigma`` or
        5-tuples in that order.
    tol : float
        Relative tolerance; a residual passes when
        ``|residual| <= tol * max(S, K)``.

    Returns
    -------
    dict
        ``"residuals"`` (ndarray, NaN where construction failed),
        ``"max_abs_residual"``, ``"passed"`` (bool over the valid scenarios),
        ``"failures"`` (list of ``(index, message)`` for scenarios that were
        invalid or malformed; the sweep continues past them).
    """
    residuals = []
    failures: list[tuple[int, str]] = []
    passed = True

    for i, sc in enumerate(scenarios):
        try:
            eng = _engine_for(sc)
        except ValueError as e:
            failures.append((i, str(e)))
            residuals.append(np.nan)
            continue
        res = eng.verify_put_call_parity()
        residuals.append(res)
        if not abs(res) <= tol * max(eng.S, eng.K):
            passed = False

    residuals = np.asarray(residuals, dtype=float)
    valid = residuals[~np.isnan(residuals)]
    return {
        "residuals": residuals,
        "max_abs_residual": float(np.max(np.abs(valid))) if valid.size else float("nan"),
        "passed": passed,
        "failures": failures,
    }


# ---------------------------------------------------------------------------
# Stress testing
# ---------------------------------------------------------------------------

def stress_test(
    params: OptionParameters,
    spot_shocks: np.ndarray,
    vol_shocks: np.ndarray,
    rate_shocks: np.ndarray,
    kind: str = CALL,
) -> np.ndarray:
    """Evaluate option price across a 3-D grid of market shocks.

    Parameters
    ----------
    spot_shocks : array, shape (n_spot,)
        Multiplicative shocks to S (e.g. [0.8, 1.0, 1.2]).
    vol_shocks : array, shape (n_vol,)
        Additive shocks to sigma (e.g. [-0.05, 0, 0.05]).
    rate_shocks : array, shape (n_rate,)
        Additive shocks to r.

    Returns
    -------
    ndarray, shape (n_spot, n_vol, n_rate)
    """
    spot_shocks = np.asarray(spot_shocks, dtype=float)
    vol_shocks = np.asarray(vol_shocks, dtype=float)
    rate_shocks = np.asarray(rate_shocks, dtype=float)

    result = np.empty((len(spot_shocks), len(vol_shocks), len(rate_shocks)))

    for i, ds in enumerate(spot_shocks):
        for j, dv in enumerate(vol_shocks):
            new_sig = max(params.sigma + dv, 1e-6)
            for k_idx, dr in enumerate(rate_shocks):
                eng = ValuationEngine(params.S * ds, params.K, params.T,
                                      params.r + dr, new_sig)
                result[i, j, k_idx] = eng.price(kind)

    return result
