"""Batch-price many option scenarios.

Input CSV format
----------------
    id,S,K,T,r,sigma,kind
    1,100,110,0.5,0.05,0.20,call
    2,100,95,1.0,0.05,0.25,put
    3,100,100,1.0,0.05,0.20,both

``kind`` may be ``call``, ``put`` or ``both`` (default ``both``).

Output
------
    CSV or JSON with columns: id, kind, price, delta, gamma, vega, theta, rho,
    parity_residual, error
"""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Iterable, Mapping

from .black_scholes import ValuationEngine
from .core import KINDS, normalise_kind

logger = logging.getLogger(__name__)

GREEK_KEYS = ("delta", "gamma", "vega", "theta", "rho")
REQUIRED_COLUMNS = ("S", "K", "T", "r", "sigma")


def _kinds(raw) -> tuple[str, ...]:
    text = str(raw or "both").strip().lower()
    if text == "both":
        return KINDS
    return (normalise_kind(text),)


def price_row(row: Mapping[str, object], *, greeks: bool = False) -> list[dict]:
    """Price a single scenario row and return one result dict per side."""
    rid = row.get("id", "")
    missing = [c for c in REQUIRED_COLUMNS if row.get(c) in (None, "")]
    if missing:
        raise ValueError(f"missing column(s): {', '.join(missing)}")
    S, K, T, r, sigma = (float(row[c]) for c in REQUIRED_COLUMNS)

    eng = ValuationEngine(S, K, T, r, sigma)
    residual = eng.verify_put_call_parity()

    results = []
    for kind in _kinds(row.get("kind")):
        result = {"id": rid, "kind": kind, "price": eng.price(kind)}
        if greeks:
            g = eng.greeks(kind)
            for key in GREEK_KEYS:
                result[key] = g[key]
        result["parity_residual"] = residual
        results.append(result)
    return results


def price_book(rows: Iterable[Mapping[str, object]], *, greeks: bool = False) -> list[dict]:
    """Price every row; a failing row is recorded and the rest still priced."""
    results = []
    for i, row in enumerate(rows):
        try:
            results.extend(price_row(row, greeks=greeks))
        except ValueError as e:
            logger.warning(f"Row {i} (id={row.get('id', '?')}): {e}")
            results.append({"id": row.get("id", ""), "price": None, "error": str(e)})
    return results


def read_rows(path: str | Path) -> list[dict]:
    with open(path, newline="") as f:
        reader = csv.DictReader(f)
        return list(reader)


def write_results(results: list[dict], path: str | Path) -> None:
    """Write results as JSON (``.json`` suffix) or CSV (anything else)."""
    output_path = Path(path)
    if output_path.suffix == ".json":
        with open(output_path, "w") as f:
            json.dump(results, f, indent=2, default=str)
        return

    if not results:
        logger.info("No results to write.")
        return
    fieldnames = list(results[0].keys())
    # Ensure all keys are present
    for res in results:
        for k in res:
            if k not in fieldnames:
                fieldnames.append(k)
    with open(output_path, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames, extrasaction="ignore")
        writer.writeheader()
        writer.writerows(results)


def summarize(results: list[dict]) -> tuple[int, int]:
    """(priced, failed) counts."""
    priced = sum(1 for res in results if res.get("price") is not None)
    return priced, len(results) - priced
