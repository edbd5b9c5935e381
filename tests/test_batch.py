"""Tests for batch pricing with per-row failure isolation."""

import json
import logging

import pytest
from bspricer.batch import price_row, price_book, read_rows, write_results, summarize

ROWS = [
    {"id": "1", "S": "100", "K": "100", "T": "1.0", "r": "0.05", "sigma": "0.2", "kind": "call"},
    {"id": "2", "S": "100", "K": "100", "T": "0", "r": "0.05", "sigma": "0.2", "kind": "put"},
    {"id": "3", "S": "100", "K": "100", "T": "1.0", "r": "0.05", "sigma": "0.2", "kind": "both"},
]


class TestPriceRow:
    def test_call_only(self):
        (res,) = price_row(ROWS[0])
        assert res["kind"] == "call"
        assert abs(res["price"] - 10.4506) < 1e-4
        assert abs(res["parity_residual"]) < 1e-10
        assert "delta" not in res

    def test_both_sides_with_greeks(self):
        call, put = price_row(ROWS[2], greeks=True)
        assert (call["kind"], put["kind"]) == ("call", "put")
        assert abs(put["price"] - 5.5735) < 1e-4
        assert call["delta"] - put["delta"] == pytest.approx(1.0)

    def test_default_kind_is_both(self):
        row = {k: v for k, v in ROWS[0].items() if k != "kind"}
        assert len(price_row(row)) == 2

    def test_missing_column(self):
        with pytest.raises(ValueError, match="sigma"):
            price_row({"S": 100, "K": 100, "T": 1, "r": 0.05})


class TestPriceBook:
    def test_bad_row_isolated(self, caplog):
        caplog.set_level(logging.WARNING, logger="bspricer.batch")
        results = price_book(ROWS)
        assert len(results) == 4
        failed = [r for r in results if r["price"] is None]
        assert len(failed) == 1
        assert failed[0]["id"] == "2"
        assert "expired" in failed[0]["error"]
        assert "Row 1 (id=2)" in caplog.text
        assert summarize(results) == (3, 1)

    def test_non_numeric_and_unknown_kind(self):
        rows = [
            {"id": "a", "S": "abc", "K": "100", "T": "1", "r": "0", "sigma": "0.2"},
            {"id": "b", "S": "100", "K": "100", "T": "1", "r": "0", "sigma": "0.2",
             "kind": "straddle"},
            ROWS[0],
        ]
        results = price_book(rows)
        assert summarize(results) == (1, 2)


class TestIO:
    def test_csv_round_trip(self, tmp_path):
        src = tmp_path / "in.csv"
        src.write_text(
            "id,S,K,T,r,sigma,kind\n"
            "1,100,100,1.0,0.05,0.2,call\n"
            "2,100,100,1.0,0.05,-0.2,put\n"
        )
        rows = read_rows(src)
        assert rows[0]["S"] == "100"
        results = price_book(rows, greeks=True)
        out = tmp_path / "out.csv"
        write_results(results, out)
        text = out.read_text().splitlines()
        assert text[0].startswith("id,kind,price,delta")
        assert text[0].endswith("error")
        assert len(text) == 3

    def test_json_output(self, tmp_path):
        out = tmp_path / "out.json"
        write_results(price_book(ROWS), out)
        data = json.loads(out.read_text())
        assert len(data) == 4
        assert data[1]["price"] is None

    def test_empty_csv_writes_nothing(self, tmp_path):
        out = tmp_path / "empty.csv"
        write_results([], out)
        assert not out.exists()
