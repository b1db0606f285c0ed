"""CSV export tests."""

from __future__ import annotations

import csv

from payoffsage.services.export_csv import HEADERS, export_simulation_csv
from payoffsage.services.payoff import compute_payoff_strategies


def test_export_writes_both_strategies(tmp_path, debt_factory, clock_now):
    result = compute_payoff_strategies(
        debts=[debt_factory(1, balance="1200", rate="12", minimum="200")], clock_now=clock_now
    )
    output = tmp_path / "nested" / "simulation.csv"

    path = export_simulation_csv(result=result, output_path=output)

    assert path == output
    with output.open(newline="", encoding="utf-8") as fh:
        rows = list(csv.DictReader(fh))
    assert list(rows[0]) == HEADERS
    assert len(rows) == 14
    assert rows[0] == {
        "strategy": "snowball",
        "month": "1",
        "total_balance": "1012.00",
        "total_interest": "12.00",
        "payments": "200.00",
    }
    assert rows[-1]["strategy"] == "avalanche"
    assert rows[-1]["total_balance"] == "0.00"
