"""CSV export helpers for payoff comparisons."""

from __future__ import annotations

import csv
from pathlib import Path

from .payoff import PayoffComparisonResult

HEADERS = ["strategy", "month", "total_balance", "total_interest", "payments"]


def export_simulation_csv(*, result: PayoffComparisonResult, output_path: Path) -> Path:
    """Write both strategies' month records to CSV at `output_path`.

    Rows are snowball months followed by avalanche months. Returns the path written.
    """

    output_path.parent.mkdir(parents=True, exist_ok=True)

    # Use newline='' for csv on Windows
    with output_path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(fh, fieldnames=HEADERS, quoting=csv.QUOTE_MINIMAL)
        writer.writeheader()
        for strategy_result in (result.snowball, result.avalanche):
            for record in strategy_result.simulation:
                writer.writerow(
                    {
                        "strategy": strategy_result.strategy,
                        "month": record.month,
                        "total_balance": str(record.total_balance),
                        "total_interest": str(record.total_interest),
                        "payments": str(record.payments),
                    }
                )

    return output_path
