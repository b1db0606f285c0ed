"""Command line entry points for PayoffSage."""

from __future__ import annotations

import json
import logging
from datetime import date
from pathlib import Path

import click

from .config import BaseConfig, PayoffPolicy
from .errors import PayoffError
from .logging_config import setup_logging
from .services.snapshots import summarize_debts


def _load_debts(path: Path) -> list[dict]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"{path} is not valid JSON: {exc}") from exc
    # Accept either a bare list or {"debts": [...]}
    if isinstance(payload, dict):
        payload = payload.get("debts", [])
    if not isinstance(payload, list):
        raise click.BadParameter(f"{path} must contain a list of debts")
    return payload


@click.group()
@click.option("--verbose", is_flag=True, default=False, help="Write logs to console and file")
def cli(verbose: bool) -> None:
    """Debt payoff planning tools."""

    if verbose:
        setup_logging(BaseConfig(), level=logging.DEBUG)


@cli.command("compare")
@click.argument("debts_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--extra", "extra_payment", default="0", help="Extra monthly payment")
@click.option(
    "--as-of",
    "as_of",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Start date for payoff dates (default: today)",
)
@click.option(
    "--csv",
    "csv_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write month-by-month totals to this CSV file",
)
def compare(debts_file: Path, extra_payment: str, as_of, csv_path: Path | None) -> None:
    """Compare snowball and avalanche payoff for DEBTS_FILE (JSON)."""

    # Import here to keep `--help` fast
    from .services.export_csv import export_simulation_csv
    from .services.payoff import compute_payoff_strategies

    clock_now = as_of.date() if as_of is not None else date.today()
    try:
        result = compute_payoff_strategies(
            debts=_load_debts(debts_file),
            extra_payment=extra_payment,
            clock_now=clock_now,
            policy=PayoffPolicy.from_env(),
        )
    except PayoffError as exc:
        raise click.ClickException(f"{type(exc).__name__}: {exc}") from exc

    click.echo(json.dumps(result.to_dict(), indent=2))
    if csv_path is not None:
        path = export_simulation_csv(result=result, output_path=csv_path)
        click.echo(f"Simulation written: {path}", err=True)


@cli.command("summary")
@click.argument("debts_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def summary(debts_file: Path) -> None:
    """Print totals and the weighted average rate for DEBTS_FILE."""

    try:
        result = summarize_debts(_load_debts(debts_file))
    except PayoffError as exc:
        raise click.ClickException(f"{type(exc).__name__}: {exc}") from exc
    click.echo(json.dumps(result.to_dict(), indent=2))


def main() -> None:  # pragma: no cover - console script
    cli()


if __name__ == "__main__":  # pragma: no cover
    main()
