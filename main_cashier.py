"""Mini README: Entry point CLI for the Angkringan POS till.

This script exposes a Typer CLI that starts the FastAPI cashier service,
prints a sales summary for a date range, or pulls the latest data from the
cloud spreadsheet. Settings come from ``ANGKRINGAN_*`` environment
variables (or ``.env``) unless overridden on the command line.
"""

from __future__ import annotations

from typing import Optional

import typer
import uvicorn

from angkringan.configuration import get_settings
from angkringan.errors import PosError
from angkringan.logging_utils import level_for_environment, set_level
from angkringan.money import format_rupiah
from angkringan.reports import DateRange
from angkringan.stall import build_manager
from angkringan.utils.calendar import parse_iso_date

cli = typer.Typer(help="Run and inspect the Angkringan POS till.")


@cli.command()
def run(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the cashier service using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    set_level(level_for_environment(settings.environment))

    # Browsers cannot open 0.0.0.0 directly, so point cashiers at localhost.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        "Starting Angkringan POS on "
        f"{effective_host}:{effective_port}.\n"
        "Open the till at "
        f"http://{browser_host}:{effective_port}"
        + (
            " (use this machine's IP address from the stall's phone or tablet)."
            if effective_host in {"0.0.0.0", "::"}
            else ""
        )
    )
    uvicorn.run(
        "angkringan.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


@cli.command()
def summary(
    start: Optional[str] = typer.Option(None, help="First day (YYYY-MM-DD), inclusive."),
    end: Optional[str] = typer.Option(None, help="Last day (YYYY-MM-DD), inclusive."),
) -> None:
    """Print revenue, cost of goods and profit for a date range."""

    set_level(level_for_environment(get_settings().environment))
    try:
        date_range = DateRange.from_dates(
            parse_iso_date(start) if start else None,
            parse_iso_date(end) if end else None,
        )
        report = build_manager().report(date_range)
    except PosError as error:
        typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=1) from error

    period = f"{start or '...'} to {end or '...'}" if start or end else "all time"
    pnl = report.profit_and_loss
    typer.echo(f"Period:        {period}")
    typer.echo(f"Orders:        {report.totals.count}")
    typer.echo(f"Revenue:       {format_rupiah(pnl.revenue)}")
    typer.echo(f"Cost (HPP):    {format_rupiah(pnl.cost)}")
    typer.echo(f"Gross profit:  {format_rupiah(pnl.gross_profit)}")
    typer.echo(f"Expenses:      {format_rupiah(pnl.operational_expenses)}")
    typer.echo(f"Net profit:    {format_rupiah(pnl.net_profit)}")
    for group in report.categories:
        typer.echo(f"  {group.category.value:<10} {format_rupiah(group.revenue)}")


@cli.command()
def sync() -> None:
    """Replace local data with the cloud spreadsheet copy."""

    set_level(level_for_environment(get_settings().environment))
    try:
        snapshot = build_manager().pull_from_remote()
    except PosError as error:
        typer.echo(f"Sync failed: {error}", err=True)
        raise typer.Exit(code=1) from error
    menu_count = len(snapshot.catalog) if snapshot.catalog is not None else 0
    transaction_count = len(snapshot.transactions) if snapshot.transactions is not None else 0
    typer.echo(f"Pulled {menu_count} menu items and {transaction_count} transactions.")


if __name__ == "__main__":
    cli()
