"""Command-line interface for the mortgage calculator.

This module uses the ``click`` library to implement a multi-command
interface. Users can compute full amortization schedules, view summaries or
per-year tables, or compare two loan scenarios. Results can be printed to the
terminal or exported to JSON/CSV files.
"""

from __future__ import annotations

import csv
import json
import logging
import shlex
from pathlib import Path
from typing import Any, Dict, List, Optional

import click

from .data_models import LoanSummary, LoanTerms, PeriodRecord
from .engine import compute_for_terms
from .formatter import print_comparison, print_schedule, print_summary, print_yearly_table
from .logging_config import setup_logging
from .reports import serialize_schedule, serialize_summary, summarize, yearly_rows
from .utils import parse_amount, parse_rate, validate_terms

logger = logging.getLogger(__name__)

DEFAULT_MAX_ROWS = 120


def build_terms_from_options(principal: str, rate: str, term: int) -> LoanTerms:
    """Parse raw option values into validated ``LoanTerms``.

    Any parsing or validation problem is reported as ``click.BadParameter``
    so that click prints a usage error instead of a traceback.
    """
    try:
        return validate_terms(parse_amount(principal), parse_rate(rate), term)
    except ValueError as exc:
        raise click.BadParameter(str(exc))


def run_terms(terms: LoanTerms) -> tuple[LoanSummary, List[PeriodRecord]]:
    payment, schedule = compute_for_terms(terms)
    logger.debug(
        "Computed %d payments of %.2f for principal=%s rate=%s%% term=%sy",
        len(schedule),
        payment,
        terms.principal,
        terms.annual_rate_percent,
        terms.term_years,
    )
    return summarize(terms.principal, payment, schedule), schedule


def export_to_json(path: Path, schedule: List[PeriodRecord], summary: LoanSummary) -> None:
    """Export schedule and summary to a JSON file."""
    data = {"summary": serialize_summary(summary), "schedule": serialize_schedule(schedule)}
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def export_to_csv(path: Path, schedule: List[PeriodRecord]) -> None:
    """Export schedule to a CSV file."""
    header = [
        "Period",
        "Payment",
        "Principal",
        "Interest",
        "Ending_Balance",
        "Total_Principal",
        "Total_Interest",
    ]
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        for e in schedule:
            writer.writerow(
                [
                    e.period,
                    e.payment,
                    e.principal_payment,
                    e.interest_payment,
                    e.ending_balance,
                    e.total_principal,
                    e.total_interest,
                ]
            )


@click.group()
@click.option(
    "--log-level",
    "log_level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    help="Verbosity of diagnostic output on stderr",
)
def cli(log_level: str) -> None:
    """A command-line mortgage calculator for fixed-rate monthly loans."""
    setup_logging(log_level)


@cli.command()
@click.option("--principal", "-p", "principal", required=True, help="Loan amount, e.g. 400000 or 400k")
@click.option("--rate", "-r", "rate", required=True, help="Annual interest rate (percent)")
@click.option("--term", "-t", "term", required=True, type=int, help="Loan term in years")
@click.option("--output", "output", type=str, help="Output file path (.json or .csv)")
@click.option("--max-rows", "max_rows", type=int, default=DEFAULT_MAX_ROWS, show_default=True, help="Rows to print")
def schedule(principal: str, rate: str, term: int, output: Optional[str], max_rows: int) -> None:
    """Compute and print the monthly amortization schedule."""
    terms = build_terms_from_options(principal, rate, term)
    summary_data, schedule_entries = run_terms(terms)
    if output:
        path = Path(output)
        if path.suffix.lower() == ".json":
            export_to_json(path, schedule_entries, summary_data)
        elif path.suffix.lower() == ".csv":
            export_to_csv(path, schedule_entries)
        else:
            raise click.BadParameter("Unsupported output format; use .json or .csv")
        logger.info("Wrote %d rows to %s", len(schedule_entries), path)
        click.echo(f"Schedule exported to {path}")
        return

    print_summary(summary_data)
    # Limit schedule length printed to avoid flooding the terminal
    if len(schedule_entries) > max_rows:
        click.echo(f"Schedule has {len(schedule_entries)} rows; showing first {max_rows} rows.")
        print_schedule(schedule_entries[:max_rows])
    else:
        print_schedule(schedule_entries)


@cli.command()
@click.option("--principal", "-p", "principal", required=True, help="Loan amount, e.g. 400000 or 400k")
@click.option("--rate", "-r", "rate", required=True, help="Annual interest rate (percent)")
@click.option("--term", "-t", "term", required=True, type=int, help="Loan term in years")
@click.option("--output", "output", type=str, help="Output file path (.json)")
def summary(principal: str, rate: str, term: int, output: Optional[str]) -> None:
    """Compute and print only the headline figures for a loan."""
    terms = build_terms_from_options(principal, rate, term)
    summary_data, _ = run_terms(terms)
    if output:
        path = Path(output)
        if path.suffix.lower() != ".json":
            raise click.BadParameter("Summary export must use .json extension")
        with path.open("w", encoding="utf-8") as f:
            json.dump({"summary": serialize_summary(summary_data)}, f, indent=2)
        click.echo(f"Summary exported to {path}")
    else:
        print_summary(summary_data)


@cli.command()
@click.option("--principal", "-p", "principal", required=True, help="Loan amount, e.g. 400000 or 400k")
@click.option("--rate", "-r", "rate", required=True, help="Annual interest rate (percent)")
@click.option("--term", "-t", "term", required=True, type=int, help="Loan term in years")
def yearly(principal: str, rate: str, term: int) -> None:
    """Print cumulative principal, interest and balance for each year."""
    terms = build_terms_from_options(principal, rate, term)
    _, schedule_entries = run_terms(terms)
    print_yearly_table(yearly_rows(schedule_entries))


def parse_scenario_opts(opts: str) -> Dict[str, Any]:
    """Map a quoted option string like ``"-p 400k -r 6.5 -t 30"`` to values."""
    tokens = shlex.split(opts)
    params: Dict[str, Any] = {"principal": None, "rate": None, "term": None}
    flags = {
        "-p": "principal",
        "--principal": "principal",
        "-r": "rate",
        "--rate": "rate",
        "-t": "term",
        "--term": "term",
    }
    i = 0
    while i < len(tokens):
        token = tokens[i]
        if token not in flags:
            raise click.BadParameter(f"Unknown option in scenario: {token}")
        if i + 1 >= len(tokens):
            raise click.BadParameter(f"Option {token} needs a value")
        params[flags[token]] = tokens[i + 1]
        i += 2
    for name, value in params.items():
        if value is None:
            raise click.BadParameter(f"Scenario missing required option {name}")
    try:
        params["term"] = int(params["term"])
    except ValueError:
        raise click.BadParameter(f"Term must be an integer; got {params['term']}")
    return params


@cli.command()
@click.option("--scenario1", "scenario1", required=True, help="First scenario options quoted string")
@click.option("--scenario2", "scenario2", required=True, help="Second scenario options quoted string")
def compare(scenario1: str, scenario2: str) -> None:
    """Compare two loan scenarios.

    Scenarios are provided as quoted option strings, for example:

        mortgage-calc compare --scenario1 "-p 400k -r 6.5 -t 30" --scenario2 "-p 400k -r 5.9 -t 15"
    """
    terms1 = build_terms_from_options(**parse_scenario_opts(scenario1))
    terms2 = build_terms_from_options(**parse_scenario_opts(scenario2))
    summary1, _ = run_terms(terms1)
    summary2, _ = run_terms(terms2)
    print_comparison(summary1, summary2)


if __name__ == "__main__":
    cli()
