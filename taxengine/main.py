"""Command line front-end for the tax engine.

    python -m taxengine.main calculate --income 75000 --deductions 15705 --province ON
    python -m taxengine.main compare --income 75000 --province ON --province AB --province BC
    python -m taxengine.main plan --income 75000 --rrsp-contributed 5000 --tfsa-contributed 2500
    python -m taxengine.main provinces --tax-year 2023
    python -m taxengine.main serve --port 8000

The ASGI application is re-exported as ``taxengine.main:app`` for uvicorn.
"""
from __future__ import annotations

import argparse
import json
import sys
from typing import Sequence

from rich.console import Console
from rich.table import Table

from taxengine.api.http import app
from taxengine.config import get_settings
from taxengine.core import InvalidInputError, calculate_tax, compare_provinces, plan_contributions
from taxengine.core.models import ComparisonResult, ContributionPlan, FilingStatus, TaxResult
from taxengine.core.provinces import list_provinces
from taxengine.core.tax_years import SUPPORTED_YEARS


def format_currency(amount: int | float) -> str:
    return f"${amount:,.0f}"


def _result_table(result: TaxResult) -> Table:
    table = Table(title=f"{result.province_name} ({result.province}) - {result.tax_year}")
    table.add_column("Item")
    table.add_column("Amount", justify="right")
    rows = [
        ("Income", format_currency(result.income)),
        ("Taxable income", format_currency(result.taxable_income)),
        ("Federal tax", format_currency(result.federal_tax)),
        ("Provincial tax", format_currency(result.provincial_tax)),
        ("CPP", format_currency(result.cpp_contribution)),
        ("EI", format_currency(result.ei_contribution)),
        ("Total", format_currency(result.total_tax)),
        ("Net income", format_currency(result.net_income)),
        ("Effective rate", f"{result.effective_rate_pct:.2f}%"),
        ("Marginal rate", f"{result.marginal_rate_pct:g}%"),
        ("RRSP room", format_currency(result.rrsp_room)),
        ("TFSA room", format_currency(result.tfsa_room)),
    ]
    for label, value in rows:
        table.add_row(label, value)
    return table


def _optimization_table(result: TaxResult) -> Table:
    table = Table(title=f"Optimizations (potential savings {format_currency(result.potential_savings)})")
    table.add_column("Suggestion")
    table.add_column("Estimated savings", justify="right")
    for item in result.optimizations:
        table.add_row(item.description, format_currency(item.estimated_savings))
    return table


def _comparison_table(comparison: ComparisonResult) -> Table:
    table = Table(title=f"Province comparison (potential savings {format_currency(comparison.potential_savings)})")
    table.add_column("Rank", justify="right")
    table.add_column("Province")
    table.add_column("Total tax", justify="right")
    table.add_column("Net income", justify="right")
    table.add_column("Sales tax")
    for rank, code in enumerate(comparison.ranking, start=1):
        result = comparison.per_province[code]
        table.add_row(
            str(rank),
            f"{result.province_name} ({code})",
            format_currency(result.total_tax),
            format_currency(result.net_income),
            result.sales_tax,
        )
    return table


def _plan_table(plan: ContributionPlan) -> Table:
    table = Table(title=f"RRSP and TFSA plan - {plan.tax_year}")
    table.add_column("Item")
    table.add_column("Amount", justify="right")
    next_threshold = "top bracket" if plan.next_threshold is None else format_currency(plan.next_threshold)
    rows = [
        ("Taxable income", format_currency(plan.taxable_income)),
        ("Marginal rate", f"{plan.marginal_rate_pct:g}%"),
        ("Next bracket at", next_threshold),
        ("RRSP room", format_currency(plan.rrsp_room)),
        ("RRSP remaining", format_currency(plan.rrsp_remaining)),
        ("RRSP tax savings", format_currency(plan.rrsp_tax_savings)),
        ("TFSA room", format_currency(plan.tfsa_room)),
        ("TFSA remaining", format_currency(plan.tfsa_remaining)),
        ("TFSA projected growth", format_currency(plan.tfsa_projected_growth)),
    ]
    for label, value in rows:
        table.add_row(label, value)
    return table


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(prog="taxengine", description="Canadian income tax estimates")
    sub = parser.add_subparsers(dest="command", required=True)

    def add_common(p: argparse.ArgumentParser) -> None:
        p.add_argument("--income", type=float, required=True)
        p.add_argument("--deductions", type=float, default=0.0)
        p.add_argument(
            "--filing-status",
            choices=[s.value for s in FilingStatus],
            default=FilingStatus.SINGLE.value,
        )
        p.add_argument("--tax-year", type=int, choices=SUPPORTED_YEARS, default=settings.default_tax_year)
        p.add_argument("--json", action="store_true", help="print the raw result as JSON")

    calc = sub.add_parser("calculate", help="estimate tax for one province")
    add_common(calc)
    calc.add_argument("--province", default=settings.default_province)

    cmp_ = sub.add_parser("compare", help="rank several provinces by total tax")
    add_common(cmp_)
    cmp_.add_argument("--province", dest="provinces", action="append", required=True)

    plan_ = sub.add_parser("plan", help="price the RRSP and TFSA room left after current contributions")
    plan_.add_argument("--income", type=float, required=True)
    plan_.add_argument("--deductions", type=float, default=0.0)
    plan_.add_argument("--rrsp-contributed", type=float, default=0.0)
    plan_.add_argument("--tfsa-contributed", type=float, default=0.0)
    plan_.add_argument("--tax-year", type=int, choices=SUPPORTED_YEARS, default=settings.default_tax_year)
    plan_.add_argument("--json", action="store_true", help="print the raw plan as JSON")

    prov = sub.add_parser("provinces", help="list province profiles")
    prov.add_argument("--tax-year", type=int, choices=SUPPORTED_YEARS, default=settings.default_tax_year)

    serve = sub.add_parser("serve", help="run the HTTP API with uvicorn")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    return parser


def main(argv: Sequence[str] | None = None, console: Console | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.command == "serve":
        import uvicorn

        uvicorn.run(app, host=args.host, port=args.port)
        return 0

    console = console or Console()

    try:
        if args.command == "calculate":
            result = calculate_tax(
                income=args.income,
                deductions=args.deductions,
                filing_status=args.filing_status,
                province=args.province,
                tax_year=args.tax_year,
            )
            if args.json:
                console.print_json(json.dumps(result.model_dump(mode="json")))
                return 0
            if result.province_fallback:
                console.print(f"[yellow]Unknown province {args.province}; using {result.province}[/yellow]")
            console.print(_result_table(result))
            console.print(_optimization_table(result))
            return 0

        if args.command == "compare":
            settings = get_settings()
            comparison = compare_provinces(
                income=args.income,
                deductions=args.deductions,
                provinces=args.provinces,
                filing_status=args.filing_status,
                tax_year=args.tax_year,
                min_size=settings.compare_min_provinces,
                max_size=settings.compare_max_provinces,
            )
            if args.json:
                console.print_json(json.dumps(comparison.model_dump(mode="json")))
                return 0
            console.print(_comparison_table(comparison))
            return 0

        if args.command == "plan":
            plan = plan_contributions(
                income=args.income,
                deductions=args.deductions,
                rrsp_contributed=args.rrsp_contributed,
                tfsa_contributed=args.tfsa_contributed,
                tax_year=args.tax_year,
            )
            if args.json:
                console.print_json(json.dumps(plan.model_dump(mode="json")))
                return 0
            console.print(_plan_table(plan))
            return 0
    except InvalidInputError as exc:
        for issue in exc.issues:
            console.print(f"[red]{issue.code}[/red]: {issue.message}")
        return 2

    table = Table(title=f"Provinces and territories ({args.tax_year})")
    for column in ("Code", "Name", "Basic personal", "Sales tax", "Scheme"):
        table.add_column(column)
    for profile in list_provinces(args.tax_year):
        table.add_row(
            profile.code,
            profile.name,
            format_currency(int(profile.basic_personal_amount)),
            profile.sales_tax,
            profile.scheme,
        )
    console.print(table)
    return 0


__all__ = ["app", "build_parser", "format_currency", "main"]


if __name__ == "__main__":
    sys.exit(main())
