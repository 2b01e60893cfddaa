"""Command line entry point: `herd-engine simulate|optimize-rate|sensitivity|asset-value|acf`."""

from __future__ import annotations

import argparse
import sys
from dataclasses import asdict

import pandas as pd

from herd_engine.acf import compute_acf_schedule, summarize_acf
from herd_engine.assets import project_asset_value
from herd_engine.defaults import ACF_DEFAULTS, DEFAULTS
from herd_engine.formatting import format_frame, format_inr
from herd_engine.goal_seek import search_max_safe_rate
from herd_engine.input_metadata import advisory_warnings, help_with_guidance
from herd_engine.integrity_checks import run_integrity_checks
from herd_engine.metrics import compute_metrics, project_long_term
from herd_engine.model import simulate
from herd_engine.runtime_logging import install_global_exception_logging
from herd_engine.schema import InvalidParameterError, params_from_dict
from herd_engine.sensitivity import DEFAULT_SENSITIVITY_DRIVERS, run_one_way_sensitivity


EXIT_INVALID_PARAMETERS = 2


def _add_loan_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--principal", type=float, default=DEFAULTS["principal"], help=help_with_guidance("principal", "Loan amount."))
    parser.add_argument(
        "--rate",
        type=float,
        default=DEFAULTS["annual_rate_percent"],
        help=help_with_guidance("annual_rate_percent", "Annual interest rate in percent."),
    )
    parser.add_argument(
        "--term",
        type=int,
        default=DEFAULTS["loan_term_months"],
        help=help_with_guidance("loan_term_months", "Loan term in months."),
    )
    parser.add_argument(
        "--horizon",
        type=int,
        default=None,
        help=help_with_guidance("simulation_horizon_months", "Simulation horizon in months (defaults to the term)."),
    )
    parser.add_argument("--units", type=int, default=DEFAULTS["unit_count"], help=help_with_guidance("unit_count", "Units purchased."))
    parser.add_argument("--no-capital-fee", action="store_true", help="Disable the yearly capital fee.")
    parser.add_argument("--growth-fee", action="store_true", help="Charge the calf growth fee.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="herd-engine", description="Livestock investment EMI and ACF calculator.")
    sub = parser.add_subparsers(dest="command", required=True)

    sim = sub.add_parser("simulate", help="Run the monthly cash-flow waterfall.")
    _add_loan_arguments(sim)
    sim.add_argument("--monthly", action="store_true", help="Print the monthly ledger as well as the yearly one.")

    opt = sub.add_parser("optimize-rate", help="Find the highest loss-free interest rate.")
    _add_loan_arguments(opt)

    sens = sub.add_parser("sensitivity", help="Move each driver down and up and compare the totals.")
    _add_loan_arguments(sens)
    sens.add_argument("--delta", type=float, default=0.1, help="Relative shift per driver (0.1 = 10%%).")
    sens.add_argument(
        "--driver",
        action="append",
        choices=DEFAULT_SENSITIVITY_DRIVERS,
        default=None,
        help="Driver to shift; repeat for several (defaults to all).",
    )

    assets = sub.add_parser("asset-value", help="Value the herd at the end of a year.")
    assets.add_argument("--year", type=int, required=True)
    assets.add_argument("--units", type=int, default=DEFAULTS["unit_count"])

    acf = sub.add_parser("acf", help="Advance Capital Fund instalments and benefits.")
    acf.add_argument("--units", type=int, default=ACF_DEFAULTS["units"], help=help_with_guidance("acf_units", "Units booked."))
    acf.add_argument("--tenure", type=int, default=ACF_DEFAULTS["tenure_months"], choices=[11, 30])
    return parser


def _params_from_args(args: argparse.Namespace):
    raw = {
        "principal": args.principal,
        "annual_rate_percent": args.rate,
        "loan_term_months": args.term,
        "simulation_horizon_months": args.horizon if args.horizon is not None else args.term,
        "unit_count": args.units,
        "capital_fee_enabled": not args.no_capital_fee,
        "growth_fee_enabled": args.growth_fee,
    }
    params, warnings, _ = params_from_dict(raw)
    return params, warnings + advisory_warnings(params)


def _print_warnings(warnings: list[str]) -> None:
    for w in warnings:
        print(f"warning: {w}", file=sys.stderr)


def _cmd_simulate(args: argparse.Namespace) -> int:
    params, warnings = _params_from_args(args)
    _print_warnings(warnings)
    result = simulate(params)

    print(f"EMI: {format_inr(result.installment, 2)}")
    if args.monthly:
        print(format_frame(result.monthly_frame()).to_string(index=False))
    print(format_frame(result.yearly_frame()).to_string(index=False))
    totals = pd.Series(
        {
            "Total Payment": result.total_payment,
            "Total Interest": result.total_interest,
            "Total Revenue": result.total_revenue,
            "Total Capital Fee": result.total_capital_fee,
            "Total Growth Fee": result.total_growth_fee,
            "Total Loss": result.total_loss,
            "Total Surplus": result.total_surplus,
            "Net Cash": result.total_net_cash,
            "Profit": result.total_profit,
            "Asset Value": result.total_asset_value,
        }
    )
    print(totals.map(format_inr).to_string())
    print(f"Animals at horizon: {result.total_animal_count}")

    metrics = compute_metrics(result)
    print(f"Loss months: {metrics['loss_months']} (first: {metrics['first_loss_month'] or '-'})")
    print(f"Minimum reserve: {format_inr(metrics['minimum_reserve'])} at month {metrics['minimum_reserve_month']}")
    print(f"Break-even month: {metrics['break_even_month'] or '-'}")
    print(f"Final reserve: {format_inr(metrics['final_reserve'])}")

    projection = project_long_term(params)
    if projection.long_term_months > projection.horizon_months:
        print(f"Long-term (months {projection.horizon_months + 1}-{projection.long_term_months}):")
        long_term = pd.Series(
            {
                "Revenue": projection.revenue,
                "Capital Fee": projection.capital_fee,
                "Growth Fee": projection.growth_fee,
                "Net Cash": projection.net_cash,
                "Asset Growth": projection.asset_growth,
                f"Asset Value at Month {projection.long_term_months}": projection.asset_value_at_long_term,
            }
        )
        print(long_term.map(format_inr).to_string())

    findings = run_integrity_checks(result.monthly_frame(), params)
    for f in findings:
        print(f"integrity: {f['Check']} off by {f['Max Abs Delta']:.6f} at month {f['Month of Max Delta']}", file=sys.stderr)
    return 0


def _cmd_optimize_rate(args: argparse.Namespace) -> int:
    params, warnings = _params_from_args(args)
    _print_warnings(warnings)
    found = search_max_safe_rate(params)
    print(f"Max safe rate: {found.rate:.1f}% ({found.status}, {found.iterations} runs)")
    print(f"Total loss at that rate: {format_inr(found.total_loss, 2)}")
    return 0


def _cmd_sensitivity(args: argparse.Namespace) -> int:
    params, warnings = _params_from_args(args)
    _print_warnings(warnings)
    table = run_one_way_sensitivity(params, args.delta, args.driver)
    print(format_frame(table).to_string(index=False))
    return 0


def _cmd_asset_value(args: argparse.Namespace) -> int:
    projection = project_asset_value(args.year, args.units)
    print(f"Year {args.year}: {projection.total_animal_count} animals worth {format_inr(projection.total_asset_value)}")
    return 0


def _cmd_acf(args: argparse.Namespace) -> int:
    _print_warnings(advisory_warnings({"acf_units": args.units}))
    schedule = pd.DataFrame([asdict(r) for r in compute_acf_schedule(args.units, args.tenure)])
    schedule.columns = ["Month", "Installment", "Cumulative Installment"]
    print(format_frame(schedule).to_string(index=False))
    summary = summarize_acf(args.units, args.tenure)
    print(f"Total investment: {format_inr(summary.total_investment)}")
    print(f"CPF benefit: {format_inr(summary.cpf_benefit)}")
    print(f"Asset value: {format_inr(summary.market_asset_value)}")
    print(f"Total benefit: {format_inr(summary.total_benefit)}")
    return 0


COMMANDS = {
    "simulate": _cmd_simulate,
    "optimize-rate": _cmd_optimize_rate,
    "sensitivity": _cmd_sensitivity,
    "asset-value": _cmd_asset_value,
    "acf": _cmd_acf,
}


def main(argv: list[str] | None = None) -> int:
    install_global_exception_logging()
    args = build_parser().parse_args(argv)
    try:
        return COMMANDS[args.command](args)
    except InvalidParameterError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_INVALID_PARAMETERS


if __name__ == "__main__":
    sys.exit(main())
