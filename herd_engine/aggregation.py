"""Monthly-to-yearly ledger roll-ups and grand totals."""

from __future__ import annotations

from dataclasses import asdict
from typing import Iterable

import pandas as pd

from herd_engine.ledger import MONTHLY_COLUMNS, YEARLY_COLUMNS, MonthlyLedgerRow, YearlyLedgerRow


SUMMED_FIELDS = [
    "emi_due",
    "interest",
    "principal_paid",
    "revenue",
    "capital_fee_due",
    "growth_fee_due",
    "reserve_debit",
    "profit",
    "loss",
]
LAST_VALUE_FIELDS = ["loan_balance", "reserve_balance"]


def ledger_frame(rows: Iterable[MonthlyLedgerRow]) -> pd.DataFrame:
    rows = list(rows)
    records = []
    for row in rows:
        record = asdict(row)
        record["total_payment"] = row.total_payment
        record["reserve_debit"] = row.reserve_debit
        record["net_cash"] = row.net_cash
        records.append(record)
    labels = {**MONTHLY_COLUMNS, "total_payment": "Total Payment", "reserve_debit": "Reserve Debit", "net_cash": "Net Cash"}
    df = pd.DataFrame(records, columns=list(labels.keys()))
    return df.rename(columns=labels)


def roll_up_yearly(rows: Iterable[MonthlyLedgerRow]) -> tuple[YearlyLedgerRow, ...]:
    """Sum flows and carry closing balances for each 12-month block (last block may be partial)."""
    rows = list(rows)
    if not rows:
        return ()
    df = pd.DataFrame([{**asdict(r), "reserve_debit": r.reserve_debit} for r in rows])
    grouped = df.groupby("year", sort=True)
    sums = grouped[SUMMED_FIELDS].sum()
    last = grouped[LAST_VALUE_FIELDS].last()
    counts = grouped.size()

    yearly = []
    for year in sums.index:
        yearly.append(
            YearlyLedgerRow(
                year=int(year),
                months=int(counts.loc[year]),
                emi_due=float(sums.loc[year, "emi_due"]),
                interest=float(sums.loc[year, "interest"]),
                principal_paid=float(sums.loc[year, "principal_paid"]),
                loan_balance=float(last.loc[year, "loan_balance"]),
                revenue=float(sums.loc[year, "revenue"]),
                capital_fee_due=float(sums.loc[year, "capital_fee_due"]),
                growth_fee_due=float(sums.loc[year, "growth_fee_due"]),
                reserve_debit=float(sums.loc[year, "reserve_debit"]),
                reserve_balance=float(last.loc[year, "reserve_balance"]),
                profit=float(sums.loc[year, "profit"]),
                loss=float(sums.loc[year, "loss"]),
            )
        )
    return tuple(yearly)


def yearly_frame(rows: Iterable[YearlyLedgerRow]) -> pd.DataFrame:
    records = []
    for row in rows:
        record = asdict(row)
        record["total_payment"] = row.total_payment
        record["net_cash"] = row.net_cash
        records.append(record)
    labels = {**YEARLY_COLUMNS, "total_payment": "Total Payment", "net_cash": "Net Cash"}
    df = pd.DataFrame(records, columns=list(labels.keys()))
    return df.rename(columns=labels)


def grand_totals(rows: Iterable[MonthlyLedgerRow]) -> dict[str, float]:
    totals = {
        "emi_due": 0.0,
        "interest": 0.0,
        "principal_paid": 0.0,
        "revenue": 0.0,
        "capital_fee_due": 0.0,
        "growth_fee_due": 0.0,
        "reserve_debit": 0.0,
        "profit": 0.0,
        "loss": 0.0,
    }
    for row in rows:
        totals["emi_due"] += row.emi_due
        totals["interest"] += row.interest
        totals["principal_paid"] += row.principal_paid
        totals["revenue"] += row.revenue
        totals["capital_fee_due"] += row.capital_fee_due
        totals["growth_fee_due"] += row.growth_fee_due
        totals["reserve_debit"] += row.reserve_debit
        totals["profit"] += row.profit
        totals["loss"] += row.loss
    return totals
