"""Ledger accounting and roll-forward integrity checks."""

from __future__ import annotations

from typing import Any

import numpy as np
import pandas as pd

from herd_engine.model import opening_reserve
from herd_engine.schema import ParameterSet


def _finding(
    check: str,
    max_abs_delta: float,
    month: str,
    lhs_name: str,
    rhs_name: str,
) -> dict[str, Any]:
    return {
        "Check": check,
        "Max Abs Delta": float(max_abs_delta),
        "Month of Max Delta": month,
        "LHS": lhs_name,
        "RHS": rhs_name,
    }


def _month_of_max_delta(df: pd.DataFrame, delta: np.ndarray) -> str:
    if len(delta) == 0:
        return ""
    idx = int(np.argmax(np.abs(delta)))
    if "Month" in df.columns and idx < len(df):
        return str(int(df.iloc[idx]["Month"]))
    return str(idx)


def _check_series_identity(
    findings: list[dict[str, Any]],
    df: pd.DataFrame,
    check_name: str,
    lhs_name: str,
    rhs_name: str,
    lhs: np.ndarray,
    rhs: np.ndarray,
    tol: float,
) -> None:
    delta = np.nan_to_num(np.asarray(lhs, dtype=float) - np.asarray(rhs, dtype=float), nan=0.0)
    if len(delta) == 0:
        return
    max_abs = float(np.max(np.abs(delta)))
    if max_abs > float(tol):
        findings.append(_finding(check_name, max_abs, _month_of_max_delta(df, delta), lhs_name, rhs_name))


def _check_obligation_split(findings: list[dict[str, Any]], df: pd.DataFrame, name: str, tol: float) -> None:
    _check_series_identity(
        findings,
        df,
        f"{name} split",
        f"{name} Due",
        f"{name} From Revenue + From Reserve + Shortfall",
        df[f"{name} Due"].to_numpy(),
        (df[f"{name} From Revenue"] + df[f"{name} From Reserve"] + df[f"{name} Shortfall"]).to_numpy(),
        tol,
    )


def run_integrity_checks(df: pd.DataFrame, params: ParameterSet, tol: float = 1e-6) -> list[dict[str, Any]]:
    """Return integrity findings for a monthly ledger frame (empty list means all checks passed)."""
    if not isinstance(df, pd.DataFrame) or df.empty:
        return [{"Check": "Dataframe not available", "Max Abs Delta": np.nan, "Month of Max Delta": "", "LHS": "", "RHS": ""}]

    findings: list[dict[str, Any]] = []

    # Waterfall allocation.
    for name in ("EMI", "Capital Fee", "Growth Fee"):
        _check_obligation_split(findings, df, name, tol)
    _check_series_identity(
        findings,
        df,
        "Loss identity",
        "Loss",
        "EMI + Capital Fee + Growth Fee shortfalls",
        df["Loss"].to_numpy(),
        (df["EMI Shortfall"] + df["Capital Fee Shortfall"] + df["Growth Fee Shortfall"]).to_numpy(),
        tol,
    )
    paid_from_revenue = df["EMI From Revenue"] + df["Capital Fee From Revenue"] + df["Growth Fee From Revenue"]
    _check_series_identity(
        findings,
        df,
        "Revenue allocation identity",
        "Revenue",
        "Paid From Revenue + Profit",
        df["Revenue"].to_numpy(),
        (paid_from_revenue + df["Profit"]).to_numpy(),
        tol,
    )

    # Reserve roll-forwards.
    _check_series_identity(
        findings,
        df,
        "Reserve roll-forward",
        "Reserve Balance",
        "Reserve Opening - Reserve Debit + Profit",
        df["Reserve Balance"].to_numpy(),
        (df["Reserve Opening"] - df["Reserve Debit"] + df["Profit"]).to_numpy(),
        tol,
    )
    prev_reserve = np.concatenate(([opening_reserve(params)], df["Reserve Balance"].to_numpy()[:-1]))
    _check_series_identity(
        findings,
        df,
        "Reserve opening continuity",
        "Reserve Opening",
        "Prior Reserve Balance",
        df["Reserve Opening"].to_numpy(),
        prev_reserve,
        tol,
    )
    _check_series_identity(
        findings,
        df,
        "Cash conservation",
        "Revenue + Reserve Opening",
        "Paid From Revenue + Reserve Debit + Reserve Balance",
        (df["Revenue"] + df["Reserve Opening"]).to_numpy(),
        (paid_from_revenue + df["Reserve Debit"] + df["Reserve Balance"]).to_numpy(),
        tol,
    )
    negative_reserve = np.minimum(df["Reserve Balance"].to_numpy(), 0.0)
    _check_series_identity(
        findings,
        df,
        "Non-negative reserve",
        "min(Reserve Balance, 0)",
        "0",
        negative_reserve,
        np.zeros(len(df)),
        tol,
    )

    # Loan roll-forwards.
    in_term = df[df["Month"] <= int(params.loan_term_months)].reset_index(drop=True)
    _check_series_identity(
        findings,
        in_term,
        "EMI payment split",
        "EMI Due",
        "Interest + Principal Paid",
        in_term["EMI Due"].to_numpy(),
        (in_term["Interest"] + in_term["Principal Paid"]).to_numpy(),
        tol,
    )
    prev_loan_bal = np.concatenate(([float(params.principal)], df["Loan Balance"].to_numpy()[:-1]))
    _check_series_identity(
        findings,
        df,
        "Loan balance roll-forward",
        "Loan Balance",
        "Prior Balance - Principal Paid",
        df["Loan Balance"].to_numpy(),
        np.maximum(0.0, prev_loan_bal - df["Principal Paid"].to_numpy()),
        tol,
    )

    return findings
