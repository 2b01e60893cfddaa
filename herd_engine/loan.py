"""Fixed-installment loan amortization."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from herd_engine.schema import InvalidParameterError


BALANCE_EPSILON = 1e-6


@dataclass(frozen=True)
class AmortizationSchedule:
    """Per-month loan series over the simulation horizon (index 0 is month 1)."""

    installment: float
    emi: np.ndarray
    interest: np.ndarray
    principal: np.ndarray
    balance: np.ndarray


def monthly_installment(principal: float, monthly_rate: float, term_months: int) -> float:
    if term_months <= 0:
        raise InvalidParameterError("loan_term_months must be positive.")
    if monthly_rate == 0:
        return principal / term_months
    pow_factor = (1 + monthly_rate) ** term_months
    return principal * monthly_rate * pow_factor / (pow_factor - 1)


def split_payment(balance: float, installment: float, monthly_rate: float, month: int, term_months: int) -> tuple[float, float]:
    """Return (interest, principal) for `month` given the balance carried into it."""
    if month > term_months:
        return 0.0, 0.0
    interest = balance * monthly_rate
    principal = installment - interest
    if month == term_months:
        principal = balance
    if principal < 0:
        principal = 0.0
    return interest, principal


def amortization_schedule(principal: float, monthly_rate: float, term_months: int, horizon_months: int) -> AmortizationSchedule:
    term_months = int(term_months)
    horizon_months = int(horizon_months)
    installment = monthly_installment(principal, monthly_rate, term_months)

    emi = np.zeros(horizon_months)
    interest = np.zeros(horizon_months)
    principal_paid = np.zeros(horizon_months)
    balance = np.zeros(horizon_months)

    bal = float(principal)
    for idx in range(horizon_months):
        m = idx + 1
        month_interest, month_principal = split_payment(bal, installment, monthly_rate, m, term_months)
        if m <= term_months:
            bal -= month_principal
            if bal < BALANCE_EPSILON:
                bal = 0.0
            emi[idx] = installment
        interest[idx] = month_interest
        principal_paid[idx] = month_principal
        balance[idx] = bal

    return AmortizationSchedule(
        installment=installment,
        emi=emi,
        interest=interest,
        principal=principal_paid,
        balance=balance,
    )
