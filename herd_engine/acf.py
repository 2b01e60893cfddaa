"""Advance Capital Fund (ACF) instalment schedule and benefit summary."""

from __future__ import annotations

from dataclasses import dataclass

from herd_engine.defaults import CAPITAL_FEE_YEARLY, MARKET_UNIT_VALUE
from herd_engine.schema import InvalidParameterError


# Monthly instalment per unit for each supported tenure.
ACF_INSTALLMENTS = {
    11: 30000.0,
    30: 10000.0,
}

# Years of capital fee waived per unit for each tenure.
ACF_CPF_MULTIPLIERS = {
    11: 1,
    30: 2,
}


@dataclass(frozen=True)
class ACFScheduleRow:
    month: int
    installment: float
    cumulative_installment: float


@dataclass(frozen=True)
class ACFSummary:
    units: int
    tenure_months: int
    monthly_installment: float
    total_investment: float
    cpf_benefit: float
    market_asset_value: float
    total_benefit: float


def _check_tenure(tenure_months: int) -> int:
    if tenure_months not in ACF_INSTALLMENTS:
        supported = ", ".join(str(t) for t in sorted(ACF_INSTALLMENTS))
        raise InvalidParameterError(f"tenure_months must be one of {supported}; got {tenure_months!r}.")
    return int(tenure_months)


def compute_acf_schedule(units: int, tenure_months: int) -> list[ACFScheduleRow]:
    tenure = _check_tenure(tenure_months)
    units = units if units > 0 else 1
    installment = ACF_INSTALLMENTS[tenure] * units
    rows = []
    cumulative = 0.0
    for month in range(1, tenure + 1):
        cumulative += installment
        rows.append(ACFScheduleRow(month=month, installment=installment, cumulative_installment=cumulative))
    return rows


def summarize_acf(units: int, tenure_months: int) -> ACFSummary:
    tenure = _check_tenure(tenure_months)
    units = units if units > 0 else 1
    schedule = compute_acf_schedule(units, tenure)
    total_investment = schedule[-1].cumulative_installment
    cpf_benefit = units * CAPITAL_FEE_YEARLY * ACF_CPF_MULTIPLIERS[tenure]
    market_value = units * MARKET_UNIT_VALUE
    return ACFSummary(
        units=units,
        tenure_months=tenure,
        monthly_installment=schedule[0].installment,
        total_investment=total_investment,
        cpf_benefit=cpf_benefit,
        market_asset_value=market_value,
        total_benefit=market_value - total_investment + cpf_benefit,
    )
