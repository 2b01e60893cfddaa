"""Core herd investment cash-flow engine."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import pandas as pd

from herd_engine.aggregation import grand_totals, ledger_frame, roll_up_yearly, yearly_frame
from herd_engine.assets import value_herd
from herd_engine.breeding import Animal, generate_herd
from herd_engine.defaults import BASE_UNIT_COST, CAPITAL_FEE_YEARLY
from herd_engine.ledger import MonthlyLedgerRow, YearlyLedgerRow
from herd_engine.loan import amortization_schedule
from herd_engine.revenue import revenue_per_unit
from herd_engine.schema import ParameterSet, validate_params
from herd_engine.valuation import growth_fee_for_age


# A purchased animal is fee-free for its first year on the farm, and nothing is
# charged before month 13 of the simulation.
SEED_CAPITAL_FEE_GRACE_MONTHS = 12
CAPITAL_FEE_FIRST_MONTH = 13
CALF_CAPITAL_FEE_AGE_MONTHS = 24


@dataclass(frozen=True)
class SimulationResult:
    params: ParameterSet
    monthly_ledger: tuple[MonthlyLedgerRow, ...]
    yearly_ledger: tuple[YearlyLedgerRow, ...]
    installment: float
    total_payment: float
    total_interest: float
    total_revenue: float
    total_capital_fee: float
    total_growth_fee: float
    total_profit: float
    total_loss: float
    total_net_cash: float
    total_surplus: float
    total_asset_value: float
    total_animal_count: int

    def monthly_frame(self) -> pd.DataFrame:
        return ledger_frame(self.monthly_ledger)

    def yearly_frame(self) -> pd.DataFrame:
        return yearly_frame(self.yearly_ledger)

    @property
    def final_reserve_balance(self) -> float:
        return self.monthly_ledger[-1].reserve_balance if self.monthly_ledger else 0.0


def required_capital(params: ParameterSet) -> float:
    per_unit = BASE_UNIT_COST + (CAPITAL_FEE_YEARLY if params.capital_fee_enabled else 0.0)
    return per_unit * params.effective_units


def opening_reserve(params: ParameterSet) -> float:
    required = required_capital(params)
    return params.principal - required if params.principal > required else 0.0


def capital_fee_per_unit(herd: list[Animal], horizon_months: int) -> np.ndarray:
    """Monthly capital fee owed for one unit's herd (1-based month index shifted to 0)."""
    months = np.arange(1, int(horizon_months) + 1)
    monthly_fee = CAPITAL_FEE_YEARLY / 12
    liable = np.zeros(len(months))
    for animal in herd:
        order_month = animal.birth_month + 1
        if animal.is_seed:
            start = order_month + SEED_CAPITAL_FEE_GRACE_MONTHS
        else:
            start = order_month + CALF_CAPITAL_FEE_AGE_MONTHS
        liable += (months >= start).astype(float)
    liable[months < CAPITAL_FEE_FIRST_MONTH] = 0.0
    return liable * monthly_fee


def growth_fee_per_unit(herd: list[Animal], horizon_months: int) -> np.ndarray:
    fees = np.zeros(int(horizon_months))
    for animal in herd:
        if animal.is_seed:
            continue
        order_month = animal.birth_month + 1
        for m in range(order_month, int(horizon_months) + 1):
            fees[m - 1] += growth_fee_for_age(m - order_month + 1)
    return fees


def _pay(due: float, revenue_left: float, reserve: float) -> tuple[float, float, float, float, float]:
    """Settle one obligation from revenue, then reserve.

    Returns (from_revenue, from_reserve, shortfall, revenue_left, reserve).
    """
    from_revenue = 0.0
    if revenue_left > 0 and due > 0:
        from_revenue = revenue_left if revenue_left <= due else due
        revenue_left -= from_revenue
    outstanding = due - from_revenue
    from_reserve = 0.0
    if outstanding > 0 and reserve > 0:
        from_reserve = outstanding if outstanding <= reserve else reserve
        reserve -= from_reserve
        outstanding -= from_reserve
    return from_revenue, from_reserve, outstanding, revenue_left, reserve


def run_waterfall(
    emi: np.ndarray,
    revenue: np.ndarray,
    capital_fee: np.ndarray,
    growth_fee: np.ndarray,
    interest: np.ndarray,
    principal: np.ndarray,
    balance: np.ndarray,
    reserve_seed: float,
) -> list[MonthlyLedgerRow]:
    """Allocate each month's revenue and reserve to EMI, then capital fee, then growth fee."""
    rows: list[MonthlyLedgerRow] = []
    reserve = float(reserve_seed)
    for idx in range(len(emi)):
        m = idx + 1
        opening = reserve
        month_revenue = float(revenue[idx])
        emi_due = float(emi[idx])
        cap_due = float(capital_fee[idx])
        growth_due = float(growth_fee[idx])

        emi_rev, emi_res, emi_short, left, reserve = _pay(emi_due, month_revenue, reserve)
        cap_rev, cap_res, cap_short, left, reserve = _pay(cap_due, left, reserve)
        growth_rev, growth_res, growth_short, left, reserve = _pay(growth_due, left, reserve)

        loss = emi_short + cap_short + growth_short
        if loss < 0:
            loss = 0.0
        profit = left if left > 0 else 0.0
        if profit > 0:
            reserve += profit

        rows.append(
            MonthlyLedgerRow(
                month=m,
                year=(m - 1) // 12 + 1,
                emi_due=emi_due,
                interest=float(interest[idx]),
                principal_paid=float(principal[idx]),
                loan_balance=float(balance[idx]),
                revenue=month_revenue,
                capital_fee_due=cap_due,
                growth_fee_due=growth_due,
                emi_from_revenue=emi_rev,
                emi_from_reserve=emi_res,
                emi_shortfall=emi_short,
                capital_fee_from_revenue=cap_rev,
                capital_fee_from_reserve=cap_res,
                capital_fee_shortfall=cap_short,
                growth_fee_from_revenue=growth_rev,
                growth_fee_from_reserve=growth_res,
                growth_fee_shortfall=growth_short,
                reserve_opening=opening,
                reserve_balance=reserve,
                loss=loss,
                profit=profit,
            )
        )
    return rows


def simulate(params: ParameterSet) -> SimulationResult:
    validate_params(params)
    horizon = int(params.simulation_horizon_months)
    units = params.effective_units

    loan = amortization_schedule(params.principal, params.monthly_rate, int(params.loan_term_months), horizon)

    herd = generate_herd(horizon, 1)
    revenue = revenue_per_unit(herd, horizon) * units
    if params.capital_fee_enabled:
        capital_fee = capital_fee_per_unit(herd, horizon) * units
    else:
        capital_fee = np.zeros(horizon)
    if params.growth_fee_enabled:
        growth_fee = growth_fee_per_unit(herd, horizon) * units
    else:
        growth_fee = np.zeros(horizon)

    rows = run_waterfall(
        emi=loan.emi,
        revenue=revenue,
        capital_fee=capital_fee,
        growth_fee=growth_fee,
        interest=loan.interest,
        principal=loan.principal,
        balance=loan.balance,
        reserve_seed=opening_reserve(params),
    )

    totals = grand_totals(rows)
    outflows = totals["emi_due"] + totals["capital_fee_due"] + totals["growth_fee_due"]
    net_cash = totals["revenue"] - outflows
    assets = value_herd(horizon, units)

    return SimulationResult(
        params=params,
        monthly_ledger=tuple(rows),
        yearly_ledger=roll_up_yearly(rows),
        installment=loan.installment,
        total_payment=totals["emi_due"],
        total_interest=totals["interest"],
        total_revenue=totals["revenue"],
        total_capital_fee=totals["capital_fee_due"],
        total_growth_fee=totals["growth_fee_due"],
        total_profit=net_cash if net_cash > 0 else 0.0,
        total_loss=totals["loss"],
        total_net_cash=net_cash,
        total_surplus=totals["profit"],
        total_asset_value=assets.total_asset_value,
        total_animal_count=assets.total_animal_count,
    )
