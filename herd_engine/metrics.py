"""Summary metrics and the long-term (post-horizon) projection."""

from __future__ import annotations

from dataclasses import dataclass, replace

import numpy as np
import pandas as pd

from herd_engine.assets import value_herd
from herd_engine.defaults import LONG_TERM_MONTHS
from herd_engine.model import SimulationResult, simulate
from herd_engine.schema import InvalidParameterError, ParameterSet


@dataclass(frozen=True)
class LongTermProjection:
    horizon_months: int
    long_term_months: int
    revenue: float
    capital_fee: float
    growth_fee: float
    net_cash: float
    asset_value_at_horizon: float
    asset_value_at_long_term: float

    @property
    def asset_growth(self) -> float:
        return self.asset_value_at_long_term - self.asset_value_at_horizon


def _first_month(mask: np.ndarray, months: np.ndarray) -> int | None:
    hits = np.flatnonzero(mask)
    if len(hits) == 0:
        return None
    return int(months[hits[0]])


def compute_metrics(result: SimulationResult) -> dict:
    df = result.monthly_frame()
    months = df["Month"].to_numpy()
    loss = df["Loss"].to_numpy()
    reserve = df["Reserve Balance"].to_numpy()
    cumulative_net = np.cumsum((df["Revenue"] - df["Total Payment"]).to_numpy())

    min_idx = int(np.argmin(reserve)) if len(reserve) else 0
    by_year = df.groupby("Year", as_index=False)[["Revenue", "Total Payment", "Loss", "Profit"]].sum()

    return {
        "loss_months": int((loss > 0).sum()),
        "first_loss_month": _first_month(loss > 0, months),
        "minimum_reserve": float(reserve[min_idx]) if len(reserve) else 0.0,
        "minimum_reserve_month": int(months[min_idx]) if len(months) else None,
        "break_even_month": _first_month(cumulative_net >= 0, months),
        "final_reserve": result.final_reserve_balance,
        "revenue_by_year": by_year[["Year", "Revenue"]].copy(),
        "cash_by_year": by_year,
        "net_position": result.total_net_cash + result.total_asset_value,
    }


def project_long_term(params: ParameterSet, long_term_months: int = LONG_TERM_MONTHS) -> LongTermProjection:
    """Extend the run to `long_term_months` and report what happens after the user's horizon.

    The loan keeps its term; months past it carry no EMI.
    """
    horizon = int(params.simulation_horizon_months)
    if int(long_term_months) != long_term_months or long_term_months < 1:
        raise InvalidParameterError("long_term_months must be a whole number >= 1.")
    long_term = max(int(long_term_months), horizon)

    extended = simulate(replace(params, simulation_horizon_months=long_term))
    tail = pd.DataFrame(
        [
            {"revenue": r.revenue, "capital_fee": r.capital_fee_due, "growth_fee": r.growth_fee_due, "emi": r.emi_due}
            for r in extended.monthly_ledger
            if r.month > horizon
        ],
        columns=["revenue", "capital_fee", "growth_fee", "emi"],
    )
    sums = tail.sum()
    units = params.effective_units

    return LongTermProjection(
        horizon_months=horizon,
        long_term_months=long_term,
        revenue=float(sums["revenue"]),
        capital_fee=float(sums["capital_fee"]),
        growth_fee=float(sums["growth_fee"]),
        net_cash=float(sums["revenue"] - sums["capital_fee"] - sums["growth_fee"] - sums["emi"]),
        asset_value_at_horizon=value_herd(horizon, units).total_asset_value,
        asset_value_at_long_term=extended.total_asset_value,
    )
