from __future__ import annotations

from dataclasses import replace

import pytest

from herd_engine.metrics import compute_metrics, project_long_term
from herd_engine.model import simulate
from herd_engine.schema import InvalidParameterError


def test_metrics_agree_with_ledger(base_params):
    result = simulate(base_params)
    metrics = compute_metrics(result)
    losses = [r.month for r in result.monthly_ledger if r.loss > 0]
    assert metrics["loss_months"] == len(losses)
    assert metrics["first_loss_month"] == (losses[0] if losses else None)
    assert metrics["minimum_reserve"] == min(r.reserve_balance for r in result.monthly_ledger)
    assert metrics["final_reserve"] == result.monthly_ledger[-1].reserve_balance
    assert metrics["revenue_by_year"]["Revenue"].tolist() == [99000.0, 126000.0, 126000.0, 126000.0, 126000.0]


def test_break_even_month_without_debt(base_params):
    params = replace(base_params, principal=0.0)
    metrics = compute_metrics(simulate(params))
    # Nothing is owed before month 13, so the position never dips below zero.
    assert metrics["break_even_month"] == 1
    assert metrics["loss_months"] == 0


def test_long_term_projection_after_five_years(base_params):
    projection = project_long_term(base_params)
    assert projection.horizon_months == 60
    assert projection.long_term_months == 120
    assert projection.asset_value_at_horizon == 535000.0
    assert projection.asset_value_at_long_term > projection.asset_value_at_horizon
    assert projection.asset_growth == projection.asset_value_at_long_term - 535000.0
    assert projection.revenue > 5 * 126000.0
    # The loan is fully repaid by month 60.
    assert projection.net_cash == pytest.approx(projection.revenue - projection.capital_fee - projection.growth_fee)


def test_long_term_projection_is_empty_past_the_long_horizon(base_params):
    params = replace(base_params, simulation_horizon_months=120)
    projection = project_long_term(params)
    assert projection.revenue == 0.0
    assert projection.asset_growth == 0.0


def test_long_term_months_must_be_positive(base_params):
    with pytest.raises(InvalidParameterError):
        project_long_term(base_params, long_term_months=0)
