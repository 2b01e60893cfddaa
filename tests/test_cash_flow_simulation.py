from __future__ import annotations

from dataclasses import replace

import numpy as np
import pytest

from herd_engine.breeding import generate_herd
from herd_engine.model import capital_fee_per_unit, growth_fee_per_unit, run_waterfall, simulate
from herd_engine.schema import ParameterSet


def test_base_run_totals(base_params):
    result = simulate(base_params)
    assert len(result.monthly_ledger) == 60
    assert result.total_revenue == 603000.0
    assert result.total_capital_fee == pytest.approx(117500.0)
    assert result.total_growth_fee == 0.0
    assert result.total_asset_value == 535000.0
    assert result.total_animal_count == 7
    expected_net = result.total_revenue - (result.total_payment + result.total_capital_fee + result.total_growth_fee)
    assert result.total_net_cash == pytest.approx(expected_net)
    assert result.total_profit == max(expected_net, 0.0)
    assert result.total_surplus == pytest.approx(sum(r.profit for r in result.monthly_ledger))
    assert result.total_loss == pytest.approx(sum(r.loss for r in result.monthly_ledger))


def test_reserve_is_seeded_with_excess_principal(base_params):
    assert simulate(base_params).monthly_ledger[0].reserve_opening == 35000.0
    no_fee = simulate(replace(base_params, capital_fee_enabled=False))
    assert no_fee.monthly_ledger[0].reserve_opening == 50000.0
    assert no_fee.total_capital_fee == 0.0
    short = simulate(replace(base_params, principal=300000.0))
    assert short.monthly_ledger[0].reserve_opening == 0.0


def test_second_year_capital_fee_and_revenue(base_params):
    year2 = simulate(base_params).yearly_ledger[1]
    assert year2.revenue == 126000.0
    assert year2.capital_fee_due == pytest.approx(22500.0)


def test_third_year_capital_fee_covers_only_the_seeds(base_params):
    # Seeds first calve 32 months after acquisition, so no calf is fee-liable in year 3.
    year3 = simulate(base_params).yearly_ledger[2]
    assert year3.capital_fee_due == pytest.approx(30000.0)


def test_capital_fee_starts_in_month_13():
    fees = capital_fee_per_unit(generate_herd(60, 1), 60)
    assert np.all(fees[:12] == 0.0)
    assert fees[12] == 1250.0
    assert fees[18] == 2500.0
    # First calf becomes liable at 24 months of age.
    assert fees[56] == 3750.0


def test_growth_fee_for_five_year_herd():
    fees = growth_fee_per_unit(generate_herd(60, 1), 60)
    assert float(fees.sum()) == 37200.0
    assert np.all(fees[:44] == 0.0)
    assert fees[44] == 1000.0


def test_growth_fee_flag(base_params):
    result = simulate(replace(base_params, growth_fee_enabled=True))
    assert result.total_growth_fee == 37200.0


def test_units_scale_flows(base_params):
    one = simulate(base_params)
    two = simulate(replace(base_params, principal=800000.0, unit_count=2))
    assert two.total_revenue == 2 * one.total_revenue
    assert two.total_capital_fee == pytest.approx(2 * one.total_capital_fee)
    assert two.total_asset_value == 2 * one.total_asset_value


def test_waterfall_pays_emi_then_fees_from_revenue_then_reserve():
    zeros = np.zeros(2)
    rows = run_waterfall(
        emi=np.array([100.0, 100.0]),
        revenue=np.array([150.0, 30.0]),
        capital_fee=np.array([20.0, 20.0]),
        growth_fee=np.array([0.0, 10.0]),
        interest=zeros,
        principal=zeros,
        balance=zeros,
        reserve_seed=50.0,
    )
    first, second = rows
    assert (first.emi_from_revenue, first.capital_fee_from_revenue, first.profit) == (100.0, 20.0, 30.0)
    assert first.reserve_balance == 80.0
    assert first.loss == 0.0

    assert second.emi_from_revenue == 30.0
    assert second.emi_from_reserve == 70.0
    assert second.capital_fee_from_reserve == 10.0
    assert second.capital_fee_shortfall == 10.0
    assert second.growth_fee_shortfall == 10.0
    assert second.loss == 20.0
    assert second.profit == 0.0
    assert second.reserve_balance == 0.0


def test_monthly_conservation_and_non_negative_reserve(base_params):
    for params in [base_params, replace(base_params, annual_rate_percent=24.0, growth_fee_enabled=True)]:
        for row in simulate(params).monthly_ledger:
            paid_from_revenue = row.emi_from_revenue + row.capital_fee_from_revenue + row.growth_fee_from_revenue
            assert row.revenue + row.reserve_opening == pytest.approx(paid_from_revenue + row.reserve_debit + row.reserve_balance)
            assert row.emi_from_revenue + row.emi_from_reserve + row.emi_shortfall == pytest.approx(row.emi_due)
            assert row.reserve_balance >= 0


def test_identical_parameters_give_identical_ledgers(base_params):
    assert simulate(base_params).monthly_ledger == simulate(base_params).monthly_ledger


def test_reference_scenario_installment_and_payoff():
    params = ParameterSet(
        principal=400000.0,
        annual_rate_percent=18.0,
        loan_term_months=60,
        simulation_horizon_months=60,
        unit_count=1,
        capital_fee_enabled=True,
        growth_fee_enabled=True,
    )
    result = simulate(params)
    assert result.installment == pytest.approx(10157.37, abs=0.01)
    assert result.monthly_ledger[-1].loan_balance == 0.0


def test_frames_use_display_labels(base_params):
    result = simulate(base_params)
    monthly = result.monthly_frame()
    assert {"Month", "EMI Due", "Reserve Balance", "Loss", "Profit", "Net Cash"} <= set(monthly.columns)
    assert len(monthly) == 60
    yearly = result.yearly_frame()
    assert yearly["Year"].tolist() == [1, 2, 3, 4, 5]
    assert yearly["Revenue"].sum() == pytest.approx(result.total_revenue)
