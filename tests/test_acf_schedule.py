from __future__ import annotations

import pytest

from herd_engine.acf import compute_acf_schedule, summarize_acf
from herd_engine.schema import InvalidParameterError


def test_eleven_month_schedule():
    rows = compute_acf_schedule(1, 11)
    assert len(rows) == 11
    assert all(r.installment == 30000.0 for r in rows)
    assert rows[-1].cumulative_installment == 330000.0


def test_thirty_month_schedule_scales_with_units():
    rows = compute_acf_schedule(2, 30)
    assert rows[0].installment == 20000.0
    assert rows[-1].month == 30
    assert rows[-1].cumulative_installment == 600000.0


def test_summary_benefits():
    short = summarize_acf(1, 11)
    assert short.cpf_benefit == 15000.0
    assert short.market_asset_value == 350000.0
    assert short.total_benefit == 350000.0 - 330000.0 + 15000.0

    long = summarize_acf(3, 30)
    assert long.total_investment == 900000.0
    assert long.cpf_benefit == 90000.0
    assert long.total_benefit == 1050000.0 - 900000.0 + 90000.0


@pytest.mark.parametrize("tenure", [0, 12, 24])
def test_unsupported_tenure(tenure):
    with pytest.raises(InvalidParameterError):
        compute_acf_schedule(1, tenure)
