from __future__ import annotations

import pytest

from herd_engine.valuation import growth_fee_for_age, market_value_for_age


@pytest.mark.parametrize(
    "age,value",
    [(0, 10000.0), (12, 10000.0), (13, 25000.0), (18, 25000.0), (19, 40000.0), (24, 40000.0),
     (25, 100000.0), (34, 100000.0), (35, 150000.0), (40, 150000.0), (41, 175000.0), (120, 175000.0)],
)
def test_market_value_brackets(age, value):
    assert market_value_for_age(age) == value


@pytest.mark.parametrize(
    "age,fee",
    [(1, 0.0), (12, 0.0), (13, 1000.0), (18, 1000.0), (19, 1400.0), (24, 1400.0),
     (25, 1800.0), (30, 1800.0), (31, 2500.0), (36, 2500.0), (37, 0.0)],
)
def test_growth_fee_brackets(age, fee):
    assert growth_fee_for_age(age) == fee
