"""Canonical age-based market value and calf growth-fee tables."""

from __future__ import annotations


# (minimum age in months, market value), checked from the oldest bracket down.
MARKET_VALUE_BRACKETS: tuple[tuple[int, float], ...] = (
    (41, 175000.0),
    (35, 150000.0),
    (25, 100000.0),
    (19, 40000.0),
    (13, 25000.0),
    (0, 10000.0),
)

# (maximum age in months, monthly growth fee per calf). Older calves pay nothing.
GROWTH_FEE_BRACKETS: tuple[tuple[int, float], ...] = (
    (12, 0.0),
    (18, 1000.0),
    (24, 1400.0),
    (30, 1800.0),
    (36, 2500.0),
)

YOUNG_CALF_MAX_AGE_MONTHS = 12


def market_value_for_age(age_months: int) -> float:
    for min_age, value in MARKET_VALUE_BRACKETS:
        if age_months >= min_age:
            return value
    return MARKET_VALUE_BRACKETS[-1][1]


def growth_fee_for_age(age_months: int) -> float:
    """Monthly growth fee for a calf in its `age_months`-th month of life (1-based)."""
    for max_age, fee in GROWTH_FEE_BRACKETS:
        if age_months <= max_age:
            return fee
    return 0.0
