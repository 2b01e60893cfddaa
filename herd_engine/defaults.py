"""Calculator defaults and business constants."""

from __future__ import annotations


DEFAULTS = {
    "principal": 400000.0,
    "annual_rate_percent": 12.0,
    "loan_term_months": 60,
    "simulation_horizon_months": 60,
    "unit_count": 1,
    "capital_fee_enabled": True,
    "growth_fee_enabled": False,
}

ACF_DEFAULTS = {
    "units": 1,
    "tenure_months": 30,
}

# Capital requirement per purchased unit (two animals).
BASE_UNIT_COST = 350000.0
MARKET_UNIT_VALUE = 350000.0

# Yearly reserve charge per animal (CPF).
CAPITAL_FEE_YEARLY = 15000.0

LONG_TERM_MONTHS = 120
