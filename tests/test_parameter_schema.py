from __future__ import annotations

from dataclasses import replace

import pytest

from herd_engine.input_metadata import advisory_warnings, help_with_guidance
from herd_engine.schema import InvalidParameterError, params_from_dict, validate_params


def test_defaults_migrate_cleanly(base_params):
    assert base_params.principal == 400000.0
    assert base_params.annual_rate_percent == 12.0
    assert base_params.capital_fee_enabled is True
    assert base_params.growth_fee_enabled is False


def test_legacy_keys_are_bridged():
    params, warnings, unknown = params_from_dict(
        {"amount": 500000, "rate": "15", "months": 36, "cpfEnabled": "false", "cgfEnabled": 1, "theme": "dark"}
    )
    assert params.principal == 500000.0
    assert params.annual_rate_percent == 15.0
    assert params.loan_term_months == 36
    assert params.simulation_horizon_months == 36
    assert params.capital_fee_enabled is False
    assert params.growth_fee_enabled is True
    assert warnings == []
    assert unknown == ["theme"]


def test_canonical_keys_win_over_legacy_ones():
    params, _, _ = params_from_dict({"principal": 450000, "amount": 1})
    assert params.principal == 450000.0


def test_non_positive_units_are_floored_with_warning():
    params, warnings, _ = params_from_dict({"unit_count": 0})
    assert params.unit_count == 1
    assert len(warnings) == 1


@pytest.mark.parametrize(
    "updates",
    [
        {"loan_term_months": 0},
        {"simulation_horizon_months": 48},
        {"principal": -1.0},
        {"annual_rate_percent": 150.0},
        {"annual_rate_percent": float("nan")},
        {"principal": float("inf")},
        {"unit_count": 1.5},
    ],
)
def test_invalid_parameters_are_rejected(base_params, updates):
    with pytest.raises(InvalidParameterError):
        validate_params(replace(base_params, **updates))


def test_unparseable_input_is_rejected():
    with pytest.raises(InvalidParameterError):
        params_from_dict({"principal": "a lot"})
    with pytest.raises(InvalidParameterError):
        params_from_dict({"cpfEnabled": "maybe"})


def test_advisory_warnings_flag_unusual_rates(base_params):
    assert advisory_warnings(base_params) == []
    warnings = advisory_warnings(replace(base_params, annual_rate_percent=30.0))
    assert any(w.startswith("annual_rate_percent=") for w in warnings)
    assert "Reasonable range: 9 to 24." in help_with_guidance("annual_rate_percent", "Rate.")
