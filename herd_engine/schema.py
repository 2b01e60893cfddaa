"""Simulation parameter schema, validation, and dict migration helpers."""

from __future__ import annotations

import math
from copy import deepcopy
from dataclasses import asdict, dataclass, replace
from typing import Any

from herd_engine.defaults import DEFAULTS
from herd_engine.runtime_logging import append_runtime_event


MAX_ANNUAL_RATE_PERCENT = 100.0

# Keys used by the legacy calculator payloads.
LEGACY_KEY_MAP = {
    "amount": "principal",
    "rate": "annual_rate_percent",
    "units": "unit_count",
    "cpfEnabled": "capital_fee_enabled",
    "cgfEnabled": "growth_fee_enabled",
    "loanMonths": "loan_term_months",
    "simMonths": "simulation_horizon_months",
}


class InvalidParameterError(ValueError):
    """Raised when simulation inputs are rejected before any work begins."""


@dataclass(frozen=True)
class ParameterSet:
    principal: float
    annual_rate_percent: float
    loan_term_months: int
    simulation_horizon_months: int
    unit_count: int = 1
    capital_fee_enabled: bool = True
    growth_fee_enabled: bool = False

    @property
    def effective_units(self) -> int:
        return self.unit_count if self.unit_count > 0 else 1

    @property
    def monthly_rate(self) -> float:
        return self.annual_rate_percent / 12 / 100

    def with_rate(self, annual_rate_percent: float) -> "ParameterSet":
        return replace(self, annual_rate_percent=float(annual_rate_percent))

    def without_rate(self) -> dict[str, Any]:
        data = asdict(self)
        data.pop("annual_rate_percent")
        return data

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _is_finite_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    try:
        return math.isfinite(float(value))
    except (TypeError, ValueError):
        return False


def _reject(message: str, context: dict[str, Any]) -> None:
    append_runtime_event(event="invalid_parameters", message=message, params=context)
    raise InvalidParameterError(message)


def validate_params(params: ParameterSet) -> None:
    context = params.to_dict()
    for field in ("principal", "annual_rate_percent", "loan_term_months", "simulation_horizon_months", "unit_count"):
        if not _is_finite_number(getattr(params, field)):
            _reject(f"{field} must be a finite number.", context)
    for field in ("capital_fee_enabled", "growth_fee_enabled"):
        if not isinstance(getattr(params, field), bool):
            _reject(f"{field} must be a boolean.", context)

    if float(params.principal) < 0:
        _reject("principal must be non-negative.", context)
    if not (0 <= float(params.annual_rate_percent) <= MAX_ANNUAL_RATE_PERCENT):
        _reject(f"annual_rate_percent must be in [0,{MAX_ANNUAL_RATE_PERCENT:g}].", context)
    if int(params.loan_term_months) != params.loan_term_months or params.loan_term_months <= 0:
        _reject("loan_term_months must be a positive whole number of months.", context)
    if int(params.simulation_horizon_months) != params.simulation_horizon_months or params.simulation_horizon_months <= 0:
        _reject("simulation_horizon_months must be a positive whole number of months.", context)
    if int(params.unit_count) != params.unit_count:
        _reject("unit_count must be a whole number of units.", context)
    if params.simulation_horizon_months < params.loan_term_months:
        _reject("simulation_horizon_months must be >= loan_term_months.", context)


def _coerce_bool(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        txt = value.strip().lower()
        if txt in {"1", "true", "yes", "y", "on"}:
            return True
        if txt in {"0", "false", "no", "n", "off"}:
            return False
    return None


def params_from_dict(raw_inputs: dict) -> tuple[ParameterSet, list[str], list[str]]:
    """Migrate a loose parameter dict into a validated ParameterSet."""
    warnings: list[str] = []
    unknown_keys: list[str] = []
    inputs = deepcopy(DEFAULTS)
    payload = raw_inputs if isinstance(raw_inputs, dict) else {}

    for k, v in payload.items():
        if k in inputs:
            inputs[k] = v
        elif k in LEGACY_KEY_MAP:
            if LEGACY_KEY_MAP[k] not in payload:
                inputs[LEGACY_KEY_MAP[k]] = v
        elif k == "months":
            # Legacy screens used one tenure for both the loan and the simulation.
            if "loan_term_months" not in payload:
                inputs["loan_term_months"] = v
            if "simulation_horizon_months" not in payload:
                inputs["simulation_horizon_months"] = v
        else:
            unknown_keys.append(k)

    for key in ("capital_fee_enabled", "growth_fee_enabled"):
        coerced = _coerce_bool(inputs[key])
        if coerced is None:
            raise InvalidParameterError(f"{key} must be a boolean.")
        inputs[key] = coerced

    try:
        principal = float(inputs["principal"])
        rate = float(inputs["annual_rate_percent"])
        loan_term = int(inputs["loan_term_months"])
        horizon = int(inputs["simulation_horizon_months"])
        units = int(inputs["unit_count"])
    except (TypeError, ValueError) as exc:
        raise InvalidParameterError(f"Parameter could not be parsed as a number: {exc}") from exc

    if units <= 0:
        warnings.append(f"unit_count={units} treated as 1.")
        units = 1

    params = ParameterSet(
        principal=principal,
        annual_rate_percent=rate,
        loan_term_months=loan_term,
        simulation_horizon_months=horizon,
        unit_count=units,
        capital_fee_enabled=inputs["capital_fee_enabled"],
        growth_fee_enabled=inputs["growth_fee_enabled"],
    )
    validate_params(params)
    return params, warnings, sorted(unknown_keys)
