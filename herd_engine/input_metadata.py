"""Input guidance metadata and advisory range checks."""

from __future__ import annotations

from typing import Any

from herd_engine.schema import ParameterSet


INPUT_GUIDANCE: dict[str, dict[str, Any]] = {
    "principal": {"min": 350000.0, "max": 5000000.0, "note": "One unit needs 350,000 plus the first-year capital fee."},
    "annual_rate_percent": {"min": 9.0, "max": 24.0, "note": "Lender rates offered for livestock loans."},
    "loan_term_months": {"min": 12, "max": 84, "note": "Typical EMI tenures run one to seven years."},
    "simulation_horizon_months": {"min": 12, "max": 120, "note": "Most plans are reviewed over 5 to 10 years."},
    "unit_count": {"min": 1, "max": 20, "note": "Each unit is two purchased animals."},
    "acf_units": {"min": 1, "max": 10, "note": "ACF bookings are usually a handful of units."},
}


def _fmt(v: float) -> str:
    if abs(v - round(v)) < 1e-9:
        return f"{int(round(v))}"
    return f"{v:.3f}".rstrip("0").rstrip(".")


def help_with_guidance(key: str, base_help: str) -> str:
    g = INPUT_GUIDANCE.get(key)
    if not g:
        return base_help
    return f"{base_help} Reasonable range: {_fmt(g['min'])} to {_fmt(g['max'])}. {g['note']}"


def advisory_warnings(params: ParameterSet | dict) -> list[str]:
    inputs = params.to_dict() if isinstance(params, ParameterSet) else params
    warnings: list[str] = []
    for key, g in INPUT_GUIDANCE.items():
        if key not in inputs:
            continue
        try:
            v = float(inputs[key])
        except (TypeError, ValueError):
            continue
        if v < g["min"] or v > g["max"]:
            warnings.append(
                f"{key}={v:.3f} is outside the recommended range [{_fmt(g['min'])}, {_fmt(g['max'])}]."
            )
    return warnings
