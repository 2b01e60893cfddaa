"""One-way sensitivity and what-if scenario helpers."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace

import pandas as pd

from herd_engine.model import SimulationResult, simulate
from herd_engine.schema import MAX_ANNUAL_RATE_PERCENT, ParameterSet


DEFAULT_SENSITIVITY_DRIVERS = [
    "principal",
    "annual_rate_percent",
    "unit_count",
]


TARGET_OPTIONS = [
    "Total Revenue",
    "Total Payment",
    "Total Loss",
    "Total Surplus",
    "Net Cash",
    "Final Reserve",
    "Asset Value",
]


def evaluate_outputs(result: SimulationResult) -> dict:
    return {
        "Total Revenue": result.total_revenue,
        "Total Payment": result.total_payment,
        "Total Loss": result.total_loss,
        "Total Surplus": result.total_surplus,
        "Net Cash": result.total_net_cash,
        "Final Reserve": result.final_reserve_balance,
        "Asset Value": result.total_asset_value,
    }


def _shifted(base: ParameterSet, driver: str, mult: float) -> ParameterSet:
    value = float(getattr(base, driver)) * mult
    if driver == "unit_count":
        return replace(base, unit_count=max(int(round(value)), 1))
    if driver == "annual_rate_percent":
        value = min(max(value, 0.0), MAX_ANNUAL_RATE_PERCENT)
    return replace(base, **{driver: max(value, 0.0)})


def run_one_way_sensitivity(base: ParameterSet, delta_pct: float, drivers: list[str] | None = None) -> pd.DataFrame:
    """Re-run the simulation with each driver moved down and up by `delta_pct` (0.1 = 10%)."""
    baseline = evaluate_outputs(simulate(base))

    if drivers is None or len(drivers) == 0:
        drivers = list(DEFAULT_SENSITIVITY_DRIVERS)

    rows = []
    for driver in drivers:
        if driver not in DEFAULT_SENSITIVITY_DRIVERS:
            continue
        for case, mult in [("Low", 1 - delta_pct), ("High", 1 + delta_pct)]:
            scenario = _shifted(base, driver, mult)
            out = evaluate_outputs(simulate(scenario))
            rows.append(
                {
                    "Driver": driver,
                    "Case": case,
                    "Value": float(getattr(scenario, driver)),
                    **{k: out[k] for k in baseline.keys()},
                    **{f"Delta {k}": out[k] - baseline[k] for k in baseline.keys()},
                }
            )

    return pd.DataFrame(rows)


def run_scenarios(params_list: list[ParameterSet], max_workers: int | None = None) -> list[SimulationResult]:
    """Simulate independent parameter sets, returning results in input order."""
    params_list = list(params_list)
    if not params_list:
        return []
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        return list(pool.map(simulate, params_list))
