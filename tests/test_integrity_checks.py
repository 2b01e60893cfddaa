from __future__ import annotations

from dataclasses import replace

import pandas as pd

from herd_engine.integrity_checks import run_integrity_checks
from herd_engine.model import simulate


def test_integrity_checks_pass_for_base_scenario(base_params):
    findings = run_integrity_checks(simulate(base_params).monthly_frame(), base_params)
    assert findings == []


def test_integrity_checks_pass_for_representative_scenarios(base_params):
    scenarios = [
        {"annual_rate_percent": 24.0, "growth_fee_enabled": True},
        {"capital_fee_enabled": False},
        {"principal": 300000.0},
        {"principal": 1200000.0, "unit_count": 3, "simulation_horizon_months": 120},
        {"annual_rate_percent": 0.0, "loan_term_months": 36},
    ]
    for updates in scenarios:
        params = replace(base_params, **updates)
        findings = run_integrity_checks(simulate(params).monthly_frame(), params, tol=1e-5)
        assert findings == [], f"Unexpected integrity findings for updates={updates}: {findings}"


def test_integrity_checks_detects_identity_break(base_params):
    df = simulate(base_params).monthly_frame()
    broken = df.copy()
    broken.loc[broken.index[2], "Revenue"] += 1.0
    findings = run_integrity_checks(broken, base_params)
    check_names = {f["Check"] for f in findings}
    assert "Revenue allocation identity" in check_names
    assert "Cash conservation" in check_names
    months = {f["Month of Max Delta"] for f in findings}
    assert months == {"3"}


def test_empty_frame_is_reported(base_params):
    findings = run_integrity_checks(pd.DataFrame(), base_params)
    assert findings[0]["Check"] == "Dataframe not available"
