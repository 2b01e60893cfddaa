"""Herd market-value projection at future horizons."""

from __future__ import annotations

from dataclasses import dataclass

from herd_engine.breeding import generate_herd
from herd_engine.schema import InvalidParameterError
from herd_engine.valuation import YOUNG_CALF_MAX_AGE_MONTHS, market_value_for_age


@dataclass(frozen=True)
class AssetProjection:
    total_asset_value: float
    total_animal_count: int


def value_herd(horizon_months: int, unit_count: int, zero_young_calves: bool = False) -> AssetProjection:
    """Value every animal born before `horizon_months` at its age on that month.

    All units breed identically, so one unit is simulated and scaled.
    """
    units = unit_count if unit_count > 0 else 1
    herd = generate_herd(horizon_months, 1)
    unit_value = 0.0
    for animal in herd:
        age = animal.age_at(horizon_months)
        if zero_young_calves and not animal.is_seed and age <= YOUNG_CALF_MAX_AGE_MONTHS:
            continue
        unit_value += market_value_for_age(age)
    return AssetProjection(total_asset_value=unit_value * units, total_animal_count=len(herd) * units)


def project_asset_value(target_year: int, unit_count: int, zero_young_in_first_year: bool = True) -> AssetProjection:
    """Herd value at the end of year `target_year` (1-based)."""
    if int(target_year) != target_year or target_year < 1:
        raise InvalidParameterError("target_year must be a whole number >= 1.")
    target_year = int(target_year)
    zero_young = zero_young_in_first_year and target_year == 1
    return value_herd(12 * target_year, unit_count, zero_young_calves=zero_young)
