"""Milk revenue projection from herd age and the 12-month lactation cycle."""

from __future__ import annotations

import numpy as np

from herd_engine.breeding import GESTATION_MATURITY_MONTHS, Animal, generate_herd


PEAK_YIELD = 9000.0
MID_YIELD = 6000.0
SEED_REVENUE_LAG_MONTHS = 2
CYCLE_MONTHS = 12


def _seed_cycle_value(pos: np.ndarray) -> np.ndarray:
    return np.select([pos <= 4, pos <= 7], [PEAK_YIELD, MID_YIELD], default=0.0)


def _descendant_cycle_value(pos: np.ndarray) -> np.ndarray:
    # Two dry ramp months precede the first peak.
    return np.select([pos <= 1, pos <= 6, pos <= 9], [0.0, PEAK_YIELD, MID_YIELD], default=0.0)


def seed_revenue(months: np.ndarray, revenue_start_month: int) -> np.ndarray:
    """Per-month revenue of a purchased animal whose cycle starts at 1-based `revenue_start_month`."""
    k = months - revenue_start_month
    pos = np.mod(k, CYCLE_MONTHS)
    return np.where(k >= 0, _seed_cycle_value(pos), 0.0)


def descendant_revenue(months: np.ndarray, cycle_base_month: int) -> np.ndarray:
    k = months - cycle_base_month
    pos = np.mod(k, CYCLE_MONTHS)
    return np.where(k >= 0, _descendant_cycle_value(pos), 0.0)


def revenue_start_month(animal: Animal) -> int:
    """1-based simulation month at which an animal's revenue cycle is anchored."""
    if animal.is_seed:
        return animal.birth_month + 1 + SEED_REVENUE_LAG_MONTHS
    return animal.birth_month + 1 + GESTATION_MATURITY_MONTHS


def revenue_per_unit(herd: list[Animal], horizon_months: int) -> np.ndarray:
    months = np.arange(1, int(horizon_months) + 1)
    total = np.zeros(len(months))
    for animal in herd:
        start = revenue_start_month(animal)
        if start > horizon_months:
            continue
        if animal.is_seed:
            total += seed_revenue(months, start)
        else:
            total += descendant_revenue(months, start)
    return total


def project_revenue(horizon_months: int, unit_count: int) -> np.ndarray:
    units = unit_count if unit_count > 0 else 1
    return revenue_per_unit(generate_herd(horizon_months, 1), horizon_months) * units
