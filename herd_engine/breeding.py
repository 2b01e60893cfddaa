"""Multi-generation birth calendar for purchased units."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass


# Months from an animal's birth (or a seed's acquisition) to its first calving.
# The legacy calculators disagreed (32 vs 33); 32 is canonical.
# Purchased animals follow the same rule, so their first calf arrives 32 months
# after acquisition. Legacy screens calved them at acquisition, which gives more
# calves (and larger capital fees, e.g. 52,500 vs 30,000 in year 3) than here.
GESTATION_MATURITY_MONTHS = 32
CALVING_INTERVAL_MONTHS = 12

# Relative acquisition months of the two animals bought with each unit.
SEED_ACQUISITION_OFFSETS = (0, 6)
SEED_SLOT_LABELS = ("A", "B")
SEED_AGE_MONTHS = 60


@dataclass(frozen=True)
class Animal:
    id: str
    generation: int
    birth_month: int
    parent_id: str | None = None
    unit: int = 1

    @property
    def is_seed(self) -> bool:
        return self.generation == 0

    def age_at(self, month: int) -> int:
        """Age in months at absolute `month`, counting a seed's age at purchase."""
        age = month - self.birth_month
        if self.is_seed:
            age += SEED_AGE_MONTHS
        return max(0, age)


def descendant_birth_months(birth_month: int, horizon_months: int) -> list[int]:
    """Birth months of an animal's own offspring that fall before the horizon."""
    return list(range(birth_month + GESTATION_MATURITY_MONTHS, horizon_months, CALVING_INTERVAL_MONTHS))


def _seed_animals(unit: int) -> list[Animal]:
    return [
        Animal(id=f"U{unit}{label}", generation=0, birth_month=offset, unit=unit)
        for offset, label in zip(SEED_ACQUISITION_OFFSETS, SEED_SLOT_LABELS)
    ]


def generate_herd(horizon_months: int, unit_count: int = 1) -> list[Animal]:
    """Return every animal alive by the horizon, seeds included.

    Births are placed at absolute months 0..horizon_months-1. Generation depth is
    not capped; it ends once the next calving would fall past the horizon.
    """
    units = unit_count if unit_count > 0 else 1
    herd: list[Animal] = []
    for unit in range(1, units + 1):
        queue = deque(_seed_animals(unit))
        while queue:
            parent = queue.popleft()
            herd.append(parent)
            for k, bm in enumerate(descendant_birth_months(parent.birth_month, horizon_months), start=1):
                queue.append(
                    Animal(
                        id=f"{parent.id}_C{k}",
                        generation=parent.generation + 1,
                        birth_month=bm,
                        parent_id=parent.id,
                        unit=unit,
                    )
                )
    herd.sort(key=lambda a: (a.unit, a.birth_month, a.id))
    return herd


def descendants(herd: list[Animal]) -> list[Animal]:
    return [a for a in herd if not a.is_seed]
