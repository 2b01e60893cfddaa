"""Bounded search for the highest loss-free interest rate."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable

from herd_engine.model import simulate
from herd_engine.runtime_logging import append_runtime_event
from herd_engine.schema import ParameterSet, validate_params


MIN_RATE_PERCENT = 9.0
MAX_RATE_PERCENT = 24.0
LOSS_TOLERANCE = 1.0

# Rates are searched on a grid of tenths of a percent.
RATE_STEPS_PER_PERCENT = 10


@dataclass
class RateSearchResult:
    status: str
    rate: float
    total_loss: float
    iterations: int
    message: str


def _loss_at_step(params: ParameterSet) -> Callable[[int], float]:
    def evaluator(step: int) -> float:
        return simulate(params.with_rate(step / RATE_STEPS_PER_PERCENT)).total_loss

    return evaluator


def search_max_safe_rate(
    params: ParameterSet,
    lower_bound: float = MIN_RATE_PERCENT,
    upper_bound: float = MAX_RATE_PERCENT,
) -> RateSearchResult:
    """Bisect the one-decimal rates in [lower_bound, upper_bound] for the highest one whose run has no loss.

    The rate on `params` is ignored. Loss is non-decreasing in the rate, so the
    safe rates form an interval starting at the lower bound.
    """
    validate_params(params.with_rate(lower_bound))
    evaluator = _loss_at_step(params)
    lo = math.ceil(float(lower_bound) * RATE_STEPS_PER_PERCENT - 1e-9)
    hi = math.floor(float(upper_bound) * RATE_STEPS_PER_PERCENT + 1e-9)
    search_params = params.without_rate()

    loss_lo = evaluator(lo)
    if loss_lo >= LOSS_TOLERANCE:
        append_runtime_event(
            event="rate_floor_unsafe",
            message=f"Loss at the {lo / RATE_STEPS_PER_PERCENT:.1f}% floor is {loss_lo:.2f}.",
            params=search_params,
            detail={"rate": lo / RATE_STEPS_PER_PERCENT, "total_loss": loss_lo},
        )
        return RateSearchResult("floor_unsafe", lo / RATE_STEPS_PER_PERCENT, loss_lo, 1, "Even the minimum rate produces a loss.")

    loss_hi = evaluator(hi)
    if loss_hi < LOSS_TOLERANCE:
        append_runtime_event(
            event="rate_optimized",
            message=f"Ceiling rate {hi / RATE_STEPS_PER_PERCENT:.1f}% is loss-free.",
            params=search_params,
            detail={"rate": hi / RATE_STEPS_PER_PERCENT, "iterations": 2},
        )
        return RateSearchResult("ceiling_safe", hi / RATE_STEPS_PER_PERCENT, loss_hi, 2, "Maximum rate is loss-free.")

    # Invariant: step lo is safe, step hi is not.
    best_loss = loss_lo
    iterations = 2
    while hi - lo > 1:
        mid = (lo + hi) // 2
        loss_mid = evaluator(mid)
        iterations += 1
        if loss_mid < LOSS_TOLERANCE:
            lo = mid
            best_loss = loss_mid
        else:
            hi = mid

    rate = lo / RATE_STEPS_PER_PERCENT
    append_runtime_event(
        event="rate_optimized",
        message=f"Highest loss-free rate is {rate:.1f}%.",
        params=search_params,
        detail={"rate": rate, "iterations": iterations, "total_loss": best_loss},
    )
    return RateSearchResult("solved", rate, best_loss, iterations, "Converged.")


def optimize_rate(params: ParameterSet) -> float:
    """Highest annual rate (one decimal) in [9, 24] that keeps total loss below 1."""
    return search_max_safe_rate(params).rate
