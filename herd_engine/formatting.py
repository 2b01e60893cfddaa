"""Currency formatting for display. The numeric engine never formats."""

from __future__ import annotations

import math

import pandas as pd


def group_indian_digits(digits: str) -> str:
    """Group an unsigned digit string as 12,34,56,789."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs + [tail])


def format_inr(value: float, decimals: int = 0, symbol: str = "₹") -> str:
    if value is None or not math.isfinite(float(value)):
        return "-"
    amount = round(float(value), decimals)
    sign = "-" if amount < 0 else ""
    text = f"{abs(amount):.{decimals}f}"
    whole, _, frac = text.partition(".")
    grouped = group_indian_digits(whole)
    if frac:
        grouped = f"{grouped}.{frac}"
    return f"{sign}{symbol}{grouped}"


def format_frame(df: pd.DataFrame, skip: tuple[str, ...] = ("Month", "Year", "Months")) -> pd.DataFrame:
    """Copy of `df` with every numeric column rendered via format_inr."""
    out = df.copy()
    for col in out.columns:
        if col in skip or not pd.api.types.is_numeric_dtype(out[col]):
            continue
        out[col] = out[col].map(format_inr)
    return out
