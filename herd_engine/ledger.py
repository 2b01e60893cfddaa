"""Ledger row records produced by the cash-flow simulation."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MonthlyLedgerRow:
    month: int
    year: int
    emi_due: float
    interest: float
    principal_paid: float
    loan_balance: float
    revenue: float
    capital_fee_due: float
    growth_fee_due: float
    emi_from_revenue: float
    emi_from_reserve: float
    emi_shortfall: float
    capital_fee_from_revenue: float
    capital_fee_from_reserve: float
    capital_fee_shortfall: float
    growth_fee_from_revenue: float
    growth_fee_from_reserve: float
    growth_fee_shortfall: float
    reserve_opening: float
    reserve_balance: float
    loss: float
    profit: float

    @property
    def total_payment(self) -> float:
        return self.emi_due + self.capital_fee_due + self.growth_fee_due

    @property
    def reserve_debit(self) -> float:
        return self.emi_from_reserve + self.capital_fee_from_reserve + self.growth_fee_from_reserve

    @property
    def net_cash(self) -> float:
        return self.profit - self.loss


@dataclass(frozen=True)
class YearlyLedgerRow:
    year: int
    months: int
    emi_due: float
    interest: float
    principal_paid: float
    loan_balance: float
    revenue: float
    capital_fee_due: float
    growth_fee_due: float
    reserve_debit: float
    reserve_balance: float
    profit: float
    loss: float

    @property
    def total_payment(self) -> float:
        return self.emi_due + self.capital_fee_due + self.growth_fee_due

    @property
    def net_cash(self) -> float:
        return self.profit - self.loss


# Presentation labels for ledger frames, in display order.
MONTHLY_COLUMNS = {
    "month": "Month",
    "year": "Year",
    "emi_due": "EMI Due",
    "interest": "Interest",
    "principal_paid": "Principal Paid",
    "loan_balance": "Loan Balance",
    "revenue": "Revenue",
    "capital_fee_due": "Capital Fee Due",
    "growth_fee_due": "Growth Fee Due",
    "emi_from_revenue": "EMI From Revenue",
    "emi_from_reserve": "EMI From Reserve",
    "emi_shortfall": "EMI Shortfall",
    "capital_fee_from_revenue": "Capital Fee From Revenue",
    "capital_fee_from_reserve": "Capital Fee From Reserve",
    "capital_fee_shortfall": "Capital Fee Shortfall",
    "growth_fee_from_revenue": "Growth Fee From Revenue",
    "growth_fee_from_reserve": "Growth Fee From Reserve",
    "growth_fee_shortfall": "Growth Fee Shortfall",
    "reserve_opening": "Reserve Opening",
    "reserve_balance": "Reserve Balance",
    "loss": "Loss",
    "profit": "Profit",
}

YEARLY_COLUMNS = {
    "year": "Year",
    "months": "Months",
    "emi_due": "EMI Due",
    "interest": "Interest",
    "principal_paid": "Principal Paid",
    "loan_balance": "Loan Balance",
    "revenue": "Revenue",
    "capital_fee_due": "Capital Fee Due",
    "growth_fee_due": "Growth Fee Due",
    "reserve_debit": "Reserve Debit",
    "reserve_balance": "Reserve Balance",
    "profit": "Profit",
    "loss": "Loss",
}
