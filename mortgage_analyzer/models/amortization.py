from dataclasses import dataclass
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class AmortizationPayment:
    payment_number: int  # 1-based
    payment_date: date
    payment: Decimal
    principal: Decimal
    interest: Decimal
    remaining_balance: Decimal
    cumulative_principal: Decimal
    cumulative_interest: Decimal


@dataclass(frozen=True)
class AmortizationSchedule:
    payments: tuple[AmortizationPayment, ...]
    total_principal: Decimal
    total_interest: Decimal
    total_payments: Decimal
    monthly_payment: Decimal  # Base P&I payment, before extras

    @property
    def payoff_months(self) -> int:
        return len(self.payments)


@dataclass(frozen=True)
class YearlySummary:
    year: int  # 1-based loan year
    calendar_year: int
    principal_paid: Decimal
    interest_paid: Decimal
    total_paid: Decimal
    ending_balance: Decimal
    principal_percent: Decimal  # Share of the year's payments going to principal
    interest_percent: Decimal


@dataclass(frozen=True)
class FrontLoadedInterestAnalysis:
    first_half_interest: Decimal
    second_half_interest: Decimal
    ratio: Decimal  # first / second, Infinity when second half pays no interest
    first_year_interest: Decimal
    last_year_interest: Decimal


@dataclass(frozen=True)
class ScheduleComparison:
    months_saved: int
    interest_saved: Decimal
    total_saved: Decimal
