"""Aggregate an amortization schedule by calendar year.

Pure functions. No I/O.
"""

from decimal import Decimal

from mortgage_analyzer.models.amortization import (
    AmortizationPayment,
    AmortizationSchedule,
    FrontLoadedInterestAnalysis,
    YearlySummary,
)


def yearly_summary(schedule: AmortizationSchedule) -> list[YearlySummary]:
    """Group payments by calendar year of payment date.

    Loan year is the 1-based position of the calendar year in sorted order, so a
    loan starting mid-year has a short first and last year.
    """
    by_year: dict[int, list[AmortizationPayment]] = {}
    for p in schedule.payments:
        by_year.setdefault(p.payment_date.year, []).append(p)

    summaries: list[YearlySummary] = []
    for index, calendar_year in enumerate(sorted(by_year), start=1):
        payments = by_year[calendar_year]

        principal_paid = sum((p.principal for p in payments), Decimal("0"))
        interest_paid = sum((p.interest for p in payments), Decimal("0"))
        total_paid = principal_paid + interest_paid

        if total_paid > 0:
            principal_percent = principal_paid / total_paid * 100
            interest_percent = interest_paid / total_paid * 100
        else:
            principal_percent = Decimal("0")
            interest_percent = Decimal("0")

        summaries.append(YearlySummary(
            year=index,
            calendar_year=calendar_year,
            principal_paid=principal_paid,
            interest_paid=interest_paid,
            total_paid=total_paid,
            ending_balance=payments[-1].remaining_balance,
            principal_percent=principal_percent,
            interest_percent=interest_percent,
        ))

    return summaries


def front_loaded_interest(schedule: AmortizationSchedule) -> FrontLoadedInterestAnalysis:
    """Compare interest paid in the first half of the payments against the second."""
    midpoint = len(schedule.payments) // 2

    first_half = sum((p.interest for p in schedule.payments[:midpoint]), Decimal("0"))
    second_half = sum((p.interest for p in schedule.payments[midpoint:]), Decimal("0"))

    summaries = yearly_summary(schedule)
    first_year = summaries[0].interest_paid if summaries else Decimal("0")
    last_year = summaries[-1].interest_paid if summaries else Decimal("0")

    return FrontLoadedInterestAnalysis(
        first_half_interest=first_half,
        second_half_interest=second_half,
        ratio=first_half / second_half if second_half > 0 else Decimal("Infinity"),
        first_year_interest=first_year,
        last_year_interest=last_year,
    )


def yearly_interest(schedule: AmortizationSchedule, year: int) -> Decimal:
    """Interest paid in a 1-based loan year, 0 outside the schedule."""
    summaries = yearly_summary(schedule)
    if 1 <= year <= len(summaries):
        return summaries[year - 1].interest_paid
    return Decimal("0")


def all_yearly_interest(schedule: AmortizationSchedule) -> list[Decimal]:
    return [s.interest_paid for s in yearly_summary(schedule)]
