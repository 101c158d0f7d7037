"""Amortization schedule computation.

Pure functions: Decimal in, dataclass out. No I/O.
Start dates are always supplied by the caller so identical inputs give identical schedules.
"""

import calendar
from datetime import date
from decimal import Decimal

from mortgage_analyzer.engine.mortgage import monthly_payment, monthly_rate
from mortgage_analyzer.models.amortization import (
    AmortizationPayment,
    AmortizationSchedule,
    ScheduleComparison,
)
from mortgage_analyzer.models.loan import LoanTerms

PAYOFF_THRESHOLD = Decimal("0.01")  # Sub-cent residue counts as paid off


def add_months(start: date, months: int) -> date:
    """Shift a date by whole months, clamping the day to the target month's length."""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def amortization_schedule(
    principal: Decimal,
    annual_rate: Decimal,
    term_months: int,
    start_date: date,
) -> AmortizationSchedule:
    """Generate the full-term schedule for a fixed-rate loan.

    Args:
        principal: Loan amount
        annual_rate: Annual interest rate as a percentage (e.g. 6.5)
        term_months: Number of monthly payments
        start_date: Origination date; payment i is dated start_date + i months
    """
    pmt = monthly_payment(principal, annual_rate, term_months)
    r = monthly_rate(annual_rate)

    payments: list[AmortizationPayment] = []
    balance = principal
    cumulative_principal = Decimal("0")
    cumulative_interest = Decimal("0")

    for period in range(1, term_months + 1):
        interest = balance * r
        principal_paid = pmt - interest

        # Final payment adjustment: never pay down more than is owed, and clear
        # any rounding residue on the last payment
        if principal_paid > balance or period == term_months:
            principal_paid = balance
            actual_payment = interest + principal_paid
        else:
            actual_payment = pmt

        balance -= principal_paid
        cumulative_principal += principal_paid
        cumulative_interest += interest

        payments.append(AmortizationPayment(
            payment_number=period,
            payment_date=add_months(start_date, period),
            payment=actual_payment,
            principal=principal_paid,
            interest=interest,
            remaining_balance=max(Decimal("0"), balance),
            cumulative_principal=cumulative_principal,
            cumulative_interest=cumulative_interest,
        ))

    return AmortizationSchedule(
        payments=tuple(payments),
        total_principal=principal,
        total_interest=cumulative_interest,
        total_payments=sum((p.payment for p in payments), Decimal("0")),
        monthly_payment=pmt,
    )


def amortization_with_extra_payments(
    principal: Decimal,
    annual_rate: Decimal,
    term_months: int,
    start_date: date,
    extra_monthly: Decimal = Decimal("0"),
    extra_yearly: Decimal = Decimal("0"),
    extra_yearly_month: int = 12,
) -> AmortizationSchedule:
    """Schedule with recurring extra principal and an annual lump sum.

    The base payment is still the full-term payment; extras shorten the loan.
    Stops once the balance is within a cent of zero.

    Args:
        extra_monthly: Added to principal every month
        extra_yearly: Lump sum applied once a year
        extra_yearly_month: Calendar month (1-12) of the period that carries the lump
            sum; that payment is dated the following month
    """
    base_payment = monthly_payment(principal, annual_rate, term_months)
    r = monthly_rate(annual_rate)

    payments: list[AmortizationPayment] = []
    balance = principal
    cumulative_principal = Decimal("0")
    cumulative_interest = Decimal("0")

    period = 0
    while balance > PAYOFF_THRESHOLD and period < term_months:
        period += 1

        interest = balance * r
        principal_paid = base_payment - interest + extra_monthly

        # Calendar month in which this payment period begins
        current_month = (start_date.month - 1 + period - 1) % 12 + 1
        if current_month == extra_yearly_month and extra_yearly > 0:
            principal_paid += extra_yearly

        principal_paid = min(principal_paid, balance)
        total_payment = interest + principal_paid

        balance -= principal_paid
        cumulative_principal += principal_paid
        cumulative_interest += interest

        payments.append(AmortizationPayment(
            payment_number=period,
            payment_date=add_months(start_date, period),
            payment=total_payment,
            principal=principal_paid,
            interest=interest,
            remaining_balance=max(Decimal("0"), balance),
            cumulative_principal=cumulative_principal,
            cumulative_interest=cumulative_interest,
        ))

    return AmortizationSchedule(
        payments=tuple(payments),
        total_principal=principal,
        total_interest=cumulative_interest,
        total_payments=sum((p.payment for p in payments), Decimal("0")),
        monthly_payment=base_payment,
    )


def schedule_for_terms(
    terms: LoanTerms,
    extra_monthly: Decimal = Decimal("0"),
    extra_yearly: Decimal = Decimal("0"),
    extra_yearly_month: int = 12,
) -> AmortizationSchedule:
    """Standard schedule, or the early-payoff variant when any extra is given."""
    if extra_monthly > 0 or extra_yearly > 0:
        return amortization_with_extra_payments(
            terms.principal,
            terms.annual_rate,
            terms.term_months,
            terms.start_date,
            extra_monthly=extra_monthly,
            extra_yearly=extra_yearly,
            extra_yearly_month=extra_yearly_month,
        )
    return amortization_schedule(
        terms.principal, terms.annual_rate, terms.term_months, terms.start_date
    )


def compare_schedules(
    original: AmortizationSchedule,
    modified: AmortizationSchedule,
) -> ScheduleComparison:
    """What the modified schedule saves relative to the original."""
    return ScheduleComparison(
        months_saved=len(original.payments) - len(modified.payments),
        interest_saved=original.total_interest - modified.total_interest,
        total_saved=original.total_payments - modified.total_payments,
    )
