"""Mortgage interest deduction: itemized vs standard, year by year.

Computes the after-tax cost of a mortgage from its amortization schedule and the
borrower's tax profile. Tax tables come from a TaxTableProvider.

Pure functions: dataclasses in, dataclasses out. No I/O.
"""

from collections import Counter
from decimal import Decimal

from mortgage_analyzer.data.base import TaxTableProvider
from mortgage_analyzer.data.tax_tables import default_provider
from mortgage_analyzer.engine.yearly import yearly_summary
from mortgage_analyzer.models.amortization import AmortizationSchedule
from mortgage_analyzer.models.tax import (
    DeductionMethod,
    ItemizationComparison,
    TaxBenefitSummary,
    TaxProfile,
    YearlyTaxBenefit,
)


def deductible_interest(
    interest_paid: Decimal,
    loan_amount: Decimal,
    loan_limit: Decimal,
) -> Decimal:
    """Interest deductible under the acquisition debt limit.

    Loans above the limit deduct the qualifying share, prorated on the original
    loan amount rather than the average balance.
    """
    if loan_amount <= loan_limit:
        return interest_paid
    return interest_paid * (loan_limit / loan_amount)


def salt_deduction(state_and_local_taxes: Decimal, salt_cap: Decimal) -> Decimal:
    return min(state_and_local_taxes, salt_cap)


def total_itemized_deductions(
    mortgage_interest: Decimal,
    state_and_local_taxes: Decimal,
    charitable_contributions: Decimal,
    other_deductions: Decimal,
    salt_cap: Decimal,
) -> tuple[Decimal, ItemizationComparison]:
    """Sum Schedule A deductions.

    The returned breakdown has no standard deduction yet; pass it through
    compare_deduction_methods to fill that in.
    """
    capped_salt = salt_deduction(state_and_local_taxes, salt_cap)
    total = mortgage_interest + capped_salt + charitable_contributions + other_deductions

    breakdown = ItemizationComparison(
        standard_deduction=Decimal("0"),
        itemized_total=total,
        mortgage_interest=mortgage_interest,
        salt_deduction=capped_salt,
        charitable_contributions=charitable_contributions,
        other_deductions=other_deductions,
        difference=Decimal("0"),
        recommendation=DeductionMethod.STANDARD,
    )
    return total, breakdown


def compare_deduction_methods(
    itemized_total: Decimal,
    standard_deduction: Decimal,
    breakdown: ItemizationComparison,
) -> ItemizationComparison:
    """Itemize only when strictly better; a tie goes to the standard deduction."""
    difference = itemized_total - standard_deduction
    return ItemizationComparison(
        standard_deduction=standard_deduction,
        itemized_total=itemized_total,
        mortgage_interest=breakdown.mortgage_interest,
        salt_deduction=breakdown.salt_deduction,
        charitable_contributions=breakdown.charitable_contributions,
        other_deductions=breakdown.other_deductions,
        difference=difference,
        recommendation=DeductionMethod.ITEMIZE if difference > 0 else DeductionMethod.STANDARD,
    )


def tax_savings(
    itemized_total: Decimal,
    standard_deduction: Decimal,
    marginal_rate: Decimal,
) -> Decimal:
    """Federal tax saved by itemizing. Only the excess over the standard deduction counts."""
    benefit = max(Decimal("0"), itemized_total - standard_deduction)
    return benefit * marginal_rate


def effective_rate(
    gross_interest: Decimal,
    savings: Decimal,
    average_balance: Decimal,
) -> Decimal:
    """After-tax interest as a percentage of the average balance."""
    if average_balance <= 0:
        return Decimal("0")
    return (gross_interest - savings) / average_balance * 100


def calculate_tax_benefits(
    schedule: AmortizationSchedule,
    loan_amount: Decimal,
    profile: TaxProfile,
    provider: TaxTableProvider | None = None,
) -> TaxBenefitSummary:
    """Year-by-year itemization decision and after-tax cost for a schedule.

    Args:
        schedule: Amortization schedule (standard or with extra payments)
        loan_amount: Original loan amount, used for debt-limit proration
        profile: Borrower tax profile
        provider: Tax tables; the packaged tables when omitted
    """
    tables = provider or default_provider
    summaries = yearly_summary(schedule)
    loan_limit = tables.get_mortgage_deduction_limit(profile.mortgage_origination_date)
    payments_per_year = Counter(p.payment_date.year for p in schedule.payments)

    breakdown: list[YearlyTaxBenefit] = []
    break_even_year: int | None = None
    years_of_itemization = 0

    for i, year_summary in enumerate(summaries):
        tax_year = year_summary.calendar_year
        config = tables.get_tax_year_config(tax_year)

        year_deductible = deductible_interest(
            year_summary.interest_paid, loan_amount, loan_limit
        )

        if profile.marginal_tax_rate_override is not None:
            marginal_rate = profile.marginal_tax_rate_override
        else:
            marginal_rate = tables.get_marginal_tax_rate(
                profile.annual_income, profile.filing_status, tax_year
            )

        itemized_total, items = total_itemized_deductions(
            year_deductible,
            profile.state_and_local_taxes,
            profile.charitable_contributions,
            profile.other_itemized_deductions,
            config.salt_cap,
        )
        standard = config.standard_deductions[profile.filing_status]

        comparison = compare_deduction_methods(itemized_total, standard, items)
        should_itemize = comparison.recommendation == DeductionMethod.ITEMIZE
        itemization_benefit = max(Decimal("0"), comparison.difference)

        federal_savings = tax_savings(itemized_total, standard, marginal_rate)
        # Most states allow the full mortgage interest deduction
        state_savings = year_deductible * profile.state_tax_rate if should_itemize else Decimal("0")
        total_savings = federal_savings + state_savings

        if should_itemize:
            years_of_itemization += 1
        elif break_even_year is None and years_of_itemization > 0:
            break_even_year = i + 1

        net_cost = year_summary.total_paid - total_savings

        start_balance = loan_amount if i == 0 else summaries[i - 1].ending_balance
        average_balance = (start_balance + year_summary.ending_balance) / 2

        months = payments_per_year[tax_year]

        breakdown.append(YearlyTaxBenefit(
            year=year_summary.year,
            calendar_year=tax_year,
            interest_paid=year_summary.interest_paid,
            deductible_interest=year_deductible,
            total_itemized_deductions=itemized_total,
            standard_deduction=standard,
            should_itemize=should_itemize,
            itemization_benefit=itemization_benefit,
            marginal_tax_rate=marginal_rate,
            federal_tax_savings=federal_savings,
            state_tax_savings=state_savings,
            total_tax_savings=total_savings,
            gross_payments=year_summary.total_paid,
            net_cost_after_tax_benefit=net_cost,
            effective_monthly_payment=net_cost / months if months > 0 else Decimal("0"),
            effective_interest_rate=effective_rate(
                year_summary.interest_paid,
                federal_savings if should_itemize else Decimal("0"),
                average_balance,
            ),
        ))

    total_interest = sum((y.interest_paid for y in breakdown), Decimal("0"))
    total_savings = sum((y.total_tax_savings for y in breakdown), Decimal("0"))

    return TaxBenefitSummary(
        yearly_breakdown=tuple(breakdown),
        total_interest_paid=total_interest,
        total_tax_savings=total_savings,
        total_net_interest_cost=total_interest - total_savings,
        break_even_year=break_even_year,
        years_of_itemization=years_of_itemization,
        average_yearly_tax_savings=(
            total_savings / len(breakdown) if breakdown else Decimal("0")
        ),
        overall_effective_rate=overall_effective_rate(
            total_interest, total_savings, loan_amount, len(breakdown)
        ),
        first_year_effective_rate=(
            breakdown[0].effective_interest_rate if breakdown else Decimal("0")
        ),
    )


def overall_effective_rate(
    total_interest: Decimal,
    total_savings: Decimal,
    loan_amount: Decimal,
    years: int,
) -> Decimal:
    """Lifetime after-tax rate, approximating the average balance as half the loan.

    This is a flat approximation, not a balance-weighted average.
    """
    average_balance = loan_amount / 2
    if years == 0 or average_balance <= 0:
        return Decimal("0")
    return (total_interest - total_savings) / average_balance / years * 100


def itemization_comparison(summary: TaxBenefitSummary, year: int) -> ItemizationComparison | None:
    """Itemized vs standard for one loan year of a computed summary.

    The per-line SALT/charitable/other split is not retained in the summary and
    is reported as zero.
    """
    year_data = next((y for y in summary.yearly_breakdown if y.year == year), None)
    if year_data is None:
        return None

    return ItemizationComparison(
        standard_deduction=year_data.standard_deduction,
        itemized_total=year_data.total_itemized_deductions,
        mortgage_interest=year_data.deductible_interest,
        salt_deduction=Decimal("0"),
        charitable_contributions=Decimal("0"),
        other_deductions=Decimal("0"),
        difference=year_data.itemization_benefit,
        recommendation=(
            DeductionMethod.ITEMIZE if year_data.should_itemize else DeductionMethod.STANDARD
        ),
    )
