from dataclasses import replace
from datetime import date
from decimal import Decimal

from mortgage_analyzer.engine.amortization import amortization_schedule, schedule_for_terms
from mortgage_analyzer.engine.tax_benefit import (
    calculate_tax_benefits,
    compare_deduction_methods,
    deductible_interest,
    effective_rate,
    itemization_comparison,
    overall_effective_rate,
    salt_deduction,
    tax_savings,
    total_itemized_deductions,
)
from mortgage_analyzer.models.tax import (
    DeductionMethod,
    FilingStatus,
    TaxBracket,
    TaxYearConfig,
)

CENT = Decimal("0.01")


class FlatTaxTables:
    """Every year has the same huge standard deduction and one 30% bracket."""

    def get_tax_year_config(self, year: int) -> TaxYearConfig:
        return TaxYearConfig(
            year=year,
            standard_deductions={s: Decimal("1000000") for s in FilingStatus},
            mortgage_debt_limit=Decimal("750000"),
            salt_cap=Decimal("10000"),
            brackets={s: (TaxBracket(Decimal("0"), None, Decimal("0.30")),) for s in FilingStatus},
        )

    def get_mortgage_deduction_limit(self, origination_date: date) -> Decimal:
        return Decimal("750000")

    def get_marginal_tax_rate(self, income, filing_status, year=None) -> Decimal:
        return Decimal("0.30")


class TestDeductibleInterest:
    def test_under_limit(self):
        assert deductible_interest(Decimal("20000"), Decimal("320000"), Decimal("750000")) == Decimal("20000")

    def test_at_limit(self):
        assert deductible_interest(Decimal("20000"), Decimal("750000"), Decimal("750000")) == Decimal("20000")

    def test_prorated_above_limit(self):
        # 750K / 800K of the interest qualifies
        result = deductible_interest(Decimal("30000"), Decimal("800000"), Decimal("750000"))
        assert result == Decimal("28125")


class TestItemizedDeductions:
    def test_salt_capped(self):
        assert salt_deduction(Decimal("50000"), Decimal("40000")) == Decimal("40000")
        assert salt_deduction(Decimal("15000"), Decimal("40000")) == Decimal("15000")

    def test_total(self):
        total, breakdown = total_itemized_deductions(
            Decimal("20000"), Decimal("15000"), Decimal("2000"), Decimal("500"), Decimal("40000")
        )
        assert total == Decimal("37500")
        assert breakdown.itemized_total == total
        assert breakdown.salt_deduction == Decimal("15000")

    def test_total_with_salt_over_cap(self):
        total, breakdown = total_itemized_deductions(
            Decimal("20000"), Decimal("60000"), Decimal("0"), Decimal("0"), Decimal("40000")
        )
        assert total == Decimal("60000")
        assert breakdown.salt_deduction == Decimal("40000")


class TestCompareDeductionMethods:
    def test_itemize_when_better(self):
        total, breakdown = total_itemized_deductions(
            Decimal("20000"), Decimal("15000"), Decimal("0"), Decimal("0"), Decimal("40000")
        )
        result = compare_deduction_methods(total, Decimal("30000"), breakdown)
        assert result.recommendation == DeductionMethod.ITEMIZE
        assert result.difference == Decimal("5000")
        assert result.standard_deduction == Decimal("30000")
        assert result.mortgage_interest == Decimal("20000")

    def test_tie_takes_standard(self):
        total, breakdown = total_itemized_deductions(
            Decimal("15000"), Decimal("15000"), Decimal("0"), Decimal("0"), Decimal("40000")
        )
        result = compare_deduction_methods(total, Decimal("30000"), breakdown)
        assert result.difference == 0
        assert result.recommendation == DeductionMethod.STANDARD

    def test_standard_when_better(self):
        total, breakdown = total_itemized_deductions(
            Decimal("5000"), Decimal("5000"), Decimal("0"), Decimal("0"), Decimal("40000")
        )
        result = compare_deduction_methods(total, Decimal("30000"), breakdown)
        assert result.difference == Decimal("-20000")
        assert result.recommendation == DeductionMethod.STANDARD


class TestTaxSavings:
    def test_only_excess_counts(self):
        assert tax_savings(Decimal("37500"), Decimal("30000"), Decimal("0.22")) == Decimal("1650")

    def test_no_savings_below_standard(self):
        assert tax_savings(Decimal("20000"), Decimal("30000"), Decimal("0.22")) == 0

    def test_effective_rate(self):
        assert effective_rate(Decimal("20000"), Decimal("4000"), Decimal("320000")) == Decimal("5")

    def test_effective_rate_zero_balance(self):
        assert effective_rate(Decimal("100"), Decimal("0"), Decimal("0")) == 0


class TestCalculateTaxBenefits:
    def test_one_entry_per_calendar_year(self, canonical_schedule, canonical_profile):
        summary = calculate_tax_benefits(canonical_schedule, Decimal("320000"), canonical_profile)
        assert len(summary.yearly_breakdown) == 31
        assert summary.yearly_breakdown[0].calendar_year == 2025
        assert summary.yearly_breakdown[0].year == 1

    def test_itemizes_early_then_stops(self, canonical_schedule, canonical_profile):
        summary = calculate_tax_benefits(canonical_schedule, Decimal("320000"), canonical_profile)
        first = summary.yearly_breakdown[0]
        assert first.should_itemize
        assert first.federal_tax_savings > 0
        assert summary.break_even_year is not None
        assert summary.break_even_year > 1
        assert not summary.yearly_breakdown[summary.break_even_year - 1].should_itemize
        assert summary.years_of_itemization > 0
        assert not summary.yearly_breakdown[-2].should_itemize

    def test_first_year_savings(self, canonical_schedule, canonical_profile):
        summary = calculate_tax_benefits(canonical_schedule, Decimal("320000"), canonical_profile)
        first = summary.yearly_breakdown[0]
        itemized = first.interest_paid + Decimal("15000") + Decimal("2000")
        assert first.total_itemized_deductions == itemized
        assert first.standard_deduction == Decimal("30000")
        assert first.marginal_tax_rate == Decimal("0.22")
        assert first.federal_tax_savings == (itemized - Decimal("30000")) * Decimal("0.22")
        assert first.state_tax_savings == first.interest_paid * Decimal("0.05")
        assert first.total_tax_savings == first.federal_tax_savings + first.state_tax_savings

    def test_net_cost_and_monthly(self, canonical_schedule, canonical_profile):
        summary = calculate_tax_benefits(canonical_schedule, Decimal("320000"), canonical_profile)
        first = summary.yearly_breakdown[0]
        assert first.net_cost_after_tax_benefit == first.gross_payments - first.total_tax_savings
        # 11 payments fall in the first calendar year
        assert first.effective_monthly_payment == first.net_cost_after_tax_benefit / 11
        second = summary.yearly_breakdown[1]
        assert second.effective_monthly_payment == second.net_cost_after_tax_benefit / 12

    def test_effective_rate_below_note_rate_when_itemizing(self, canonical_schedule, canonical_profile):
        summary = calculate_tax_benefits(canonical_schedule, Decimal("320000"), canonical_profile)
        second = summary.yearly_breakdown[1]
        assert second.should_itemize
        assert second.effective_interest_rate < Decimal("6.5")
        assert summary.first_year_effective_rate == summary.yearly_breakdown[0].effective_interest_rate

    def test_never_itemizes(self, canonical_schedule, standard_only_profile):
        summary = calculate_tax_benefits(canonical_schedule, Decimal("320000"), standard_only_profile)
        assert summary.years_of_itemization == 0
        assert summary.break_even_year is None
        assert summary.total_tax_savings == 0
        assert summary.total_net_interest_cost == summary.total_interest_paid
        for y in summary.yearly_breakdown:
            assert y.itemization_benefit == 0
            assert y.state_tax_savings == 0

    def test_tie_is_not_itemizing(self, canonical_profile):
        """Zero-interest loan with deductions exactly equal to the 2025 standard."""
        schedule = amortization_schedule(Decimal("12000"), Decimal("0"), 12, date(2025, 1, 1))
        profile = replace(
            canonical_profile,
            state_and_local_taxes=Decimal("20000"),
            charitable_contributions=Decimal("10000"),
        )
        summary = calculate_tax_benefits(schedule, Decimal("12000"), profile)
        first = summary.yearly_breakdown[0]
        assert first.total_itemized_deductions == first.standard_deduction
        assert not first.should_itemize
        assert first.federal_tax_savings == 0

    def test_totals(self, canonical_schedule, canonical_profile):
        summary = calculate_tax_benefits(canonical_schedule, Decimal("320000"), canonical_profile)
        assert abs(summary.total_interest_paid - canonical_schedule.total_interest) < CENT
        assert summary.total_tax_savings == sum(
            (y.total_tax_savings for y in summary.yearly_breakdown), Decimal("0")
        )
        assert summary.total_net_interest_cost == summary.total_interest_paid - summary.total_tax_savings
        assert summary.average_yearly_tax_savings == summary.total_tax_savings / 31
        assert summary.years_of_itemization == sum(
            1 for y in summary.yearly_breakdown if y.should_itemize
        )

    def test_marginal_rate_override(self, canonical_schedule, canonical_profile):
        profile = replace(canonical_profile, marginal_tax_rate_override=Decimal("0.32"))
        summary = calculate_tax_benefits(canonical_schedule, Decimal("320000"), profile)
        assert all(y.marginal_tax_rate == Decimal("0.32") for y in summary.yearly_breakdown)

    def test_jumbo_loan_prorated(self, canonical_profile):
        schedule = amortization_schedule(Decimal("1000000"), Decimal("6.5"), 360, date(2025, 1, 1))
        summary = calculate_tax_benefits(schedule, Decimal("1000000"), canonical_profile)
        first = summary.yearly_breakdown[0]
        assert first.deductible_interest == first.interest_paid * Decimal("0.75")

    def test_grandfathered_jumbo_loan(self, canonical_profile):
        schedule = amortization_schedule(Decimal("1000000"), Decimal("6.5"), 360, date(2017, 1, 1))
        profile = replace(canonical_profile, mortgage_origination_date=date(2017, 1, 1))
        summary = calculate_tax_benefits(schedule, Decimal("1000000"), profile)
        first = summary.yearly_breakdown[0]
        assert first.deductible_interest == first.interest_paid

    def test_custom_provider(self, canonical_schedule, canonical_profile):
        summary = calculate_tax_benefits(
            canonical_schedule, Decimal("320000"), canonical_profile, provider=FlatTaxTables()
        )
        assert summary.years_of_itemization == 0
        assert summary.yearly_breakdown[0].standard_deduction == Decimal("1000000")
        assert summary.yearly_breakdown[0].marginal_tax_rate == Decimal("0.30")

    def test_extra_payments_schedule(self, canonical_terms, canonical_profile):
        schedule = schedule_for_terms(canonical_terms, extra_monthly=Decimal("500"))
        summary = calculate_tax_benefits(schedule, Decimal("320000"), canonical_profile)
        assert len(summary.yearly_breakdown) < 31


class TestOverallEffectiveRate:
    def test_half_loan_approximation(self):
        rate = overall_effective_rate(Decimal("100000"), Decimal("10000"), Decimal("200000"), 10)
        assert rate == Decimal("9")

    def test_zero_years(self):
        assert overall_effective_rate(Decimal("100"), Decimal("0"), Decimal("1000"), 0) == 0

    def test_zero_loan(self):
        assert overall_effective_rate(Decimal("100"), Decimal("0"), Decimal("0"), 5) == 0

    def test_summary_uses_approximation(self, canonical_schedule, canonical_profile):
        summary = calculate_tax_benefits(canonical_schedule, Decimal("320000"), canonical_profile)
        expected = overall_effective_rate(
            summary.total_interest_paid, summary.total_tax_savings, Decimal("320000"), 31
        )
        assert summary.overall_effective_rate == expected


class TestItemizationComparison:
    def test_year_lookup(self, canonical_schedule, canonical_profile):
        summary = calculate_tax_benefits(canonical_schedule, Decimal("320000"), canonical_profile)
        comparison = itemization_comparison(summary, 1)
        first = summary.yearly_breakdown[0]
        assert comparison.recommendation == DeductionMethod.ITEMIZE
        assert comparison.itemized_total == first.total_itemized_deductions
        assert comparison.mortgage_interest == first.deductible_interest
        assert comparison.difference == first.itemization_benefit

    def test_unknown_year(self, canonical_schedule, canonical_profile):
        summary = calculate_tax_benefits(canonical_schedule, Decimal("320000"), canonical_profile)
        assert itemization_comparison(summary, 99) is None
