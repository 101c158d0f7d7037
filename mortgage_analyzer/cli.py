"""CLI for a full mortgage analysis report.

Usage:
    python -m mortgage_analyzer.cli 320000 6.5 --home-price 400000 --start 2025-01-01
    python -m mortgage_analyzer.cli 320000 6.5 --extra-monthly 200 --extra-yearly 5000 --points 2
    python -m mortgage_analyzer.cli 640000 7.0 --income 250000 --filing-status single --refinance
"""

import argparse
import logging
from datetime import date
from decimal import Decimal

from mortgage_analyzer.config import settings
from mortgage_analyzer.engine.amortization import compare_schedules, schedule_for_terms
from mortgage_analyzer.engine.buydown import build_comparison, build_scenario
from mortgage_analyzer.engine.mortgage import calculate_mortgage_results
from mortgage_analyzer.engine.tax_benefit import calculate_tax_benefits, itemization_comparison
from mortgage_analyzer.engine.yearly import front_loaded_interest
from mortgage_analyzer.models.buydown import BuydownInputs
from mortgage_analyzer.models.loan import MortgageInputs
from mortgage_analyzer.models.tax import FilingStatus, TaxProfile

logger = logging.getLogger(__name__)


def _money(value: Decimal) -> str:
    if not value.is_finite():
        return "Never"
    return f"${value:,.2f}"


def print_payment(results) -> None:
    print(f"\n{'=' * 60}")
    print("  Monthly Payment")
    print(f"{'=' * 60}")
    print(f"  Principal & interest: {_money(results.monthly_principal_and_interest)}")
    print(f"  Property tax:         {_money(results.monthly_property_tax)}")
    print(f"  Insurance:            {_money(results.monthly_insurance)}")
    print(f"  HOA:                  {_money(results.monthly_hoa)}")
    print(f"  PMI:                  {_money(results.monthly_pmi)}")
    print(f"  Total:                {_money(results.total_monthly_payment)}")
    print(f"  LTV:                  {results.loan_to_value_ratio:.1%}")
    if results.pmi_drop_off_month is not None:
        print(f"  PMI drops off:        month {results.pmi_drop_off_month}")
    print(f"  Total interest:       {_money(results.total_interest_paid)}")
    print()


def print_schedule(schedule, baseline) -> None:
    front = front_loaded_interest(schedule)
    print(f"{'=' * 60}")
    print("  Amortization")
    print(f"{'=' * 60}")
    print(f"  Payments:             {schedule.payoff_months}")
    print(f"  Total interest:       {_money(schedule.total_interest)}")
    print(f"  First-half interest:  {_money(front.first_half_interest)}")
    print(f"  Second-half interest: {_money(front.second_half_interest)}")
    if schedule is not baseline:
        saved = compare_schedules(baseline, schedule)
        print(f"  Months saved:         {saved.months_saved}")
        print(f"  Interest saved:       {_money(saved.interest_saved)}")
    print()


def print_tax(summary) -> None:
    print(f"{'=' * 60}")
    print("  Tax Benefit")
    print(f"{'=' * 60}")
    for y in summary.yearly_breakdown[:5]:
        method = "itemize " if y.should_itemize else "standard"
        print(
            f"  {y.calendar_year}  {method}  interest {_money(y.interest_paid):>12}"
            f"  saved {_money(y.total_tax_savings):>10}  eff. rate {y.effective_interest_rate:.2f}%"
        )
    first = itemization_comparison(summary, 1)
    if first is not None:
        print(
            f"  Year 1 deductions:    itemized {_money(first.itemized_total)}"
            f" vs standard {_money(first.standard_deduction)} -> {first.recommendation.value}"
        )
    print(f"  Total tax savings:    {_money(summary.total_tax_savings)}")
    print(f"  Years itemizing:      {summary.years_of_itemization}")
    if summary.break_even_year is not None:
        print(f"  Stops itemizing:      loan year {summary.break_even_year}")
    print()


def print_buydown(comparison, selected) -> None:
    print(f"{'=' * 60}")
    print("  Rate Buydown")
    print(f"{'=' * 60}")
    print(f"  Selected:             {selected.number_of_points} pts, after-tax cost {_money(selected.effective_cost_after_tax)}")
    for s in comparison.scenarios:
        months = "never" if s.break_even_months.is_infinite() else f"{s.break_even_months:.0f} mo"
        print(
            f"  {s.number_of_points:>4} pts  rate {s.bought_down_rate:.3f}%"
            f"  cost {_money(s.points_cost_dollars):>12}  saves {_money(s.monthly_savings):>9}/mo"
            f"  break-even {months}"
        )
    print(f"\n  {comparison.recommendation}")
    print()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Mortgage analysis report")
    parser.add_argument("loan_amount", type=Decimal, help="Loan amount")
    parser.add_argument("rate", type=Decimal, help="Annual interest rate as a percentage, e.g. 6.5")
    parser.add_argument("--term-months", type=int, default=360, help="Loan term in months (default: 360)")
    parser.add_argument("--home-price", type=Decimal, help="Home price (default: loan amount / 0.8)")
    parser.add_argument("--start", type=date.fromisoformat, default=None, help="Loan start date, YYYY-MM-DD (default: today)")
    parser.add_argument("--extra-monthly", type=Decimal, default=Decimal("0"), help="Extra principal every month")
    parser.add_argument("--extra-yearly", type=Decimal, default=Decimal("0"), help="Extra principal once a year")
    parser.add_argument("--extra-yearly-month", type=int, default=12, choices=range(1, 13), help="Month for the yearly extra")
    parser.add_argument("--income", type=Decimal, default=Decimal("150000"), help="Annual household income")
    parser.add_argument(
        "--filing-status",
        choices=[s.value for s in FilingStatus],
        default=FilingStatus.MFJ.value,
        help="Federal filing status",
    )
    parser.add_argument("--state-tax-rate", type=Decimal, default=Decimal("0.05"), help="State income tax rate as a decimal")
    parser.add_argument("--salt", type=Decimal, default=Decimal("15000"), help="State and local taxes paid")
    parser.add_argument("--charitable", type=Decimal, default=Decimal("2000"), help="Charitable contributions")
    parser.add_argument("--points", type=Decimal, default=Decimal("1"), help="Discount points to report in detail (default: 1)")
    parser.add_argument("--ownership-years", type=int, default=settings.default_ownership_years, help="Expected years in the home")
    parser.add_argument("--refinance", action="store_true", help="Treat points as refinance points")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=settings.log_level)

    start = args.start or date.today()
    home_price = args.home_price or args.loan_amount / Decimal("0.8")
    logger.debug("Analyzing %s at %s%% from %s", args.loan_amount, args.rate, start)

    inputs = MortgageInputs(
        home_price=home_price,
        down_payment=home_price - args.loan_amount,
        loan_amount=args.loan_amount,
        interest_rate=args.rate,
        loan_term_months=args.term_months,
        start_date=start,
    )
    print_payment(calculate_mortgage_results(inputs))

    baseline = schedule_for_terms(inputs.terms)
    schedule = baseline
    if args.extra_monthly > 0 or args.extra_yearly > 0:
        schedule = schedule_for_terms(
            inputs.terms,
            extra_monthly=args.extra_monthly,
            extra_yearly=args.extra_yearly,
            extra_yearly_month=args.extra_yearly_month,
        )
    print_schedule(schedule, baseline)

    profile = TaxProfile(
        filing_status=FilingStatus(args.filing_status),
        annual_income=args.income,
        state_tax_rate=args.state_tax_rate,
        state_and_local_taxes=args.salt,
        charitable_contributions=args.charitable,
        other_itemized_deductions=Decimal("0"),
        mortgage_origination_date=start,
    )
    print_tax(calculate_tax_benefits(schedule, args.loan_amount, profile))

    buydown_inputs = BuydownInputs(
        loan_amount=args.loan_amount,
        base_interest_rate=args.rate,
        loan_term_months=args.term_months,
        number_of_points=args.points,
        rate_reduction_per_point=settings.default_rate_reduction_per_point,
        is_refinance=args.refinance,
        expected_ownership_years=args.ownership_years,
        marginal_tax_rate=settings.default_marginal_tax_rate,
    )
    print_buydown(build_comparison(buydown_inputs), build_scenario(buydown_inputs))


if __name__ == "__main__":
    main()
