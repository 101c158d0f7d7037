"""Rate buydown (discount points) analysis.

One scenario per point level, break-even timing, tax treatment of points, and
the optimal choice for an expected ownership period.

Pure functions. No I/O.
"""

from dataclasses import replace
from decimal import Decimal, ROUND_HALF_UP

from mortgage_analyzer.config import settings
from mortgage_analyzer.engine.mortgage import monthly_payment, total_interest
from mortgage_analyzer.models.buydown import (
    BuydownComparison,
    BuydownInputs,
    BuydownScenario,
    PointsTaxDeduction,
)

INFINITY = Decimal("Infinity")


def points_cost(loan_amount: Decimal, number_of_points: Decimal) -> Decimal:
    """1 point = 1% of the loan amount."""
    return loan_amount * (number_of_points / 100)


def bought_down_rate(
    base_rate: Decimal,
    number_of_points: Decimal,
    rate_reduction_per_point: Decimal = Decimal("0.25"),
) -> Decimal:
    return max(Decimal("0"), base_rate - number_of_points * rate_reduction_per_point)


def break_even_months(cost: Decimal, monthly_savings: Decimal) -> Decimal:
    """Months of savings needed to recover the cost; Infinity if there are no savings."""
    if monthly_savings <= 0:
        return INFINITY
    return cost / monthly_savings


def points_tax_deduction(
    cost: Decimal,
    is_refinance: bool,
    loan_term_years: Decimal,
) -> PointsTaxDeduction:
    """Deduction schedule for points (IRS Pub 936).

    Purchase points are deductible in full in the year paid. Refinance points
    are deducted ratably over the life of the loan.
    """
    if not is_refinance:
        return PointsTaxDeduction(
            first_year_deduction=cost,
            total_deduction=cost,
            deduction_per_year=cost,
        )

    per_year = cost / loan_term_years
    return PointsTaxDeduction(
        first_year_deduction=per_year,
        total_deduction=cost,
        deduction_per_year=per_year,
    )


def effective_points_cost(
    cost: Decimal,
    tax_deductible_amount: Decimal,
    marginal_tax_rate: Decimal,
) -> Decimal:
    """Points cost net of the tax saved by deducting them."""
    return cost - tax_deductible_amount * marginal_tax_rate


def build_scenario(inputs: BuydownInputs) -> BuydownScenario:
    """Compute every metric for one point level."""
    cost = points_cost(inputs.loan_amount, inputs.number_of_points)

    new_rate = bought_down_rate(
        inputs.base_interest_rate,
        inputs.number_of_points,
        inputs.rate_reduction_per_point,
    )

    original_payment = monthly_payment(
        inputs.loan_amount, inputs.base_interest_rate, inputs.loan_term_months
    )
    new_payment = monthly_payment(inputs.loan_amount, new_rate, inputs.loan_term_months)
    savings = original_payment - new_payment

    be_months = break_even_months(cost, savings)

    interest_without = total_interest(inputs.loan_amount, original_payment, inputs.loan_term_months)
    interest_with = total_interest(inputs.loan_amount, new_payment, inputs.loan_term_months)

    cost_without = inputs.loan_amount + interest_without
    cost_with = inputs.loan_amount + interest_with + cost

    term_years = Decimal(inputs.loan_term_months) / 12
    deduction = points_tax_deduction(cost, inputs.is_refinance, term_years)
    after_tax_cost = effective_points_cost(
        cost, deduction.first_year_deduction, inputs.marginal_tax_rate
    )

    return BuydownScenario(
        number_of_points=inputs.number_of_points,
        points_cost_dollars=cost,
        points_cost_percent=inputs.number_of_points,
        original_rate=inputs.base_interest_rate,
        bought_down_rate=new_rate,
        rate_reduction=inputs.base_interest_rate - new_rate,
        original_monthly_payment=original_payment,
        bought_down_monthly_payment=new_payment,
        monthly_savings=savings,
        break_even_months=be_months,
        break_even_years=be_months / 12,
        total_interest_without_points=interest_without,
        total_interest_with_points=interest_with,
        interest_savings=interest_without - interest_with,
        total_cost_without_points=cost_without,
        total_cost_with_points=cost_with,
        net_savings_over_life=cost_without - cost_with,
        tax_deductible_amount=deduction.first_year_deduction,
        effective_cost_after_tax=after_tax_cost,
        adjusted_break_even_months=break_even_months(after_tax_cost, savings),
    )


def net_value_at_month(scenario: BuydownScenario, month: int) -> Decimal:
    """Cumulative payment savings minus the points cost after a number of months."""
    return scenario.monthly_savings * month - scenario.points_cost_dollars


def find_optimal_scenario(
    scenarios: list[BuydownScenario],
    ownership_years: int,
) -> BuydownScenario:
    """Scenario with the highest net value at the end of the ownership period.

    Ties keep the earlier scenario.
    """
    ownership_months = ownership_years * 12
    best = scenarios[0]
    best_value = -INFINITY

    for scenario in scenarios:
        value = net_value_at_month(scenario, ownership_months)
        if value > best_value:
            best_value = value
            best = scenario

    return best


def _points_label(points: Decimal) -> str:
    return f"{points.normalize():f}"


def generate_recommendation(optimal: BuydownScenario, ownership_years: int) -> str:
    if optimal.number_of_points == 0:
        return (
            f"Based on your {ownership_years}-year ownership plan, paying no points is optimal. "
            "The break-even period for buying points exceeds your expected stay."
        )

    points = _points_label(optimal.number_of_points)
    plural = "" if optimal.number_of_points == 1 else "s"

    if optimal.break_even_years.is_infinite():
        return (
            f"Buying {points} point{plural} is the best of the options for your "
            f"{ownership_years}-year plan, but it never breaks even."
        )

    years_of_savings = ownership_years - optimal.break_even_years
    if years_of_savings <= 0:
        return (
            f"Buying {points} point{plural} is the best of the options for your "
            f"{ownership_years}-year plan, but it only breaks even after "
            f"{optimal.break_even_years:.1f} years."
        )

    projected = (optimal.monthly_savings * years_of_savings * 12).quantize(
        Decimal("1"), ROUND_HALF_UP
    )

    return (
        f"Buying {points} point{plural} is optimal for your {ownership_years}-year plan. "
        f"You'll break even in {optimal.break_even_years:.1f} years and save approximately "
        f"${int(projected):,} beyond that."
    )


def build_comparison(
    base_inputs: BuydownInputs,
    points_options: list[Decimal] | None = None,
) -> BuydownComparison:
    """Scenario per point level, the best one for the ownership period, and a summary.

    base_inputs.number_of_points is ignored; each option replaces it.
    """
    options = points_options if points_options is not None else settings.default_points_options

    scenarios = [
        build_scenario(replace(base_inputs, number_of_points=Decimal(str(points))))
        for points in options
    ]

    optimal = find_optimal_scenario(scenarios, base_inputs.expected_ownership_years)

    return BuydownComparison(
        scenarios=tuple(scenarios),
        optimal_scenario=optimal,
        recommendation=generate_recommendation(optimal, base_inputs.expected_ownership_years),
    )


def scenario_timeline(
    scenarios: list[BuydownScenario],
    max_years: int = 30,
) -> list[dict[str, Decimal | int]]:
    """Net value of every scenario at each whole year, keyed "<n> points"."""
    timeline: list[dict[str, Decimal | int]] = []
    for year in range(max_years + 1):
        row: dict[str, Decimal | int] = {"year": year}
        for scenario in scenarios:
            row[f"{_points_label(scenario.number_of_points)} points"] = net_value_at_month(
                scenario, year * 12
            )
        timeline.append(row)
    return timeline
