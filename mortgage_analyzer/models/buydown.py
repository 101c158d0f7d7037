from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class BuydownInputs:
    loan_amount: Decimal
    base_interest_rate: Decimal  # Annual, percentage
    loan_term_months: int
    number_of_points: Decimal = Decimal("0")  # 1 point = 1% of the loan
    rate_reduction_per_point: Decimal = Decimal("0.25")  # Percentage points
    is_refinance: bool = False  # Refinance points are deducted over the term
    expected_ownership_years: int = 7
    marginal_tax_rate: Decimal = Decimal("0.24")


@dataclass(frozen=True)
class PointsTaxDeduction:
    first_year_deduction: Decimal
    total_deduction: Decimal
    deduction_per_year: Decimal


@dataclass(frozen=True)
class BuydownScenario:
    number_of_points: Decimal

    # Costs
    points_cost_dollars: Decimal
    points_cost_percent: Decimal

    # Rates
    original_rate: Decimal
    bought_down_rate: Decimal
    rate_reduction: Decimal

    # Monthly payments
    original_monthly_payment: Decimal
    bought_down_monthly_payment: Decimal
    monthly_savings: Decimal

    # Break-even; Infinity when the points never pay off
    break_even_months: Decimal
    break_even_years: Decimal

    # Lifetime
    total_interest_without_points: Decimal
    total_interest_with_points: Decimal
    interest_savings: Decimal
    total_cost_without_points: Decimal  # Principal + interest
    total_cost_with_points: Decimal  # Principal + interest + points
    net_savings_over_life: Decimal

    # Tax
    tax_deductible_amount: Decimal
    effective_cost_after_tax: Decimal
    adjusted_break_even_months: Decimal


@dataclass(frozen=True)
class BuydownComparison:
    scenarios: tuple[BuydownScenario, ...]
    optimal_scenario: BuydownScenario
    recommendation: str
