"""Rate buydown routes."""

from decimal import Decimal

from fastapi import APIRouter

from mortgage_analyzer.api.schemas import (
    BuydownRequest,
    BuydownResponse,
    BuydownScenarioResponse,
)
from mortgage_analyzer.engine.buydown import build_comparison, build_scenario, scenario_timeline
from mortgage_analyzer.models.buydown import BuydownInputs, BuydownScenario

router = APIRouter(prefix="/api/v1", tags=["buydown"])


def _finite(value: Decimal) -> Decimal | None:
    return value if value.is_finite() else None


def _scenario_response(s: BuydownScenario) -> BuydownScenarioResponse:
    return BuydownScenarioResponse(
        number_of_points=s.number_of_points,
        points_cost_dollars=s.points_cost_dollars,
        points_cost_percent=s.points_cost_percent,
        original_rate=s.original_rate,
        bought_down_rate=s.bought_down_rate,
        rate_reduction=s.rate_reduction,
        original_monthly_payment=s.original_monthly_payment,
        bought_down_monthly_payment=s.bought_down_monthly_payment,
        monthly_savings=s.monthly_savings,
        break_even_months=_finite(s.break_even_months),
        break_even_years=_finite(s.break_even_years),
        total_interest_without_points=s.total_interest_without_points,
        total_interest_with_points=s.total_interest_with_points,
        interest_savings=s.interest_savings,
        total_cost_without_points=s.total_cost_without_points,
        total_cost_with_points=s.total_cost_with_points,
        net_savings_over_life=s.net_savings_over_life,
        tax_deductible_amount=s.tax_deductible_amount,
        effective_cost_after_tax=s.effective_cost_after_tax,
        adjusted_break_even_months=_finite(s.adjusted_break_even_months),
    )


@router.post("/buydown", response_model=BuydownResponse)
async def buydown(req: BuydownRequest):
    """Compare discount point levels and pick the best for the ownership period."""
    inputs = BuydownInputs(
        loan_amount=req.loan_amount,
        base_interest_rate=req.base_interest_rate,
        loan_term_months=req.loan_term_months,
        number_of_points=req.number_of_points,
        rate_reduction_per_point=req.rate_reduction_per_point,
        is_refinance=req.is_refinance,
        expected_ownership_years=req.expected_ownership_years,
        marginal_tax_rate=req.marginal_tax_rate,
    )

    selected = build_scenario(inputs)
    comparison = build_comparison(inputs, req.points_options)

    return BuydownResponse(
        selected_scenario=_scenario_response(selected),
        scenarios=[_scenario_response(s) for s in comparison.scenarios],
        optimal_scenario=_scenario_response(comparison.optimal_scenario),
        recommendation=comparison.recommendation,
        timeline=scenario_timeline(list(comparison.scenarios), max_years=req.timeline_years),
    )
