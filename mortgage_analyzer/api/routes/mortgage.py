"""Payment and amortization routes."""

import logging

from fastapi import APIRouter, HTTPException

from mortgage_analyzer.api.schemas import (
    FrontLoadedInterestResponse,
    MortgageRequest,
    MortgageResponse,
    MortgageResultsResponse,
    PaymentBreakdownResponse,
    PaymentResponse,
    ScheduleComparisonResponse,
    ScheduleRequest,
    ScheduleResponse,
    YearlySummaryResponse,
)
from mortgage_analyzer.engine.amortization import (
    amortization_schedule,
    compare_schedules,
    schedule_for_terms,
)
from mortgage_analyzer.engine.mortgage import calculate_mortgage_results, payment_breakdown
from mortgage_analyzer.engine.yearly import front_loaded_interest, yearly_summary
from mortgage_analyzer.models.amortization import AmortizationSchedule
from mortgage_analyzer.models.loan import LoanTerms, MortgageInputs

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["mortgage"])


def _build_inputs(req: MortgageRequest) -> MortgageInputs:
    loan_amount = req.loan_amount
    if loan_amount is None:
        loan_amount = req.home_price - req.down_payment
        if loan_amount <= 0:
            raise HTTPException(
                status_code=400,
                detail="Down payment covers the home price; there is no loan to analyze.",
            )

    return MortgageInputs(
        home_price=req.home_price,
        down_payment=req.down_payment,
        loan_amount=loan_amount,
        interest_rate=req.interest_rate,
        loan_term_months=req.loan_term_months,
        start_date=req.start_date,
        property_tax_rate=req.property_tax_rate,
        home_insurance=req.home_insurance,
        hoa_fees=req.hoa_fees,
        pmi_rate=req.pmi_rate,
    )


def terms_from_request(req: ScheduleRequest) -> LoanTerms:
    return LoanTerms(
        principal=req.principal,
        annual_rate=req.annual_rate,
        term_months=req.term_months,
        start_date=req.start_date,
    )


def schedule_from_request(req: ScheduleRequest) -> AmortizationSchedule:
    return schedule_for_terms(
        terms_from_request(req),
        extra_monthly=req.extra_monthly,
        extra_yearly=req.extra_yearly,
        extra_yearly_month=req.extra_yearly_month,
    )


@router.post("/mortgage", response_model=MortgageResponse)
async def mortgage(req: MortgageRequest):
    """Monthly housing cost, PMI timing and loan totals."""
    inputs = _build_inputs(req)
    results = calculate_mortgage_results(inputs)
    breakdown = payment_breakdown(inputs)
    return MortgageResponse(
        results=MortgageResultsResponse.model_validate(results),
        first_payment=PaymentBreakdownResponse.model_validate(breakdown),
    )


@router.post("/schedule", response_model=ScheduleResponse)
async def schedule(req: ScheduleRequest):
    """Amortization schedule, yearly roll-up, and savings from any extra payments."""
    sched = schedule_from_request(req)

    savings = None
    if req.extra_monthly > 0 or req.extra_yearly > 0:
        baseline = amortization_schedule(req.principal, req.annual_rate, req.term_months, req.start_date)
        savings = ScheduleComparisonResponse.model_validate(compare_schedules(baseline, sched))
        logger.debug("Extra payments save %d months", savings.months_saved)

    front = front_loaded_interest(sched)

    return ScheduleResponse(
        monthly_payment=sched.monthly_payment,
        payoff_months=sched.payoff_months,
        total_principal=sched.total_principal,
        total_interest=sched.total_interest,
        total_payments=sched.total_payments,
        payments=(
            [PaymentResponse.model_validate(p) for p in sched.payments]
            if req.include_payments else []
        ),
        yearly_summary=[YearlySummaryResponse.model_validate(y) for y in yearly_summary(sched)],
        front_loaded_interest=FrontLoadedInterestResponse(
            first_half_interest=front.first_half_interest,
            second_half_interest=front.second_half_interest,
            ratio=front.ratio if front.ratio.is_finite() else None,
            first_year_interest=front.first_year_interest,
            last_year_interest=front.last_year_interest,
        ),
        savings_vs_standard=savings,
    )
