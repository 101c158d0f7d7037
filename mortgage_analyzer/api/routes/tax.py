"""Tax benefit routes."""

from fastapi import APIRouter, Depends, Path

from mortgage_analyzer.api.deps import get_tax_tables
from mortgage_analyzer.api.routes.mortgage import schedule_from_request
from mortgage_analyzer.api.schemas import (
    TaxBenefitRequest,
    TaxBenefitResponse,
    TaxBracketResponse,
    TaxProfileRequest,
    TaxYearResponse,
)
from mortgage_analyzer.data.base import TaxTableProvider
from mortgage_analyzer.engine.tax_benefit import calculate_tax_benefits
from mortgage_analyzer.models.tax import TaxProfile

router = APIRouter(prefix="/api/v1", tags=["tax"])


def _build_profile(req: TaxProfileRequest, default_origination) -> TaxProfile:
    return TaxProfile(
        filing_status=req.filing_status,
        annual_income=req.annual_income,
        state_tax_rate=req.state_tax_rate,
        state_and_local_taxes=req.state_and_local_taxes,
        charitable_contributions=req.charitable_contributions,
        other_itemized_deductions=req.other_itemized_deductions,
        mortgage_origination_date=req.mortgage_origination_date or default_origination,
        marginal_tax_rate_override=req.marginal_tax_rate_override,
    )


@router.post("/tax-benefits", response_model=TaxBenefitResponse)
async def tax_benefits(
    req: TaxBenefitRequest,
    tables: TaxTableProvider = Depends(get_tax_tables),
):
    """Itemized vs standard deduction and after-tax cost for every loan year."""
    sched = schedule_from_request(req.loan)
    profile = _build_profile(req.profile, req.loan.start_date)
    summary = calculate_tax_benefits(sched, req.loan.principal, profile, provider=tables)
    return TaxBenefitResponse.model_validate(summary)


@router.get("/tax-years/{year}", response_model=TaxYearResponse)
async def tax_year(
    year: int = Path(..., ge=1990, le=2100),
    tables: TaxTableProvider = Depends(get_tax_tables),
):
    """Tax table for a year, projected from the packaged table when needed."""
    config = tables.get_tax_year_config(year)
    return TaxYearResponse(
        year=config.year,
        standard_deductions={s.value: amount for s, amount in config.standard_deductions.items()},
        mortgage_debt_limit=config.mortgage_debt_limit,
        salt_cap=config.salt_cap,
        brackets={
            s.value: [TaxBracketResponse(min=b.min, max=b.max, rate=b.rate) for b in rows]
            for s, rows in config.brackets.items()
        },
    )
