"""Pydantic schemas for API request/response models."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from mortgage_analyzer.config import settings
from mortgage_analyzer.models.tax import FilingStatus


# ---- Request schemas ----

class MortgageRequest(BaseModel):
    home_price: Decimal = Field(..., gt=0)
    down_payment: Decimal = Field(Decimal("0"), ge=0)
    loan_amount: Decimal | None = Field(None, gt=0, description="Defaults to home price minus down payment")
    interest_rate: Decimal = Field(..., ge=0, description="Annual rate as a percentage, e.g. 6.5")
    loan_term_months: int = Field(360, gt=0)
    start_date: date
    property_tax_rate: Decimal = Field(Decimal("1.2"), ge=0)
    home_insurance: Decimal = Field(Decimal("1800"), ge=0)
    hoa_fees: Decimal = Field(Decimal("0"), ge=0)
    pmi_rate: Decimal = Field(Decimal("0.5"), ge=0)


class ScheduleRequest(BaseModel):
    principal: Decimal = Field(..., gt=0)
    annual_rate: Decimal = Field(..., ge=0)
    term_months: int = Field(360, gt=0)
    start_date: date

    # Early payoff
    extra_monthly: Decimal = Field(Decimal("0"), ge=0)
    extra_yearly: Decimal = Field(Decimal("0"), ge=0)
    extra_yearly_month: int = Field(12, ge=1, le=12)
    include_payments: bool = True


class TaxProfileRequest(BaseModel):
    filing_status: FilingStatus = FilingStatus.MFJ
    annual_income: Decimal = Field(..., ge=0)
    marginal_tax_rate_override: Decimal | None = Field(None, ge=0, le=1)
    state_tax_rate: Decimal = Field(Decimal("0.05"), ge=0, le=1)
    state_and_local_taxes: Decimal = Field(Decimal("0"), ge=0)
    charitable_contributions: Decimal = Field(Decimal("0"), ge=0)
    other_itemized_deductions: Decimal = Field(Decimal("0"), ge=0)
    mortgage_origination_date: date | None = Field(None, description="Defaults to the loan start date")


class TaxBenefitRequest(BaseModel):
    loan: ScheduleRequest
    profile: TaxProfileRequest


class BuydownRequest(BaseModel):
    loan_amount: Decimal = Field(..., gt=0)
    base_interest_rate: Decimal = Field(..., ge=0)
    loan_term_months: int = Field(360, gt=0)
    number_of_points: Decimal = Field(Decimal("1"), ge=0, description="Point level to report in detail")
    rate_reduction_per_point: Decimal = Field(default_factory=lambda: settings.default_rate_reduction_per_point, ge=0)
    is_refinance: bool = False
    expected_ownership_years: int = Field(default_factory=lambda: settings.default_ownership_years, gt=0)
    marginal_tax_rate: Decimal = Field(default_factory=lambda: settings.default_marginal_tax_rate, ge=0, le=1)
    points_options: list[Decimal] | None = Field(None, min_length=1)
    timeline_years: int = Field(30, ge=0, le=50, description="Years of net-value timeline to return")


# ---- Response schemas ----

class MortgageResultsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    monthly_principal_and_interest: Decimal
    monthly_property_tax: Decimal
    monthly_insurance: Decimal
    monthly_hoa: Decimal
    monthly_pmi: Decimal
    total_monthly_payment: Decimal
    total_interest_paid: Decimal
    total_cost_of_loan: Decimal
    loan_to_value_ratio: Decimal
    pmi_drop_off_month: int | None = None
    total_pmi_paid: Decimal


class PaymentBreakdownResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    principal: Decimal
    interest: Decimal
    taxes: Decimal
    insurance: Decimal
    hoa: Decimal
    pmi: Decimal
    total: Decimal


class MortgageResponse(BaseModel):
    results: MortgageResultsResponse
    first_payment: PaymentBreakdownResponse


class PaymentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    payment_number: int
    payment_date: date
    payment: Decimal
    principal: Decimal
    interest: Decimal
    remaining_balance: Decimal
    cumulative_principal: Decimal
    cumulative_interest: Decimal


class YearlySummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    year: int
    calendar_year: int
    principal_paid: Decimal
    interest_paid: Decimal
    total_paid: Decimal
    ending_balance: Decimal
    principal_percent: Decimal
    interest_percent: Decimal


class FrontLoadedInterestResponse(BaseModel):
    first_half_interest: Decimal
    second_half_interest: Decimal
    ratio: Decimal | None = Field(None, description="Null when the second half pays no interest")
    first_year_interest: Decimal
    last_year_interest: Decimal


class ScheduleComparisonResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    months_saved: int
    interest_saved: Decimal
    total_saved: Decimal


class ScheduleResponse(BaseModel):
    monthly_payment: Decimal
    payoff_months: int
    total_principal: Decimal
    total_interest: Decimal
    total_payments: Decimal
    payments: list[PaymentResponse] = []
    yearly_summary: list[YearlySummaryResponse] = []
    front_loaded_interest: FrontLoadedInterestResponse
    savings_vs_standard: ScheduleComparisonResponse | None = None


class YearlyTaxBenefitResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    year: int
    calendar_year: int
    interest_paid: Decimal
    deductible_interest: Decimal
    total_itemized_deductions: Decimal
    standard_deduction: Decimal
    should_itemize: bool
    itemization_benefit: Decimal
    marginal_tax_rate: Decimal
    federal_tax_savings: Decimal
    state_tax_savings: Decimal
    total_tax_savings: Decimal
    gross_payments: Decimal
    net_cost_after_tax_benefit: Decimal
    effective_monthly_payment: Decimal
    effective_interest_rate: Decimal


class TaxBenefitResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    yearly_breakdown: list[YearlyTaxBenefitResponse]
    total_interest_paid: Decimal
    total_tax_savings: Decimal
    total_net_interest_cost: Decimal
    break_even_year: int | None = None
    years_of_itemization: int
    average_yearly_tax_savings: Decimal
    overall_effective_rate: Decimal
    first_year_effective_rate: Decimal


class TaxBracketResponse(BaseModel):
    min: Decimal
    max: Decimal | None = None
    rate: Decimal


class TaxYearResponse(BaseModel):
    year: int
    standard_deductions: dict[str, Decimal]
    mortgage_debt_limit: Decimal
    salt_cap: Decimal
    brackets: dict[str, list[TaxBracketResponse]]


class BuydownScenarioResponse(BaseModel):
    number_of_points: Decimal
    points_cost_dollars: Decimal
    points_cost_percent: Decimal
    original_rate: Decimal
    bought_down_rate: Decimal
    rate_reduction: Decimal
    original_monthly_payment: Decimal
    bought_down_monthly_payment: Decimal
    monthly_savings: Decimal
    # Null = never breaks even
    break_even_months: Decimal | None = None
    break_even_years: Decimal | None = None
    total_interest_without_points: Decimal
    total_interest_with_points: Decimal
    interest_savings: Decimal
    total_cost_without_points: Decimal
    total_cost_with_points: Decimal
    net_savings_over_life: Decimal
    tax_deductible_amount: Decimal
    effective_cost_after_tax: Decimal
    adjusted_break_even_months: Decimal | None = None


class BuydownResponse(BaseModel):
    selected_scenario: BuydownScenarioResponse
    scenarios: list[BuydownScenarioResponse]
    optimal_scenario: BuydownScenarioResponse
    recommendation: str
    # One row per year: {"year": n, "<points> points": net value}
    timeline: list[dict[str, Decimal | int]] = []
