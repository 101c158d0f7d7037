from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum


class FilingStatus(Enum):
    SINGLE = "single"
    MFJ = "married_filing_jointly"
    MFS = "married_filing_separately"
    HOH = "head_of_household"


class DeductionMethod(Enum):
    ITEMIZE = "itemize"
    STANDARD = "standard"


@dataclass(frozen=True)
class TaxBracket:
    min: Decimal  # Inclusive
    max: Decimal | None  # Exclusive; None = no upper limit
    rate: Decimal  # e.g. Decimal("0.24")


@dataclass(frozen=True)
class TaxYearConfig:
    year: int
    standard_deductions: dict[FilingStatus, Decimal]
    mortgage_debt_limit: Decimal
    salt_cap: Decimal
    brackets: dict[FilingStatus, tuple[TaxBracket, ...]]  # Ascending by min


@dataclass(frozen=True)
class TaxProfile:
    filing_status: FilingStatus
    annual_income: Decimal
    state_tax_rate: Decimal  # e.g. Decimal("0.05")
    state_and_local_taxes: Decimal  # Property tax + state income tax, before the SALT cap
    charitable_contributions: Decimal
    other_itemized_deductions: Decimal
    mortgage_origination_date: date  # Picks the $750K vs $1M debt limit
    marginal_tax_rate_override: Decimal | None = None


@dataclass(frozen=True)
class ItemizationComparison:
    standard_deduction: Decimal
    itemized_total: Decimal
    mortgage_interest: Decimal
    salt_deduction: Decimal  # After cap
    charitable_contributions: Decimal
    other_deductions: Decimal
    difference: Decimal
    recommendation: DeductionMethod


@dataclass(frozen=True)
class YearlyTaxBenefit:
    year: int
    calendar_year: int

    # Interest
    interest_paid: Decimal
    deductible_interest: Decimal  # After loan limit proration

    # Itemization
    total_itemized_deductions: Decimal
    standard_deduction: Decimal
    should_itemize: bool
    itemization_benefit: Decimal  # Amount above the standard deduction

    # Savings
    marginal_tax_rate: Decimal
    federal_tax_savings: Decimal
    state_tax_savings: Decimal
    total_tax_savings: Decimal

    # Effective cost
    gross_payments: Decimal
    net_cost_after_tax_benefit: Decimal
    effective_monthly_payment: Decimal
    effective_interest_rate: Decimal  # Percentage


@dataclass(frozen=True)
class TaxBenefitSummary:
    yearly_breakdown: tuple[YearlyTaxBenefit, ...]

    total_interest_paid: Decimal
    total_tax_savings: Decimal
    total_net_interest_cost: Decimal

    break_even_year: int | None  # Loan year in which itemizing stops paying off
    years_of_itemization: int
    average_yearly_tax_savings: Decimal

    overall_effective_rate: Decimal
    first_year_effective_rate: Decimal
