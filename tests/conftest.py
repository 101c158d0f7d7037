"""Canonical test fixtures used across all engine tests.

Fixture: $400K home, 20% down, $320K loan at 6.5%, 30yr fixed, starting Jan 1 2025.
Borrower: MFJ, $150K income, $15K SALT, $2K charitable, 5% state.
"""

from datetime import date
from decimal import Decimal

import pytest

from mortgage_analyzer.engine.amortization import amortization_schedule
from mortgage_analyzer.models.amortization import AmortizationSchedule
from mortgage_analyzer.models.buydown import BuydownInputs
from mortgage_analyzer.models.loan import LoanTerms, MortgageInputs
from mortgage_analyzer.models.tax import FilingStatus, TaxProfile

START = date(2025, 1, 1)


@pytest.fixture
def canonical_terms() -> LoanTerms:
    return LoanTerms(
        principal=Decimal("320000"),
        annual_rate=Decimal("6.5"),
        term_months=360,
        start_date=START,
    )


@pytest.fixture
def canonical_inputs() -> MortgageInputs:
    """$400K home with 20% down: no PMI."""
    return MortgageInputs(
        home_price=Decimal("400000"),
        down_payment=Decimal("80000"),
        loan_amount=Decimal("320000"),
        interest_rate=Decimal("6.5"),
        loan_term_months=360,
        start_date=START,
        property_tax_rate=Decimal("1.2"),
        home_insurance=Decimal("1800"),
        hoa_fees=Decimal("0"),
        pmi_rate=Decimal("0.5"),
    )


@pytest.fixture
def low_down_payment_inputs() -> MortgageInputs:
    """$400K home with 10% down: PMI until 78% LTV."""
    return MortgageInputs(
        home_price=Decimal("400000"),
        down_payment=Decimal("40000"),
        loan_amount=Decimal("360000"),
        interest_rate=Decimal("6.5"),
        loan_term_months=360,
        start_date=START,
        pmi_rate=Decimal("0.5"),
    )


@pytest.fixture
def canonical_schedule(canonical_terms) -> AmortizationSchedule:
    return amortization_schedule(
        canonical_terms.principal,
        canonical_terms.annual_rate,
        canonical_terms.term_months,
        canonical_terms.start_date,
    )


@pytest.fixture
def canonical_profile() -> TaxProfile:
    """Itemizes early in the loan, switches to the standard deduction later."""
    return TaxProfile(
        filing_status=FilingStatus.MFJ,
        annual_income=Decimal("150000"),
        state_tax_rate=Decimal("0.05"),
        state_and_local_taxes=Decimal("15000"),
        charitable_contributions=Decimal("2000"),
        other_itemized_deductions=Decimal("0"),
        mortgage_origination_date=START,
    )


@pytest.fixture
def standard_only_profile() -> TaxProfile:
    """Too few deductions to ever itemize."""
    return TaxProfile(
        filing_status=FilingStatus.MFJ,
        annual_income=Decimal("90000"),
        state_tax_rate=Decimal("0"),
        state_and_local_taxes=Decimal("0"),
        charitable_contributions=Decimal("0"),
        other_itemized_deductions=Decimal("0"),
        mortgage_origination_date=START,
    )


@pytest.fixture
def buydown_inputs() -> BuydownInputs:
    """$400K purchase at 6.5%, 0.25% off per point, 24% bracket."""
    return BuydownInputs(
        loan_amount=Decimal("400000"),
        base_interest_rate=Decimal("6.5"),
        loan_term_months=360,
        number_of_points=Decimal("1"),
        rate_reduction_per_point=Decimal("0.25"),
        is_refinance=False,
        expected_ownership_years=7,
        marginal_tax_rate=Decimal("0.24"),
    )
