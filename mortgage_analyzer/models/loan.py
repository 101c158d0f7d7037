from dataclasses import dataclass
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class LoanTerms:
    principal: Decimal
    annual_rate: Decimal  # Percentage, e.g. Decimal("6.5") for 6.5%
    term_months: int
    start_date: date  # Origination; first payment falls one month later


@dataclass(frozen=True)
class MortgageInputs:
    home_price: Decimal
    down_payment: Decimal
    loan_amount: Decimal
    interest_rate: Decimal  # Annual, percentage
    loan_term_months: int
    start_date: date
    property_tax_rate: Decimal = Decimal("1.2")  # Annual, percentage of home price
    home_insurance: Decimal = Decimal("1800")  # Annual
    hoa_fees: Decimal = Decimal("0")  # Monthly
    pmi_rate: Decimal = Decimal("0.5")  # Annual, percentage of loan amount

    @property
    def down_payment_percent(self) -> Decimal:
        if self.home_price <= 0:
            return Decimal("0")
        return self.down_payment / self.home_price * 100

    @property
    def terms(self) -> LoanTerms:
        return LoanTerms(
            principal=self.loan_amount,
            annual_rate=self.interest_rate,
            term_months=self.loan_term_months,
            start_date=self.start_date,
        )


@dataclass(frozen=True)
class MortgageResults:
    monthly_principal_and_interest: Decimal
    monthly_property_tax: Decimal
    monthly_insurance: Decimal
    monthly_hoa: Decimal
    monthly_pmi: Decimal
    total_monthly_payment: Decimal
    total_interest_paid: Decimal
    total_cost_of_loan: Decimal
    loan_to_value_ratio: Decimal
    pmi_drop_off_month: int | None  # None when PMI is never required
    total_pmi_paid: Decimal


@dataclass(frozen=True)
class PaymentBreakdown:
    """Split of the first monthly payment."""
    principal: Decimal
    interest: Decimal
    taxes: Decimal
    insurance: Decimal
    hoa: Decimal
    pmi: Decimal
    total: Decimal
