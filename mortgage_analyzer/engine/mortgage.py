"""Payment calculator: fixed monthly payment, PMI, LTV.

Pure functions: Decimal in, Decimal out. No I/O.
Rates are annual percentages (Decimal("6.5") for 6.5%). Degenerate inputs such as
a zero home value produce Infinity/NaN instead of raising.
"""

from decimal import Context, Decimal, localcontext

from mortgage_analyzer.models.loan import MortgageInputs, MortgageResults, PaymentBreakdown

PMI_REQUIRED_LTV = Decimal("0.80")
PMI_CANCEL_LTV = Decimal("0.78")
PMI_MAX_MONTHS = 360

# Division by zero yields Infinity/NaN and NaN comparisons are simply False
_LENIENT = Context(traps=[])


def monthly_rate(annual_rate: Decimal) -> Decimal:
    return annual_rate / 100 / 12


def monthly_payment(principal: Decimal, annual_rate: Decimal, term_months: int) -> Decimal:
    """Fixed monthly principal & interest payment.

    M = P * [r(1+r)^n] / [(1+r)^n - 1]
    """
    with localcontext(_LENIENT):
        r = monthly_rate(annual_rate)
        if r == 0:
            return principal / term_months

        factor = (1 + r) ** term_months
        return principal * (r * factor) / (factor - 1)


def total_interest(principal: Decimal, payment: Decimal, term_months: int) -> Decimal:
    """Interest paid over the full term at a fixed payment."""
    return payment * term_months - principal


def loan_to_value(loan_amount: Decimal, home_value: Decimal) -> Decimal:
    with localcontext(_LENIENT):
        return loan_amount / home_value


def monthly_pmi(loan_amount: Decimal, home_value: Decimal, annual_pmi_rate: Decimal) -> Decimal:
    """Monthly PMI, or 0 when LTV is at or below 80%."""
    with localcontext(_LENIENT):
        if loan_to_value(loan_amount, home_value) <= PMI_REQUIRED_LTV:
            return Decimal("0")
        return loan_amount * (annual_pmi_rate / 100) / 12


def pmi_drop_off_month(
    loan_amount: Decimal,
    home_value: Decimal,
    payment: Decimal,
    annual_rate: Decimal,
) -> int | None:
    """Month in which the balance first reaches 78% of the home value.

    None when PMI is never required. Stops at 360 months even if the target
    is never reached, so a return of 360 may also mean "never".
    """
    with localcontext(_LENIENT):
        if loan_to_value(loan_amount, home_value) <= PMI_REQUIRED_LTV:
            return None

        target_balance = home_value * PMI_CANCEL_LTV
        r = monthly_rate(annual_rate)

        balance = loan_amount
        month = 0
        while balance > target_balance and month < PMI_MAX_MONTHS:
            month += 1
            interest = balance * r
            balance -= payment - interest

        return month


def total_pmi(
    loan_amount: Decimal,
    home_value: Decimal,
    annual_pmi_rate: Decimal,
    drop_off_month: int | None,
) -> Decimal:
    """PMI paid until it drops off, at the initial monthly premium."""
    if drop_off_month is None:
        return Decimal("0")
    return monthly_pmi(loan_amount, home_value, annual_pmi_rate) * drop_off_month


def calculate_mortgage_results(inputs: MortgageInputs) -> MortgageResults:
    """Full monthly housing cost (P&I, taxes, insurance, HOA, PMI) and loan totals."""
    monthly_pi = monthly_payment(
        inputs.loan_amount, inputs.interest_rate, inputs.loan_term_months
    )

    monthly_property_tax = inputs.home_price * inputs.property_tax_rate / 100 / 12
    monthly_insurance = inputs.home_insurance / 12
    monthly_hoa = inputs.hoa_fees
    pmi = monthly_pmi(inputs.loan_amount, inputs.home_price, inputs.pmi_rate)

    drop_off = pmi_drop_off_month(
        inputs.loan_amount, inputs.home_price, monthly_pi, inputs.interest_rate
    )
    pmi_total = total_pmi(inputs.loan_amount, inputs.home_price, inputs.pmi_rate, drop_off)

    interest = total_interest(inputs.loan_amount, monthly_pi, inputs.loan_term_months)

    return MortgageResults(
        monthly_principal_and_interest=monthly_pi,
        monthly_property_tax=monthly_property_tax,
        monthly_insurance=monthly_insurance,
        monthly_hoa=monthly_hoa,
        monthly_pmi=pmi,
        total_monthly_payment=monthly_pi + monthly_property_tax + monthly_insurance + monthly_hoa + pmi,
        total_interest_paid=interest,
        total_cost_of_loan=inputs.loan_amount + interest,
        loan_to_value_ratio=loan_to_value(inputs.loan_amount, inputs.home_price),
        pmi_drop_off_month=drop_off,
        total_pmi_paid=pmi_total,
    )


def payment_breakdown(inputs: MortgageInputs) -> PaymentBreakdown:
    """Where the first monthly payment goes."""
    results = calculate_mortgage_results(inputs)

    first_interest = inputs.loan_amount * monthly_rate(inputs.interest_rate)
    first_principal = results.monthly_principal_and_interest - first_interest

    return PaymentBreakdown(
        principal=first_principal,
        interest=first_interest,
        taxes=results.monthly_property_tax,
        insurance=results.monthly_insurance,
        hoa=results.monthly_hoa,
        pmi=results.monthly_pmi,
        total=results.total_monthly_payment,
    )
