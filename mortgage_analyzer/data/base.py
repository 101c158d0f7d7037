"""Protocol definitions for data sources.

The engine depends only on these interfaces; table updates need no engine change.
"""

from datetime import date
from decimal import Decimal
from typing import Protocol, runtime_checkable

from mortgage_analyzer.models.tax import FilingStatus, TaxYearConfig


@runtime_checkable
class TaxTableProvider(Protocol):
    def get_tax_year_config(self, year: int) -> TaxYearConfig:
        """Bracket, deduction and cap table for a tax year."""
        ...

    def get_mortgage_deduction_limit(self, origination_date: date) -> Decimal:
        """Acquisition debt limit for a mortgage originated on the given date."""
        ...

    def get_marginal_tax_rate(
        self, income: Decimal, filing_status: FilingStatus, year: int | None = None
    ) -> Decimal:
        """Federal marginal rate for an income level."""
        ...
