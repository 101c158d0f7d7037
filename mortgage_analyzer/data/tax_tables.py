"""Federal tax tables: brackets, standard deductions, SALT cap, mortgage debt limits.

The packaged table covers one tax year. Other years are projected from it by
compounding an annual inflation factor, then rounding deductions to the nearest
$50 and bracket edges to the nearest $25.
"""

import json
import logging
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from pathlib import Path

from mortgage_analyzer.config import settings
from mortgage_analyzer.models.tax import FilingStatus, TaxBracket, TaxYearConfig

logger = logging.getLogger(__name__)

DEFAULT_TABLE_PATH = Path(__file__).parent / "tax_year_2025.json"

DEDUCTION_ROUNDING = Decimal("50")
BRACKET_ROUNDING = Decimal("25")


def _round_to(value: Decimal, increment: Decimal) -> Decimal:
    return (value / increment).quantize(Decimal("1"), ROUND_HALF_UP) * increment


def _parse_table(raw: dict) -> TaxYearConfig:
    try:
        deductions = {
            FilingStatus(status): Decimal(str(amount))
            for status, amount in raw["standard_deductions"].items()
        }
        brackets = {
            FilingStatus(status): tuple(
                TaxBracket(
                    min=Decimal(str(b["min"])),
                    max=Decimal(str(b["max"])) if b["max"] is not None else None,
                    rate=Decimal(str(b["rate"])),
                )
                for b in rows
            )
            for status, rows in raw["brackets"].items()
        }
        return TaxYearConfig(
            year=int(raw["year"]),
            standard_deductions=deductions,
            mortgage_debt_limit=Decimal(str(raw["mortgage_debt_limit"])),
            salt_cap=Decimal(str(raw["salt_cap"])),
            brackets=brackets,
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Malformed tax table: {e}") from e


def project_tax_year(
    base: TaxYearConfig,
    year: int,
    inflation_rate: Decimal = Decimal("0.025"),
) -> TaxYearConfig:
    """Inflation-adjust a base table to another tax year.

    Debt limit and SALT cap are statutory and stay fixed.
    """
    if year == base.year:
        return base

    factor = (1 + inflation_rate) ** (year - base.year)

    deductions = {
        status: _round_to(amount * factor, DEDUCTION_ROUNDING)
        for status, amount in base.standard_deductions.items()
    }
    brackets = {
        status: tuple(
            TaxBracket(
                min=_round_to(b.min * factor, BRACKET_ROUNDING),
                max=_round_to(b.max * factor, BRACKET_ROUNDING) if b.max is not None else None,
                rate=b.rate,
            )
            for b in rows
        )
        for status, rows in base.brackets.items()
    }

    return TaxYearConfig(
        year=year,
        standard_deductions=deductions,
        mortgage_debt_limit=base.mortgage_debt_limit,
        salt_cap=base.salt_cap,
        brackets=brackets,
    )


def marginal_rate_from_brackets(income: Decimal, brackets: tuple[TaxBracket, ...]) -> Decimal:
    """Rate of the highest bracket whose floor is at or below income."""
    for bracket in reversed(brackets):
        if income >= bracket.min:
            return bracket.rate
    return brackets[0].rate


class StaticTaxTableProvider:
    """TaxTableProvider backed by a packaged JSON table."""

    def __init__(
        self,
        table_path: Path | None = None,
        inflation_rate: Decimal | None = None,
    ):
        self.table_path = table_path or DEFAULT_TABLE_PATH
        self.inflation_rate = (
            inflation_rate if inflation_rate is not None else settings.tax_inflation_rate
        )
        self._base: TaxYearConfig | None = None
        self._pre_tcja_limit = Decimal("1000000")
        self._limit_cutoff = date(2017, 12, 15)

    def _load(self) -> TaxYearConfig:
        if self._base is None:
            with open(self.table_path) as f:
                raw = json.load(f)
            self._base = _parse_table(raw)
            if "pre_tcja_mortgage_debt_limit" in raw:
                self._pre_tcja_limit = Decimal(str(raw["pre_tcja_mortgage_debt_limit"]))
            if "mortgage_limit_cutoff_date" in raw:
                self._limit_cutoff = date.fromisoformat(raw["mortgage_limit_cutoff_date"])
            logger.debug("Loaded %d tax table from %s", self._base.year, self.table_path)
        return self._base

    @property
    def base_year(self) -> int:
        return self._load().year

    def get_tax_year_config(self, year: int) -> TaxYearConfig:
        base = self._load()
        if year != base.year:
            logger.debug(
                "Projecting %d tax table to %d at %s inflation", base.year, year, self.inflation_rate
            )
        return project_tax_year(base, year, self.inflation_rate)

    def get_mortgage_deduction_limit(self, origination_date: date) -> Decimal:
        """$1M for loans originated on or before Dec 15, 2017; the table limit after."""
        base = self._load()
        if origination_date <= self._limit_cutoff:
            return self._pre_tcja_limit
        return base.mortgage_debt_limit

    def get_marginal_tax_rate(
        self, income: Decimal, filing_status: FilingStatus, year: int | None = None
    ) -> Decimal:
        config = self.get_tax_year_config(year if year is not None else self.base_year)
        return marginal_rate_from_brackets(income, config.brackets[filing_status])


default_provider = StaticTaxTableProvider()
