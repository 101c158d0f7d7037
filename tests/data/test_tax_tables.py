import json
from datetime import date
from decimal import Decimal

import pytest

from mortgage_analyzer.data.base import TaxTableProvider
from mortgage_analyzer.data.tax_tables import (
    StaticTaxTableProvider,
    default_provider,
    marginal_rate_from_brackets,
    project_tax_year,
)
from mortgage_analyzer.models.tax import FilingStatus


@pytest.fixture
def provider() -> StaticTaxTableProvider:
    return StaticTaxTableProvider(inflation_rate=Decimal("0.025"))


class TestStaticTaxTableProvider:
    def test_satisfies_protocol(self):
        assert isinstance(default_provider, TaxTableProvider)

    def test_base_year(self, provider):
        assert provider.base_year == 2025

    def test_base_year_values(self, provider):
        config = provider.get_tax_year_config(2025)
        assert config.year == 2025
        assert config.standard_deductions[FilingStatus.SINGLE] == Decimal("15000")
        assert config.standard_deductions[FilingStatus.MFJ] == Decimal("30000")
        assert config.standard_deductions[FilingStatus.MFS] == Decimal("15000")
        assert config.standard_deductions[FilingStatus.HOH] == Decimal("22500")
        assert config.mortgage_debt_limit == Decimal("750000")
        assert config.salt_cap == Decimal("40000")

    def test_brackets_cover_every_status(self, provider):
        config = provider.get_tax_year_config(2025)
        for status in FilingStatus:
            rows = config.brackets[status]
            assert rows[0].min == 0
            assert rows[-1].max is None
            assert [b.rate for b in rows] == [
                Decimal(r) for r in ("0.1", "0.12", "0.22", "0.24", "0.32", "0.35", "0.37")
            ]


class TestProjection:
    def test_future_year_inflates_deduction(self, provider):
        # 30000 * 1.025^5 = 33942.24, nearest $50
        config = provider.get_tax_year_config(2030)
        assert config.year == 2030
        assert config.standard_deductions[FilingStatus.MFJ] == Decimal("33950")

    def test_past_year_deflates(self, provider):
        # 30000 / 1.025 = 29268.29, nearest $50
        config = provider.get_tax_year_config(2024)
        assert config.standard_deductions[FilingStatus.MFJ] == Decimal("29250")

    def test_bracket_edges_rounded_to_25(self, provider):
        config = provider.get_tax_year_config(2032)
        for rows in config.brackets.values():
            for b in rows:
                assert b.min % 25 == 0
                if b.max is not None:
                    assert b.max % 25 == 0

    def test_statutory_limits_fixed(self, provider):
        config = provider.get_tax_year_config(2040)
        assert config.mortgage_debt_limit == Decimal("750000")
        assert config.salt_cap == Decimal("40000")

    def test_rates_unchanged(self, provider):
        base = provider.get_tax_year_config(2025)
        later = provider.get_tax_year_config(2035)
        assert [b.rate for b in later.brackets[FilingStatus.SINGLE]] == [
            b.rate for b in base.brackets[FilingStatus.SINGLE]
        ]

    def test_zero_inflation(self):
        flat = StaticTaxTableProvider(inflation_rate=Decimal("0"))
        config = flat.get_tax_year_config(2030)
        assert config.year == 2030
        assert config.standard_deductions[FilingStatus.MFJ] == Decimal("30000")

    def test_same_year_returns_base(self, provider):
        base = provider.get_tax_year_config(2025)
        assert project_tax_year(base, 2025) is base


class TestMortgageDeductionLimit:
    def test_grandfathered_on_cutoff(self, provider):
        assert provider.get_mortgage_deduction_limit(date(2017, 12, 15)) == Decimal("1000000")

    def test_before_cutoff(self, provider):
        assert provider.get_mortgage_deduction_limit(date(2010, 6, 1)) == Decimal("1000000")

    def test_after_cutoff(self, provider):
        assert provider.get_mortgage_deduction_limit(date(2017, 12, 16)) == Decimal("750000")
        assert provider.get_mortgage_deduction_limit(date(2025, 1, 1)) == Decimal("750000")


class TestMarginalRate:
    def test_mfj_brackets(self, provider):
        assert provider.get_marginal_tax_rate(Decimal("150000"), FilingStatus.MFJ, 2025) == Decimal("0.22")
        assert provider.get_marginal_tax_rate(Decimal("300000"), FilingStatus.MFJ, 2025) == Decimal("0.24")

    def test_bracket_floor_is_inclusive(self, provider):
        assert provider.get_marginal_tax_rate(Decimal("96950"), FilingStatus.MFJ, 2025) == Decimal("0.22")
        assert provider.get_marginal_tax_rate(Decimal("96949"), FilingStatus.MFJ, 2025) == Decimal("0.12")

    def test_zero_income(self, provider):
        assert provider.get_marginal_tax_rate(Decimal("0"), FilingStatus.SINGLE, 2025) == Decimal("0.1")

    def test_top_bracket(self, provider):
        assert provider.get_marginal_tax_rate(Decimal("700000"), FilingStatus.SINGLE, 2025) == Decimal("0.37")

    def test_defaults_to_base_year(self, provider):
        assert provider.get_marginal_tax_rate(Decimal("150000"), FilingStatus.MFJ) == Decimal("0.22")

    def test_negative_income_uses_lowest_bracket(self, provider):
        rows = provider.get_tax_year_config(2025).brackets[FilingStatus.MFJ]
        assert marginal_rate_from_brackets(Decimal("-1"), rows) == Decimal("0.1")


class TestCustomTable:
    def test_loads_alternate_table(self, tmp_path):
        table = {
            "year": 2020,
            "standard_deductions": {s.value: 10000 for s in FilingStatus},
            "mortgage_debt_limit": 500000,
            "salt_cap": 10000,
            "brackets": {
                s.value: [
                    {"min": 0, "max": 50000, "rate": 0.1},
                    {"min": 50000, "max": None, "rate": 0.3},
                ]
                for s in FilingStatus
            },
        }
        path = tmp_path / "table.json"
        path.write_text(json.dumps(table))

        custom = StaticTaxTableProvider(table_path=path)
        assert custom.base_year == 2020
        assert custom.get_mortgage_deduction_limit(date(2020, 1, 1)) == Decimal("500000")
        assert custom.get_marginal_tax_rate(Decimal("60000"), FilingStatus.HOH) == Decimal("0.3")

    def test_malformed_table_raises(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text(json.dumps({"year": 2025, "standard_deductions": {"single": 15000}}))

        broken = StaticTaxTableProvider(table_path=path)
        with pytest.raises(ValueError, match="Malformed tax table"):
            broken.get_tax_year_config(2025)

    def test_unknown_filing_status_raises(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text(json.dumps({
            "year": 2025,
            "standard_deductions": {"widowed": 15000},
            "mortgage_debt_limit": 750000,
            "salt_cap": 40000,
            "brackets": {},
        }))

        with pytest.raises(ValueError, match="Malformed tax table"):
            StaticTaxTableProvider(table_path=path).base_year
