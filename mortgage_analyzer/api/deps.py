"""FastAPI dependency injection."""

from mortgage_analyzer.data.base import TaxTableProvider
from mortgage_analyzer.data.tax_tables import default_provider


def get_tax_tables() -> TaxTableProvider:
    return default_provider
