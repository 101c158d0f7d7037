from decimal import Decimal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "MORTGAGE_"}

    # App
    debug: bool = False
    log_level: str = "INFO"

    # Inflation used to project the packaged tax table to other years
    tax_inflation_rate: Decimal = Decimal("0.025")

    # Buydown defaults
    default_rate_reduction_per_point: Decimal = Decimal("0.25")  # 0.25% per point
    default_points_options: list[Decimal] = [
        Decimal("0"),
        Decimal("0.5"),
        Decimal("1"),
        Decimal("1.5"),
        Decimal("2"),
        Decimal("2.5"),
        Decimal("3"),
    ]
    default_ownership_years: int = 7
    default_marginal_tax_rate: Decimal = Decimal("0.24")


settings = Settings()
