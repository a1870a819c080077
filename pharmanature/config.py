"""Configuration settings for the application."""
from decimal import Decimal
from pydantic_settings import BaseSettings
from pydantic import Field
from dotenv import load_dotenv

# Make .env values visible to anything reading os.environ directly.
load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    database_url: str = Field(..., alias="DATABASE_URL")
    # Cart pricing (Tunisian Dinar, 3 decimals)
    free_shipping_threshold: Decimal = Field(default=Decimal("120.000"), alias="FREE_SHIPPING_THRESHOLD")
    shipping_fee: Decimal = Field(default=Decimal("7.000"), alias="SHIPPING_FEE")
    fiscal_stamp: Decimal = Field(default=Decimal("1.000"), alias="FISCAL_STAMP")
    currency_label: str = Field(default="DT", alias="CURRENCY_LABEL")
    # Insert seed catalog and the offers config row at startup
    seed_on_startup: bool = Field(default=True, alias="SEED_ON_STARTUP")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    project_name: str = "PharmaNature Storefront"
    api_version: str = "v1"

    class Config:
        env_file = ".env"
        case_sensitive = False
        populate_by_name = True


settings = Settings()
