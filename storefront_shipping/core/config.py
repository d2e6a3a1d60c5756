"""
Application configuration

Shipping rule tables are compiled into the package (see
storefront_shipping/models/zones.py). Settings here only tune the inputs the
calculator is built from, plus the usual app-level switches.
"""
import json
import logging
from typing import List, Union

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# Default CORS origins
DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]


def _parse_list(v, default: List[str]) -> List[str]:
    """Accept a JSON array or a comma-separated string."""
    if isinstance(v, list):
        return v
    if isinstance(v, str):
        if not v or v.strip() == "":
            return list(default)
        if v.startswith("["):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                pass
        return [item.strip() for item in v.split(",") if item.strip()]
    return v


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # App - defaults are PRODUCTION safe
    APP_NAME: str = "Storefront Shipping"
    DEBUG: bool = False
    ENVIRONMENT: str = "production"
    LOG_LEVEL: str = "INFO"

    # CORS - accepts JSON array or comma-separated string
    CORS_ORIGINS: Union[str, List[str]] = DEFAULT_CORS_ORIGINS

    # Shipping
    SHIPPING_CURRENCY: str = "gbp"
    SHIPPING_DEFAULT_ITEM_WEIGHT_GRAMS: int = 200
    SHIPPING_HOME_COUNTRY: str = "GB"
    SHIPPING_REGIONAL_POSTCODE_PREFIX: str = "BT"
    SHIPPING_EXTRA_MILITARY_INDICATORS: Union[str, List[str]] = []

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        return _parse_list(v, DEFAULT_CORS_ORIGINS)

    @field_validator("SHIPPING_EXTRA_MILITARY_INDICATORS", mode="before")
    @classmethod
    def parse_military_indicators(cls, v):
        indicators = _parse_list(v, [])
        return [i.lower() for i in indicators]

    @field_validator("SHIPPING_CURRENCY")
    @classmethod
    def lowercase_currency(cls, v):
        return v.lower()

    @field_validator("SHIPPING_HOME_COUNTRY", "SHIPPING_REGIONAL_POSTCODE_PREFIX")
    @classmethod
    def uppercase_codes(cls, v):
        return v.upper()

    @field_validator("SHIPPING_DEFAULT_ITEM_WEIGHT_GRAMS")
    @classmethod
    def positive_weight(cls, v):
        if v <= 0:
            raise ValueError("SHIPPING_DEFAULT_ITEM_WEIGHT_GRAMS must be positive")
        return v


settings = Settings()
