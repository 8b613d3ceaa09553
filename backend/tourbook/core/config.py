"""Application configuration via pydantic settings."""

from decimal import Decimal
from functools import lru_cache
from pathlib import Path

from typing import Any, Literal

from pydantic import BaseModel, Field
from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_PACKAGE_DIR = Path(__file__).resolve().parents[1]


class StayDiscountTier(BaseModel):
    """Length-of-stay discount applied once a stay reaches ``min_nights``."""

    min_nights: int = Field(..., ge=1)
    percent: Decimal = Field(..., ge=Decimal("0"), le=Decimal("100"))
    label: str


class PromotionRule(BaseModel):
    """Discount granted by a promo code."""

    kind: Literal["percent", "amount"] = "percent"
    value: Decimal = Field(..., gt=Decimal("0"))

    @model_validator(mode="after")
    def _bound_percent(self) -> "PromotionRule":
        if self.kind == "percent" and self.value > 100:
            raise ValueError("A percent promotion cannot exceed 100")
        return self


def _default_tiers() -> list[StayDiscountTier]:
    return [
        StayDiscountTier(min_nights=30, percent=Decimal("15"), label="Monthly stay discount"),
        StayDiscountTier(min_nights=7, percent=Decimal("10"), label="Weekly stay discount"),
    ]


def _default_promotions() -> dict[str, PromotionRule]:
    return {"DESCUENTO10": PromotionRule(kind="percent", value=Decimal("10"))}


class Settings(BaseSettings):
    """Typed application configuration."""

    app_env: str = Field("local", alias="APP_ENV")
    app_name: str = "Tourbook Booking API"
    api_v1_prefix: str = "/api/v1"

    redis_url: str | None = Field(default=None, alias="REDIS_URL")

    catalog_path: Path = Field(
        default=_PACKAGE_DIR / "data" / "catalog.yaml", alias="CATALOG_PATH"
    )

    cleaning_fee: Decimal = Field(Decimal("50000"), alias="CLEANING_FEE", ge=0)
    service_fee_percent: Decimal = Field(
        Decimal("5"), alias="SERVICE_FEE_PERCENT", ge=0, le=100
    )
    iva_percent: Decimal = Field(Decimal("19"), alias="IVA_PERCENT", ge=0, le=100)
    tourism_tax_per_night: Decimal = Field(
        Decimal("5000"), alias="TOURISM_TAX_PER_NIGHT", ge=0
    )
    stay_discount_tiers: list[StayDiscountTier] = Field(
        default_factory=_default_tiers, alias="STAY_DISCOUNT_TIERS"
    )
    promo_codes: dict[str, PromotionRule] = Field(
        default_factory=_default_promotions, alias="PROMO_CODES"
    )

    currency_code: str = Field("COP", alias="CURRENCY_CODE")
    currency_decimals: int = Field(0, alias="CURRENCY_DECIMALS", ge=0, le=4)
    confirmation_prefix: str = Field("RES", alias="CONFIRMATION_PREFIX")
    confirmation_store_size: int = Field(500, alias="CONFIRMATION_STORE_SIZE", ge=1)

    cors_allow_origins: list[str] = Field(
        default_factory=lambda: [
            "http://localhost:5173",
            "http://localhost:5174",
        ],
        alias="CORS_ALLOW_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=False, alias="CORS_ALLOW_CREDENTIALS")

    rate_limit_checkout: str = Field("20/minute", alias="RATE_LIMIT_CHECKOUT")

    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parents[3] / ".env",
        case_sensitive=False,
        populate_by_name=True,
    )

    @field_validator("cors_allow_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.lstrip().startswith("["):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("promo_codes", mode="after")
    @classmethod
    def _normalize_codes(cls, value: dict[str, PromotionRule]) -> dict[str, PromotionRule]:
        return {code.strip().upper(): rule for code, rule in value.items()}


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""
    return Settings()  # type: ignore[call-arg]
