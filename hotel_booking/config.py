from decimal import Decimal
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    use_in_memory: bool = True
    database_url: str = "sqlite+aiosqlite:///./hotel_booking.db"
    seed_demo_rooms: bool = True

    # AUTO = canal según el tipo de reservación (ONLINE -> gateway, WALK_IN -> POS)
    default_payment_channel: str = "AUTO"
    pos_decline_rate: float = Field(default=0.01, ge=0, le=1)
    gateway_decline_rate: float = Field(default=0.02, ge=0, le=1)
    gateway_base_url: str = "https://secure-bank.com/pay"
    gateway_breaker_fail_max: int = 5
    gateway_breaker_reset_timeout: int = 60

    pricing_strategy: str = "STANDARD_RATE"
    seasonal_multiplier: Decimal = Field(default=Decimal("1.25"), gt=0)

    reserve_retry_attempts: int = 2
    reserve_retry_delay_seconds: float = 0.01

    hotel_name: str = "OCEAN VIEW RESORT"
    currency_code: str = "USD"
    log_level: str = "INFO"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
