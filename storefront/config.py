"""
Application settings loaded from the environment
"""
import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()


def _split(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _database_url() -> str:
    url = os.getenv("DATABASE_URL")
    if url:
        return url
    if os.getenv("POSTGRES_DB"):
        return (
            f"postgresql+psycopg2://{os.getenv('POSTGRES_USER', 'postgres')}:"
            f"{os.getenv('POSTGRES_PASSWORD', '')}@{os.getenv('POSTGRES_HOST', 'localhost')}:"
            f"{os.getenv('POSTGRES_PORT', '5432')}/{os.getenv('POSTGRES_DB')}"
        )
    return "sqlite:///./storefront.db"


@dataclass
class Settings:
    """Runtime configuration for the API"""
    app_name: str = field(default_factory=lambda: os.getenv("APP_NAME", "IndoSaga Furniture API"))
    app_version: str = field(default_factory=lambda: os.getenv("APP_VERSION", "1.0.0"))
    database_url: str = field(default_factory=_database_url)
    session_secret: str = field(default_factory=lambda: os.getenv("SESSION_SECRET", "dev-session-secret-change-me"))
    session_max_age: int = 24 * 60 * 60

    allowed_origins: List[str] = field(default_factory=lambda: _split(os.getenv("ALLOWED_ORIGINS", "http://localhost:5000")))
    allowed_methods: List[str] = field(default_factory=lambda: _split(os.getenv("ALLOWED_METHODS", "GET,POST,PUT,DELETE")))
    allowed_headers: List[str] = field(default_factory=lambda: _split(os.getenv("ALLOWED_HEADERS", "*")))

    # Empty means admin endpoints are open (local development)
    admin_api_key: Optional[str] = field(default_factory=lambda: os.getenv("ADMIN_API_KEY"))

    auth0_domain: Optional[str] = field(default_factory=lambda: os.getenv("AUTH0_DOMAIN"))
    auth0_client_id: Optional[str] = field(default_factory=lambda: os.getenv("AUTH0_CLIENT_ID"))

    # Test credentials win over live ones
    razorpay_key_id: Optional[str] = field(
        default_factory=lambda: os.getenv("RAZORPAY_TEST_KEY_ID") or os.getenv("RAZORPAY_KEY_ID")
    )
    razorpay_key_secret: Optional[str] = field(
        default_factory=lambda: os.getenv("RAZORPAY_TEST_KEY_SECRET") or os.getenv("RAZORPAY_KEY_SECRET")
    )
    razorpay_api_url: str = field(default_factory=lambda: os.getenv("RAZORPAY_API_URL", "https://api.razorpay.com/v1"))
    default_currency: str = "INR"

    sendgrid_api_key: Optional[str] = field(default_factory=lambda: os.getenv("SENDGRID_API_KEY"))
    email_from: str = field(default_factory=lambda: os.getenv("EMAIL_FROM", "noreply@indosaga.com"))
    email_from_name: str = field(default_factory=lambda: os.getenv("EMAIL_FROM_NAME", "IndoSaga Furniture"))
    admin_email: str = field(default_factory=lambda: os.getenv("ADMIN_EMAIL", "owner@indosaga.com"))
    email_rate_limit_window: int = 60
    email_max_per_window: int = 5
    email_retry_attempts: int = 3
    email_retry_delay: float = 1.0

    meeting_base_url: str = field(default_factory=lambda: os.getenv("MEETING_BASE_URL", "https://meet.jit.si"))

    log_dir: str = field(default_factory=lambda: os.getenv("LOG_DIR", "logs"))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    @property
    def payments_enabled(self) -> bool:
        return bool(self.razorpay_key_id and self.razorpay_key_secret)

    @property
    def auth0_enabled(self) -> bool:
        return bool(self.auth0_domain)


@lru_cache()
def get_settings() -> Settings:
    return Settings()
