"""
Application configuration.

Loads settings from environment variables and .env file.
All configuration is centralized here; modules read `settings`, not os.environ.
"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

DEV_JWT_SECRET = "dev-only-insecure-jwt-secret-change-me"
POSTGRES_FIELDS = frozenset(
    {"postgres_user", "postgres_password", "postgres_host", "postgres_port", "postgres_db"}
)


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Display name for the API.
        version: Current API version string.
        debug: Enable debug mode. Must be False in production.
        environment: Deployment environment name.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        rate_limit_default: Default rate limit for all endpoints.
        rate_limit_auth: Rate limit for credential-handling endpoints.
        rate_limit_payments: Rate limit for payment initiation endpoints.

    Provider credentials default to empty strings so the API can boot
    locally; the health endpoint reports what is missing.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    project_name: str = "Hoardrun Banking API"
    version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"
    rate_limit_default: str = "60/minute"
    rate_limit_auth: str = "5/15 minutes"
    rate_limit_payments: str = "10/minute"

    # --- Database ---
    database_url: Optional[str] = None
    postgres_user: str = "postgres"
    postgres_password: str = "postgres"
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_db: str = "hoardrun"
    sqlite_fallback_path: str = "hoardrun.db"

    # --- Cache ---
    redis_url: str = "redis://localhost:6379/0"

    # --- Authentication ---
    jwt_secret: str = DEV_JWT_SECRET
    jwt_algorithm: str = "HS256"
    jwt_expiry_minutes: int = 60 * 24 * 7

    # --- MTN MOMO ---
    momo_api_url: str = "https://sandbox.momodeveloper.mtn.com"
    momo_primary_key: str = ""
    momo_user_id: str = ""
    momo_api_key: str = ""
    momo_target_environment: str = "sandbox"
    momo_callback_url: str = "http://localhost:8000/api/v1/payments/momo/callback"
    momo_timeout_seconds: float = 15.0

    # --- Exchange rates ---
    exchange_rate_api_url: str = "https://api.exchangerate.host/latest"
    exchange_rate_api_key: str = ""
    exchange_rate_ttl_seconds: int = 3600

    # --- Alpha Vantage ---
    alpha_vantage_base_url: str = "https://www.alphavantage.co/query"
    alpha_vantage_api_key: str = ""
    alpha_vantage_max_retries: int = 3

    # --- Mailgun ---
    mailgun_api_key: str = ""
    mailgun_domain: str = ""
    mailgun_from: str = "Hoardrun <no-reply@hoardrun.com>"
    mailgun_base_url: str = "https://api.mailgun.net/v3"
    app_url: str = "http://localhost:3000"

    # --- Transaction monitoring ---
    transaction_amount_threshold: float = 5000.0
    transaction_frequency_threshold: int = 10

    def get_database_url(self) -> str:
        """Return the effective database URL.

        Priority:
        1. Explicit `DATABASE_URL`
        2. Local SQLite file when running in development
        3. DSN built from postgres_* values (Docker Compose or local Postgres)
        """
        if self.database_url:
            return self.database_url
        if self.environment == "development":
            return f"sqlite:///{self.sqlite_fallback_path}"
        return (
            f"postgresql+psycopg2://{self.postgres_user}:{self.postgres_password}@"
            f"{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    def database_configured(self) -> bool:
        """True when DATABASE_URL or any postgres_* value was set explicitly."""
        return bool(self.database_url) or bool(
            POSTGRES_FIELDS & self.model_fields_set
        )

    def missing_required(self) -> list[str]:
        """Return names of required settings that are not configured.

        Development runs on the SQLite fallback and the dev JWT secret;
        any other environment must configure a database (DATABASE_URL or
        the postgres_* values) and a JWT secret.
        """
        if self.environment == "development":
            return []
        missing = []
        if not self.database_configured():
            missing.append("database_url")
        if self.jwt_secret == DEV_JWT_SECRET:
            missing.append("jwt_secret")
        return missing


settings = Settings()
