"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
API starts against a local MongoDB without any setup.  In a production
deployment you should override these via environment variables or a
dedicated configuration service.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Tourism Marketplace API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Secret used to sign access tokens.  ``ACCESS_TOKEN_SECRET`` is
    # accepted for deployments that still export the older variable name.
    secret_key: str = os.getenv("SECRET_KEY", os.getenv("ACCESS_TOKEN_SECRET", "change_me"))
    # Tokens live for five hours unless overridden.
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(5 * 60)))
    algorithm: str = os.getenv("ALGORITHM", "HS256")

    # Document store.  One client is created per process by ``core.db``.
    mongodb_uri: str = os.getenv("MONGODB_URI", "mongodb://localhost:27017")
    mongodb_database: str = os.getenv("MONGODB_DATABASE", "TourismDB")

    # Payment collaborator (Stripe PaymentIntents).  Amounts are sent in
    # minor units of ``payment_currency``.
    stripe_secret_key: str = os.getenv("STRIPE_SECRET_KEY", "")
    stripe_api_base: str = os.getenv("STRIPE_API_BASE", "https://api.stripe.com/v1")
    payment_currency: str = os.getenv("PAYMENT_CURRENCY", "usd")

    # Directory for uploaded images.  Relative paths are resolved against
    # the current working directory.
    upload_dir: str = os.getenv("UPLOAD_DIR", "uploads")

    # Comma‑separated list of allowed CORS origins.
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "5000"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes values at class definition time, environment variables should
# be set before importing this module.
settings = Settings()
