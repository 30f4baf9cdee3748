import os
from pathlib import Path

from decouple import Config, RepositoryEnv
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_ROOT = Path(__file__).resolve().parents[2]
PROJECT_ROOT = next(
    (p for p in Path(__file__).resolve().parents if (p / "main.py").exists()),
    PACKAGE_ROOT.parent,
)

# Determine which env file to load
env_file = os.getenv("ENV_FILE", ".env")
env_path = PROJECT_ROOT / env_file

# Only use RepositoryEnv if the env file exists
if env_path.exists():
    config = Config(RepositoryEnv(env_path))
else:
    # fallback: read directly from os.environ using decouple's AutoConfig
    from decouple import AutoConfig

    config = AutoConfig(search_path=None)


DEFAULT_PLEDGE_TEMPLATE = PACKAGE_ROOT / "static" / "documents" / "supporter-pledge.pdf"


class Settings(BaseSettings):
    # App general
    DEBUG: bool = config("DEBUG", default=False, cast=bool)
    APP_NAME: str = config("APP_NAME", default="SIGNHOOK")
    APP_VERSION: str = config("APP_VERSION", default="1.0.0")
    ENVIRONMENT: str = config("ENVIRONMENT", default="dev")
    APP_PORT: int = config("APP_PORT", default=8000, cast=int)
    APP_URL: str = config("APP_URL", default="https://signhook.example.com")
    DEV_URL: str = config("DEV_URL", default="http://localhost:3000")
    LOG_LEVEL: str = config("LOG_LEVEL", default="INFO")

    # Database
    DB_TYPE: str = config("DB_TYPE", default="postgresql")
    DB_HOST: str = config("DB_HOST", default="localhost")
    DB_PORT: int = config("DB_PORT", default=5432, cast=int)
    DB_USER: str = config("DB_USER", default="user")
    DB_PASS: str = config("DB_PASS", default="password")
    DB_NAME: str = config("DB_NAME", default="dbname")
    DB_ECHO: bool = config("DB_ECHO", default=False, cast=bool)

    # Redis
    REDIS_URL: str = config("REDIS_URL", default="redis://localhost:6379/0")

    # Stripe
    STRIPE_SECRET_KEY: str = config("STRIPE_SECRET_KEY", default="sk_test_...")
    STRIPE_WEBHOOK_SECRET: str = config("STRIPE_WEBHOOK_SECRET", default="")
    STRIPE_WEBHOOK_TOLERANCE: int = config("STRIPE_WEBHOOK_TOLERANCE", default=300, cast=int)

    # Supporter pledge provisioning
    PLEDGE_CHECKOUT_SOURCE: str = config("PLEDGE_CHECKOUT_SOURCE", default="landing")
    PLEDGE_TEMPLATE_PATH: str = config(
        "PLEDGE_TEMPLATE_PATH", default=str(DEFAULT_PLEDGE_TEMPLATE)
    )
    PLEDGE_DOCUMENT_TITLE: str = config(
        "PLEDGE_DOCUMENT_TITLE", default="Supporter Pledge.pdf"
    )

    # Uploaded signature images
    SIGNATURE_CACHE_PREFIX: str = config("SIGNATURE_CACHE_PREFIX", default="signature:")
    SIGNATURE_CACHE_TTL_SECONDS: int = config(
        "SIGNATURE_CACHE_TTL_SECONDS", default=3600, cast=int
    )

    model_config = SettingsConfigDict(extra="allow")


settings = Settings()
