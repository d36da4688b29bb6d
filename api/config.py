"""
Environment-aware configuration.
Signing key, token lifetimes, CORS, database URL and the public endpoint allow-list.
"""
import os
from dotenv import load_dotenv
from datetime import timedelta

load_dotenv()  # Read .env if present


def _seconds(name: str, default: int) -> timedelta:
    return timedelta(seconds=int(os.getenv(name, str(default))))


class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")  # Set a strong key in production
    DEBUG = False
    TESTING = False
    # Comma-separated list of allowed browser origins
    CORS_ORIGINS = [
        o.strip()
        for o in os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:5174").split(",")
        if o.strip()
    ]
    APP_ENV = os.getenv("APP_ENV", "dev")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    DEFAULT_JWT_SECRET = "dev-secret-change-me"
    REQUIRE_STRONG_SECRET = False
    JWT_SECRET = os.getenv("JWT_SECRET", DEFAULT_JWT_SECRET)
    JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRES = _seconds("ACCESS_TOKEN_EXPIRES_SECONDS", 86400)  # 24 hours
    REFRESH_TOKEN_EXPIRES = _seconds("REFRESH_TOKEN_EXPIRES_SECONDS", 604800)  # 7 days

    # Endpoints that skip bearer-token parsing entirely
    PUBLIC_ENDPOINTS = frozenset({
        "root",
        "static",
        "auth.register",
        "auth.login",
        "auth.refresh",
        "health.health",
        "health.db_health",
    })
    PUBLIC_ENDPOINT_PREFIXES = ("flasgger.",)


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")


class TestingConfig(BaseConfig):
    TESTING = True
    JWT_SECRET = "test-secret-key-with-enough-length-for-hs256"


class ProductionConfig(BaseConfig):
    DEBUG = False
    REQUIRE_STRONG_SECRET = True


def get_config(name: str | None):
    """
    Select config class.
    - If name is provided, choose by name.
    - Else choose based on APP_ENV (dev/test/prod).
    """
    env = (name or os.getenv("APP_ENV", "dev")).lower()
    if env in ["prod", "production"]:
        return ProductionConfig
    if env in ["test", "testing"]:
        return TestingConfig
    return DevelopmentConfig
