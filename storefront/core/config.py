import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

DEFAULT_JWT_SECRET = "change-me"


def _get_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_list(value: str | None, default: str) -> tuple[str, ...]:
    raw = value if value is not None else default
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    """Runtime configuration, built once at startup and read-only afterwards."""

    APP_ENV: str = "development"
    DATABASE_URL: str = "sqlite:///./storefront.db"
    DATABASE_ECHO: bool = False

    JWT_SECRET_KEY: str = DEFAULT_JWT_SECRET
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRES_MINUTES: int = 60

    # bcrypt cost factor; tests drop this to the minimum of 4
    BCRYPT_ROUNDS: int = 10

    CORS_ALLOW_ORIGINS: tuple[str, ...] = ("http://localhost:3000",)
    LOG_LEVEL: str = "INFO"


def load_settings() -> Settings:
    return Settings(
        APP_ENV=os.getenv("APP_ENV", "development"),
        DATABASE_URL=os.getenv("DATABASE_URL", "sqlite:///./storefront.db"),
        DATABASE_ECHO=_get_bool(os.getenv("DATABASE_ECHO"), default=False),
        JWT_SECRET_KEY=os.getenv("JWT_SECRET_KEY", DEFAULT_JWT_SECRET),
        JWT_ALGORITHM=os.getenv("JWT_ALGORITHM", "HS256"),
        JWT_EXPIRES_MINUTES=int(os.getenv("JWT_EXPIRES_MINUTES", "60")),
        BCRYPT_ROUNDS=int(os.getenv("BCRYPT_ROUNDS", "10")),
        CORS_ALLOW_ORIGINS=_get_list(os.getenv("CORS_ALLOW_ORIGINS"), "http://localhost:3000"),
        LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


def validate_runtime_config(settings: Settings) -> None:
    if settings.APP_ENV.lower() == "production" and settings.JWT_SECRET_KEY == DEFAULT_JWT_SECRET:
        raise RuntimeError("JWT_SECRET_KEY must be set in production.")
