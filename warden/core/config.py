"""
Library configuration.

All settings are loaded from environment variables (or a .env file).
Pydantic-settings validates and types every value, so a bad CACHE_TTL
fails at startup instead of on the first permission check.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── App ──────────────────────────────────────────────────────────
    APP_NAME: str = "warden"
    DEBUG: bool = False

    # ── Database ─────────────────────────────────────────────────────
    # Used by the request dependencies and the seed script.
    DATABASE_URL: str = "sqlite:///./warden.db"

    # ── Cache ────────────────────────────────────────────────────────
    # Minutes a cached role / permission list stays valid.
    CACHE_TTL: int = 60
    CACHE_KEY_PREFIX: str = "warden"

    # ── Resolution ───────────────────────────────────────────────────
    # When enabled, `can()` also checks permissions attached straight
    # to the user (not only through roles).
    USE_DIRECT_PERMISSIONS: bool = False

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
