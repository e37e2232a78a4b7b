"""
Configuration module for the Coach Proxy application.
Handles environment variables and application settings.
"""
import os
from dotenv import load_dotenv

load_dotenv()


def _env_float(name: str, default: float) -> float:
    """Read a float from the environment, falling back to default on bad input."""
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        print(f"   WARNING: {name}={raw!r} is not a number, using {default}")
        return default


def _env_int(name: str, default: int) -> int:
    """Read an int from the environment, falling back to default on bad input."""
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        print(f"   WARNING: {name}={raw!r} is not an integer, using {default}")
        return default


class Config:
    """Application configuration class."""

    # API Keys
    OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")

    # Upstream completion settings
    COACH_MODEL: str = os.getenv("COACH_MODEL", "gpt-4o-mini")
    DEFAULT_TEMPERATURE: float = _env_float("DEFAULT_TEMPERATURE", 0.6)

    # Application Settings
    APP_TITLE: str = "Coach Proxy"
    SERVICE_NAME: str = "coach-proxy"
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = _env_int("PORT", 3000)
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Conversation store bound (0 disables the limit)
    MAX_TRACKED_USERS: int = _env_int("MAX_TRACKED_USERS", 10000)

    # Timeouts (in seconds)
    UPSTREAM_TIMEOUT: float = _env_float("UPSTREAM_TIMEOUT", 30.0)

    # Upstream connection pool
    MAX_UPSTREAM_CONNECTIONS: int = 20
    MAX_KEEPALIVE_CONNECTIONS: int = 5

    @classmethod
    def validate(cls) -> None:
        """Validate configuration and print warnings for missing API keys."""
        if not cls.OPENAI_API_KEY:
            print("   WARNING: OPENAI_API_KEY not found in .env file")
            print("   /chat will answer with an upstream error until it is set.")

        if cls.MAX_TRACKED_USERS < 0:
            print(f"   WARNING: MAX_TRACKED_USERS={cls.MAX_TRACKED_USERS} is negative, store will be unbounded")
            cls.MAX_TRACKED_USERS = 0

Config.validate()
