"""
Configuration module for the Spots backend.

Loads environment variables and validates required settings.
"""
import os
from typing import List
from dotenv import load_dotenv

# Load .env file
load_dotenv()


# Values shipped in templates and build pipelines that must never be treated
# as a live provider credential.
PLACEHOLDER_API_KEYS = frozenset({
    "placeholder-key-for-build-process",
    "sk-placeholder-token-for-build-process",
    "your-google-api-key",
    "changeme",
})


class Settings:
    """Application settings loaded from environment variables."""

    # Google Gemini API
    GOOGLE_API_KEY: str = os.getenv("GOOGLE_API_KEY", "")
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
    GEMINI_TEMPERATURE: float = 0.7
    GEMINI_MAX_OUTPUT_TOKENS: int = int(os.getenv("GEMINI_MAX_OUTPUT_TOKENS", "1000"))
    # Request timeout handed to the SDK transport (milliseconds, 0 = SDK default)
    GEMINI_TIMEOUT_MS: int = int(os.getenv("GEMINI_TIMEOUT_MS", "0"))

    # Shared secret for scheduler-triggered endpoints
    CRON_SECRET: str = os.getenv("CRON_SECRET", "")

    # Supabase (trending city snapshot persistence, optional)
    SUPABASE_URL: str = os.getenv("SUPABASE_URL", "")
    SUPABASE_SECRET_KEY: str = os.getenv("SUPABASE_SECRET_KEY", "")
    TRENDING_TABLE: str = os.getenv("TRENDING_TABLE", "trending_city")

    # Application Settings
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # CORS Settings
    CORS_ALLOWED_ORIGINS: List[str] = [
        origin.strip()
        for origin in os.getenv("CORS_ALLOWED_ORIGINS", "").split(",")
        if origin.strip()
    ]

    @property
    def has_live_provider_key(self) -> bool:
        """True when GOOGLE_API_KEY is set and is not a known placeholder."""
        key = (self.GOOGLE_API_KEY or "").strip()
        return bool(key) and key not in PLACEHOLDER_API_KEYS

    @property
    def has_supabase(self) -> bool:
        """True when the trending snapshot can be persisted to Supabase."""
        return bool(self.SUPABASE_URL and self.SUPABASE_SECRET_KEY)

    @classmethod
    def validate(cls) -> None:
        """
        Validate that all required settings are configured.

        The provider key is deliberately not required: without it the
        pipeline serves deterministic mock data.

        Raises:
            ValueError: If any required setting is missing.
        """
        required_settings = {
            "CRON_SECRET": cls.CRON_SECRET,
        }

        missing = [key for key, value in required_settings.items() if not value]

        if missing:
            raise ValueError(
                f"Missing required environment variables: {', '.join(missing)}. "
                "Please check your .env file."
            )

    @classmethod
    def is_production(cls) -> bool:
        """Check if running in production environment."""
        return cls.ENVIRONMENT.lower() == "production"

    @classmethod
    def is_development(cls) -> bool:
        """Check if running in development environment."""
        return cls.ENVIRONMENT.lower() == "development"


# Create a singleton instance
settings = Settings()

# Validate settings on module import (will fail fast if misconfigured)
# Skip validation during tests or when importing for introspection
if os.getenv("VALIDATE_CONFIG", "true").lower() == "true":
    try:
        settings.validate()
    except ValueError as e:
        # In development, warn but don't crash
        if settings.is_development():
            print(f"⚠️  Warning: {e}")
            print("   Scheduled refresh endpoints will reject every call until CRON_SECRET is set.")
        else:
            raise
