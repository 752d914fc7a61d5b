"""
Configuration settings for the AI provider orchestration layer.

All settings are loaded from environment variables with sensible defaults.
Use .env file for local development.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


# Values shipped in .env templates; treated as "not configured"
PLACEHOLDER_API_KEYS = frozenset({
    "your_openai_api_key_here",
    "your_gemini_api_key_here",
})


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Application ===
    APP_NAME: str = "Lead Generation Inference Layer"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"

    # === Primary provider (OpenAI) ===
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_BASE_URL: str = "https://api.openai.com/v1"
    OPENAI_MODEL: str = "gpt-4o-mini"
    OPENAI_TIMEOUT: int = 60  # seconds, per request

    # === Secondary provider (Gemini) ===
    GEMINI_API_KEY: Optional[str] = None
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta"
    GEMINI_MODEL: str = "gemini-2.5-flash"
    GEMINI_TIMEOUT: int = 60  # seconds, per request
    GEMINI_MIN_KEY_LENGTH: int = 20

    # === Generation parameters ===
    DECISION_MAKER_TEMPERATURE: float = 0.3
    DECISION_MAKER_MAX_TOKENS: int = 1000
    GEMINI_DECISION_MAKER_MAX_TOKENS: int = 2000  # Gemini spends part of the budget on thinking
    INDUSTRY_TEMPERATURE: float = 0.2
    INDUSTRY_MAX_TOKENS: int = 120

    # === Retry policy ===
    MAX_ATTEMPTS_STANDARD: int = 3
    MAX_ATTEMPTS_EXTENDED: int = 6  # After the provider reports overload/rate limiting
    UNAVAILABLE_DELAY_TABLE: list[float] = [5.0, 15.0, 30.0, 60.0, 120.0, 180.0]
    EXPONENTIAL_BASE_DELAY: float = 1.0  # 1s, 2s, 4s...
    JITTER_FRACTION: float = 0.2
    PROVIDER_DELAY_JITTER_FRACTION: float = 0.05

    # === Validation ===
    MIN_DECISION_MAKERS: int = 3
    MAX_DECISION_MAKERS: int = 10
    MIN_REASONING_LENGTH: int = 10
    MAX_INDUSTRIES: int = 3
    PAD_INDUSTRY_LIST: bool = True  # Repeat last entry up to MAX_INDUSTRIES
    MIN_REQUIREMENT_TEXT_LENGTH: int = 10

    # === Monitoring ===
    PROMETHEUS_ENABLED: bool = True

    @property
    def openai_configured(self) -> bool:
        """Whether the primary provider has a usable API key."""
        key = (self.OPENAI_API_KEY or "").strip()
        return bool(key) and key not in PLACEHOLDER_API_KEYS

    @property
    def gemini_configured(self) -> bool:
        """Whether the secondary provider has a usable API key."""
        key = (self.GEMINI_API_KEY or "").strip()
        return (
            bool(key)
            and key not in PLACEHOLDER_API_KEYS
            and len(key) > self.GEMINI_MIN_KEY_LENGTH
        )


# Global settings instance
settings = Settings()
