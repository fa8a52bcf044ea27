"""
Global Configuration for Project 'Sirahpidea Study Buddy'
"""

from pydantic_settings import BaseSettings

# Locale code -> language name handed to Gemini
LANGUAGES = {
    "en": "English",
    "ms": "Malay",
    "ar": "Arabic",
}
DEFAULT_LANGUAGE = "en"


class Settings(BaseSettings):
    """
    Global Base settings for the Study Buddy API
    """
    # App Configuration
    APP_ENV: str = "development"
    APP_PORT: int = 8000
    LOG_LEVEL: str = "INFO"
    REDIS_HOST: str = "redis://localhost:6379/0"

    # Client Host (CORS origin and share-link base)
    UI_HOST: str = "http://localhost:5173"

    # Configuration for external services
    GOOGLE_GEMINI_API_KEY: str
    GEMINI_MODEL: str = "gemini-2.5-flash"

    # Retention
    HISTORY_MAX_ITEMS: int = 20
    HISTORY_TTL_SECONDS: int = 7 * 24 * 3600    # 7 days
    CHAT_TTL_SECONDS: int = 259200              # 3 days

    class Config:
        env_file = ".env"


settings = Settings()


def language_name(code: str | None) -> str:
    """Map a locale code (ms/en/ar) to the language name used in prompts."""
    return LANGUAGES.get((code or "").lower(), LANGUAGES[DEFAULT_LANGUAGE])
