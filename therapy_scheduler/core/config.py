# therapy_scheduler/core/config.py

from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

from therapy_scheduler.utils.errors import ConfigurationError


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # MongoDB settings
    MONGODB_URI: str = "mongodb://localhost:27017"
    MONGODB_DB: str = "therapy_scheduler"

    # OpenAI settings
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_BASE_URL: str = "https://api.openai.com/v1"

    # LLM settings
    LLM_MODEL: str = "gpt-3.5-turbo"
    LLM_TEMPERATURE: float = 0.7
    LLM_MAX_TOKENS: int = 1024

    # Auth/JWT settings (admin bearer tokens for the OAuth endpoint)
    SECRET_KEY: Optional[str] = None
    JWT_ALGORITHM: str = "HS256"

    # Google OAuth / Calendar
    GOOGLE_CLIENT_ID: Optional[str] = None
    GOOGLE_CLIENT_SECRET: Optional[str] = None
    GOOGLE_REFRESH_TOKEN: Optional[str] = None
    GOOGLE_REDIRECT_URI: str = "http://localhost:8000/oauth"
    GOOGLE_CALENDAR_ID: str = "primary"

    # Fixed calendar event booked on a therapist match
    CALENDAR_EVENT_NAME: str = "Therapy Session"
    CALENDAR_EVENT_DESCRIPTION: str = "Therapy appointment scheduled via healthcare chatbot"
    CALENDAR_EVENT_START: str = "2025-05-15T16:00:00-07:00"
    CALENDAR_EVENT_DURATION_MINUTES: int = 60
    CALENDAR_TIMEZONE: str = "America/Los_Angeles"

    FRONTEND_URL: str = "http://localhost:5173"

    # Logging
    LOG_LEVEL: str = "INFO"

    # Chat flow behaviour
    PERSIST_UNMATCHED_INQUIRIES: bool = True
    BOOK_CALENDAR_ON_MATCH: bool = True
    THERAPIST_FETCH_LIMIT: int = 100

    def require(self, *names: str) -> None:
        """
        Raises ConfigurationError naming every listed setting that is unset or empty.
        """
        missing = [name for name in names if not getattr(self, name, None)]
        if missing:
            raise ConfigurationError(
                f"Missing required environment variable(s): {', '.join(missing)}"
            )


@lru_cache
def get_settings() -> Settings:
    return Settings()
