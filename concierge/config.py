"""
Concierge Service Configuration
Loads settings from environment variables
"""

import os
from typing import List, Optional
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _env_flag(name: str, default: str = "true") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Application settings loaded from environment"""

    # Generation service (Gemini REST)
    # API_KEY is accepted as an alias
    GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY", "")
    GEMINI_BASE_URL: str = os.getenv(
        "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta/models"
    )
    GEMINI_TEXT_MODEL: str = os.getenv("GEMINI_TEXT_MODEL", "gemini-3-flash-preview")
    GEMINI_CHAT_MODEL: str = os.getenv("GEMINI_CHAT_MODEL", GEMINI_TEXT_MODEL)
    GEMINI_IMAGE_MODEL: str = os.getenv("GEMINI_IMAGE_MODEL", "gemini-2.5-flash-image")

    # 0 disables the timeout: a stalled call only stalls its own affordance
    GENERATION_TIMEOUT_SECONDS: float = float(os.getenv("GENERATION_TIMEOUT_SECONDS", "0"))

    # Credential persistence
    CREDENTIAL_STORAGE_KEY: str = os.getenv("CREDENTIAL_STORAGE_KEY", "concierge:gemini_api_key")

    # Redis Configuration
    REDIS_ENABLED: bool = _env_flag("REDIS_ENABLED")
    REDIS_HOST: str = os.getenv("REDIS_HOST", "localhost")
    REDIS_PORT: int = int(os.getenv("REDIS_PORT", "6379"))
    REDIS_DB: int = int(os.getenv("REDIS_DB", "0"))
    REDIS_PASSWORD: Optional[str] = os.getenv("REDIS_PASSWORD") or None

    # Dashboard
    DISPLAYED_PER_CATEGORY: int = int(os.getenv("DISPLAYED_PER_CATEGORY", "2"))
    # 0 replays the whole transcript on every chat turn
    CHAT_HISTORY_LIMIT: int = int(os.getenv("CHAT_HISTORY_LIMIT", "0"))

    # Sessions idle longer than this are dropped with their cached content
    SESSION_TTL_HOURS: float = float(os.getenv("SESSION_TTL_HOURS", "24"))

    # API Configuration
    API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
    API_PORT: int = int(os.getenv("API_PORT", "8000"))
    API_ENV: str = os.getenv("API_ENV", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # CORS Configuration
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173")

    @property
    def cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list"""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def generation_timeout(self) -> Optional[float]:
        """httpx timeout value; None when disabled"""
        return self.GENERATION_TIMEOUT_SECONDS or None


# Global settings instance
settings = Settings()
