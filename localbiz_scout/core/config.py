"""Application configuration helpers."""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes"}


class ConfigError(RuntimeError):
    """Raised when mandatory configuration is missing."""


@dataclass(frozen=True)
class Settings:
    google_maps_api_key: str = ""
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"
    gemini_temperature: float = 0.1
    places_timeout: float = 10.0
    gemini_timeout: float = 30.0
    ai_website_discovery: bool = True
    ai_social_discovery: bool = True
    port: int = 4000
    cors_origins: str = "*"

    @property
    def places_enabled(self) -> bool:
        return bool(self.google_maps_api_key)

    @property
    def ai_enabled(self) -> bool:
        return bool(self.gemini_api_key)

    def require_places(self) -> str:
        """Return the Places API key or fail before any outbound call is made."""
        if not self.places_enabled:
            raise ConfigError("GOOGLE_MAPS_API_KEY is not configured on the server")
        return self.google_maps_api_key


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUTHY


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from environment variables with sensible defaults."""
    load_dotenv()

    google_maps_api_key = os.getenv("GOOGLE_MAPS_API_KEY", "")
    gemini_api_key = os.getenv("GOOGLE_GEMINI_API_KEY", "")
    gemini_model = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
    gemini_temperature = float(os.getenv("GEMINI_TEMPERATURE", "0.1"))
    places_timeout = float(os.getenv("PLACES_TIMEOUT_SECONDS", "10"))
    gemini_timeout = float(os.getenv("GEMINI_TIMEOUT_SECONDS", "30"))
    port = int(os.getenv("PORT", "4000"))
    cors_origins = os.getenv("CORS_ORIGINS", "*")

    if not google_maps_api_key:
        logger.warning("GOOGLE_MAPS_API_KEY is not set; business searches will fail until you add it.")
    if not gemini_api_key:
        logger.warning("GOOGLE_GEMINI_API_KEY is not set; AI website and social enrichment will be skipped.")

    return Settings(
        google_maps_api_key=google_maps_api_key,
        gemini_api_key=gemini_api_key,
        gemini_model=gemini_model,
        gemini_temperature=gemini_temperature,
        places_timeout=places_timeout,
        gemini_timeout=gemini_timeout,
        ai_website_discovery=_env_flag("AI_WEBSITE_DISCOVERY", True),
        ai_social_discovery=_env_flag("AI_SOCIAL_DISCOVERY", True),
        port=port,
        cors_origins=cors_origins,
    )
