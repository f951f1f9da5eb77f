"""
Configuration settings for Kalima Backend
"""

from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Server Configuration
    APP_NAME: str = "Kalima Backend"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = True
    HOST: str = "0.0.0.0"
    PORT: int = 8001
    LOG_LEVEL: str = "INFO"

    # Public site, used for sitemap entries
    SITE_BASE_URL: str = "https://kalima.online"

    # Firebase Configuration
    FIREBASE_CREDENTIALS_PATH: str = "./firebase-credentials.json"
    # Support for raw JSON credentials (env var)
    FIREBASE_CREDENTIALS_JSON: str = ""
    FIREBASE_EMULATOR_HOST: str = ""
    # Web API key for the Identity Toolkit REST endpoints (sign in / sign up)
    FIREBASE_WEB_API_KEY: str = ""
    DEV_MODE: bool = False

    # JWT Configuration
    JWT_SECRET_KEY: str = "change-me"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7

    # Unsplash image search (authoring convenience)
    UNSPLASH_ACCESS_KEY: str = ""
    UNSPLASH_API_URL: str = "https://api.unsplash.com"
    FALLBACK_IMAGE_URL: str = (
        "https://images.unsplash.com/photo-1497633762265-9d179a990aa6"
        "?ixlib=rb-1.2.1&auto=format&fit=crop&w=1200&h=600&q=80"
    )

    # Search
    SEARCH_DEBOUNCE_MS: int = 300
    SEARCH_MIN_QUERY_LENGTH: int = 2

    # Language preference cookie (mirrors the browser's stored choice)
    LANGUAGE_COOKIE_NAME: str = "language"

    # CORS Configuration - Allow all localhost ports in development
    ALLOWED_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    @property
    def allowed_origins_list(self) -> List[str]:
        """Convert comma-separated origins to list"""
        origins = [origin.strip()
                   for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]
        if self.DEBUG:
            for port in [3000, 5000, 5173]:
                for host in ("localhost", "127.0.0.1"):
                    origin = f"http://{host}:{port}"
                    if origin not in origins:
                        origins.append(origin)
        return origins

    @property
    def search_debounce_seconds(self) -> float:
        return self.SEARCH_DEBOUNCE_MS / 1000.0

    model_config = {"env_file": ".env",
                    "case_sensitive": True, "extra": "allow"}


# Global settings instance
settings = Settings()
