import os
from typing import Optional
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application settings using Pydantic BaseSettings"""

    # OMDb
    OMDB_API_KEY: str = os.getenv("OMDB_API_KEY", "")
    OMDB_BASE_URL: str = os.getenv("OMDB_BASE_URL", "http://www.omdbapi.com/")
    OMDB_TIMEOUT: int = int(os.getenv("OMDB_TIMEOUT", "10"))

    # CORS (comma separated)
    CORS_ALLOW_ORIGINS: Optional[str] = os.getenv("CORS_ALLOW_ORIGINS")

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./cinefind.db")
    AUTO_CREATE_TABLES: bool = os.getenv("AUTO_CREATE_TABLES", "false").lower() == "true"

    # Watchlist storage: "file", "sql" or "memory"
    WATCHLIST_BACKEND: str = os.getenv("WATCHLIST_BACKEND", "file")
    WATCHLIST_PATH: str = os.getenv("WATCHLIST_PATH", "watchlist.json")
    WATCHLIST_STORAGE_KEY: str = os.getenv("WATCHLIST_STORAGE_KEY", "watchlist")

    # Client
    PROXY_BASE_URL: str = os.getenv("PROXY_BASE_URL", "http://localhost:3000")
    PROXY_TIMEOUT: int = int(os.getenv("PROXY_TIMEOUT", "30"))

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Environment
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    DEBUG: bool = os.getenv("DEBUG", "True").lower() == "true"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

# Singleton instance
_settings: Optional[Settings] = None

def get_settings() -> Settings:
    """Get settings singleton instance"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
