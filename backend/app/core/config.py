from pydantic_settings import BaseSettings
from functools import lru_cache
import os
from dotenv import load_dotenv

load_dotenv()

GOOGLE_DIRECTIONS_URL = "https://maps.googleapis.com/maps/api/directions/json"


class Settings(BaseSettings):
    APP_NAME: str = os.getenv("APP_NAME", "Route Compare Backend")
    APP_VERSION: str = os.getenv("APP_VERSION", "1.0.0")
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    GOOGLE_MAPS_API_KEY: str = os.getenv("GOOGLE_MAPS_API_KEY", "")
    DIRECTIONS_URL: str = os.getenv("DIRECTIONS_URL", GOOGLE_DIRECTIONS_URL)
    UPSTREAM_TIMEOUT_S: float = float(os.getenv("UPSTREAM_TIMEOUT_S", "10.0"))

    # Used when the caller does not pass timeZone / locale
    DEFAULT_TIME_ZONE: str = os.getenv("DEFAULT_TIME_ZONE", "UTC")
    DEFAULT_LOCALE: str = os.getenv("DEFAULT_LOCALE", "en_US")

    ALLOWED_ORIGINS: list = os.getenv("ALLOWED_ORIGINS", "http://localhost:8080,http://localhost:5173,*").split(",")

    class Config:
        case_sensitive = True

@lru_cache()
def get_settings():
    return Settings()
