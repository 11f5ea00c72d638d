"""
Configuration settings for the application
"""

import os
from typing import List
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application settings"""

    # Storage
    STORE_BACKEND: str = os.getenv("STORE_BACKEND", "sql")  # sql | sheet
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./rsvps.db")
    SHEET_PATH: str = os.getenv("SHEET_PATH", "./rsvps.xlsx")
    SHEET_NAME: str = os.getenv("SHEET_NAME", "RSVPs")

    # Server
    HOST: str = os.getenv("HOST", "127.0.0.1")
    PORT: int = int(os.getenv("PORT", "3001"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # CORS
    ALLOW_ORIGINS: List[str] = ["*"]

    class Config:
        env_file = ".env"

settings = Settings()
