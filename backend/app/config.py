"""Configuración central de la aplicación basada en variables de entorno."""

from pydantic_settings import BaseSettings
from typing import List
from pathlib import Path


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./centros.db"
    SECRET_KEY: str = "change-me-to-a-random-secret-key"
    DEBUG: bool = False
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5000"]
    LOG_LEVEL: str = "INFO"

    # JWT
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 480

    # Flujo de aprobación de versiones
    MIN_REASON_LENGTH: int = 5

    # Revisión automática de vencimientos
    EXPIRATION_CHECK_ENABLED: bool = True
    EXPIRATION_CHECK_INTERVAL_HOURS: float = 6
    EXPIRATION_WARNING_DAYS: int = 30
    SYSTEM_ACTOR_NAME: str = "Sistema Automático"

    class Config:
        # Carga backend/.env sin importar el cwd de ejecución.
        env_file = str(Path(__file__).resolve().parents[1] / ".env")


settings = Settings()
