import json
import os
from typing import Annotated, List
from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode

# Load environment variables from the correct .env file
os.environ.setdefault("APP_ENV", "development")
env_file = ".env" if os.getenv("APP_ENV") == "development" else ".env.production"
load_dotenv(env_file)


DEFAULT_CLINIC_ROOMS = [
    "Consultorio 1", "Consultorio 2", "Consultorio 3", "Consultorio 4",
    "Consultorio 5", "Consultorio 6", "Consultorio 7", "Área de Ecografía",
]


class Settings(BaseSettings):
    APP_ENV: str = "development"
    DEBUG: bool = False
    CLINIC_NAME: str = "Medcon"
    DATABASE_URL: str = "sqlite:///./medcon.db"
    STORAGE_KEY_PREFIX: str = "mediflow_"
    JWT_SECRET: str = "change-me-in-production"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRATION_MINUTES: int = 720
    ALLOWED_ORIGINS: Annotated[List[str], NoDecode] = ["*"]
    LOG_LEVEL: str = "info"

    # Fixed front-desk credentials
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD: str = "admin"
    ASSISTANT_USERNAME: str = "asistente"
    ASSISTANT_PASSWORD: str = "asistente"

    CLINIC_ROOMS: Annotated[List[str], NoDecode] = DEFAULT_CLINIC_ROOMS

    # Report generator (LLM) settings
    REPORT_ENDPOINT_URL: str = ""
    REPORT_TIMEOUT_SECONDS: float = 60.0

    # Accept both JSON lists and comma-separated strings from the environment
    @field_validator("ALLOWED_ORIGINS", "CLINIC_ROOMS", mode="before")
    def split_comma_separated(cls, value):
        if isinstance(value, str):
            if value.strip().startswith("["):
                return json.loads(value)
            return [item.strip() for item in value.split(",") if item.strip()]
        return value


settings = Settings()
