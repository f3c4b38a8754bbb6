from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    database_url: str = "sqlite:///./data/resumes.db"
    database_echo: bool = False
    app_password: str = "changeme"
    secret_key: str = "dev-secret-key-change-in-production"
    session_days: int = 7

    # Frontend dev server allowed by CORS
    client_origin: str = "http://localhost:5173"

    # Resume styling
    default_accent_color: str = "#8b4545"

    log_level: str = "INFO"

    class Config:
        env_file = ".env"


@lru_cache
def get_settings() -> Settings:
    return Settings()
