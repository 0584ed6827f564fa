from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
    DATABASE_URL: str = "sqlite+aiosqlite:///./workout.db"
    SEED_EXERCISES: bool = True
    CORS_ORIGINS: str = ""
    LOG_LEVEL: str = "INFO"
    APP_ENV: str = "local"
    SERVICE_NAME: str = "gymlog"
    API_URL: str = "http://localhost:3001/api"
    HOST: str = "127.0.0.1"
    PORT: int = 3001

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


@lru_cache()
def get_settings() -> Settings:
    return Settings()
