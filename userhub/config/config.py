from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Database
    DATABASE_URL: str = "localhost"
    DATABASE_PORT: str = "5432"
    DATABASE_NAME: str = "userhub"
    DATABASE_USER: str = "userhub"
    DATABASE_PASSWORD: str = ""
    DATABASE_DSN: str | None = None

    # API
    BCRYPT_ROUNDS: int = 12
    USERS_PER_PAGE: int = 8
    USERS_MAX_PER_PAGE: int = 100
    CORS_ORIGINS: list[str] = ["*"]
    DEBUG: bool = False

    @property
    def sqlalchemy_url(self) -> str:
        """Полный URL подключения к БД"""
        if self.DATABASE_DSN:
            return self.DATABASE_DSN
        return (
            f"postgresql+asyncpg://{self.DATABASE_USER}:{self.DATABASE_PASSWORD}"
            f"@{self.DATABASE_URL}:{self.DATABASE_PORT}/{self.DATABASE_NAME}"
        )


class AdminSettings(BaseSettings):
    """Настройки админ-панели"""
    model_config = SettingsConfigDict(env_file=".env", env_prefix="ADMIN_", extra="ignore")

    API_URL: str = "http://localhost:8000"
    API_TIMEOUT: float = 10
    DEFAULT_PER_PAGE: int = 10
    PER_PAGE_OPTIONS: list[int] = [2, 10, 25, 50]


@lru_cache()
def get_settings():
    return Settings()


@lru_cache()
def get_admin_settings():
    return AdminSettings()
