from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_NAME: str = "MiniTwit API"
    VERSION: str = "0.1.0"

    # Database
    DATABASE_URL: str = "sqlite:///./minitwit.db"

    # Feeds
    DEFAULT_PAGE_SIZE: int = 100

    # Command checkpoint sessions
    SESSION_COOKIE_NAME: str = "minitwit_session"
    SESSION_TTL_SECONDS: int = 3600
    ANONYMOUS_SESSION: str = "anonymous"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    class Config:
        env_prefix = "MINITWIT_"
        env_file = ".env"
        extra = "ignore"


@lru_cache()
def get_settings():
    return Settings()
