# config.py – settings loaded through pydantic-settings

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Riot API
    RIOT_API_KEY: str = ""
    DEFAULT_REGION: str = "euw1"  # platform used for summoner / league calls
    RIOT_TIMEOUT: int = 10        # seconds per request
    MATCH_PAGE_SIZE: int = 100    # match ids requested per page

    # Database
    DB_URL: str = "sqlite:///data/trues.db"

    # Logging
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

settings = Settings()
