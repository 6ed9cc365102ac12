from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_env: str = "local"
    api_v1_prefix: str = "/api/v1"
    log_level: str = "INFO"

    # Security
    secret_key: str = "changeme"  # override in .env
    access_token_expire_minutes: int = 60

    # Database
    database_url: str

    # Lifecycle deadlines (seconds)
    purge_timeout_seconds: float = 60.0
    seed_purge_timeout_seconds: float = 120.0
    seed_timeout_seconds: float = 120.0

    # Bulk insert chunk size for seeding
    insert_batch_size: int = 500

    # Clinic-local time zone for seeded schedules (IANA name)
    clinic_timezone: str = "UTC"

    # Fix the generator's RNG (useful for demos); None = fresh randomness per run
    seed_random_seed: int | None = None

    # Pydantic v2 style config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Cached settings instance so the .env is parsed once.
    """
    return Settings()
