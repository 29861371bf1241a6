from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="FITCOACH_",
        case_sensitive=False,
    )

    # App
    env: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Database
    db_url: str = "sqlite+aiosqlite:///./fitcoach.db"

    # Session mirroring defaults (used when a template has no metadata)
    default_session_duration_minutes: int = 60
    default_session_type: str = "personal_training"

    # Notifications
    notifications_enabled: bool = True


def get_settings() -> Settings:
    return Settings()
