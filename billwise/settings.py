from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="BILLWISE_", extra="ignore")

    db_url: str = "sqlite:///billwise.db"

    log_level: str = "INFO"
    log_json: bool = False

    default_timezone: str = "UTC"
    default_currency: str = "INR"
    default_reminder_time: str = "18:00"  # HH:MM, owner-local


settings = Settings()
