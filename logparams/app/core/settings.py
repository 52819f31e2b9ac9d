from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent.parent.parent.parent


class Settings(BaseSettings):
    log_level: str = "INFO"
    log_format: str = "dev"
    enable_file_logging: bool = False
    log_file_path: str = "/var/log/logparams/logparams.log"

    model_config = SettingsConfigDict(
        env_prefix="LOGPARAMS_",
        env_file=BASE_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
