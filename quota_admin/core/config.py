from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "quota-admin"

    api_base_url: str = "http://localhost:3000"
    admin_access_token: str = ""
    request_timeout_seconds: float = 30.0

    # Quota display; 500000 quota units render as "$1.00"
    quota_per_unit: int = 500000
    display_in_currency: bool = True
    quota_display_digits: int = 2

    export_dir: str = "."
    log_level: str = "INFO"

    sensitive_exempt_group: str = ""

    model_config = SettingsConfigDict(
        env_prefix="QUOTA_ADMIN_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
