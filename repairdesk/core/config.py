from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    SHOP_NAME: str = "Repair Desk"
    SHOP_TIMEZONE: str = "America/Sao_Paulo"

    RECORDS_PROVIDER: str = "memory"
    SUPABASE_URL: str | None = None
    SUPABASE_API_KEY: str | None = None
    RECORDS_TIMEOUT_SECONDS: float = 10.0

    PICKER_ALLOW_CUSTOM_VALUE: bool = True
    CLIENT_PICKER_LIMIT: int = 10
    ORDER_LIST_LIMIT: int = 100


settings = Settings()
