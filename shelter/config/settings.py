from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    api_base_url: str = "http://localhost:5000/api"
    api_token: str = ""
    api_timeout_seconds: int = 30

    records_client: str = "http"

    export_dir: str = "."
    default_actor: str = "Admin"
