from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "uploads"
    db_username: str = "uploads"
    db_password: str = "secret"

    files_root: str = "/app/files"
    path_aliases: dict[str, str] = {}

    image_engine: str = "pillow"

    thumbnail_prefix: str = "thumb-"
    original_prefix: str = "original-"
    upload_scenarios: list[str] = ["default"]
    delete_files_with_record: bool = False
    clean_dir_on_update: bool = False
