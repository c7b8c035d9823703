from pydantic_settings import BaseSettings
from pydantic import Field

class Settings(BaseSettings):
    app_name: str = "FileFlow Pro"
    app_env: str = Field("dev", alias="APP_ENV")
    secret_key: str = Field("dev-secret-key", alias="SECRET_KEY")
    access_token_expire_minutes: int = Field(60 * 24 * 7, alias="ACCESS_TOKEN_EXPIRE_MINUTES")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    storage_backend: str = Field("memory", alias="STORAGE_BACKEND")
    json_storage_path: str = Field("./data.json", alias="JSON_STORAGE_PATH")
    database_url: str | None = Field(default=None, alias="DATABASE_URL")
    db_host: str = Field("localhost", alias="DB_HOST")
    db_user: str = Field("root", alias="DB_USER")
    db_password: str = Field("", alias="DB_PASSWORD")
    db_name: str = Field("fileflowpro", alias="DB_NAME")

    seed_default_users: bool = Field(True, alias="SEED_DEFAULT_USERS")
    default_password: str = Field("admin123", alias="DEFAULT_PASSWORD")

    upload_dir: str = Field("uploads", alias="UPLOAD_DIR")
    max_upload_mb: int = Field(10, alias="MAX_UPLOAD_MB")

    rate_limit_window_seconds: int = Field(60, alias="RATE_LIMIT_WINDOW_SECONDS")
    rate_limit_max_calls: int = Field(30, alias="RATE_LIMIT_MAX_CALLS")

    class Config:
        env_file = ".env"
        extra = "ignore"
        populate_by_name = True

settings = Settings()
