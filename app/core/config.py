from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str = Field(..., alias="DATABASE_URL")
    db_echo: bool = Field(False, alias="DB_ECHO")
    db_pool_recycle: int = Field(300, alias="DB_POOL_RECYCLE")
    create_tables: bool = Field(False, alias="CREATE_TABLES")

    jwt_secret_key: str = Field(..., alias="JWT_SECRET_KEY")
    jwt_algorithm: str = Field("HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(60 * 24 * 30, alias="ACCESS_TOKEN_EXPIRE_MINUTES")

    # Public sign-up may create administrators unless this is turned off
    allow_admin_registration: bool = Field(True, alias="ALLOW_ADMIN_REGISTRATION")

    receipt_prefix: str = Field("RCP", alias="RECEIPT_PREFIX")
    receipt_max_attempts: int = Field(5, alias="RECEIPT_MAX_ATTEMPTS")

    log_level: str = Field("INFO", alias="LOG_LEVEL")
    cors_origins: List[str] = Field(default_factory=lambda: ["*"], alias="CORS_ORIGINS")

    host: str = Field("0.0.0.0", alias="HOST")
    port: int = Field(8000, alias="PORT")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()
