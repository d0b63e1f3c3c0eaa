from pathlib import Path
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class DatabaseSettings(BaseSettings):
    database_url: str = Field("sqlite:///./gem_finder.db")
    pool_size: int = Field(10)
    max_overflow: int = Field(20)
    pool_timeout: int = Field(30)  # seconds
    pool_recycle: int = Field(1800)  # recycle connections every 30 minutes
    pool_pre_ping: bool = Field(True)


class AuthSettings(BaseSettings):
    secret_key: str = Field("change-me-in-production")
    algorithm: str = Field("HS256")
    access_token_expires: int = Field(120)  # minutes


class MediaSettings(BaseSettings):
    upload_dir: str = Field(
        str(Path(__file__).parent.parent.parent / "uploads")
    )
    url_prefix: str = Field("/uploads")
    max_upload_bytes: int = Field(5 * 1024 * 1024)


class AppSettings(BaseSettings):
    environment: str = Field("development")
    port: int = Field(5000)
    frontend_url: str = Field("http://localhost:5173")
    backend_url: str = Field("http://localhost:5000")
    rate_limit_enabled: bool = Field(True)
    rate_limit_default: str = Field("120/minute")
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    media: MediaSettings = Field(default_factory=MediaSettings)

    @field_validator("backend_url", "frontend_url", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/") if isinstance(v, str) else v

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"

    @property
    def allowed_origins(self) -> List[str]:
        """Frontend origins allowed by CORS, comma separated in the env."""
        origins = []
        for origin in self.frontend_url.split(","):
            origin = origin.strip().rstrip("/")
            if origin.startswith(("http://", "https://")):
                origins.append(origin)
        return origins or ["http://localhost:5173"]

    class Config:
        env_prefix = "APP_"
        case_sensitive = False
        env_nested_delimiter = "__"
        env_file = str(Path(__file__).parent.parent.parent / ".env")
        env_file_encoding = "utf-8"
        extra = "ignore"


settings: AppSettings = AppSettings()
