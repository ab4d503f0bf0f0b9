"""Application configuration using pydantic settings with structured sections."""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False


class DatabaseSettings(BaseModel):
    url: str = Field(default="sqlite+aiosqlite:///./citizen_portal.db", alias="url")
    echo: bool = False
    pool_size: Optional[int] = None
    max_overflow: Optional[int] = None


class SecuritySettings(BaseModel):
    # No default: tokens cannot be issued until a secret is supplied.
    jwt_secret: Optional[str] = None
    jwt_algorithm: str = "HS256"
    jwt_expires_in: str = "7d"
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)


class LockoutSettings(BaseModel):
    max_failed_attempts: int = Field(default=5, ge=1)
    lockout_minutes: int = Field(default=15, ge=1)


class ReferenceSettings(BaseModel):
    max_attempts: int = Field(default=5, ge=1)


class EmailSettings(BaseModel):
    smtp_host: Optional[str] = None
    smtp_port: int = 587
    smtp_username: Optional[str] = None
    smtp_password: Optional[str] = None
    from_email: Optional[str] = None
    use_tls: bool = True
    timeout: float = 10.0
    frontend_url: str = "http://localhost:3000"


class LoggingSettings(BaseModel):
    level: str = "INFO"
    json_output: bool = False


class Settings(BaseSettings):
    """Top-level application settings with nested sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production", "test"] = "development"
    debug: bool = False
    project_name: str = "Citizen Services Portal"
    api_prefix: str = "/api"
    cors_origins: list[str] = ["*"]

    server: ServerSettings = ServerSettings()
    database: DatabaseSettings = DatabaseSettings()
    security: SecuritySettings = SecuritySettings()
    lockout: LockoutSettings = LockoutSettings()
    reference: ReferenceSettings = ReferenceSettings()
    email: EmailSettings = EmailSettings()
    logging: LoggingSettings = LoggingSettings()

    @property
    def database_url(self) -> str:
        return self.database.url

    @property
    def host(self) -> str:
        return self.server.host

    @property
    def port(self) -> int:
        return self.server.port

    @property
    def jwt_secret(self) -> Optional[str]:
        return self.security.jwt_secret

    @property
    def jwt_expires_in(self) -> str:
        return self.security.jwt_expires_in


@lru_cache()
def get_settings() -> Settings:
    return Settings()
