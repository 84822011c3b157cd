from pathlib import Path
from typing import Annotated, Any

from pydantic import AliasChoices, Field, computed_field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

PACKAGE_DIR = Path(__file__).resolve().parents[1]
DEFAULT_STATIC_DIR = PACKAGE_DIR / "web" / "static"
DEFAULT_ALLOWED_HOSTS = ["*"]


def _normalize_allowed_hosts(value: Any) -> list[str]:
    """Accept comma-separated string or list-like and normalize hosts."""
    if value is None or value == "":
        return []

    if isinstance(value, str):
        parts = [part.strip() for part in value.split(",")]
    elif isinstance(value, (list, tuple, set)):
        parts = [str(part).strip() for part in value]
    else:
        return []

    return [part for part in parts if part]


class Settings(BaseSettings):
    """Application settings."""

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    ALLOWED_HOSTS: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: DEFAULT_ALLOWED_HOSTS.copy()
    )

    # Storage. Render mounts its persistent disk at RENDER_DISK_MOUNT_PATH.
    DATA_DIR: Path = Field(
        default_factory=Path.cwd,
        validation_alias=AliasChoices("DATA_DIR", "RENDER_DISK_MOUNT_PATH"),
    )
    DATABASE_FILENAME: str = "database.db"

    # Front-end assets
    STATIC_DIR: Path = DEFAULT_STATIC_DIR

    # Application
    ENV: str = "development"
    APP_NAME: str = "Login Records"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"

    # Pydantic v2 compatible settings: read .env and ignore extra env vars
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("ALLOWED_HOSTS", mode="before")
    @classmethod
    def parse_allowed_hosts(cls, value: Any) -> list[str] | Any:
        """Support comma-separated ALLOWED_HOSTS from environment."""
        return _normalize_allowed_hosts(value) or DEFAULT_ALLOWED_HOSTS.copy()

    @computed_field
    @property
    def database_path(self) -> Path:
        """Location of the SQLite file holding the logins table."""
        return self.DATA_DIR / self.DATABASE_FILENAME

    @computed_field
    @property
    def database_url(self) -> str:
        return f"sqlite+aiosqlite:///{self.database_path}"


settings = Settings()
