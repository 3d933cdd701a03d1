from typing import List, Literal

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from scan_md.errors import InvalidConfiguration


class Settings(BaseSettings):
    """Defaults for the scan-md command, loaded from SCAN_MD_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SCAN_MD_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Scan
    dir: str = "."
    ignore: List[str] = Field(default_factory=list)
    depth: int = Field(default=1, ge=1)
    workers: int = Field(default=4, ge=1)

    # Output
    format: Literal["json", "yml", "yaml"] = "json"
    pretty: bool = False

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"


def load_settings(**overrides) -> Settings:
    """Build Settings, reporting bad values as InvalidConfiguration."""
    try:
        return Settings(**overrides)
    except ValidationError as e:
        raise InvalidConfiguration(f"invalid settings: {e}") from e
