from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="DEPENDENCY_",
        extra="ignore",
        populate_by_name=True,
    )

    verbose: bool = Field(default=True, validation_alias="DEPENDENCY_LOG_VERBOSE")
    colour: bool = False

    poll_interval: float = Field(default=2.0, gt=0)
    connect_timeout: float = Field(default=5.0, gt=0)
    script_timeout: float = Field(default=0.0, ge=0, validation_alias="SCRIPT_TIMEOUT")
    hard_timeout: bool = True

    pg_isready_binary: str = "pg_isready"
    netcat_binary: str = "nc"
    http_client_enabled: bool = True
