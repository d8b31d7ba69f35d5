"""Configuration using pydantic-settings."""

from typing import Literal

from pydantic_settings import BaseSettings


class SwitchyardSettings(BaseSettings):
    """Dispatch and transport configuration."""

    timeout: float = 10.0
    user_agent: str = "Switchyard/0.1"
    max_connections: int = 100
    max_keepalive_connections: int = 20
    default_charset: str = "utf-8"
    log_level: str = "WARNING"
    log_format: Literal["console", "json"] = "console"

    model_config = {"env_prefix": "SWITCHYARD_"}


settings = SwitchyardSettings()
