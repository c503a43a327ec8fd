"""Configuration management for the flexduration command."""

from pydantic import Field
from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Configuration for the flexduration command."""

    log_level: str = "WARNING"
    utc: bool = Field(default=True, description="Use an aware UTC reference time for `shift`")
    default_duration: str = Field(default="1d", description="Duration used by `shift` when none is given")

    model_config = {
        "env_prefix": "FLEXDURATION_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "forbid",
    }
