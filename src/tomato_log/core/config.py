"""Configuration management with Pydantic and YAML support."""

from __future__ import annotations

import os
from datetime import timedelta
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class IntervalConfig(BaseModel):
    """Planned durations per interval category and the tick length."""

    work: timedelta = Field(default=timedelta(minutes=25), description="Work interval")
    short_break: timedelta = Field(default=timedelta(minutes=5), description="Short break")
    long_break: timedelta = Field(default=timedelta(minutes=15), description="Long break")
    tick_seconds: float = Field(
        default=1.0, gt=0, description="Wall-clock seconds per credited second"
    )

    @field_validator("work", "short_break", "long_break")
    @classmethod
    def _positive_whole_seconds(cls, value: timedelta) -> timedelta:
        if value.total_seconds() < 1:
            raise ValueError("duration must be at least one second")
        return timedelta(seconds=int(value.total_seconds()))

    def with_overrides(
        self,
        work: timedelta | None = None,
        short_break: timedelta | None = None,
        long_break: timedelta | None = None,
    ) -> IntervalConfig:
        """Return a copy with the given durations replaced.

        Missing or non-positive overrides keep the current value.
        """
        data = self.model_dump()
        for key, value in (
            ("work", work),
            ("short_break", short_break),
            ("long_break", long_break),
        ):
            if value is not None and value.total_seconds() > 0:
                data[key] = value
        return IntervalConfig(**data)


class Config(BaseSettings):
    """Main application configuration."""

    model_config = SettingsConfigDict(
        env_prefix="TOMATO_LOG_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # Paths
    data_dir: Path = Field(
        default_factory=lambda: Path.home() / ".local/share/tomato-log"
    )
    log_dir: Path = Field(default_factory=lambda: Path.home() / ".local/state/tomato-log")
    config_dir: Path = Field(default_factory=lambda: Path.home() / ".config/tomato-log")

    log_level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")

    intervals: IntervalConfig = Field(default_factory=IntervalConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        # Environment outranks the YAML values passed as init kwargs
        return env_settings, init_settings, file_secret_settings

    @property
    def db_path(self) -> Path:
        """Path to SQLite database."""
        return self.data_dir / "tomato_log.db"

    @property
    def config_file(self) -> Path:
        """Path to YAML config file."""
        return self.config_dir / "config.yaml"

    def ensure_directories(self) -> None:
        """Create all required directories."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.config_dir.mkdir(parents=True, exist_ok=True)

        os.chmod(self.data_dir, 0o700)

    @classmethod
    def load(cls, config_path: Path | None = None) -> Config:
        """Load configuration from YAML file, environment variables, and defaults.

        Priority (highest to lowest):
        1. Environment variables
        2. YAML config file
        3. Default values
        """
        config_path = config_path or cls().config_file

        yaml_config: dict[str, Any] = {}
        if config_path.exists():
            with open(config_path) as f:
                yaml_config = yaml.safe_load(f) or {}

        return cls(**yaml_config)


@lru_cache
def get_config() -> Config:
    """Get cached configuration instance."""
    return Config.load()
