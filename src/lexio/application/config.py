from datetime import timedelta
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from lexio.domain.constants import DEFAULT_SESSION_LIMIT, LEARNED_QUALITY, REPEAT_QUALITY


class StudyConfig(BaseSettings):
    """
    Study session settings.
    Supports loading from:
    1. Environment variables (LEXIO_*)
    2. Config file (~/.config/lexio/config.toml or ~/.lexio.toml)
    3. Manual overrides (CLI)
    """

    model_config = SettingsConfigDict(
        env_prefix="LEXIO_",
        extra="ignore",
    )

    # Session
    session_limit: int = Field(default=DEFAULT_SESSION_LIMIT, ge=0)
    shuffle: bool = True
    seed: int | None = None
    time_limit_minutes: float | None = None

    # Binary grading
    repeat_quality: int = REPEAT_QUALITY
    learned_quality: int = LEARNED_QUALITY

    verbose: int = 1

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        from pydantic_settings import TomlConfigSettingsSource

        # Home is resolved per call so tests can redirect it
        toml_files = [
            Path.home() / ".config/lexio/config.toml",
            Path.home() / ".lexio.toml",
        ]
        toml_file = next((f for f in toml_files if f.exists()), None)

        # Earlier sources win
        if toml_file:
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (init_settings, env_settings)

    @field_validator("repeat_quality")
    @classmethod
    def check_repeat_quality(cls, v: int) -> int:
        if not 0 <= v <= 2:
            raise ValueError("repeat_quality must be a failing quality (0-2)")
        return v

    @field_validator("learned_quality")
    @classmethod
    def check_learned_quality(cls, v: int) -> int:
        if not 3 <= v <= 5:
            raise ValueError("learned_quality must be a passing quality (3-5)")
        return v

    @field_validator("time_limit_minutes")
    @classmethod
    def check_time_limit(cls, v: float | None) -> float | None:
        if v is not None and v <= 0:
            raise ValueError("time_limit_minutes must be positive")
        return v

    @property
    def time_limit(self) -> timedelta | None:
        if self.time_limit_minutes is None:
            return None
        return timedelta(minutes=self.time_limit_minutes)


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> StudyConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in StudyConfig
    2. ~/.config/lexio/config.toml (if exists)
    3. Environment variables (LEXIO_*)
    4. cli_overrides (passed from Typer)
    """
    # Typer passes None for options the user did not set
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    return StudyConfig(**overrides)
