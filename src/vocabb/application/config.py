from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from vocabb.domain.constants import (
    ALL_CATEGORIES,
    DAILY_GOAL,
    DEFAULT_FORECAST_DAYS,
    DEFAULT_HEATMAP_WEEKS,
    DUE_BUFFER_SECONDS,
    QUIZ_QUESTION_LIMIT,
)


def config_files() -> list[Path]:
    return [
        Path.home() / ".config/vocabb/config.toml",
        Path.home() / ".vocabb.toml",
    ]


class AppConfig(BaseSettings):
    """
    Configuration model for vocabb.
    Supports loading from:
    1. Environment variables (VOCABB_*)
    2. Config file (~/.config/vocabb/config.toml or ~/.vocabb.toml)
    3. Manual overrides (CLI)
    """

    model_config = SettingsConfigDict(
        env_prefix="VOCABB_",
        extra="ignore",
    )

    # Storage
    backend: Literal["yaml", "memory"] = "yaml"
    store_path: Path = Field(
        default_factory=lambda: Path.home() / ".local/share/vocabb/vocabulary.yaml"
    )

    # Engine tuning
    quiz_length: int = Field(default=QUIZ_QUESTION_LIMIT, ge=1)
    due_buffer_seconds: float = Field(default=DUE_BUFFER_SECONDS, ge=0)
    forecast_days: int = Field(default=DEFAULT_FORECAST_DAYS, ge=1)
    heatmap_weeks: int = Field(default=DEFAULT_HEATMAP_WEEKS, ge=1)
    daily_goal: int = Field(default=DAILY_GOAL, ge=1)
    seed: int | None = None
    default_category: str = ALL_CATEGORIES

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

        # First existing file wins; CLI overrides beat env, env beats the file.
        toml_file = next((f for f in config_files() if f.exists()), None)

        if toml_file:
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (init_settings, env_settings)

    @field_validator("store_path", mode="before")
    @classmethod
    def expand_path(cls, v: Any) -> Path:
        return Path(v).expanduser()

    @field_validator("default_category")
    @classmethod
    def non_empty_category(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("default_category must not be empty")
        return v


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. Config file (if exists)
    3. Environment variables (VOCABB_*)
    4. cli_overrides (passed from Typer); None values are ignored
    """
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    return AppConfig(**overrides)
