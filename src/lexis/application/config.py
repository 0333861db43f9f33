from pathlib import Path
from typing import Any

from pydantic import Field, field_validator, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from lexis.domain.constants import (
    DEFAULT_EASE_FACTOR,
    DEFAULT_SESSION_SIZE,
    DEFAULT_USER_ID,
    MASTERY_INTERVAL_THRESHOLD,
    MIN_EASE_FACTOR,
)
from lexis.domain.review.models import SchedulerSettings, SessionConfig


def config_files() -> list[Path]:
    """Candidate config files, highest priority first."""
    return [
        Path.home() / ".config/lexis/config.toml",
        Path.home() / ".lexis.toml",
    ]


class AppConfig(BaseSettings):
    """
    Configuration model for lexis.
    Supports loading from:
    1. Environment variables (LEXIS_*)
    2. Config file (~/.config/lexis/config.toml)
    3. Manual overrides (CLI)
    """

    model_config = SettingsConfigDict(
        env_prefix="LEXIS_",
        extra="ignore",
    )

    # Storage
    store_path: Path = Field(
        default_factory=lambda: Path.home() / ".config/lexis/reviews.yaml"
    )
    user_id: str = DEFAULT_USER_ID

    # Session defaults
    session_size: int = Field(default=DEFAULT_SESSION_SIZE, ge=1)
    include_due: bool = True
    include_new: bool = True
    shuffle_seed: int | None = None

    # SM-2 tuning
    min_ease_factor: float = Field(default=MIN_EASE_FACTOR, gt=0)
    default_ease_factor: float = DEFAULT_EASE_FACTOR
    mastery_threshold: int = MASTERY_INTERVAL_THRESHOLD

    verbose: int = 0

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

        # Find the first existing file
        toml_file = None
        for f in config_files():
            if f.exists():
                toml_file = f
                break

        # Earlier sources win: CLI overrides, then env, then the TOML file
        if toml_file:
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (init_settings, env_settings)

    @field_validator("store_path", mode="before")
    @classmethod
    def resolve_store_path(cls, v: Any) -> Path:
        return Path(v).expanduser().resolve()

    @field_validator("mastery_threshold")
    @classmethod
    def check_mastery_threshold(cls, v: int) -> int:
        if v < 1:
            raise ValueError("mastery_threshold must be at least 1 day")
        return v

    @model_validator(mode="after")
    def check_ease_bounds(self) -> "AppConfig":
        if self.min_ease_factor > self.default_ease_factor:
            raise ValueError(
                f"min_ease_factor ({self.min_ease_factor}) cannot exceed "
                f"default_ease_factor ({self.default_ease_factor})"
            )
        return self

    def scheduler_settings(self) -> SchedulerSettings:
        return SchedulerSettings(
            min_ease_factor=self.min_ease_factor,
            default_ease_factor=self.default_ease_factor,
            mastery_threshold=self.mastery_threshold,
        )

    def session_config(self) -> SessionConfig:
        return SessionConfig(
            session_size=self.session_size,
            include_due=self.include_due,
            include_new=self.include_new,
        )


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. ~/.config/lexis/config.toml or ~/.lexis.toml (if exists)
    3. Environment variables (LEXIS_*)
    4. cli_overrides (passed from Typer, None values dropped)
    """
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    return AppConfig(**overrides)
