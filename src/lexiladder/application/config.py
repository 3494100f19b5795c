from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from lexiladder.domain.constants import CONFIG_DIR_NAME, ENV_PREFIX, SNAPSHOT_FILE_NAME


def default_config_dir() -> Path:
    return Path.home() / ".config" / CONFIG_DIR_NAME


def config_file_candidates() -> list[Path]:
    return [
        default_config_dir() / "config.toml",
        Path.home() / ".lexiladder.toml",
    ]


class AppConfig(BaseSettings):
    """
    Configuration model for lexiladder.
    Supports loading from:
    1. Environment variables (LEXILADDER_*)
    2. Config file (~/.config/lexiladder/config.toml)
    3. Manual overrides (CLI)
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        extra="ignore",
    )

    # Paths
    snapshot_path: Path = Field(
        default_factory=lambda: default_config_dir() / SNAPSHOT_FILE_NAME
    )

    # Scheduling
    strict_levels: bool = False
    seed: int | None = None

    # Output
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

        # First existing file wins
        toml_file = next((f for f in config_file_candidates() if f.exists()), None)

        # Earlier sources take priority: CLI > env > TOML
        if toml_file:
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (
            init_settings,
            env_settings,
        )

    @field_validator("snapshot_path", mode="before")
    @classmethod
    def resolve_snapshot_path(cls, v: Any) -> Path:
        return Path(v).expanduser().resolve()

    @field_validator("verbose", mode="before")
    @classmethod
    def non_negative_verbose(cls, v: Any) -> int:
        return max(0, int(v))


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. ~/.config/lexiladder/config.toml (if exists)
    3. Environment variables (LEXILADDER_*)
    4. cli_overrides (passed from Typer)
    """
    # Typer passes None for options the user did not set
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    return AppConfig(**overrides)
