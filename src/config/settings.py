"""Configuration settings for the voice studio application.

This module provides type-safe configuration management using Pydantic,
with support for environment variables and default values.
"""

import os
from pathlib import Path
from typing import Optional, Type, TypeVar

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.studio.voices import Accent, Style

# Module-level variable to store current env_file for nested settings
_current_env_file: Optional[str] = None

T = TypeVar("T", bound=BaseSettings)


class GeminiSettings(BaseSettings):
    """Gemini speech generation API settings."""

    model_config = SettingsConfigDict(env_prefix="GEMINI_", case_sensitive=False, extra="ignore")

    api_key: Optional[str] = Field(default=None, description="API key for the Gemini API")
    model: str = Field(default="gemini-2.5-flash-preview-tts", description="Speech generation model name")
    endpoint: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta/models",
        description="Base URL of the models endpoint",
    )
    timeout: int = Field(default=60, ge=1, description="API request timeout in seconds")
    max_retries: int = Field(default=3, ge=1, description="Maximum number of request attempts")


class AudioSettings(BaseSettings):
    """Output audio settings."""

    model_config = SettingsConfigDict(env_prefix="AUDIO_", case_sensitive=False, extra="ignore")

    sample_rate: int = Field(default=24000, gt=0, description="Sample rate of the returned PCM (Hz)")
    output_dir: Path = Field(default=Path("./output"), description="Directory for saved WAV files")

    @field_validator("output_dir", mode="before")
    @classmethod
    def validate_output_dir(cls, v: str | Path) -> Path:
        """Convert string to Path."""
        return Path(v) if isinstance(v, str) else v


class StudioSettings(BaseSettings):
    """Default generation controls."""

    model_config = SettingsConfigDict(env_prefix="STUDIO_", case_sensitive=False, extra="ignore")

    voice_id: str = Field(default="f1", description="Default voice ID from the catalog")
    accent: Accent = Field(default=Accent.PERU, description="Default accent")
    style: Style = Field(default=Style.NATURAL, description="Default speaking style")
    speed: float = Field(default=1.0, ge=0.5, le=2.0, description="Default speaking speed (0.5-2.0)")
    pitch: int = Field(default=0, ge=-10, le=10, description="Default pitch offset (-10 to 10)")
    history_limit: Optional[int] = Field(
        default=None, ge=1, description="Maximum clips kept in the session history (unbounded if None)"
    )


class Settings(BaseSettings):
    """Main application settings.

    The env_file can be specified via:
    1. ENV_FILE environment variable
    2. env_file parameter in get_settings() or reload_settings()
    3. Default: ".env"
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @classmethod
    def create(cls, env_file: Optional[str] = None) -> "Settings":
        """Create a Settings instance with a specific env file.

        Args:
            env_file: Optional path to environment file. If None, uses:
                1. ENV_FILE environment variable
                2. Default ".env"

        Returns:
            Settings instance configured with the specified env file.
        """
        global _current_env_file

        if env_file is None:
            env_file = os.getenv("ENV_FILE", ".env")

        _current_env_file = env_file

        class SettingsWithEnvFile(cls):
            model_config = SettingsConfigDict(
                env_file=env_file,
                env_file_encoding="utf-8",
                case_sensitive=False,
                extra="ignore",
            )

            gemini: GeminiSettings = Field(
                default_factory=lambda: _create_nested_settings(GeminiSettings, env_file)
            )
            audio: AudioSettings = Field(
                default_factory=lambda: _create_nested_settings(AudioSettings, env_file)
            )
            studio: StudioSettings = Field(
                default_factory=lambda: _create_nested_settings(StudioSettings, env_file)
            )

        return SettingsWithEnvFile()

    # Application settings
    app_name: str = Field(default="voice-studio", description="Application name")
    log_level: str = Field(default="INFO", description="Logging level")
    debug: bool = Field(default=False, description="Enable debug mode")

    # Component settings
    gemini: GeminiSettings = Field(default_factory=GeminiSettings)
    audio: AudioSettings = Field(default_factory=AudioSettings)
    studio: StudioSettings = Field(default_factory=StudioSettings)


# Global settings instance (lazy-loaded singleton)
_settings: Optional[Settings] = None


def _create_nested_settings(cls: Type[T], env_file: Optional[str] = None) -> T:
    """Create a nested settings instance that reads the same env file as the parent.

    Args:
        cls: The settings class to create an instance of.
        env_file: Optional env_file to use. If None, uses _current_env_file.

    Returns:
        Instance of the settings class configured with the env_file.
    """
    if env_file is None:
        env_file = _current_env_file or os.getenv("ENV_FILE", ".env")

    original_config = cls.model_config

    class NestedSettingsWithEnvFile(cls):
        model_config = SettingsConfigDict(
            env_file=env_file,
            env_file_encoding=original_config.get("env_file_encoding", "utf-8"),
            case_sensitive=original_config.get("case_sensitive", False),
            env_prefix=original_config.get("env_prefix", ""),
            # The shared env file also holds keys for the other groups
            extra="ignore",
        )

    return NestedSettingsWithEnvFile()


def get_settings(env_file: Optional[str] = None) -> Settings:
    """Get or create the global settings instance.

    Args:
        env_file: Optional path to environment file. If provided and different
            from the one currently loaded, forces a reload.

    Returns:
        Settings: The global settings instance.

    Example:
        >>> settings = get_settings()
        >>> print(settings.audio.sample_rate)
        24000
    """
    global _settings

    current_env_file = env_file or os.getenv("ENV_FILE", ".env")

    if _settings is not None:
        existing_env_file = _settings.model_config.get("env_file")
        if env_file is not None and existing_env_file != env_file:
            _settings = Settings.create(env_file=env_file)
        elif os.getenv("ENV_FILE") and existing_env_file != current_env_file:
            _settings = Settings.create(env_file=current_env_file)
        return _settings

    _settings = Settings.create(env_file=current_env_file)
    return _settings


def reload_settings(env_file: Optional[str] = None) -> Settings:
    """Reload settings from environment variables.

    Args:
        env_file: Optional path to environment file. If None, uses:
            1. ENV_FILE environment variable
            2. Default ".env"

    Returns:
        Settings: The newly loaded settings instance.
    """
    global _settings
    _settings = Settings.create(env_file=env_file)
    return _settings


__all__ = [
    "AudioSettings",
    "GeminiSettings",
    "Settings",
    "StudioSettings",
    "get_settings",
    "reload_settings",
]
