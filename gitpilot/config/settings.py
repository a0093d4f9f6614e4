"""Configuration settings models using Pydantic."""

from pathlib import Path
from typing import Literal, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class GitConfig(BaseModel):
    """Configuration for repository and remote operations."""

    remote: str = "origin"
    default_author: str = "ReleaseNotesBot"
    default_email: str = "bot@example.com"
    network_timeout: Optional[float] = Field(default=120.0, gt=0)

    @field_validator("remote")
    @classmethod
    def validate_remote(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("remote cannot be empty")
        return v.strip()


class VersioningConfig(BaseModel):
    """Configuration for the repository version file."""

    file_name: str = "version.json"
    strict: bool = False

    @field_validator("file_name")
    @classmethod
    def validate_file_name(cls, v: str) -> str:
        path = Path(v)
        if not v.strip() or path.is_absolute() or ".." in path.parts:
            raise ValueError("file_name must be a relative path inside the repository")
        return v


class ToolsConfig(BaseModel):
    """Configuration for tool execution."""

    echo_prefix: str = "You said: "
    auto_approve: bool = False
    max_output_length: int = Field(default=100000, ge=100)


class LoggingConfig(BaseModel):
    """Configuration for log output."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    file: Optional[str] = None

    @property
    def resolved_file(self) -> Optional[Path]:
        """Get the log file path with ~ expanded."""
        if self.file is None:
            return None
        return Path(self.file).expanduser()


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="GITPILOT_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # Credentials - GIT_USER/GIT_PAT come first so the environment wins over the config file
    git_username: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("GIT_USER", "git_username"),
    )
    git_token: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("GIT_PAT", "git_token"),
    )

    # Nested configurations
    git: GitConfig = Field(default_factory=GitConfig)
    versioning: VersioningConfig = Field(default_factory=VersioningConfig)
    tools: ToolsConfig = Field(default_factory=ToolsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        # Environment overrides values loaded from YAML and passed to __init__
        return env_settings, init_settings, dotenv_settings, file_secret_settings

    @field_validator("git_username", "git_token")
    @classmethod
    def validate_credential(cls, v: Optional[str]) -> Optional[str]:
        """Treat blank credentials as unset."""
        if v is not None and not v.strip():
            return None
        return v

    def has_git_token(self) -> bool:
        """Check if a remote access token is configured."""
        return self.git_token is not None
