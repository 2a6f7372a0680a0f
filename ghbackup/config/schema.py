# ghbackup Configuration Schema
# Pydantic models for YAML configuration validation

import os
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from ghbackup.remote.client import DEFAULT_API_URL
from ghbackup.sync.schedule import DEFAULT_INTERVAL
from ghbackup.utils.paths import expand_path


class GitHubConfig(BaseModel):
    """GitHub account settings."""

    owner: str = Field(default="", description="GitHub user owning the backup repository")
    token: str | None = Field(default=None, description="Personal access token (prefer token_env)")
    token_env: str = Field(default="GITHUB_TOKEN", description="Environment variable holding the token")
    api_url: str = Field(default=DEFAULT_API_URL, description="GitHub API base URL")
    timeout: float | None = Field(default=None, description="Per-request timeout in seconds (None = no timeout)")

    def resolve_token(self) -> str:
        """Return the configured token, falling back to the environment."""
        if self.token:
            return self.token
        return os.environ.get(self.token_env, "")


class RepositoryConfig(BaseModel):
    """Backup repository settings."""

    name: str = Field(description="Repository name")
    private: bool = Field(default=True, description="Visibility when the repository is created")
    commit_prefix: str = Field(default="Backup:", description="Commit message prefix")

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        """Reject empty repository names."""
        if not v.strip():
            raise ValueError("repository name must not be empty")
        return v.strip()


class FilesConfig(BaseModel):
    """Tracked files."""

    base_dir: str = Field(description="Base directory; remote paths are relative to it")
    paths: list[str] = Field(default_factory=list, description="Tracked file paths")

    @field_validator("base_dir")
    @classmethod
    def expand_base_dir(cls, v: str) -> str:
        """Expand ~ and variables, and make the path absolute."""
        return str(expand_path(v))

    def resolved_paths(self) -> list[Path]:
        """Tracked paths as absolute Paths; relative entries are joined to base_dir."""
        base = Path(self.base_dir)
        resolved: list[Path] = []
        for entry in self.paths:
            path = Path(os.path.expandvars(Path(entry).expanduser()))
            if not path.is_absolute():
                path = base / path
            # Directories are resolved like base_dir; the file name is kept so a
            # symlinked file keeps its own remote key
            resolved.append(expand_path(path.parent) / path.name)
        return resolved


class ScheduleConfig(BaseModel):
    """Timing of backup passes."""

    interval: float = Field(default=DEFAULT_INTERVAL, gt=0, description="Seconds between passes")
    jitter: float = Field(default=0.0, ge=0, description="Random extra delay in seconds")
    max_cycles: int | None = Field(default=None, ge=1, description="Stop after this many passes")


class OutputConfig(BaseModel):
    """Output configuration."""

    verbose: bool = Field(default=False, description="Enable verbose output")
    colored: bool = Field(default=True, description="Enable colored output")


class BackupConfig(BaseModel):
    """Root configuration model for ghbackup."""

    github: GitHubConfig = Field(default_factory=GitHubConfig, description="GitHub settings")
    repository: RepositoryConfig = Field(description="Repository settings")
    files: FilesConfig = Field(description="Tracked files")
    schedule: ScheduleConfig = Field(default_factory=ScheduleConfig, description="Schedule settings")
    output: OutputConfig = Field(default_factory=OutputConfig, description="Output settings")

    def tracked_paths(self) -> list[Path]:
        """Absolute paths of all tracked files."""
        return self.files.resolved_paths()

    @property
    def base_dir(self) -> Path:
        return Path(self.files.base_dir)
