"""Models for configuration between CLI arguments and environment variables."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class GitHubAuthenticationType(str, Enum):
    """Enum for GitHub authentication types."""

    PAT = "pat"
    APP = "app"


class OutputFormat(str, Enum):
    """Enum for changelog output formats."""

    MARKDOWN = "markdown"
    YAML = "yaml"


@dataclass
class GitHubConfig:
    """Resolved configuration for talking to a GitHub repository."""

    repo: str
    github_api_url: str
    github_authentication_type: GitHubAuthenticationType
    github_pat_token: str | None
    github_app_id: int | None
    github_app_private_key_path: Path | None
    github_app_installation_id: int | None
