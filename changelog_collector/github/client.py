"""Sets up the authenticated githubkit client."""

from typing import TypeAlias

import structlog
from githubkit import GitHub
from githubkit.auth import AppInstallationAuthStrategy, TokenAuthStrategy

from changelog_collector.configuration.models import GitHubAuthenticationType, GitHubConfig

logger = structlog.get_logger(__name__)

GitHubClient: TypeAlias = GitHub[AppInstallationAuthStrategy] | GitHub[TokenAuthStrategy]


def get_github_pat_client(github_pat_token: str, github_api_url: str) -> GitHub[TokenAuthStrategy]:
    """Returns an authenticated GitHub client using a personal access token."""
    if not github_pat_token:
        raise RuntimeError("GitHub PAT authentication requires a GitHub PAT token.")
    return GitHub(auth=TokenAuthStrategy(github_pat_token), base_url=github_api_url, http_cache=False)


def get_github_app_client(config: GitHubConfig) -> GitHub[AppInstallationAuthStrategy]:
    """Returns an authenticated GitHub client for a GitHub App installation."""
    if not (config.github_app_id and config.github_app_private_key_path and config.github_app_installation_id):
        raise RuntimeError("GitHub App authentication requires app ID, private key path, and installation ID.")
    try:
        private_key = config.github_app_private_key_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ValueError(f"Failed to read GitHub App private key: {exc}") from exc
    auth = AppInstallationAuthStrategy(
        app_id=config.github_app_id,
        private_key=private_key,
        installation_id=config.github_app_installation_id,
    )
    return GitHub(auth=auth, base_url=config.github_api_url, http_cache=False)


def get_github_client(config: GitHubConfig) -> GitHubClient:
    """Returns an authenticated GitHub client for the configured authentication type.

    Supports a custom base URL for GitHub Enterprise Server (GHES).
    """
    logger.debug("Creating GitHub client", github_api_url=config.github_api_url, auth_type=config.github_authentication_type.value)
    if config.github_authentication_type == GitHubAuthenticationType.APP:
        return get_github_app_client(config)
    if not config.github_pat_token:
        raise RuntimeError("GitHub PAT authentication requires a GitHub PAT token.")
    return get_github_pat_client(config.github_pat_token, config.github_api_url)
