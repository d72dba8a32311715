"""Reconciles configuration between CLI arguments and environment settings."""

from pathlib import Path

from changelog_collector.configuration.env import Settings, get_settings
from changelog_collector.configuration.exceptions import GitHubAuthenticationConfigurationUndefinedError
from changelog_collector.configuration.models import GitHubAuthenticationType, GitHubConfig, OutputFormat


async def validate_github_authentication_configuration(
    github_pat_token: str | None,
    github_app_id: int | None,
    github_app_private_key_path: Path | None,
    github_app_installation_id: int | None,
) -> GitHubAuthenticationType:
    """Validates the GitHub authentication configuration.

    Args:
        github_pat_token (str | None): The GitHub PAT token.
        github_app_id (int | None): The GitHub App ID.
        github_app_private_key_path (Path | None): The path to the GitHub App private key.
        github_app_installation_id (int | None): The GitHub App installation ID.

    Raises:
        GitHubAuthenticationConfigurationUndefinedError: If both or neither of PAT and App configurations are defined.

    Returns:
        GitHubAuthenticationType: The type of GitHub authentication used.
    """
    app_settings = {
        "GitHub App ID": ("github_app_id", "GITHUB_APP_ID", github_app_id),
        "GitHub App private key path": ("github_app_private_key_path", "GITHUB_APP_PRIVATE_KEY_PATH", github_app_private_key_path),
        "GitHub App installation ID": ("github_app_installation_id", "GITHUB_APP_INSTALLATION_ID", github_app_installation_id),
    }
    any_app_setting = any(value for _, _, value in app_settings.values())

    if github_pat_token and any_app_setting:
        raise GitHubAuthenticationConfigurationUndefinedError("Both PAT and GitHub App configurations are defined. Please use one or the other.")

    if github_pat_token:
        return GitHubAuthenticationType.PAT

    if not any_app_setting:
        raise GitHubAuthenticationConfigurationUndefinedError(
            "No GitHub authentication configuration provided. Please provide either a PAT or a GitHub App configuration."
        )

    missing = [
        f"{name} (command line option {cli_name}, environment variable {env_name})"
        for name, (cli_name, env_name, value) in app_settings.items()
        if not value
    ]
    if missing:
        raise GitHubAuthenticationConfigurationUndefinedError("Incomplete GitHub App configuration - missing settings include " + ", ".join(missing))
    return GitHubAuthenticationType.APP


async def reconcile_github_configuration(
    cli_repo: str | None = None,
    cli_github_api_url: str | None = None,
    cli_github_pat_token: str | None = None,
    cli_github_app_id: int | None = None,
    cli_github_app_private_key_path: Path | None = None,
    cli_github_app_installation_id: int | None = None,
    settings: Settings | None = None,
) -> GitHubConfig:
    """Resolve the GitHub configuration, preferring CLI values over environment settings.

    Raises:
        ValueError: If no repository is configured.
        GitHubAuthenticationConfigurationUndefinedError: If the authentication configuration is invalid.
    """
    if settings is None:
        settings = get_settings()

    repo = cli_repo or settings.REPO
    if not repo:
        raise ValueError("Repository must be provided via the REPO argument or REPO environment variable.")

    github_pat_token = cli_github_pat_token or settings.GITHUB_PAT_TOKEN
    github_app_id = cli_github_app_id or settings.GITHUB_APP_ID
    github_app_private_key_path = cli_github_app_private_key_path or settings.GITHUB_APP_PRIVATE_KEY_PATH
    github_app_installation_id = cli_github_app_installation_id or settings.GITHUB_APP_INSTALLATION_ID

    github_authentication_type = await validate_github_authentication_configuration(
        github_pat_token=github_pat_token,
        github_app_id=github_app_id,
        github_app_private_key_path=github_app_private_key_path,
        github_app_installation_id=github_app_installation_id,
    )
    return GitHubConfig(
        repo=repo,
        github_api_url=cli_github_api_url or settings.GITHUB_API_URL,
        github_authentication_type=github_authentication_type,
        github_pat_token=github_pat_token,
        github_app_id=github_app_id,
        github_app_private_key_path=github_app_private_key_path,
        github_app_installation_id=github_app_installation_id,
    )


def reconcile_output_format(cli_output_format: OutputFormat | None = None, settings: Settings | None = None) -> OutputFormat:
    """Resolve the output format, preferring the CLI value over the CHANGELOG_FORMAT setting."""
    if cli_output_format is not None:
        return cli_output_format
    if settings is None:
        settings = get_settings()
    return settings.CHANGELOG_FORMAT


def reconcile_debug(cli_debug: bool | None = None, settings: Settings | None = None) -> bool:
    """Resolve whether debug logging is enabled, preferring the CLI value over the DEBUG setting."""
    if cli_debug is not None:
        return cli_debug
    if settings is None:
        settings = get_settings()
    return settings.DEBUG
