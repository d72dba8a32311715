"""Defines the Command Line Interface (CLI) using Typer."""

import asyncio
from pathlib import Path

import typer
from dotenv import load_dotenv
from typer import Argument, Option
from typing_extensions import Annotated

from changelog_collector.collect.driver import run_collect_workflow, run_render_workflow
from changelog_collector.collect.results import CollectChangelogResult, CollectChangelogStatus
from changelog_collector.configuration.exceptions import GitHubAuthenticationConfigurationUndefinedError
from changelog_collector.configuration.models import GitHubConfig, OutputFormat
from changelog_collector.configuration.reconcile import reconcile_debug, reconcile_github_configuration, reconcile_output_format
from changelog_collector.utils.logging import configure_logging

load_dotenv()

typer_app = typer.Typer(pretty_exceptions_show_locals=False, help="Collect changelog entries from merged pull requests.")


@typer_app.callback()
def main_callback(
    debug: Annotated[bool | None, Option("--debug/--no-debug", help="Enable debug logging (defaults to the DEBUG env var).")] = None,
) -> None:
    """Collect changelog entries embedded in pull request descriptions."""
    configure_logging(debug=reconcile_debug(debug))


def echo_result(result: CollectChangelogResult, output_path: Path | None) -> None:
    """Print the rendered changelog, or report where it was written, exiting non-zero on error."""
    if result.status == CollectChangelogStatus.ERROR:
        typer.echo(f"Failed to collect changelog: {result.error}", err=True)
        raise typer.Exit(1)
    if result.status == CollectChangelogStatus.NO_PULL_REQUESTS:
        typer.echo("No pull requests found - the changelog is empty.", err=True)
    if output_path is None:
        typer.echo(result.output, nl=False)
    else:
        typer.echo(f"Wrote changelog for {result.change_count} change(s) from {result.pull_request_count} pull request(s) to {output_path}", err=True)


@typer_app.command(name="render")
def render_cli(
    pulls_file: Annotated[Path, Argument(envvar="PULLS_FILE", help="Path to a JSON file holding the milestone's pull requests.")],
    milestone: Annotated[
        str | None, Option(envvar="MILESTONE", help="Milestone title for the heading. Defaults to the first pull request's milestone.")
    ] = None,
    output_format: Annotated[
        OutputFormat | None, Option("--format", help="Output format (defaults to the CHANGELOG_FORMAT env var, then markdown).")
    ] = None,
    output_file: Annotated[Path | None, Option("--output", envvar="OUTPUT_FILE", help="File to write the changelog to instead of stdout.")] = None,
) -> None:
    """Render the changelog of pull requests exported to a JSON file."""
    if not pulls_file.exists():
        typer.echo(f"Pull requests file not found: {pulls_file.absolute()}", err=True)
        raise typer.Exit(1)

    result = run_render_workflow(
        pulls_file=pulls_file,
        milestone=milestone,
        output_format=reconcile_output_format(output_format),
        output_path=output_file,
    )
    echo_result(result, output_file)


# --- Typer group for commands that query a repository ---
repo_app = typer.Typer(help="Repository-related commands")


def repo_callback(
    ctx: typer.Context,
    repo: Annotated[str, Argument(help="Repository name (owner/repo).")],
    github_api_url: Annotated[str | None, Option(envvar="GITHUB_API_URL", help="GitHub API URL.")] = None,
    github_pat_token: Annotated[str | None, Option(envvar="GITHUB_PAT_TOKEN", help="GitHub Personal Access Token.")] = None,
    github_app_id: Annotated[int | None, Option(envvar="GITHUB_APP_ID", help="GitHub App ID.")] = None,
    github_app_private_key_path: Annotated[Path | None, Option(envvar="GITHUB_APP_PRIVATE_KEY_PATH", help="Path to GitHub App private key.")] = None,
    github_app_installation_id: Annotated[int | None, Option(envvar="GITHUB_APP_INSTALLATION_ID", help="GitHub App Installation ID.")] = None,
) -> None:
    """Resolve the repository and GitHub credentials for the current context."""
    try:
        config = asyncio.run(
            reconcile_github_configuration(
                cli_repo=repo,
                cli_github_api_url=github_api_url,
                cli_github_pat_token=github_pat_token,
                cli_github_app_id=github_app_id,
                cli_github_app_private_key_path=github_app_private_key_path,
                cli_github_app_installation_id=github_app_installation_id,
            )
        )
    except (GitHubAuthenticationConfigurationUndefinedError, ValueError) as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc
    ctx.obj = config


repo_app.callback()(repo_callback)


@repo_app.command(name="collect")
def collect_cli(
    ctx: typer.Context,
    milestone: Annotated[str, Argument(envvar="MILESTONE", help="Title of the milestone to collect the changelog for.")],
    output_format: Annotated[
        OutputFormat | None, Option("--format", help="Output format (defaults to the CHANGELOG_FORMAT env var, then markdown).")
    ] = None,
    output_file: Annotated[Path | None, Option("--output", envvar="OUTPUT_FILE", help="File to write the changelog to instead of stdout.")] = None,
) -> None:
    """Collect the changelog of a milestone's merged pull requests."""
    config: GitHubConfig = ctx.obj
    result = asyncio.run(
        run_collect_workflow(
            config=config,
            milestone=milestone,
            output_format=reconcile_output_format(output_format),
            output_path=output_file,
        )
    )
    echo_result(result, output_file)


typer_app.add_typer(repo_app, name="repo")


if __name__ == "__main__":
    typer_app()
