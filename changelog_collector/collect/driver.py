"""Orchestrates changelog collection: load pull requests, collect changes, render, write."""

import time
from pathlib import Path

import structlog

from changelog_collector.changes.exceptions import UnknownChangeTypeError
from changelog_collector.changes.grouping import collect_change_records, group_by_module
from changelog_collector.changes.models import ChangesByModule, PullRequest
from changelog_collector.collect.results import CollectChangelogResult, CollectChangelogStatus
from changelog_collector.configuration.models import GitHubConfig, OutputFormat
from changelog_collector.formatting.markdown import render_markdown
from changelog_collector.formatting.yaml import render_yaml
from changelog_collector.github.adapter import GitHubKitAdapter
from changelog_collector.processing.exceptions import PullRequestLoadError
from changelog_collector.processing.pulls_loader import load_pull_requests_file, milestone_of

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def render_changelog(milestone: str, changes_by_module: ChangesByModule, output_format: OutputFormat) -> str:
    """Render the grouped changelog in the requested format."""
    if output_format == OutputFormat.YAML:
        return render_yaml(changes_by_module)
    return render_markdown(milestone, changes_by_module)


def build_changelog(
    pull_requests: list[PullRequest],
    milestone: str | None = None,
    output_format: OutputFormat = OutputFormat.MARKDOWN,
) -> CollectChangelogResult:
    """Collect the changes of a milestone's pull requests and render them.

    The milestone defaults to the one of the first pull request. An empty list
    of pull requests renders nothing.
    """
    if not pull_requests:
        logger.info("No pull requests to collect changes from")
        return CollectChangelogResult(status=CollectChangelogStatus.NO_PULL_REQUESTS, milestone=milestone)

    milestone = milestone or milestone_of(pull_requests) or ""
    changes = collect_change_records(pull_requests)
    changes_by_module = group_by_module(changes)
    output = render_changelog(milestone, changes_by_module, output_format)
    logger.info(
        "Built changelog",
        milestone=milestone,
        output_format=output_format.value,
        pull_request_count=len(pull_requests),
        change_count=len(changes),
        module_count=len(changes_by_module),
    )
    return CollectChangelogResult(
        status=CollectChangelogStatus.SUCCESS,
        milestone=milestone,
        output=output,
        pull_request_count=len(pull_requests),
        change_count=len(changes),
    )


def write_output(output: str, output_path: Path) -> None:
    """Write the rendered changelog to a file, creating parent directories as needed."""
    if output_path.parent != Path(""):
        output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(output, encoding="utf-8")
    logger.info("Wrote changelog", path=str(output_path), length=len(output))


def _finish(result: CollectChangelogResult, output_path: Path | None) -> CollectChangelogResult:
    if output_path is None or result.status == CollectChangelogStatus.ERROR:
        return result
    try:
        write_output(result.output, output_path)
    except OSError as exc:
        logger.error("Failed to write changelog", path=str(output_path), error=str(exc))
        return result.model_copy(update={"status": CollectChangelogStatus.ERROR, "error": str(exc)})
    return result


def run_render_workflow(
    pulls_file: Path,
    milestone: str | None = None,
    output_format: OutputFormat = OutputFormat.MARKDOWN,
    output_path: Path | None = None,
) -> CollectChangelogResult:
    """Render the changelog of pull requests stored in a JSON file."""
    try:
        pull_requests = load_pull_requests_file(pulls_file)
    except PullRequestLoadError as exc:
        return CollectChangelogResult(
            status=CollectChangelogStatus.ERROR,
            milestone=milestone,
            error=f"{exc} {exc.errors}",
        )
    result = build_changelog(pull_requests, milestone=milestone, output_format=output_format)
    return _finish(result, output_path)


async def run_collect_workflow(
    config: GitHubConfig,
    milestone: str,
    output_format: OutputFormat = OutputFormat.MARKDOWN,
    output_path: Path | None = None,
) -> CollectChangelogResult:
    """Fetch the pull requests of a milestone from GitHub and render their changelog."""
    start_time = time.time()
    try:
        adapter = await GitHubKitAdapter.create(config)
        pull_requests = await adapter.list_milestone_pull_requests(milestone)
    except Exception as exc:
        logger.exception("Failed to fetch milestone pull requests", repo=config.repo, milestone=milestone)
        return CollectChangelogResult(status=CollectChangelogStatus.ERROR, milestone=milestone, error=str(exc))

    try:
        result = build_changelog(pull_requests, milestone=milestone, output_format=output_format)
    except UnknownChangeTypeError:
        logger.exception("Changelog grouping received an unnormalized change type")
        raise

    logger.info("Collected milestone changelog", repo=config.repo, milestone=milestone, duration=round(time.time() - start_time, 2))
    return _finish(result, output_path)
