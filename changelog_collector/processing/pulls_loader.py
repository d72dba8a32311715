"""Loads pull requests exported as JSON.

The expected file holds a JSON array of pull request objects, as produced by a
GitHub workflow that queries the milestone's pull requests:

    [
      {
        "state": "MERGED",
        "number": 1,
        "url": "https://github.com/owner/repo/pull/1",
        "title": "Fix uptime calculation",
        "body": "...",
        "milestone": {"title": "v1.40.0", "number": 2}
      }
    ]

Unknown keys are ignored.
"""

from pathlib import Path

import structlog
from pydantic import TypeAdapter, ValidationError

from changelog_collector.changes.models import PullRequest
from changelog_collector.processing.exceptions import PullRequestLoadError

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

pull_requests_adapter = TypeAdapter(list[PullRequest])


def parse_pull_requests(content: str | bytes, source: Path | str = "<string>") -> list[PullRequest]:
    """Validate a JSON document holding a list of pull requests.

    Raises:
        PullRequestLoadError: If the document is not valid JSON or does not match the schema.
    """
    try:
        pull_requests = pull_requests_adapter.validate_json(content)
    except ValidationError as ve:
        errors = [dict(error) for error in ve.errors(include_url=False)]
        logger.error("Validation error for pull requests", source=str(source), error_count=len(errors))
        raise PullRequestLoadError(source, errors) from ve
    logger.debug("Loaded pull requests", source=str(source), pull_request_count=len(pull_requests))
    return pull_requests


def load_pull_requests_file(path: Path) -> list[PullRequest]:
    """Load and validate pull requests from a JSON file.

    Raises:
        PullRequestLoadError: If the file cannot be read or its content is invalid.
    """
    try:
        content = path.read_bytes()
    except OSError as exc:
        logger.error("Failed to read pull requests file", path=str(path), error=str(exc))
        raise PullRequestLoadError(path, [{"error": str(exc)}]) from exc
    return parse_pull_requests(content, source=path)


def milestone_of(pull_requests: list[PullRequest]) -> str | None:
    """Return the milestone title of the first pull request, if any."""
    if not pull_requests or pull_requests[0].milestone is None:
        return None
    return pull_requests[0].milestone.title
