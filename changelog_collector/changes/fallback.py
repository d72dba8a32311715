"""Fallback change used when a pull request does not declare usable changes."""

import structlog

from changelog_collector.changes.models import MODULE_UNKNOWN, ChangeRecord, ChangeType, PullRequest

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def fallback_change(pull_request: PullRequest, reason: str | None = None) -> ChangeRecord:
    """Build the change that represents a pull request without a valid changelog.

    The change lands in the UNKNOWN module so it is easy to find and fix by hand.
    """
    logger.warning(
        "Using fallback change for pull request",
        pull_request=pull_request.number,
        url=pull_request.url,
        reason=reason,
    )
    return ChangeRecord(
        module=MODULE_UNKNOWN,
        type=ChangeType.UNKNOWN.value,
        description=f"{pull_request.title} (#{pull_request.number})",
        pull_request=pull_request.url,
    )
