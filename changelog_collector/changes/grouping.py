"""Groups change records by module and category."""

from collections.abc import Iterable

import structlog

from changelog_collector.changes.decoder import parse_pull_request_changes
from changelog_collector.changes.exceptions import UnknownChangeTypeError
from changelog_collector.changes.models import (
    ChangeCategory,
    ChangeRecord,
    ChangesByModule,
    ChangeType,
    PullRequest,
)

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

CATEGORY_BY_TYPE: dict[str, str] = {
    ChangeType.FIX.value: ChangeCategory.FIXES.value,
    ChangeType.FEATURE.value: ChangeCategory.FEATURES.value,
    ChangeType.UNKNOWN.value: ChangeCategory.UNKNOWN.value,
}


def collect_change_records(pull_requests: Iterable[PullRequest]) -> list[ChangeRecord]:
    """Parse the changes of every merged pull request, keeping input order."""
    changes: list[ChangeRecord] = []
    skipped = 0
    for pull_request in pull_requests:
        if not pull_request.merged:
            skipped += 1
            continue
        changes.extend(parse_pull_request_changes(pull_request))
    logger.info("Collected change records", change_count=len(changes), skipped_unmerged=skipped)
    return changes


def add_change(changes_by_module: ChangesByModule, change: ChangeRecord) -> None:
    """Append a change to its module category, creating both on first sight.

    Raises:
        UnknownChangeTypeError: If the change type was not normalized beforehand.
    """
    category = CATEGORY_BY_TYPE.get(change.type)
    if category is None:
        raise UnknownChangeTypeError(change.type, change.module)
    module_changes = changes_by_module.setdefault(change.module, {})
    module_changes.setdefault(category, []).append(change.to_entry())


def group_by_module(changes: Iterable[ChangeRecord]) -> ChangesByModule:
    """Fold change records into a module -> category -> entries mapping.

    Entries keep the order in which the changes arrive. Nothing is merged or
    de-duplicated.
    """
    changes_by_module: ChangesByModule = {}
    for change in changes:
        add_change(changes_by_module, change)
    return changes_by_module


def collect_changelog(pull_requests: Iterable[PullRequest]) -> ChangesByModule:
    """Collect and group the changes of all merged pull requests."""
    return group_by_module(collect_change_records(pull_requests))
