"""Changelog parsing: block extraction, decoding, fallback and grouping."""

from .decoder import decode_changes, parse_pull_request_changes
from .exceptions import UnknownChangeTypeError
from .extractor import extract_changes_block
from .fallback import fallback_change
from .grouping import collect_change_records, collect_changelog, group_by_module
from .models import (
    ChangeCategory,
    ChangeEntry,
    ChangeRecord,
    ChangesByModule,
    ChangeType,
    PullRequest,
    PullRequestMilestone,
    is_valid,
)

__all__ = [
    "ChangeCategory",
    "ChangeEntry",
    "ChangeRecord",
    "ChangesByModule",
    "ChangeType",
    "PullRequest",
    "PullRequestMilestone",
    "UnknownChangeTypeError",
    "collect_change_records",
    "collect_changelog",
    "decode_changes",
    "extract_changes_block",
    "fallback_change",
    "group_by_module",
    "is_valid",
    "parse_pull_request_changes",
]
