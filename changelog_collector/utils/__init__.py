"""Utility modules for shared functionality."""

from .constants import (
    CHANGELOG_BLOCK_END_PATTERN,
    CHANGELOG_BLOCK_START_PATTERN,
    CHANGELOG_BLOCK_TAGS,
    CHANGELOG_DOCUMENT_SEPARATOR,
)
from .retry import retry_on_rate_limit

__all__ = [
    "CHANGELOG_BLOCK_TAGS",
    "CHANGELOG_BLOCK_START_PATTERN",
    "CHANGELOG_BLOCK_END_PATTERN",
    "CHANGELOG_DOCUMENT_SEPARATOR",
    "retry_on_rate_limit",
]
