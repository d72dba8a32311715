"""Contains results of the changelog collection workflows."""

from enum import Enum

from pydantic import BaseModel


class CollectChangelogStatus(str, Enum):
    """Status of a changelog collection run."""

    SUCCESS = "success"
    NO_PULL_REQUESTS = "no_pull_requests"
    ERROR = "error"


class CollectChangelogResult(BaseModel):
    """Result of a changelog collection run."""

    status: CollectChangelogStatus
    milestone: str | None = None
    output: str = ""
    pull_request_count: int = 0
    change_count: int = 0
    error: str | None = None
