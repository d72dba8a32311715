"""Data models for pull requests and the changes collected from them."""

from enum import Enum
from typing import Any, TypeAlias

from pydantic import BaseModel, ConfigDict, field_validator

MERGED_STATE = "MERGED"
"""The only pull request state whose changes are collected."""

MODULE_UNKNOWN = "UNKNOWN"
"""Module name used by fallback changes."""


class ChangeType(str, Enum):
    """Enum for the change types recognized in changelog blocks."""

    FIX = "fix"
    FEATURE = "feature"
    UNKNOWN = "unknown"


class ChangeCategory(str, Enum):
    """Enum for the per-module categories of the grouped changelog."""

    FIXES = "fixes"
    FEATURES = "features"
    UNKNOWN = "unknown"


class PullRequestMilestone(BaseModel):
    """Pydantic model for the milestone a pull request belongs to."""

    model_config = ConfigDict(frozen=True)

    title: str
    number: int | None = None


class PullRequest(BaseModel):
    """Pydantic model for a pull request as handed to the changelog collector."""

    model_config = ConfigDict(frozen=True)

    state: str
    number: int
    url: str
    title: str
    body: str = ""
    milestone: PullRequestMilestone | None = None

    @field_validator("body", mode="before")
    @classmethod
    def _none_body_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @property
    def merged(self) -> bool:
        """Whether the pull request has been merged."""
        return self.state == MERGED_STATE


class ChangeEntry(BaseModel):
    """A single change as rendered inside a module category."""

    model_config = ConfigDict(frozen=True)

    description: str
    pull_request: str
    note: str | None = None


class ChangeRecord(BaseModel):
    """A module-scoped change found in (or synthesized for) a pull request."""

    model_config = ConfigDict(frozen=True)

    module: str
    type: str
    description: str
    pull_request: str
    note: str | None = None

    def to_entry(self) -> ChangeEntry:
        """Project the record onto the fields kept in the grouped changelog."""
        return ChangeEntry(description=self.description, pull_request=self.pull_request, note=self.note)


ModuleChanges: TypeAlias = dict[str, list[ChangeEntry]]
ChangesByModule: TypeAlias = dict[str, ModuleChanges]

CHANGE_FIELDS: tuple[str, ...] = ("description", "pull_request")
"""Fields every change entry needs to be rendered."""

PULL_REQUEST_CHANGE_FIELDS: tuple[str, ...] = ("module", "type", *CHANGE_FIELDS)
"""Fields every change record sourced from a pull request needs."""


def is_valid(change: Any, required_fields: tuple[str, ...] = PULL_REQUEST_CHANGE_FIELDS) -> bool:
    """Return whether all required fields of a change are filled.

    Missing attributes, None and whitespace-only strings all count as empty.
    """
    for field in required_fields:
        value = getattr(change, field, None)
        if value is None or not str(value).strip():
            return False
    return True
