"""Custom exceptions for the processing module."""

from pathlib import Path
from typing import Any


class PullRequestLoadError(Exception):
    """Raised when a pull request file cannot be read or validated."""

    def __init__(self, path: Path | str, errors: list[dict[str, Any]]):
        super().__init__(f"Errors encountered while loading pull requests from {path}.")
        self.path = path
        self.errors = errors
