"""Contains utility functions for GitHub interactions."""


async def split_repository_in_configuration(repo: str | None) -> tuple[str, str]:
    """Splits the repository in the configuration into owner and repository."""
    if repo is None:
        raise ValueError("A repository is required to query GitHub.")
    repo = repo.strip("/")
    parts = repo.split("/")
    if len(parts) != 2 or not all(parts):
        raise ValueError("Repository must be in the format 'owner/repo' with no leading/trailing slashes or extra parts.")
    owner, repository = parts
    return owner, repository


def parse_pull_request_number(pull_request_url: str) -> int | None:
    """Parse the pull request number from the last path segment of its URL.

    Returns None when the last segment is not a number.
    """
    last_segment = pull_request_url.rstrip("/").rsplit("/", 1)[-1]
    if not last_segment.isdigit():
        return None
    return int(last_segment)
