"""Contains unit tests for the utils.github module."""

import pytest

from changelog_collector.utils.github import parse_pull_request_number, split_repository_in_configuration


@pytest.mark.asyncio
async def test_split_repository_valid() -> None:
    """Test splitting a valid owner/repo string."""
    owner, repo = await split_repository_in_configuration("deckhouse/deckhouse")
    assert owner == "deckhouse"
    assert repo == "deckhouse"


@pytest.mark.asyncio
async def test_split_repository_missing() -> None:
    """Test that ValueError is raised if repo is None."""
    with pytest.raises(ValueError, match="A repository is required"):
        await split_repository_in_configuration(None)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "malformed_repo",
    [
        pytest.param("octocat-HelloWorld", id="no slash"),
        pytest.param("", id="empty string"),
        pytest.param("/", id="only a slash"),
        pytest.param("owner/repo/extra", id="too many parts"),
    ],
)
async def test_split_repository_various_malformed(malformed_repo: str) -> None:
    """Test that ValueError is raised if repo is malformed (various cases)."""
    with pytest.raises(ValueError):
        await split_repository_in_configuration(malformed_repo)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "repo_input,expected_owner,expected_repo",
    [
        pytest.param("octocat/Hello-World", "octocat", "Hello-World", id="no slashes"),
        pytest.param("/octocat/Hello-World", "octocat", "Hello-World", id="leading slash"),
        pytest.param("octocat/Hello-World/", "octocat", "Hello-World", id="trailing slash"),
    ],
)
async def test_split_repository_strips_slashes(repo_input: str, expected_owner: str, expected_repo: str) -> None:
    """Test that leading/trailing slashes are stripped and owner/repo are parsed correctly."""
    owner, repo = await split_repository_in_configuration(repo_input)
    assert owner == expected_owner
    assert repo == expected_repo


@pytest.mark.parametrize(
    "url,expected",
    [
        pytest.param("https://github.com/deckhouse/deckhouse/pull/151", 151, id="pull request url"),
        pytest.param("https://github.com/deckhouse/deckhouse/pull/151/", 151, id="trailing slash"),
        pytest.param("https://github.com/deckhouse/deckhouse/pull/abc", None, id="non numeric"),
        pytest.param("", None, id="empty"),
    ],
)
def test_parse_pull_request_number(url: str, expected: int | None) -> None:
    """Test parsing the pull request number from its URL."""
    assert parse_pull_request_number(url) == expected
