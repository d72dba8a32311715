"""GitHub client adapter for the githubkit library."""

from typing import Any, Self

import structlog
from githubkit import Response

from changelog_collector.changes.models import MERGED_STATE, PullRequest, PullRequestMilestone
from changelog_collector.configuration.models import GitHubConfig
from changelog_collector.utils.constants import PULL_REQUEST_SEARCH_QUERY
from changelog_collector.utils.github import split_repository_in_configuration
from changelog_collector.utils.retry import retry_on_rate_limit

from .client import GitHubClient, get_github_client

logger = structlog.get_logger(__name__)


def pull_request_state(item: Any) -> str:
    """Return the pull request state of a search result item, MERGED for merged pull requests."""
    pull_request_info = getattr(item, "pull_request", None)
    if pull_request_info is not None and getattr(pull_request_info, "merged_at", None):
        return MERGED_STATE
    return str(item.state).upper()


def search_item_to_pull_request(item: Any) -> PullRequest:
    """Convert an issue search result item into a pull request model."""
    milestone = None
    if getattr(item, "milestone", None) is not None:
        milestone = PullRequestMilestone(title=item.milestone.title, number=item.milestone.number)
    return PullRequest(
        state=pull_request_state(item),
        number=item.number,
        url=item.html_url,
        title=item.title,
        body=item.body or "",
        milestone=milestone,
    )


class GitHubKitAdapter:
    """GitHub client adapter for the githubkit library."""

    def __init__(self, client: GitHubClient, owner: str, repo_name: str) -> None:
        """Initialize the GitHub client adapter with an already-initialized client."""
        self.client = client
        self.owner = owner
        self.repo_name = repo_name

    @classmethod
    async def create(cls, config: GitHubConfig) -> Self:
        """Create a new GitHub client adapter from a resolved configuration."""
        owner, repo_name = await split_repository_in_configuration(repo=config.repo)
        logger.info(
            "Creating client for GitHub instance and repository",
            github_api_url=config.github_api_url,
            owner=owner,
            repo_name=repo_name,
        )
        return cls(get_github_client(config), owner, repo_name)

    @retry_on_rate_limit()
    async def _search_pull_requests_page(self, query: str, page: int, per_page: int) -> list[Any]:
        response: Response[Any] = await self.client.rest.search.async_issues_and_pull_requests(
            q=query,
            per_page=per_page,
            page=page,
        )
        return list(response.parsed_data.items)

    async def list_milestone_pull_requests(self, milestone: str, per_page: int = 100) -> list[PullRequest]:
        """List all pull requests of a milestone, handling pagination.

        Pull requests come back in the order GitHub returns them, whatever their state.
        """
        query = PULL_REQUEST_SEARCH_QUERY.format(owner=self.owner, repo=self.repo_name, milestone=milestone)
        pull_requests: list[PullRequest] = []
        page = 1
        while True:
            items = await self._search_pull_requests_page(query, page, per_page)
            if not items:
                break
            pull_requests.extend(search_item_to_pull_request(item) for item in items)
            if len(items) < per_page:
                break
            page += 1
        logger.info("Listed milestone pull requests", milestone=milestone, pull_request_count=len(pull_requests))
        return pull_requests
