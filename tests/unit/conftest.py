"""Fixtures for unit tests."""

from typing import Callable, Generator

import pytest
import structlog

from changelog_collector.changes.models import PullRequest, PullRequestMilestone

REPO_URL = "https://github.com/deckhouse/deckhouse"


@pytest.fixture(autouse=True)
def configure_structlog_for_caplog() -> Generator[None, None, None]:
    """Configure structlog for use with caplog."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    yield
    structlog.reset_defaults()


@pytest.fixture
def make_pull_request() -> Callable[..., PullRequest]:
    """Return a factory for merged pull requests of milestone v1.40.0."""

    def _make(number: int = 1, body: str = "", title: str = "Some change", state: str = "MERGED") -> PullRequest:
        return PullRequest(
            state=state,
            number=number,
            url=f"{REPO_URL}/pull/{number}",
            title=title,
            body=body,
            milestone=PullRequestMilestone(title="v1.40.0", number=2),
        )

    return _make
