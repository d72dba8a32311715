"""Unit tests for the Typer CLI."""

import json
import logging
from pathlib import Path
from typing import Callable, Generator
from unittest.mock import AsyncMock, patch

import pytest
from pytest import MonkeyPatch
from typer.testing import CliRunner

from changelog_collector.changes.models import PullRequest
from changelog_collector.collect.results import CollectChangelogResult, CollectChangelogStatus
from changelog_collector.configuration.cli import typer_app
from changelog_collector.configuration.models import GitHubAuthenticationType, OutputFormat
from changelog_collector.utils.logging import HANDLER_NAME

runner = CliRunner()

FIX_BODY = "```changelog\nmodule: upmeter\ntype: fix\ndescription: correct uptime calc\n```"


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: MonkeyPatch) -> Generator[None, None, None]:
    """Keep settings from the shell out of the CLI and drop its log handler afterwards."""
    for name in ("DEBUG", "CHANGELOG_FORMAT", "REPO", "GITHUB_PAT_TOKEN", "GITHUB_APP_ID", "GITHUB_APP_PRIVATE_KEY_PATH", "GITHUB_APP_INSTALLATION_ID"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(Path(__file__).parent)
    yield
    root_logger = logging.getLogger()
    root_logger.handlers = [handler for handler in root_logger.handlers if handler.get_name() != HANDLER_NAME]


@pytest.fixture
def pulls_file(tmp_path: Path, make_pull_request: Callable[..., PullRequest]) -> Path:
    """Write a pull requests file with a single fix."""
    path = tmp_path / "pulls.json"
    path.write_text(json.dumps([make_pull_request(body=FIX_BODY).model_dump(mode="json")]), encoding="utf-8")
    return path


def test_render_markdown(pulls_file: Path) -> None:
    """Test rendering a pull requests file as Markdown."""
    result = runner.invoke(typer_app, ["render", str(pulls_file)])
    assert result.exit_code == 0
    assert "# Changelog v1.40.0" in result.output
    assert "**[upmeter]** correct uptime calc" in result.output


def test_render_yaml_to_file(pulls_file: Path, tmp_path: Path) -> None:
    """Test rendering YAML into an output file."""
    output_file = tmp_path / "changelog.yml"
    result = runner.invoke(typer_app, ["render", str(pulls_file), "--format", "yaml", "--output", str(output_file)])
    assert result.exit_code == 0
    assert output_file.read_text(encoding="utf-8").startswith("upmeter:\n")


def test_render_missing_file(tmp_path: Path) -> None:
    """Test that a missing pull requests file is an error."""
    result = runner.invoke(typer_app, ["render", str(tmp_path / "missing.json")])
    assert result.exit_code == 1
    assert "Pull requests file not found" in result.output


def test_repo_collect(monkeypatch: MonkeyPatch) -> None:
    """Test that collect runs the workflow with the reconciled configuration."""
    workflow = AsyncMock(
        return_value=CollectChangelogResult(status=CollectChangelogStatus.SUCCESS, milestone="v1.40.0", output="# Changelog v1.40.0\n")
    )
    with patch("changelog_collector.configuration.cli.run_collect_workflow", new=workflow):
        result = runner.invoke(typer_app, ["repo", "--github-pat-token", "token", "deckhouse/deckhouse", "collect", "v1.40.0", "--format", "yaml"])
    assert result.exit_code == 0
    assert "# Changelog v1.40.0" in result.output
    kwargs = workflow.await_args.kwargs
    assert kwargs["config"].repo == "deckhouse/deckhouse"
    assert kwargs["config"].github_authentication_type == GitHubAuthenticationType.PAT
    assert kwargs["milestone"] == "v1.40.0"
    assert kwargs["output_format"] == OutputFormat.YAML


def test_repo_collect_error_result() -> None:
    """Test that a failed collection exits non-zero."""
    workflow = AsyncMock(return_value=CollectChangelogResult(status=CollectChangelogStatus.ERROR, milestone="v1.40.0", error="API unavailable"))
    with patch("changelog_collector.configuration.cli.run_collect_workflow", new=workflow):
        result = runner.invoke(typer_app, ["repo", "--github-pat-token", "token", "deckhouse/deckhouse", "collect", "v1.40.0"])
    assert result.exit_code == 1
    assert "Failed to collect changelog: API unavailable" in result.output


def test_repo_collect_without_credentials() -> None:
    """Test that collecting requires GitHub credentials."""
    result = runner.invoke(typer_app, ["repo", "deckhouse/deckhouse", "collect", "v1.40.0"])
    assert result.exit_code == 1
    assert "No GitHub authentication configuration provided" in result.output
