"""Pytest configuration for integration tests."""

import os
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent.parent

SETTINGS_VARIABLES = (
    "DEBUG",
    "CHANGELOG_FORMAT",
    "GITHUB_API_URL",
    "REPO",
    "GITHUB_PAT_TOKEN",
    "GITHUB_APP_ID",
    "GITHUB_APP_PRIVATE_KEY_PATH",
    "GITHUB_APP_INSTALLATION_ID",
    "PULLS_FILE",
    "MILESTONE",
    "OUTPUT_FILE",
)


@pytest.fixture
def cli_env() -> dict[str, str]:
    """Environment for CLI subprocesses with no changelog settings and the project importable.

    Settings from the developer's shell would otherwise leak into the CLI under test.
    """
    env = {name: value for name, value in os.environ.items() if name not in SETTINGS_VARIABLES}
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(PROJECT_ROOT), env.get("PYTHONPATH")]))
    return env
