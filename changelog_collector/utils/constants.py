"""Shared constants used across the application."""

import re

# Changelog Block Constants
# -------------------------

CHANGELOG_BLOCK_TAGS = ("changelog", "changes")
"""Language tags that mark a fenced block as changelog content."""

CHANGELOG_BLOCK_START_PATTERN = re.compile(r"^```(?:" + "|".join(CHANGELOG_BLOCK_TAGS) + r")[ \t\r]*$", re.MULTILINE)
"""Pattern to match the opening fence of a changelog block (e.g., ```changelog)."""

CHANGELOG_BLOCK_END_PATTERN = re.compile(r"^```[ \t\r]*$", re.MULTILINE)
"""Pattern to match a bare closing fence."""

CHANGELOG_DOCUMENT_SEPARATOR = "\n---\n"
"""Separator placed between YAML documents when joining several changelog blocks."""

# Rendering Constants
# -------------------

MARKDOWN_NOTE_PREFIX = "**NOTE!**"
"""Prefix of the note line appended to a Markdown changelog bullet."""

MALFORMED_SECTION_TITLE = "[MALFORMED]"
"""Title of the Markdown section listing pull requests that need manual fixing."""

YAML_LINE_WIDTH = 100
"""Line width used when dumping the changelog as YAML."""

# GitHub Constants
# ----------------

DEFAULT_GITHUB_API_URL = "https://api.github.com"
"""Default GitHub API URL."""

PULL_REQUEST_SEARCH_QUERY = 'repo:{owner}/{repo} is:pr milestone:"{milestone}"'
"""Search query template used to list the pull requests of a milestone."""
