"""Locates changelog blocks embedded in pull request bodies."""

import structlog

from changelog_collector.utils.constants import (
    CHANGELOG_BLOCK_END_PATTERN,
    CHANGELOG_BLOCK_START_PATTERN,
    CHANGELOG_DOCUMENT_SEPARATOR,
)

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def extract_changes_block(body: str | None) -> str:
    """Return the content of every changelog block in a pull request body.

    A block opens with a line that is exactly ```changelog or ```changes and
    closes with a bare ``` line. Blocks missing their closing fence are
    discarded, and empty blocks are skipped. When several blocks are present,
    their contents are joined with a YAML document separator so they decode as
    one continuous list of changes.

    Args:
        body: The pull request body.

    Returns:
        The joined block contents, or an empty string if no block was found.
    """
    if not body:
        return ""

    _, *chunks = CHANGELOG_BLOCK_START_PATTERN.split(body)
    if not chunks:
        return ""

    contents: list[str] = []
    for chunk in chunks:
        # Anything after the last opening fence without a closing fence is not a block.
        if not CHANGELOG_BLOCK_END_PATTERN.search(chunk):
            logger.debug("Discarding changelog block without closing fence")
            continue
        content = CHANGELOG_BLOCK_END_PATTERN.split(chunk, maxsplit=1)[0].strip()
        if content:
            contents.append(content)

    return CHANGELOG_DOCUMENT_SEPARATOR.join(contents)
