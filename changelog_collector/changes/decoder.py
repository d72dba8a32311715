"""Decodes changelog blocks into change records.

A changelog block holds one or more YAML documents separated by ``---`` lines,
each describing a single change:

```changelog
module: upmeter
type: fix
description: correct group uptime calculation
note: Network flap is expected, but no longer than 10 seconds
---
module: upmeter
type: feature
description: added big thing to enhance security
```

Decoding is all-or-nothing for a pull request: if any document is malformed,
the pull request is represented by a single fallback change instead.
"""

import datetime
from collections.abc import Mapping
from typing import Any

import structlog
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from changelog_collector.changes.extractor import extract_changes_block
from changelog_collector.changes.fallback import fallback_change
from changelog_collector.changes.models import ChangeRecord, ChangeType, PullRequest, is_valid

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

yaml = YAML(typ="safe")

REQUIRED_KEYS = ("module", "type", "description")
OPTIONAL_KEYS = ("note",)
KNOWN_KEYS = REQUIRED_KEYS + OPTIONAL_KEYS

KNOWN_TYPES = {ChangeType.FIX.value, ChangeType.FEATURE.value}

_SCALAR_TYPES = (str, int, float, bool, datetime.date)


def normalize_change_type(value: str) -> str:
    """Keep 'fix' and 'feature' as they are and collapse anything else to 'unknown'."""
    return value if value in KNOWN_TYPES else ChangeType.UNKNOWN.value


def _scalar_to_text(value: Any) -> str | None:
    """Convert a YAML scalar to text, returning None for collections."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, _SCALAR_TYPES):
        return str(value)
    return None


def _load_documents(raw_changes: str) -> list[Any] | None:
    try:
        return [doc for doc in yaml.load_all(raw_changes) if doc is not None]
    except (YAMLError, ValueError) as exc:
        logger.warning("Failed to parse changelog block as YAML", error=str(exc))
        return None


def convert_change_document(doc: Any, pull_request_url: str) -> ChangeRecord | None:
    """Convert one decoded YAML document into a change record.

    Only the known keys are read; any other key, including a ``pull_request``
    key, is ignored. The pull request URL always comes from the pull request
    itself.

    Returns:
        The change record, or None if the document is not a mapping holding the
        required keys with scalar values.
    """
    if not isinstance(doc, Mapping):
        logger.debug("Changelog document is not a mapping", actual_type=type(doc).__name__)
        return None

    missing_keys = [key for key in REQUIRED_KEYS if key not in doc]
    if missing_keys:
        logger.debug("Changelog document is missing required keys", missing_keys=missing_keys)
        return None

    extra_keys = [key for key in doc if key not in KNOWN_KEYS]
    if extra_keys:
        logger.debug("Extra keys in changelog document will be ignored", extra_keys=extra_keys)

    fields: dict[str, str] = {}
    for key in KNOWN_KEYS:
        if key not in doc:
            continue
        text = _scalar_to_text(doc[key])
        if text is None:
            logger.debug("Changelog document value is not a scalar", key=key, actual_type=type(doc[key]).__name__)
            return None
        fields[key] = text

    note = fields.get("note", "").strip()
    return ChangeRecord(
        module=fields["module"],
        type=normalize_change_type(fields["type"]),
        description=fields["description"].strip(),
        pull_request=pull_request_url,
        note=note or None,
    )


def decode_changes(raw_changes: str, pull_request_url: str) -> list[ChangeRecord] | None:
    """Decode the content of a changelog block into change records.

    Args:
        raw_changes: Changelog block content, as returned by the extractor.
        pull_request_url: URL of the pull request the block was found in.

    Returns:
        One record per document, or None if the block is unparsable, holds no
        documents, or any of its documents is malformed or invalid.
    """
    docs = _load_documents(raw_changes)
    if not docs:
        return None

    changes: list[ChangeRecord] = []
    for index, doc in enumerate(docs):
        change = convert_change_document(doc, pull_request_url)
        if change is None or not is_valid(change):
            logger.debug("Changelog document rejected", document_index=index)
            return None
        changes.append(change)
    return changes


def parse_pull_request_changes(pull_request: PullRequest) -> list[ChangeRecord]:
    """Collect the changes declared in a pull request body.

    Always returns at least one change: when the body has no changelog block,
    or the block does not decode into valid changes, a single fallback change
    stands in for the whole pull request.
    """
    raw_changes = extract_changes_block(pull_request.body)
    if not raw_changes:
        return [fallback_change(pull_request, reason="no changelog block")]

    changes = decode_changes(raw_changes, pull_request.url)
    if changes is None:
        return [fallback_change(pull_request, reason="malformed changelog block")]

    logger.debug("Parsed pull request changes", pull_request=pull_request.number, change_count=len(changes))
    return changes
