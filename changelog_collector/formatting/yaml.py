"""Renders the grouped changelog as YAML."""

from typing import Any

import structlog

from changelog_collector.changes.models import CHANGE_FIELDS, ChangeCategory, ChangeEntry, ChangesByModule, is_valid
from changelog_collector.utils.yaml import dump_yaml_to_string

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

YAML_CATEGORIES = (ChangeCategory.FEATURES.value, ChangeCategory.FIXES.value)


def _entry_to_dict(entry: ChangeEntry) -> dict[str, Any]:
    return dict(sorted(entry.model_dump(exclude_none=True).items()))


def changelog_to_data(changes_by_module: ChangesByModule) -> dict[str, Any]:
    """Convert the grouped changelog to plain data with sorted keys.

    Invalid entries and the unknown category are left out, as are modules with
    nothing left to show.
    """
    data: dict[str, Any] = {}
    omitted = 0
    for module in sorted(changes_by_module):
        module_data: dict[str, Any] = {}
        for category in sorted(changes_by_module[module]):
            entries = changes_by_module[module][category]
            if category not in YAML_CATEGORIES:
                omitted += len(entries)
                continue
            valid_entries = [_entry_to_dict(entry) for entry in entries if is_valid(entry, CHANGE_FIELDS)]
            omitted += len(entries) - len(valid_entries)
            if valid_entries:
                module_data[category] = valid_entries
        if module_data:
            data[module] = module_data
    if omitted:
        logger.info("Omitted changes from YAML changelog", omitted=omitted)
    return data


def render_yaml(changes_by_module: ChangesByModule) -> str:
    """Render a grouped changelog as YAML."""
    return dump_yaml_to_string(changelog_to_data(changes_by_module))
