"""Unit tests for the YAML changelog renderer."""

from ruamel.yaml import YAML

from changelog_collector.changes.models import ChangeEntry, ChangesByModule
from changelog_collector.formatting.yaml import changelog_to_data, render_yaml

REPO = "https://github.com/deckhouse/deckhouse"

yaml = YAML(typ="safe")


def entry(number: int, description: str, note: str | None = None) -> ChangeEntry:
    """Build a change entry for pull request N."""
    return ChangeEntry(description=description, pull_request=f"{REPO}/pull/{number}", note=note)


CHANGES_BY_MODULE: ChangesByModule = {
    "upmeter": {"fixes": [entry(1, "correct uptime calc")], "unknown": [entry(3, "typo type")]},
    "api": {"features": [entry(2, "add endpoint", note="restart required")], "fixes": [entry(4, "")]},
    "UNKNOWN": {"unknown": [entry(5, "Some PR (#5)")]},
}


def test_changelog_to_data_keeps_only_valid_fixes_and_features() -> None:
    """Test that the unknown bucket, invalid entries and emptied modules are dropped."""
    assert changelog_to_data(CHANGES_BY_MODULE) == {
        "api": {
            "features": [{"description": "add endpoint", "note": "restart required", "pull_request": f"{REPO}/pull/2"}],
        },
        "upmeter": {
            "fixes": [{"description": "correct uptime calc", "pull_request": f"{REPO}/pull/1"}],
        },
    }


def test_render_yaml_round_trips_with_sorted_keys() -> None:
    """Test that the rendered YAML loads back to the filtered structure with sorted keys."""
    output = render_yaml(CHANGES_BY_MODULE)
    loaded = yaml.load(output)
    assert loaded == changelog_to_data(CHANGES_BY_MODULE)
    assert list(loaded) == ["api", "upmeter"]
    assert list(loaded["api"]["features"][0]) == ["description", "note", "pull_request"]
    assert "UNKNOWN" not in output
    assert "typo type" not in output


def test_render_yaml_orders_categories() -> None:
    """Test that features come before fixes within a module."""
    output = render_yaml({"a": {"fixes": [entry(1, "f")], "features": [entry(2, "g")]}})
    assert output.index("features:") < output.index("fixes:")


def test_render_yaml_uses_single_quotes_when_quoting() -> None:
    """Test that strings needing quotes are single-quoted."""
    output = render_yaml({"a": {"fixes": [entry(1, "fix: handle colons")]}})
    assert "'fix: handle colons'" in output


def test_render_yaml_empty() -> None:
    """Test rendering an empty changelog."""
    assert render_yaml({}).strip() == "{}"
