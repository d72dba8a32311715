"""Renders the grouped changelog as Markdown."""

from dataclasses import dataclass, field

import jinja2
import structlog

from changelog_collector.changes.models import CHANGE_FIELDS, ChangeCategory, ChangeEntry, ChangesByModule, is_valid
from changelog_collector.utils.constants import MALFORMED_SECTION_TITLE, MARKDOWN_NOTE_PREFIX
from changelog_collector.utils.github import parse_pull_request_number
from changelog_collector.utils.templates import TEMPLATES_DIRECTORY, construct_jinja2_template_from_file, render_template

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

CHANGELOG_TEMPLATE_PATH = TEMPLATES_DIRECTORY / "changelog.md.j2"


@dataclass
class MarkdownSection:
    """A titled bulleted list in the rendered changelog."""

    title: str
    bullets: list[str] = field(default_factory=list)


def format_change_bullet(module: str, entry: ChangeEntry) -> str:
    """Format a change as `**[module]** description [#N](url)` plus an optional note line."""
    number = parse_pull_request_number(entry.pull_request)
    reference = f"#{number}" if number is not None else entry.pull_request
    lines = [f"**[{module}]** {entry.description} [{reference}]({entry.pull_request})"]
    if entry.note:
        lines.append(f"  {MARKDOWN_NOTE_PREFIX} {entry.note}")
    return "\n".join(lines)


def malformed_pull_request_numbers(changes_by_module: ChangesByModule) -> list[int]:
    """Return the sorted numbers of pull requests with invalid entries, each listed once."""
    numbers: set[int] = set()
    for module, module_changes in changes_by_module.items():
        for entries in module_changes.values():
            for entry in entries:
                if is_valid(entry, CHANGE_FIELDS):
                    continue
                number = parse_pull_request_number(entry.pull_request)
                if number is None:
                    logger.warning("Cannot parse pull request number", module=module, pull_request=entry.pull_request)
                    continue
                numbers.add(number)
    return sorted(numbers)


def _section_bullets(changes_by_module: ChangesByModule, category: ChangeCategory) -> list[str]:
    rows: list[tuple[str, ChangeEntry]] = []
    for module, module_changes in changes_by_module.items():
        for entry in module_changes.get(category.value, []):
            if is_valid(entry, CHANGE_FIELDS):
                rows.append((module, entry))
    # Stable sort keeps the document order of changes coming from the same pull request.
    rows.sort(key=lambda row: (row[0], parse_pull_request_number(row[1].pull_request) or 0, row[1].pull_request))
    return [format_change_bullet(module, entry) for module, entry in rows]


def build_sections(changes_by_module: ChangesByModule) -> list[MarkdownSection]:
    """Build the non-empty sections of the changelog in display order."""
    sections = [
        MarkdownSection(MALFORMED_SECTION_TITLE, [f"#{number}" for number in malformed_pull_request_numbers(changes_by_module)]),
        MarkdownSection("Features", _section_bullets(changes_by_module, ChangeCategory.FEATURES)),
        MarkdownSection("Fixes", _section_bullets(changes_by_module, ChangeCategory.FIXES)),
    ]
    return [section for section in sections if section.bullets]


class MarkdownRenderer:
    """Renders a grouped changelog for a milestone as a Markdown document."""

    def __init__(self, template: jinja2.Template | None = None) -> None:
        """Initialize with a template, loading the bundled one by default."""
        self.template = template or construct_jinja2_template_from_file(CHANGELOG_TEMPLATE_PATH)

    def render(self, milestone: str, changes_by_module: ChangesByModule) -> str:
        """Render the changelog of a milestone."""
        sections = build_sections(changes_by_module)
        logger.debug("Rendering Markdown changelog", milestone=milestone, sections=[section.title for section in sections])
        return render_template(self.template, milestone=milestone, sections=sections)


def render_markdown(milestone: str, changes_by_module: ChangesByModule) -> str:
    """Render a grouped changelog as Markdown."""
    return MarkdownRenderer().render(milestone, changes_by_module)
